"""GitHub pull request helpers and built-in functions for automated code review policies."""

__version__ = "2.0.0"