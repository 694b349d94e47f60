"""Formatting of user-facing error reports."""

from __future__ import annotations

from typing import Any

from .fmtio import _go_format


def error(fmt: str, *args: Any) -> str:
    """Return a report text describing an error."""
    return f"Error occurred! Details:\n{_go_format(fmt, args)}"