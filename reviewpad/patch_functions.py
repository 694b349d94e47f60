"""Built-in functions that inspect the files changed by the pull request."""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache

from .builtins import BOOL, STRING, STRING_ARRAY, BuiltInFunction, Env, Value
from .pull_request_functions import INT
from .utils import file_ext


class PatternError(ValueError):
    """Raised when a file pattern is malformed."""

    def __init__(self, message: str = "syntax error in pattern") -> None:
        super().__init__(message)
        self.message = message


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the bracket expression that opens at ``start``."""
    n = len(pattern)
    j = start + 1
    negate = False
    if j < n and pattern[j] in "!^":
        negate = True
        j += 1
    items: list[tuple[str, str]] = []
    closed = False
    while j < n:
        ch = pattern[j]
        if ch == "]":
            closed = True
            j += 1
            break
        if ch == "\\":
            j += 1
            if j >= n:
                raise PatternError()
            ch = pattern[j]
        lo = ch
        j += 1
        hi = lo
        if j + 1 < n and pattern[j] == "-" and pattern[j + 1] != "]":
            j += 1
            hi = pattern[j]
            if hi == "\\":
                j += 1
                if j >= n:
                    raise PatternError()
                hi = pattern[j]
            j += 1
        items.append((lo, hi))
    if not closed or not items:
        raise PatternError()
    body = "".join(
        re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}"
        for lo, hi in items
        if lo <= hi
    )
    if negate:
        return f"[^/{body}]", j
    return (f"[{body}]" if body else "(?!)"), j


def _translate(pattern: str, pos: int, in_braces: bool) -> tuple[str, int]:
    """Translate a glob starting at ``pos`` into a regular expression."""
    out: list[str] = []
    n = len(pattern)
    i = pos
    while i < n:
        c = pattern[i]
        if in_braces and c in ",}":
            return "".join(out), i
        at_segment_start = i == 0 or pattern[i - 1] in "/{,"
        if c == "*":
            if pattern.startswith("**", i) and at_segment_start:
                end = i + 2
                if end < n and pattern[end] == "/":
                    out.append("(?:.*/)?")
                    i = end + 1
                    continue
                if end == n or (in_braces and pattern[end] in ",}"):
                    if out and out[-1] == "/":
                        out[-1] = "(?:/.*)?"
                    else:
                        out.append(".*")
                    i = end
                    continue
            while i < n and pattern[i] == "*":
                i += 1
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "/":
            out.append("/")
            i += 1
        elif c == "\\":
            if i + 1 >= n:
                raise PatternError()
            out.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "[":
            translated, i = _translate_class(pattern, i)
            out.append(translated)
        elif c == "{":
            alternatives: list[str] = []
            i += 1
            while True:
                alternative, i = _translate(pattern, i, True)
                alternatives.append(alternative)
                if pattern[i] == "}":
                    i += 1
                    break
                i += 1
            out.append("(?:" + "|".join(alternatives) + ")")
        else:
            out.append(re.escape(c))
            i += 1
    if in_braces:
        raise PatternError()
    return "".join(out), i


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    regex, _ = _translate(pattern, 0, False)
    return re.compile(regex, re.DOTALL)


def match_pattern(pattern: str, name: str) -> bool:
    """Match a slash-separated ``name`` against a glob with ``**`` support.

    ``*`` and ``?`` never cross a ``/``; a ``**`` path segment spans any
    number of directories; ``[...]`` and ``{a,b}`` work as usual.
    Raises PatternError when the pattern is malformed.
    """
    return _compile(pattern).fullmatch(name) is not None


def file_count(env: Env, args: Sequence[Value]) -> int:
    """Number of files changed by the pull request."""
    return len(env.patch)


def has_file_extensions(env: Env, args: Sequence[Value]) -> bool:
    """Whether every changed file has one of the given extensions."""
    (extensions,) = args
    allowed = {ext.lower() for ext in extensions}
    return all(file_ext(fp).lower() in allowed for fp in env.patch)


def has_file_name(env: Env, args: Sequence[Value]) -> bool:
    """Whether a file with exactly this path was changed."""
    (name,) = args
    return name in env.patch


def has_file_pattern(env: Env, args: Sequence[Value]) -> bool:
    """Whether any changed file matches the glob pattern."""
    (pattern,) = args
    return any(match_pattern(pattern, fp) for fp in env.patch)


PATCH_BUILT_INS: dict[str, BuiltInFunction] = {
    "fileCount": BuiltInFunction((), INT, file_count),
    "hasFileExtensions": BuiltInFunction((STRING_ARRAY,), BOOL, has_file_extensions),
    "hasFileName": BuiltInFunction((STRING,), BOOL, has_file_name),
    "hasFilePattern": BuiltInFunction((STRING,), BOOL, has_file_pattern),
}