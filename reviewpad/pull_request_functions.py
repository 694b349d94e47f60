"""Built-in functions that read properties of the pull request under review."""

from __future__ import annotations

import calendar
import re
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

from .builtins import BOOL, STRING, STRING_ARRAY, BuiltInError, BuiltInFunction, Env, Value

INT = "int"

# Seconds since the epoch of 0001-01-01 00:00:00 UTC, used when no creation time is known.
_ZERO_TIME_UNIX = -62135596800

_TIMESTAMP = re.compile(
    r"\s*(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2}):(\d{2})(?:\.\d+)?"
    r"\s*(Z|[+-]\d{2}:?\d{2})?(?:\s+[A-Z]{2,5})?\s*"
)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _logins(users: Any) -> list[str]:
    return [_mapping(user).get("login") or "" for user in users or []]


def _to_unix(value: Any) -> int:
    """Whole seconds since the Unix epoch for a datetime or a timestamp text."""
    if value is None:
        return _ZERO_TIME_UNIX
    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return calendar.timegm(moment.astimezone(timezone.utc).replace(microsecond=0).utctimetuple())
    match = _TIMESTAMP.fullmatch(str(value))
    if match is None:
        raise ValueError(f"cannot parse creation time {value!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    offset_text = match.group(7)
    offset = timedelta()
    if offset_text and offset_text != "Z":
        digits = offset_text[1:].replace(":", "")
        offset = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
        if offset_text[0] == "-":
            offset = -offset
    moment = datetime(year, month, day, hour, minute, second, tzinfo=timezone(offset))
    return calendar.timegm(moment.astimezone(timezone.utc).utctimetuple())


def assignees(env: Env, args: Sequence[Value]) -> list[str]:
    """Logins of the users assigned to the pull request."""
    return _logins(env.pull_request.get("assignees"))


def author(env: Env, args: Sequence[Value]) -> str:
    """Login of the pull request's author."""
    return _mapping(env.pull_request.get("user")).get("login") or ""


def base(env: Env, args: Sequence[Value]) -> str:
    """Name of the branch the pull request targets."""
    return _mapping(env.pull_request.get("base")).get("ref") or ""


def comment_count(env: Env, args: Sequence[Value]) -> int:
    """Number of comments on the pull request."""
    count = env.pull_request.get("comments")
    if count is None:
        raise BuiltInError("commentCount: pull request has no comment count")
    return count


def commit_count(env: Env, args: Sequence[Value]) -> int:
    """Number of commits in the pull request."""
    count = env.pull_request.get("commits")
    if count is None:
        raise BuiltInError("commitCount: pull request has no commit count")
    return count


def created_at(env: Env, args: Sequence[Value]) -> int:
    """Creation time of the pull request in whole seconds since the Unix epoch."""
    return _to_unix(env.pull_request.get("created_at"))


def description(env: Env, args: Sequence[Value]) -> str:
    """Body text of the pull request."""
    return env.pull_request.get("body") or ""


def head(env: Env, args: Sequence[Value]) -> str:
    """Name of the branch the pull request comes from."""
    return _mapping(env.pull_request.get("head")).get("ref") or ""


def is_draft(env: Env, args: Sequence[Value]) -> bool:
    """Whether the pull request is a draft."""
    return bool(env.pull_request.get("draft"))


def labels(env: Env, args: Sequence[Value]) -> list[str]:
    """Names of the labels on the pull request."""
    return [_mapping(label).get("name") or "" for label in env.pull_request.get("labels") or []]


def milestone(env: Env, args: Sequence[Value]) -> str:
    """Title of the pull request's milestone, or an empty string."""
    return _mapping(env.pull_request.get("milestone")).get("title") or ""


def reviewers(env: Env, args: Sequence[Value]) -> list[str]:
    """Requested reviewer logins followed by requested team slugs."""
    users = _logins(env.pull_request.get("requested_reviewers"))
    teams = [_mapping(team).get("slug") or "" for team in env.pull_request.get("requested_teams") or []]
    return users + teams


def size(env: Env, args: Sequence[Value]) -> int:
    """Number of added plus deleted lines."""
    return (env.pull_request.get("additions") or 0) + (env.pull_request.get("deletions") or 0)


def title(env: Env, args: Sequence[Value]) -> str:
    """Title of the pull request."""
    return env.pull_request.get("title") or ""


PULL_REQUEST_BUILT_INS: dict[str, BuiltInFunction] = {
    "assignees": BuiltInFunction((), STRING_ARRAY, assignees),
    "author": BuiltInFunction((), STRING, author),
    "base": BuiltInFunction((), STRING, base),
    "commentCount": BuiltInFunction((), INT, comment_count),
    "commitCount": BuiltInFunction((), INT, commit_count),
    "createdAt": BuiltInFunction((), INT, created_at),
    "description": BuiltInFunction((), STRING, description),
    "head": BuiltInFunction((), STRING, head),
    "isDraft": BuiltInFunction((), BOOL, is_draft),
    "labels": BuiltInFunction((), STRING_ARRAY, labels),
    "milestone": BuiltInFunction((), STRING, milestone),
    "reviewers": BuiltInFunction((), STRING_ARRAY, reviewers),
    "size": BuiltInFunction((), INT, size),
    "title": BuiltInFunction((), STRING, title),
}