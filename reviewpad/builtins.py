"""Core built-in functions of the rule language and their evaluation environment."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .fmtio import _go_format
from .github import GitHubClient

Value = Any
Code = Callable[["Env", Sequence[Value]], Value]


class BuiltInError(LookupError):
    """Raised when a built-in cannot find what it was asked for."""


@dataclass
class Env:
    """What built-in functions see while they run.

    ``pull_request`` is the decoded pull request, ``patch`` maps changed
    file names to their file data and ``register_map`` holds named values
    such as groups and rules.
    """

    pull_request: dict[str, Any] = field(default_factory=dict)
    client: GitHubClient | None = None
    patch: dict[str, Any] = field(default_factory=dict)
    register_map: dict[str, Value] = field(default_factory=dict)


@dataclass(frozen=True)
class BuiltInFunction:
    """A built-in's signature together with the code that runs it."""

    params: tuple[str, ...]
    returns: str
    code: Code

    def __call__(self, env: Env, args: Sequence[Value]) -> Value:
        return self.code(env, args)


def append_string(env: Env, args: Sequence[Value]) -> list[str]:
    """Concatenate two lists of strings into a new list."""
    first, second = args
    return [*first, *second]


def contains(env: Env, args: Sequence[Value]) -> bool:
    """Whether the first string contains the second."""
    text, sub = args
    return sub in text


def starts_with(env: Env, args: Sequence[Value]) -> bool:
    """Whether the first string starts with the second."""
    text, prefix = args
    return text.startswith(prefix)


def is_element_of(env: Env, args: Sequence[Value]) -> bool:
    """Whether the string is one of the members of the list."""
    member, members = args
    return any(member == candidate for candidate in members)


def filter_values(env: Env, args: Sequence[Value]) -> list[str]:
    """Keep the elements for which the predicate holds, in order."""
    elems, predicate = args
    return [elem for elem in elems if predicate(elem)]


def group(env: Env, args: Sequence[Value]) -> Value:
    """Look up a named group in the environment's register map."""
    (name,) = args
    try:
        return env.register_map[name]
    except KeyError:
        raise BuiltInError(
            _go_format("getGroup: no group with name %v in state %+q", (name, env.register_map))
        ) from None


STRING = "string"
BOOL = "bool"
STRING_ARRAY = "[]string"

BUILT_INS: dict[str, BuiltInFunction] = {
    "append": BuiltInFunction((STRING_ARRAY, STRING_ARRAY), STRING_ARRAY, append_string),
    "contains": BuiltInFunction((STRING, STRING), BOOL, contains),
    "startsWith": BuiltInFunction((STRING, STRING), BOOL, starts_with),
    "isElementOf": BuiltInFunction((STRING, STRING_ARRAY), BOOL, is_element_of),
    "filter": BuiltInFunction((STRING_ARRAY, "func(string) bool"), STRING_ARRAY, filter_values),
    "group": BuiltInFunction((STRING,), STRING_ARRAY, group),
}