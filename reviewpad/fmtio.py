"""Context-prefixed formatting, errors and log lines."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

_VERB = re.compile(r"%([+#]?)([vsdqtfx%])")


class ContextError(Exception):
    """An error whose message is prefixed with the context it came from."""

    def __init__(self, context: str, message: str) -> None:
        super().__init__(f"[{context}] {message}")
        self.context = context
        self.message = message


def _quote(value: str, ascii_only: bool) -> str:
    return json.dumps(value, ensure_ascii=ascii_only)


def _render(value: Any, verb: str, plus: bool) -> str:
    if verb == "q":
        if isinstance(value, str):
            return _quote(value, plus)
        if isinstance(value, (list, tuple)):
            return "[" + " ".join(_render(v, verb, plus) for v in value) + "]"
        if isinstance(value, Mapping):
            items = sorted(value.items(), key=lambda kv: str(kv[0]))
            return (
                "map["
                + " ".join(f"{_render(k, verb, plus)}:{_render(v, verb, plus)}" for k, v in items)
                + "]"
            )
        return _quote(_render(value, "v", plus), plus)
    if verb == "d" and isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if verb == "x":
        if isinstance(value, int) and not isinstance(value, bool):
            return format(value, "x")
        if isinstance(value, str):
            return value.encode().hex()
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).hex()
    if verb == "f" and isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:f}"
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_render(v, "v", plus) for v in value) + "]"
    if isinstance(value, Mapping):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "map[" + " ".join(f"{_render(k, 'v', plus)}:{_render(v, 'v', plus)}" for k, v in items) + "]"
    return str(value)


def _go_format(fmt: str, args: tuple[Any, ...]) -> str:
    """Expand printf-style verbs such as %v, %s, %d and %q."""
    remaining = list(args)
    position = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal position
        flag, verb = match.groups()
        if verb == "%":
            return "%"
        if position >= len(remaining):
            return f"%!{verb}(MISSING)"
        value = remaining[position]
        position += 1
        return _render(value, verb, flag == "+")

    text = _VERB.sub(replace, fmt)
    extra = remaining[position:]
    if extra:
        text += "%!(EXTRA " + ", ".join(
            f"{type(v).__name__}={_render(v, 'v', False)}" for v in extra
        ) + ")"
    return text


def errorf(context: str, fmt: str, *args: Any) -> ContextError:
    """Build a ContextError from a format and its arguments."""
    return ContextError(context, _go_format(fmt, args))


def log_println(context: str, fmt: str, *args: Any) -> None:
    """Log a context-prefixed formatted line."""
    logger.info("%s", sprintf(context, fmt, *args))


def sprintf(context: str, fmt: str, *args: Any) -> str:
    """Format a message and prefix it with ``[context]``."""
    return f"[{context}] {_go_format(fmt, args)}"


def sprint(context: str, val: str) -> str:
    """Prefix ``val`` with ``[context]``."""
    return f"[{context}] {val}"