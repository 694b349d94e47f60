"""Small helpers shared across the package."""

from __future__ import annotations

import random
from collections.abc import Iterable

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def element_of(items: Iterable[str], value: str) -> bool:
    """Return True when ``value`` is one of ``items``."""
    return any(item == value for item in items)


def file_ext(fp: str) -> str:
    """Return everything after the first dot of ``fp``, with a leading dot.

    A path without any dot has an empty extension.
    """
    _, dot, rest = fp.partition(".")
    return f".{rest}" if dot and rest else ""


def generate_random(size: int) -> int:
    """Return a random integer in ``[0, size)``.

    Raises ValueError when ``size`` is not positive.
    """
    if size <= 0:
        raise ValueError(f"invalid argument to generate_random: {size}")
    return random.SystemRandom().randrange(size)


def abs_int32(value: int) -> int:
    """Absolute value with 32-bit signed wrap-around.

    The most negative 32-bit integer has no positive counterpart and is
    returned unchanged.
    """
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise OverflowError(f"{value} does not fit in a 32-bit signed integer")
    if value >= 0:
        return value
    result = -value
    if result > _INT32_MAX:
        return result - 2**32
    return result