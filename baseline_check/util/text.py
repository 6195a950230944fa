"""Text and number utility helpers."""

from __future__ import annotations

import math
import re

_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_INT_RE = re.compile(r"(\d+)")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


def hyphenate(value: str) -> str:
    """Replace whitespace runs with hyphens."""
    return _WHITESPACE_RE.sub("-", value)


def underscore(value: str) -> str:
    """Replace whitespace runs with underscores."""
    return _WHITESPACE_RE.sub("_", value)


def parse_leading_int(value: object) -> int | None:
    """Return the first integer in a version value ("10.1" -> 10, "≤18" -> 18)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    match = _LEADING_INT_RE.search(value)
    return int(match.group(1)) if match else None


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, like JavaScript's Math.round."""
    return math.floor(value + 0.5)


def snake_case(value: str) -> str:
    """Convert camelCase keys to snake_case."""
    return _CAMEL_BOUNDARY_RE.sub("_", value).lower()


def camel_case(value: str) -> str:
    """Convert snake_case keys to camelCase."""
    head, *rest = value.split("_")
    return head + "".join(part.title() for part in rest)


