"""Polyfill and alternative hints for features that are not baseline."""

from __future__ import annotations

from typing import Final

POLYFILL_MAP: Final[dict[str, tuple[str, ...]]] = {
    "fetch": ("whatwg-fetch", "unfetch"),
    "promise": ("es6-promise", "promise-polyfill"),
    "array.from": ("array.from",),
    "object.assign": ("object.assign",),
    "string.includes": ("string.prototype.includes",),
    "css.grid": ("css-grid-polyfill",),
    "css.flexbox": ("flexibility",),
    "css.custom-properties": ("css-vars-ponyfill",),
    "intersection-observer": ("intersection-observer",),
    "resize-observer": ("resize-observer-polyfill",),
}

ALTERNATIVE_MAP: Final[dict[str, tuple[str, ...]]] = {
    "fetch": ("XMLHttpRequest", "axios", "jQuery.ajax"),
    "promise": ("callback", "async/await"),
    "css.grid": ("flexbox", "float", "table"),
    "css.flexbox": ("float", "inline-block", "table"),
    "css.custom-properties": ("CSS variables with fallbacks", "Sass variables"),
    "intersection-observer": ("scroll events", "getBoundingClientRect"),
    "resize-observer": ("window resize events", "getBoundingClientRect"),
}


def _lookup(feature_name: str, table: dict[str, tuple[str, ...]]) -> tuple[str, ...]:
    name = feature_name.lower()
    if not name:
        return ()
    output: list[str] = []
    for pattern, entries in table.items():
        if pattern in name or name in pattern:
            output.extend(entry for entry in entries if entry not in output)
    return tuple(output)


def find_polyfills(feature_name: str) -> tuple[str, ...]:
    """Return known polyfill packages for a feature, de-duplicated in table order."""
    return _lookup(feature_name, POLYFILL_MAP)


def find_alternatives(feature_name: str) -> tuple[str, ...]:
    """Return fallback techniques for a feature, de-duplicated in table order."""
    return _lookup(feature_name, ALTERNATIVE_MAP)
