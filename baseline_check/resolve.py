"""Look up a detected feature's support record in a compatibility dataset.

Resolution is an ordered list of strategies; the first one that returns a
match wins.

1. ``exact``: the feature name is a dataset key.
2. ``normalized``: lower-cased, hyphenated and underscored forms of the name.
3. ``prefixed``: ``api.<name>``, ``css.<name>``, ``html.<name>``, ``javascript.<name>``.
4. ``substring``: the first key (in dataset order) that contains the name, or
   that the name contains, compared case-insensitively.

The substring fallback favours coverage over precision. When several keys
share a substring, the dataset's iteration order decides which one is bound.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from .constants import RESOLUTION_PREFIXES
from .util.debug import debug_log
from .util.text import hyphenate, underscore

Dataset = Mapping[str, Any]


@dataclass(frozen=True)
class Resolution:
    key: str
    record: Any
    strategy: str


Strategy = Callable[[str, Dataset], Resolution | None]


def _first_present(candidates: list[str], dataset: Dataset, strategy: str) -> Resolution | None:
    for candidate in candidates:
        # Falsy records (e.g. an empty mapping) are treated as absent.
        if candidate in dataset and dataset[candidate]:
            return Resolution(key=candidate, record=dataset[candidate], strategy=strategy)
    return None


def resolve_exact(name: str, dataset: Dataset) -> Resolution | None:
    return _first_present([name], dataset, "exact")


def resolve_normalized(name: str, dataset: Dataset) -> Resolution | None:
    candidates = [name.lower(), hyphenate(name), underscore(name)]
    return _first_present(candidates, dataset, "normalized")


def resolve_prefixed(name: str, dataset: Dataset) -> Resolution | None:
    candidates = [f"{prefix}.{name}" for prefix in RESOLUTION_PREFIXES]
    return _first_present(candidates, dataset, "prefixed")


def resolve_substring(name: str, dataset: Dataset) -> Resolution | None:
    needle = name.lower()
    if not needle:
        return None
    for key, record in dataset.items():
        haystack = str(key).lower()
        if not haystack or not record:
            continue
        if needle in haystack or haystack in needle:
            debug_log(f"substring match bound {name!r} to dataset key {key!r}")
            return Resolution(key=key, record=record, strategy="substring")
    return None


RESOLUTION_STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("exact", resolve_exact),
    ("normalized", resolve_normalized),
    ("prefixed", resolve_prefixed),
    ("substring", resolve_substring),
)


def resolve_feature(
    name: str,
    dataset: Dataset,
    strategies: tuple[tuple[str, Strategy], ...] = RESOLUTION_STRATEGIES,
) -> Resolution | None:
    """Return the first strategy match for ``name`` or None when nothing matches.

    The returned ``Resolution`` carries the label the strategy is registered under.
    """
    for label, strategy in strategies:
        resolution = strategy(name, dataset)
        if resolution is not None:
            return replace(resolution, strategy=label)
    debug_log(f"feature {name!r} not found in compatibility dataset")
    return None
