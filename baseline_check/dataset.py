"""Load feature lists and compatibility datasets from JSON."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import json
from pathlib import Path
from typing import Any

from .exceptions import DatasetError
from .model import DetectedFeature, merge_features
from .util.debug import debug_log

_BCD_SKIP_KEYS = frozenset({"__meta", "browsers"})


def _read_json(path: str | Path) -> Any:
    source = Path(path)
    try:
        return json.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DatasetError(str(source), cause=exc.strerror or exc.__class__.__name__) from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(str(source), cause="invalid JSON") from exc


def _has_compat(node: Mapping[str, Any]) -> bool:
    if "__compat" in node:
        return True
    return any(isinstance(child, Mapping) and _has_compat(child) for child in node.values())


def _walk_bcd(node: Mapping[str, Any], path: tuple[str, ...]) -> Iterator[tuple[str, Any]]:
    compat = node.get("__compat")
    if path and isinstance(compat, Mapping):
        yield ".".join(path), compat.get("support", {})
    for key, child in node.items():
        if key.startswith("__") or not isinstance(child, Mapping):
            continue
        if not path and key in _BCD_SKIP_KEYS:
            continue
        yield from _walk_bcd(child, (*path, key))


def flatten_bcd(tree: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten a browser-compat-data tree into dotted keys (``api.fetch``) -> support map."""
    return dict(_walk_bcd(tree, ()))


def normalize_dataset(payload: Any, source: str = "dataset") -> dict[str, Any]:
    """Accept either a flat dotted-path mapping or a raw BCD tree."""
    if not isinstance(payload, Mapping):
        raise DatasetError(source, cause="expected a JSON object")
    if "__meta" in payload or any(
        isinstance(value, Mapping) and _has_compat(value) for value in payload.values()
    ):
        flattened = flatten_bcd(payload)
        debug_log(f"flattened BCD tree from {source} into {len(flattened)} entries")
        return flattened
    return dict(payload)


def load_dataset(path: str | Path) -> dict[str, Any]:
    return normalize_dataset(_read_json(path), str(path))


def features_from_payload(payload: Any, source: str = "features") -> list[DetectedFeature]:
    """Build detected features from ``[...]`` or ``{"features": [...]}``; duplicates are merged."""
    if isinstance(payload, Mapping):
        payload = payload.get("features")
    if not isinstance(payload, list):
        raise DatasetError(source, cause="expected a list of features")

    features: list[DetectedFeature] = []
    for item in payload:
        if isinstance(item, str):
            features.append(DetectedFeature(name=item))
            continue
        if not isinstance(item, Mapping):
            raise DatasetError(source, cause=f"unexpected feature entry {item!r}")
        files = item.get("files") or ()
        if isinstance(files, str):
            files = (files,)
        elif not isinstance(files, (list, tuple)):
            raise DatasetError(source, cause=f"files must be a list of paths, got {files!r}")
        features.append(
            DetectedFeature(
                name=item.get("name", ""),
                category=item.get("category") or "unknown",
                files=tuple(str(path) for path in files),
                usage=item.get("usage", 1),
            )
        )
    return merge_features(features)


def load_features(path: str | Path) -> list[DetectedFeature]:
    return features_from_payload(_read_json(path), str(path))
