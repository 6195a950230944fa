"""Analysis configuration: defaults, validation and JSON loading."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
import json
import math
from pathlib import Path
from typing import Any

from .constants import (
    DEFAULT_BASELINE_THRESHOLD,
    DEFAULT_BASELINE_VERSIONS,
    DEFAULT_BENCHMARKS,
    DEFAULT_TARGET_BROWSERS,
    DEFAULT_WEIGHTS,
    DIMENSIONS,
    MOBILE_COUNTERPARTS,
)
from .exceptions import ConfigurationError
from .util.text import snake_case

_MERGED_MAPPING_FIELDS = ("baseline_versions", "benchmarks", "weights")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _normalize_browsers(value: Iterable[str] | str) -> tuple[str, ...]:
    if isinstance(value, (str, Mapping)) or not isinstance(value, Iterable):
        raise ConfigurationError("target_browsers", "expected a collection of browser ids")
    # Sets carry no order; sort them so runs are reproducible.
    items = sorted(value) if isinstance(value, (set, frozenset)) else list(value)
    output: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ConfigurationError("target_browsers", f"browser id {item!r} is not a string")
        browser = item.strip().lower()
        if browser and browser not in output:
            output.append(browser)
    return tuple(output)


@dataclass(frozen=True)
class AnalysisConfig:
    """Options for a single analysis run.

    Absent values take the documented defaults; present but invalid values
    raise ``ConfigurationError`` instead of being replaced.
    """

    target_browsers: tuple[str, ...] = DEFAULT_TARGET_BROWSERS
    baseline_threshold: float = DEFAULT_BASELINE_THRESHOLD
    include_mobile: bool = False
    include_beta: bool = False
    baseline_versions: dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_BASELINE_VERSIONS)
    )
    benchmarks: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_BENCHMARKS))
    weights: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))

    def __post_init__(self) -> None:
        browsers = _normalize_browsers(self.target_browsers)
        if not browsers:
            raise ConfigurationError("target_browsers", "at least one browser is required")
        object.__setattr__(self, "target_browsers", browsers)

        threshold = self.baseline_threshold
        if not _is_number(threshold) or math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
            raise ConfigurationError(
                "baseline_threshold", f"expected a number within [0, 1], got {threshold!r}"
            )

        for flag in ("include_mobile", "include_beta"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigurationError(flag, "expected a boolean")

        self._validate_versions()
        self._validate_benchmarks()
        self._validate_weights()

    def _validate_versions(self) -> None:
        for browser, version in self.baseline_versions.items():
            if isinstance(version, bool) or not isinstance(version, int) or version < 0:
                raise ConfigurationError(
                    "baseline_versions",
                    f"version for {browser!r} must be a non-negative integer, got {version!r}",
                )

    def _validate_benchmarks(self) -> None:
        missing = [name for name in DIMENSIONS if name not in self.benchmarks]
        if missing:
            raise ConfigurationError("benchmarks", f"missing dimensions {', '.join(missing)}")
        for name, value in self.benchmarks.items():
            if name not in DIMENSIONS:
                raise ConfigurationError("benchmarks", f"unknown dimension {name!r}")
            if not _is_number(value) or not 0 <= value <= 100:
                raise ConfigurationError(
                    "benchmarks", f"{name} must be a number within [0, 100], got {value!r}"
                )

    def _validate_weights(self) -> None:
        if set(self.weights) != set(DEFAULT_WEIGHTS):
            raise ConfigurationError(
                "weights", f"expected exactly the keys {', '.join(sorted(DEFAULT_WEIGHTS))}"
            )
        for name, value in self.weights.items():
            if not _is_number(value) or value < 0:
                raise ConfigurationError(
                    "weights", f"{name} must be a non-negative number, got {value!r}"
                )
        total = sum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ConfigurationError("weights", f"weights must sum to 1.0, got {total}")

    @property
    def browsers(self) -> tuple[str, ...]:
        """Effective browser list, with mobile counterparts appended when requested."""
        if not self.include_mobile:
            return self.target_browsers
        output = list(self.target_browsers)
        for browser in self.target_browsers:
            mobile = MOBILE_COUNTERPARTS.get(browser)
            if mobile and mobile not in output:
                output.append(mobile)
        return tuple(output)


_FIELD_NAMES = {item.name for item in fields(AnalysisConfig)}


def config_from_mapping(data: Mapping[str, Any]) -> AnalysisConfig:
    """Build a config from camelCase or snake_case keys, merged over the defaults."""
    if not isinstance(data, Mapping):
        raise ConfigurationError("config", "expected a JSON object")

    kwargs: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = snake_case(str(raw_key))
        if key not in _FIELD_NAMES:
            raise ConfigurationError(key, "unknown configuration option")
        if value is None:
            continue
        if key in _MERGED_MAPPING_FIELDS:
            if not isinstance(value, Mapping):
                raise ConfigurationError(key, "expected a JSON object")
            if key == "baseline_versions":
                # Browser ids are already snake_case (chrome_android); keep them verbatim.
                value = {**DEFAULT_BASELINE_VERSIONS, **value}
            else:
                defaults = DEFAULT_BENCHMARKS if key == "benchmarks" else DEFAULT_WEIGHTS
                value = {**defaults, **{snake_case(str(k)): v for k, v in value.items()}}
        kwargs[key] = value
    return AnalysisConfig(**kwargs)


def load_config(path: str | Path) -> AnalysisConfig:
    """Read a JSON config file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError("config", f"cannot read {config_path} ({exc.strerror})") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError("config", f"{config_path} is not valid JSON") from exc
    return config_from_mapping(raw)
