"""Constants used across pybaseline-check."""

from __future__ import annotations

from typing import Final

DEFAULT_TARGET_BROWSERS: Final[tuple[str, ...]] = (
    "chrome",
    "firefox",
    "safari",
    "edge",
)

MOBILE_COUNTERPARTS: Final[dict[str, str]] = {
    "chrome": "chrome_android",
    "firefox": "firefox_android",
    "safari": "safari_ios",
}

DEFAULT_BASELINE_VERSIONS: Final[dict[str, int]] = {
    "chrome": 90,
    "firefox": 88,
    "safari": 14,
    "edge": 90,
    "chrome_android": 90,
    "firefox_android": 88,
    "safari_ios": 14,
}

DEFAULT_BASELINE_THRESHOLD: Final[float] = 0.95
RISKY_SCORE_FLOOR: Final[float] = 50.0

STATUS_WEIGHTS: Final[dict[str, float]] = {
    "supported": 1.0,
    "partial": 0.5,
    "risky": 0.0,
    "unsupported": 0.0,
}

DIMENSIONS: Final[tuple[str, ...]] = (
    "overall",
    "browser_support",
    "feature_stability",
    "performance",
    "accessibility",
)

DEFAULT_WEIGHTS: Final[dict[str, float]] = {
    "browser_support": 0.35,
    "feature_stability": 0.25,
    "performance": 0.20,
    "accessibility": 0.20,
}

DEFAULT_BENCHMARKS: Final[dict[str, float]] = {
    "overall": 75.0,
    "browser_support": 80.0,
    "feature_stability": 70.0,
    "performance": 70.0,
    "accessibility": 75.0,
}

# Highest band first.
GRADE_BANDS: Final[tuple[tuple[float, str], ...]] = (
    (95.0, "A+"),
    (90.0, "A"),
    (80.0, "B+"),
    (70.0, "B-"),
    (60.0, "C"),
    (50.0, "D+"),
)
FAILING_GRADE: Final[str] = "F"

COMPLIANCE_STATUS_BANDS: Final[tuple[tuple[float, str], ...]] = (
    (95.0, "excellent"),
    (80.0, "good"),
    (60.0, "fair"),
    (40.0, "poor"),
)
FAILING_STATUS: Final[str] = "critical"

LOW_SCORE_THRESHOLD: Final[float] = 80.0
LOW_COVERAGE_THRESHOLD: Final[float] = 80.0

RESOLUTION_PREFIXES: Final[tuple[str, ...]] = ("api", "css", "html", "javascript")
UNKNOWN_FEATURE_REASON: Final[str] = "not found in compatibility dataset"

STATUS_ICON_MAP: Final[dict[str, str]] = {
    "supported": "✅",
    "partial": "◐",
    "risky": "⚠",
    "unsupported": "❌",
}

CLASSIFICATION_LABEL_MAP: Final[dict[str, str]] = {
    "baseline": "Baseline",
    "risky": "Risky",
    "unsupported": "Unsupported",
}

BCD_DATA_URL: Final[str] = "https://unpkg.com/@mdn/browser-compat-data/data.json"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0
DEBUG_ENV_VAR: Final[str] = "BASELINE_CHECK_DEBUG"
