"""Per-browser support status, support scores and feature classification."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .config import AnalysisConfig
from .constants import (
    LOW_COVERAGE_THRESHOLD,
    RISKY_SCORE_FLOOR,
    STATUS_WEIGHTS,
    UNKNOWN_FEATURE_REASON,
)
from .model import (
    BrowserStatus,
    BrowserSummary,
    BrowserSupportResult,
    Classification,
    DetectedFeature,
    FeatureClassification,
    Recommendation,
    SupportMatrix,
    SupportSummary,
)
from .polyfills import find_alternatives, find_polyfills
from .resolve import Dataset, resolve_feature
from .util.debug import debug_log
from .util.text import parse_leading_int


def _support_block(record: Any) -> Mapping[str, Any] | None:
    """Unwrap raw BCD ``{"__compat": {"support": ...}}`` nodes down to the per-browser map."""
    if not isinstance(record, Mapping):
        return None
    compat = record.get("__compat")
    if isinstance(compat, Mapping):
        record = compat
    support = record.get("support")
    if isinstance(support, Mapping):
        return support
    return record


def _first_statement(entry: Any) -> Any:
    if isinstance(entry, list):
        return entry[0] if entry else None
    return entry


def browser_status(record: Any, browser: str, config: AnalysisConfig) -> BrowserStatus:
    """Classify one browser's support record. Malformed shapes are "unsupported"."""
    block = _support_block(record)
    if block is None:
        return "unsupported"

    entry = _first_statement(block.get(browser))
    if not entry:
        return "unsupported"
    if entry is True:
        return "supported"

    if isinstance(entry, Mapping):
        statement: Mapping[str, Any] = entry
    elif isinstance(entry, (str, int, float)):
        statement = {"version_added": entry}
    else:
        return "unsupported"

    version_added = statement.get("version_added")
    if version_added is True:
        return "supported"
    if version_added is False:
        return "unsupported"

    version = parse_leading_int(version_added)
    baseline_version = config.baseline_versions.get(browser)
    if version is not None and baseline_version is not None:
        return "supported" if version <= baseline_version else "risky"

    if statement.get("flags") or statement.get("alternative_name"):
        return "partial"

    if (
        config.include_beta
        and isinstance(version_added, str)
        and version_added.strip().lower() == "preview"
    ):
        return "partial"

    return "unsupported"


def support_score(statuses: Iterable[BrowserStatus]) -> float:
    """Average status weight across browsers, scaled to [0, 100]. Empty input scores 0."""
    weights = [STATUS_WEIGHTS.get(status, 0.0) for status in statuses]
    if not weights:
        return 0.0
    return sum(weights) / len(weights) * 100


def classify_score(score: float, baseline_threshold: float) -> Classification:
    if score >= baseline_threshold * 100:
        return Classification.BASELINE
    if score >= RISKY_SCORE_FLOOR:
        return Classification.RISKY
    return Classification.UNSUPPORTED


def _feature_recommendations(
    name: str,
    classification: Classification,
    browser_support: Mapping[str, BrowserStatus],
) -> list[Recommendation]:
    recommendations: list[Recommendation] = []
    if classification is Classification.RISKY:
        recommendations.append(
            Recommendation(
                type="add_polyfill",
                priority="high",
                message=f"Consider adding a polyfill for {name}",
                suggestion="Use a polyfill to ensure compatibility across all browsers",
            )
        )
    elif classification is Classification.UNSUPPORTED:
        recommendations.append(
            Recommendation(
                type="replace_feature",
                priority="critical",
                message=f"Replace {name} with a supported alternative",
                suggestion="This feature lacks sufficient support in the target browsers",
            )
        )

    for browser, status in browser_support.items():
        if status == "partial":
            recommendations.append(
                Recommendation(
                    type="browser_specific",
                    priority="medium",
                    message=f"{name} has partial support in {browser}",
                    suggestion="Check for browser-specific implementation details",
                    browser=browser,
                )
            )
    return recommendations


def analyze_feature(
    feature: DetectedFeature,
    dataset: Dataset,
    config: AnalysisConfig,
) -> FeatureClassification:
    """Resolve a feature in the dataset and classify its support."""
    resolution = resolve_feature(feature.name, dataset)
    if resolution is None:
        return FeatureClassification(
            name=feature.name,
            category=feature.category,
            files=feature.files,
            usage=feature.usage,
            browser_support={},
            support_score=0.0,
            classification=Classification.UNSUPPORTED,
            known=False,
            reason=UNKNOWN_FEATURE_REASON,
            recommendations=(
                Recommendation(
                    type="unknown_feature",
                    priority="high",
                    message="Feature not found in compatibility dataset",
                    suggestion="Verify feature name or check for typos",
                ),
            ),
        )

    browser_support: dict[str, BrowserStatus] = {
        browser: browser_status(resolution.record, browser, config) for browser in config.browsers
    }
    score = support_score(browser_support.values())
    classification = classify_score(score, config.baseline_threshold)
    debug_log(
        f"{feature.name}: key={resolution.key} via {resolution.strategy}, "
        f"score={score:.1f}, classification={classification.value}"
    )

    return FeatureClassification(
        name=feature.name,
        category=feature.category,
        files=feature.files,
        usage=feature.usage,
        browser_support=browser_support,
        support_score=score,
        classification=classification,
        known=True,
        matched_key=resolution.key,
        recommendations=tuple(
            _feature_recommendations(feature.name, classification, browser_support)
        ),
        polyfills=find_polyfills(feature.name),
        alternatives=find_alternatives(feature.name),
    )


def summarize(
    features: Sequence[FeatureClassification],
    browsers: Sequence[str],
) -> SupportSummary:
    """Count classifications and per-browser statuses; risky statuses count as unsupported."""
    counts = {browser: {"supported": 0, "partial": 0, "unsupported": 0} for browser in browsers}
    for feature in features:
        for browser, status in feature.browser_support.items():
            bucket = counts.setdefault(browser, {"supported": 0, "partial": 0, "unsupported": 0})
            if status in ("supported", "partial"):
                bucket[status] += 1
            else:
                bucket["unsupported"] += 1

    browser_support: dict[str, BrowserSummary] = {}
    for browser, bucket in counts.items():
        total = bucket["supported"] + bucket["partial"] + bucket["unsupported"]
        browser_support[browser] = BrowserSummary(
            supported=bucket["supported"],
            partial=bucket["partial"],
            unsupported=bucket["unsupported"],
            coverage=bucket["supported"] / total * 100 if total > 0 else 0.0,
        )

    return SupportSummary(
        total_features=len(features),
        baseline_features=sum(1 for feature in features if feature.baseline),
        risky_features=sum(1 for feature in features if feature.risky),
        unsupported_features=sum(1 for feature in features if feature.unsupported),
        browser_support=browser_support,
    )


def build_support_matrix(
    features: Sequence[FeatureClassification],
    browsers: Sequence[str],
) -> SupportMatrix:
    support: dict[str, dict[str, BrowserStatus]] = {}
    for browser in browsers:
        support[browser] = {
            feature.name: feature.browser_support.get(browser, "unsupported")
            for feature in features
        }
    return SupportMatrix(
        browsers=tuple(browsers),
        features=tuple(feature.name for feature in features),
        support=support,
    )


def summary_recommendations(
    features: Sequence[FeatureClassification],
    summary: SupportSummary,
) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    if summary.baseline_features > 0:
        recommendations.append(
            Recommendation(
                type="baseline_features",
                priority="info",
                title="Baseline Features Detected",
                message=(
                    f"Found {summary.baseline_features} baseline features that are well-supported"
                ),
                suggestion="These features are safe to use in production",
                features=tuple(feature.name for feature in features if feature.baseline),
            )
        )

    if summary.risky_features > 0:
        recommendations.append(
            Recommendation(
                type="risky_features",
                priority="high",
                title="Risky Features Detected",
                message=(
                    f"Found {summary.risky_features} risky features with limited browser support"
                ),
                suggestion="Consider adding polyfills or fallbacks for these features",
                features=tuple(feature.name for feature in features if feature.risky),
            )
        )

    if summary.unsupported_features > 0:
        recommendations.append(
            Recommendation(
                type="unsupported_features",
                priority="critical",
                title="Unsupported Features Detected",
                message=(
                    f"Found {summary.unsupported_features} features without sufficient "
                    "browser support"
                ),
                suggestion="Remove or replace these features with supported alternatives",
                features=tuple(feature.name for feature in features if feature.unsupported),
            )
        )

    unknown = tuple(feature.name for feature in features if not feature.known)
    if unknown:
        recommendations.append(
            Recommendation(
                type="unknown_features",
                priority="high",
                title="Unknown Features Detected",
                message=f"{len(unknown)} features were not found in the compatibility dataset",
                suggestion="Verify feature names or update the compatibility dataset",
                features=unknown,
            )
        )

    for browser, data in summary.browser_support.items():
        if data.coverage < LOW_COVERAGE_THRESHOLD:
            recommendations.append(
                Recommendation(
                    type="browser_coverage",
                    priority="medium",
                    title=f"Low Coverage in {browser}",
                    message=(
                        f"Only {data.coverage:.1f}% of features are supported in {browser}"
                    ),
                    suggestion="Consider adding polyfills or fallbacks for better browser support",
                    browser=browser,
                )
            )

    return recommendations


def analyze_browser_support(
    features: Sequence[DetectedFeature],
    dataset: Dataset,
    config: AnalysisConfig,
) -> BrowserSupportResult:
    """Classify every feature, then summarize per classification and per browser."""
    browsers = config.browsers
    classified = [analyze_feature(feature, dataset, config) for feature in features]
    summary = summarize(classified, browsers)
    return BrowserSupportResult(
        features=classified,
        summary=summary,
        support_matrix=build_support_matrix(classified, browsers),
        recommendations=summary_recommendations(classified, summary),
    )
