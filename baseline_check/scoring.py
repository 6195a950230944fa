"""Weighted compliance scoring across browser support, stability, performance and accessibility."""

from __future__ import annotations

from collections.abc import Sequence
import math

from .config import AnalysisConfig
from .constants import LOW_SCORE_THRESHOLD
from .exceptions import ScoreRangeError
from .model import ComplianceScores, FeatureClassification, ImprovementPotential, Recommendation
from .util.debug import debug_log
from .util.text import round_half_up


def _check_sub_score(dimension: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ScoreRangeError(dimension, value)
    if math.isnan(value) or not 0 <= value <= 100:
        raise ScoreRangeError(dimension, value)
    return float(value)


def browser_support_score(features: Sequence[FeatureClassification]) -> float:
    """Mean support score across classified features (0 when there are none)."""
    if not features:
        return 0.0
    return sum(feature.support_score for feature in features) / len(features)


def feature_stability_score(features: Sequence[FeatureClassification]) -> float:
    """Share of baseline features as a percentage (0 when there are none)."""
    if not features:
        return 0.0
    return sum(1 for feature in features if feature.baseline) / len(features) * 100


def performance_score_from_issues(high: int = 0, medium: int = 0, low: int = 0) -> float:
    """Derive a performance sub-score from issue counts by severity."""
    return float(max(0, 100 - high * 20 - medium * 10 - low * 5))


def compute_compliance_scores(
    features: Sequence[FeatureClassification],
    performance: float,
    accessibility: float,
    config: AnalysisConfig | None = None,
) -> ComplianceScores:
    """Combine the four dimensions into a weighted overall score in [0, 100]."""
    config = config or AnalysisConfig()
    weights = config.weights

    dimensions = {
        "browser_support": browser_support_score(features),
        "feature_stability": feature_stability_score(features),
        "performance": _check_sub_score("performance", performance),
        "accessibility": _check_sub_score("accessibility", accessibility),
    }
    weighted = sum(dimensions[name] * weights[name] for name in dimensions)
    overall = min(100, max(0, round_half_up(weighted)))
    debug_log(f"compliance: {dimensions} -> overall={overall}")

    return ComplianceScores(overall=overall, **dimensions)


def breakdown(features: Sequence[FeatureClassification]) -> dict[str, int]:
    return {
        "baseline": sum(1 for feature in features if feature.baseline),
        "risky": sum(1 for feature in features if feature.risky),
        "unsupported": sum(1 for feature in features if feature.unsupported),
    }


def _overall_recommendation(overall: int) -> Recommendation:
    message = f"Overall compliance score is {overall}/100"
    if overall < 60:
        return Recommendation(
            type="critical_compliance",
            priority="critical",
            title="Critical Baseline Compliance Issues",
            message=message,
            suggestion="Immediate action required to improve baseline compliance",
            actions=(
                "Replace unsupported features with baseline alternatives",
                "Add polyfills for risky features",
                "Implement progressive enhancement patterns",
            ),
        )
    if overall < 80:
        return Recommendation(
            type="moderate_compliance",
            priority="high",
            title="Moderate Baseline Compliance Issues",
            message=message,
            suggestion="Significant improvements needed for better baseline compliance",
            actions=(
                "Address risky features with polyfills",
                "Improve progressive enhancement",
                "Optimize performance",
            ),
        )
    if overall < 95:
        return Recommendation(
            type="good_compliance",
            priority="medium",
            title="Good Baseline Compliance",
            message=message,
            suggestion="Minor improvements can enhance baseline compliance",
            actions=(
                "Fine-tune remaining risky features",
                "Optimize performance further",
                "Enhance accessibility",
            ),
        )
    return Recommendation(
        type="excellent_compliance",
        priority="low",
        title="Excellent Baseline Compliance",
        message=message,
        suggestion="Maintain current baseline compliance standards",
        actions=(
            "Monitor for new baseline features",
            "Keep dependencies updated",
            "Continue best practices",
        ),
    )


_DIMENSION_ADVICE: dict[str, tuple[str, str, str, str, tuple[str, ...]]] = {
    "browser_support": (
        "high",
        "Improve Browser Support",
        "Browser support",
        "Focus on improving cross-browser compatibility",
        (
            "Add polyfills for unsupported features",
            "Implement feature detection",
            "Use progressive enhancement",
        ),
    ),
    "feature_stability": (
        "medium",
        "Improve Feature Stability",
        "Feature stability",
        "Focus on using more stable, well-supported features",
        (
            "Replace experimental features with stable alternatives",
            "Add feature detection for risky features",
            "Monitor feature support changes",
        ),
    ),
    "performance": (
        "high",
        "Improve Performance",
        "Performance",
        "Address performance issues for better baseline compliance",
        ("Optimize bundle size", "Implement code splitting", "Add performance monitoring"),
    ),
    "accessibility": (
        "high",
        "Improve Accessibility",
        "Accessibility",
        "Enhance accessibility for better baseline compliance",
        ("Fix accessibility issues", "Add ARIA attributes", "Improve keyboard navigation"),
    ),
}


def compliance_recommendations(scores: ComplianceScores) -> list[Recommendation]:
    """One recommendation for the overall band, plus one per dimension scoring below 80."""
    recommendations = [_overall_recommendation(scores.overall)]
    for dimension, (priority, title, label, suggestion, actions) in _DIMENSION_ADVICE.items():
        value = scores.get(dimension)
        if value < LOW_SCORE_THRESHOLD:
            recommendations.append(
                Recommendation(
                    type=dimension,
                    priority=priority,
                    title=title,
                    message=f"{label} score is {value:.1f}/100",
                    suggestion=suggestion,
                    actions=actions,
                )
            )
    return recommendations


def improvement_potential(scores: ComplianceScores) -> ImprovementPotential:
    potential = 100 - scores.overall
    return ImprovementPotential(
        current=scores.overall,
        potential=potential,
        percentage=potential,
        achievable=potential > 0,
    )
