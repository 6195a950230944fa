"""Data models for feature classification and compliance scoring."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from .exceptions import InvalidFeatureError
from .util.text import camel_case

BrowserStatus = Literal["supported", "partial", "risky", "unsupported"]
ComparisonStatus = Literal["above", "below", "at"]


class Classification(Enum):
    BASELINE = "baseline"
    RISKY = "risky"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class DetectedFeature:
    name: str
    category: str = "unknown"
    files: tuple[str, ...] = ()
    usage: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidFeatureError("Detected feature name must be a non-empty string")
        if isinstance(self.usage, bool) or not isinstance(self.usage, int) or self.usage < 1:
            raise InvalidFeatureError(
                f"Detected feature {self.name!r} must have integer usage >= 1, got {self.usage!r}"
            )
        if not isinstance(self.files, tuple):
            object.__setattr__(self, "files", tuple(self.files))


def merge_features(features: Iterable[DetectedFeature]) -> list[DetectedFeature]:
    """Fold features sharing a name: files are concatenated, usage is summed."""
    merged: dict[str, DetectedFeature] = {}
    for feature in features:
        existing = merged.get(feature.name)
        if existing is None:
            merged[feature.name] = feature
            continue
        files = list(existing.files)
        files.extend(path for path in feature.files if path not in files)
        merged[feature.name] = DetectedFeature(
            name=existing.name,
            category=existing.category,
            files=tuple(files),
            usage=existing.usage + feature.usage,
        )
    return list(merged.values())


@dataclass(frozen=True)
class Recommendation:
    type: str
    priority: str
    message: str
    suggestion: str
    title: str | None = None
    browser: str | None = None
    features: tuple[str, ...] = ()
    actions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type,
            "priority": self.priority,
            "message": self.message,
            "suggestion": self.suggestion,
        }
        if self.title is not None:
            payload["title"] = self.title
        if self.browser is not None:
            payload["browser"] = self.browser
        if self.features:
            payload["features"] = list(self.features)
        if self.actions:
            payload["actions"] = list(self.actions)
        return payload


@dataclass(frozen=True)
class FeatureClassification:
    name: str
    browser_support: dict[str, BrowserStatus]
    support_score: float
    classification: Classification
    category: str = "unknown"
    files: tuple[str, ...] = ()
    usage: int = 1
    known: bool = True
    matched_key: str | None = None
    reason: str | None = None
    recommendations: tuple[Recommendation, ...] = ()
    polyfills: tuple[str, ...] = ()
    alternatives: tuple[str, ...] = ()

    @property
    def baseline(self) -> bool:
        return self.classification is Classification.BASELINE

    @property
    def risky(self) -> bool:
        return self.classification is Classification.RISKY

    @property
    def unsupported(self) -> bool:
        return self.classification is Classification.UNSUPPORTED

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "files": list(self.files),
            "usage": self.usage,
            "browserSupport": dict(self.browser_support),
            "supportScore": self.support_score,
            "baseline": self.baseline,
            "risky": self.risky,
            "unsupported": self.unsupported,
            "known": self.known,
            "matchedKey": self.matched_key,
            "reason": self.reason,
            "recommendations": [item.to_dict() for item in self.recommendations],
            "polyfills": list(self.polyfills),
            "alternatives": list(self.alternatives),
        }


@dataclass(frozen=True)
class BrowserSummary:
    supported: int = 0
    partial: int = 0
    unsupported: int = 0
    coverage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "supported": self.supported,
            "partial": self.partial,
            "unsupported": self.unsupported,
            "coverage": self.coverage,
        }


@dataclass(frozen=True)
class SupportSummary:
    total_features: int
    baseline_features: int
    risky_features: int
    unsupported_features: int
    browser_support: dict[str, BrowserSummary]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFeatures": self.total_features,
            "baselineFeatures": self.baseline_features,
            "riskyFeatures": self.risky_features,
            "unsupportedFeatures": self.unsupported_features,
            "browserSupport": {
                browser: summary.to_dict() for browser, summary in self.browser_support.items()
            },
        }


@dataclass(frozen=True)
class SupportMatrix:
    browsers: tuple[str, ...]
    features: tuple[str, ...]
    support: dict[str, dict[str, BrowserStatus]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "browsers": list(self.browsers),
            "features": list(self.features),
            "support": {browser: dict(row) for browser, row in self.support.items()},
        }


@dataclass(frozen=True)
class BrowserSupportResult:
    features: list[FeatureClassification]
    summary: SupportSummary
    support_matrix: SupportMatrix
    recommendations: list[Recommendation] = field(default_factory=list)


@dataclass(frozen=True)
class ComplianceScores:
    overall: int
    browser_support: float
    feature_stability: float
    performance: float
    accessibility: float

    def get(self, dimension: str) -> float:
        return float(getattr(self, dimension))

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall,
            "browserSupport": self.browser_support,
            "featureStability": self.feature_stability,
            "performance": self.performance,
            "accessibility": self.accessibility,
        }


@dataclass(frozen=True)
class ScoreComparison:
    score: float
    benchmark: float
    difference: float
    percentage: float
    status: ComparisonStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "benchmark": self.benchmark,
            "difference": self.difference,
            "percentage": self.percentage,
            "status": self.status,
        }


@dataclass(frozen=True)
class BenchmarkComparison:
    overall: ScoreComparison
    browser_support: ScoreComparison
    feature_stability: ScoreComparison
    performance: ScoreComparison
    accessibility: ScoreComparison

    def items(self) -> list[tuple[str, ScoreComparison]]:
        return [
            ("overall", self.overall),
            ("browser_support", self.browser_support),
            ("feature_stability", self.feature_stability),
            ("performance", self.performance),
            ("accessibility", self.accessibility),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {camel_case(name): comparison.to_dict() for name, comparison in self.items()}


@dataclass(frozen=True)
class ImprovementPotential:
    current: int
    potential: int
    percentage: int
    achievable: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self.current,
            "potential": self.potential,
            "percentage": self.percentage,
            "achievable": self.achievable,
        }


@dataclass(frozen=True)
class ComplianceReport:
    scores: ComplianceScores
    comparison: BenchmarkComparison
    grade: str
    status: str
    breakdown: dict[str, int]
    recommendations: list[Recommendation]
    next_steps: tuple[str, ...]
    improvement_potential: ImprovementPotential
    benchmarks: dict[str, float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "scores": self.scores.to_dict(),
            "comparison": self.comparison.to_dict(),
            "grade": self.grade,
            "status": self.status,
            "breakdown": dict(self.breakdown),
            "recommendations": [item.to_dict() for item in self.recommendations],
            "nextSteps": list(self.next_steps),
            "improvementPotential": self.improvement_potential.to_dict(),
            "benchmarks": {camel_case(name): value for name, value in self.benchmarks.items()},
        }


@dataclass(frozen=True)
class AnalysisReport:
    features: list[FeatureClassification]
    summary: SupportSummary
    support_matrix: SupportMatrix
    recommendations: list[Recommendation]
    compliance: ComplianceReport

    def to_dict(self) -> dict[str, Any]:
        return {
            "features": [feature.to_dict() for feature in self.features],
            "summary": self.summary.to_dict(),
            "supportMatrix": self.support_matrix.to_dict(),
            "recommendations": [item.to_dict() for item in self.recommendations],
            "compliance": self.compliance.to_dict(),
        }
