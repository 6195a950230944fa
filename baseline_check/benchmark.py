"""Benchmark comparison and letter grading of compliance scores."""

from __future__ import annotations

from collections.abc import Mapping

from .constants import (
    COMPLIANCE_STATUS_BANDS,
    DEFAULT_BENCHMARKS,
    FAILING_GRADE,
    FAILING_STATUS,
    GRADE_BANDS,
)
from .model import BenchmarkComparison, ComparisonStatus, ComplianceScores, ScoreComparison


def compare_score(score: float, benchmark: float) -> ScoreComparison:
    difference = score - benchmark
    percentage = score / benchmark * 100 if benchmark else 0.0
    status: ComparisonStatus
    if difference > 0:
        status = "above"
    elif difference == 0:
        status = "at"
    else:
        status = "below"
    return ScoreComparison(
        score=score,
        benchmark=benchmark,
        difference=difference,
        percentage=percentage,
        status=status,
    )


def compare_with_benchmarks(
    scores: ComplianceScores,
    benchmarks: Mapping[str, float] = DEFAULT_BENCHMARKS,
) -> BenchmarkComparison:
    return BenchmarkComparison(
        overall=compare_score(scores.overall, benchmarks["overall"]),
        browser_support=compare_score(scores.browser_support, benchmarks["browser_support"]),
        feature_stability=compare_score(scores.feature_stability, benchmarks["feature_stability"]),
        performance=compare_score(scores.performance, benchmarks["performance"]),
        accessibility=compare_score(scores.accessibility, benchmarks["accessibility"]),
    )


def assign_grade(
    overall: float,
    bands: tuple[tuple[float, str], ...] = GRADE_BANDS,
) -> str:
    """Return the highest band the score qualifies for; bands are ordered high to low."""
    for threshold, grade in bands:
        if overall >= threshold:
            return grade
    return FAILING_GRADE


def compliance_status(overall: float) -> str:
    for threshold, status in COMPLIANCE_STATUS_BANDS:
        if overall >= threshold:
            return status
    return FAILING_STATUS


def next_steps(overall: float) -> tuple[str, ...]:
    if overall < 60:
        return (
            "Focus on critical compliance issues first",
            "Replace unsupported features immediately",
            "Add essential polyfills",
        )
    if overall < 80:
        return (
            "Address risky features with polyfills",
            "Improve progressive enhancement",
            "Optimize performance",
        )
    if overall < 95:
        return (
            "Fine-tune remaining issues",
            "Monitor for new baseline features",
            "Maintain current standards",
        )
    return (
        "Maintain excellent compliance",
        "Monitor for new opportunities",
        "Share best practices",
    )
