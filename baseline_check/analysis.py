"""End-to-end analysis: classify features, score compliance, benchmark and grade."""

from __future__ import annotations

from collections.abc import Sequence

from .benchmark import assign_grade, compare_with_benchmarks, compliance_status, next_steps
from .config import AnalysisConfig
from .model import AnalysisReport, ComplianceReport, DetectedFeature, Recommendation
from .resolve import Dataset
from .scoring import (
    breakdown,
    compliance_recommendations,
    compute_compliance_scores,
    improvement_potential,
)
from .support import analyze_browser_support
from .util.debug import debug_log


def run_analysis(
    features: Sequence[DetectedFeature],
    dataset: Dataset,
    config: AnalysisConfig | None = None,
    *,
    performance: float,
    accessibility: float,
) -> AnalysisReport:
    """Run one analysis over a feature list and a compatibility dataset.

    All classifications finish before scoring starts, and scoring finishes
    before benchmarking and grading. Nothing is cached between calls.
    """
    config = config or AnalysisConfig()

    support = analyze_browser_support(features, dataset, config)
    scores = compute_compliance_scores(support.features, performance, accessibility, config)
    grade = assign_grade(scores.overall)
    debug_log(f"analysed {len(support.features)} features: overall={scores.overall} grade={grade}")

    compliance = ComplianceReport(
        scores=scores,
        comparison=compare_with_benchmarks(scores, config.benchmarks),
        grade=grade,
        status=compliance_status(scores.overall),
        breakdown=breakdown(support.features),
        recommendations=compliance_recommendations(scores),
        next_steps=next_steps(scores.overall),
        improvement_potential=improvement_potential(scores),
        benchmarks=dict(config.benchmarks),
    )

    recommendations = list(support.recommendations)
    if scores.overall < 80:
        recommendations.append(
            Recommendation(
                type="compliance",
                priority="critical",
                title="Baseline Compliance Issues",
                message=f"Compliance score: {scores.overall}/100",
                suggestion="Address compliance issues for better baseline support",
            )
        )

    return AnalysisReport(
        features=support.features,
        summary=support.summary,
        support_matrix=support.support_matrix,
        recommendations=recommendations,
        compliance=compliance,
    )
