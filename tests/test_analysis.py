from __future__ import annotations

import json

from baseline_check.analysis import run_analysis
from baseline_check.config import AnalysisConfig
from baseline_check.constants import DEFAULT_BENCHMARKS
from baseline_check.model import DetectedFeature

_DATASET = {
    "api.fetch": {"chrome": True, "firefox": True, "safari": True, "edge": True},
    "css.grid": {
        "chrome": {"version_added": "57"},
        "firefox": {"version_added": "52"},
        "safari": {"version_added": None, "flags": [{"type": "preference"}]},
        "edge": {"version_added": "16"},
    },
    "api.popover": {"chrome": "114", "firefox": "125", "safari": "17", "edge": "114"},
    "javascript.builtins.Promise": {"chrome": "32", "firefox": "29", "safari": "8"},
}


def _features() -> list[DetectedFeature]:
    return [
        DetectedFeature(name="fetch", category="api", files=("src/app.js",), usage=4),
        DetectedFeature(name="grid", category="css", files=("styles/main.css",)),
        DetectedFeature(name="popover", category="api", files=("src/menu.js",)),
        DetectedFeature(name="Promise", category="javascript", files=("src/app.js",)),
        DetectedFeature(name="not-a-real-feature", category="api"),
    ]


def test_empty_feature_list_scores_zero_without_error() -> None:
    report = run_analysis([], _DATASET, performance=0, accessibility=0)

    scores = report.compliance.scores
    assert scores.browser_support == 0.0
    assert scores.feature_stability == 0.0
    assert scores.overall == 0
    assert report.compliance.grade == "F"
    assert report.summary.total_features == 0
    assert report.features == []


def test_full_run_classifies_scores_and_grades() -> None:
    report = run_analysis(_features(), _DATASET, performance=90, accessibility=80)

    by_name = {feature.name: feature for feature in report.features}
    assert by_name["fetch"].baseline is True
    assert by_name["grid"].risky is True
    assert by_name["grid"].support_score == 87.5
    assert by_name["popover"].unsupported is True
    assert by_name["popover"].known is True
    assert by_name["Promise"].matched_key == "javascript.builtins.Promise"
    assert by_name["Promise"].browser_support["edge"] == "unsupported"
    assert by_name["Promise"].support_score == 75.0
    assert by_name["not-a-real-feature"].known is False

    scores = report.compliance.scores
    # (100 + 87.5 + 0 + 75 + 0) / 5
    assert scores.browser_support == 52.5
    assert scores.feature_stability == 20.0
    # 0.35 * 52.5 + 0.25 * 20 + 0.2 * 90 + 0.2 * 80 = 57.375
    assert scores.overall == 57
    assert report.compliance.grade == "D+"
    assert report.compliance.status == "poor"
    assert report.compliance.breakdown == {"baseline": 1, "risky": 2, "unsupported": 2}
    assert report.compliance.comparison.overall.status == "below"
    assert report.compliance.comparison.performance.status == "above"
    assert report.compliance.improvement_potential.potential == 43
    assert report.recommendations[-1].type == "compliance"


def test_every_feature_has_exactly_one_classification() -> None:
    report = run_analysis(_features(), _DATASET, performance=50, accessibility=50)
    for feature in report.features:
        assert [feature.baseline, feature.risky, feature.unsupported].count(True) == 1


def test_scores_at_or_above_threshold_are_baseline() -> None:
    for threshold in (0.5, 0.75, 0.875, 0.95, 1.0):
        config = AnalysisConfig(baseline_threshold=threshold)
        report = run_analysis(_features(), _DATASET, config, performance=50, accessibility=50)
        for feature in report.features:
            if feature.known and feature.support_score >= threshold * 100:
                assert feature.baseline is True


def test_repeated_runs_are_identical() -> None:
    first = run_analysis(_features(), _DATASET, performance=70, accessibility=60)
    second = run_analysis(_features(), _DATASET, performance=70, accessibility=60)
    assert first.to_dict() == second.to_dict()


def test_feature_order_does_not_change_scores() -> None:
    forward = run_analysis(_features(), _DATASET, performance=70, accessibility=60)
    backward = run_analysis(
        list(reversed(_features())), _DATASET, performance=70, accessibility=60
    )
    assert forward.compliance.scores == backward.compliance.scores
    assert forward.summary.browser_support == backward.summary.browser_support


def test_injected_benchmarks_flow_into_comparison() -> None:
    benchmarks = {**DEFAULT_BENCHMARKS, "overall": 50.0}
    config = AnalysisConfig(benchmarks=benchmarks)
    report = run_analysis(_features(), _DATASET, config, performance=90, accessibility=80)
    assert report.compliance.comparison.overall.status == "above"
    assert report.compliance.benchmarks["overall"] == 50.0


def test_report_is_json_serializable_with_camel_case_keys() -> None:
    report = run_analysis(_features(), _DATASET, performance=90, accessibility=80)
    payload = json.loads(json.dumps(report.to_dict()))

    assert set(payload) == {"features", "summary", "supportMatrix", "recommendations", "compliance"}
    assert payload["summary"]["totalFeatures"] == 5
    assert payload["summary"]["baselineFeatures"] == 1
    assert payload["summary"]["riskyFeatures"] == 2
    assert payload["summary"]["unsupportedFeatures"] == 2
    assert set(payload["summary"]["browserSupport"]["chrome"]) == {
        "supported",
        "partial",
        "unsupported",
        "coverage",
    }
    assert payload["features"][0]["supportScore"] == 100.0
    assert payload["features"][0]["browserSupport"]["chrome"] == "supported"
    compliance = payload["compliance"]
    assert compliance["grade"] == "D+"
    assert set(compliance["scores"]) == {
        "overall",
        "browserSupport",
        "featureStability",
        "performance",
        "accessibility",
    }
    assert compliance["comparison"]["browserSupport"]["benchmark"] == 80.0
    assert compliance["comparison"]["overall"]["status"] == "below"
    assert compliance["benchmarks"]["featureStability"] == 70.0
