"""Terminal renderer for analysis reports."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .constants import CLASSIFICATION_LABEL_MAP, STATUS_ICON_MAP
from .model import AnalysisReport, FeatureClassification, ScoreComparison

_DIMENSION_LABELS: dict[str, str] = {
    "overall": "Overall",
    "browser_support": "Browser support",
    "feature_stability": "Feature stability",
    "performance": "Performance",
    "accessibility": "Accessibility",
}

_COMPARISON_STYLES: dict[str, str] = {"above": "green", "at": "yellow", "below": "red"}


def _score_style(score: float) -> str:
    if score >= 80:
        return "bold green"
    if score >= 60:
        return "bold yellow"
    return "bold red"


def _comparison_line(dimension: str, comparison: ScoreComparison) -> Text:
    label = _DIMENSION_LABELS.get(dimension, dimension)
    line = Text(f"  {label:<18} {comparison.score:6.1f}  (benchmark {comparison.benchmark:.0f}, ")
    line.append(f"{comparison.difference:+.1f}", style=_COMPARISON_STYLES[comparison.status])
    line.append(f", {comparison.status})")
    return line


def _feature_line(feature: FeatureClassification) -> Text:
    icons = " ".join(
        f"{browser}:{STATUS_ICON_MAP.get(status, STATUS_ICON_MAP['unsupported'])}"
        for browser, status in feature.browser_support.items()
    )
    line = Text(f"  {feature.name}  {feature.support_score:.0f}%")
    if icons:
        line.append(f"  {icons}")
    if not feature.known:
        line.append(f"  [{feature.reason}]", style="dim")
    elif feature.matched_key and feature.matched_key != feature.name:
        line.append(f"  -> {feature.matched_key}", style="dim")
    return line


def render_report(report: AnalysisReport) -> Group:
    """Render an analysis report as a Rich renderable group."""
    compliance = report.compliance
    scores = compliance.scores
    lines: list[Text] = []

    headline = Text("Compliance: ", style="bold")
    headline.append(f"{scores.overall}/100", style=_score_style(scores.overall))
    headline.append(f"  Grade {compliance.grade}  ({compliance.status})")
    lines.append(headline)

    summary = report.summary
    lines.append(
        Text(
            f"Features: {summary.total_features} total, {summary.baseline_features} baseline, "
            f"{summary.risky_features} risky, {summary.unsupported_features} unsupported"
        )
    )

    lines.append(Text(""))
    lines.append(Text("Benchmarks", style="bold"))
    for dimension, comparison in compliance.comparison.items():
        lines.append(_comparison_line(dimension, comparison))

    if summary.browser_support:
        lines.append(Text(""))
        lines.append(Text("Browser Coverage", style="bold"))
        for browser, data in summary.browser_support.items():
            lines.append(
                Text(
                    f"  {browser:<16} {data.coverage:5.1f}%  "
                    f"({data.supported} supported, {data.partial} partial, "
                    f"{data.unsupported} unsupported)"
                )
            )

    for classification, label in CLASSIFICATION_LABEL_MAP.items():
        members = [
            feature for feature in report.features if feature.classification.value == classification
        ]
        if not members:
            continue
        lines.append(Text(""))
        lines.append(Text(f"{label} ({len(members)})", style="bold cyan"))
        lines.extend(_feature_line(feature) for feature in members)

    if compliance.next_steps:
        lines.append(Text(""))
        lines.append(Text("Next steps", style="bold"))
        lines.extend(Text(f"  - {step}") for step in compliance.next_steps)

    return Group(Panel(Group(*lines), border_style="blue", title="Baseline compliance"))
