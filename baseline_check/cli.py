"""Console script for baseline-check."""

from __future__ import annotations

from dataclasses import replace
import json
import logging
import sys

import click
from rich.console import Console

from ._version import __version__
from .analysis import run_analysis
from .config import AnalysisConfig, load_config
from .constants import BCD_DATA_URL
from .dataset import load_dataset, load_features
from .exceptions import BaselineCheckError
from .http import fetch_dataset, use_shared_client
from .render_basic import render_report
from .util.debug import debug_mode


def _build_config(
    config_path: str | None,
    browsers: tuple[str, ...],
    threshold: float | None,
    include_mobile: bool,
    include_beta: bool,
) -> AnalysisConfig:
    config = load_config(config_path) if config_path else AnalysisConfig()
    overrides: dict[str, object] = {}
    if browsers:
        overrides["target_browsers"] = browsers
    if threshold is not None:
        overrides["baseline_threshold"] = threshold
    if include_mobile:
        overrides["include_mobile"] = True
    if include_beta:
        overrides["include_beta"] = True
    return replace(config, **overrides) if overrides else config


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("features_path", metavar="FEATURES", type=click.Path(dir_okay=False))
@click.option(
    "--dataset",
    "dataset_path",
    type=click.Path(dir_okay=False),
    help="Compatibility dataset JSON (flat dotted keys or a browser-compat-data tree).",
)
@click.option(
    "--fetch-dataset",
    "dataset_url",
    is_flag=False,
    flag_value=BCD_DATA_URL,
    default=None,
    help="Download a browser-compat-data snapshot (optionally from URL).",
)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="JSON config file.")
@click.option("-b", "--browser", "browsers", multiple=True, help="Target browser (repeatable).")
@click.option("--threshold", type=float, default=None, help="Baseline threshold within [0, 1].")
@click.option("--include-mobile", is_flag=True, help="Also target mobile browser counterparts.")
@click.option("--include-beta", is_flag=True, help="Count preview releases as partial support.")
@click.option("--performance", type=float, default=100.0, show_default=True)
@click.option("--accessibility", type=float, default=100.0, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option("--fail-under", type=int, default=None, help="Exit 2 when overall score is lower.")
@click.option("--debug", is_flag=True, help="Log resolution and scoring decisions to stderr.")
@click.version_option(__version__, "-v", "--version")
def main(
    features_path: str,
    dataset_path: str | None,
    dataset_url: str | None,
    config_path: str | None,
    browsers: tuple[str, ...],
    threshold: float | None,
    include_mobile: bool,
    include_beta: bool,
    performance: float,
    accessibility: float,
    as_json: bool,
    fail_under: int | None,
    debug: bool,
) -> None:
    """
    Classify detected web features and score baseline compliance

    \b
    Example usages:
      baseline-check features.json --dataset bcd.json
      baseline-check features.json --fetch-dataset --json
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if dataset_path is None and dataset_url is None:
        raise click.UsageError("Provide --dataset PATH or --fetch-dataset.")

    try:
        with debug_mode(debug):
            config = _build_config(config_path, browsers, threshold, include_mobile, include_beta)
            features = load_features(features_path)
            if dataset_path is not None:
                dataset = load_dataset(dataset_path)
            else:
                with use_shared_client():
                    dataset = fetch_dataset(dataset_url or BCD_DATA_URL)
            report = run_analysis(
                features,
                dataset,
                config,
                performance=performance,
                accessibility=accessibility,
            )
    except BaselineCheckError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        Console().print(render_report(report))

    if fail_under is not None and report.compliance.scores.overall < fail_under:
        click.echo(
            f"Compliance score {report.compliance.scores.overall} is below {fail_under}.",
            err=True,
        )
        sys.exit(2)
