# -*- coding: utf-8 -*-
"""CLI commands for one-off analyses and diagnostics."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from eyescreen.config import ConfigError, load_config
from eyescreen.diagnose import run_diagnostics
from eyescreen.errors import AnalysisError, ConfigurationError
from eyescreen.models.analysis_request import AnalysisRequest
from eyescreen.models.analysis_result import AnalysisResult, check_invariants
from eyescreen.pipeline.analyzer import Analyzer

app = typer.Typer(help="Eye image screening from the command line")
logger = logging.getLogger(__name__)


def _print_report(result: AnalysisResult) -> None:
    status = "Healthy" if result.is_healthy else "Potential concern"
    typer.echo(f"Status: {status}")
    typer.echo(f"Primary diagnosis: {result.primary_diagnosis}")
    typer.echo(f"Confidence: {result.confidence_score:.0f}%")
    typer.echo(f"\nSummary:\n  {result.summary}")

    if result.symptoms:
        typer.echo("\nDetected symptoms:")
        for index, symptom in enumerate(result.symptoms, start=1):
            box = symptom.bounding_box
            typer.echo(
                f"  {index}. {symptom.name} [{symptom.anatomical_layer}] "
                f"at x={box.x:g}% y={box.y:g}% w={box.width:g}% h={box.height:g}%"
            )
            typer.echo(f"     {symptom.description}")

    if result.differential_diagnoses:
        typer.echo("\nDifferential diagnoses:")
        for item in result.differential_diagnoses:
            typer.echo(f"  - {item.name}: {item.reasoning}")

    if result.possible_symptoms:
        typer.echo("\nPossible symptoms: " + ", ".join(result.possible_symptoms))

    typer.echo(f"\nTreatment: {result.treatment}")
    typer.echo(f"Next steps: {result.next_steps}")


@app.command()
def analyze(
    image_path: Path = typer.Argument(..., help="Path to a PNG, JPG or WEBP eye photo"),
    settings: Path = typer.Option(None, help="Path to settings.json (default: ./settings.json)"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    verbose: bool = typer.Option(False, help="Verbose output"),
) -> None:
    """Analyze a single eye image and print the report."""
    if verbose:
        logging.basicConfig(level=logging.INFO)

    try:
        config = load_config(settings)
    except ConfigError as exc:
        typer.echo(f"Invalid settings: {exc}", err=True)
        raise typer.Exit(2)

    analyzer = Analyzer.from_settings(config)
    try:
        analysis_request = AnalysisRequest.from_path(image_path)
        result = analyzer.analyze_request(analysis_request)
    except ConfigurationError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(2)
    except AnalysisError as exc:
        logger.debug("Analysis failed", exc_info=True)
        typer.echo(f"Analysis failed ({type(exc).__name__}): {exc}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_report(result)

    for warning in check_invariants(result):
        typer.echo(f"Warning: {warning}", err=True)


@app.command()
def diagnose(
    settings: Path = typer.Option(None, help="Path to settings.json (default: ./settings.json)"),
    remote: bool = typer.Option(False, help="Also check the model against the Gemini API"),
) -> None:
    """Print a diagnostics report as JSON."""
    report = run_diagnostics(settings, check_remote=remote)
    typer.echo(json.dumps(report, indent=2))
    if report["status"] == "error":
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
