"""sensei-eval compare -- evaluate prompts and check them against a baseline.

Exits 1 when any prompt regressed, so it can gate CI. When running
under GitHub Actions the markdown report is appended to the step
summary.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from sensei_eval.cli.output import (
    format_compare_markdown,
    output_json,
    render_compare,
)
from sensei_eval.cli.shared import console, run_evaluation, setup_logging
from sensei_eval.errors import BaselineVersionError
from sensei_eval.evaluation.baseline import compare_results
from sensei_eval.models.baseline import BaselineFile
from sensei_eval.models.config import DEFAULT_CONFIG_FILE
from sensei_eval.storage.baseline_store import DEFAULT_BASELINE_FILE, load_baseline

FORMATS = ("text", "json", "markdown")

STEP_SUMMARY_ENV = "GITHUB_STEP_SUMMARY"


def _load_baseline_or_exit(path: Path) -> BaselineFile:
    try:
        return load_baseline(path)
    except FileNotFoundError:
        console.print(
            f"[bold red]Baseline not found:[/bold red] {escape(str(path))}\n"
            "[dim]Run 'sensei-eval baseline' first to record one.[/dim]",
            highlight=False,
        )
        raise typer.Exit(code=1)
    except (ValidationError, BaselineVersionError) as exc:
        console.print(
            f"[bold red]Invalid baseline {escape(str(path))}:[/bold red] {escape(str(exc))}",
            highlight=False,
        )
        raise typer.Exit(code=1)


def compare(
    config: Path = typer.Option(Path(DEFAULT_CONFIG_FILE), "-c", "--config", help="Path to config file"),
    baseline_path: Path = typer.Option(Path(DEFAULT_BASELINE_FILE), "-b", "--baseline", help="Baseline file path"),
    threshold: float = typer.Option(0.0, "-t", "--threshold", min=0.0, help="Allowed score drop before it counts as a regression"),
    quick: bool = typer.Option(False, "-q", "--quick", help="Deterministic criteria only, no judge"),
    output_format: str = typer.Option("text", "-f", "--format", help="Output format: text, json or markdown"),
    model: Optional[str] = typer.Option(None, "-m", "--model", help="Override the judge model"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Judge API key (defaults to provider env var)"),
    result_file: Optional[Path] = typer.Option(None, "--result-file", help="Also write the comparison as JSON here"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
) -> None:
    """Evaluate all prompts and fail if any regressed against the baseline."""
    if output_format not in FORMATS:
        raise typer.BadParameter(
            f"must be one of: {', '.join(FORMATS)}", param_hint="--format"
        )
    setup_logging(verbose)

    snapshot = _load_baseline_or_exit(baseline_path)
    if snapshot.mode != ("quick" if quick else "full"):
        console.print(
            f"[yellow]Warning:[/yellow] baseline was recorded in {snapshot.mode} mode",
            highlight=False,
        )

    _, results = run_evaluation(config, quick=quick, model=model, api_key=api_key)
    outcome = compare_results(results, snapshot, threshold=threshold)

    markdown = format_compare_markdown(outcome)
    if output_format == "json":
        output_json(outcome)
    elif output_format == "markdown":
        sys.stdout.write(markdown)
    else:
        render_compare(outcome, Console())

    if result_file is not None:
        result_file.parent.mkdir(parents=True, exist_ok=True)
        result_file.write_text(outcome.model_dump_json(indent=2) + "\n", encoding="utf-8")

    summary_path = os.environ.get(STEP_SUMMARY_ENV)
    if summary_path:
        with open(summary_path, "a", encoding="utf-8") as fh:
            fh.write(markdown)

    if not outcome.passed:
        raise typer.Exit(code=1)
