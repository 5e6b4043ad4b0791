"""sensei-eval eval -- evaluate every configured prompt and show results."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sensei_eval.cli.output import (
    eval_results_to_json,
    format_eval_markdown,
    output_json,
    render_eval_results,
)
from sensei_eval.cli.shared import run_evaluation, setup_logging
from sensei_eval.models.config import DEFAULT_CONFIG_FILE

FORMATS = ("text", "json", "markdown")


def eval_(
    config: Path = typer.Option(Path(DEFAULT_CONFIG_FILE), "-c", "--config", help="Path to config file"),
    quick: bool = typer.Option(False, "-q", "--quick", help="Deterministic criteria only, no judge"),
    output_format: str = typer.Option("text", "-f", "--format", help="Output format: text, json or markdown"),
    model: Optional[str] = typer.Option(None, "-m", "--model", help="Override the judge model"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Judge API key (defaults to provider env var)"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Show per-criterion scores and feedback"),
) -> None:
    """Evaluate all prompts in the config and display results."""
    if output_format not in FORMATS:
        raise typer.BadParameter(
            f"must be one of: {', '.join(FORMATS)}", param_hint="--format"
        )
    setup_logging(verbose)

    _, results = run_evaluation(config, quick=quick, model=model, api_key=api_key)

    if output_format == "json":
        output_json(eval_results_to_json(results))
    elif output_format == "markdown":
        sys.stdout.write(format_eval_markdown(results))
    else:
        render_eval_results(results, Console(), verbose=verbose)
