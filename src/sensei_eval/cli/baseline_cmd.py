"""sensei-eval baseline -- evaluate all prompts and record a baseline file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from sensei_eval.cli.shared import console, run_evaluation, setup_logging
from sensei_eval.evaluation.baseline import create_baseline, to_baseline_entry
from sensei_eval.models.config import DEFAULT_CONFIG_FILE
from sensei_eval.storage.baseline_store import DEFAULT_BASELINE_FILE, save_baseline


def baseline(
    config: Path = typer.Option(Path(DEFAULT_CONFIG_FILE), "-c", "--config", help="Path to config file"),
    baseline_path: Path = typer.Option(Path(DEFAULT_BASELINE_FILE), "-b", "--baseline", help="Baseline file path"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write the baseline here instead of --baseline"),
    quick: bool = typer.Option(False, "-q", "--quick", help="Deterministic criteria only, no judge"),
    model: Optional[str] = typer.Option(None, "-m", "--model", help="Override the judge model"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Judge API key (defaults to provider env var)"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable debug logging"),
) -> None:
    """Evaluate all prompts and write their scores as the new baseline."""
    setup_logging(verbose)

    _, results = run_evaluation(config, quick=quick, model=model, api_key=api_key)

    entries = [to_baseline_entry(name, result) for name, result in results.items()]
    snapshot = create_baseline(entries, mode="quick" if quick else "full")
    written = save_baseline(snapshot, output or baseline_path)

    passed = sum(1 for r in results.values() if r.passed)
    console.print(
        f"[bold green]Baseline saved:[/bold green] {written} "
        f"({len(entries)} prompts, {passed} passing)",
        highlight=False,
    )
