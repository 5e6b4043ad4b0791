"""Rich terminal, markdown and JSON rendering for CLI results.

Text output uses Rich tables on stdout; markdown output is plain text
suitable for PR comments and GitHub step summaries.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING

from pydantic import BaseModel
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from sensei_eval.models.baseline import CompareResult, PromptCompareResult
    from sensei_eval.models.result import EvalResult


def _status(passed: bool) -> str:
    return "[bold green]✓ PASS[/bold green]" if passed else "[bold red]✗ FAIL[/bold red]"


def _score_style(score: float) -> str:
    # green >= 0.75, yellow >= 0.5, red below
    if score >= 0.75:
        return "green"
    if score >= 0.5:
        return "yellow"
    return "red"


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def _signed_pct(value: float) -> str:
    return f"{value * 100:+.1f}%"


def render_eval_results(
    results: Mapping[str, EvalResult],
    console: Console,
    *,
    verbose: bool = False,
) -> None:
    """Render a summary table of every prompt, plus details when verbose.

    Args:
        results: Prompt name to result, in display order.
        console: Rich Console for output.
        verbose: Show per-criterion rows and failed-criterion feedback.
    """
    table = Table(box=box.SIMPLE, padding=(0, 2))
    table.add_column("Prompt", style="bold")
    table.add_column("Type")
    table.add_column("Score", justify="right")
    table.add_column("Status")

    for name, result in results.items():
        style = _score_style(result.overall_score)
        table.add_row(
            escape(name),
            result.content_type,
            f"[{style}]{_pct(result.overall_score)}[/{style}]",
            _status(result.passed),
        )

    console.print()
    console.print(table)

    passed = sum(1 for r in results.values() if r.passed)
    console.print(f"{passed}/{len(results)} prompts passed")

    if verbose:
        for name, result in results.items():
            render_eval_details(name, result, console)


def render_eval_details(name: str, result: EvalResult, console: Console) -> None:
    """Render per-criterion scores and failed-criterion feedback for one prompt."""
    console.print()
    console.print(f"[bold]{escape(name)}[/bold] [dim]({result.content_type})[/dim]")

    table = Table(box=box.SIMPLE, padding=(0, 2))
    table.add_column("Criterion")
    table.add_column("Score", justify="right")
    table.add_column("Status")
    table.add_column("Reasoning", overflow="fold")
    for s in result.scores:
        style = _score_style(s.score)
        table.add_row(
            s.criterion,
            f"[{style}]{s.score:.2f}[/{style}]",
            _status(s.passed),
            escape(s.reasoning),
        )
    console.print(table)

    if result.feedback.failed_criteria:
        console.print("[bold]Failed criteria[/bold]")
        for failed in result.feedback.failed_criteria:
            console.print(f"  [red]{failed.criterion}[/red]: {escape(failed.reasoning)}")
            for suggestion in failed.suggestions:
                console.print(f"    - {escape(suggestion)}")


def format_eval_markdown(results: Mapping[str, EvalResult]) -> str:
    """Format evaluation results as a markdown report."""
    passed = sum(1 for r in results.values() if r.passed)
    lines = [
        "## sensei-eval results",
        "",
        f"{passed}/{len(results)} prompts passed",
        "",
        "| Prompt | Type | Score | Status |",
        "| --- | --- | ---: | --- |",
    ]
    for name, result in results.items():
        status = "PASS" if result.passed else "FAIL"
        lines.append(
            f"| {name} | {result.content_type} | {_pct(result.overall_score)} | {status} |"
        )

    failing = [(name, r) for name, r in results.items() if r.feedback.failed_criteria]
    if failing:
        lines.extend(["", "### Failed criteria", ""])
        for name, result in failing:
            for failed in result.feedback.failed_criteria:
                lines.append(f"- **{name}** `{failed.criterion}`: {failed.reasoning}")
    return "\n".join(lines) + "\n"


def _compare_status(prompt: PromptCompareResult) -> str:
    if prompt.new_prompt:
        return "NEW"
    if prompt.regressed:
        return "REGRESSED"
    return "OK"


def render_compare(compare: CompareResult, console: Console) -> None:
    """Render a comparison table with per-criterion regressions underneath."""
    table = Table(box=box.SIMPLE, padding=(0, 2))
    table.add_column("Prompt", style="bold")
    table.add_column("Baseline", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Delta", justify="right")
    table.add_column("Status")

    for prompt in compare.prompts:
        baseline = _pct(prompt.baseline_score) if prompt.baseline_score is not None else "-"
        if prompt.new_prompt:
            status = "[cyan]NEW[/cyan]"
        elif prompt.regressed:
            status = "[bold red]✗ REGRESSED[/bold red]"
        else:
            status = "[green]✓ OK[/green]"
        delta_style = "red" if prompt.delta < 0 else "green" if prompt.delta > 0 else "dim"
        table.add_row(
            escape(prompt.name),
            baseline,
            _pct(prompt.current_score),
            f"[{delta_style}]{_signed_pct(prompt.delta)}[/{delta_style}]",
            status,
        )

    console.print()
    console.print(table)

    for prompt in compare.prompts:
        drops = [d for d in prompt.criteria_deltas if d.delta < 0]
        if prompt.regressed and drops:
            console.print(f"[bold]{escape(prompt.name)}[/bold]")
            for d in drops:
                console.print(
                    f"  {d.criterion}: {d.baseline:.2f} -> {d.current:.2f} "
                    f"([red]{_signed_pct(d.delta)}[/red])"
                )

    summary = compare.summary
    console.print(
        f"{summary.total} compared: {summary.regressed} regressed, "
        f"{summary.improved} improved, {summary.unchanged} unchanged, {summary.new} new"
    )
    console.print(_status(compare.passed))


def format_compare_markdown(compare: CompareResult) -> str:
    """Format a comparison as markdown for PR comments and step summaries."""
    summary = compare.summary
    verdict = "PASS" if compare.passed else "FAIL"
    lines = [
        f"## sensei-eval comparison: {verdict}",
        "",
        f"{summary.total} compared: {summary.regressed} regressed, "
        f"{summary.improved} improved, {summary.unchanged} unchanged, {summary.new} new",
        "",
        "| Prompt | Baseline | Current | Delta | Status |",
        "| --- | ---: | ---: | ---: | --- |",
    ]
    for prompt in compare.prompts:
        baseline = _pct(prompt.baseline_score) if prompt.baseline_score is not None else "-"
        lines.append(
            f"| {prompt.name} | {baseline} | {_pct(prompt.current_score)} "
            f"| {_signed_pct(prompt.delta)} | {_compare_status(prompt)} |"
        )

    regressed = [p for p in compare.prompts if p.regressed]
    if regressed:
        lines.extend(["", "### Regressions", ""])
        for prompt in regressed:
            for d in prompt.criteria_deltas:
                if d.delta < 0:
                    lines.append(
                        f"- **{prompt.name}** `{d.criterion}`: "
                        f"{d.baseline:.2f} -> {d.current:.2f} ({_signed_pct(d.delta)})"
                    )
    return "\n".join(lines) + "\n"


def eval_results_to_json(results: Mapping[str, EvalResult]) -> str:
    """Serialize evaluation results as a JSON object keyed by prompt name."""
    data = {name: result.model_dump(mode="json") for name, result in results.items()}
    return json.dumps(data, indent=2, ensure_ascii=False)


def output_json(payload: BaseModel | str) -> None:
    """Write a model (or pre-serialized JSON) to stdout with no markup."""
    text = payload if isinstance(payload, str) else payload.model_dump_json(indent=2)
    sys.stdout.write(text)
    sys.stdout.write("\n")
