"""Baseline recording and regression comparison.

Converts results into numeric baseline snapshots and classifies a new
run against a stored baseline as new, regressed, improved or unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Literal

from sensei_eval.models.baseline import (
    BASELINE_VERSION,
    BaselineEntry,
    BaselineFile,
    CompareResult,
    CompareSummary,
    CriterionDelta,
    PromptCompareResult,
)
from sensei_eval.models.result import EvalResult

# Absorbs binary rounding so a drop of exactly the threshold (e.g. 0.80 -> 0.75
# at 0.05) stays within tolerance.
_FLOAT_TOLERANCE = 1e-9


def to_baseline_entry(name: str, result: EvalResult) -> BaselineEntry:
    """Flatten a result into a criterion-name -> score snapshot."""
    scores: dict[str, float] = {}
    for s in result.scores:
        scores[s.criterion] = s.score
    return BaselineEntry(
        name=name,
        content_type=result.content_type,
        overall_score=result.overall_score,
        scores=scores,
        evaluated_at=result.evaluated_at,
    )


def create_baseline(
    entries: Sequence[BaselineEntry],
    mode: Literal["full", "quick"],
) -> BaselineFile:
    """Wrap entries in a versioned, freshly timestamped BaselineFile."""
    return BaselineFile(
        version=BASELINE_VERSION,
        generated_at=datetime.now(timezone.utc),
        mode=mode,
        entries=list(entries),
    )


def _criteria_deltas(entry: BaselineEntry, result: EvalResult) -> list[CriterionDelta]:
    """Per-criterion deltas over the union of baseline and current criteria.

    Baseline criteria come first, then criteria new in this run. A side
    that lacks a criterion counts as 0.
    """
    current_scores: dict[str, float] = {}
    for s in result.scores:
        current_scores.setdefault(s.criterion, s.score)

    names = list(entry.scores)
    names.extend(name for name in current_scores if name not in entry.scores)

    deltas = []
    for name in names:
        current = current_scores.get(name, 0.0)
        baseline = entry.scores.get(name, 0.0)
        deltas.append(
            CriterionDelta(
                criterion=name,
                current=current,
                baseline=baseline,
                delta=current - baseline,
            )
        )
    return deltas


def compare_results(
    current: Mapping[str, EvalResult],
    baseline: BaselineFile,
    threshold: float = 0.0,
) -> CompareResult:
    """Compare current results against a baseline.

    A prompt regresses when its overall score drops by more than
    ``threshold`` or any criterion evaluated in this run does; a drop of
    exactly ``threshold`` is tolerated. Criteria present only in the
    baseline (e.g. judged criteria skipped by a quick run) are reported
    in the deltas but never count as regressions. Prompts without a
    baseline entry are new, with delta 0.

    Args:
        current: Mapping of prompt name to its current EvalResult.
        baseline: Previously recorded baseline.
        threshold: Tolerance for score drops and rises.

    Returns:
        CompareResult that passes iff no prompt regressed.
    """
    baseline_map: dict[str, BaselineEntry] = {}
    for entry in baseline.entries:
        baseline_map[entry.name] = entry

    prompts: list[PromptCompareResult] = []
    summary = CompareSummary()

    for name, result in current.items():
        entry = baseline_map.get(name)
        is_new = entry is None
        current_score = result.overall_score

        if is_new:
            baseline_score = None
            delta = 0.0
            criteria_deltas: list[CriterionDelta] = []
        else:
            baseline_score = entry.overall_score
            delta = current_score - baseline_score
            criteria_deltas = _criteria_deltas(entry, result)

        evaluated = {s.criterion for s in result.scores}
        floor = -threshold - _FLOAT_TOLERANCE
        criterion_regressions = [
            d for d in criteria_deltas if d.criterion in evaluated and d.delta < floor
        ]
        regressed = not is_new and (delta < floor or bool(criterion_regressions))

        summary.criterion_regressions += len(criterion_regressions)
        if is_new:
            summary.new += 1
        elif regressed:
            summary.regressed += 1
        elif delta > threshold + _FLOAT_TOLERANCE:
            summary.improved += 1
        else:
            summary.unchanged += 1

        prompts.append(
            PromptCompareResult(
                name=name,
                content_type=result.content_type,
                current_score=current_score,
                baseline_score=baseline_score,
                delta=delta,
                regressed=regressed,
                new_prompt=is_new,
                criteria_deltas=criteria_deltas,
            )
        )

    summary.total = len(prompts)
    return CompareResult(
        passed=summary.regressed == 0,
        prompts=prompts,
        summary=summary,
    )
