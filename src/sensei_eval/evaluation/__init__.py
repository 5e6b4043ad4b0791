"""Evaluation package: criterion contract, runner, and baseline comparison.

Provides the Criterion abstraction and its builders, the deterministic
transform/assertion library, the EvalRunner that selects, executes and
aggregates criteria, and baseline recording/comparison.
"""

from __future__ import annotations

from sensei_eval.evaluation.baseline import (
    compare_results,
    create_baseline,
    to_baseline_entry,
)
from sensei_eval.evaluation.criterion import (
    ALL_CONTENT_TYPES,
    Criterion,
    EvalMethod,
    judged_criterion,
    rule_criterion,
)
from sensei_eval.evaluation.factory import create_criterion
from sensei_eval.evaluation.runner import (
    STRENGTH_THRESHOLD,
    EvalRunner,
    build_feedback,
    compute_overall_score,
)

__all__ = [
    "ALL_CONTENT_TYPES",
    "Criterion",
    "EvalMethod",
    "EvalRunner",
    "STRENGTH_THRESHOLD",
    "build_feedback",
    "compare_results",
    "compute_overall_score",
    "create_baseline",
    "create_criterion",
    "judged_criterion",
    "rule_criterion",
    "to_baseline_entry",
]
