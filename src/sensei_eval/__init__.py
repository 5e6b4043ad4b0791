"""sensei-eval: evaluate generated educational content against weighted criteria."""

from __future__ import annotations

__version__ = "0.1.0"

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
)
from sensei_eval.evaluation.factory import create_criterion
from sensei_eval.evaluation.runner import EvalRunner
from sensei_eval.judge.base import Judge, JudgeRubric, JudgeVerdict
from sensei_eval.models.input import EvalInput, LengthLimits
from sensei_eval.models.result import EvalFeedback, EvalResult, EvalScore

__all__ = [
    "ALL_CONTENT_TYPES",
    "Criterion",
    "EvalFeedback",
    "EvalInput",
    "EvalMethod",
    "EvalResult",
    "EvalRunner",
    "EvalScore",
    "Judge",
    "JudgeRubric",
    "JudgeVerdict",
    "LengthLimits",
    "__version__",
    "compare_results",
    "create_baseline",
    "create_criterion",
    "judged_criterion",
    "to_baseline_entry",
]
