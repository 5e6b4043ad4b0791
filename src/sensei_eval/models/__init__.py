"""sensei-eval data models - re-exports all public model classes."""

from sensei_eval.models.baseline import (
    BASELINE_VERSION,
    BaselineEntry,
    BaselineFile,
    CompareResult,
    CompareSummary,
    CriterionDelta,
    PromptCompareResult,
)
from sensei_eval.models.config import EvalConfig, JudgeConfig, PromptEntry
from sensei_eval.models.input import EvalInput, LengthLimits
from sensei_eval.models.result import (
    EvalFeedback,
    EvalResult,
    EvalScore,
    FailedCriterion,
)

__all__ = [
    "BASELINE_VERSION",
    "BaselineEntry",
    "BaselineFile",
    "CompareResult",
    "CompareSummary",
    "CriterionDelta",
    "EvalConfig",
    "EvalFeedback",
    "EvalInput",
    "EvalResult",
    "EvalScore",
    "FailedCriterion",
    "JudgeConfig",
    "LengthLimits",
    "PromptCompareResult",
    "PromptEntry",
]
