"""Judge package: the judge contract and its LLM-backed implementation."""

from __future__ import annotations

from sensei_eval.judge.base import (
    Judge,
    JudgeRubric,
    JudgeVerdict,
    Rubric,
    RubricExample,
    ScaleLevel,
)
from sensei_eval.judge.client import DEFAULT_JUDGE_MODEL, LLMJudge

__all__ = [
    "DEFAULT_JUDGE_MODEL",
    "Judge",
    "JudgeRubric",
    "JudgeVerdict",
    "LLMJudge",
    "Rubric",
    "RubricExample",
    "ScaleLevel",
]
