"""Judge ABC and rubric models.

A judge scores content against a rubric and explains itself. The
evaluation core only depends on this contract; the LLM-backed
implementation lives in sensei_eval.judge.client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Union

from pydantic import BaseModel, Field


class ScaleLevel(BaseModel):
    """One anchor point on a rubric's scoring scale."""

    model_config = {"frozen": True}

    score: int
    label: str
    description: str


class RubricExample(BaseModel):
    """A worked example shown to the judge for calibration."""

    model_config = {"frozen": True}

    content: str
    score: int
    reasoning: str


class JudgeRubric(BaseModel):
    """Structured scoring guide for a single criterion."""

    model_config = {"frozen": True}

    criterion: str
    description: str
    scale: list[ScaleLevel]
    examples: list[RubricExample] = Field(default_factory=list)


# A rubric is either a structured scale or a bare free-text assertion.
Rubric = Union[JudgeRubric, str]


class JudgeVerdict(BaseModel):
    """What a judge returns for one scoring call."""

    score: float
    reasoning: str
    suggestions: list[str] = Field(default_factory=list)


class Judge(ABC):
    """Abstract base class for judges.

    Implementations may fail for any reason (network, parsing); callers
    in the evaluation core let those errors propagate.
    """

    @abstractmethod
    async def score(
        self,
        content: str,
        rubric: Rubric,
        context: str | None = None,
    ) -> JudgeVerdict:
        """Score content against a rubric.

        Args:
            content: The text being evaluated.
            rubric: Structured rubric or free-text assertion.
            context: Optional extra context (expected topic, prior content).

        Returns:
            JudgeVerdict with the raw score, reasoning and suggestions.
        """
