"""Result data models for evaluation outputs.

These models encode the evaluation output contract: the per-criterion
score, the derived feedback, and the aggregate result of one run.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class EvalScore(BaseModel):
    """Result of evaluating a single criterion against one input."""

    model_config = {"frozen": True}

    criterion: str
    score: float
    raw_score: float
    max_score: float
    passed: bool
    reasoning: str
    suggestions: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] | None = None


class FailedCriterion(BaseModel):
    """A criterion that did not pass, with what to do about it."""

    criterion: str
    reasoning: str
    suggestions: list[str] = Field(default_factory=list)


class EvalFeedback(BaseModel):
    """Actionable feedback derived from a run's scores."""

    failed_criteria: list[FailedCriterion] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class EvalResult(BaseModel):
    """Aggregate outcome of running every applicable criterion on one input.

    ``passed`` only reflects required criteria; optional criteria can
    fail without blocking it but still count toward ``overall_score``.
    """

    overall_score: float
    passed: bool
    scores: list[EvalScore] = Field(default_factory=list)
    feedback: EvalFeedback = Field(default_factory=EvalFeedback)
    content_type: str
    evaluated_at: datetime
