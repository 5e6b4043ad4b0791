"""Baseline and comparison data models.

A baseline is a numeric snapshot of earlier results, committed next to
the prompts it covers. Comparison models describe how a new run moved
relative to that snapshot.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# Current format version for baseline files.
BASELINE_VERSION = 1


class BaselineEntry(BaseModel):
    """Flattened snapshot of one named prompt's result.

    Reasoning and suggestions are dropped; only numbers are kept.
    """

    name: str
    content_type: str
    overall_score: float
    scores: dict[str, float] = Field(default_factory=dict)
    evaluated_at: datetime


class BaselineFile(BaseModel):
    """A full baseline file as written to disk."""

    version: int = BASELINE_VERSION
    generated_at: datetime
    mode: Literal["full", "quick"]
    entries: list[BaselineEntry] = Field(default_factory=list)


class CriterionDelta(BaseModel):
    """Score movement of one criterion between baseline and current run."""

    criterion: str
    current: float
    baseline: float
    delta: float


class PromptCompareResult(BaseModel):
    """Comparison of one prompt's current result against its baseline."""

    name: str
    content_type: str
    current_score: float
    baseline_score: float | None = None
    delta: float = 0.0
    regressed: bool = False
    new_prompt: bool = False
    criteria_deltas: list[CriterionDelta] = Field(default_factory=list)


class CompareSummary(BaseModel):
    """Counts across every compared prompt."""

    total: int = 0
    regressed: int = 0
    improved: int = 0
    unchanged: int = 0
    new: int = 0
    criterion_regressions: int = 0


class CompareResult(BaseModel):
    """Result of comparing a run against a baseline. Passes iff nothing regressed."""

    passed: bool
    prompts: list[PromptCompareResult] = Field(default_factory=list)
    summary: CompareSummary = Field(default_factory=CompareSummary)
