"""Evaluation input model.

EvalInput is what a caller hands to the runner: one piece of content
plus the context the criteria need to judge it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class LengthLimits(BaseModel):
    """Inclusive character-count bounds for length checks."""

    model_config = {"extra": "forbid", "frozen": True}

    min: int = Field(ge=0)
    max: int = Field(gt=0)

    @model_validator(mode="after")
    def _check_order(self) -> LengthLimits:
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class EvalInput(BaseModel):
    """A single piece of generated content to evaluate.

    ``length_limits`` and ``max_review_chars`` are typed overrides read
    by the built-in length and brevity criteria. ``metadata`` is left
    open for custom criteria and is never read by the built-in ones.
    """

    model_config = {"extra": "forbid", "frozen": True}

    content: str
    content_type: str
    topic: str | None = None
    difficulty: str | None = None
    previous_content: list[str] = Field(default_factory=list)
    length_limits: LengthLimits | None = None
    max_review_chars: int | None = Field(default=None, gt=0)
    metadata: dict[str, Any] = Field(default_factory=dict)
