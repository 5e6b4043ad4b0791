"""Criterion definition and builders.

A Criterion is a named, weighted, thresholded check bound to the
content types it applies to. Deterministic criteria run pure rules;
llm_judge criteria delegate to a Judge and declare that they need one.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from sensei_eval.errors import JudgeRequiredError
from sensei_eval.models.input import EvalInput
from sensei_eval.models.result import EvalScore

if TYPE_CHECKING:
    from sensei_eval.judge.base import Judge, Rubric

# Wildcard for criteria that apply to every content type.
ALL_CONTENT_TYPES = "*"

CriterionEvaluator = Callable[
    ["Criterion", EvalInput, "Judge | None"], Awaitable[EvalScore]
]
RuleCheck = Callable[["Criterion", EvalInput], EvalScore]
ContextBuilder = Callable[[EvalInput], "str | None"]


class EvalMethod(str, Enum):
    """How a criterion produces its score."""

    deterministic = "deterministic"
    llm_judge = "llm_judge"


@dataclass(frozen=True)
class Criterion:
    """A single named check.

    ``content_types`` is either the ``ALL_CONTENT_TYPES`` wildcard or an
    iterable of content-type tags (stored as a frozenset). The evaluator
    receives the criterion itself so it can read its own threshold.
    """

    name: str
    description: str
    content_types: frozenset[str] | str
    method: EvalMethod
    threshold: float
    weight: float
    evaluator: CriterionEvaluator = field(repr=False, compare=False)
    optional: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Criterion name must not be empty")
        if isinstance(self.content_types, str):
            if self.content_types != ALL_CONTENT_TYPES:
                raise ValueError(
                    f"Criterion '{self.name}': content_types must be "
                    f"'{ALL_CONTENT_TYPES}' or a list of tags, got {self.content_types!r}"
                )
        else:
            object.__setattr__(self, "content_types", frozenset(self.content_types))
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(
                f"Criterion '{self.name}': threshold must be in [0, 1], got {self.threshold}"
            )
        if self.weight <= 0:
            raise ValueError(
                f"Criterion '{self.name}': weight must be positive, got {self.weight}"
            )

    @property
    def requires_judge(self) -> bool:
        return self.method is EvalMethod.llm_judge

    def applies_to(self, content_type: str) -> bool:
        """Exact, case-sensitive content-type match (or wildcard)."""
        if self.content_types == ALL_CONTENT_TYPES:
            return True
        return content_type in self.content_types

    async def evaluate(self, eval_input: EvalInput, judge: Judge | None = None) -> EvalScore:
        """Evaluate this criterion against one input.

        Raises:
            JudgeRequiredError: If this is an llm_judge criterion and no
                judge was given.
        """
        if self.requires_judge and judge is None:
            raise JudgeRequiredError(self.name)
        return await self.evaluator(self, eval_input, judge)


def rule_criterion(
    name: str,
    description: str,
    content_types: Iterable[str] | str,
    check: RuleCheck,
    threshold: float = 1.0,
    weight: float = 1.0,
    optional: bool = False,
) -> Criterion:
    """Wrap a synchronous rule function as a deterministic Criterion."""

    async def _evaluate(criterion: Criterion, eval_input: EvalInput, judge: Judge | None) -> EvalScore:
        return check(criterion, eval_input)

    return Criterion(
        name=name,
        description=description,
        content_types=content_types,
        method=EvalMethod.deterministic,
        threshold=threshold,
        weight=weight,
        evaluator=_evaluate,
        optional=optional,
    )


def normalize_likert(raw_score: float, max_score: float = 5.0) -> float:
    """Map a 1..max judge score onto [0, 1], clamping out-of-range replies."""
    normalized = (raw_score - 1.0) / (max_score - 1.0)
    return max(0.0, min(1.0, normalized))


def judged_criterion(
    name: str,
    description: str,
    content_types: Iterable[str] | str,
    rubric: Rubric,
    threshold: float = 0.5,
    weight: float = 1.0,
    optional: bool = False,
    context: ContextBuilder | None = None,
) -> Criterion:
    """Build an llm_judge Criterion that scores content on a 1-5 rubric.

    Args:
        name: Unique criterion identifier.
        description: One-line description.
        content_types: Tags this criterion applies to, or the wildcard.
        rubric: Structured rubric or free-text assertion for the judge.
        threshold: Minimum normalized score to pass.
        weight: Weight in the overall score.
        optional: If True, failing does not fail the result.
        context: Optional function producing judge context from the input.

    Returns:
        Criterion whose evaluator calls the judge and normalizes its score.
    """

    async def _evaluate(criterion: Criterion, eval_input: EvalInput, judge: Judge | None) -> EvalScore:
        if judge is None:
            raise JudgeRequiredError(criterion.name)
        ctx = context(eval_input) if context is not None else None
        verdict = await judge.score(eval_input.content, rubric, ctx)
        score = normalize_likert(verdict.score)
        return EvalScore(
            criterion=criterion.name,
            score=score,
            raw_score=verdict.score,
            max_score=5,
            passed=score >= criterion.threshold,
            reasoning=verdict.reasoning,
            suggestions=list(verdict.suggestions),
        )

    return Criterion(
        name=name,
        description=description,
        content_types=content_types,
        method=EvalMethod.llm_judge,
        threshold=threshold,
        weight=weight,
        evaluator=_evaluate,
        optional=optional,
    )
