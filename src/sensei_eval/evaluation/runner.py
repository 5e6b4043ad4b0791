"""EvalRunner: selects, executes and aggregates criteria for one input.

The runner holds a fixed criterion catalog and an optional judge. Full
evaluation runs deterministic criteria and then judged criteria, each
subset fanned out concurrently; quick checks run the deterministic
subset only and never touch the judge. Both paths share the weighted
aggregation and feedback construction below.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sensei_eval.errors import JudgeRequiredError
from sensei_eval.evaluation.criterion import Criterion, EvalMethod
from sensei_eval.models.input import EvalInput
from sensei_eval.models.result import (
    EvalFeedback,
    EvalResult,
    EvalScore,
    FailedCriterion,
)

if TYPE_CHECKING:
    from sensei_eval.judge.base import Judge

logger = logging.getLogger(__name__)

# Scores at or above this count as strengths, whatever the criterion threshold.
STRENGTH_THRESHOLD = 0.75


def compute_overall_score(
    scores: Sequence[EvalScore],
    weights: Mapping[str, float],
) -> float:
    """Weighted mean of scores; 0.0 when there is nothing to weigh.

    Scores whose criterion is missing from ``weights`` count with weight 1.
    """
    total_weight = 0.0
    weighted_sum = 0.0
    for s in scores:
        weight = weights.get(s.criterion, 1.0)
        weighted_sum += s.score * weight
        total_weight += weight

    if total_weight == 0:
        return 0.0
    return weighted_sum / total_weight


def build_feedback(
    scores: Sequence[EvalScore],
    weights: Mapping[str, float],
) -> EvalFeedback:
    """Derive structured feedback from a run's scores.

    Suggestions come from every score that failed or fell below
    STRENGTH_THRESHOLD, heaviest criterion first; equal weights keep
    their original order.
    """
    failed = [
        FailedCriterion(
            criterion=s.criterion,
            reasoning=s.reasoning,
            suggestions=list(s.suggestions),
        )
        for s in scores
        if not s.passed
    ]
    strengths = [s.reasoning for s in scores if s.score >= STRENGTH_THRESHOLD]

    needs_work = [s for s in scores if not s.passed or s.score < STRENGTH_THRESHOLD]
    needs_work.sort(key=lambda s: weights.get(s.criterion, 1.0), reverse=True)
    suggestions = [suggestion for s in needs_work for suggestion in s.suggestions]

    return EvalFeedback(
        failed_criteria=failed,
        strengths=strengths,
        suggestions=suggestions,
    )


def build_result(
    scores: Sequence[EvalScore],
    applicable: Sequence[Criterion],
    content_type: str,
) -> EvalResult:
    """Aggregate scores into an EvalResult.

    Weights come from ``applicable`` only, never the full catalog. The
    result passes iff every score of a non-optional criterion passed.
    """
    weights = {c.name: c.weight for c in applicable}
    optional_names = {c.name for c in applicable if c.optional}

    overall_score = compute_overall_score(scores, weights)
    passed = all(s.passed for s in scores if s.criterion not in optional_names)

    return EvalResult(
        overall_score=overall_score,
        passed=passed,
        scores=list(scores),
        feedback=build_feedback(scores, weights),
        content_type=content_type,
        evaluated_at=datetime.now(timezone.utc),
    )


class EvalRunner:
    """Runs a fixed catalog of criteria against evaluation inputs.

    The catalog and judge are set at construction and never changed,
    so one runner can serve many concurrent evaluations.
    """

    def __init__(
        self,
        criteria: Sequence[Criterion],
        judge: Judge | None = None,
    ) -> None:
        self._criteria: tuple[Criterion, ...] = tuple(criteria)
        self._judge = judge

    @property
    def criteria(self) -> tuple[Criterion, ...]:
        return self._criteria

    @property
    def judge(self) -> Judge | None:
        return self._judge

    def get_criteria(self, content_type: str) -> list[Criterion]:
        """Return criteria applicable to a content type, in catalog order."""
        return [c for c in self._criteria if c.applies_to(content_type)]

    async def evaluate(self, eval_input: EvalInput) -> EvalResult:
        """Run full evaluation: deterministic, then llm_judge criteria.

        Raises:
            JudgeRequiredError: If an llm_judge criterion applies and the
                runner has no judge. Raised before anything runs.
        """
        applicable = self.get_criteria(eval_input.content_type)
        deterministic = [c for c in applicable if c.method is EvalMethod.deterministic]
        judged = [c for c in applicable if c.method is EvalMethod.llm_judge]

        if judged and self._judge is None:
            raise JudgeRequiredError(judged[0].name)

        logger.debug(
            "Evaluating %s content: %d deterministic, %d judged criteria",
            eval_input.content_type,
            len(deterministic),
            len(judged),
        )

        det_scores = await self._run_all(deterministic, eval_input, None)
        judge_scores = await self._run_all(judged, eval_input, self._judge)

        return build_result([*det_scores, *judge_scores], applicable, eval_input.content_type)

    async def quick_check(self, eval_input: EvalInput) -> EvalResult:
        """Run only deterministic criteria. Never calls the judge."""
        applicable = [
            c
            for c in self.get_criteria(eval_input.content_type)
            if c.method is EvalMethod.deterministic
        ]
        logger.debug(
            "Quick check of %s content: %d deterministic criteria",
            eval_input.content_type,
            len(applicable),
        )

        scores = await self._run_all(applicable, eval_input, None)
        return build_result(scores, applicable, eval_input.content_type)

    @staticmethod
    async def _run_all(
        criteria: Sequence[Criterion],
        eval_input: EvalInput,
        judge: Judge | None,
    ) -> list[EvalScore]:
        """Evaluate criteria concurrently and join.

        The first failure cancels the remaining criteria and propagates
        unwrapped.
        """
        if not criteria:
            return []
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(c.evaluate(eval_input, judge)) for c in criteria]
        except ExceptionGroup as eg:
            raise eg.exceptions[0] from None
        return [t.result() for t in tasks]
