"""Declarative builder for deterministic criteria.

Turns a pipeline of transforms plus a list of assertions into a
Criterion, so simple rules need no hand-written evaluate function.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Literal

from sensei_eval.evaluation.assertions import Assertion
from sensei_eval.evaluation.criterion import Criterion, rule_criterion
from sensei_eval.evaluation.transforms import Transform
from sensei_eval.models.input import EvalInput
from sensei_eval.models.result import EvalScore

NO_ASSERTIONS_REASONING = "No assertions to check"


def create_criterion(
    name: str,
    description: str,
    content_types: Iterable[str] | str,
    assertions: Sequence[Assertion],
    threshold: float = 1.0,
    weight: float = 1.0,
    optional: bool = False,
    transforms: Sequence[Transform] = (),
    mode: Literal["all", "any"] = "all",
) -> Criterion:
    """Build a deterministic Criterion from transforms and assertions.

    Content is passed through every transform in order, then each
    assertion runs on the result. In ``all`` mode the combined score is
    the weakest assertion's score; in ``any`` mode it is the strongest.
    With no assertions the criterion passes vacuously with score 1.

    Suggestions are the reasonings of assertions that failed on their
    own, even when the combined score still clears the threshold.

    Raises:
        ValueError: If ``mode`` is not ``all`` or ``any``.
    """
    if mode not in ("all", "any"):
        raise ValueError(f"mode must be 'all' or 'any', got {mode!r}")

    transforms = tuple(transforms)
    assertions = tuple(assertions)

    def _check(criterion: Criterion, eval_input: EvalInput) -> EvalScore:
        content = eval_input.content
        for transform in transforms:
            content = transform(content)

        results = [assertion(content) for assertion in assertions]

        if not results:
            score = 1.0
            reasoning = NO_ASSERTIONS_REASONING
        else:
            pick = max if mode == "any" else min
            score = pick(r.score for r in results)
            reasoning = "; ".join(r.reasoning for r in results)

        return EvalScore(
            criterion=criterion.name,
            score=score,
            raw_score=score,
            max_score=1,
            passed=score >= criterion.threshold,
            reasoning=reasoning,
            suggestions=[r.reasoning for r in results if not r.passed],
        )

    return rule_criterion(
        name=name,
        description=description,
        content_types=content_types,
        check=_check,
        threshold=threshold,
        weight=weight,
        optional=optional,
    )
