"""Built-in criterion catalog.

Groups the universal, lesson, challenge and review criteria and
provides name lookup over the default catalog.
"""

from __future__ import annotations

from sensei_eval.criteria.challenge import challenge
from sensei_eval.criteria.lesson import lesson
from sensei_eval.criteria.review import review
from sensei_eval.criteria.universal import universal
from sensei_eval.evaluation.criterion import Criterion


def default_criteria() -> list[Criterion]:
    """Every built-in criterion, universal first, in registration order."""
    return [*universal, *lesson, *challenge, *review]


def get_criterion(name: str) -> Criterion:
    """Look up a built-in criterion by name.

    Raises:
        ValueError: If *name* is not a built-in criterion.
    """
    for criterion in default_criteria():
        if criterion.name == name:
            return criterion
    available = sorted(c.name for c in default_criteria())
    raise ValueError(
        f"Unknown criterion {name!r}. Available criteria: {available}"
    )


__all__ = [
    "challenge",
    "default_criteria",
    "get_criterion",
    "lesson",
    "review",
    "universal",
]
