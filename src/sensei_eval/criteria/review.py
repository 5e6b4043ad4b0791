"""Criteria for learner progress reviews."""

from __future__ import annotations

from sensei_eval.evaluation.criterion import Criterion, judged_criterion, rule_criterion
from sensei_eval.judge.base import JudgeRubric, ScaleLevel
from sensei_eval.models.input import EvalInput
from sensei_eval.models.result import EvalScore

DEFAULT_REVIEW_MAX_CHARS = 2000


def _check_brevity(criterion: Criterion, eval_input: EvalInput) -> EvalScore:
    max_chars = eval_input.max_review_chars or DEFAULT_REVIEW_MAX_CHARS
    length = len(eval_input.content)
    passed = length <= max_chars
    score = 1.0 if passed else max(0.0, 1 - (length - max_chars) / max_chars)

    if passed:
        reasoning = f"Review is {length} chars, within {max_chars} char budget"
        suggestions = []
    else:
        reasoning = f"Review is {length} chars, exceeds {max_chars} char budget"
        suggestions = [
            f"Reduce by {length - max_chars} chars to fit within {max_chars} char budget"
        ]

    return EvalScore(
        criterion=criterion.name,
        score=score,
        raw_score=length,
        max_score=max_chars,
        passed=passed,
        reasoning=reasoning,
        suggestions=suggestions,
    )


brevity = rule_criterion(
    name="brevity",
    description="Review content is concise and under character budget",
    content_types=["review"],
    check=_check_brevity,
    weight=0.5,
)

actionability = judged_criterion(
    name="actionability",
    description="Review contains concrete next steps",
    content_types=["review"],
    rubric=JudgeRubric(
        criterion="Actionability",
        description=(
            "Does the review contain concrete, specific next steps the reader can take? "
            "Not vague encouragement but real actions."
        ),
        scale=[
            ScaleLevel(score=1, label="No actions", description="Pure commentary with no next steps"),
            ScaleLevel(score=2, label="Vague", description='Generic advice like "keep practicing" without specifics'),
            ScaleLevel(score=3, label="Some actions", description="Contains at least one concrete next step"),
            ScaleLevel(score=4, label="Actionable", description="Multiple specific, prioritized next steps"),
            ScaleLevel(score=5, label="Highly actionable", description="Clear roadmap with prioritized, specific, measurable actions"),
        ],
    ),
)

honesty = judged_criterion(
    name="honesty",
    description="Review honestly assesses gaps without sugarcoating",
    content_types=["review"],
    rubric=JudgeRubric(
        criterion="Honesty",
        description=(
            "Does the review honestly assess gaps and weaknesses? "
            "Does it avoid sugarcoating or false encouragement?"
        ),
        scale=[
            ScaleLevel(score=1, label="Dishonest", description="Pure cheerleading, ignores obvious gaps"),
            ScaleLevel(score=2, label="Sugarcoated", description="Acknowledges issues but softens them to the point of uselessness"),
            ScaleLevel(score=3, label="Balanced", description="Honest about strengths and weaknesses, constructive tone"),
            ScaleLevel(score=4, label="Direct", description="Clear-eyed assessment, names gaps specifically while remaining respectful"),
            ScaleLevel(score=5, label="Brutally honest", description="Unflinching but constructive, prioritizes gaps, no wasted praise"),
        ],
    ),
)

review: list[Criterion] = [brevity, actionability, honesty]
