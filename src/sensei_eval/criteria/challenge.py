"""LLM-judged criteria for coding challenges."""

from __future__ import annotations

from sensei_eval.evaluation.criterion import Criterion, judged_criterion
from sensei_eval.judge.base import JudgeRubric, ScaleLevel
from sensei_eval.models.input import EvalInput


def _difficulty_context(eval_input: EvalInput) -> str | None:
    if eval_input.difficulty:
        return f"Expected difficulty: {eval_input.difficulty}"
    return None


problem_clarity = judged_criterion(
    name="problem_clarity",
    description="Problem statement is unambiguous and complete",
    content_types=["challenge"],
    rubric=JudgeRubric(
        criterion="Problem Clarity",
        description=(
            "Is the problem statement unambiguous? Can the reader understand "
            "exactly what they need to build/solve?"
        ),
        scale=[
            ScaleLevel(score=1, label="Unclear", description="Vague or contradictory requirements, impossible to know what to build"),
            ScaleLevel(score=2, label="Ambiguous", description="General idea is clear but key details are missing or unclear"),
            ScaleLevel(score=3, label="Clear", description="Requirements are understandable, minor ambiguities acceptable"),
            ScaleLevel(score=4, label="Precise", description="Clear inputs, outputs, and constraints with examples"),
            ScaleLevel(score=5, label="Crystal clear", description="Unambiguous requirements with examples, edge cases noted, nothing left to guess"),
        ],
    ),
    weight=1.5,
)

difficulty_calibration = judged_criterion(
    name="difficulty_calibration",
    description="Challenge matches the expected difficulty level",
    content_types=["challenge"],
    rubric=JudgeRubric(
        criterion="Difficulty Calibration",
        description=(
            "Does the challenge match the expected difficulty level? Consider concept "
            "complexity, number of steps, edge cases, and expected time to solve."
        ),
        scale=[
            ScaleLevel(score=1, label="Way off", description="Trivial problem labeled hard, or impossible problem labeled easy"),
            ScaleLevel(score=2, label="Miscalibrated", description="Noticeably easier or harder than stated level"),
            ScaleLevel(score=3, label="Reasonable", description="Roughly matches the stated difficulty, minor miscalibration"),
            ScaleLevel(score=4, label="Well-calibrated", description="Difficulty matches expectations, appropriate scope"),
            ScaleLevel(score=5, label="Perfectly tuned", description="Exactly the right level of challenge for the stated difficulty"),
        ],
    ),
    context=_difficulty_context,
)

hint_quality = judged_criterion(
    name="hint_quality",
    description="Hints are progressive and helpful without spoiling the solution",
    content_types=["challenge"],
    rubric=JudgeRubric(
        criterion="Hint Quality",
        description=(
            "Are hints provided? Are they progressive (nudge, then more direct)? "
            "Do they help without giving away the answer?"
        ),
        scale=[
            ScaleLevel(score=1, label="No hints", description="No hints or guidance provided at all"),
            ScaleLevel(score=2, label="Weak hints", description="Hints exist but are too vague or give away the answer"),
            ScaleLevel(score=3, label="Adequate", description="Hints provide useful direction without spoiling the solution"),
            ScaleLevel(score=4, label="Good progression", description="Multiple hint levels from gentle nudge to more direct guidance"),
            ScaleLevel(score=5, label="Perfect scaffolding", description="Progressive hints that teach problem-solving strategy, not just the answer"),
        ],
    ),
)

testability = judged_criterion(
    name="testability",
    description="Solution is verifiable with clear expected outputs",
    content_types=["challenge"],
    rubric=JudgeRubric(
        criterion="Testability",
        description=(
            "Can the solution be verified? Are there clear expected outputs, "
            "test cases, or validation criteria?"
        ),
        scale=[
            ScaleLevel(score=1, label="Unverifiable", description="No way to know if a solution is correct"),
            ScaleLevel(score=2, label="Vaguely testable", description="General idea of correctness but no concrete checks"),
            ScaleLevel(score=3, label="Testable", description="Expected behavior is clear enough to verify manually"),
            ScaleLevel(score=4, label="Well-specified", description="Clear expected outputs or test cases provided"),
            ScaleLevel(score=5, label="Fully specified", description="Complete test cases with edge cases, ready to validate automatically"),
        ],
    ),
)

challenge: list[Criterion] = [
    problem_clarity,
    difficulty_calibration,
    hint_quality,
    testability,
]
