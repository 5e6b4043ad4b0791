"""LLM-judged criteria for lesson content."""

from __future__ import annotations

from sensei_eval.evaluation.criterion import Criterion, judged_criterion
from sensei_eval.judge.base import JudgeRubric, ScaleLevel
from sensei_eval.models.input import EvalInput


def _topic_context(eval_input: EvalInput) -> str | None:
    return f"Expected topic: {eval_input.topic}" if eval_input.topic else None


def _difficulty_context(eval_input: EvalInput) -> str | None:
    if eval_input.difficulty:
        return f"Expected difficulty level: {eval_input.difficulty}"
    return None


topic_accuracy = judged_criterion(
    name="topic_accuracy",
    description="Content accurately covers the stated topic",
    content_types=["lesson"],
    rubric=JudgeRubric(
        criterion="Topic Accuracy",
        description=(
            "Does the content accurately cover the stated topic? "
            "Is the information correct and relevant?"
        ),
        scale=[
            ScaleLevel(score=1, label="Off-topic", description="Content does not address the stated topic"),
            ScaleLevel(score=2, label="Tangential", description="Loosely related but misses core concepts"),
            ScaleLevel(score=3, label="Accurate", description="Covers the topic correctly with minor gaps"),
            ScaleLevel(score=4, label="Thorough", description="Comprehensive coverage, accurate details"),
            ScaleLevel(score=5, label="Expert-level", description="Deep, nuanced, no factual issues, adds genuine insight"),
        ],
    ),
    weight=1.5,
    context=_topic_context,
)

pedagogical_structure = judged_criterion(
    name="pedagogical_structure",
    description="Lesson follows intuition, examples, practice, then synthesis",
    content_types=["lesson"],
    rubric=JudgeRubric(
        criterion="Pedagogical Structure",
        description=(
            "Does the lesson follow good teaching structure? Look for: intuition building, "
            "then concrete examples, then hands-on practice, then synthesis/takeaways."
        ),
        scale=[
            ScaleLevel(score=1, label="No structure", description="Random facts dumped with no progression"),
            ScaleLevel(score=2, label="Weak structure", description="Some organization but missing key phases (e.g. no examples or no practice)"),
            ScaleLevel(score=3, label="Solid structure", description="Clear progression from concept to practice, covers main phases"),
            ScaleLevel(score=4, label="Strong pedagogy", description="Well-scaffolded with intuition, examples, practice, and synthesis"),
            ScaleLevel(score=5, label="Masterful", description="Perfect scaffolding, builds mental models, practice reinforces theory"),
        ],
    ),
    weight=1.5,
)

code_quality = judged_criterion(
    name="code_quality",
    description="Code examples are relevant, correct, and well-explained",
    content_types=["lesson"],
    rubric=JudgeRubric(
        criterion="Code Quality",
        description=(
            "Are the code examples relevant, likely to run correctly, and well-explained? "
            "Consider relevance to topic, correctness, comments/explanations, and practical applicability."
        ),
        scale=[
            ScaleLevel(score=1, label="Broken", description="Code has obvious errors or is irrelevant to the topic"),
            ScaleLevel(score=2, label="Weak", description="Code runs but is poorly explained or only loosely relevant"),
            ScaleLevel(score=3, label="Good", description="Relevant, likely correct code with adequate explanation"),
            ScaleLevel(score=4, label="Strong", description="Clean, well-commented code that directly reinforces the lesson"),
            ScaleLevel(score=5, label="Exemplary", description="Production-quality code, excellent comments, teaches through the code itself"),
        ],
    ),
)

progressive_difficulty = judged_criterion(
    name="progressive_difficulty",
    description="Content builds appropriately on prerequisites",
    content_types=["lesson"],
    rubric=JudgeRubric(
        criterion="Progressive Difficulty",
        description=(
            "Does the content build appropriately on prerequisites? "
            "Is the difficulty level well-calibrated for the stated level?"
        ),
        scale=[
            ScaleLevel(score=1, label="Mismatched", description="Far too easy or hard for the stated level, no scaffolding"),
            ScaleLevel(score=2, label="Poorly calibrated", description="Difficulty jumps around or assumes too much/little"),
            ScaleLevel(score=3, label="Appropriate", description="Matches stated difficulty, reasonable prerequisite assumptions"),
            ScaleLevel(score=4, label="Well-calibrated", description="Smooth difficulty curve, clear about prerequisites"),
            ScaleLevel(score=5, label="Perfect scaffolding", description="Masterfully builds from known to unknown at exactly the right pace"),
        ],
    ),
    context=_difficulty_context,
)

lesson: list[Criterion] = [
    topic_accuracy,
    pedagogical_structure,
    code_quality,
    progressive_difficulty,
]
