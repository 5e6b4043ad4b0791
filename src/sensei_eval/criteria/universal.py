"""Criteria that apply across content types."""

from __future__ import annotations

from sensei_eval.criteria.markdown import (
    has_code_block,
    has_headings,
    has_sections,
    has_unclosed_bold,
    has_unclosed_code_blocks,
    has_unclosed_italic,
)
from sensei_eval.evaluation.criterion import (
    ALL_CONTENT_TYPES,
    Criterion,
    EvalMethod,
    judged_criterion,
    normalize_likert,
    rule_criterion,
)
from sensei_eval.judge.base import Judge, JudgeRubric, ScaleLevel
from sensei_eval.models.input import EvalInput, LengthLimits
from sensei_eval.models.result import EvalScore

DEFAULT_LENGTH_LIMITS: dict[str, LengthLimits] = {
    "lesson": LengthLimits(min=500, max=5000),
    "challenge": LengthLimits(min=300, max=4000),
    "quiz": LengthLimits(min=200, max=3000),
    "review": LengthLimits(min=100, max=2000),
}
DEFAULT_LIMIT = LengthLimits(min=200, max=5000)


def _check_format(criterion: Criterion, eval_input: EvalInput) -> EvalScore:
    content = eval_input.content
    issues = []
    if has_unclosed_code_blocks(content):
        issues.append("unclosed code block")
    if has_unclosed_bold(content):
        issues.append("unclosed bold marker")
    if has_unclosed_italic(content):
        issues.append("unclosed italic marker")

    passed = not issues
    return EvalScore(
        criterion=criterion.name,
        score=1.0 if passed else 0.0,
        raw_score=1 if passed else 0,
        max_score=1,
        passed=passed,
        reasoning=(
            "All markdown formatting is properly closed"
            if passed
            else f"Formatting issues: {', '.join(issues)}"
        ),
        suggestions=[f"Close the {issue}" for issue in issues],
    )


def resolve_length_limits(eval_input: EvalInput) -> LengthLimits:
    """Explicit limits on the input win, then per-type defaults, then the fallback."""
    if eval_input.length_limits is not None:
        return eval_input.length_limits
    return DEFAULT_LENGTH_LIMITS.get(eval_input.content_type, DEFAULT_LIMIT)


def _check_length(criterion: Criterion, eval_input: EvalInput) -> EvalScore:
    limits = resolve_length_limits(eval_input)
    length = len(eval_input.content)
    passed = limits.min <= length <= limits.max

    score = 1.0
    suggestions = []
    if length < limits.min:
        score = max(0.0, length / limits.min)
        suggestions.append(
            f"Content is {limits.min - length} chars short of the minimum, add more detail"
        )
    elif length > limits.max:
        score = max(0.0, 1 - (length - limits.max) / limits.max)
        suggestions.append(
            f"Content is {length - limits.max} chars over the maximum, "
            f"trim to fit within {limits.max} chars"
        )

    verdict = "within" if passed else "outside"
    return EvalScore(
        criterion=criterion.name,
        score=score,
        raw_score=length,
        max_score=limits.max,
        passed=passed,
        reasoning=f"Content length {length} chars is {verdict} range [{limits.min}, {limits.max}]",
        suggestions=suggestions,
        metadata={"char_count": length, "min": limits.min, "max": limits.max},
    )


def _check_code_block(criterion: Criterion, eval_input: EvalInput) -> EvalScore:
    passed = has_code_block(eval_input.content)
    return EvalScore(
        criterion=criterion.name,
        score=1.0 if passed else 0.0,
        raw_score=1 if passed else 0,
        max_score=1,
        passed=passed,
        reasoning=(
            "Content contains at least one code block"
            if passed
            else "No code block found in content"
        ),
        suggestions=[] if passed else ["Add at least one fenced code block"],
    )


def _check_structure(criterion: Criterion, eval_input: EvalInput) -> EvalScore:
    headings = has_headings(eval_input.content)
    sections = has_sections(eval_input.content)

    if headings and sections:
        score = 1.0
        reasoning = "Content has headings and multiple sections"
    elif headings:
        score = 0.5
        reasoning = "Content has headings but lacks clear section structure"
    else:
        score = 0.0
        reasoning = "Content lacks markdown headings"

    suggestions = []
    if not headings:
        suggestions.append("Add markdown headings to organize the content")
    elif not sections:
        suggestions.append("Split into multiple sections with distinct headings")

    return EvalScore(
        criterion=criterion.name,
        score=score,
        raw_score=score,
        max_score=1,
        passed=score >= criterion.threshold,
        reasoning=reasoning,
        suggestions=suggestions,
    )


format_compliance = rule_criterion(
    name="format_compliance",
    description="No unclosed code blocks, bold, or italic markers",
    content_types=ALL_CONTENT_TYPES,
    check=_check_format,
)

length_compliance = rule_criterion(
    name="length_compliance",
    description="Content length within acceptable range for its type",
    content_types=ALL_CONTENT_TYPES,
    check=_check_length,
)

has_code_block_criterion = rule_criterion(
    name="has_code_block",
    description="Content includes at least one fenced code block",
    content_types=["lesson", "challenge"],
    check=_check_code_block,
    weight=0.5,
)

has_structure = rule_criterion(
    name="has_structure",
    description="Content has headings and multiple sections",
    content_types=["lesson", "challenge"],
    check=_check_structure,
    weight=0.5,
)

engagement = judged_criterion(
    name="engagement",
    description="Content has a hook, good pacing, and satisfying closure",
    content_types=ALL_CONTENT_TYPES,
    rubric=JudgeRubric(
        criterion="Engagement",
        description=(
            "Does the content hook the reader, maintain good pacing, "
            "and provide a satisfying closure?"
        ),
        scale=[
            ScaleLevel(score=1, label="Disengaging", description="Dry, monotone, no hook or closure"),
            ScaleLevel(score=2, label="Weak", description="Minimal effort at engagement, feels like a textbook dump"),
            ScaleLevel(score=3, label="Competent", description="Has a hook, reasonable pacing, wraps up adequately"),
            ScaleLevel(score=4, label="Engaging", description="Strong opening, good flow, motivating conclusion"),
            ScaleLevel(score=5, label="Exceptional", description="Immediately compelling, perfect pacing, leaves reader wanting more"),
        ],
    ),
    optional=True,
)

_REPETITION_RUBRIC = JudgeRubric(
    criterion="Repetition Avoidance",
    description=(
        "Does this content differ meaningfully from the previously delivered content? "
        "Consider topic overlap, structure reuse, and phrasing similarity."
    ),
    scale=[
        ScaleLevel(score=1, label="Duplicate", description="Nearly identical to previous content"),
        ScaleLevel(score=2, label="High overlap", description="Same topic and structure, minor wording changes"),
        ScaleLevel(score=3, label="Adequate variation", description="Different angle or examples, some overlap is fine"),
        ScaleLevel(score=4, label="Distinct", description="Clearly different topic or approach"),
        ScaleLevel(score=5, label="Fully novel", description="No meaningful overlap with previous content"),
    ],
)


def build_previous_content_context(previous: list[str]) -> str:
    blocks = "\n\n".join(
        f"### Previous #{i}\n{text}" for i, text in enumerate(previous, 1)
    )
    return f"## Previous Content\n{blocks}"


async def _evaluate_repetition(
    criterion: Criterion, eval_input: EvalInput, judge: Judge | None
) -> EvalScore:
    # Judge presence is enforced by Criterion.evaluate before we get here.
    if not eval_input.previous_content:
        return EvalScore(
            criterion=criterion.name,
            score=1.0,
            raw_score=5,
            max_score=5,
            passed=True,
            reasoning="No previous content to compare against",
        )

    context = build_previous_content_context(eval_input.previous_content)
    verdict = await judge.score(eval_input.content, _REPETITION_RUBRIC, context)
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


repetition_avoidance = Criterion(
    name="repetition_avoidance",
    description="Content differs meaningfully from previously delivered content",
    content_types=ALL_CONTENT_TYPES,
    method=EvalMethod.llm_judge,
    threshold=0.5,
    weight=1.0,
    evaluator=_evaluate_repetition,
    optional=True,
)

universal: list[Criterion] = [
    format_compliance,
    length_compliance,
    has_code_block_criterion,
    has_structure,
    engagement,
    repetition_avoidance,
]
