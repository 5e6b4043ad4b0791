"""Judge prompt templates.

Builds the fixed calibration system prompt and the per-call user prompt
from either a structured rubric or a free-text assertion.
"""

from __future__ import annotations

from sensei_eval.judge.base import JudgeRubric, Rubric

JUDGE_SYSTEM_PROMPT = """You are an expert evaluator of educational content. You score content against a specific rubric criterion.

Scoring calibration:
- 1/5: Fundamentally broken or missing
- 2/5: Present but poor quality, major issues
- 3/5: Competent and functional. This is the baseline for acceptable content
- 4/5: Strong quality, minor issues only
- 5/5: Exceptional. Reserve this for truly outstanding content

Do NOT inflate scores. A 3/5 is a positive assessment meaning "this works well." Most good content should score 3 or 4.

You MUST respond with ONLY a JSON object in this exact format, no other text:
{"score": <number>, "reasoning": "<brief explanation>", "suggestions": ["<actionable suggestion>", ...]}

For scores of 4-5, return an empty suggestions array. For scores of 1-3, provide 1-3 specific, actionable suggestions for improvement."""

ASSERTION_SCALE = """1 - Strongly disagree: The content clearly fails this assertion
2 - Disagree: The content mostly fails this assertion
3 - Neutral: The content partially meets this assertion
4 - Agree: The content mostly meets this assertion
5 - Strongly agree: The content clearly meets this assertion"""

_REPLY_INSTRUCTION = (
    'Respond with ONLY a JSON object: {"score": <number>, "reasoning": '
    '"<brief explanation>", "suggestions": ["<actionable suggestion>", ...]}'
)


def build_scale_block(rubric: JudgeRubric) -> str:
    return "\n".join(
        f"{level.score} - {level.label}: {level.description}" for level in rubric.scale
    )


def build_examples_block(rubric: JudgeRubric) -> str:
    """Render calibration examples, or an empty string when there are none."""
    if not rubric.examples:
        return ""
    examples = [
        f'### Example (Score: {ex.score}/5)\nContent: "{ex.content}"\nReasoning: "{ex.reasoning}"'
        for ex in rubric.examples
    ]
    return "\n\n".join(["## Examples", *examples])


def build_user_prompt(content: str, rubric: Rubric, context: str | None = None) -> str:
    """Build the user prompt for one judge call.

    Args:
        content: The content being scored.
        rubric: Structured rubric or free-text assertion.
        context: Optional additional context block.

    Returns:
        Prompt text; empty sections are omitted.
    """
    if isinstance(rubric, str):
        sections = [
            "## Assertion to Evaluate",
            rubric,
            "",
            "## Scoring Scale",
            ASSERTION_SCALE,
            "",
        ]
        target = "assertion"
    else:
        sections = [
            f"## Criterion: {rubric.criterion}",
            rubric.description,
            "",
            "## Scoring Scale",
            build_scale_block(rubric),
            "",
            build_examples_block(rubric),
        ]
        target = "criterion"

    if context:
        sections.append(f"## Additional Context\n{context}\n")

    sections.extend([
        "## Content to Evaluate",
        content,
        "",
        f"Score this content on the {target} above. {_REPLY_INSTRUCTION}",
    ])

    return "\n".join(s for s in sections if s)
