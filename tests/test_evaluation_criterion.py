"""Tests for sensei_eval.evaluation.criterion."""

from __future__ import annotations

import pytest

from sensei_eval.errors import JudgeRequiredError
from sensei_eval.evaluation.criterion import (
    ALL_CONTENT_TYPES,
    Criterion,
    EvalMethod,
    judged_criterion,
    normalize_likert,
    rule_criterion,
)
from sensei_eval.judge.base import Judge, JudgeVerdict, Rubric
from sensei_eval.models.input import EvalInput
from sensei_eval.models.result import EvalScore


class RecordingJudge(Judge):
    """Judge that returns a fixed verdict and records its calls."""

    def __init__(self, score: float = 4, reasoning: str = "Solid", suggestions: list[str] | None = None):
        self._verdict = JudgeVerdict(score=score, reasoning=reasoning, suggestions=suggestions or [])
        self.calls: list[tuple[str, Rubric, str | None]] = []

    async def score(self, content: str, rubric: Rubric, context: str | None = None) -> JudgeVerdict:
        self.calls.append((content, rubric, context))
        return self._verdict


def _make_input(content: str = "# Title\n\nBody", content_type: str = "lesson", **kwargs) -> EvalInput:
    return EvalInput(content=content, content_type=content_type, **kwargs)


def _always(score: float):
    def check(criterion: Criterion, eval_input: EvalInput) -> EvalScore:
        return EvalScore(
            criterion=criterion.name,
            score=score,
            raw_score=score,
            max_score=1,
            passed=score >= criterion.threshold,
            reasoning=f"scored {score}",
        )

    return check


class TestCriterionConstruction:
    """Validation in Criterion.__post_init__."""

    def test_content_types_become_frozenset(self):
        c = rule_criterion("c", "d", ["lesson", "quiz"], _always(1.0))
        assert c.content_types == frozenset({"lesson", "quiz"})

    def test_wildcard_kept(self):
        c = rule_criterion("c", "d", ALL_CONTENT_TYPES, _always(1.0))
        assert c.content_types == "*"

    def test_bare_string_other_than_wildcard_rejected(self):
        with pytest.raises(ValueError, match="content_types"):
            rule_criterion("c", "d", "lesson", _always(1.0))

    def test_threshold_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="threshold"):
            rule_criterion("c", "d", ["lesson"], _always(1.0), threshold=1.5)

    def test_non_positive_weight_rejected(self):
        with pytest.raises(ValueError, match="weight"):
            rule_criterion("c", "d", ["lesson"], _always(1.0), weight=0)

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="name"):
            rule_criterion("", "d", ["lesson"], _always(1.0))

    def test_criterion_is_frozen(self):
        c = rule_criterion("c", "d", ["lesson"], _always(1.0))
        with pytest.raises(AttributeError):
            c.weight = 2.0  # type: ignore[misc]


class TestAppliesTo:
    """Content-type matching."""

    def test_wildcard_applies_to_anything(self):
        c = rule_criterion("c", "d", ALL_CONTENT_TYPES, _always(1.0))
        assert c.applies_to("lesson")
        assert c.applies_to("anything-else")

    def test_listed_type_matches(self):
        c = rule_criterion("c", "d", ["lesson", "challenge"], _always(1.0))
        assert c.applies_to("challenge")
        assert not c.applies_to("review")

    def test_match_is_case_sensitive(self):
        c = rule_criterion("c", "d", ["lesson"], _always(1.0))
        assert not c.applies_to("Lesson")


class TestRuleCriterion:
    """Deterministic criteria built from sync checks."""

    @pytest.mark.asyncio
    async def test_evaluate_runs_check(self):
        c = rule_criterion("c", "d", ["lesson"], _always(0.5), threshold=0.4)
        score = await c.evaluate(_make_input())
        assert score.criterion == "c"
        assert score.score == 0.5
        assert score.passed is True

    def test_method_is_deterministic(self):
        c = rule_criterion("c", "d", ["lesson"], _always(1.0))
        assert c.method is EvalMethod.deterministic
        assert c.requires_judge is False


class TestNormalizeLikert:
    """Mapping 1..5 judge scores onto [0, 1]."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(1, 0.0), (2, 0.25), (3, 0.5), (4, 0.75), (5, 1.0)],
    )
    def test_scale_points(self, raw, expected):
        assert normalize_likert(raw) == pytest.approx(expected)

    def test_out_of_range_clamped(self):
        assert normalize_likert(0) == 0.0
        assert normalize_likert(7) == 1.0


class TestJudgedCriterion:
    """LLM-judged criteria."""

    def test_requires_judge(self):
        c = judged_criterion("j", "d", ["lesson"], "Content is clear")
        assert c.method is EvalMethod.llm_judge
        assert c.requires_judge is True
        assert c.threshold == 0.5

    @pytest.mark.asyncio
    async def test_missing_judge_raises(self):
        c = judged_criterion("clarity", "d", ["lesson"], "Content is clear")
        with pytest.raises(JudgeRequiredError, match="clarity") as exc_info:
            await c.evaluate(_make_input())
        assert exc_info.value.criterion == "clarity"

    @pytest.mark.asyncio
    async def test_normalizes_judge_score(self):
        judge = RecordingJudge(score=4, reasoning="Clear", suggestions=["Add a diagram"])
        c = judged_criterion("clarity", "d", ["lesson"], "Content is clear")
        score = await c.evaluate(_make_input(), judge)
        assert score.score == pytest.approx(0.75)
        assert score.raw_score == 4
        assert score.max_score == 5
        assert score.passed is True
        assert score.reasoning == "Clear"
        assert score.suggestions == ["Add a diagram"]

    @pytest.mark.asyncio
    async def test_below_threshold_fails(self):
        judge = RecordingJudge(score=2)
        c = judged_criterion("clarity", "d", ["lesson"], "Content is clear", threshold=0.5)
        score = await c.evaluate(_make_input(), judge)
        assert score.score == pytest.approx(0.25)
        assert score.passed is False

    @pytest.mark.asyncio
    async def test_passes_content_rubric_and_context(self):
        judge = RecordingJudge()
        c = judged_criterion(
            "topic",
            "d",
            ["lesson"],
            "Covers the topic",
            context=lambda i: f"Expected topic: {i.topic}" if i.topic else None,
        )
        await c.evaluate(_make_input(content="# Closures", topic="closures"), judge)
        assert judge.calls == [("# Closures", "Covers the topic", "Expected topic: closures")]

    @pytest.mark.asyncio
    async def test_context_none_without_builder(self):
        judge = RecordingJudge()
        c = judged_criterion("j", "d", ["lesson"], "Anything")
        await c.evaluate(_make_input(), judge)
        assert judge.calls[0][2] is None
