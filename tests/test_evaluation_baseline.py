"""Tests for sensei_eval.evaluation.baseline -- recording and comparison."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from sensei_eval.evaluation.baseline import (
    compare_results,
    create_baseline,
    to_baseline_entry,
)
from sensei_eval.models.baseline import BASELINE_VERSION, BaselineEntry, BaselineFile
from sensei_eval.models.result import EvalFeedback, EvalResult, EvalScore

_WHEN = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def _make_result(overall: float, scores: dict[str, float] | None = None, content_type: str = "lesson") -> EvalResult:
    return EvalResult(
        overall_score=overall,
        passed=True,
        scores=[
            EvalScore(
                criterion=name,
                score=value,
                raw_score=value,
                max_score=1,
                passed=True,
                reasoning=f"{name} reasoning",
                suggestions=["keep going"],
            )
            for name, value in (scores or {}).items()
        ],
        feedback=EvalFeedback(),
        content_type=content_type,
        evaluated_at=_WHEN,
    )


def _make_baseline(entries: dict[str, tuple[float, dict[str, float]]]) -> BaselineFile:
    return BaselineFile(
        generated_at=_WHEN,
        mode="full",
        entries=[
            BaselineEntry(
                name=name,
                content_type="lesson",
                overall_score=overall,
                scores=scores,
                evaluated_at=_WHEN,
            )
            for name, (overall, scores) in entries.items()
        ],
    )


class TestToBaselineEntry:
    def test_flattens_scores(self):
        result = _make_result(0.8, {"format": 1.0, "depth": 0.6})
        entry = to_baseline_entry("intro", result)
        assert entry.name == "intro"
        assert entry.content_type == "lesson"
        assert entry.overall_score == 0.8
        assert entry.scores == {"format": 1.0, "depth": 0.6}
        assert entry.evaluated_at == _WHEN

    def test_drops_reasoning_and_suggestions(self):
        entry = to_baseline_entry("intro", _make_result(0.8, {"format": 1.0}))
        dumped = entry.model_dump()
        assert "reasoning" not in str(dumped)
        assert "suggestions" not in dumped


class TestCreateBaseline:
    def test_wraps_entries(self):
        entry = to_baseline_entry("intro", _make_result(0.8))
        baseline = create_baseline([entry], mode="quick")
        assert baseline.version == BASELINE_VERSION
        assert baseline.mode == "quick"
        assert baseline.entries == [entry]
        assert baseline.generated_at.tzinfo is not None


class TestCompareNewPrompts:
    def test_new_prompt_is_neutral(self):
        baseline = _make_baseline({})
        outcome = compare_results({"fresh": _make_result(0.1, {"a": 0.1})}, baseline)
        prompt = outcome.prompts[0]
        assert prompt.new_prompt is True
        assert prompt.baseline_score is None
        assert prompt.delta == 0.0
        assert prompt.regressed is False
        assert prompt.criteria_deltas == []
        assert outcome.summary.new == 1
        assert outcome.summary.regressed == 0
        assert outcome.summary.improved == 0
        assert outcome.passed is True

    def test_baseline_only_prompts_are_ignored(self):
        baseline = _make_baseline({"gone": (0.9, {}), "kept": (0.5, {})})
        outcome = compare_results({"kept": _make_result(0.5)}, baseline)
        assert [p.name for p in outcome.prompts] == ["kept"]
        assert outcome.summary.total == 1


class TestCompareThreshold:
    def test_drop_of_exactly_threshold_is_unchanged(self):
        baseline = _make_baseline({"p": (0.80, {})})
        outcome = compare_results({"p": _make_result(0.75)}, baseline, threshold=0.05)
        assert outcome.prompts[0].regressed is False
        assert outcome.summary.unchanged == 1
        assert outcome.passed is True

    def test_drop_just_beyond_threshold_regresses(self):
        baseline = _make_baseline({"p": (0.80, {})})
        outcome = compare_results({"p": _make_result(0.7499)}, baseline, threshold=0.05)
        assert outcome.prompts[0].regressed is True
        assert outcome.prompts[0].delta == pytest.approx(-0.0501)
        assert outcome.summary.regressed == 1
        assert outcome.passed is False

    def test_zero_threshold_any_drop_regresses(self):
        baseline = _make_baseline({"p": (0.8, {})})
        outcome = compare_results({"p": _make_result(0.79)}, baseline)
        assert outcome.prompts[0].regressed is True

    def test_improvement(self):
        baseline = _make_baseline({"p": (0.5, {})})
        outcome = compare_results({"p": _make_result(0.7)}, baseline, threshold=0.1)
        assert outcome.summary.improved == 1
        assert outcome.prompts[0].delta == pytest.approx(0.2)

    def test_rise_of_exactly_threshold_is_unchanged(self):
        baseline = _make_baseline({"p": (0.5, {})})
        outcome = compare_results({"p": _make_result(0.6)}, baseline, threshold=0.1)
        assert outcome.summary.improved == 0
        assert outcome.summary.unchanged == 1


class TestCompareCriteria:
    def test_criterion_only_regression(self):
        baseline = _make_baseline({"p": (0.75, {"a": 1.0, "b": 0.5})})
        current = _make_result(0.75, {"a": 0.5, "b": 1.0})
        outcome = compare_results({"p": current}, baseline, threshold=0.1)
        prompt = outcome.prompts[0]
        assert prompt.delta == pytest.approx(0.0)
        assert prompt.regressed is True
        assert outcome.summary.criterion_regressions == 1
        assert outcome.passed is False

    def test_baseline_only_criteria_never_regress(self):
        baseline = _make_baseline({"p": (0.8, {"format": 1.0, "engagement": 0.75})})
        current = _make_result(0.8, {"format": 1.0})
        outcome = compare_results({"p": current}, baseline)
        prompt = outcome.prompts[0]
        assert prompt.regressed is False
        engagement = next(d for d in prompt.criteria_deltas if d.criterion == "engagement")
        assert engagement.current == 0.0
        assert engagement.delta == pytest.approx(-0.75)
        assert outcome.summary.criterion_regressions == 0

    def test_deltas_cover_union_baseline_first(self):
        baseline = _make_baseline({"p": (0.5, {"a": 0.5, "b": 0.5})})
        current = _make_result(0.5, {"c": 1.0, "a": 0.5})
        outcome = compare_results({"p": current}, baseline)
        deltas = outcome.prompts[0].criteria_deltas
        assert [d.criterion for d in deltas] == ["a", "b", "c"]
        new_criterion = deltas[2]
        assert new_criterion.baseline == 0.0
        assert new_criterion.current == 1.0

    def test_counts_regressed_criteria_across_prompts(self):
        baseline = _make_baseline({
            "p1": (0.8, {"a": 0.8, "b": 0.8}),
            "p2": (0.8, {"a": 0.8}),
        })
        outcome = compare_results(
            {
                "p1": _make_result(0.2, {"a": 0.2, "b": 0.2}),
                "p2": _make_result(0.2, {"a": 0.2}),
            },
            baseline,
        )
        assert outcome.summary.regressed == 2
        assert outcome.summary.criterion_regressions == 3


class TestCompareSummary:
    def test_classification_counts(self):
        baseline = _make_baseline({
            "down": (0.9, {}),
            "up": (0.4, {}),
            "flat": (0.6, {}),
        })
        outcome = compare_results(
            {
                "down": _make_result(0.5),
                "up": _make_result(0.8),
                "flat": _make_result(0.6),
                "new": _make_result(0.3),
            },
            baseline,
        )
        summary = outcome.summary
        assert summary.total == 4
        assert (summary.regressed, summary.improved, summary.unchanged, summary.new) == (1, 1, 1, 1)
        assert outcome.passed is False
        assert [p.name for p in outcome.prompts] == ["down", "up", "flat", "new"]
