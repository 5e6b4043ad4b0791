"""Tests for sensei_eval.cli.shared -- catalog, runner and batch plumbing."""

from __future__ import annotations

import asyncio
import textwrap
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sensei_eval.adapters.base import AdapterTurnResult, BaseAdapter
from sensei_eval.cli.shared import (
    build_criteria,
    create_runner,
    evaluate_prompts,
    resolve_api_key,
)
from sensei_eval.criteria import default_criteria
from sensei_eval.errors import ConfigError
from sensei_eval.evaluation.runner import EvalRunner
from sensei_eval.judge.client import LLMJudge
from sensei_eval.models.config import EvalConfig, JudgeConfig, PromptEntry
from sensei_eval.models.input import EvalInput
from sensei_eval.models.result import EvalFeedback, EvalResult


class _StubAdapter(BaseAdapter):
    async def send_turn(self, messages, config):
        return AdapterTurnResult(content='{"score": 4, "reasoning": "ok"}')


def _make_config(**kwargs) -> EvalConfig:
    return EvalConfig(prompts=[], **kwargs)


def _make_prompt(name: str, content: str = "Some review text") -> PromptEntry:
    return PromptEntry(name=name, content_type="review", content=content)


def _make_result(score: float = 1.0, passed: bool = True) -> EvalResult:
    return EvalResult(
        overall_score=score,
        passed=passed,
        scores=[],
        feedback=EvalFeedback(),
        content_type="review",
        evaluated_at="2026-01-01T00:00:00Z",
    )


class TestBuildCriteria:
    def test_defaults_to_full_catalog(self):
        names = [c.name for c in build_criteria(_make_config())]
        assert names == [c.name for c in default_criteria()]

    def test_named_subset_in_given_order(self):
        criteria = build_criteria(_make_config(criteria=["brevity", "format_compliance"]))
        assert [c.name for c in criteria] == ["brevity", "format_compliance"]

    def test_unknown_name_is_config_error(self):
        with pytest.raises(ConfigError, match="Unknown criterion 'nope'"):
            build_criteria(_make_config(criteria=["nope"]))

    def test_duplicate_name_is_config_error(self):
        with pytest.raises(ConfigError, match="Duplicate criterion name 'brevity'"):
            build_criteria(_make_config(criteria=["brevity", "brevity"]))

    def test_custom_module_appended(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "house_rules.py").write_text(
            textwrap.dedent(
                """
                from sensei_eval import create_criterion
                from sensei_eval.evaluation.assertions import contains

                CRITERIA = [
                    create_criterion("mentions_python", "Says Python", ["lesson"], [contains("Python")]),
                ]
                """
            ),
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(str(tmp_path))

        criteria = build_criteria(
            _make_config(criteria=["brevity"], criteria_module="house_rules.CRITERIA")
        )
        assert [c.name for c in criteria] == ["brevity", "mentions_python"]

    def test_custom_module_clashing_with_builtin(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "clash_rules.py").write_text(
            "from sensei_eval.criteria.review import brevity\nCRITERIA = [brevity]\n",
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        with pytest.raises(ConfigError, match="Duplicate"):
            build_criteria(_make_config(criteria_module="clash_rules.CRITERIA"))

    def test_custom_module_not_importable(self):
        with pytest.raises(ConfigError, match="Cannot import criteria module"):
            build_criteria(_make_config(criteria_module="no_such_pkg_xyz.CRITERIA"))

    def test_custom_module_without_dots(self):
        with pytest.raises(ConfigError, match="dotted path"):
            build_criteria(_make_config(criteria_module="CRITERIA"))

    def test_custom_attribute_must_be_criteria(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "bad_rules.py").write_text("CRITERIA = ['not a criterion']\n", encoding="utf-8")
        monkeypatch.syspath_prepend(str(tmp_path))
        with pytest.raises(ConfigError, match="list of Criterion objects"):
            build_criteria(_make_config(criteria_module="bad_rules.CRITERIA"))


class TestResolveApiKey:
    def test_explicit_key_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")
        assert resolve_api_key("anthropic", "explicit") == "explicit"

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")
        assert resolve_api_key("openai", None) == "from-env"

    def test_missing(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        assert resolve_api_key("anthropic", None) is None

    def test_custom_adapter_has_no_env_var(self):
        assert resolve_api_key("my.module.Adapter", None) is None


class TestCreateRunner:
    def test_quick_mode_builds_no_judge(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with patch("sensei_eval.cli.shared.get_adapter") as mock_get:
            runner = create_runner(_make_config(), quick=True)
        assert runner.judge is None
        mock_get.assert_not_called()

    def test_full_mode_requires_key(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ConfigError, match="ANTHROPIC_API_KEY"):
            create_runner(_make_config(), quick=False)

    def test_full_mode_builds_llm_judge(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with patch("sensei_eval.cli.shared.get_adapter", return_value=_StubAdapter()) as mock_get:
            runner = create_runner(
                _make_config(judge=JudgeConfig(model="claude-config")),
                quick=False,
                model="claude-override",
                api_key="sk-cli",
            )
        mock_get.assert_called_once_with("anthropic", api_key="sk-cli")
        assert isinstance(runner.judge, LLMJudge)
        assert runner.judge.model == "claude-override"

    def test_config_model_used_without_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        with patch("sensei_eval.cli.shared.get_adapter", return_value=_StubAdapter()):
            runner = create_runner(_make_config(judge=JudgeConfig(model="claude-config")), quick=False)
        assert runner.judge.model == "claude-config"

    def test_judge_settings_passed_through(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        judge_config = JudgeConfig(temperature=0.4, extras={"top_p": 0.8})
        with patch("sensei_eval.cli.shared.get_adapter", return_value=_StubAdapter()):
            runner = create_runner(_make_config(judge=judge_config), quick=False)
        assert runner.judge._config.temperature == 0.4
        assert runner.judge._config.extras == {"top_p": 0.8}

    def test_adapter_errors_become_config_errors(self):
        with patch("sensei_eval.cli.shared.get_adapter", side_effect=ImportError("pip install it")):
            with pytest.raises(ConfigError, match="Adapter error: pip install it"):
                create_runner(_make_config(), quick=False, api_key="sk")


class TestEvaluatePrompts:
    @pytest.mark.asyncio
    async def test_results_keyed_in_config_order(self):
        runner = MagicMock(spec=EvalRunner)

        async def quick_check(eval_input: EvalInput) -> EvalResult:
            # later prompts finish first
            await asyncio.sleep(0.01 if eval_input.content == "first" else 0)
            return _make_result(score=0.5 if eval_input.content == "first" else 1.0)

        runner.quick_check.side_effect = quick_check
        prompts = [_make_prompt("a", "first"), _make_prompt("b", "second")]

        results = await evaluate_prompts(runner, prompts, quick=True, concurrency=2)

        assert list(results) == ["a", "b"]
        assert results["a"].overall_score == 0.5
        runner.evaluate.assert_not_called()

    @pytest.mark.asyncio
    async def test_full_mode_uses_evaluate(self):
        runner = MagicMock(spec=EvalRunner)

        async def evaluate(eval_input: EvalInput) -> EvalResult:
            return _make_result()

        runner.evaluate.side_effect = evaluate
        await evaluate_prompts(runner, [_make_prompt("a")], quick=False)
        runner.quick_check.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrency_bounded(self):
        runner = MagicMock(spec=EvalRunner)
        in_flight = 0
        peak = 0

        async def quick_check(eval_input: EvalInput) -> EvalResult:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return _make_result()

        runner.quick_check.side_effect = quick_check
        prompts = [_make_prompt(f"p{i}") for i in range(6)]
        await evaluate_prompts(runner, prompts, quick=True, concurrency=2)
        assert peak == 2

    @pytest.mark.asyncio
    async def test_error_aborts_batch(self):
        runner = MagicMock(spec=EvalRunner)

        async def quick_check(eval_input: EvalInput) -> EvalResult:
            raise RuntimeError("boom")

        runner.quick_check.side_effect = quick_check
        with pytest.raises(RuntimeError, match="boom"):
            await evaluate_prompts(runner, [_make_prompt("a")], quick=True)

    @pytest.mark.asyncio
    async def test_error_cancels_prompts_in_flight(self):
        runner = MagicMock(spec=EvalRunner)
        finished: list[str] = []

        async def quick_check(eval_input: EvalInput) -> EvalResult:
            if eval_input.content == "bad":
                raise RuntimeError("boom")
            await asyncio.sleep(0.05)
            finished.append(eval_input.content)
            return _make_result()

        runner.quick_check.side_effect = quick_check
        prompts = [_make_prompt("slow", content="slow"), _make_prompt("bad", content="bad")]
        with pytest.raises(RuntimeError, match="boom"):
            await evaluate_prompts(runner, prompts, quick=True)
        await asyncio.sleep(0.1)
        assert finished == []

    @pytest.mark.asyncio
    async def test_progress_lines(self):
        from io import StringIO

        from rich.console import Console

        runner = MagicMock(spec=EvalRunner)

        async def quick_check(eval_input: EvalInput) -> EvalResult:
            return _make_result(score=0.8766, passed=False)

        runner.quick_check.side_effect = quick_check
        buf = StringIO()
        await evaluate_prompts(
            runner, [_make_prompt("intro")], quick=True, progress=Console(file=buf, width=120)
        )
        assert "[1/1] FAIL intro (87.7%)" in buf.getvalue()
