"""Tests for the judge adapter registry (get_adapter)."""

from __future__ import annotations

import types
from unittest.mock import patch

import pytest

from sensei_eval.adapters.anthropic_adapter import AnthropicAdapter
from sensei_eval.adapters.base import AdapterTurnResult, BaseAdapter
from sensei_eval.adapters.openai_adapter import OpenAIAdapter
from sensei_eval.adapters.registry import API_KEY_ENV_VARS, get_adapter


class _StubAdapter(BaseAdapter):
    """A valid adapter for dotted-path loading tests."""

    async def send_turn(self, messages, config):
        return AdapterTurnResult(content="stub")


class _NotAnAdapter:
    pass


class TestGetAdapterBuiltin:
    def test_anthropic(self):
        adapter = get_adapter("anthropic")
        assert isinstance(adapter, AnthropicAdapter)
        assert adapter.provider_name() == "anthropic"

    def test_openai(self):
        adapter = get_adapter("openai")
        assert isinstance(adapter, OpenAIAdapter)
        assert adapter.provider_name() == "openai"

    def test_api_key_passed_through(self):
        adapter = get_adapter("anthropic", api_key="sk-test")
        assert adapter._api_key == "sk-test"

    def test_missing_module_gives_install_hint(self):
        with patch("importlib.import_module", side_effect=ImportError("No module named 'x'")):
            with pytest.raises(ImportError, match=r"pip install sensei-eval\[openai\]"):
                get_adapter("openai")

    def test_env_vars(self):
        assert API_KEY_ENV_VARS == {
            "anthropic": "ANTHROPIC_API_KEY",
            "openai": "OPENAI_API_KEY",
        }


class TestGetAdapterDottedPath:
    def test_custom_dotted_path(self):
        mock_module = types.ModuleType("my_project.judges")
        mock_module.StubAdapter = _StubAdapter  # type: ignore[attr-defined]

        with patch("importlib.import_module", return_value=mock_module):
            adapter = get_adapter("my_project.judges.StubAdapter", api_key="k")

        assert isinstance(adapter, _StubAdapter)
        assert adapter.provider_name() == "_StubAdapter"

    def test_missing_attribute(self):
        mock_module = types.ModuleType("my_project.judges")
        with patch("importlib.import_module", return_value=mock_module):
            with pytest.raises(ImportError, match="has no attribute 'Missing'"):
                get_adapter("my_project.judges.Missing")

    def test_not_subclass_raises_type_error(self):
        mock_module = types.ModuleType("my_project.judges")
        mock_module.NotAnAdapter = _NotAnAdapter  # type: ignore[attr-defined]
        with patch("importlib.import_module", return_value=mock_module):
            with pytest.raises(TypeError, match="not a subclass of BaseAdapter"):
                get_adapter("my_project.judges.NotAnAdapter")

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown adapter 'gemini'") as exc_info:
            get_adapter("gemini")
        assert "anthropic" in str(exc_info.value)
        assert "openai" in str(exc_info.value)
