"""Anthropic adapter for the LLM judge.

Converts Messages to the Anthropic messages format and collects the
text blocks of the reply into an AdapterTurnResult.
"""

from __future__ import annotations

from typing import Any

from sensei_eval.adapters.base import (
    AdapterConfig,
    AdapterTurnResult,
    BaseAdapter,
    Message,
    TokenUsage,
)

DEFAULT_MAX_TOKENS = 1024


class AnthropicAdapter(BaseAdapter):
    """Adapter for the Anthropic messages API.

    Uses a lazily created AsyncAnthropic client; without an explicit
    key it reads ANTHROPIC_API_KEY from the environment.
    """

    def __init__(self, api_key: str | None = None) -> None:
        super().__init__(api_key)
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazily initialize and return the AsyncAnthropic client."""
        if self._client is None:
            from anthropic import AsyncAnthropic

            if self._api_key:
                self._client = AsyncAnthropic(api_key=self._api_key)
            else:
                self._client = AsyncAnthropic()
        return self._client

    @staticmethod
    def _split_system(messages: list[Message]) -> tuple[str | None, list[dict[str, Any]]]:
        """Anthropic takes the system prompt as a separate parameter."""
        system_prompt: str | None = None
        remaining: list[dict[str, Any]] = []
        for msg in messages:
            if msg.role == "system":
                system_prompt = msg.content
            else:
                remaining.append({"role": msg.role, "content": msg.content})
        return system_prompt, remaining

    async def send_turn(
        self,
        messages: list[Message],
        config: AdapterConfig,
    ) -> AdapterTurnResult:
        client = self._get_client()
        system_prompt, converted = self._split_system(messages)

        kwargs: dict[str, Any] = {
            "model": config.model,
            "messages": converted,
            "max_tokens": config.max_tokens if config.max_tokens is not None else DEFAULT_MAX_TOKENS,
        }
        if system_prompt is not None:
            kwargs["system"] = system_prompt
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        kwargs.update(config.extras)

        response = await client.messages.create(**kwargs)

        text_parts = [block.text for block in response.content if block.type == "text"]

        return AdapterTurnResult(
            content="\n".join(text_parts) if text_parts else None,
            usage=TokenUsage(
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
            ),
            finish_reason=response.stop_reason,
        )

    def provider_name(self) -> str:
        return "anthropic"
