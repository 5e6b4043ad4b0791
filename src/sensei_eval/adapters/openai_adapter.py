"""OpenAI adapter for the LLM judge.

Sends Messages as a chat completion and returns the first choice's text.
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


class OpenAIAdapter(BaseAdapter):
    """Adapter for the OpenAI chat completion API.

    Uses a lazily created AsyncOpenAI client; without an explicit key it
    reads OPENAI_API_KEY from the environment.
    """

    def __init__(self, api_key: str | None = None) -> None:
        super().__init__(api_key)
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazily initialize and return the AsyncOpenAI client."""
        if self._client is None:
            from openai import AsyncOpenAI

            if self._api_key:
                self._client = AsyncOpenAI(api_key=self._api_key)
            else:
                self._client = AsyncOpenAI()
        return self._client

    async def send_turn(
        self,
        messages: list[Message],
        config: AdapterConfig,
    ) -> AdapterTurnResult:
        client = self._get_client()

        kwargs: dict[str, Any] = {
            "model": config.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if config.max_tokens is not None:
            kwargs["max_tokens"] = config.max_tokens
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        kwargs.update(config.extras)

        response = await client.chat.completions.create(**kwargs)
        choice = response.choices[0]

        return AdapterTurnResult(
            content=choice.message.content,
            usage=TokenUsage(
                input_tokens=response.usage.prompt_tokens,
                output_tokens=response.usage.completion_tokens,
            ),
            finish_reason=choice.finish_reason,
        )

    def provider_name(self) -> str:
        return "openai"
