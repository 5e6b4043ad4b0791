"""BaseAdapter ABC and the message/result dataclasses judges exchange.

Provider adapters (Anthropic, OpenAI, custom) subclass BaseAdapter and
implement send_turn(). The judge only ever sends a system prompt plus
one user message and reads back text, so the types here stay small.

These are plain dataclasses (not Pydantic); they never get persisted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TokenUsage:
    """Token usage counts from a single adapter turn."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass
class AdapterTurnResult:
    """Text reply from one send_turn() call, with usage and stop reason."""

    content: str | None
    usage: TokenUsage = field(default_factory=TokenUsage)
    finish_reason: str | None = None


@dataclass
class Message:
    """A single message in the conversation. Roles: system, user, assistant."""

    role: str
    content: str


@dataclass
class AdapterConfig:
    """Per-call generation settings."""

    model: str
    max_tokens: int | None = None
    temperature: float | None = None
    extras: dict[str, Any] = field(default_factory=dict)


class BaseAdapter(ABC):
    """Abstract base class for all provider adapters.

    Subclasses take an optional API key; when omitted, the provider SDK
    reads its usual environment variable.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key

    @abstractmethod
    async def send_turn(
        self,
        messages: list[Message],
        config: AdapterConfig,
    ) -> AdapterTurnResult:
        """Send a single turn to the model and return its reply.

        Args:
            messages: Conversation as a list of Message objects.
            config: Model and generation settings for this call.

        Returns:
            AdapterTurnResult with the model's text reply.
        """
        ...

    def provider_name(self) -> str:
        """Return the provider name. Defaults to the class name."""
        return type(self).__name__
