"""LLMJudge: a Judge backed by a provider adapter.

Builds the prompt, sends it through the adapter with retry on transient
errors, and parses the reply into a JudgeVerdict.
"""

from __future__ import annotations

import logging
from typing import Any

from sensei_eval.adapters.base import AdapterConfig, BaseAdapter, Message
from sensei_eval.errors import JudgeResponseError
from sensei_eval.judge.base import Judge, JudgeVerdict, Rubric
from sensei_eval.judge.extraction import parse_verdict
from sensei_eval.judge.prompt import JUDGE_SYSTEM_PROMPT, build_user_prompt
from sensei_eval.judge.retry import retry_with_backoff

logger = logging.getLogger(__name__)

DEFAULT_JUDGE_MODEL = "claude-sonnet-4-20250514"


class LLMJudge(Judge):
    """Scores content by asking an LLM to apply a rubric.

    Transient provider errors are retried with backoff; anything else,
    including an unparsable reply, propagates to the caller.
    """

    def __init__(
        self,
        adapter: BaseAdapter,
        model: str = DEFAULT_JUDGE_MODEL,
        max_tokens: int = 750,
        retries: int = 3,
        initial_delay: float = 1.0,
        temperature: float = 0.0,
        extras: dict[str, Any] | None = None,
    ) -> None:
        self._adapter = adapter
        self._config = AdapterConfig(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            extras=dict(extras or {}),
        )
        self._retries = retries
        self._initial_delay = initial_delay

    @property
    def model(self) -> str:
        return self._config.model

    async def score(
        self,
        content: str,
        rubric: Rubric,
        context: str | None = None,
    ) -> JudgeVerdict:
        messages = [
            Message(role="system", content=JUDGE_SYSTEM_PROMPT),
            Message(role="user", content=build_user_prompt(content, rubric, context)),
        ]

        result = await retry_with_backoff(
            lambda: self._adapter.send_turn(messages, self._config),
            max_retries=self._retries,
            base_delay=self._initial_delay,
        )
        logger.debug(
            "Judge reply from %s/%s: finish_reason=%s, %d tokens (%d in, %d out)",
            self._adapter.provider_name(),
            self.model,
            result.finish_reason,
            result.usage.total_tokens,
            result.usage.input_tokens,
            result.usage.output_tokens,
        )

        try:
            return parse_verdict(result.content)
        except JudgeResponseError:
            logger.debug("Unparsable judge reply from %s: %r", self.model, result.content)
            raise
