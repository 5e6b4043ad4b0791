"""Provider adapters used by the LLM judge.

Re-exports the BaseAdapter ABC, its dataclasses and the registry. The
concrete adapters import their SDKs lazily and are resolved by name
through get_adapter().
"""

from sensei_eval.adapters.base import (
    AdapterConfig,
    AdapterTurnResult,
    BaseAdapter,
    Message,
    TokenUsage,
)
from sensei_eval.adapters.registry import API_KEY_ENV_VARS, get_adapter

__all__ = [
    "API_KEY_ENV_VARS",
    "AdapterConfig",
    "AdapterTurnResult",
    "BaseAdapter",
    "Message",
    "TokenUsage",
    "get_adapter",
]
