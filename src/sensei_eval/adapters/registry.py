"""Adapter registry for resolving judge adapter names to classes.

Supports builtin names ("anthropic", "openai") and custom dotted-path
imports (e.g. "my.module.MyAdapter").
"""

from __future__ import annotations

import importlib

from sensei_eval.adapters.base import BaseAdapter

# Builtin short names -> fully-qualified class paths, imported lazily so
# the provider SDK is only needed when that adapter is used.
BUILTIN_ADAPTERS: dict[str, str] = {
    "anthropic": "sensei_eval.adapters.anthropic_adapter.AnthropicAdapter",
    "openai": "sensei_eval.adapters.openai_adapter.OpenAIAdapter",
}

# Environment variable each builtin provider SDK reads its key from.
API_KEY_ENV_VARS: dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}

_INSTALL_HINTS: dict[str, str] = {
    "anthropic": "pip install sensei-eval[anthropic]",
    "openai": "pip install sensei-eval[openai]",
}


def get_adapter(name: str, api_key: str | None = None) -> BaseAdapter:
    """Resolve an adapter by name or dotted path and return an instance.

    Args:
        name: A builtin adapter name or a dotted path to a BaseAdapter
            subclass.
        api_key: Optional API key passed to the adapter constructor.

    Returns:
        An instance of the resolved adapter class.

    Raises:
        ValueError: If the name is not a builtin and has no dots.
        ImportError: If the module cannot be imported (e.g. missing SDK).
        TypeError: If the resolved class is not a BaseAdapter subclass.
    """
    if name in BUILTIN_ADAPTERS:
        dotted_path = BUILTIN_ADAPTERS[name]
    elif "." in name:
        dotted_path = name
    else:
        available = ", ".join(sorted(BUILTIN_ADAPTERS))
        raise ValueError(
            f"Unknown adapter '{name}'. Available builtin adapters: {available}. "
            f"For custom adapters, provide the full dotted path "
            f"(e.g., 'my.module.MyAdapter')."
        )

    module_path, _, class_name = dotted_path.rpartition(".")

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        if name in _INSTALL_HINTS:
            raise ImportError(
                f"Adapter '{name}' requires the {name} package. "
                f"Install it: {_INSTALL_HINTS[name]}"
            ) from exc
        raise

    try:
        cls = getattr(module, class_name)
    except AttributeError:
        raise ImportError(
            f"Module '{module_path}' has no attribute '{class_name}'."
        ) from None

    if not isinstance(cls, type) or not issubclass(cls, BaseAdapter):
        raise TypeError(
            f"'{dotted_path}' is not a subclass of BaseAdapter. Custom adapters "
            f"must inherit from sensei_eval.adapters.base.BaseAdapter."
        )

    return cls(api_key=api_key)
