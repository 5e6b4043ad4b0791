"""Transient error retry with exponential backoff and jitter.

Used by the LLM judge around provider calls. Handles timeout,
connection, and HTTP status-code errors that are likely transient.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Exception types considered transient (network-level issues)
TRANSIENT_EXCEPTIONS: tuple[type[Exception], ...] = (TimeoutError, ConnectionError)

# HTTP status codes considered transient (rate limit, server errors, overload)
TRANSIENT_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 529})


def is_transient(exc: Exception) -> bool:
    """Check if an exception represents a transient error.

    Matches known transient exception types, then the HTTP status
    attributes provider SDK exceptions commonly carry.
    """
    if isinstance(exc, TRANSIENT_EXCEPTIONS):
        return True

    status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    return status is not None and status in TRANSIENT_STATUS_CODES


async def retry_with_backoff(
    coro_factory: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
) -> T:
    """Await ``coro_factory()`` and retry on transient errors.

    Uses exponential backoff with full jitter. Non-transient errors, and
    the last transient one once retries are exhausted, are re-raised.

    Args:
        coro_factory: Callable that creates a new awaitable each call.
        max_retries: Retry attempts after the first call.
        base_delay: Initial backoff delay in seconds.
        max_delay: Cap on a single backoff delay in seconds.

    Returns:
        The awaited result.
    """
    for attempt in range(max_retries + 1):
        try:
            return await coro_factory()
        except Exception as exc:
            if attempt == max_retries or not is_transient(exc):
                raise
            delay = min(base_delay * (2 ** attempt), max_delay)
            jitter = random.uniform(0, delay)  # noqa: S311
            logger.warning(
                "Transient judge error (%s), retry %d/%d in %.2fs",
                type(exc).__name__,
                attempt + 1,
                max_retries,
                jitter,
            )
            await asyncio.sleep(jitter)

    raise RuntimeError("Retry loop exited unexpectedly")  # pragma: no cover
