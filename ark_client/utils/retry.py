"""
Retry helpers with exponential backoff and jitter for the async transport.

Two jitter strategies from the AWS Architecture Blog are supported:
- full jitter  : sleep U(0, cap)
- equal jitter : sleep cap/2 + U(0, cap/2)

Example
-------
from ark_client.utils.retry import RetryPolicy, aretry_call

policy = RetryPolicy(retries=3, base=0.2, max_delay=2.0)
resp = await aretry_call(http.get, "api/node/status", policy=policy)

Notes
-----
- A policy with ``retries=0`` (the default) makes exactly one attempt.
- When attempts are exhausted the *last* exception is re-raised unchanged, so
  callers keep catching the transport's own error types.
- ``retry_if`` decides which exceptions are transient; by default none are.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal, Optional, TypeVar

__all__ = [
    "JitterMode",
    "RetryPolicy",
    "backoff_delay",
    "aretry_call",
]

T = TypeVar("T")

JitterMode = Literal["full", "equal"]


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry and how long to wait in between."""

    retries: int = 0
    base: float = 0.25
    max_delay: float = 3.0
    jitter: JitterMode = "full"

    def __post_init__(self) -> None:
        if self.retries < 0:
            raise ValueError("retries must be >= 0")
        if self.base < 0 or self.max_delay < 0:
            raise ValueError("backoff delays must be >= 0")

    @property
    def attempts(self) -> int:
        return self.retries + 1


def backoff_delay(attempt: int, policy: RetryPolicy) -> float:
    """
    Delay (seconds) to sleep after the given failed attempt (1-based).

    The cap doubles per attempt starting at ``policy.base`` and never exceeds
    ``policy.max_delay``.
    """
    attempt = max(attempt, 1)
    cap = min(policy.base * (2 ** (attempt - 1)), policy.max_delay)
    if policy.jitter == "full":
        delay = random.uniform(0.0, cap)
    elif policy.jitter == "equal":
        delay = (cap * 0.5) + random.uniform(0.0, cap * 0.5)
    else:
        raise ValueError(f"unknown jitter mode: {policy.jitter}")
    return max(0.0, float(delay))


async def aretry_call(
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    policy: RetryPolicy,
    retry_if: Optional[Callable[[BaseException], bool]] = None,
    on_retry: Optional[Callable[[int, BaseException, float], None]] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    **kwargs: Any,
) -> T:
    """
    Await ``fn(*args, **kwargs)``, retrying transient failures per ``policy``.

    ``on_retry`` receives (attempt, exception, sleep_seconds) before each sleep.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await fn(*args, **kwargs)
        except Exception as exc:
            if attempt >= policy.attempts or retry_if is None or not retry_if(exc):
                raise
            delay = backoff_delay(attempt, policy)
            if on_retry is not None:
                on_retry(attempt, exc, delay)
            await sleep(delay)
