"""Retry policy and async retry helper.

The policy classifies a failure into one of three actions:

    - TRANSIENT: network errors, timeouts, HTTP 408/5xx and unreadable bodies.
      Retried after an exponential backoff.
    - RATE_LIMITED: the server explicitly asked to wait (HTTP 429, MediaWiki
      ``maxlag``). Retried after the server-specified duration.
    - FATAL: anything else, including API errors such as an invalid
      continuation token. Re-raised immediately.

Both retryable actions share one bounded attempt budget. When it is spent
the last error is re-raised unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import aiohttp

from ..core.enums import RetryAction
from ..core.exceptions import RateLimitError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRANSIENT_STATUS_CODES = frozenset({408, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of classifying one failure.

    Attributes:
        action: What to do with the failure
        wait: Seconds to wait before retrying (None for FATAL)
    """

    action: RetryAction
    wait: float | None = None

    @property
    def retryable(self) -> bool:
        return self.action != RetryAction.FATAL


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with exponential backoff.

    Attributes:
        max_attempts: Total attempts per operation, including the first one
        base_delay: Backoff delay after the first transient failure (seconds)
        max_delay: Upper bound for transient backoff (seconds)
        backoff_factor: Multiplier applied per additional attempt
        max_rate_limit_wait: Upper bound for server-requested waits (seconds)
    """

    max_attempts: int = 4
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_factor: float = 2.0
    max_rate_limit_wait: float = 60.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0 or self.max_rate_limit_wait < 0:
            raise ValueError("Retry delays cannot be negative")

    @classmethod
    def no_retry(cls) -> RetryPolicy:
        """Policy that surfaces the first failure."""
        return cls(max_attempts=1)

    def backoff(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1-based)."""
        delay = self.base_delay * (self.backoff_factor ** max(attempt - 1, 0))
        return min(delay, self.max_delay)

    def classify(self, error: BaseException, attempt: int = 1) -> RetryDecision:
        """Classify ``error`` raised by attempt number ``attempt``."""
        if isinstance(error, RateLimitError):
            wait = min(max(float(error.retry_after), 0.0), self.max_rate_limit_wait)
            return RetryDecision(RetryAction.RATE_LIMITED, wait)
        if isinstance(error, TransportError):
            if error.status_code is None or error.status_code in _TRANSIENT_STATUS_CODES:
                return RetryDecision(RetryAction.TRANSIENT, self.backoff(attempt))
            return RetryDecision(RetryAction.FATAL)
        if isinstance(error, (aiohttp.ClientConnectionError, asyncio.TimeoutError)):
            return RetryDecision(RetryAction.TRANSIENT, self.backoff(attempt))
        return RetryDecision(RetryAction.FATAL)


OnRetry = Callable[[int, BaseException, RetryDecision], None]


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy | None = None,
    on_retry: OnRetry | None = None,
) -> T:
    """Run ``operation`` until it succeeds or the policy gives up.

    Args:
        operation: Zero-argument coroutine factory; called once per attempt
        policy: Retry policy (defaults to ``RetryPolicy()``)
        on_retry: Called with (attempt, error, decision) before each wait

    Returns:
        The result of the first successful attempt

    Raises:
        Exception: The last error, once it is fatal or the budget is spent
    """
    policy = policy or RetryPolicy()
    attempt = 0
    while True:
        attempt += 1
        try:
            return await operation()
        except Exception as e:
            decision = policy.classify(e, attempt)
            if not decision.retryable or attempt >= policy.max_attempts:
                raise
            if on_retry is not None:
                on_retry(attempt, e, decision)
            else:
                logger.debug(
                    "Retry #%d after %.2fs (%s): %s", attempt, decision.wait or 0.0, decision.action, e
                )
            await asyncio.sleep(decision.wait or 0.0)
