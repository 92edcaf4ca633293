"""Retry with exponential backoff and jitter."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from ponder.exceptions import TerminalProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]
RetryPredicate = Callable[[BaseException], bool]


@dataclass(frozen=True)
class BackoffConfig:
    """Retry budget and delay bounds.

    Attributes:
        max_retries: Retries after the first attempt (total attempts = max_retries + 1).
        base_delay: Delay before the first retry, in seconds (doubles per attempt).
        max_delay: Upper bound for any single delay, in seconds.
        jitter: Upper bound of the uniform random amount added to each delay, in seconds.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 8.0
    jitter: float = 1.0

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay < 0 or self.max_delay < 0 or self.jitter < 0:
            raise ValueError("Delays must be >= 0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


def is_retryable(error: BaseException) -> bool:
    """Default classifier: everything except terminal provider errors is retried."""
    return not isinstance(error, TerminalProviderError)


class BackoffPolicy:
    """Runs a fallible async operation, retrying failures with backoff.

    The delay before retry ``i`` (0-indexed) is
    ``min(base_delay * 2**i + uniform(0, jitter), max_delay)``. When the budget
    is spent the last error observed is re-raised.

    Example:
        policy = BackoffPolicy()
        vector = await policy.run(lambda: client.aembed(["hello"]))

        # Tests inject sleep/random to avoid real waiting
        policy = BackoffPolicy(sleep=fake_sleep, rand=lambda: 0.5)
    """

    def __init__(
        self,
        config: BackoffConfig | None = None,
        retryable: RetryPredicate = is_retryable,
        sleep: Sleep = asyncio.sleep,
        rand: Callable[[], float] = random.random,
    ) -> None:
        self.config = config or BackoffConfig()
        self._retryable = retryable
        self._sleep = sleep
        self._rand = rand

    def compute_delay(self, attempt: int, config: BackoffConfig | None = None) -> float:
        """Delay to wait after failed attempt ``attempt`` (0-indexed)."""
        config = config or self.config
        delay = config.base_delay * (2**attempt) + self._rand() * config.jitter
        return min(delay, config.max_delay)

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        config: BackoffConfig | None = None,
    ) -> T:
        """Run ``operation`` until it succeeds or the retry budget is spent.

        Args:
            operation: Zero-argument coroutine factory. It may run more than once.
            config: Overrides the policy's default config for this call.

        Returns:
            The first successful result.

        Raises:
            The last exception raised by ``operation``, or the first one the
            retry predicate classifies as terminal.
        """
        config = config or self.config

        for attempt in range(config.max_attempts):
            try:
                return await operation()
            except Exception as e:
                if attempt == config.max_attempts - 1 or not self._retryable(e):
                    raise
                delay = self.compute_delay(attempt, config)
                logger.debug(
                    "Attempt %d/%d failed (%s); retrying in %.2fs",
                    attempt + 1,
                    config.max_attempts,
                    e,
                    delay,
                )
                await self._sleep(delay)

        # max_attempts is always >= 1, so the loop either returns or raises
        raise AssertionError("unreachable")
