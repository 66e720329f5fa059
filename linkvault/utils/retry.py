"""Retry utilities with jittered exponential backoff."""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from linkvault.constants import Defaults

T = TypeVar('T')


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for retry attempts."""

    total: int = Defaults.RETRY_TOTAL  # number of retries (not counting the first attempt)
    base: float = Defaults.RETRY_BASE  # base backoff seconds
    cap: float = Defaults.RETRY_CAP  # max backoff seconds
    jitter: bool = True  # add full jitter if True

    def backoff(self, attempt: int) -> float:
        """Seconds to sleep before retry number `attempt` (0-based)"""
        delay = min(self.cap, self.base * (2**attempt))
        if self.jitter:
            delay = random.uniform(0, delay)  # noqa: S311
        return delay


def call_with_retry(
    fn: Callable[[], T],
    *,
    policy: RetryPolicy,
    retry_on: Callable[[Exception], bool],
    deadline: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """Call a function, retrying with backoff until success or budget exhausted.

    Args:
        fn: Zero-arg function to execute.
        policy: RetryPolicy defining count/backoff.
        retry_on: Predicate that returns True when an exception is worth retrying.
        deadline: Optional point on the `clock` timeline after which no retry is started.
        sleep: Function used to wait between attempts.
        clock: Monotonic clock the deadline is measured against.

    Returns:
        The return value of ``fn`` if successful.

    Raises:
        The last exception if it isn't retryable, the retry budget is
        exhausted, or waiting for the next attempt would cross the deadline.
    """
    attempt = 0
    while True:
        try:
            return fn()
        except Exception as exc:
            if attempt >= policy.total or not retry_on(exc):
                raise
            backoff = policy.backoff(attempt)
            if deadline is not None and clock() + backoff >= deadline:
                raise
        sleep(backoff)
        attempt += 1
