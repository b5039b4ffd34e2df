from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

from lusefeed.errors import ProviderError


logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Delay slept before ``attempt`` (1-based); the first attempt never waits."""
    if attempt < 2:
        return 0.0
    return base_delay * 2 ** (attempt - 2)


def call_with_retry(
    operation: Callable[[int, float], T],
    *,
    attempts: int,
    base_delay: float,
    ceiling: float,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> tuple[T, int]:
    """Run ``operation(attempt, remaining_seconds)`` until it stops raising.

    Only ``ProviderError`` is retried. No attempt starts once the backoff
    would push past ``ceiling`` seconds; the last error is then re-raised.
    Returns the operation's result and the number of attempts used.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    started = clock()
    last_error: ProviderError | None = None
    for attempt in range(1, attempts + 1):
        delay = backoff_delay(attempt, base_delay)
        if attempt > 1:
            if clock() - started + delay >= ceiling:
                logger.debug("Retry budget of %.1fs spent after %d attempts", ceiling, attempt - 1)
                break
            sleep(delay)
        remaining = ceiling - (clock() - started)
        try:
            return operation(attempt, remaining), attempt
        except ProviderError as exc:
            last_error = exc
            logger.warning("Attempt %d/%d failed: %s", attempt, attempts, exc)

    raise last_error
