"""Bounded retry for multi-step setup actions.

``retry_until_passes`` re-runs an async action until it completes without
raising (and, optionally, its result satisfies a predicate). Delays follow a
schedule; the last delay repeats until the deadline. When the budget is
spent the last failure is surfaced, chained to a RetryExhaustedError.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Sequence, Tuple, Type, TypeVar

import anyio

from parabank_e2e.exceptions import RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Registration and account-opening setup: 1s, then 2s, within 10s
SETUP_INTERVALS: Tuple[float, ...] = (1.0, 2.0)
SETUP_TIMEOUT = 10.0

# Single clicks on slow-rendering buttons: 200ms, then 500ms, within 5s
CLICK_INTERVALS: Tuple[float, ...] = (0.2, 0.5)
CLICK_TIMEOUT = 5.0


class PredicateFailed(AssertionError):
    """The action completed but its result did not satisfy the predicate."""
    pass


async def retry_until_passes(
    action: Callable[[], Awaitable[T]],
    *,
    predicate: Optional[Callable[[T], bool]] = None,
    intervals: Sequence[float] = SETUP_INTERVALS,
    timeout: float = SETUP_TIMEOUT,
    max_attempts: Optional[int] = None,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    description: str = "action",
    user: Optional[str] = None,
) -> T:
    """Run ``action`` until it passes, sleeping per ``intervals`` between tries.

    Args:
        action: zero-argument coroutine function
        predicate: optional success check on the action's result
        intervals: delay schedule in seconds; the last value repeats
        timeout: total budget in seconds, measured from the first attempt
        max_attempts: optional hard cap on attempts
        retry_on: exception types that count as a failed attempt
        description: name used in logs and in the raised error
        user: optional user context for the raised error

    Raises:
        RetryExhaustedError: chained to the last failure
    """
    if not intervals:
        raise ValueError("intervals must contain at least one delay")

    deadline = anyio.current_time() + timeout
    attempt = 0
    last_error: BaseException | None = None

    while True:
        attempt += 1
        try:
            result = await action()
            if predicate is not None and not predicate(result):
                raise PredicateFailed(f"{description} returned {result!r}")
            if attempt > 1:
                logger.info("%s passed on attempt %d", description, attempt)
            return result
        except retry_on as exc:
            last_error = exc
            logger.warning("%s failed on attempt %d: %s", description, attempt, exc)

        if max_attempts is not None and attempt >= max_attempts:
            break
        delay = intervals[min(attempt - 1, len(intervals) - 1)]
        if anyio.current_time() + delay > deadline:
            break
        await anyio.sleep(delay)

    raise RetryExhaustedError(description, attempt, last_error, user=user) from last_error
