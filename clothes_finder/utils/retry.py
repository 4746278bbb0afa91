"""Async retry helper used for chat delivery."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")
AsyncFactory = Callable[[], Awaitable[T]]


async def retry_async(
    operation: AsyncFactory[T],
    *,
    max_attempts: int = 3,
    base_delay: float = 0.5,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    delay_hint: Callable[[BaseException], float | None] | None = None,
    logger=None,
    operation_name: str = "operation",
) -> T:
    """Run ``operation`` up to ``max_attempts`` times with linear backoff.

    Only exceptions matching ``retry_on`` are retried; anything else, and the
    final failure, propagates to the caller. ``delay_hint`` may return a
    server-requested wait that overrides a shorter backoff.
    """

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except retry_on as exc:
            if attempt >= max_attempts:
                raise
            delay = base_delay * attempt
            hinted = delay_hint(exc) if delay_hint is not None else None
            if hinted is not None:
                delay = max(delay, hinted)
            if logger is not None:
                logger.warning(
                    "retrying_operation",
                    operation=operation_name,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay=delay,
                    error=str(exc),
                )
            await asyncio.sleep(delay)

    raise RuntimeError(f"{operation_name} failed after {max_attempts} attempts")


__all__ = ["retry_async"]
