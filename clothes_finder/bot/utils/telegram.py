"""Telegram sending helpers with retry support."""

from __future__ import annotations

from typing import Any, Iterable

from aiogram.exceptions import TelegramNetworkError, TelegramRetryAfter
from aiogram.types import Message

from clothes_finder.logging import logger
from clothes_finder.utils.retry import retry_async

TELEGRAM_SEND_MAX_ATTEMPTS = 3
TELEGRAM_SEND_BASE_DELAY = 0.3
TELEGRAM_RETRYABLE_ERRORS = (TelegramNetworkError, TelegramRetryAfter)


def retry_after_delay(exc: BaseException) -> float | None:
    """Honor the flood-control wait Telegram asks for."""

    if isinstance(exc, TelegramRetryAfter):
        return float(exc.retry_after)
    return None


async def answer_with_retry(message: Message, text: str, **kwargs: Any) -> Any:
    """Send a reply with retry/backoff."""

    async def _send():
        return await message.answer(text, **kwargs)

    return await retry_async(
        _send,
        max_attempts=TELEGRAM_SEND_MAX_ATTEMPTS,
        base_delay=TELEGRAM_SEND_BASE_DELAY,
        retry_on=TELEGRAM_RETRYABLE_ERRORS,
        delay_hint=retry_after_delay,
        logger=logger,
        operation_name="telegram_answer",
    )


async def answer_chunks(message: Message, chunks: Iterable[str], **kwargs: Any) -> None:
    for chunk in chunks:
        await answer_with_retry(message, chunk, **kwargs)


__all__ = ["answer_chunks", "answer_with_retry", "retry_after_delay"]
