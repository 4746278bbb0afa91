"""Application entrypoint."""

from __future__ import annotations

import asyncio

import httpx
from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession

from clothes_finder.bot.middlewares import SearchSessionMiddleware
from clothes_finder.bot.routers import setup_routers
from clothes_finder.config import get_settings
from clothes_finder.logging import configure_logging, logger
from clothes_finder.services.search import SearchClient
from clothes_finder.services.session import SessionRegistry


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    session = (
        AiohttpSession(proxy=settings.telegram_proxy) if settings.telegram_proxy else None
    )
    bot = Bot(token=settings.telegram_token.get_secret_value(), session=session)
    dp = Dispatcher()
    dp.include_router(setup_routers())

    registry = SessionRegistry(max_sessions=settings.max_sessions)
    dp.message.middleware(SearchSessionMiddleware(registry))

    async with httpx.AsyncClient(timeout=settings.search.timeout_seconds) as http_client:
        search_client = SearchClient(http_client, settings=settings.search)
        logger.info(
            "bot_starting",
            environment=settings.environment,
            search_url=search_client.url,
        )
        await dp.start_polling(bot, search_client=search_client)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
