"""Telegram handlers driving a chat's search session."""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from clothes_finder.bot.utils.render import (
    BUSY_TEXT,
    CLEARED_TEXT,
    GUIDANCE_TEXT,
    QUERY_REQUIRED_TEXT,
    render_view,
)
from clothes_finder.bot.utils.telegram import answer_chunks, answer_with_retry
from clothes_finder.logging import logger
from clothes_finder.services.exceptions import QueryValidationError
from clothes_finder.services.search import SearchClient
from clothes_finder.services.session import SearchSession, SessionRegistry

router = Router()

HELP_TEXT = (
    "Send any text to search the clothing catalog.\n"
    "/clear - clear the current search\n"
    "/help - show this message"
)


@router.message(CommandStart())
async def handle_start(
    message: Message,
    search_session: SearchSession | None = None,
    session_registry: SessionRegistry | None = None,
) -> None:
    if search_session is not None:
        if session_registry is not None and not search_session.is_loading:
            session_registry.discard(message.chat.id)
        else:
            search_session.reset()
    await answer_with_retry(message, GUIDANCE_TEXT, parse_mode=None)


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    await answer_with_retry(message, f"{GUIDANCE_TEXT}\n\n{HELP_TEXT}", parse_mode=None)


@router.message(Command("clear"))
async def handle_clear(message: Message, search_session: SearchSession | None = None) -> None:
    if search_session is None:
        return
    search_session.edit("")
    if search_session.is_loading:
        await answer_with_retry(message, BUSY_TEXT, parse_mode=None)
        return
    await answer_with_retry(message, f"{CLEARED_TEXT}\n\n{GUIDANCE_TEXT}", parse_mode=None)


@router.message(F.text)
async def handle_search(
    message: Message,
    search_client: SearchClient,
    search_session: SearchSession | None = None,
) -> None:
    if search_session is None:
        return

    if not search_session.view().submit_enabled:
        await answer_with_retry(message, BUSY_TEXT, parse_mode=None)
        return

    try:
        ticket = search_session.submit(message.text)
    except QueryValidationError:
        await answer_with_retry(message, QUERY_REQUIRED_TEXT, parse_mode=None)
        return

    try:
        await answer_chunks(message, render_view(search_session.view()), parse_mode=None)
        outcome = await search_client.execute(ticket.query)
    except BaseException as exc:
        search_session.abort(ticket, exc)
        raise

    if not search_session.resolve(ticket, outcome):
        return

    logger.info(
        "search_resolved",
        chat_id=message.chat.id,
        sequence=ticket.sequence,
        phase=type(search_session.state).__name__,
    )
    await answer_chunks(message, render_view(search_session.view()), parse_mode=None)


__all__ = ["router", "handle_start", "handle_help", "handle_clear", "handle_search"]
