"""Middleware that injects the chat's SearchSession per update."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, TelegramObject

from clothes_finder.services.session import SessionRegistry


class SearchSessionMiddleware(BaseMiddleware):
    def __init__(self, registry: SessionRegistry) -> None:
        super().__init__()
        self.registry = registry

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        chat_id = self._extract_chat_id(event)
        data["session_registry"] = self.registry
        if chat_id is not None:
            data["search_session"] = self.registry.get(chat_id)
        return await handler(event, data)

    @staticmethod
    def _extract_chat_id(event: TelegramObject) -> int | None:
        if isinstance(event, Message):
            return event.chat.id
        chat = getattr(event, "chat", None)
        return getattr(chat, "id", None)
