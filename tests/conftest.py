"""Shared pytest fixtures for search client and bot tests."""

from __future__ import annotations

from typing import Awaitable, Callable

import httpx
import pytest_asyncio

from clothes_finder.config import SearchApiSettings
from clothes_finder.services.search import SearchClient

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


@pytest_asyncio.fixture
async def make_client():
    """Build SearchClients backed by ``httpx.MockTransport``."""

    opened: list[httpx.AsyncClient] = []

    def factory(handler: Handler, base_url: str = "http://search.test") -> SearchClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        opened.append(http_client)
        return SearchClient(http_client, settings=SearchApiSettings(base_url=base_url))

    try:
        yield factory
    finally:
        for http_client in opened:
            await http_client.aclose()
