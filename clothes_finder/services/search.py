"""Client for the remote clothing search endpoint."""

from __future__ import annotations

from time import perf_counter
from typing import Any

import httpx

from clothes_finder.config import SearchApiSettings
from clothes_finder.domain.models import (
    ClothingItem,
    SearchFailure,
    SearchOutcome,
    SearchSuccess,
)
from clothes_finder.logging import logger
from clothes_finder.services.exceptions import (
    DecodeError,
    ProtocolError,
    SearchError,
    TransportError,
)
from clothes_finder.services.query import normalize_query

SEARCH_PATH = "/api/search"
FAILURE_PREFIX = "Search failed"


class SearchClient:
    """Performs one ``POST /api/search`` exchange per query.

    ``search`` raises typed ``SearchError``s; ``execute`` folds them into a
    ``SearchOutcome`` the UI can render without inspecting the cause. There is
    no retry and no timeout here: both belong to the injected ``httpx`` client.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: SearchApiSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or SearchApiSettings()

    @property
    def url(self) -> str:
        return self._settings.endpoint(SEARCH_PATH)

    async def search(self, query: str) -> list[Any]:
        try:
            response = await self._client.post(
                self.url,
                json={"request": query},
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as exc:
            raise TransportError(
                f"could not reach the search service ({exc.__class__.__name__}: {exc})"
            ) from exc

        if not response.is_success:
            raise ProtocolError(response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise DecodeError(f"invalid JSON in response ({exc})") from exc

        return data if isinstance(data, list) else []

    async def execute(self, query: str) -> SearchOutcome:
        query = normalize_query(query)
        started = perf_counter()
        logger.info("search_request_started", url=self.url, query=query)
        try:
            records = await self.search(query)
        except SearchError as exc:
            elapsed_ms = int((perf_counter() - started) * 1000)
            status_code = getattr(exc, "status_code", None)
            logger.warning(
                "search_request_failed",
                kind=exc.kind,
                status_code=status_code,
                error=exc.detail,
                elapsed_ms=elapsed_ms,
            )
            return SearchFailure(
                message=f"{FAILURE_PREFIX}: {exc.detail}",
                kind=exc.kind,
                status_code=status_code,
            )

        items = tuple(ClothingItem.from_record(record) for record in records)
        logger.info(
            "search_request_completed",
            item_count=len(items),
            elapsed_ms=int((perf_counter() - started) * 1000),
        )
        return SearchSuccess(items=items)


__all__ = ["FAILURE_PREFIX", "SEARCH_PATH", "SearchClient"]
