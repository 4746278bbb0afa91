"""Input normalization applied before a search may start."""

from __future__ import annotations

from clothes_finder.services.exceptions import QueryValidationError


def is_blank(raw: str | None) -> bool:
    return raw is None or not raw.strip()


def normalize_query(raw: str | None) -> str:
    """Return the trimmed query or raise ``QueryValidationError``."""

    if is_blank(raw):
        raise QueryValidationError()
    return raw.strip()


__all__ = ["is_blank", "normalize_query"]
