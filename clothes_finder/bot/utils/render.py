"""Plain-text rendering of a search view for chat replies."""

from __future__ import annotations

from typing import Iterable

from clothes_finder.domain.models import ClothingItem
from clothes_finder.services.colors import classify
from clothes_finder.services.session import SearchView

# Telegram messages are limited to 4096 characters.
TELEGRAM_MESSAGE_LIMIT = 3900
EMPTY_FIELD = "-"

GUIDANCE_TEXT = (
    "\U0001f455 Start by searching for clothes! \U0001f457\n"
    'Try searching for "shirt", "jeans", "shoes", or any clothing item.'
)
LOADING_TEXT = "Searching for clothes..."
NO_RESULTS_TEXT = "No results found. Try a different search term."
QUERY_REQUIRED_TEXT = "Please enter a search term."
BUSY_TEXT = "Still searching, please wait for the current results."
CLEARED_TEXT = "Search cleared."


def _present(labels: tuple[str, ...]) -> list[str]:
    return [label for label in labels if label.strip()]


def format_colors(item: ClothingItem) -> str:
    labels = _present(item.colors)
    if not labels:
        return EMPTY_FIELD
    return ", ".join(f"{classify(label).swatch} {label}" for label in labels)


def format_sizes(item: ClothingItem) -> str:
    return ", ".join(_present(item.sizes)) or EMPTY_FIELD


def render_item(position: int, item: ClothingItem) -> str:
    lines = [
        f"{position}. {item.name or EMPTY_FIELD}",
        f"Type: {item.type or EMPTY_FIELD}",
        f"Brand: {item.brand or EMPTY_FIELD}",
        f"Available sizes: {format_sizes(item)}",
        f"Available colors: {format_colors(item)}",
    ]
    if item.description:
        lines.append(item.description)
    return "\n".join(lines)


def chunk_blocks(blocks: Iterable[str], limit: int = TELEGRAM_MESSAGE_LIMIT) -> list[str]:
    """Greedily pack blocks into messages no longer than ``limit``."""

    chunks: list[str] = []
    buffer = ""
    for block in blocks:
        if len(block) > limit:
            block = f"{block[: limit - 15].rstrip()}\n...[truncated]"
        candidate = f"{buffer}\n\n{block}" if buffer else block
        if len(candidate) > limit:
            chunks.append(buffer)
            buffer = block
        else:
            buffer = candidate
    if buffer:
        chunks.append(buffer)
    return chunks


def render_view(view: SearchView) -> list[str]:
    """Return the reply messages for ``view``; empty when nothing is shown."""

    if view.show_loading:
        return [LOADING_TEXT]
    if view.show_error:
        return [view.error_message or ""]
    if view.show_no_results:
        return [NO_RESULTS_TEXT]
    if view.show_results:
        header = f"Found {len(view.items)} item(s):"
        blocks = [render_item(position, item) for position, item in enumerate(view.items, 1)]
        return chunk_blocks([header, *blocks])
    if view.show_guidance:
        return [GUIDANCE_TEXT]
    return []


__all__ = [
    "BUSY_TEXT",
    "CLEARED_TEXT",
    "GUIDANCE_TEXT",
    "LOADING_TEXT",
    "NO_RESULTS_TEXT",
    "QUERY_REQUIRED_TEXT",
    "TELEGRAM_MESSAGE_LIMIT",
    "chunk_blocks",
    "format_colors",
    "format_sizes",
    "render_item",
    "render_view",
]
