"""Closed color-name lookup used to draw color swatches for result items."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ColorCategory(str, Enum):
    """Visual bucket for a color label.

    Values are the background classes used by the web front end so both
    renderers agree on the palette.
    """

    BLACK = "bg-black"
    WHITE = "bg-white"
    BLUE = "bg-blue-500"
    RED = "bg-red-500"
    GREEN = "bg-green-500"
    YELLOW = "bg-yellow-400"
    GRAY = "bg-gray-500"
    NAVY = "bg-blue-900"
    BEIGE = "bg-amber-100"
    BROWN = "bg-amber-800"
    PINK = "bg-pink-400"
    PURPLE = "bg-purple-500"
    ORANGE = "bg-orange-500"
    KHAKI = "bg-yellow-600"
    OLIVE = "bg-green-700"
    BURGUNDY = "bg-red-800"
    CREAM = "bg-yellow-50"
    CHARCOAL = "bg-gray-700"
    DENIM = "bg-blue-600"
    PLAID = "bg-gradient-to-r from-red-500 to-blue-500"
    FLORAL = "bg-gradient-to-r from-pink-300 to-purple-300"
    UNKNOWN = "bg-gray-300"

    @property
    def css_class(self) -> str:
        return self.value

    @property
    def is_pattern(self) -> bool:
        return self in _PATTERNS

    @property
    def swatch(self) -> str:
        return _SWATCHES[self]


_PATTERNS = frozenset({ColorCategory.PLAID, ColorCategory.FLORAL})

# Chat clients have no CSS, so each category also gets an emoji swatch.
# Pattern categories use two glyphs.
_SWATCHES: Mapping[ColorCategory, str] = MappingProxyType(
    {
        ColorCategory.BLACK: "⬛",
        ColorCategory.WHITE: "⬜",
        ColorCategory.BLUE: "\U0001f7e6",
        ColorCategory.RED: "\U0001f7e5",
        ColorCategory.GREEN: "\U0001f7e9",
        ColorCategory.YELLOW: "\U0001f7e8",
        ColorCategory.GRAY: "\U0001fa76",
        ColorCategory.NAVY: "\U0001f535",
        ColorCategory.BEIGE: "\U0001f90e",
        ColorCategory.BROWN: "\U0001f7eb",
        ColorCategory.PINK: "\U0001fa77",
        ColorCategory.PURPLE: "\U0001f7ea",
        ColorCategory.ORANGE: "\U0001f7e7",
        ColorCategory.KHAKI: "\U0001f7e1",
        ColorCategory.OLIVE: "\U0001f7e2",
        ColorCategory.BURGUNDY: "\U0001f534",
        ColorCategory.CREAM: "⚪",
        ColorCategory.CHARCOAL: "⚫",
        ColorCategory.DENIM: "\U0001f499",
        ColorCategory.PLAID: "\U0001f7e5\U0001f7e6",
        ColorCategory.FLORAL: "\U0001fa77\U0001f7ea",
        ColorCategory.UNKNOWN: "▫️",
    }
)

COLOR_TABLE: Mapping[str, ColorCategory] = MappingProxyType(
    {
        # base hues
        "black": ColorCategory.BLACK,
        "white": ColorCategory.WHITE,
        "blue": ColorCategory.BLUE,
        "red": ColorCategory.RED,
        "green": ColorCategory.GREEN,
        "yellow": ColorCategory.YELLOW,
        "gray": ColorCategory.GRAY,
        "grey": ColorCategory.GRAY,
        # extended tones
        "navy": ColorCategory.NAVY,
        "beige": ColorCategory.BEIGE,
        "brown": ColorCategory.BROWN,
        "pink": ColorCategory.PINK,
        "purple": ColorCategory.PURPLE,
        "orange": ColorCategory.ORANGE,
        # fashion
        "khaki": ColorCategory.KHAKI,
        "olive": ColorCategory.OLIVE,
        "burgundy": ColorCategory.BURGUNDY,
        "cream": ColorCategory.CREAM,
        "charcoal": ColorCategory.CHARCOAL,
        "denim": ColorCategory.DENIM,
        # patterns
        "plaid": ColorCategory.PLAID,
        "floral": ColorCategory.FLORAL,
    }
)


def classify(label: Any) -> ColorCategory:
    """Map a color label to its category; unknown labels get ``UNKNOWN``."""

    if not isinstance(label, str):
        return ColorCategory.UNKNOWN
    return COLOR_TABLE.get(label.strip().lower(), ColorCategory.UNKNOWN)


def supported_colors() -> frozenset[str]:
    return frozenset(COLOR_TABLE)


__all__ = ["COLOR_TABLE", "ColorCategory", "classify", "supported_colors"]
