"""Normalization helpers for loosely shaped API payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def ensure_sequence(value: Any) -> tuple[Any, ...]:
    """Return ``value`` as a tuple, wrapping scalars into a 1-tuple.

    ``None`` becomes an empty tuple. Strings, bytes and mappings count as
    scalars.
    """

    if value is None:
        return ()
    if isinstance(value, (str, bytes, Mapping)):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def coerce_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


__all__ = ["coerce_text", "ensure_sequence"]
