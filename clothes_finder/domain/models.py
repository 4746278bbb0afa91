"""Pydantic models shared across service/bot layers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clothes_finder.services.exceptions import ErrorKind
from clothes_finder.utils.shapes import coerce_text, ensure_sequence


class ClothingItem(BaseModel):
    """A single search result record.

    Every attribute may be missing or irregularly shaped on the wire; the
    validators coerce them to safe display values instead of rejecting the
    record.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Any = None
    name: str = ""
    type: str = ""
    brand: str = ""
    sizes: tuple[str, ...] = ()
    colors: tuple[str, ...] = ()
    description: str = ""
    raw: Any = Field(default=None, exclude=True, repr=False)

    @field_validator("name", "type", "brand", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("sizes", "colors", mode="before")
    @classmethod
    def _coerce_labels(cls, value: Any) -> tuple[str, ...]:
        return tuple(coerce_text(label) for label in ensure_sequence(value))

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return value
        return None

    @classmethod
    def from_record(cls, record: Any) -> "ClothingItem":
        if not isinstance(record, Mapping):
            return cls(raw=record)
        fields = {key: record[key] for key in cls.model_fields if key in record and key != "raw"}
        return cls(**fields, raw=record)


@dataclass(frozen=True, slots=True)
class SearchSuccess:
    items: tuple[ClothingItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True, slots=True)
class SearchFailure:
    message: str
    kind: ErrorKind
    status_code: int | None = None


SearchOutcome = Union[SearchSuccess, SearchFailure]


__all__ = [
    "ClothingItem",
    "SearchFailure",
    "SearchOutcome",
    "SearchSuccess",
]
