"""Domain-specific exceptions."""

from __future__ import annotations

from typing import Literal

ErrorKind = Literal["transport", "protocol", "decode", "internal"]


class FinderError(Exception):
    pass


class QueryValidationError(FinderError):
    """Raised when a query is empty after trimming."""

    def __init__(self, message: str = "Please enter a search term") -> None:
        super().__init__(message)


class SearchError(FinderError):
    kind: ErrorKind

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class TransportError(SearchError):
    kind = "transport"


class ProtocolError(SearchError):
    kind = "protocol"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error, status {status_code}")
        self.status_code = status_code


class DecodeError(SearchError):
    kind = "decode"


class SessionError(FinderError):
    pass


class InvalidTransition(SessionError):
    pass


__all__ = [
    "DecodeError",
    "ErrorKind",
    "FinderError",
    "InvalidTransition",
    "ProtocolError",
    "QueryValidationError",
    "SearchError",
    "SessionError",
    "TransportError",
]
