"""Per-view search session: a four-phase state machine.

A session is always in exactly one of ``Idle``, ``Loading``, ``Resolved`` or
``Errored``. The pure transition functions below are the only way to move
between phases; ``SearchSession`` wraps them with the input text and the
request counter used to drop stale outcomes.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Protocol, Union

from clothes_finder.domain.models import (
    ClothingItem,
    SearchFailure,
    SearchOutcome,
    SearchSuccess,
)
from clothes_finder.logging import logger
from clothes_finder.services.exceptions import ErrorKind, InvalidTransition
from clothes_finder.services.query import is_blank, normalize_query
from clothes_finder.services.search import FAILURE_PREFIX


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Loading:
    query: str
    sequence: int


@dataclass(frozen=True, slots=True)
class Resolved:
    query: str
    items: tuple[ClothingItem, ...]
    sequence: int


@dataclass(frozen=True, slots=True)
class Errored:
    query: str
    message: str
    kind: ErrorKind
    sequence: int


Phase = Union[Idle, Loading, Resolved, Errored]

IDLE = Idle()


def begin(state: Phase, query: str, sequence: int) -> Loading:
    """Enter ``Loading`` from any phase; previous items/message are dropped."""

    return Loading(query=query, sequence=sequence)


def succeed(state: Phase, items: tuple[ClothingItem, ...]) -> Resolved:
    if not isinstance(state, Loading):
        raise InvalidTransition(f"cannot resolve from {type(state).__name__}")
    return Resolved(query=state.query, items=tuple(items), sequence=state.sequence)


def fail(state: Phase, failure: SearchFailure) -> Errored:
    if not isinstance(state, Loading):
        raise InvalidTransition(f"cannot fail from {type(state).__name__}")
    return Errored(
        query=state.query,
        message=failure.message,
        kind=failure.kind,
        sequence=state.sequence,
    )


def clear(state: Phase) -> Phase:
    # An in-flight request is not interrupted by clearing the input.
    if isinstance(state, Loading):
        return state
    return IDLE


def apply_outcome(state: Phase, outcome: SearchOutcome) -> Phase:
    if isinstance(outcome, SearchSuccess):
        return succeed(state, outcome.items)
    return fail(state, outcome)


@dataclass(frozen=True, slots=True)
class SearchView:
    """Display flags derived from the phase and the current input."""

    show_guidance: bool = False
    show_loading: bool = False
    show_error: bool = False
    show_no_results: bool = False
    show_results: bool = False
    submit_enabled: bool = True
    items: tuple[ClothingItem, ...] = ()
    error_message: str | None = None


def derive_view(state: Phase, query: str) -> SearchView:
    has_query = not is_blank(query)
    if isinstance(state, Loading):
        return SearchView(show_loading=True, submit_enabled=False)
    if isinstance(state, Errored):
        return SearchView(show_error=True, error_message=state.message)
    if isinstance(state, Resolved):
        return SearchView(
            show_no_results=not state.items and has_query,
            show_results=bool(state.items),
            items=state.items,
        )
    return SearchView(show_guidance=not has_query)


@dataclass(frozen=True, slots=True)
class SearchTicket:
    query: str
    sequence: int


class OutcomeSource(Protocol):
    async def execute(self, query: str) -> SearchOutcome: ...


@dataclass
class SearchSession:
    """State of one view. Only the latest started request may resolve it."""

    query: str = ""
    state: Phase = IDLE
    _sequence: int = field(default=0, init=False, repr=False)

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, Loading)

    def edit(self, text: str | None) -> None:
        self.query = text or ""
        if is_blank(self.query):
            self.state = clear(self.state)

    def reset(self) -> None:
        self.edit("")

    def submit(self, text: str | None = None) -> SearchTicket:
        raw = self.query if text is None else text
        normalized = normalize_query(raw)
        self.query = raw
        self._sequence += 1
        self.state = begin(self.state, normalized, self._sequence)
        logger.debug("search_submitted", query=normalized, sequence=self._sequence)
        return SearchTicket(query=normalized, sequence=self._sequence)

    def resolve(self, ticket: SearchTicket, outcome: SearchOutcome) -> bool:
        if ticket.sequence != self._sequence or not isinstance(self.state, Loading):
            logger.info(
                "search_outcome_discarded",
                sequence=ticket.sequence,
                latest_sequence=self._sequence,
            )
            return False
        self.state = apply_outcome(self.state, outcome)
        return True

    def abort(self, ticket: SearchTicket, exc: BaseException) -> bool:
        """Settle ``ticket`` with a failure when its exchange blew up."""

        logger.error(
            "search_exchange_aborted",
            sequence=ticket.sequence,
            error_type=exc.__class__.__name__,
            error=str(exc),
        )
        failure = SearchFailure(
            message=f"{FAILURE_PREFIX}: unexpected {exc.__class__.__name__}",
            kind="internal",
        )
        return self.resolve(ticket, failure)

    async def run(self, client: OutcomeSource, text: str | None = None) -> bool:
        ticket = self.submit(text)
        try:
            outcome = await client.execute(ticket.query)
        except BaseException as exc:
            self.abort(ticket, exc)
            raise
        return self.resolve(ticket, outcome)

    def view(self) -> SearchView:
        return derive_view(self.state, self.query)


class SessionRegistry:
    """Sessions keyed by view id (a chat id for the bot).

    With ``max_sessions`` set, the least recently used sessions are evicted
    once the limit is exceeded; sessions with a request in flight are kept.
    """

    def __init__(self, max_sessions: int | None = None) -> None:
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[int, SearchSession] = OrderedDict()

    def get(self, view_id: int) -> SearchSession:
        session = self._sessions.get(view_id)
        if session is not None:
            self._sessions.move_to_end(view_id)
            return session
        session = SearchSession()
        self._sessions[view_id] = session
        self._evict(keep=view_id)
        return session

    def _evict(self, keep: int) -> None:
        if not self.max_sessions:
            return
        for view_id in list(self._sessions):
            if len(self._sessions) <= self.max_sessions:
                break
            if view_id == keep or self._sessions[view_id].is_loading:
                continue
            del self._sessions[view_id]

    def discard(self, view_id: int) -> None:
        self._sessions.pop(view_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, view_id: object) -> bool:
        return view_id in self._sessions


__all__ = [
    "Errored",
    "IDLE",
    "Idle",
    "Loading",
    "Phase",
    "Resolved",
    "SearchSession",
    "SearchTicket",
    "SearchView",
    "SessionRegistry",
    "apply_outcome",
    "begin",
    "clear",
    "derive_view",
    "fail",
    "succeed",
]
