"""Tests for the search session state machine."""

from __future__ import annotations

import asyncio

import pytest

from clothes_finder.domain.models import ClothingItem, SearchFailure, SearchSuccess
from clothes_finder.services.exceptions import InvalidTransition, QueryValidationError
from clothes_finder.services.session import (
    IDLE,
    Errored,
    Idle,
    Loading,
    Resolved,
    SearchSession,
    SessionRegistry,
    clear,
    derive_view,
    fail,
    succeed,
)

TEE = ClothingItem.from_record({"id": 1, "name": "Tee", "colors": ["Blue"]})
FAILURE = SearchFailure(message="Search failed: HTTP error, status 500", kind="protocol", status_code=500)


class FakeClient:
    def __init__(self, outcome) -> None:
        self.outcome = outcome
        self.queries: list[str] = []

    async def execute(self, query: str):
        self.queries.append(query)
        return self.outcome


def test_session_starts_idle_with_guidance():
    session = SearchSession()
    assert session.state == IDLE
    view = session.view()
    assert view.show_guidance
    assert view.submit_enabled
    assert not (view.show_loading or view.show_error or view.show_no_results)


@pytest.mark.parametrize("prior", ["idle", "resolved", "errored"])
def test_submit_enters_loading_from_settled_phases(prior):
    session = SearchSession()
    if prior != "idle":
        ticket = session.submit("first")
        outcome = SearchSuccess(items=(TEE,)) if prior == "resolved" else FAILURE
        session.resolve(ticket, outcome)

    ticket = session.submit("  jeans ")

    assert session.state == Loading(query="jeans", sequence=ticket.sequence)
    assert ticket.query == "jeans"
    view = session.view()
    assert view.show_loading
    assert not view.submit_enabled
    assert view.items == ()
    assert view.error_message is None


@pytest.mark.parametrize("text", ["", "   ", "\n"])
def test_blank_submit_leaves_state_untouched(text):
    session = SearchSession()
    ticket = session.submit("shirt")
    session.resolve(ticket, SearchSuccess(items=(TEE,)))
    before = (session.state, session.latest_sequence, session.query)

    with pytest.raises(QueryValidationError):
        session.submit(text)

    assert (session.state, session.latest_sequence, session.query) == before


@pytest.mark.asyncio
async def test_run_blank_query_never_calls_client():
    client = FakeClient(SearchSuccess())
    session = SearchSession()
    with pytest.raises(QueryValidationError):
        await session.run(client, "  ")
    assert client.queries == []
    assert isinstance(session.state, Idle)


def test_success_resolves_with_items():
    session = SearchSession()
    ticket = session.submit("tee")
    assert session.resolve(ticket, SearchSuccess(items=(TEE,)))
    assert session.state == Resolved(query="tee", items=(TEE,), sequence=ticket.sequence)
    view = session.view()
    assert view.show_results
    assert view.items == (TEE,)
    assert not view.show_no_results


def test_empty_success_shows_no_results_only():
    session = SearchSession()
    ticket = session.submit("unicorn pants")
    session.resolve(ticket, SearchSuccess(items=()))
    view = session.view()
    assert view.show_no_results
    assert not (view.show_error or view.show_guidance or view.show_loading or view.show_results)


def test_failure_enters_errored_without_items():
    session = SearchSession()
    ticket = session.submit("shirt")
    session.resolve(ticket, FAILURE)
    assert isinstance(session.state, Errored)
    view = session.view()
    assert view.show_error
    assert "500" in view.error_message
    assert view.items == ()
    assert not view.show_no_results


@pytest.mark.parametrize("outcome", [SearchSuccess(items=(TEE,)), FAILURE])
def test_clearing_input_returns_to_idle(outcome):
    session = SearchSession()
    session.resolve(session.submit("shirt"), outcome)
    session.edit("   ")
    assert session.state == IDLE
    assert session.view().show_guidance


def test_editing_non_empty_text_keeps_results():
    session = SearchSession()
    session.resolve(session.submit("shirt"), SearchSuccess(items=(TEE,)))
    session.edit("shirts")
    assert isinstance(session.state, Resolved)


def test_clear_does_not_interrupt_loading():
    session = SearchSession()
    ticket = session.submit("shirt")
    session.edit("")
    assert isinstance(session.state, Loading)

    assert session.resolve(ticket, SearchSuccess(items=(TEE,)))
    assert isinstance(session.state, Resolved)


def test_latest_started_request_wins():
    session = SearchSession()
    first = session.submit("shirt")
    second = session.submit("jeans")

    assert session.resolve(second, SearchSuccess(items=(TEE,)))
    assert not session.resolve(first, FAILURE)

    assert session.state == Resolved(query="jeans", items=(TEE,), sequence=second.sequence)


@pytest.mark.asyncio
async def test_out_of_order_completion_keeps_second_outcome():
    release_first = asyncio.Event()

    class SlowFirstClient:
        async def execute(self, query: str):
            if query == "shirt":
                await release_first.wait()
                return FAILURE
            return SearchSuccess(items=(TEE,))

    session = SearchSession()
    client = SlowFirstClient()
    first = asyncio.create_task(session.run(client, "shirt"))
    await asyncio.sleep(0)
    applied_second = await session.run(client, "jeans")
    release_first.set()
    applied_first = await first

    assert applied_second is True
    assert applied_first is False
    assert isinstance(session.state, Resolved)
    assert session.state.query == "jeans"


def test_sequence_numbers_increase():
    session = SearchSession()
    tickets = [session.submit(q) for q in ("a", "b", "c")]
    assert [t.sequence for t in tickets] == [1, 2, 3]
    assert session.latest_sequence == 3


def test_pure_transitions_reject_settled_states():
    with pytest.raises(InvalidTransition):
        succeed(IDLE, ())
    with pytest.raises(InvalidTransition):
        fail(Resolved(query="q", items=(), sequence=1), FAILURE)


def test_clear_transition_table():
    loading = Loading(query="q", sequence=1)
    assert clear(loading) is loading
    assert clear(IDLE) == IDLE
    assert clear(Errored(query="q", message="m", kind="decode", sequence=1)) == IDLE


def test_derive_view_is_exclusive():
    phases = [
        IDLE,
        Loading(query="q", sequence=1),
        Resolved(query="q", items=(), sequence=1),
        Resolved(query="q", items=(TEE,), sequence=1),
        Errored(query="q", message="m", kind="transport", sequence=1),
    ]
    for phase in phases:
        view = derive_view(phase, "q")
        flags = [
            view.show_guidance,
            view.show_loading,
            view.show_error,
            view.show_no_results,
            view.show_results,
        ]
        assert sum(flags) <= 1


def test_idle_with_query_hides_guidance():
    assert not derive_view(IDLE, "typing").show_guidance


@pytest.mark.asyncio
async def test_run_resolves_through_client():
    client = FakeClient(SearchSuccess(items=(TEE,)))
    session = SearchSession()
    assert await session.run(client, " tee ")
    assert client.queries == ["tee"]
    assert session.view().show_results


def test_registry_returns_one_session_per_view():
    registry = SessionRegistry()
    first = registry.get(10)
    assert registry.get(10) is first
    assert registry.get(11) is not first
    assert len(registry) == 2

    registry.discard(10)
    assert 10 not in registry
    assert registry.get(10) is not first


@pytest.mark.asyncio
async def test_run_settles_session_when_client_raises():
    class BrokenClient:
        async def execute(self, query: str):
            raise RuntimeError("client closed")

    session = SearchSession()
    with pytest.raises(RuntimeError):
        await session.run(BrokenClient(), "shirt")

    assert isinstance(session.state, Errored)
    assert session.state.kind == "internal"
    assert session.view().submit_enabled


def test_abort_ignores_stale_ticket():
    session = SearchSession()
    stale = session.submit("shirt")
    current = session.submit("jeans")

    assert not session.abort(stale, RuntimeError("late"))
    assert session.state == Loading(query="jeans", sequence=current.sequence)


def test_registry_evicts_least_recently_used():
    registry = SessionRegistry(max_sessions=2)
    first = registry.get(1)
    registry.get(2)
    registry.get(1)
    registry.get(3)

    assert 1 in registry
    assert 2 not in registry
    assert registry.get(1) is first
    assert len(registry) == 2


def test_registry_keeps_sessions_with_request_in_flight():
    registry = SessionRegistry(max_sessions=1)
    busy = registry.get(1)
    busy.submit("shirt")
    registry.get(2)

    assert registry.get(1) is busy
    assert 1 in registry
