from __future__ import annotations

import asyncio
import logging

from core.driver import SearchDriver
from core.events import (
    FailureKind,
    FilterEdited,
    SearchFailure,
    SearchTriggered,
)
from core.models import (
    FieldUpdate,
    FilterField,
    FilterState,
    QueryResultPage,
    TemplateRecord,
    ViewState,
)
from core.view import render


def _record(record_id: str, subject: str = "S") -> TemplateRecord:
    return TemplateRecord(
        id=record_id,
        matter="glass",
        brand="orbit",
        language="en",
        medium="email",
        subject=subject,
        body="Hello",
        mime_type="text/plain",
        created_at="2019-01-01",
        changed_at="2019-01-02",
    )


def _page(*records: TemplateRecord) -> QueryResultPage:
    return QueryResultPage(objects=tuple(records), page=1, per_page=10, num_results=len(records))


class FakeTransport:
    def __init__(self, *outcomes) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[FilterState] = []

    async def search(self, filters: FilterState):
        self.calls.append(filters)
        return self._outcomes.pop(0)


class ControlledTransport:
    """Each call waits on a future the test resolves explicitly."""

    def __init__(self) -> None:
        self.pending: list[asyncio.Future] = []

    async def search(self, filters: FilterState):
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future


class RaisingTransport:
    async def search(self, filters: FilterState):
        raise RuntimeError("adapter bug")


async def _settle() -> None:
    for _ in range(3):
        await asyncio.sleep(0)


def test_filter_edit_scenario() -> None:
    seen: list[ViewState] = []
    driver = SearchDriver(FakeTransport(), seen.append)

    async def scenario() -> ViewState:
        driver.dispatch(FilterEdited(FieldUpdate(FilterField.MATTER, "glass")))
        return await driver.run_until_idle()

    state = asyncio.run(scenario())

    assert state.filters.matter == "glass"
    assert state.rows == ()
    assert state.pending is False
    assert len(seen) == 1
    view = render(state)
    assert view.inputs[0].value == "glass"
    assert view.rows == ()


def test_search_success_scenario() -> None:
    page = _page(_record("1", "S"))
    transport = FakeTransport(page)
    seen: list[ViewState] = []
    driver = SearchDriver(transport, seen.append)

    async def scenario() -> ViewState:
        driver.dispatch(FilterEdited(FieldUpdate(FilterField.MATTER, "glass")))
        driver.dispatch(SearchTriggered())
        return await driver.run_until_idle()

    state = asyncio.run(scenario())

    assert [item.pending for item in seen] == [False, True, False]
    assert state.rows == page.objects
    assert transport.calls == [FilterState(matter="glass")]
    assert render(state).rows[0][0] == "S"


def test_search_failure_keeps_rows() -> None:
    row_a = _record("a")
    transport = FakeTransport(SearchFailure(kind=FailureKind.NETWORK))
    driver = SearchDriver(transport, initial_state=ViewState(rows=(row_a,)))

    async def scenario() -> ViewState:
        driver.dispatch(SearchTriggered())
        return await driver.run_until_idle()

    state = asyncio.run(scenario())

    assert state.pending is False
    assert state.rows == (row_a,)


def test_filter_edits_are_applied_while_search_in_flight() -> None:
    transport = ControlledTransport()
    driver = SearchDriver(transport)

    async def scenario() -> ViewState:
        driver.process(SearchTriggered())
        await _settle()
        driver.process(FilterEdited(FieldUpdate(FilterField.BRAND, "orbit")))
        assert driver.state.pending is True
        assert driver.state.filters.brand == "orbit"
        transport.pending[0].set_result(_page(_record("1")))
        return await driver.run_until_idle()

    state = asyncio.run(scenario())

    assert state.pending is False
    assert state.filters.brand == "orbit"
    assert [row.id for row in state.rows] == ["1"]


def test_last_processed_result_wins_by_default() -> None:
    transport = ControlledTransport()
    driver = SearchDriver(transport)

    async def scenario() -> ViewState:
        driver.process(SearchTriggered())
        driver.process(SearchTriggered())
        await _settle()
        assert len(transport.pending) == 2
        transport.pending[1].set_result(_page(_record("new")))
        await _settle()
        transport.pending[0].set_result(_page(_record("old")))
        return await driver.run_until_idle()

    state = asyncio.run(scenario())

    assert [row.id for row in state.rows] == ["old"]
    assert state.pending is False


def test_stale_results_dropped_when_enabled() -> None:
    transport = ControlledTransport()
    driver = SearchDriver(transport, discard_stale_responses=True)

    async def scenario() -> ViewState:
        driver.process(SearchTriggered())
        driver.process(SearchTriggered())
        await _settle()
        transport.pending[1].set_result(_page(_record("new")))
        await _settle()
        transport.pending[0].set_result(_page(_record("old")))
        return await driver.run_until_idle()

    state = asyncio.run(scenario())

    assert [row.id for row in state.rows] == ["new"]
    assert state.pending is False


def test_stale_guard_keeps_pending_until_latest_arrives() -> None:
    transport = ControlledTransport()
    seen: list[ViewState] = []
    driver = SearchDriver(transport, seen.append, discard_stale_responses=True)

    async def scenario() -> ViewState:
        driver.process(SearchTriggered())
        driver.process(SearchTriggered())
        await _settle()
        transport.pending[0].set_result(_page(_record("old")))
        await _settle()
        transport.pending[1].set_result(_page(_record("new")))
        return await driver.run_until_idle()

    state = asyncio.run(scenario())

    # Two triggers, the dropped stale result, then the fresh one.
    assert len(seen) == 4
    assert seen[2].pending is True
    assert seen[2].rows == ()
    assert [row.id for row in state.rows] == ["new"]


def test_raising_transport_becomes_network_failure(caplog) -> None:
    driver = SearchDriver(RaisingTransport(), initial_state=ViewState(rows=(_record("a"),)))

    async def scenario() -> ViewState:
        driver.dispatch(SearchTriggered())
        return await driver.run_until_idle()

    with caplog.at_level(logging.INFO, logger="core.driver"):
        state = asyncio.run(scenario())

    assert state.pending is False
    assert [row.id for row in state.rows] == ["a"]
    assert "network" in caplog.text


def test_every_event_is_logged_with_filter_state(caplog) -> None:
    driver = SearchDriver(FakeTransport(_page()))

    async def scenario() -> ViewState:
        driver.dispatch(FilterEdited(FieldUpdate(FilterField.LANGUAGE, "de")))
        driver.dispatch(SearchTriggered())
        return await driver.run_until_idle()

    with caplog.at_level(logging.DEBUG, logger="core.driver"):
        asyncio.run(scenario())

    assert "FilterEdited" in caplog.text
    assert "SearchTriggered" in caplog.text
    assert "got result" in caplog.text
    assert "FilterState(matter=None, language='de'" in caplog.text


def test_aclose_cancels_outstanding_searches() -> None:
    transport = ControlledTransport()
    driver = SearchDriver(transport)

    async def scenario() -> None:
        driver.process(SearchTriggered())
        await _settle()
        await driver.aclose()
        assert transport.pending[0].cancelled()

    asyncio.run(scenario())
    assert driver.state.pending is True
