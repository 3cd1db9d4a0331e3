"""Search driver: the imperative shell around the view reducer.

The driver owns the event queue and the current ViewState. Events are
processed strictly in the order they were enqueued. The only side effect it
performs besides logging is the transport call issued for SearchTriggered,
whose outcome is enqueued again as a result event.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from core.events import (
    Event,
    FailureKind,
    SearchFailed,
    SearchFailure,
    SearchSucceeded,
    SearchTriggered,
)
from core.models import FilterState, ViewState
from core.ports import SearchPort
from core.reducer import reduce

LOGGER = logging.getLogger(__name__)

StateListener = Callable[[ViewState], None]


class SearchDriver:
    """Sequences events through the reducer and runs search requests."""

    def __init__(
        self,
        transport: SearchPort,
        on_change: Optional[StateListener] = None,
        *,
        discard_stale_responses: bool = False,
        initial_state: Optional[ViewState] = None,
    ) -> None:
        self._transport = transport
        self._on_change = on_change
        self._discard_stale = discard_stale_responses
        self._state = initial_state or ViewState()
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._searches: set[asyncio.Task] = set()

    @property
    def state(self) -> ViewState:
        return self._state

    def dispatch(self, event: Event) -> None:
        """Enqueue an event; it is processed by ``run`` or ``run_until_idle``."""

        self._queue.put_nowait(event)

    def process(self, event: Event) -> ViewState:
        """Apply one event immediately and notify the listener.

        Must be called from inside a running event loop, since a
        SearchTriggered starts a background request.
        """

        LOGGER.debug("%r", event)
        self._state = reduce(self._state, event)

        if isinstance(event, SearchTriggered):
            self._start_search(self._state)
        elif isinstance(event, SearchSucceeded):
            LOGGER.debug("got result: %r", event.page)
        elif isinstance(event, SearchFailed):
            LOGGER.info(
                "Search failed (%s, status=%s): %s",
                event.failure.kind.value,
                event.failure.status_code,
                event.failure.detail or "-",
            )

        LOGGER.debug("%r", self._state.filters)
        if self._on_change is not None:
            self._on_change(self._state)
        return self._state

    async def run(self) -> None:
        """Process events forever. Cancel the awaiting task to stop."""

        while True:
            event = await self._queue.get()
            self.process(event)

    async def run_until_idle(self) -> ViewState:
        """Process events until nothing is queued and no search is in flight."""

        while True:
            while not self._queue.empty():
                self.process(self._queue.get_nowait())
            in_flight = {task for task in self._searches if not task.done()}
            if not in_flight:
                if self._queue.empty():
                    return self._state
                continue
            await asyncio.wait(in_flight, return_when=asyncio.FIRST_COMPLETED)

    async def aclose(self) -> None:
        """Cancel outstanding searches; their results are never delivered."""

        tasks = list(self._searches)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._searches.clear()

    def _start_search(self, state: ViewState) -> None:
        request_id = state.request_seq if self._discard_stale else None
        task = asyncio.get_running_loop().create_task(self._search(state.filters, request_id))
        self._searches.add(task)
        task.add_done_callback(self._searches.discard)

    async def _search(self, filters: FilterState, request_id: Optional[int]) -> None:
        try:
            outcome = await self._transport.search(filters)
        except Exception as exc:
            # Transports report failures as values; a raise here is an adapter bug.
            LOGGER.exception("Search transport raised")
            outcome = SearchFailure(kind=FailureKind.NETWORK, detail=str(exc))

        if isinstance(outcome, SearchFailure):
            self.dispatch(SearchFailed(outcome, request_id=request_id))
        else:
            self.dispatch(SearchSucceeded(outcome, request_id=request_id))
