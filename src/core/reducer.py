"""Pure view-state reducer.

All I/O (transport calls, logging) lives in the driver; this module only maps
``(state, event)`` to the next state so it can be tested in isolation.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from core.events import Event, FilterEdited, SearchFailed, SearchSucceeded, SearchTriggered
from core.filters import apply_update
from core.models import ViewState


def _is_stale(state: ViewState, request_id: Optional[int]) -> bool:
    return request_id is not None and request_id != state.request_seq


def reduce(state: ViewState, event: Event) -> ViewState:
    """Return the state that follows ``event``.

    Transitions:
    - FilterEdited replaces one filter; rows and pending are untouched.
    - SearchTriggered marks a search in flight.
    - SearchSucceeded replaces the rows with the page objects.
    - SearchFailed clears pending but keeps the last good rows.
    Result events tagged with an outdated request id leave the state as is.
    """

    if isinstance(event, FilterEdited):
        return replace(state, filters=apply_update(state.filters, event.update))

    if isinstance(event, SearchTriggered):
        return replace(state, pending=True, request_seq=state.request_seq + 1)

    if isinstance(event, SearchSucceeded):
        if _is_stale(state, event.request_id):
            return state
        return replace(state, rows=tuple(event.page.objects), pending=False)

    if isinstance(event, SearchFailed):
        if _is_stale(state, event.request_id):
            return state
        return replace(state, pending=False)

    return state
