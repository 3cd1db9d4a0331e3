"""Events consumed by the view reducer, plus the search failure taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from core.models import FieldUpdate, QueryResultPage


class FailureKind(str, Enum):
    NETWORK = "network"
    SERVER_STATUS = "server_status"
    DECODE = "decode"


@dataclass(frozen=True)
class SearchFailure:
    """Why a search produced no page. ``status_code`` is set for SERVER_STATUS."""

    kind: FailureKind
    status_code: Optional[int] = None
    detail: Optional[str] = None


SearchOutcome = Union[QueryResultPage, SearchFailure]


@dataclass(frozen=True)
class FilterEdited:
    update: FieldUpdate


@dataclass(frozen=True)
class SearchTriggered:
    pass


@dataclass(frozen=True)
class SearchSucceeded:
    page: QueryResultPage
    # Set only when stale responses are discarded.
    request_id: Optional[int] = None


@dataclass(frozen=True)
class SearchFailed:
    failure: SearchFailure
    request_id: Optional[int] = None


Event = Union[FilterEdited, SearchTriggered, SearchSucceeded, SearchFailed]
