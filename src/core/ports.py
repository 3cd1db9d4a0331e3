"""Ports (interfaces) used by the search driver.

The driver only depends on this contract, so the HTTP adapter can be swapped
for a fake in tests or for another backend later.
"""

from __future__ import annotations

from typing import Protocol

from core.events import SearchOutcome
from core.models import FilterState


class SearchPort(Protocol):
    """Query transport required by the driver."""

    async def search(self, filters: FilterState) -> SearchOutcome:
        """Resolve to a result page or a SearchFailure; never raise."""
        ...
