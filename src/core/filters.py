"""Filter state updates (core domain)."""

from __future__ import annotations

from dataclasses import replace

from core.models import FieldUpdate, FilterField, FilterState


def apply_update(current: FilterState, update: FieldUpdate) -> FilterState:
    """Return a copy of ``current`` with only the targeted field replaced.

    Values are stored as given. Empty input must already have been turned
    into None by the caller.
    """

    return replace(current, **{update.field.wire_name: update.value})


def present_filters(filters: FilterState) -> dict[str, str]:
    """Return the filters that carry a value, keyed by wire name."""

    present: dict[str, str] = {}
    for filter_field in FilterField:
        value = filters.get(filter_field)
        if value is not None:
            present[filter_field.wire_name] = value
    return present
