"""Input normalization helpers for the search form."""

from __future__ import annotations

from typing import Optional

from core.models import FieldUpdate, FilterField

INPUT_ID_PREFIX = "filter-"


def none_if_empty(value: str) -> Optional[str]:
    if value == "":
        return None
    return value


def field_update_from_input(filter_field: FilterField, raw_value: str) -> FieldUpdate:
    """Turn raw input text into a FieldUpdate; empty text means no constraint."""

    return FieldUpdate(filter_field, none_if_empty(raw_value))


def field_from_input_id(input_id: Optional[str]) -> Optional[FilterField]:
    """Map a ``filter-<wire_name>`` widget id back to its field."""

    if not input_id or not input_id.startswith(INPUT_ID_PREFIX):
        return None
    wire_name = input_id[len(INPUT_ID_PREFIX) :]
    for filter_field in FilterField:
        if filter_field.wire_name == wire_name:
            return filter_field
    return None


def input_id_for(filter_field: FilterField) -> str:
    return f"{INPUT_ID_PREFIX}{filter_field.wire_name}"

