"""Pure view derivation from a ViewState snapshot.

The renderer never touches state or widgets. Hosts turn the description into
actual output and feed user input back as events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from core.models import FilterField, TemplateRecord, ViewState

TITLE = "Search Templates"
SEARCH_LABEL = "Search"

TABLE_FIELDS: Tuple[str, ...] = (
    "Subject",
    "Brand",
    "Language",
    "Medium",
    "Matter",
    "MIME Type",
    "Created At",
    "Changed At",
    "Body",
)


@dataclass(frozen=True)
class FilterInput:
    field: FilterField
    label: str
    value: str


@dataclass(frozen=True)
class ViewDescription:
    title: str
    inputs: Tuple[FilterInput, ...]
    search_label: str
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    searching: bool


def template_row(template: TemplateRecord) -> Tuple[str, ...]:
    """Cells for one record, in TABLE_FIELDS order."""

    return (
        template.subject,
        template.brand,
        template.language,
        template.medium,
        template.matter,
        template.mime_type,
        template.created_at,
        template.changed_at,
        template.body,
    )


def render(state: ViewState) -> ViewDescription:
    inputs = tuple(
        FilterInput(
            field=filter_field,
            label=filter_field.label,
            value=state.filters.get(filter_field) or "",
        )
        for filter_field in FilterField
    )
    return ViewDescription(
        title=TITLE,
        inputs=inputs,
        search_label=SEARCH_LABEL,
        headers=TABLE_FIELDS,
        rows=tuple(template_row(template) for template in state.rows),
        searching=state.pending,
    )
