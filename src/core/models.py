"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to the HTTP client or the Textual widgets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class FilterField(Enum):
    """The five search filters, with their input label and wire name."""

    MATTER = ("Matter", "matter")
    LANGUAGE = ("Language", "language")
    BRAND = ("Brand", "brand")
    MEDIUM = ("Medium", "medium")
    MIME_TYPE = ("MimeType", "mime_type")

    def __init__(self, label: str, wire_name: str) -> None:
        self.label = label
        self.wire_name = wire_name


@dataclass(frozen=True)
class FilterState:
    """Optional search constraints. None means no constraint on that field."""

    matter: Optional[str] = None
    language: Optional[str] = None
    brand: Optional[str] = None
    medium: Optional[str] = None
    mime_type: Optional[str] = None

    def get(self, filter_field: FilterField) -> Optional[str]:
        return getattr(self, filter_field.wire_name)


@dataclass(frozen=True)
class FieldUpdate:
    """Replacement value for exactly one filter field."""

    field: FilterField
    value: Optional[str]


@dataclass(frozen=True)
class TemplateRecord:
    """Snapshot of one catalog entry as returned by the search endpoint."""

    id: str
    matter: str
    brand: str
    language: str
    medium: str
    subject: str
    body: str
    mime_type: str
    created_at: str
    changed_at: str


@dataclass(frozen=True)
class QueryResultPage:
    """One response page. Pagination fields are passed through untouched."""

    objects: Tuple[TemplateRecord, ...]
    page: int
    per_page: int
    num_results: int


@dataclass(frozen=True)
class ViewState:
    """Single authoritative snapshot driving the rendered view."""

    filters: FilterState = field(default_factory=FilterState)
    rows: Tuple[TemplateRecord, ...] = ()
    pending: bool = False
    # Number of searches triggered so far; only read by the stale-response guard.
    request_seq: int = 0
