"""JSON-to-core mapping for search endpoint responses.

This keeps the wire format (snake_case keys, JSON types) out of the core.
"""

from __future__ import annotations

from typing import Any

from core.models import QueryResultPage, TemplateRecord

TEMPLATE_KEYS = (
    "id",
    "matter",
    "brand",
    "language",
    "medium",
    "subject",
    "body",
    "mime_type",
    "created_at",
    "changed_at",
)
PAGE_KEYS = ("page", "per_page", "num_results")


class TemplateDecodeError(ValueError):
    """Raised when a response body does not have the result page shape."""


def _require_object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise TemplateDecodeError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _require_str(payload: dict, key: str, what: str) -> str:
    if key not in payload:
        raise TemplateDecodeError(f"{what} is missing '{key}'")
    value = payload[key]
    if not isinstance(value, str):
        raise TemplateDecodeError(f"{what}.{key} must be a string")
    return value


def _require_int(payload: dict, key: str) -> int:
    if key not in payload:
        raise TemplateDecodeError(f"result page is missing '{key}'")
    value = payload[key]
    # bool is an int subclass but never a valid count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TemplateDecodeError(f"result page '{key}' must be an integer")
    return value


def decode_template(payload: Any, index: int = 0) -> TemplateRecord:
    """Build a TemplateRecord from one entry of ``objects``."""

    what = f"objects[{index}]"
    obj = _require_object(payload, what)
    values = {key: _require_str(obj, key, what) for key in TEMPLATE_KEYS}
    return TemplateRecord(**values)


def decode_result_page(payload: Any) -> QueryResultPage:
    """Build a QueryResultPage from a decoded JSON body.

    Unknown keys are ignored; missing keys or wrong types raise
    TemplateDecodeError.
    """

    body = _require_object(payload, "result page")
    objects = body.get("objects")
    if not isinstance(objects, list):
        raise TemplateDecodeError("result page 'objects' must be an array")
    page, per_page, num_results = (_require_int(body, key) for key in PAGE_KEYS)
    return QueryResultPage(
        objects=tuple(decode_template(item, index) for index, item in enumerate(objects)),
        page=page,
        per_page=per_page,
        num_results=num_results,
    )
