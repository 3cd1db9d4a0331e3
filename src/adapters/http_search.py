"""HTTP search adapter for the template catalog.

Issues one GET per search against ``{base_url}/templates`` and reports every
outcome as a value, so the driver loop never sees an exception.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from adapters.template_mapper import decode_result_page
from core.events import FailureKind, SearchFailure, SearchOutcome
from core.filters import present_filters
from core.models import FilterState

LOGGER = logging.getLogger(__name__)

TEMPLATES_PATH = "/templates"


def templates_endpoint(base_url: str) -> str:
    """Return the search URL for ``base_url``; raises ValueError if unusable."""

    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        raise ValueError(f"Search base URL is invalid: {base_url!r} ({exc})") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"Search base URL must be an absolute http(s) URL: {base_url!r}")
    return base_url.rstrip("/") + TEMPLATES_PATH


class HttpTemplateSearch:
    """SearchPort implementation backed by httpx."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        send_filters: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        # A bad endpoint is a configuration error, so fail at startup.
        self._endpoint = templates_endpoint(base_url)
        self._timeout = timeout
        self._send_filters = send_filters
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _params(self, filters: FilterState) -> dict[str, str]:
        if not self._send_filters:
            return {}
        return present_filters(filters)

    async def search(self, filters: FilterState) -> SearchOutcome:
        """Fetch one result page; failures are returned, never raised."""

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._endpoint, params=self._params(filters))
        except httpx.RequestError as exc:
            LOGGER.warning("Search request to %s failed: %s", self._endpoint, exc)
            return SearchFailure(kind=FailureKind.NETWORK, detail=str(exc) or type(exc).__name__)

        if not response.is_success:
            LOGGER.warning("Search returned HTTP %s", response.status_code)
            return SearchFailure(
                kind=FailureKind.SERVER_STATUS,
                status_code=response.status_code,
                detail=f"HTTP {response.status_code}",
            )

        try:
            return decode_result_page(response.json())
        except ValueError as exc:
            LOGGER.warning("Search response could not be decoded: %s", exc)
            return SearchFailure(kind=FailureKind.DECODE, detail=str(exc))
