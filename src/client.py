"""Search client factory for template search.

The HTTP adapter and the driver are built in one place so the TUI and the
headless command share the exact same wiring.
"""

from __future__ import annotations

import logging
from typing import Optional

from adapters.http_search import HttpTemplateSearch
from core.config import SearchConfig
from core.driver import SearchDriver, StateListener


def build_transport(config: SearchConfig) -> HttpTemplateSearch:
    """Create the HTTP search adapter; raises ValueError on a bad base URL."""

    logging.getLogger(__name__).info("Using search endpoint %s", config.base_url)
    return HttpTemplateSearch(
        config.base_url,
        timeout=config.timeout_seconds,
        send_filters=config.send_filters,
    )


def build_driver(config: SearchConfig, on_change: Optional[StateListener] = None) -> SearchDriver:
    return SearchDriver(
        build_transport(config),
        on_change,
        discard_stale_responses=config.discard_stale_responses,
    )
