"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core and its adapters expect so the app layer can build them safely.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_URL = "http://foo.bar:4848"


@dataclass(frozen=True)
class SearchConfig:
    """Search endpoint and driver settings."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0
    # Filters are not sent to the endpoint unless explicitly enabled.
    send_filters: bool = False
    # Drop results of searches superseded by a newer trigger.
    discard_stale_responses: bool = False
