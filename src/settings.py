"""Static configuration for template search.

All user-editable settings (endpoint, search behavior, logging) live in a
single optional JSON file so they can be tweaked without touching Python.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from dotenv import load_dotenv

from adapters.http_search import templates_endpoint
from core.config import DEFAULT_BASE_URL, SearchConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")

# Environment override for the endpoint, handy for pointing at a local server.
BASE_URL_ENV = "TEMPLATES_BASE_URL"


class ConfigError(RuntimeError):
    """Raised when config.json exists but cannot be used."""


@dataclass(frozen=True)
class Settings:
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: dict[str, Any] = field(default_factory=dict)


def _load_json_config(path: str) -> dict:
    """Load config.json; a missing file means all defaults."""

    if not os.path.exists(path):
        return {}

    try:
        with open(path, "r", encoding="utf-8") as handle:
            loaded = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: {exc.msg} (line {exc.lineno})") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path}: config root must be an object")
    return loaded


def config_section(config: dict, name: str, prefix: str = "") -> dict:
    """Return ``config[name]`` as a dict; missing means empty."""

    value = config.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'{prefix}{name}' must be an object")
    return value


def _flag(section: dict, key: str, prefix: str) -> bool:
    # Strings such as "false" are rejected rather than coerced.
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"{prefix}.{key} must be true or false")
    return value


def load_settings(path: Optional[str] = None) -> Settings:
    """Build Settings from config.json and the environment (.env included)."""

    load_dotenv()
    config = _load_json_config(path or CONFIG_PATH)

    api = config_section(config, "api")
    search = config_section(config, "search")
    logging_cfg = config_section(config, "logging")
    config_section(logging_cfg, "file", prefix="logging.")

    base_url = os.getenv(BASE_URL_ENV) or api.get("base_url", DEFAULT_BASE_URL)
    try:
        timeout = float(api.get("timeout_seconds", 10))
    except (TypeError, ValueError) as exc:
        raise ConfigError("api.timeout_seconds must be a number") from exc
    try:
        templates_endpoint(str(base_url))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    return Settings(
        search=SearchConfig(
            base_url=str(base_url),
            timeout_seconds=timeout,
            send_filters=_flag(api, "send_filters", "api"),
            discard_stale_responses=_flag(search, "discard_stale_responses", "search"),
        ),
        logging=logging_cfg,
    )
