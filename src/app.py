"""Application entry point for template search."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from rich.console import Console
from rich.table import Table

import settings
from client import build_driver
from core.config import SearchConfig
from core.events import FilterEdited, SearchTriggered
from core.models import FilterField, ViewState
from core.view import render
from frontend.validators import field_update_from_input

NAME = "TEMPLATES"
FONT = "small"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _console_handler(tui: bool) -> logging.Handler:
    if tui:
        # The TUI owns the terminal; log lines go to the Textual devtools console.
        from textual.logging import TextualHandler

        return TextualHandler()
    return logging.StreamHandler()


def _file_handler(file_cfg: dict) -> RotatingFileHandler:
    path = str(file_cfg.get("path", "logs/template-search.log"))
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    try:
        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
    except (TypeError, ValueError) as exc:
        raise settings.ConfigError("logging.file.max_bytes and backup_count must be integers") from exc
    return RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")


def _configure_logging(config: dict, *, tui: bool) -> None:
    """Install handlers from the ``logging`` config section."""

    if not config.get("enabled", True):
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    file_cfg = settings.config_section(config, "file", prefix="logging.")

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(_console_handler(tui))
    if file_cfg.get("enabled", False):
        handlers.append(_file_handler(file_cfg))
    if not handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def _ui(config: SearchConfig) -> None:
    from frontend.app import TemplateSearchApp

    TemplateSearchApp(config).run()


async def _search_once(config: SearchConfig, raw_filters: dict[FilterField, str]) -> ViewState:
    """Feed the filters and one trigger through the driver, like the UI would."""

    driver = build_driver(config)
    try:
        for filter_field, raw_value in raw_filters.items():
            driver.dispatch(FilterEdited(field_update_from_input(filter_field, raw_value)))
        driver.dispatch(SearchTriggered())
        return await driver.run_until_idle()
    finally:
        await driver.aclose()


def build_table(state: ViewState) -> Table:
    view = render(state)
    table = Table(title=view.title)
    for header in view.headers:
        table.add_column(header)
    for cells in view.rows:
        table.add_row(*cells)
    return table


def _search(config: SearchConfig, args: argparse.Namespace) -> None:
    raw_filters = {
        filter_field: getattr(args, filter_field.wire_name)
        for filter_field in FilterField
        if getattr(args, filter_field.wire_name) is not None
    }
    state = asyncio.run(_search_once(config, raw_filters))
    console = Console()
    console.print(build_table(state))
    console.print(f"{len(state.rows)} templates")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="template-search")
    parser.add_argument("--config", help="Path to config.json (defaults to the project root)")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("ui", help="Launch the search TUI")
    search_parser = subparsers.add_parser("search", help="Run one search and print the table")
    for filter_field in FilterField:
        search_parser.add_argument(
            f"--{filter_field.wire_name.replace('_', '-')}",
            dest=filter_field.wire_name,
            help=f"{filter_field.label} filter",
        )

    args = parser.parse_args(argv)
    tui = args.command != "search"
    try:
        loaded = settings.load_settings(args.config)
        _configure_logging(loaded.logging, tui=tui)
    except (settings.ConfigError, ValueError, OSError) as exc:
        parser.error(str(exc))

    _print_banner()
    if tui:
        _ui(loaded.search)
    else:
        _search(loaded.search, args)


if __name__ == "__main__":
    main()
