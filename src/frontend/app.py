"""Main Textual app for the template search page."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, DataTable, Footer, Input, Static

from client import build_driver
from core.config import SearchConfig
from core.driver import SearchDriver
from core.events import FilterEdited, SearchTriggered
from core.models import ViewState
from core.view import ViewDescription, render

from .constants import ACCENT, SEARCHING_TEXT
from .validators import field_from_input_id, field_update_from_input, input_id_for


class TemplateSearchApp(App):
    """Filter form and result table, re-rendered from each ViewState."""

    CSS = """
    Screen {
        background: #14161a;
        color: #e8eef5;
    }

    #header {
        height: 3;
        padding: 1 2 0 2;
    }

    #filters {
        height: auto;
        padding: 0 2;
    }

    #filters Input {
        width: 1fr;
    }

    #search-btn {
        min-width: 12;
    }

    #status {
        height: 1;
        padding: 0 2;
        color: #c6d2dd;
    }

    #results {
        height: 1fr;
        margin: 1 2;
    }
    """

    BINDINGS = [
        ("ctrl+r", "search", "Search"),
    ]

    def __init__(self, config: SearchConfig, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._search_driver: SearchDriver = build_driver(config, self._on_state_change)
        self._shown_rows: Optional[Tuple[Tuple[str, ...], ...]] = None
        self._table_ready = False

    @property
    def search_state(self) -> ViewState:
        return self._search_driver.state

    def compose(self) -> ComposeResult:
        view = render(self._search_driver.state)
        with Container(id="header"):
            yield Static(self._title_text(view.title), id="title")
        with Horizontal(id="filters"):
            for item in view.inputs:
                yield Input(
                    value=item.value,
                    placeholder=item.label,
                    name=item.label,
                    id=input_id_for(item.field),
                )
            yield Button(view.search_label, id="search-btn", variant="primary")
        yield Static("", id="status")
        yield DataTable(id="results", cursor_type="row")
        yield Footer()

    def on_mount(self) -> None:
        view = render(self._search_driver.state)
        table = self.query_one("#results", DataTable)
        table.add_columns(*view.headers)
        table.zebra_stripes = True
        self._table_ready = True
        self._apply_view(view)
        self.run_worker(self._search_driver.run(), name="search-driver", exclusive=True)

    async def on_unmount(self) -> None:
        await self._search_driver.aclose()

    @on(Input.Changed)
    def _on_filter_changed(self, event: Input.Changed) -> None:
        filter_field = field_from_input_id(event.input.id)
        if filter_field is None:
            return
        self._search_driver.dispatch(FilterEdited(field_update_from_input(filter_field, event.value)))

    @on(Input.Submitted)
    def _on_filter_submitted(self) -> None:
        self.action_search()

    @on(Button.Pressed, "#search-btn")
    def _on_search_pressed(self) -> None:
        self.action_search()

    def action_search(self) -> None:
        self._search_driver.dispatch(SearchTriggered())

    def _on_state_change(self, state: ViewState) -> None:
        self._apply_view(render(state))

    def _apply_view(self, view: ViewDescription) -> None:
        # Inputs own their text while the user types; only the table and the
        # status line are driven from state.
        if not self._table_ready:
            return
        if view.rows != self._shown_rows:
            table = self.query_one("#results", DataTable)
            table.clear()
            for cells in view.rows:
                table.add_row(*cells)
            self._shown_rows = view.rows
        status = SEARCHING_TEXT if view.searching else f"{len(view.rows)} templates"
        self.query_one("#status", Static).update(status)

    @staticmethod
    def _title_text(title: str) -> Text:
        return Text.assemble(
            ("TEMPLATES", ACCENT),
            (f" > {title}", "bold"),
        )
