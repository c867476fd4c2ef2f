"""Demo Textual application showing both widgets over one option set."""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Log, Static

from selectkit.config import WidgetConfig
from selectkit.ui.autocomplete import Autocomplete
from selectkit.ui.select import Select
from selectkit.ui.watcher import timer_scheduler


class SelectkitApp(App):
    """Autocomplete and Select side by side, with an event log."""

    CSS = """
    #widgets {
        height: auto;
        padding: 1 2;
    }
    .caption {
        color: $text-muted;
        margin-top: 1;
    }
    #events {
        height: 1fr;
        border: solid $surface-lighten-1;
    }
    """

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, config: WidgetConfig):
        super().__init__()
        self.config = config
        self.title = config.title
        self.autocomplete_controller = config.build_controller(
            on_change=lambda value: self._log_event("autocomplete change", value),
            on_open_change=lambda open: self._log_event("autocomplete open", open),
            on_search=lambda query: self._log_event("search", query),
            on_create_option=self._create_option,
            scheduler=timer_scheduler(self),
        )
        self.select_controller = config.build_controller(
            on_change=lambda value: self._log_event("select change", value),
            debounce_delay=0,
        )

    def compose(self) -> ComposeResult:
        with Vertical(id="widgets"):
            yield Static("Autocomplete", classes="caption")
            yield Autocomplete(
                self.autocomplete_controller,
                placeholder=self.config.placeholder,
                highlight_matches=self.config.highlight_matches,
            )
            yield Static("Select", classes="caption")
            yield Select(self.select_controller)
        yield Log(id="events")

    def on_unmount(self) -> None:
        # The widgets only borrow these; the app created them
        self.autocomplete_controller.dispose()
        self.select_controller.dispose()

    def _log_event(self, name: str, value: object) -> None:
        if self.is_running:
            self.query_one("#events", Log).write_line(f"{name}: {value!r}")

    def _create_option(self, query: str) -> None:
        """Append the typed query as a new option on both widgets."""
        self._log_event("create", query)
        for controller in (self.autocomplete_controller, self.select_controller):
            controller.set_options([*controller.options, {"value": query, "label": query}])
