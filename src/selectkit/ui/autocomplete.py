"""Autocomplete input with a filterable dropdown, driven by a SelectController."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import DescendantBlur, DescendantFocus, Key
from textual.message import Message
from textual.widgets import Input, OptionList, Static

from selectkit.model.controller import SelectController, empty_message
from selectkit.ui.listbox import DropdownList
from selectkit.ui.watcher import ControllerWatcherMixin

# Textual key names -> controller key names
KEYS = {
    "down": "ArrowDown",
    "up": "ArrowUp",
    "home": "Home",
    "end": "End",
    "enter": "Enter",
    "escape": "Escape",
}


class Autocomplete(ControllerWatcherMixin, Container):
    """Text input plus dropdown. All state lives in the controller.

    The widget forwards typing, keys, clicks and focus changes to the
    controller and re-renders whenever it reports a change. The controller
    is borrowed: unmounting drops the widget's watches but leaves disposal
    to whoever created it.
    """

    DEFAULT_CSS = """
    Autocomplete {
        height: auto;
    }

    Autocomplete > .empty {
        display: none;
        color: $text-muted;
        padding: 0 1;
    }

    Autocomplete > .empty.-visible {
        display: block;
    }
    """

    class Changed(Message):
        """Posted when the selection changes."""

        def __init__(self, autocomplete: Autocomplete, selection: list[str]) -> None:
            super().__init__()
            self.autocomplete = autocomplete
            self.selection = selection

        @property
        def control(self) -> Autocomplete:
            return self.autocomplete

    class Cancelled(Message):
        """Posted on Escape while the dropdown is already closed."""

        pass

    def __init__(
        self,
        controller: SelectController,
        *,
        placeholder: str = "Search...",
        highlight_matches: bool = False,
        open_on_focus: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._init_watcher()
        self.controller = controller
        self._placeholder = placeholder
        self._highlight_matches = highlight_matches
        self._open_on_focus = open_on_focus
        self._last_selection = controller.selection

    def compose(self) -> ComposeResult:
        yield Input(
            placeholder=self._placeholder,
            value=self.controller.display_value,
            disabled=self.controller.disabled,
        )
        yield DropdownList(highlight_matches=self._highlight_matches, id=self.controller.list_id)
        yield Static("", classes="empty")

    def on_mount(self) -> None:
        self.controller_watch(self.controller, self._on_controller_changed)
        self._render_state()

    def _on_controller_changed(self, controller: SelectController) -> None:
        self._render_state()
        selection = controller.selection
        if selection != self._last_selection:
            self._last_selection = selection
            self.post_message(self.Changed(self, selection))

    def _render_state(self) -> None:
        if not self.is_attached:
            return
        controller = self.controller
        inp = self.query_one(Input)
        inp.disabled = controller.disabled
        # While typing the Input owns its text; only push label/reset text
        if not controller.query and inp.value != controller.display_value:
            inp.value = controller.display_value
        self.query_one(DropdownList).show_state(controller)
        message = empty_message(controller)
        empty = self.query_one(".empty", Static)
        empty.update(message or "")
        empty.set_class(message is not None, "-visible")

    def on_input_changed(self, event: Input.Changed) -> None:
        """Feed every keystroke to the controller."""
        if event.value == self.controller.display_value:
            return
        self.controller.on_query_input(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()

    def _on_key(self, event: Key) -> None:
        """Intercept navigation keys bubbling up from the Input."""
        key = KEYS.get(event.key)
        if key is None:
            return
        if self.controller.on_key_down(key):
            event.prevent_default()
            event.stop()
        elif key == "Escape":
            event.prevent_default()
            event.stop()
            self.post_message(self.Cancelled())

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        """Handle mouse click on a dropdown item."""
        event.stop()
        if event.option.id is not None:
            self.controller.on_option_pointer_select(event.option.id)

    def on_descendant_focus(self, event: DescendantFocus) -> None:
        if self._open_on_focus:
            self.controller.on_trigger_activate()

    def on_descendant_blur(self, event: DescendantBlur) -> None:
        """Close dropdown when focus leaves a child widget."""
        self.call_after_refresh(self._maybe_close_on_blur)

    def _maybe_close_on_blur(self) -> None:
        """Close dropdown if focus has truly left us."""
        if not self.is_attached:
            return
        focused = self.app.focused
        if focused is None or focused not in self.walk_children():
            self.controller.on_blur()

    def clear(self) -> None:
        """Clear the selection and query, keeping focus in the input."""
        if self.controller.clear():
            self.query_one(Input).focus()
