"""Button-triggered select, driven by a SelectController."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import DescendantBlur, Key
from textual.message import Message
from textual.widgets import Button, OptionList

from selectkit.model.controller import SelectController
from selectkit.ui.autocomplete import KEYS
from selectkit.ui.listbox import DropdownList
from selectkit.ui.watcher import ControllerWatcherMixin


def trigger_label(controller: SelectController, placeholder: str) -> str:
    """Text for the trigger: selected labels, or the placeholder.

    Values with no matching option show as the raw value.
    """
    labels = [label or value for value, label in controller.selected_options]
    return ", ".join(labels) if labels else placeholder


class Select(ControllerWatcherMixin, Container):
    """A trigger button that opens a list of options. No text query."""

    DEFAULT_CSS = """
    Select {
        height: auto;
    }

    Select > Button {
        width: 100%;
    }
    """

    class Changed(Message):
        """Posted when the selection changes."""

        def __init__(self, select: Select, selection: list[str]) -> None:
            super().__init__()
            self.select = select
            self.selection = selection

        @property
        def control(self) -> Select:
            return self.select

    def __init__(
        self,
        controller: SelectController,
        *,
        placeholder: str = "Select an option...",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._init_watcher()
        self.controller = controller
        self._placeholder = placeholder
        self._last_selection = controller.selection

    def compose(self) -> ComposeResult:
        yield Button(trigger_label(self.controller, self._placeholder), disabled=self.controller.disabled)
        yield DropdownList(id=self.controller.list_id)

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
        button = self.query_one(Button)
        button.label = trigger_label(self.controller, self._placeholder)
        button.disabled = self.controller.disabled
        self.query_one(DropdownList).show_state(self.controller)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.controller.toggle_open()

    def _on_key(self, event: Key) -> None:
        key = KEYS.get(event.key)
        if key is None:
            return
        controller = self.controller
        if key in ("ArrowDown", "ArrowUp") and not controller.is_open:
            handled = controller.on_trigger_activate()
        else:
            handled = controller.on_key_down(key)
        if handled:
            event.prevent_default()
            event.stop()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        if event.option.id is not None:
            self.controller.on_option_pointer_select(event.option.id)

    def on_descendant_blur(self, event: DescendantBlur) -> None:
        self.call_after_refresh(self._maybe_close_on_blur)

    def _maybe_close_on_blur(self) -> None:
        if not self.is_attached:
            return
        focused = self.app.focused
        if focused is None or focused not in self.walk_children():
            self.controller.on_blur()
