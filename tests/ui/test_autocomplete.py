"""Tests for the Autocomplete widget."""

import pytest
from textual.app import App, ComposeResult
from textual.widgets import Input, Static

from selectkit.model.controller import SelectController
from selectkit.model.option import Option
from selectkit.ui.autocomplete import Autocomplete
from selectkit.ui.listbox import DropdownList


class AutocompleteApp(App):
    """Minimal app for testing Autocomplete."""

    def __init__(self, controller: SelectController, **kwargs):
        super().__init__()
        self.controller = controller
        self._kwargs = kwargs
        self.changes = []
        self.cancelled = 0

    def compose(self) -> ComposeResult:
        yield Input(id="other")
        yield Autocomplete(self.controller, **self._kwargs)

    def on_autocomplete_changed(self, event: Autocomplete.Changed) -> None:
        self.changes.append(event.selection)

    def on_autocomplete_cancelled(self, event: Autocomplete.Cancelled) -> None:
        self.cancelled += 1


@pytest.fixture
def app(controller):
    return AutocompleteApp(controller)


def _dropdown(app: App) -> DropdownList:
    return app.query_one(Autocomplete).query_one(DropdownList)


def _input(app: App) -> Input:
    return app.query_one(Autocomplete).query_one(Input)


def _empty(app: App) -> Static:
    return app.query_one(Autocomplete).query_one(".empty", Static)


@pytest.mark.asyncio
async def test_initial_state(app):
    """Closed, empty, dropdown hidden."""
    async with app.run_test():
        assert _input(app).value == ""
        assert not _dropdown(app).has_class("-visible")
        assert not app.controller.is_open


@pytest.mark.asyncio
async def test_focus_opens_full_list(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.pause()
        dropdown = _dropdown(app)
        assert app.controller.is_open
        assert dropdown.has_class("-visible")
        assert dropdown.option_count == 5
        assert dropdown.highlighted == 0


@pytest.mark.asyncio
async def test_typing_filters(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("b", "e", "r")
        assert app.controller.query == "ber"
        dropdown = _dropdown(app)
        assert dropdown.option_count == 1
        assert dropdown.get_option_at_index(0).id == "elderberry"


@pytest.mark.asyncio
async def test_keyboard_commit(app):
    """Down skips nothing here; Enter commits and shows the label."""
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("down", "enter")
        await pilot.pause()
        assert app.controller.selection == ["banana"]
        assert _input(app).value == "Banana"
        assert not _dropdown(app).has_class("-visible")
        assert app.changes == [["banana"]]
        assert app.controller.query == ""


@pytest.mark.asyncio
async def test_down_skips_disabled(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("end", "up")
        assert app.controller.active_option_value == "cherry"
        assert _dropdown(app).highlighted == 2


@pytest.mark.asyncio
async def test_escape_closes_then_cancels(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a", "p")
        await pilot.press("escape")
        await pilot.pause()
        assert not app.controller.is_open
        assert app.controller.query == ""
        assert _input(app).value == ""
        assert app.cancelled == 0

        await pilot.press("escape")
        await pilot.pause()
        assert app.cancelled == 1


@pytest.mark.asyncio
async def test_option_click_commits(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("c", "h")
        _dropdown(app).action_select()
        await pilot.pause()
        assert app.controller.selection == ["cherry"]
        assert _input(app).value == "Cherry"


@pytest.mark.asyncio
async def test_blur_closes(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("a")
        app.query_one("#other", Input).focus()
        await pilot.pause()
        await pilot.pause()
        assert not app.controller.is_open
        assert app.controller.query == ""


@pytest.mark.asyncio
async def test_no_results_message(app):
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("x", "y", "z")
        await pilot.pause()
        assert _empty(app).has_class("-visible")
        assert not _dropdown(app).has_class("-visible")


@pytest.mark.asyncio
async def test_multiple_mode_stays_open(fruit):
    app = AutocompleteApp(SelectController(fruit, mode="multiple"))
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("enter", "down", "enter")
        await pilot.pause()
        assert app.controller.selection == ["apple", "banana"]
        assert app.controller.is_open
        assert _input(app).value == ""
        assert str(_dropdown(app).get_option_at_index(0).prompt).startswith("✓")


@pytest.mark.asyncio
async def test_controlled_value_waits_for_owner(fruit):
    changes = []
    controller = SelectController(fruit, value="", on_change=changes.append)
    app = AutocompleteApp(controller)
    async with app.run_test() as pilot:
        _input(app).focus()
        await pilot.press("enter")
        await pilot.pause()
        assert changes == ["apple"]
        assert _input(app).value == ""

        controller.set_value("apple")
        await pilot.pause()
        assert _input(app).value == "Apple"


@pytest.mark.asyncio
async def test_disabled_controller_disables_input(controller):
    app = AutocompleteApp(controller)
    async with app.run_test() as pilot:
        controller.set_disabled(True)
        await pilot.pause()
        assert _input(app).disabled


@pytest.mark.asyncio
async def test_clear_refocuses_input(fruit):
    controller = SelectController([*fruit, Option("fig", "Fig")], default_value="fig")
    app = AutocompleteApp(controller)
    async with app.run_test() as pilot:
        assert _input(app).value == "Fig"
        app.query_one(Autocomplete).clear()
        await pilot.pause()
        assert controller.selection == []
        assert _input(app).value == ""
        assert app.focused is _input(app)


@pytest.mark.asyncio
async def test_unmount_keeps_owner_watch(app):
    """Removing the widget drops only its own watch."""
    seen = []
    owner_watch = seen.append
    app.controller.watch(owner_watch)
    async with app.run_test() as pilot:
        await app.query_one(Autocomplete).remove()
        await pilot.pause()
        assert app.controller._watchers == [owner_watch]
        app.controller.on_trigger_activate()
        assert seen[-1] is app.controller
