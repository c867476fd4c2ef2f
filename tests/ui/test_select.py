"""Tests for the Select widget."""

import pytest
from textual.app import App, ComposeResult
from textual.widgets import Button, Input

from selectkit.model.controller import SelectController
from selectkit.ui.listbox import DropdownList
from selectkit.ui.select import Select


class SelectApp(App):
    """Minimal app for testing Select."""

    def __init__(self, controller: SelectController):
        super().__init__()
        self.controller = controller
        self.changes = []

    def compose(self) -> ComposeResult:
        yield Input(id="other")
        yield Select(self.controller, placeholder="Pick a fruit")

    def on_select_changed(self, event: Select.Changed) -> None:
        self.changes.append(event.selection)


@pytest.fixture
def app(controller):
    return SelectApp(controller)


def _button(app: App) -> Button:
    return app.query_one(Select).query_one(Button)


def _dropdown(app: App) -> DropdownList:
    return app.query_one(Select).query_one(DropdownList)


@pytest.mark.asyncio
async def test_initial_state(app):
    async with app.run_test():
        assert str(_button(app).label) == "Pick a fruit"
        assert not _dropdown(app).has_class("-visible")


@pytest.mark.asyncio
async def test_button_toggles_dropdown(app):
    async with app.run_test() as pilot:
        _button(app).press()
        await pilot.pause()
        assert app.controller.is_open
        assert _dropdown(app).has_class("-visible")

        _button(app).press()
        await pilot.pause()
        assert not app.controller.is_open


@pytest.mark.asyncio
async def test_arrow_opens_then_enter_commits(app):
    async with app.run_test() as pilot:
        _button(app).focus()
        await pilot.press("down")
        assert app.controller.is_open
        await pilot.press("down", "down", "down", "enter")
        await pilot.pause()
        # cherry -> date is disabled, so the third Down lands on elderberry
        assert app.controller.selection == ["elderberry"]
        assert str(_button(app).label) == "Elderberry"
        assert not app.controller.is_open
        assert app.changes == [["elderberry"]]


@pytest.mark.asyncio
async def test_escape_closes(app):
    async with app.run_test() as pilot:
        _button(app).focus()
        await pilot.press("down", "escape")
        assert not app.controller.is_open


@pytest.mark.asyncio
async def test_option_click_commits(app):
    async with app.run_test() as pilot:
        _button(app).press()
        await pilot.pause()
        app.controller.on_key_down("ArrowDown")
        _dropdown(app).action_select()
        await pilot.pause()
        assert app.controller.selection == ["banana"]
        assert str(_button(app).label) == "Banana"


@pytest.mark.asyncio
async def test_blur_closes(app):
    async with app.run_test() as pilot:
        _button(app).focus()
        await pilot.press("down")
        app.query_one("#other", Input).focus()
        await pilot.pause()
        await pilot.pause()
        assert not app.controller.is_open


@pytest.mark.asyncio
async def test_multiple_selection_label(fruit):
    app = SelectApp(SelectController(fruit, mode="multiple", default_value=["cherry", "apple"]))
    async with app.run_test():
        assert str(_button(app).label) == "Cherry, Apple"


@pytest.mark.asyncio
async def test_unmount_keeps_controller_usable(app):
    """The widget borrows the controller and does not dispose it."""
    seen = []
    app.controller.watch(seen.append)
    async with app.run_test() as pilot:
        await app.query_one(Select).remove()
        await pilot.pause()
        seen.clear()
        assert app.controller.toggle_open()
        assert seen == [app.controller]
