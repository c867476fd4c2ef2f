"""Dropdown list that mirrors a controller's visible options."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import OptionList
from textual.widgets.option_list import Option as ListOption

from selectkit.model.controller import SelectController
from selectkit.model.option import Option
from selectkit.model.query import match_spans

CHECK = "✓ "
MATCH_STYLE = "bold underline"


def option_prompt(option: Option, *, selected: bool = False, query: str = "", highlight_matches: bool = False) -> Text:
    """Render an option label, marking the selection and query matches."""
    label = Text(option.label)
    if highlight_matches:
        for start, end in match_spans(option.label, query):
            label.stylize(MATCH_STYLE, start, end)
    prefix = Text.assemble((CHECK, "bold")) if selected else Text(" " * len(CHECK))
    return prefix + label


class DropdownList(OptionList):
    """Floating list of the controller's filtered options.

    Never takes focus: keyboard movement belongs to the controller, and the
    list only reflects its highlight. Clicks still post ``OptionSelected``.
    """

    can_focus = False

    DEFAULT_CSS = """
    DropdownList {
        height: auto;
        max-height: 10;
        display: none;
    }

    DropdownList.-visible {
        display: block;
    }
    """

    def __init__(self, highlight_matches: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.highlight_matches = highlight_matches
        self._rendered: tuple | None = None

    def show_state(self, controller: SelectController) -> None:
        """Repopulate if the visible options changed, then sync highlight and visibility."""
        options = controller.filtered_options
        key = (
            tuple(options),
            tuple(controller.selection),
            controller.debounced_query if self.highlight_matches else "",
        )
        if key != self._rendered:
            self._rendered = key
            self.clear_options()
            self.add_options(
                [
                    ListOption(
                        option_prompt(
                            option,
                            selected=controller.is_selected(option.value),
                            query=controller.debounced_query,
                            highlight_matches=self.highlight_matches,
                        ),
                        id=option.value,
                        disabled=option.disabled,
                    )
                    for option in options
                ]
            )
        index = controller.highlight_index
        self.highlighted = index if index >= 0 else None
        self.set_class(controller.is_open and bool(options), "-visible")
