"""Textual widgets for selectkit."""

from selectkit.ui.app import SelectkitApp
from selectkit.ui.autocomplete import Autocomplete
from selectkit.ui.listbox import DropdownList, option_prompt
from selectkit.ui.select import Select, trigger_label
from selectkit.ui.watcher import ControllerWatcherMixin, timer_scheduler

__all__ = [
    "Autocomplete",
    "ControllerWatcherMixin",
    "DropdownList",
    "Select",
    "SelectkitApp",
    "option_prompt",
    "timer_scheduler",
    "trigger_label",
]
