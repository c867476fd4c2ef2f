"""Framework-agnostic selection-widget state machine."""

from selectkit.model.bridge import ControlledValue
from selectkit.model.controller import EmptyState, SelectController, empty_message
from selectkit.model.highlight import Direction, Highlighter
from selectkit.model.lifecycle import TRANSITIONS, Transition, Trigger, transition_for
from selectkit.model.option import Option, find_option, normalize_options
from selectkit.model.query import (
    QueryState,
    asyncio_scheduler,
    default_predicate,
    filter_options,
    match_spans,
)
from selectkit.model.selection import CommitResult, Mode, clear, commit, parse_mode

__all__ = [
    "TRANSITIONS",
    "CommitResult",
    "ControlledValue",
    "Direction",
    "EmptyState",
    "Highlighter",
    "Mode",
    "Option",
    "QueryState",
    "SelectController",
    "Transition",
    "Trigger",
    "asyncio_scheduler",
    "clear",
    "commit",
    "default_predicate",
    "empty_message",
    "filter_options",
    "find_option",
    "match_spans",
    "normalize_options",
    "parse_mode",
    "transition_for",
]
