"""Selection-widget controller: the state machine behind Autocomplete and Select.

One ``SelectController`` per widget. The presentation layer forwards user
intent (``on_query_input``, ``on_key_down``, ...) and re-reads the outputs
(``is_open``, ``selection``, ``filtered_options``, ``highlight_index``)
whenever a watcher fires. Every event is applied as a single batch, so
watchers never observe a half-updated state.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable

from selectkit.model.bridge import ControlledValue
from selectkit.model.highlight import Direction, Highlighter
from selectkit.model.lifecycle import Trigger, transition_for
from selectkit.model.option import Option, find_option, normalize_options
from selectkit.model.query import Predicate, QueryState, Scheduler, filter_options
from selectkit.model.selection import CommitResult, Mode, clear, commit, parse_mode

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    "ArrowDown": Direction.NEXT,
    "ArrowUp": Direction.PREV,
    "Home": Direction.FIRST,
    "End": Direction.LAST,
}

ControllerCallback = Callable[["SelectController"], None]


class EmptyState(Enum):
    """What an open list with nothing to show should say instead."""

    NONE = "none"
    LOADING = "loading"
    MIN_LENGTH = "min_length"
    CREATE = "create"
    NO_RESULTS = "no_results"


def _as_selection(value: str | Iterable[str] | None) -> list[str] | None:
    """Normalize a caller-supplied value to a selection list.

    None stays None (not supplied); a string is a single value and the
    empty string means nothing selected.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return [value] if value else []
    return list(value)


class SelectController:
    """Open state, selection, query and highlight for one dropdown widget."""

    def __init__(
        self,
        options: Iterable[Any] = (),
        *,
        mode: str | Mode = Mode.SINGLE,
        value: str | Iterable[str] | None = None,
        default_value: str | Iterable[str] | None = None,
        on_change: Callable[[str | list[str]], None] | None = None,
        open: bool | None = None,
        default_open: bool = False,
        on_open_change: Callable[[bool], None] | None = None,
        disabled: bool = False,
        predicate: Predicate | None = None,
        debounce_delay: int = 0,
        min_search_length: int = 0,
        on_search: Callable[[str], None] | None = None,
        wrap_navigation: bool = False,
        allow_create: bool = False,
        on_create_option: Callable[[str], None] | None = None,
        restrict_to_visible: bool = False,
        loading: bool = False,
        list_id: str | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.mode = parse_mode(mode)
        self.list_id = list_id or f"selectkit-{uuid.uuid4().hex[:8]}"
        self.allow_create = allow_create
        self.restrict_to_visible = restrict_to_visible
        self._on_change = on_change
        self._on_create_option = on_create_option
        self._reported: set[str] = set()
        self._options = normalize_options(options, self._reported)
        self._disabled = disabled
        self._loading = loading
        self._predicate = predicate
        self._min_search_length = min_search_length
        self._watchers: list[ControllerCallback] = []
        self._batch_depth = 0
        self._dirty = False

        self._selection: ControlledValue[list[str]] = ControlledValue(
            _as_selection(value),
            _as_selection(default_value) or [],
            self._emit_change,
        )
        self._open: ControlledValue[bool] = ControlledValue(open, default_open and not disabled, on_open_change)
        self._query = QueryState(
            debounce_delay,
            on_search=on_search,
            on_debounced=self._on_debounced,
            scheduler=scheduler,
        )
        self._highlight = Highlighter(wrap=wrap_navigation)
        self._filtered: list[Option] = []
        self._selection.watch(self._touch)
        self._open.watch(self._touch)
        self._refilter()
        self._dirty = False

    # -- outputs -----------------------------------------------------------

    @property
    def options(self) -> list[Option]:
        return self._options

    @property
    def is_open(self) -> bool:
        return bool(self._open.read())

    @property
    def selection(self) -> list[str]:
        values = list(self._selection.read())
        if self.mode is Mode.SINGLE:
            return values[:1]
        return values

    @property
    def filtered_options(self) -> list[Option]:
        """Visible options. A new list after every recompute; do not mutate."""
        return self._filtered

    @property
    def highlight_index(self) -> int:
        return self._highlight.index

    @property
    def active_option(self) -> Option | None:
        return self._highlight.active

    @property
    def active_option_value(self) -> str | None:
        option = self._highlight.active
        return option.value if option is not None else None

    @property
    def query(self) -> str:
        return self._query.raw

    @property
    def debounced_query(self) -> str:
        return self._query.debounced

    @property
    def disabled(self) -> bool:
        return self._disabled

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def min_search_length(self) -> int:
        return self._min_search_length

    @property
    def wrap_navigation(self) -> bool:
        return self._highlight.wrap

    @property
    def display_value(self) -> str:
        """Text for the input: the query while typing, else the chosen label."""
        if self._query.raw:
            return self._query.raw
        selection = self.selection
        if self.mode is Mode.SINGLE and len(selection) == 1:
            return self.option_label(selection[0]) or ""
        return ""

    @property
    def selected_options(self) -> list[tuple[str, str | None]]:
        """(value, label) pairs in selection order. Unknown values get None."""
        return [(value, self.option_label(value)) for value in self.selection]

    @property
    def can_clear(self) -> bool:
        return not self._disabled and bool(self.selection or self._query.raw)

    @property
    def active_descendant(self) -> str | None:
        """Identifier of the highlighted option while the list is open."""
        value = self.active_option_value
        if not self.is_open or value is None:
            return None
        return self.option_id(value)

    @property
    def empty_state(self) -> EmptyState:
        if not self.is_open:
            return EmptyState.NONE
        if self._loading:
            return EmptyState.LOADING
        query = self._query.raw
        if query and len(query) < self._min_search_length:
            return EmptyState.MIN_LENGTH
        if query and not self._filtered:
            return EmptyState.CREATE if self.allow_create else EmptyState.NO_RESULTS
        return EmptyState.NONE

    def option_label(self, value: str) -> str | None:
        option = find_option(self._options, value)
        return option.label if option is not None else None

    def is_selected(self, value: str) -> bool:
        return value in self.selection

    def option_id(self, value: str) -> str:
        return f"{self.list_id}-option-{value}"

    def watch(self, callback: ControllerCallback) -> Callable[[], None]:
        """Call ``callback(controller)`` after every state change. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    # -- user intent -------------------------------------------------------

    def on_query_input(self, text: str) -> None:
        """Typed text: update the query and open the list."""
        if self._disabled:
            return
        with self._batch():
            self._query.set_query(text)
            self._touch()
            self._apply(Trigger.ACTIVATE)

    def on_key_down(self, key: str) -> bool:
        """Handle a navigation key. Returns True if the key was consumed."""
        if key == "Escape":
            return self._apply(Trigger.ESCAPE)
        if not self.is_open or self._disabled:
            return False
        direction = KEY_DIRECTIONS.get(key)
        if direction is not None:
            before = self._highlight.index
            if self._highlight.move(direction) != before:
                self._touch()
            return True
        if key == "Enter":
            if self.commit_highlighted():
                return True
            if self.empty_state is EmptyState.CREATE:
                return self.create_option()
            return False
        return False

    def commit_highlighted(self) -> bool:
        """Commit the highlighted option. Returns True if it was accepted."""
        if self._disabled:
            return False
        result = self._highlight.commit_highlighted(self._commit)
        return result is not None and result.accepted

    def on_option_pointer_select(self, value: str) -> bool:
        """Commit an option chosen by pointer. Returns True if accepted.

        The value need not be visible (or even known) unless
        ``restrict_to_visible`` is set; a known disabled option is refused.
        """
        if self.restrict_to_visible and find_option(self._filtered, value) is None:
            logger.debug("%s: refusing pointer select of hidden option %r", self.list_id, value)
            return False
        option = find_option(self._options, value)
        return self._commit(value, disabled=option is not None and option.disabled).accepted

    def on_outside_interaction(self) -> bool:
        return self._apply(Trigger.OUTSIDE)

    def on_blur(self) -> bool:
        return self._apply(Trigger.BLUR)

    def on_trigger_activate(self) -> bool:
        return self._apply(Trigger.ACTIVATE)

    def toggle_open(self) -> bool:
        """Open if closed, dismiss if open (the dropdown chevron)."""
        return self._apply(Trigger.DISMISS if self.is_open else Trigger.ACTIVATE)

    def close(self) -> bool:
        return self._apply(Trigger.DISMISS)

    def clear(self) -> bool:
        """Empty the selection and query. Returns True if the input should refocus."""
        if self._disabled:
            return False
        result = clear()
        with self._batch():
            self._selection.write(result.selection)
            if result.clear_query:
                self._reset_query()
        return result.refocus

    def create_option(self) -> bool:
        """Offer the current query as a new option via ``on_create_option``."""
        query = self._query.raw
        if self._disabled or not self.allow_create or not query or self._on_create_option is None:
            return False
        self._on_create_option(query)
        return True

    # -- caller-supplied props ---------------------------------------------

    def set_options(self, options: Iterable[Any]) -> None:
        with self._batch():
            self._options = normalize_options(options, self._reported)
            self._refilter()

    def set_value(self, value: str | Iterable[str] | None) -> None:
        """Feed back the owner's selection (None returns ownership to us)."""
        self._selection.set_external(_as_selection(value))

    def set_open(self, open: bool | None) -> None:
        """Feed back the owner's open flag. Closing resets the query."""
        with self._batch():
            was_open = self.is_open
            self._open.set_external(open)
            if was_open and not self.is_open:
                self._reset_query()

    def set_disabled(self, disabled: bool) -> None:
        if disabled == self._disabled:
            return
        with self._batch():
            self._disabled = disabled
            self._touch()
            if disabled:
                self._apply(Trigger.DISABLED)

    def set_predicate(self, predicate: Predicate | None) -> None:
        with self._batch():
            self._predicate = predicate
            self._refilter()

    def set_min_search_length(self, min_search_length: int) -> None:
        with self._batch():
            self._min_search_length = min_search_length
            self._refilter()

    def set_loading(self, loading: bool) -> None:
        if loading != self._loading:
            self._loading = loading
            self._touch()

    def dispose(self) -> None:
        """Cancel pending timers and drop watchers."""
        self._query.dispose()
        self._watchers.clear()

    # -- internals ---------------------------------------------------------

    def _commit(self, value: str, disabled: bool = False) -> CommitResult:
        result = commit(value, self.selection, self.mode, disabled or self._disabled)
        if not result.accepted:
            return result
        with self._batch():
            self._selection.write(result.selection)
            self._apply(Trigger.SINGLE_COMMIT if result.close else Trigger.MULTI_COMMIT)
        return result

    def _apply(self, trigger: Trigger) -> bool:
        transition = transition_for(trigger, self.is_open, self._disabled)
        if transition is None:
            return False
        logger.debug("%s: %s", self.list_id, trigger.value)
        with self._batch():
            if transition.open is not None and transition.open != self.is_open:
                self._open.write(transition.open)
            if transition.clear_query:
                self._reset_query()
        return True

    def _reset_query(self) -> None:
        self._query.reset()
        self._touch()
        self._refilter()

    def _on_debounced(self, query: str) -> None:
        with self._batch():
            self._refilter()

    def _refilter(self) -> None:
        self._filtered = filter_options(
            self._options,
            self._query.debounced,
            self._predicate,
            self._min_search_length,
        )
        self._highlight.reset(self._filtered)
        self._touch()

    def _emit_change(self, values: list[str]) -> None:
        if self._on_change is None:
            return
        if self.mode is Mode.MULTIPLE:
            self._on_change(list(values))
        else:
            self._on_change(values[0] if values else "")

    def _touch(self, *_: Any) -> None:
        self._dirty = True
        if not self._batch_depth:
            self._flush()

    @contextmanager
    def _batch(self):
        """Defer watcher notification until the outermost batch ends."""
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if not self._batch_depth and self._dirty:
                self._flush()

    def _flush(self) -> None:
        self._dirty = False
        for cb in list(self._watchers):
            cb(self)

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<SelectController {self.list_id} {self.mode.value} {state} {self.selection!r}>"


def empty_message(controller: SelectController, no_results: str = "No results found") -> str | None:
    """Default wording for the controller's current empty state."""
    state = controller.empty_state
    if state is EmptyState.LOADING:
        return "Loading options..."
    if state is EmptyState.MIN_LENGTH:
        n = controller.min_search_length
        return f"Type at least {n} character{'' if n == 1 else 's'} to search"
    if state is EmptyState.CREATE:
        return f'Create "{controller.query}"'
    if state is EmptyState.NO_RESULTS:
        return no_results
    return None
