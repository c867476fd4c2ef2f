"""Text query state, debouncing and option filtering."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Callable

from selectkit.model.option import Option

logger = logging.getLogger(__name__)

Predicate = Callable[[Option, str], bool]

# (delay_seconds, callback) -> cancel
Scheduler = Callable[[float, Callable[[], None]], Callable[[], None]]


def _no_cancel() -> None:
    pass


def asyncio_scheduler(delay: float, callback: Callable[[], None]) -> Callable[[], None]:
    """Schedule a one-shot callback on the running event loop.

    Outside a loop there is nothing to wait on, so the callback runs at once.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.warning("no running event loop, settling debounced query immediately")
        callback()
        return _no_cancel
    return loop.call_later(delay, callback).cancel


def default_predicate(option: Option, query: str) -> bool:
    """Case-insensitive substring match against the label."""
    return query.lower() in option.label.lower()


def filter_options(
    options: Iterable[Option],
    query: str,
    predicate: Predicate | None = None,
    min_search_length: int = 0,
) -> list[Option]:
    """Return the visible subset of options for a query.

    An empty query, or one shorter than ``min_search_length``, shows every
    option. Otherwise options are kept in their original order when the
    predicate accepts them. A predicate that raises rejects that option only.
    """
    if not query or len(query) < min_search_length:
        return list(options)
    predicate = predicate or default_predicate
    matches = []
    for option in options:
        try:
            matched = predicate(option, query)
        except Exception:
            logger.warning("filter predicate failed for option %r", option.value, exc_info=True)
            continue
        if matched:
            matches.append(option)
    return matches


def match_spans(label: str, query: str) -> list[tuple[int, int]]:
    """Find non-overlapping case-insensitive occurrences of query in label.

    "Elderberry", "er" → [(3, 5), (6, 8)]
    """
    if not query:
        return []
    haystack = label.lower()
    needle = query.lower()
    spans = []
    start = haystack.find(needle)
    while start != -1:
        end = start + len(needle)
        spans.append((start, end))
        start = haystack.find(needle, end)
    return spans


class QueryState:
    """Raw text query plus its debounced counterpart.

    ``raw`` follows every keystroke. ``debounced`` catches up once
    ``debounce_delay`` milliseconds pass without another ``set_query``.
    Only the last query of a burst ever reaches ``on_search``.
    """

    def __init__(
        self,
        debounce_delay: int = 0,
        on_search: Callable[[str], None] | None = None,
        on_debounced: Callable[[str], None] | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        if debounce_delay < 0:
            raise ValueError(f"debounce_delay must be >= 0, got {debounce_delay}")
        self.debounce_delay = debounce_delay
        self.raw = ""
        self.debounced = ""
        self._on_search = on_search
        self._on_debounced = on_debounced
        self._scheduler = scheduler or asyncio_scheduler
        self._cancel_timer: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        """True while a debounce timer is waiting to fire."""
        return self._cancel_timer is not None

    def set_query(self, raw: str) -> None:
        self.raw = raw
        self.cancel()
        if self.debounce_delay == 0 or raw == self.debounced:
            self._settle(raw)
            return
        cancel = self._scheduler(self.debounce_delay / 1000, lambda: self._fire(raw))
        # A scheduler may run the callback before returning
        if self.debounced != raw:
            self._cancel_timer = cancel

    def reset(self) -> bool:
        """Clear both queries at once without notifying ``on_search``.

        Returns True if the debounced query changed.
        """
        self.cancel()
        changed = self.debounced != ""
        self.raw = ""
        self.debounced = ""
        return changed

    def cancel(self) -> None:
        """Drop any pending debounce timer."""
        cancel, self._cancel_timer = self._cancel_timer, None
        if cancel is not None:
            cancel()

    dispose = cancel

    def _fire(self, raw: str) -> None:
        self._cancel_timer = None
        self._settle(raw)

    def _settle(self, value: str) -> None:
        if value == self.debounced:
            return
        self.debounced = value
        if self._on_debounced is not None:
            self._on_debounced(value)
        if value and self._on_search is not None:
            self._on_search(value)

    def __repr__(self) -> str:
        return f"<QueryState raw={self.raw!r} debounced={self.debounced!r}>"
