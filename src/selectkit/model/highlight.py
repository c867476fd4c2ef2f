"""Keyboard highlight over the visible option list."""

from __future__ import annotations

from enum import Enum
from typing import Callable

from selectkit.model.option import Option
from selectkit.model.selection import CommitResult


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"
    FIRST = "first"
    LAST = "last"


class Highlighter:
    """Tracks the highlighted index into the current filtered options.

    Next/prev skip disabled options. At either end the highlight clamps in
    place, or wraps around when ``wrap`` is set. First/last jump straight to
    the ends even if that option is disabled.
    """

    def __init__(self, wrap: bool = False) -> None:
        self.wrap = wrap
        self.index = -1
        self._options: list[Option] = []

    @property
    def active(self) -> Option | None:
        """The highlighted option, if any."""
        if 0 <= self.index < len(self._options):
            return self._options[self.index]
        return None

    def reset(self, options: list[Option]) -> None:
        """Adopt a new filtered list and highlight its first entry."""
        self._options = options
        self.index = 0 if options else -1

    def move(self, direction: Direction | str) -> int:
        direction = Direction(direction)
        count = len(self._options)
        if not count:
            return self.index
        if direction is Direction.FIRST:
            self.index = 0
        elif direction is Direction.LAST:
            self.index = count - 1
        else:
            self.index = self._step(1 if direction is Direction.NEXT else -1)
        return self.index

    def _step(self, step: int) -> int:
        count = len(self._options)
        pos = self.index
        if pos < 0:
            pos = -1 if step > 0 else count
        for _ in range(count):
            pos += step
            if self.wrap:
                pos %= count
            elif not 0 <= pos < count:
                return self.index
            if not self._options[pos].disabled:
                return pos
        return self.index

    def commit_highlighted(self, commit: Callable[[str], CommitResult]) -> CommitResult | None:
        """Hand the highlighted option to ``commit`` unless it is disabled."""
        option = self.active
        if option is None or option.disabled:
            return None
        return commit(option.value)
