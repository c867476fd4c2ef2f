"""Controlled/uncontrolled ownership of a single piece of widget state."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

Watcher = Callable[[T, T], None]


class ControlledValue(Generic[T]):
    """Uniform read/write surface over state that may be owned elsewhere.

    When ``external`` is not None the caller owns the value: reads return it,
    writes only notify ``on_change`` and never keep a shadow copy. When it is
    None the bridge owns the value and stores every write.

    A write in controlled mode does not change what ``read()`` returns until
    the owner feeds the new value back through ``set_external``.
    """

    def __init__(
        self,
        external: T | None,
        initial: T,
        on_change: Callable[[T], None] | None = None,
    ) -> None:
        self._external = external
        self._internal = initial
        self._on_change = on_change
        self._watchers: list[Watcher] = []

    @property
    def is_controlled(self) -> bool:
        return self._external is not None

    def read(self) -> T:
        if self._external is not None:
            return self._external
        return self._internal

    def write(self, next_value: T) -> None:
        """Request a change: notify the owner, store it only if we own it."""
        if self._on_change is not None:
            self._on_change(next_value)
        if self._external is None:
            old = self._internal
            self._internal = next_value
            self._emit(old, next_value)

    def set_external(self, external: T | None) -> None:
        """Apply the owner's current value (None hands ownership back)."""
        old = self.read()
        self._external = external
        new = self.read()
        if old != new:
            self._emit(old, new)

    def watch(self, callback: Watcher) -> Callable[[], None]:
        """Watch the readable value. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def _emit(self, old: T, new: T) -> None:
        if old == new:
            return
        for cb in list(self._watchers):
            cb(old, new)

    def __repr__(self) -> str:
        owner = "controlled" if self.is_controlled else "uncontrolled"
        return f"<ControlledValue {owner} {self.read()!r}>"
