"""Mixin that manages controller watches with auto-cleanup."""

from __future__ import annotations

from typing import Callable

from textual.message_pump import MessagePump

from selectkit.model.controller import ControllerCallback, SelectController
from selectkit.model.query import Scheduler


class ControllerWatcherMixin:
    """Mixin for widgets that render a SelectController.

    Subclasses should:
    - Call ``_init_watcher()`` in ``__init__``
    - Use ``self.controller_watch(controller, callback)`` instead of ``controller.watch(...)``
    - Skip writing unwatch logic in ``on_unmount`` -- the mixin handles cleanup
    """

    def _init_watcher(self) -> None:
        self._unwatches: list[Callable[[], None]] = []

    def controller_watch(self, controller: SelectController, callback: ControllerCallback) -> None:
        """Register a watch that is released automatically on unmount."""
        self._unwatches.append(controller.watch(callback))

    def on_unmount(self) -> None:
        for unwatch in self._unwatches:
            unwatch()
        self._unwatches.clear()


def timer_scheduler(pump: MessagePump) -> Scheduler:
    """Debounce scheduler backed by Textual timers on ``pump``."""

    def schedule(delay: float, callback: Callable[[], None]) -> Callable[[], None]:
        return pump.set_timer(delay, callback).stop

    return schedule
