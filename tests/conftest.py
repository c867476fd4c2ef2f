"""Shared fixtures for selectkit tests."""

import pytest

from selectkit.model.option import Option


class FakeScheduler:
    """Collects scheduled callbacks so tests can fire them by hand."""

    def __init__(self):
        self.pending = []
        self.cancelled = 0

    def __call__(self, delay, callback):
        entry = [delay, callback, True]
        self.pending.append(entry)

        def cancel():
            if entry[2]:
                entry[2] = False
                self.cancelled += 1

        return cancel

    @property
    def live(self):
        return [entry for entry in self.pending if entry[2]]

    def fire_all(self):
        """Run every live callback, in scheduling order."""
        for entry in self.live:
            entry[2] = False
            entry[1]()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def fruit():
    """apple, banana, cherry, date (disabled), elderberry."""
    return [
        Option("apple", "Apple"),
        Option("banana", "Banana"),
        Option("cherry", "Cherry"),
        Option("date", "Date", disabled=True),
        Option("elderberry", "Elderberry"),
    ]
