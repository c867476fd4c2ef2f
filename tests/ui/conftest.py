"""Fixtures for UI tests."""

import pytest

from selectkit.model.controller import SelectController


@pytest.fixture
def controller(fruit):
    """Single-select controller over the fruit list, no debounce."""
    return SelectController(fruit, list_id="fruit")
