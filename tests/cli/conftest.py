"""Shared fixtures for CLI tests."""

import pytest


@pytest.fixture
def config_file(tmp_path):
    """A multi-select fruit config with one disabled option."""
    path = tmp_path / "fruit.yaml"
    path.write_text(
        """\
mode: multiple
value: [cherry]
options:
  - {value: apple, label: Apple}
  - {value: banana, label: Banana}
  - {value: cherry, label: Cherry}
  - {value: date, label: Date, disabled: true}
  - {value: elderberry, label: Elderberry}
"""
    )
    return path


@pytest.fixture
def broken_config_file(tmp_path):
    """A config with one malformed and one duplicate option."""
    path = tmp_path / "broken.yaml"
    path.write_text(
        """\
options:
  - apple
  - {label: No value}
  - apple
  - banana
"""
    )
    return path
