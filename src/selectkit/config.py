"""YAML widget configuration: option sets plus controller settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from selectkit.model.controller import SelectController
from selectkit.model.option import Option, normalize_options
from selectkit.model.selection import Mode, parse_mode

_BOOL_KEYS = ("disabled", "wrap_navigation", "allow_create", "restrict_to_visible", "highlight_matches")
_INT_KEYS = ("debounce_delay", "min_search_length")
_KNOWN_KEYS = {"options", "mode", "multiple", "value", "placeholder", "title", *_BOOL_KEYS, *_INT_KEYS}


@dataclass
class WidgetConfig:
    """Everything needed to build a controller for one widget."""

    options: list[Option] = field(default_factory=list)
    mode: Mode = Mode.SINGLE
    value: list[str] = field(default_factory=list)
    placeholder: str = "Search..."
    title: str = "selectkit"
    disabled: bool = False
    debounce_delay: int = 0
    min_search_length: int = 0
    wrap_navigation: bool = False
    allow_create: bool = False
    restrict_to_visible: bool = False
    highlight_matches: bool = False
    skipped: int = 0

    def build_controller(self, **kwargs: Any) -> SelectController:
        """Build a controller from this config. Keyword arguments win."""
        settings: dict[str, Any] = {
            "mode": self.mode,
            "default_value": list(self.value),
            "disabled": self.disabled,
            "debounce_delay": self.debounce_delay,
            "min_search_length": self.min_search_length,
            "wrap_navigation": self.wrap_navigation,
            "allow_create": self.allow_create,
            "restrict_to_visible": self.restrict_to_visible,
        }
        settings.update(kwargs)
        return SelectController(self.options, **settings)


def parse_config(data: Any) -> WidgetConfig:
    """Validate a loaded YAML document. Raises ValueError on bad shape."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("config must be a mapping")
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(sorted(unknown))}")

    config = WidgetConfig()

    raw_options = data.get("options", [])
    if not isinstance(raw_options, list):
        raise ValueError("'options' must be a list")
    config.options = normalize_options(raw_options)
    config.skipped = len(raw_options) - len(config.options)

    if "mode" in data:
        config.mode = parse_mode(data["mode"])
    elif data.get("multiple"):
        config.mode = Mode.MULTIPLE

    value = data.get("value")
    if isinstance(value, str):
        config.value = [value] if value else []
    elif isinstance(value, list):
        config.value = [str(v) for v in value]
    elif value is not None:
        raise ValueError("'value' must be a string or a list")

    for key in ("placeholder", "title"):
        if key in data:
            setattr(config, key, str(data[key]))
    for key in _BOOL_KEYS:
        if key in data:
            if not isinstance(data[key], bool):
                raise ValueError(f"'{key}' must be true or false")
            setattr(config, key, data[key])
    for key in _INT_KEYS:
        if key in data:
            if not isinstance(data[key], int) or isinstance(data[key], bool) or data[key] < 0:
                raise ValueError(f"'{key}' must be a non-negative integer")
            setattr(config, key, data[key])

    return config


def load_config(path: str | Path) -> WidgetConfig:
    """Load a widget config from a YAML file."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"{path}: invalid YAML: {e}") from e
    return parse_config(data)


def default_config() -> WidgetConfig:
    """The built-in fruit list used when no config file is given."""
    return WidgetConfig(
        options=normalize_options(
            [
                {"value": "apple", "label": "Apple"},
                {"value": "banana", "label": "Banana"},
                {"value": "cherry", "label": "Cherry"},
                {"value": "date", "label": "Date", "disabled": True},
                {"value": "elderberry", "label": "Elderberry"},
            ]
        ),
        placeholder="Search fruit...",
    )
