"""Shared helpers for CLI command handlers."""

import json
import logging
import sys

from selectkit.config import WidgetConfig, default_config, load_config
from selectkit.model.option import Option


def load_config_or_die(path: str | None, json_mode: bool) -> WidgetConfig:
    """Load a config file, or the built-in one when path is None. Exit 1 on error."""
    if path is None:
        return default_config()
    try:
        return load_config(path)
    except (OSError, ValueError) as e:
        error(str(e), json_mode)


def setup_logging(verbose: bool) -> None:
    """Send library diagnostics to stderr when asked to."""
    if verbose:
        logging.basicConfig(
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            stream=sys.stderr,
            level=logging.DEBUG,
        )


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def option_to_dict(option: Option) -> dict:
    """Serialize an option for JSON output."""
    data = {"value": option.value, "label": option.label, "disabled": option.disabled}
    if option.group is not None:
        data["group"] = option.group
    return data


def format_option_line(option: Option, selected: bool = False) -> str:
    """Format an option as a text line."""
    marker = "*" if selected else " "
    disabled = "  (disabled)" if option.disabled else ""
    group = f"  [{option.group}]" if option.group else ""
    return f"{marker} {option.value:<16} {option.label}{group}{disabled}"
