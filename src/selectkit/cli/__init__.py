"""CLI argument parser and dispatch for selectkit."""

import argparse

from selectkit.cli.filter import check_config, filter_options
from selectkit.model.controller import KEY_DIRECTIONS

KEY_NAMES = [*KEY_DIRECTIONS, "Enter", "Escape"]


def _key_list(text: str) -> list[str]:
    """Parse a comma-separated key list like 'ArrowDown,Enter'."""
    keys = [k.strip() for k in text.split(",") if k.strip()]
    for key in keys:
        if key not in KEY_NAMES:
            raise argparse.ArgumentTypeError(f"unknown key {key!r} (choose from {', '.join(KEY_NAMES)})")
    return keys


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")

    parser = argparse.ArgumentParser(
        prog="selectkit",
        description="Selection-widget controller and demo",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- filter ---
    filter_p = nouns.add_parser("filter", help="Show the options visible for a query", parents=[common])
    filter_p.add_argument("config", help="YAML widget config")
    filter_p.add_argument("query", nargs="?", default="", help="Text typed into the widget")
    filter_p.add_argument(
        "--keys",
        type=_key_list,
        help=f"Comma-separated keys pressed after typing ({', '.join(KEY_NAMES)})",
    )
    filter_p.set_defaults(func=filter_options)

    # --- check ---
    check_p = nouns.add_parser("check", help="Validate a config file", parents=[common])
    check_p.add_argument("config", help="YAML widget config")
    check_p.set_defaults(func=check_config)

    return parser
