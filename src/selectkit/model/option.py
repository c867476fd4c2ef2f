"""Option records and coercion of caller-supplied option lists."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Option:
    """A selectable entry. ``value`` is unique within an option set."""

    value: str
    label: str
    disabled: bool = False
    group: str | None = None


def _coerce(raw: Any) -> Option | None:
    """Build an Option from one supported shape, or None if malformed."""
    if isinstance(raw, Option):
        return raw
    if isinstance(raw, str):
        return Option(raw, raw)
    if isinstance(raw, tuple) and len(raw) == 2:
        # (label, value), the shape OptionList-style widgets hand around
        label, value = raw
        if value is None:
            return None
        return Option(str(value), str(label))
    if isinstance(raw, Mapping):
        value = raw.get("value")
        if value is None:
            return None
        label = raw.get("label")
        group = raw.get("group")
        return Option(
            value=str(value),
            label=str(value) if label is None else str(label),
            disabled=bool(raw.get("disabled", False)),
            group=None if group is None else str(group),
        )
    return None


def normalize_options(raw_options: Iterable[Any], reported: set[str] | None = None) -> list[Option]:
    """Coerce raw entries into Options, skipping malformed ones.

    Accepts Option instances, mappings, bare strings and ``(label, value)``
    tuples. Entries without a value are dropped, as are repeats of a value
    already seen. Each problem is logged once per ``reported`` set, so a
    widget re-supplying the same bad data on every update does not flood
    the log.
    """
    if reported is None:
        reported = set()
    options: list[Option] = []
    seen: set[str] = set()
    for index, raw in enumerate(raw_options):
        option = _coerce(raw)
        if option is None:
            key = f"malformed:{raw!r}"
            if key not in reported:
                reported.add(key)
                logger.warning("skipping malformed option at index %d: %r", index, raw)
            continue
        if option.value in seen:
            key = f"duplicate:{option.value}"
            if key not in reported:
                reported.add(key)
                logger.warning("skipping duplicate option value %r", option.value)
            continue
        seen.add(option.value)
        options.append(option)
    return options


def find_option(options: Iterable[Option], value: str) -> Option | None:
    """Look up an option by value."""
    for option in options:
        if option.value == value:
            return option
    return None
