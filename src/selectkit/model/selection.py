"""Commit rules for single and multiple selection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(str, Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"


def parse_mode(value: str | Mode) -> Mode:
    """Resolve a mode name. Anything but single/multiple is a caller bug."""
    try:
        return Mode(value)
    except ValueError:
        raise ValueError(f"mode must be 'single' or 'multiple', got {value!r}") from None


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a commit or clear.

    ``accepted`` is False for a rejected (disabled) commit, in which case
    ``selection`` is the unchanged input and nothing else should happen.
    """

    selection: list[str]
    accepted: bool = True
    close: bool = False
    clear_query: bool = False
    refocus: bool = False


def commit(option_value: str, current: list[str], mode: Mode, disabled: bool = False) -> CommitResult:
    """Compute the selection after choosing ``option_value``.

    The value is not checked against any option list; callers decide
    whether a value is choosable.
    """
    if disabled:
        return CommitResult(list(current), accepted=False)
    if mode is Mode.SINGLE:
        return CommitResult([option_value], close=True, clear_query=True)
    if option_value in current:
        return CommitResult([v for v in current if v != option_value])
    return CommitResult([*current, option_value])


def clear() -> CommitResult:
    """Empty the selection in either mode, keeping the widget open."""
    return CommitResult([], clear_query=True, refocus=True)
