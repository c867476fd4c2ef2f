"""What each open/close trigger resets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Trigger(Enum):
    ESCAPE = "escape"
    OUTSIDE = "outside"
    BLUR = "blur"
    SINGLE_COMMIT = "single_commit"
    MULTI_COMMIT = "multi_commit"
    ACTIVATE = "activate"
    DISABLED = "disabled"
    DISMISS = "dismiss"


@dataclass(frozen=True)
class Transition:
    """Resets for one trigger. ``open`` None leaves the open flag alone."""

    open: bool | None = None
    clear_query: bool = False


_CLOSE = Transition(open=False, clear_query=True)

TRANSITIONS: dict[Trigger, Transition] = {
    Trigger.ESCAPE: _CLOSE,
    Trigger.OUTSIDE: _CLOSE,
    Trigger.BLUR: _CLOSE,
    Trigger.SINGLE_COMMIT: _CLOSE,
    Trigger.MULTI_COMMIT: Transition(),
    Trigger.ACTIVATE: Transition(open=True),
    Trigger.DISABLED: _CLOSE,
    Trigger.DISMISS: _CLOSE,
}

# Triggers that only make sense while the widget is open
_WHILE_OPEN = {Trigger.ESCAPE, Trigger.OUTSIDE, Trigger.BLUR, Trigger.DISABLED, Trigger.DISMISS}


def transition_for(trigger: Trigger, is_open: bool, disabled: bool) -> Transition | None:
    """Resolve the resets for a trigger in the current state.

    Returns None when the trigger does not apply: a close-type trigger on a
    closed widget, activating an open one, or any attempt to open a
    disabled one.
    """
    if trigger in _WHILE_OPEN and not is_open:
        return None
    if trigger is Trigger.ACTIVATE and (is_open or disabled):
        return None
    return TRANSITIONS[trigger]
