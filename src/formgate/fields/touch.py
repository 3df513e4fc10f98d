"""Touch tracking — when engine errors may be shown.

A field starts ``UNTOUCHED``. While untouched, typing stores the value
but does not validate it, so no error appears on the very first
keystroke. Leaving the field (blur) or finishing an autofill grace period
makes it ``TOUCHED``; from then on every change re-validates.

Transition table::

    state       event              -> state      validate
    ---------   ----------------      ---------  --------
    any         FOCUS                 unchanged  no
    any         BLUR                  TOUCHED    yes
    UNTOUCHED   CHANGE                UNTOUCHED  no
    TOUCHED     CHANGE                TOUCHED    yes
    any         AUTOFILL_ELAPSED      TOUCHED    yes
"""

from dataclasses import dataclass
from enum import Enum


class TouchState(Enum):
    UNTOUCHED = "untouched"
    TOUCHED = "touched"


class FieldEvent(Enum):
    """Input events a field controller reacts to."""

    FOCUS = "focus"
    BLUR = "blur"
    CHANGE = "change"
    AUTOFILL_ELAPSED = "autofill_elapsed"


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of feeding one event to the touch state machine.

    Attributes:
        state: The state after the event.
        validate: Whether the controller must run validation now and
            report the result upward.
    """

    state: TouchState
    validate: bool


def touch_transition(state: TouchState, event: FieldEvent) -> Transition:
    """Apply *event* to *state*."""
    match event:
        case FieldEvent.FOCUS:
            return Transition(state, validate=False)
        case FieldEvent.BLUR | FieldEvent.AUTOFILL_ELAPSED:
            return Transition(TouchState.TOUCHED, validate=True)
        case FieldEvent.CHANGE:
            return Transition(state, validate=state is TouchState.TOUCHED)
    msg = f"Unknown field event: {event!r}"
    raise ValueError(msg)
