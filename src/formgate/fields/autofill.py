"""Browser autofill detection.

Autofill fills an input with a complete value in one change event,
without the user ever focusing it. Left alone, such a field would stay
untouched and its (possibly wrong) value would never be validated. The
detector recognizes that pattern and, after a grace period long enough
for the user to see the filled value, marks the field as touched.

A change is a *suspected autofill* when all of these hold:

- the previous value was blank and the new value is not,
- the value grew by more than ``min_growth`` characters in one event,
- the field is neither focused nor touched,
- the new value looks like what the field expects (``SHAPES``).

Detection arms a one-shot timer; a focus or blur before it fires cancels
it and the normal touch rules take over.

Phases::

    phase     event          -> phase
    -------   -----------       -------
    any       SUSPECTED         PENDING   (timer re-armed)
    PENDING   INTERRUPTED       IDLE      (timer cancelled)
    PENDING   ELAPSED           IDLE      (field becomes touched)
    any       TEARDOWN          IDLE      (timer cancelled)
"""

import logging
from collections.abc import Callable
from enum import Enum

from formgate.fields.scheduler import ScheduledTask
from formgate.validation.rules import is_blank

logger = logging.getLogger("formgate.fields")

type ShapeCheck = Callable[[str], bool]


def _looks_like_email(value: str) -> bool:
    return "@" in value and "." in value


def _non_blank(value: str) -> bool:
    return not is_blank(value)


# Shape key (FieldSpec.shape, else field type) -> "looks like" check
SHAPES: dict[str, ShapeCheck] = {
    "email": _looks_like_email,
    "text": _non_blank,
    "password": _non_blank,
}


def shape_for(key: str | None) -> ShapeCheck:
    """Return the shape check for *key*, falling back to non-blank."""
    if key is None:
        return _non_blank
    return SHAPES.get(key, _non_blank)


class AutofillPhase(Enum):
    IDLE = "idle"
    PENDING = "pending"


class AutofillEvent(Enum):
    SUSPECTED = "suspected"
    INTERRUPTED = "interrupted"
    ELAPSED = "elapsed"
    TEARDOWN = "teardown"


def autofill_transition(phase: AutofillPhase, event: AutofillEvent) -> AutofillPhase:
    """Apply *event* to *phase*.

    Raises:
        ValueError: *event* is ``INTERRUPTED`` or ``ELAPSED`` while no grace
            period is pending.
    """
    match (phase, event):
        case (_, AutofillEvent.SUSPECTED):
            return AutofillPhase.PENDING
        case (_, AutofillEvent.TEARDOWN):
            return AutofillPhase.IDLE
        case (AutofillPhase.PENDING, AutofillEvent.INTERRUPTED | AutofillEvent.ELAPSED):
            return AutofillPhase.IDLE
    msg = f"Autofill event {event.name} is not valid while {phase.name}"
    raise ValueError(msg)


def is_suspected_autofill(
    old: str | None,
    new: str | None,
    *,
    focused: bool,
    touched: bool,
    looks_like: ShapeCheck = _non_blank,
    min_growth: int = 2,
) -> bool:
    """Classify a single change as a suspected browser autofill."""
    old = old or ""
    new = new or ""
    return (
        is_blank(old)
        and not is_blank(new)
        and len(new) - len(old) > min_growth
        and not focused
        and not touched
        and looks_like(new)
    )


class AutofillDetector:
    """Delays the touched transition after a suspected autofill.

    The detector owns the ``ScheduledTask`` whose callback completes the
    grace period; the controller supplies the callback when building the
    task.

    Args:
        task: Scheduled task that runs the "grace period over" callback.
        delay: Grace period in seconds.
        looks_like: Shape check for the field's expected value.
        min_growth: A change must add more than this many characters.
    """

    __slots__ = ("_delay", "_looks_like", "_min_growth", "_phase", "_task", "name")

    def __init__(
        self,
        task: ScheduledTask,
        *,
        delay: float = 1.5,
        looks_like: ShapeCheck = _non_blank,
        min_growth: int = 2,
        name: str = "",
    ) -> None:
        self._task = task
        self._delay = delay
        self._looks_like = looks_like
        self._min_growth = min_growth
        self._phase = AutofillPhase.IDLE
        self.name = name

    @property
    def phase(self) -> AutofillPhase:
        return self._phase

    @property
    def pending(self) -> bool:
        return self._phase is AutofillPhase.PENDING

    def observe(self, old: str, new: str, *, focused: bool, touched: bool) -> bool:
        """Inspect a change; arm the grace timer if it looks like autofill.

        Returns True when the change was classified as suspected autofill.
        """
        if not is_suspected_autofill(
            old,
            new,
            focused=focused,
            touched=touched,
            looks_like=self._looks_like,
            min_growth=self._min_growth,
        ):
            return False
        self._task.arm(self._delay)
        self._phase = autofill_transition(self._phase, AutofillEvent.SUSPECTED)
        logger.debug("Suspected autofill on %r; touching in %.2fs", self.name, self._delay)
        return True

    def interrupt(self) -> bool:
        """Cancel a pending grace period (focus or blur arrived first)."""
        if not self.pending:
            return False
        self._task.cancel()
        self._phase = autofill_transition(self._phase, AutofillEvent.INTERRUPTED)
        logger.debug("Autofill grace period on %r interrupted", self.name)
        return True

    def elapsed(self) -> None:
        """Record that the grace period ran to completion."""
        self._phase = autofill_transition(self._phase, AutofillEvent.ELAPSED)
        logger.debug("Autofill grace period on %r elapsed", self.name)

    def close(self) -> None:
        """Cancel any pending timer for good."""
        self._task.close()
        self._phase = autofill_transition(self._phase, AutofillEvent.TEARDOWN)
