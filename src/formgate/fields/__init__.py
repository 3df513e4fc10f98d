"""Per-field state machines: touch tracking, autofill detection, controller."""

from formgate.fields.autofill import (
    SHAPES,
    AutofillDetector,
    AutofillEvent,
    AutofillPhase,
    autofill_transition,
    is_suspected_autofill,
    shape_for,
)
from formgate.fields.controller import FieldController, FieldState, FieldView
from formgate.fields.scheduler import Handle, ScheduledTask, Scheduler, TaskGroupScheduler
from formgate.fields.touch import FieldEvent, TouchState, Transition, touch_transition

__all__ = [
    "SHAPES",
    "AutofillDetector",
    "AutofillEvent",
    "AutofillPhase",
    "FieldController",
    "FieldEvent",
    "FieldState",
    "FieldView",
    "Handle",
    "ScheduledTask",
    "Scheduler",
    "TaskGroupScheduler",
    "TouchState",
    "Transition",
    "autofill_transition",
    "is_suspected_autofill",
    "shape_for",
    "touch_transition",
]
