"""Field controller — one input's validation state machine.

Binds the touch tracker, the autofill detector, and the validator to a
single input's change/focus/blur events. One table-driven controller
serves every field in the application; what differs between an email
and a postal code is catalog data, not code.

Usage::

    field = FieldController(
        "email",
        mode="required",
        on_validation_change=lambda result: state.record("email", result),
        scheduler=scheduler,
    )
    field.on_change("user@example")   # untouched: stored, not validated
    field.on_blur()                   # touched: validated and reported
    field.view.display_errors         # ("Email must be valid",)

A dependent field watches its source so that editing a password
re-validates an already-touched confirmation::

    confirm = FieldController("confirmPassword", mode="required")
    confirm.watch(password)
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from formgate.config import FormgateConfig
from formgate.errors import ConfigurationError
from formgate.fields.autofill import AutofillDetector, shape_for
from formgate.fields.scheduler import ScheduledTask, Scheduler
from formgate.fields.touch import FieldEvent, TouchState, touch_transition
from formgate.validation import DEFAULT_CATALOG, VALID, FieldCatalog, ValidationResult, validate_field
from formgate.validation.rules import FieldType, ValidationConfig, ValidationMode, is_blank

logger = logging.getLogger("formgate.fields")

type ValidationListener = Callable[[ValidationResult], None]
type ValueListener = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class FieldState:
    """Snapshot of a field. Replaced, never mutated, by the controller."""

    value: str = ""
    touch: TouchState = TouchState.UNTOUCHED
    focused: bool = False
    last_result: ValidationResult = VALID
    autofill_pending: bool = False

    @property
    def touched(self) -> bool:
        return self.touch is TouchState.TOUCHED


@dataclass(frozen=True, slots=True)
class FieldView:
    """What the rendering layer needs to draw one field.

    ``display_errors`` holds either engine-computed errors (touched field,
    validation enabled) or the externally supplied ones, never both.
    """

    name: str
    label: str
    value: str
    touched: bool
    display_errors: tuple[str, ...]
    required: bool
    disabled: bool
    field_type: FieldType = "text"
    placeholder: str = ""

    @property
    def has_errors(self) -> bool:
        return bool(self.display_errors)


class FieldController:
    """Validation state for one input.

    Args:
        name: Field name, as reported upward and used for form values.
        value: Initial value. A non-blank one is validated and reported
            at once; its errors display only after the field is touched.
        kind: Catalog entry to validate with; defaults to *name*.
        catalog: Where thresholds and formats come from.
        enable_validation: When False the field is always valid and only
            shows external errors.
        mode: ``"required"`` adds the required rule.
        errors: Externally supplied errors (from a parent or a server).
        disabled: Passed through to the view.
        on_validation_change: Called with every new ``ValidationResult``.
        scheduler: Timer source for autofill detection. Without one, the
            autofill heuristic is off.
        config: Engine configuration (autofill delay and growth).
        label: Overrides the catalog label in the view.
        placeholder: Passed through to the view.
    """

    __slots__ = (
        "_autofill",
        "_catalog",
        "_closed",
        "_enable_validation",
        "_external_errors",
        "_listeners",
        "_mode",
        "_on_validation_change",
        "_original",
        "_seeded",
        "_source",
        "_state",
        "_validation_config",
        "disabled",
        "kind",
        "label",
        "name",
        "placeholder",
    )

    def __init__(
        self,
        name: str,
        *,
        value: str = "",
        kind: str | None = None,
        catalog: FieldCatalog = DEFAULT_CATALOG,
        enable_validation: bool = True,
        mode: ValidationMode = "optional",
        errors: Iterable[str] = (),
        disabled: bool = False,
        on_validation_change: ValidationListener | None = None,
        scheduler: Scheduler | None = None,
        config: FormgateConfig | None = None,
        label: str | None = None,
        placeholder: str = "",
    ) -> None:
        config = config or FormgateConfig()
        self.name = name
        self.kind = kind or name
        spec = catalog.spec(self.kind)
        self.label = label or spec.label
        self.placeholder = placeholder
        self.disabled = disabled
        self._catalog = catalog
        self._enable_validation = enable_validation
        self._mode: ValidationMode = mode
        self._external_errors = tuple(errors)
        self._on_validation_change = on_validation_change
        self._listeners: list[ValueListener] = []
        self._source: FieldController | None = None
        self._original: str | None = None
        self._closed = False
        self._seeded = False
        self._state = FieldState(value=value)
        self._validation_config = self._build_config()

        self._autofill: AutofillDetector | None = None
        if scheduler is not None and config.autofill_enabled:
            self._autofill = AutofillDetector(
                ScheduledTask(scheduler, self._autofill_elapsed),
                delay=config.autofill_delay,
                looks_like=shape_for(spec.shape or spec.field_type),
                min_growth=config.autofill_min_growth,
                name=name,
            )

        if not enable_validation:
            self._report(VALID)
        self._seed(value)

    # -- Read access -------------------------------------------------------

    @property
    def state(self) -> FieldState:
        return self._state

    @property
    def value(self) -> str:
        return self._state.value

    @property
    def touched(self) -> bool:
        return self._state.touched

    @property
    def focused(self) -> bool:
        return self._state.focused

    @property
    def result(self) -> ValidationResult:
        """The most recent validation result (``VALID`` before any run)."""
        return self._state.last_result

    @property
    def autofill_pending(self) -> bool:
        return self._state.autofill_pending

    @property
    def validation_config(self) -> ValidationConfig | None:
        return self._validation_config

    @property
    def enable_validation(self) -> bool:
        return self._enable_validation

    @property
    def mode(self) -> ValidationMode:
        return self._mode

    @property
    def required(self) -> bool:
        """True when the field shows as required (validation on, required mode)."""
        return self._enable_validation and self._mode == "required"

    @property
    def external_errors(self) -> tuple[str, ...]:
        return self._external_errors

    @property
    def display_errors(self) -> tuple[str, ...]:
        if self._enable_validation and self._state.touched:
            return self._state.last_result.errors
        return self._external_errors

    @property
    def source(self) -> "FieldController | None":
        """The field this one depends on, if any."""
        return self._source

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def view(self) -> FieldView:
        spec = self._catalog.spec(self.kind)
        return FieldView(
            name=self.name,
            label=self.label,
            value=self._state.value,
            touched=self._state.touched,
            display_errors=self.display_errors,
            required=self.required,
            disabled=self.disabled,
            field_type=spec.field_type,
            placeholder=self.placeholder,
        )

    # -- Event handlers ----------------------------------------------------

    def on_change(self, value: str) -> None:
        """The input's value changed (typing, paste, or autofill)."""
        if self._closed:
            return
        old = self._state.value
        self._state = replace(self._state, value=value)

        if self._autofill is not None:
            self._autofill.observe(
                old,
                value,
                focused=self._state.focused,
                touched=self._state.touched,
            )
            self._sync_autofill()

        self._apply(FieldEvent.CHANGE)
        for listener in tuple(self._listeners):
            listener(value)

    def on_focus(self) -> None:
        """The input gained focus. Focus alone does not touch the field."""
        if self._closed:
            return
        self._interrupt_autofill()
        self._state = replace(self._state, focused=True)
        self._apply(FieldEvent.FOCUS)

    def on_blur(self) -> None:
        """The input lost focus: the field becomes touched and re-validates."""
        if self._closed:
            return
        self._interrupt_autofill()
        self._state = replace(self._state, focused=False)
        self._apply(FieldEvent.BLUR)

    def set_value(self, value: str) -> None:
        """Set the value from code rather than from the user.

        No autofill detection runs. Like a starting value, the new value
        is validated and reported at once; its errors still show only
        after the user leaves the field.
        """
        if self._closed:
            return
        self._state = replace(self._state, value=value)
        if self._state.touched:
            self._validate()
        else:
            self._seed(value)
        for listener in tuple(self._listeners):
            listener(value)

    # -- Property updates --------------------------------------------------

    def set_external_errors(self, errors: Iterable[str]) -> None:
        self._external_errors = tuple(errors)

    def set_enable_validation(self, enabled: bool) -> None:
        """Turn validation on or off.

        Turning it off reports ``VALID`` upward so the field stops
        blocking submission; turning it on re-validates a touched or
        pre-filled field.
        """
        if enabled == self._enable_validation:
            return
        self._enable_validation = enabled
        self._validation_config = self._build_config()
        if not enabled:
            self._state = replace(self._state, last_result=VALID)
            self._report(VALID)
        elif self._live:
            self._validate()

    def set_mode(self, mode: ValidationMode) -> None:
        """Switch between required and optional validation."""
        if mode == self._mode:
            return
        self._mode = mode
        self._validation_config = self._build_config()
        if self._live:
            self._validate()

    def set_original(self, original: str | None) -> None:
        """Update the value this field is compared against.

        The rule closure is rebuilt with the new value; a touched or
        pre-filled field re-validates so a stale verdict never lingers.
        """
        self._original = original
        self._validation_config = self._build_config()
        if self._live:
            self._validate()

    def reset(self, value: str = "") -> None:
        """Return to a fresh, untouched state holding *value*.

        A non-blank *value* is validated and reported like a starting value.
        """
        self._interrupt_autofill()
        self._state = FieldState(value=value)
        self._seeded = False
        self._seed(value)
        if not self._seeded:
            self._report(VALID)
        for listener in tuple(self._listeners):
            listener(value)

    # -- Cross-field dependencies -------------------------------------------

    def subscribe(self, listener: ValueListener) -> None:
        """Call *listener* with the new value after every change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ValueListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def watch(self, source: "FieldController") -> None:
        """Re-validate this field whenever *source*'s value changes.

        The dependency is one-directional. Watching a field that already
        depends on this one (directly or through a chain) would create a
        cycle and is rejected.

        Raises:
            ConfigurationError: The dependency would form a cycle, or this
                field already watches another field.
        """
        if self._source is source:
            return
        node: FieldController | None = source
        while node is not None:
            if node is self:
                msg = f"Field {self.name!r} cannot depend on {source.name!r}: dependency cycle"
                raise ConfigurationError(msg)
            node = node._source
        if self._source is not None and self._source is not source:
            msg = f"Field {self.name!r} already depends on {self._source.name!r}"
            raise ConfigurationError(msg)
        self._source = source
        source.subscribe(self.set_original)
        self.set_original(source.value)

    # -- Teardown ----------------------------------------------------------

    def close(self) -> None:
        """Unmount: cancel any pending autofill timer and drop dependencies."""
        if self._closed:
            return
        self._closed = True
        if self._autofill is not None:
            self._autofill.close()
        self._state = replace(self._state, autofill_pending=False)
        if self._source is not None:
            self._source.unsubscribe(self.set_original)
            self._source = None

    def __enter__(self) -> "FieldController":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"FieldController({self.name!r}, value={self._state.value!r}, "
            f"touch={self._state.touch.value})"
        )

    # -- Internals ---------------------------------------------------------

    def _build_config(self) -> ValidationConfig | None:
        return self._catalog.build_config(
            self.kind,
            enable_validation=self._enable_validation,
            mode=self._mode,
            original=self._original,
        )

    @property
    def _live(self) -> bool:
        return self._state.touched or self._seeded

    def _seed(self, value: str) -> None:
        was_seeded = self._seeded
        self._seeded = not is_blank(value)
        if (self._seeded or was_seeded) and self._enable_validation:
            self._validate()

    def _apply(self, event: FieldEvent) -> None:
        transition = touch_transition(self._state.touch, event)
        self._state = replace(self._state, touch=transition.state)
        # a reported starting value stays current while untouched
        if transition.validate or (event is FieldEvent.CHANGE and self._seeded):
            self._validate()

    def _validate(self) -> None:
        result = validate_field(self.name, self._state.value, self._validation_config)
        logger.debug("Validated %r: %d error(s)", self.name, len(result.errors))
        self._state = replace(self._state, last_result=result)
        self._report(result)

    def _report(self, result: ValidationResult) -> None:
        if self._on_validation_change is not None:
            self._on_validation_change(result)

    def _interrupt_autofill(self) -> None:
        if self._autofill is not None:
            self._autofill.interrupt()
            self._sync_autofill()

    def _sync_autofill(self) -> None:
        pending = self._autofill is not None and self._autofill.pending
        if pending != self._state.autofill_pending:
            self._state = replace(self._state, autofill_pending=pending)

    def _autofill_elapsed(self) -> None:
        # Validate the value present now, not the one seen at detection
        if self._autofill is not None:
            self._autofill.elapsed()
        self._sync_autofill()
        self._apply(FieldEvent.AUTOFILL_ELAPSED)
