"""Form — field controllers plus submit gating.

A ``Form`` owns one ``FieldController`` per input and the
``FormValidationState`` they report into. Every report, and every value
change, recomputes whether the form may be submitted::

    form = Form(required_fields={"email", "password"}, scheduler=scheduler)
    form.add_field("email")
    form.add_field("password")
    form.add_field("confirmPassword", depends_on="password")

    form.field("email").on_change("user@example.com")
    form.can_submit        # False until every required value is present
    form.submit(create_account)

Field modes follow the form: in a skippable form every field is optional;
otherwise fields in ``required_fields`` are required and the rest optional.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from functools import partial
from typing import Any

from formgate.config import FormgateConfig
from formgate.errors import ConfigurationError
from formgate.fields.controller import FieldController
from formgate.fields.scheduler import Scheduler
from formgate.forms.aggregator import FormValidationState, completion_percentage
from formgate.validation import DEFAULT_CATALOG, FieldCatalog, ValidationResult
from formgate.validation.rules import ValidationMode, is_blank

logger = logging.getLogger("formgate.forms")

type SubmitHandler = Callable[[dict[str, str]], Any]


class Form:
    """A set of fields validated together and submitted as one.

    Args:
        required_fields: Fields that must be filled before submitting. When
            omitted, every field added is required unless ``add_field`` says
            otherwise.
        skippable: Empty fields never block submission; filled fields must
            still pass their rules.
        enable_validation: Overrides ``config.enable_validation``.
        catalog: Field thresholds and formats.
        scheduler: Timer source for autofill detection.
        config: Engine configuration.
        on_submittable_change: Called with the new value whenever
            ``can_submit`` flips.
    """

    __slots__ = (
        "_catalog",
        "_config",
        "_default_required",
        "_enable_validation",
        "_fields",
        "_on_submittable_change",
        "_scheduler",
        "_state",
        "_submittable",
    )

    def __init__(
        self,
        *,
        required_fields: Iterable[str] | None = None,
        skippable: bool = False,
        enable_validation: bool | None = None,
        catalog: FieldCatalog = DEFAULT_CATALOG,
        scheduler: Scheduler | None = None,
        config: FormgateConfig | None = None,
        on_submittable_change: Callable[[bool], None] | None = None,
    ) -> None:
        self._config = config or FormgateConfig()
        self._enable_validation = (
            self._config.enable_validation if enable_validation is None else enable_validation
        )
        self._catalog = catalog
        self._scheduler = scheduler
        self._default_required = required_fields is None
        self._state = FormValidationState(required_fields or (), skippable=skippable)
        self._fields: dict[str, FieldController] = {}
        self._on_submittable_change = on_submittable_change
        self._submittable: bool | None = None

    # -- Fields ------------------------------------------------------------

    def add_field(
        self,
        name: str,
        *,
        value: str = "",
        kind: str | None = None,
        required: bool | None = None,
        depends_on: str | None = None,
        errors: Iterable[str] = (),
        label: str | None = None,
        placeholder: str = "",
        disabled: bool = False,
    ) -> FieldController:
        """Create and register the controller for *name*.

        Args:
            name: Catalog field name.
            value: Initial value.
            kind: Catalog entry to validate with; defaults to *name*.
            required: Whether the field must be filled. Defaults to
                membership in ``required_fields`` (or True when the form
                was built without that list).
            depends_on: Name of an already added field this one is
                compared against (``confirmPassword`` → ``password``).
            errors: Externally supplied errors.

        Raises:
            ConfigurationError: *name* is already registered or
                *depends_on* is unknown.
        """
        if name in self._fields:
            msg = f"Field {name!r} is already part of this form"
            raise ConfigurationError(msg)
        if depends_on is not None and depends_on not in self._fields:
            msg = f"Field {name!r} depends on {depends_on!r}, which has not been added"
            raise ConfigurationError(msg)

        if required is None:
            required = self._default_required or name in self._state.required_fields
        if required:
            self._state.required_fields = self._state.required_fields | {name}
        else:
            self._state.required_fields = self._state.required_fields - {name}

        controller = FieldController(
            name,
            value=value,
            kind=kind,
            catalog=self._catalog,
            enable_validation=self._enable_validation,
            mode=self._mode_for(name),
            errors=errors,
            disabled=disabled,
            on_validation_change=partial(self._on_report, name),
            scheduler=self._scheduler,
            config=self._config,
            label=label,
            placeholder=placeholder,
        )
        self._fields[name] = controller
        if depends_on is not None:
            controller.watch(self._fields[depends_on])
        controller.subscribe(self._on_value)
        self._recompute()
        return controller

    def field(self, name: str) -> FieldController:
        try:
            return self._fields[name]
        except KeyError:
            msg = f"Form has no field {name!r}"
            raise ConfigurationError(msg) from None

    def __getitem__(self, name: str) -> FieldController:
        return self.field(name)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[FieldController]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    # -- State -------------------------------------------------------------

    @property
    def state(self) -> FormValidationState:
        return self._state

    @property
    def skippable(self) -> bool:
        return self._state.skippable

    @property
    def required_fields(self) -> frozenset[str]:
        return self._state.required_fields

    @property
    def enable_validation(self) -> bool:
        return self._enable_validation

    @property
    def values(self) -> dict[str, str]:
        return {name: f.value for name, f in self._fields.items()}

    @property
    def can_submit(self) -> bool:
        return self._state.is_submittable(
            self.values,
            validation_enabled=self._enable_validation,
        )

    def errors(self) -> dict[str, list[str]]:
        """Errors recorded for failing fields (touched or not)."""
        return self._state.errors()

    def completion_percentage(self) -> int:
        return completion_percentage(self.values, self._fields)

    def set_enable_validation(self, enabled: bool) -> None:
        """Switch validation for every field at once."""
        self._enable_validation = enabled
        for controller in self._fields.values():
            controller.set_enable_validation(enabled)
        self._recompute()

    # -- Lifecycle ---------------------------------------------------------

    def submit(self, handler: SubmitHandler) -> bool:
        """Call *handler* with the current values if the form may submit.

        Returns True when the handler ran. Validation state is discarded
        after a successful submit; if the handler raises, it is kept.
        """
        if not self.can_submit:
            logger.debug("Submit blocked: %s", self._blocked_reason())
            return False
        handler(self.values)
        self._state.clear()
        self._recompute()
        return True

    async def submit_async(self, handler: Callable[[dict[str, str]], Awaitable[Any] | Any]) -> bool:
        """Like ``submit()``, awaiting *handler* when it returns an awaitable."""
        if not self.can_submit:
            logger.debug("Submit blocked: %s", self._blocked_reason())
            return False
        outcome = handler(self.values)
        if inspect.isawaitable(outcome):
            await outcome
        self._state.clear()
        self._recompute()
        return True

    def reset(self, values: Mapping[str, str] | None = None) -> None:
        """Return every field to untouched with the given (or empty) value."""
        values = values or {}
        self._state.clear()
        for name, controller in self._fields.items():
            controller.reset(values.get(name, ""))
        self._recompute()

    def close(self) -> None:
        """Unmount the form: cancel every pending timer, drop all results."""
        for controller in self._fields.values():
            controller.close()
        self._state.clear()

    def __enter__(self) -> "Form":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Form(fields={list(self._fields)!r}, skippable={self._state.skippable})"

    # -- Internals ---------------------------------------------------------

    def _mode_for(self, name: str) -> ValidationMode:
        if self._state.skippable:
            return "optional"
        return "required" if name in self._state.required_fields else "optional"

    def _on_report(self, name: str, result: ValidationResult) -> None:
        self._state.record(name, result)
        self._recompute()

    def _on_value(self, _value: str) -> None:
        self._recompute()

    def _recompute(self) -> None:
        submittable = self.can_submit
        if submittable == self._submittable:
            return
        first = self._submittable is None
        self._submittable = submittable
        if not first and self._on_submittable_change is not None:
            self._on_submittable_change(submittable)

    def _blocked_reason(self) -> str:
        values = self.values
        if not self._state.skippable:
            missing = sorted(n for n in self._state.required_fields if is_blank(values.get(n)))
            if missing:
                return f"missing {', '.join(missing)}"
        failing = sorted(self._state.errors())
        return f"invalid {', '.join(failing)}" if failing else "invalid fields"
