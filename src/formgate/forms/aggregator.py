"""Submit gating — combine per-field results into one decision.

Two modes:

- **Required** (``skippable=False``): every required field has a
  non-blank value, and every recorded result is valid.
- **Skippable** (``skippable=True``): empty fields never block; a field
  that holds a value must have a valid recorded result.

When validation is switched off for the whole form, recorded results are
ignored and only the presence of required values is checked.
"""

from collections.abc import Iterable, Mapping

from formgate.validation.result import ValidationResult
from formgate.validation.rules import is_blank


def is_form_submittable(
    required_fields: Iterable[str],
    results: Mapping[str, ValidationResult],
    values: Mapping[str, str | None],
    *,
    skippable: bool,
    validation_enabled: bool = True,
) -> bool:
    """Decide whether a form may be submitted.

    Args:
        required_fields: Fields that must hold a non-blank value (required
            mode only).
        results: Latest ``ValidationResult`` per field, as reported by the
            field controllers. Fields that never reported are absent.
        values: Current field values.
        skippable: Whether empty optional fields may be left empty.
        validation_enabled: When False, *results* are not consulted.

    Example::

        is_form_submittable({"city", "country"}, {},
                            {"city": "", "country": "Canada"}, skippable=False)
        # False: city is empty
    """
    if skippable:
        if not validation_enabled:
            return True
        return all(
            is_blank(values.get(name)) or result.is_valid for name, result in results.items()
        )

    complete = all(not is_blank(values.get(name)) for name in required_fields)
    if not complete or not validation_enabled:
        return complete
    return all(result.is_valid for result in results.values())


def completion_percentage(values: Mapping[str, str | None], fields: Iterable[str]) -> int:
    """Percentage of *fields* holding a non-blank value, rounded.

    Required and optional fields count the same.
    """
    names = list(fields)
    if not names:
        return 0
    filled = sum(1 for name in names if not is_blank(values.get(name)))
    return round(100 * filled / len(names))


class FormValidationState:
    """Latest validation result per field, plus the gating inputs.

    Created when a form mounts, updated from every field's
    ``on_validation_change`` report, cleared after a successful submit.
    """

    __slots__ = ("_results", "required_fields", "skippable")

    def __init__(self, required_fields: Iterable[str] = (), *, skippable: bool = False) -> None:
        self.required_fields: frozenset[str] = frozenset(required_fields)
        self.skippable = skippable
        self._results: dict[str, ValidationResult] = {}

    @property
    def results(self) -> Mapping[str, ValidationResult]:
        return dict(self._results)

    def record(self, name: str, result: ValidationResult) -> None:
        self._results[name] = result

    def forget(self, name: str) -> None:
        self._results.pop(name, None)

    def clear(self) -> None:
        self._results.clear()

    def errors(self) -> dict[str, list[str]]:
        """Recorded errors for the fields that currently fail."""
        return {name: list(r.errors) for name, r in self._results.items() if r.errors}

    def is_submittable(
        self,
        values: Mapping[str, str | None],
        *,
        validation_enabled: bool = True,
    ) -> bool:
        return is_form_submittable(
            self.required_fields,
            self._results,
            values,
            skippable=self.skippable,
            validation_enabled=validation_enabled,
        )

    def __repr__(self) -> str:
        return (
            f"FormValidationState(required={sorted(self.required_fields)!r}, "
            f"skippable={self.skippable}, results={len(self._results)})"
        )
