"""Validation results — immutable containers for rule outcomes."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating one field value against its rules.

    ``errors`` holds the message of every failing rule, in rule order.
    ``is_valid`` is True when there are no errors, and the result is
    falsy when invalid, so you can write::

        result = validate_field("email", value, config)
        if not result:
            show(result.errors)
    """

    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if every rule passed."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid


VALID = ValidationResult()


@dataclass(frozen=True, slots=True)
class FormValidationResult:
    """Per-field results of validating several values in one pass.

    ``results`` maps every validated field to its ``ValidationResult``.
    ``errors`` only lists the fields that failed::

        {"email": ["Email must be valid"],
         "password": ["Password must contain at least one digit"]}
    """

    results: Mapping[str, ValidationResult] = field(default_factory=dict)

    @property
    def errors(self) -> dict[str, list[str]]:
        return {name: list(r.errors) for name, r in self.results.items() if r.errors}

    @property
    def is_valid(self) -> bool:
        """True if every field passed."""
        return all(r.is_valid for r in self.results.values())

    def __bool__(self) -> bool:
        return self.is_valid

    def all_errors(self) -> list[str]:
        """Every error message, flattened in field order."""
        return [msg for r in self.results.values() for msg in r.errors]
