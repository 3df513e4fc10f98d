"""Field validation — declarative rules, clean results.

Usage::

    from formgate.validation import DEFAULT_CATALOG, validate_field

    config = DEFAULT_CATALOG.build_config("email", mode="required")
    result = validate_field("email", form["email"], config)
    if not result:
        # result.errors == ("Email must be valid",)
        ...

Validation is a pure function: the same inputs always give the same
result, nothing is cached, and a disabled field (``config is None``) is
always valid.
"""

from collections.abc import Mapping

from formgate.validation.catalog import DEFAULT_CATALOG, FieldCatalog, FieldSpec
from formgate.validation.passwords import PASSWORD_SPECIALS, confirm_password_rule, password_rules
from formgate.validation.result import VALID, FormValidationResult, ValidationResult
from formgate.validation.rules import (
    FieldType,
    Rule,
    ValidationConfig,
    ValidationMode,
    contains,
    digits_only,
    email,
    equals,
    is_blank,
    matches,
    max_length,
    min_length,
    required,
    rule,
)

__all__ = [
    "DEFAULT_CATALOG",
    "PASSWORD_SPECIALS",
    "VALID",
    "FieldCatalog",
    "FieldSpec",
    "FieldType",
    "FormValidationResult",
    "Rule",
    "ValidationConfig",
    "ValidationMode",
    "ValidationResult",
    "confirm_password_rule",
    "contains",
    "digits_only",
    "email",
    "equals",
    "is_blank",
    "matches",
    "max_length",
    "min_length",
    "password_rules",
    "required",
    "rule",
    "validate",
    "validate_confirm_password",
    "validate_email",
    "validate_field",
    "validate_password",
]


def validate_field(
    field_name: str,
    value: str | None,
    config: ValidationConfig | None,
) -> ValidationResult:
    """Validate one value against a field's rules.

    Every rule runs, in order; the messages of all failing rules are
    reported together. A missing *config* means validation is disabled
    and the value is accepted unconditionally, so disabled fields never
    block form submission. A ``None`` value is validated as ``""``.

    Args:
        field_name: Name of the field, for callers that validate many
            fields through one entry point.
        value: Current field value.
        config: Rules to apply, or ``None`` when validation is disabled.

    Returns:
        A ``ValidationResult``; ``VALID`` when nothing failed.
    """
    if config is None:
        return VALID
    text = value or ""
    errors = tuple(r.message for r in config.rules if not r(text))
    if not errors:
        return VALID
    return ValidationResult(errors=errors)


def validate(
    data: Mapping[str, str | None],
    configs: Mapping[str, ValidationConfig | None],
) -> FormValidationResult:
    """Validate several fields in one pass.

    Args:
        data: Field name to current value. Missing fields validate as ``""``.
        configs: Field name to config; only these fields are validated.

    Example::

        result = validate(form, {
            "email": DEFAULT_CATALOG.build_config("email", mode="required"),
            "phone": DEFAULT_CATALOG.build_config("phone"),
        })
        if not result:
            # result.errors == {"email": ["Email is required"]}
            ...
    """
    return FormValidationResult(
        results={
            name: validate_field(name, data.get(name), config) for name, config in configs.items()
        }
    )


# ---------------------------------------------------------------------------
# Convenience entry points for the auth fields
# ---------------------------------------------------------------------------


def validate_password(
    value: str | None,
    *,
    mode: ValidationMode = "required",
    catalog: FieldCatalog = DEFAULT_CATALOG,
) -> ValidationResult:
    """Validate a new password against the composite password rules."""
    return validate_field("password", value, catalog.build_config("password", mode=mode))


def validate_confirm_password(
    original: str | None,
    confirm: str | None,
    *,
    mode: ValidationMode = "required",
    catalog: FieldCatalog = DEFAULT_CATALOG,
) -> ValidationResult:
    """Validate a password confirmation against the password it confirms."""
    config = catalog.build_config("confirmPassword", mode=mode, original=original)
    return validate_field("confirmPassword", confirm, config)


def validate_email(
    value: str | None,
    *,
    mode: ValidationMode = "required",
    catalog: FieldCatalog = DEFAULT_CATALOG,
) -> ValidationResult:
    return validate_field("email", value, catalog.build_config("email", mode=mode))
