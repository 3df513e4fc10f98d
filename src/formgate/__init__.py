"""Formgate — client-side field validation and submit gating.

Validates form fields against a table of rules, shows errors only once
the user has left a field (or a browser autofill has settled), and
decides whether the form as a whole may be submitted.

Basic usage::

    from formgate import Form

    form = Form(required_fields={"email", "password"})
    form.add_field("email")
    form.add_field("password")

    form.field("email").on_change("user@example.com")
    form.field("email").on_blur()
    form.can_submit

One-off checks without any state::

    from formgate import validate_password
    validate_password("Password123@").is_valid   # True
"""

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_CATALOG",
    "VALID",
    "ConfigurationError",
    "FieldCatalog",
    "FieldController",
    "Form",
    "FormValidationResult",
    "FormValidationState",
    "FormgateConfig",
    "FormgateError",
    "TaskGroupScheduler",
    "TeardownError",
    "ValidationConfig",
    "ValidationResult",
    "address_form",
    "is_form_submittable",
    "login_form",
    "render_field",
    "signup_form",
    "validate",
    "validate_confirm_password",
    "validate_email",
    "validate_field",
    "validate_password",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formgate`` fast while providing a clean top-level API.
    """
    if name == "FormgateConfig":
        from formgate.config import FormgateConfig

        return FormgateConfig

    if name in ("ConfigurationError", "FormgateError", "TeardownError"):
        from formgate import errors as _errors

        return getattr(_errors, name)

    if name in (
        "DEFAULT_CATALOG",
        "VALID",
        "FieldCatalog",
        "FormValidationResult",
        "ValidationConfig",
        "ValidationResult",
        "validate",
        "validate_confirm_password",
        "validate_email",
        "validate_field",
        "validate_password",
    ):
        from formgate import validation as _validation

        return getattr(_validation, name)

    if name in ("FieldController", "TaskGroupScheduler"):
        from formgate import fields as _fields

        return getattr(_fields, name)

    if name in (
        "Form",
        "FormValidationState",
        "address_form",
        "is_form_submittable",
        "login_form",
        "signup_form",
    ):
        from formgate import forms as _forms

        return getattr(_forms, name)

    if name == "render_field":
        from formgate.templating import render_field

        return render_field

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
