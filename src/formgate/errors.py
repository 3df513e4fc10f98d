"""Formgate exception hierarchy.

Validation failures are data (``ValidationResult.errors``), never
exceptions. These types cover programmer errors: wiring a form wrongly,
asking for a field the catalog does not know, or feeding bad threshold
data into a ``FieldCatalog``.
"""


class FormgateError(Exception):
    """Base for all formgate-specific errors."""


class ConfigurationError(FormgateError):
    """Raised when a catalog, field, or form is configured inconsistently.

    Typically raised while a form is being assembled: unknown field names,
    duplicate registrations, or a cross-field dependency that would form a
    cycle.
    """


class TeardownError(FormgateError):
    """Raised when a scheduled task is armed after it was closed.

    A closed task belongs to a field that has been unmounted; firing it
    would act on stale state.
    """
