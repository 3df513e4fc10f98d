"""Kida templating for validated fields."""

from formgate.templating.filters import BUILTIN_FILTERS, attr, error_class, field_errors
from formgate.templating.integration import create_environment
from formgate.templating.widgets import FIELD_TEMPLATE, render_field, render_fields

__all__ = [
    "BUILTIN_FILTERS",
    "FIELD_TEMPLATE",
    "attr",
    "create_environment",
    "error_class",
    "field_errors",
    "render_field",
    "render_fields",
]
