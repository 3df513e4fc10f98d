"""Template filters for rendering validated fields.

Registered on every environment built by ``create_environment()``.
"""

import html
from collections.abc import Iterable, Mapping
from typing import Any

from kida.template import Markup

from formgate.validation.result import FormValidationResult


def attr(value: Any, name: str) -> str | Markup:
    """Output an HTML attribute when value is truthy, else empty string.

    Example:
        <input name="email"{{ placeholder | attr("placeholder") }}>
        → <input name="email" placeholder="you@example.com">
        → <input name="email">                (when placeholder is "")

    """
    if not value:
        return ""
    return Markup(f' {name}="{html.escape(str(value))}"')


def field_errors(errors: Any, field_name: str) -> list[str]:
    """Extract validation errors for a single field.

    Accepts a ``{field: [messages]}`` dict or a ``FormValidationResult``;
    anything else, or a field without errors, yields an empty list.

    Example:
        {% for msg in result | field_errors("email") %}
          <p class="field-error">{{ msg }}</p>
        {% end %}

    """
    if isinstance(errors, FormValidationResult):
        errors = errors.errors
    if isinstance(errors, Mapping):
        val = errors.get(field_name, [])
        return list(val) if val else []
    return []


def error_class(errors: Iterable[str] | None, block: str = "field") -> str:
    """CSS classes for a field wrapper: ``"field"`` or ``"field field--error"``."""
    if errors:
        return f"{block} {block}--error"
    return block


BUILTIN_FILTERS: dict[str, Any] = {
    "attr": attr,
    "error_class": error_class,
    "field_errors": field_errors,
}
