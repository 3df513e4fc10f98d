"""Render field controllers to HTML."""

from collections.abc import Iterable

from kida import Environment

from formgate.fields.controller import FieldController, FieldView
from formgate.templating.integration import create_environment

FIELD_TEMPLATE = "formgate/field.html"

_default_env: Environment | None = None


def _env() -> Environment:
    global _default_env
    if _default_env is None:
        _default_env = create_environment()
    return _default_env


def render_field(field: FieldController | FieldView, *, env: Environment | None = None) -> str:
    """Render one field: label, input, and its display errors.

    Errors only appear once the field is touched (or when supplied
    externally), following ``FieldController.display_errors``.

    Usage::

        html = render_field(form.field("email"))
    """
    view = field.view if isinstance(field, FieldController) else field
    template = (env or _env()).get_template(FIELD_TEMPLATE)
    return template.render({"view": view}).strip()


def render_fields(
    fields: Iterable[FieldController | FieldView], *, env: Environment | None = None
) -> str:
    """Render several fields (a ``Form`` works) one after another."""
    env = env or _env()
    return "\n".join(render_field(f, env=env) for f in fields)
