"""Kida environment setup.

Creates a kida Environment that can load formgate's field templates,
optionally layered under an application's own template loader so that
``formgate/field.html`` can be overridden.
"""

from collections.abc import Callable
from typing import Any

from kida import ChoiceLoader, Environment, PackageLoader

from formgate.config import FormgateConfig
from formgate.templating.filters import BUILTIN_FILTERS


def create_environment(
    config: FormgateConfig | None = None,
    *,
    loader: Any = None,
    filters: dict[str, Callable[..., Any]] | None = None,
) -> Environment:
    """Create a kida Environment for rendering fields.

    Args:
        config: Autoescape and whitespace settings.
        loader: An application loader consulted before the built-in
            templates.
        filters: Extra filters, registered after (and able to replace)
            the built-ins.
    """
    config = config or FormgateConfig()
    builtin = PackageLoader("formgate.templating", "templates")
    env = Environment(
        loader=ChoiceLoader([loader, builtin]) if loader is not None else builtin,
        autoescape=config.autoescape,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )
    env.update_filters(BUILTIN_FILTERS)
    if filters:
        env.update_filters(filters)
    return env
