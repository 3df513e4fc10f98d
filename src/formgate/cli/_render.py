"""``formgate render`` — print a field's HTML."""

import argparse
import sys

from formgate.errors import ConfigurationError
from formgate.fields.controller import FieldController
from formgate.templating import render_field


def render(args: argparse.Namespace) -> None:
    """Render *args.field* holding *args.value*, touched unless told otherwise."""
    try:
        field = FieldController(args.field, mode="required")
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    field.on_change(args.value)
    if not args.untouched:
        field.on_blur()
    print(render_field(field))
