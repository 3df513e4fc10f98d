"""``formgate fields`` — print the field catalog."""

import argparse
import sys

from formgate.errors import ConfigurationError
from formgate.validation import DEFAULT_CATALOG


def list_fields(args: argparse.Namespace) -> None:
    """Print each field's label, input type, and rule names.

    Unknown names print an error and exit with code 1.
    """
    names = args.names or list(DEFAULT_CATALOG)
    for name in names:
        try:
            config = DEFAULT_CATALOG.build_config(name, mode="required")
        except ConfigurationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
        spec = DEFAULT_CATALOG[name]
        rules = ", ".join(r.name for r in config.rules) if config else ""
        print(f"{name:<20} {spec.label:<24} {spec.field_type:<9} {rules}")
