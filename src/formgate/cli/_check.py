"""``formgate check`` — validate one value from the command line.

Prints ``ok`` or the error messages. Exits with code 1 if the value is
invalid or the field is unknown.
"""

import argparse
import sys

from formgate.errors import ConfigurationError
from formgate.validation import DEFAULT_CATALOG, validate_field


def run_check(args: argparse.Namespace) -> None:
    try:
        config = DEFAULT_CATALOG.build_config(
            args.field,
            mode="optional" if args.optional else "required",
            original=args.original,
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = validate_field(args.field, args.value, config)
    if result.is_valid:
        print("ok")
        return
    for message in result.errors:
        print(f"  - {message}")
    raise SystemExit(1)
