"""Formgate CLI — inspect the field catalog and try values against it.

Entry point registered as ``formgate`` in ``pyproject.toml``::

    [project.scripts]
    formgate = "formgate.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``formgate`` command."""
    parser = argparse.ArgumentParser(
        prog="formgate",
        description="Formgate — client-side field validation and submit gating.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- formgate fields --------------------------------------------------
    fields_parser = subparsers.add_parser("fields", help="List catalog fields and their rules")
    fields_parser.add_argument(
        "names",
        nargs="*",
        help="Only show these fields",
    )

    # -- formgate check ---------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a value for a field")
    check_parser.add_argument("field", help="Catalog field name (e.g. email)")
    check_parser.add_argument("value", help="Value to validate")
    check_parser.add_argument(
        "--optional",
        action="store_true",
        help="Validate in optional mode (blank values pass)",
    )
    check_parser.add_argument(
        "--original",
        default=None,
        help="Value being confirmed (confirmPassword only)",
    )

    # -- formgate render --------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render a field as HTML")
    render_parser.add_argument("field", help="Catalog field name")
    render_parser.add_argument("value", nargs="?", default="", help="Field value")
    render_parser.add_argument(
        "--untouched",
        action="store_true",
        help="Render before the user has left the field (no errors shown)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "fields":
        from formgate.cli._fields import list_fields

        list_fields(args)
    elif args.command == "check":
        from formgate.cli._check import run_check

        run_check(args)
    elif args.command == "render":
        from formgate.cli._render import render

        render(args)
