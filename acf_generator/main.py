"""Entry point for the ``acf-generator`` command."""

import argparse
import logging
import sys

from . import __version__
from .cli import (
    create_ai_subparser,
    create_groups_subparser,
    create_snippets_subparser,
    create_types_subparser,
    create_validate_subparser,
)
from .logging_config import setup_logging


def create_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", "-v", action="store_true", help="Debug logging and run metadata"
    )
    common.add_argument("--log-file", metavar="FILE", help="Also write logs to FILE")

    parser = argparse.ArgumentParser(
        prog="acf-generator",
        description="Generate ACF field groups with AI and PHP template snippets from ACF JSON",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    parents = [common]
    create_snippets_subparser(subparsers, parents)
    create_groups_subparser(subparsers, parents)
    create_validate_subparser(subparsers, parents)
    create_ai_subparser(subparsers, parents)
    create_types_subparser(subparsers, parents)
    return parser


def main(argv=None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
