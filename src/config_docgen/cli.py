"""Command line interface for config-docgen."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable

from config_docgen.catalog import load_catalog
from config_docgen.config import PageConfig, load_config
from config_docgen.errors import DocGenError
from config_docgen.generate import generate_docs
from config_docgen.renderer import RENDERERS

Handler = Callable[[argparse.Namespace], int]

logger = logging.getLogger(__name__)


def _handle_gen_docs(args: argparse.Namespace) -> int:
    """Generate a configuration reference document."""
    try:
        page = load_config(args.config) if args.config else PageConfig()
        catalog = load_catalog(args.catalog)
        generate_docs(catalog, args.output, fmt=args.format, page=page)
    except (DocGenError, OSError, ValueError) as err:
        print(f"config-docgen: error: {err}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(prog="config-docgen")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log progress at debug level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen_docs = subparsers.add_parser(
        "gen-docs", help="render the property reference page"
    )
    gen_docs.add_argument("catalog", help="YAML property catalog")
    gen_docs.add_argument("-o", "--output", required=True, help="destination file")
    gen_docs.add_argument(
        "-f",
        "--format",
        default="markdown",
        choices=sorted(RENDERERS),
        help="output format (default: markdown)",
    )
    gen_docs.add_argument("-c", "--config", help="TOML file with a [page] table")
    gen_docs.set_defaults(func=_handle_gen_docs)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    logger.debug("running %s", args.command)
    handler: Handler = args.func
    return handler(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
