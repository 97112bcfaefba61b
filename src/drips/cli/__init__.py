"""Drips CLI — inspect route declarations and try requests against them.

Entry point registered as ``drips`` in ``pyproject.toml``::

    [project.scripts]
    drips = "drips.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``drips`` command."""
    parser = argparse.ArgumentParser(
        prog="drips",
        description="Drips — named URL routing with first-wins matching.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (debug, info, warning, ...). Defaults to the app config.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- drips routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List declared routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- drips match ------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which route a request selects")
    match_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    match_parser.add_argument("path", help="Request path (e.g. /users/alice)")
    match_parser.add_argument("--method", default="GET", help="HTTP method")
    match_parser.add_argument("--host", default="", help="Request host")
    match_parser.add_argument("--https", action="store_true", help="Request arrived over HTTPS")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.log_level:
        logging.basicConfig(level=args.log_level.upper())

    if args.command == "routes":
        from drips.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from drips.cli._match import run_match

        run_match(args)
