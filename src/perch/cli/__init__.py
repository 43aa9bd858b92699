"""Perch CLI — inspect a router, match paths, and build URLs.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — compiled URL routing with reverse routing.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("router", help="Import string (e.g. myapp:router)")

    # -- perch match ------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Dispatch a path and show the result")
    match_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    match_parser.add_argument("path", help="Request path to dispatch (e.g. /users/42)")

    # -- perch url --------------------------------------------------------
    url_parser = subparsers.add_parser("url", help="Build the URL for a named route")
    url_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    url_parser.add_argument("name", help="Route name")
    url_parser.add_argument(
        "params",
        nargs="*",
        metavar="KEY=VALUE",
        help="Route and query parameters",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from perch.cli._match import run_match

        run_match(args)
    elif args.command == "url":
        from perch.cli._url import run_url

        run_url(args)
