"""Wayfinder CLI — route-table inspection and validation.

Entry point registered as ``wayfinder`` in ``pyproject.toml``::

    [project.scripts]
    wayfinder = "wayfinder.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wayfinder`` command."""
    parser = argparse.ArgumentParser(
        prog="wayfinder",
        description="Wayfinder — typed route definitions and URL resolution.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wayfinder check --------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a route table")
    check_parser.add_argument("routes", help="Import string (e.g. myapp.routes:routes)")

    # -- wayfinder routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Print the route tree")
    routes_parser.add_argument("routes", help="Import string (e.g. myapp.routes:routes)")

    # -- wayfinder resolve ------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a URL to a route")
    resolve_parser.add_argument("routes", help="Import string (e.g. myapp.routes:routes)")
    resolve_parser.add_argument("url", help="Absolute or relative URL")
    resolve_parser.add_argument(
        "--context",
        default=None,
        help="JSON object passed to title and breadcrumb callables",
    )

    # -- wayfinder href ---------------------------------------------------
    href_parser = subparsers.add_parser("href", help="Build an href for a route")
    href_parser.add_argument("routes", help="Import string (e.g. myapp.routes:routes)")
    href_parser.add_argument("path", help="Route pattern (e.g. '@[handle]')")
    href_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Path parameter (repeatable)",
    )
    href_parser.add_argument(
        "--query",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query value; repeat a key for multiple values",
    )
    href_parser.add_argument("--fragment", default=None, help="Fragment without '#'")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "check":
        from wayfinder.cli._check import run_check

        run_check(args)
    elif args.command == "routes":
        from wayfinder.cli._routes import run_routes

        run_routes(args)
    elif args.command == "resolve":
        from wayfinder.cli._match import run_resolve

        run_resolve(args)
    elif args.command == "href":
        from wayfinder.cli._href import run_href

        run_href(args)
