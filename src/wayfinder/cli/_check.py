"""``wayfinder check`` — route-table validation command.

Resolves an import string to a route table and runs the table checks,
printing results to stdout.  Exits with code 1 if errors are found.
"""

import argparse

from wayfinder.cli._resolve import load_routes_or_exit
from wayfinder.contracts import check_route_table


def run_check(args: argparse.Namespace) -> None:
    """Validate the route table named by ``args.routes``."""
    routes = load_routes_or_exit(args)
    result = check_route_table(routes)
    print(result.summary())
    if not result.ok:
        raise SystemExit(1)
