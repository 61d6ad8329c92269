"""``wayfinder routes`` — print the route tree.

Resolves an import string to a route table and prints its routes nested
under their parents, with the parameters each pattern takes.
"""

import argparse

from wayfinder.cli._resolve import load_routes_or_exit
from wayfinder.routing.nested import NestedRoute, build_nested_routes
from wayfinder.routing.pattern import extract_param_names


def _format_node(node: NestedRoute, depth: int, lines: list[str]) -> None:
    path = f"/{node.route.path}"
    params = list(dict.fromkeys(extract_param_names(node.route.path)))
    suffix = f"  ({', '.join(params)})" if params else ""
    lines.append(f"{'  ' * depth}{path}{suffix}")
    for child in node.children:
        _format_node(child, depth + 1, lines)


def run_routes(args: argparse.Namespace) -> None:
    """List the routes of ``args.routes`` as an indented tree.

    Routes whose parent is missing from the table are listed separately
    so nothing is hidden.
    """
    routes = load_routes_or_exit(args)
    if not routes:
        print("No routes registered.")
        return

    lines: list[str] = []
    forest = build_nested_routes(routes)
    for root in forest:
        _format_node(root, 0, lines)
    print("\n".join(lines))

    known = {r.path for r in routes}
    orphans = [r for r in routes if r.parent_path is not None and r.parent_path not in known]
    if orphans:
        print()
        print("Unattached (unknown parent):")
        for route in orphans:
            print(f"  /{route.path}  -> /{route.parent_path}")
