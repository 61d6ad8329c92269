"""``wayfinder resolve`` — resolve a URL against a route table.

Prints the matched route, its decoded parameters and query, the
fragment, the rendered title, and the breadcrumb trail.  Exits with
code 1 when nothing matches.
"""

import argparse
import json
import sys
from typing import Any

from wayfinder.cli._resolve import load_routes_or_exit
from wayfinder.errors import WayfinderError
from wayfinder.routing.matcher import get_route
from wayfinder.routing.nested import build_breadcrumb_trail


def _parse_context(raw: str | None) -> dict[str, Any] | None:
    if raw is None:
        return None
    try:
        context = json.loads(raw)
    except json.JSONDecodeError as exc:
        print(f"Error: --context is not valid JSON: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    if not isinstance(context, dict):
        print("Error: --context must be a JSON object", file=sys.stderr)
        raise SystemExit(1)
    return context


def run_resolve(args: argparse.Namespace) -> None:
    """Resolve ``args.url`` against the table named by ``args.routes``."""
    routes = load_routes_or_exit(args)
    context = _parse_context(args.context)

    try:
        match = get_route(args.url, routes)
    except WayfinderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    trail = build_breadcrumb_trail(args.url, routes, context)
    print(f"route:      /{match.route.path}")
    print(f"params:     {json.dumps(match.params, ensure_ascii=False)}")
    print(f"query:      {json.dumps(match.query, ensure_ascii=False, default=str)}")
    print(f"fragment:   {match.fragment}")
    print(f"title:      {match.title(context)}")
    print(f"breadcrumb: {' > '.join(trail)}")
