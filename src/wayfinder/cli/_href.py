"""``wayfinder href`` — build an href for a route in a table."""

import argparse
import sys

from wayfinder.cli._resolve import load_routes_or_exit
from wayfinder.errors import WayfinderError
from wayfinder.routing.href import get_href


def _split_pairs(pairs: list[str], option: str) -> list[tuple[str, str]]:
    result: list[tuple[str, str]] = []
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            print(f"Error: {option} expects KEY=VALUE, got {pair!r}", file=sys.stderr)
            raise SystemExit(1)
        result.append((key, value))
    return result


def run_href(args: argparse.Namespace) -> None:
    """Print the href of ``args.path`` built from the given parts.

    A ``--query`` key given more than once becomes a multi-valued entry.
    """
    routes = load_routes_or_exit(args)
    params = dict(_split_pairs(args.param, "--param"))

    query: dict[str, str | list[str]] = {}
    for key, value in _split_pairs(args.query, "--query"):
        existing = query.get(key)
        if existing is None:
            query[key] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            query[key] = [existing, value]

    try:
        href = get_href(
            args.path,
            routes,
            params=params,
            query=query or None,
            fragment=args.fragment,
        )
    except WayfinderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(href)
