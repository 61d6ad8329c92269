"""Route-table import resolution — resolves ``"module:attribute"`` strings.

Shared utility used by every ``wayfinder`` subcommand to locate a route
table from a user-supplied import string.
"""

import argparse
import importlib
import sys
from collections.abc import Sequence
from typing import Any

from wayfinder.routing.route import Route


def resolve_routes(import_string: str) -> list[Route[Any, Any, Any]]:
    """Resolve an import string to a list of routes.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"routes"`` (e.g. ``"myapp"`` resolves to
    ``myapp.routes``).

    Supports factory functions: if the resolved object is callable, it is
    called and its return value used as the table.

    Args:
        import_string: Dotted module path with optional ``:attribute``
            suffix (e.g. ``"myapp:routes"``, ``"myapp.nav:build_routes"``).

    Returns:
        The route table as a list, in its original order.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a sequence of ``Route``.

    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "routes"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, (str, bytes)) or not isinstance(obj, Sequence):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a sequence of routes"
        raise TypeError(msg)

    for item in obj:
        if not isinstance(item, Route):
            msg = f"{import_string!r} contains {type(item).__name__}, not a wayfinder.Route"
            raise TypeError(msg)

    return list(obj)


def load_routes_or_exit(args: argparse.Namespace) -> list[Route[Any, Any, Any]]:
    """``resolve_routes(args.routes)``, printing the error and exiting 1 on failure."""
    try:
        return resolve_routes(args.routes)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
