"""Route trees and breadcrumb trails derived from ``parent_path`` links."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from wayfinder.routing.matcher import find_route
from wayfinder.routing.route import Route, RouteArgs, breadcrumb_label

# Ancestor walks stop after this many steps even without a cycle
MAX_BREADCRUMB_DEPTH = 10


@dataclass(slots=True)
class NestedRoute:
    """A route and its child routes. Mutable during construction only."""

    route: Route[Any, Any, Any]
    children: list["NestedRoute"] = field(default_factory=list)


def build_nested_routes(routes: Sequence[Route[Any, Any, Any]]) -> list[NestedRoute]:
    """Build a forest from a flat route list.

    Routes without ``parent_path`` become roots, in table order. A route
    whose parent is not in the table is dropped from the forest.
    """
    ordered = [NestedRoute(route) for route in routes]
    nodes: dict[str, NestedRoute] = {}
    for node in ordered:
        nodes.setdefault(node.route.path, node)

    roots: list[NestedRoute] = []
    for node in ordered:
        if not node.route.parent_path:
            roots.append(node)
            continue
        parent = nodes.get(node.route.parent_path)
        if parent is not None and parent is not node:
            parent.children.append(node)
    return roots


def build_breadcrumb_trail(
    url: str | httpx.URL,
    routes: Sequence[Route[Any, Any, Any]],
    context: Any = None,
) -> list[str]:
    """Return breadcrumb labels from the root ancestor down to *url*'s route.

    Each label is the route's ``breadcrumb``, else its ``title``, else
    ``""``. Only the matched route sees *context*; ancestors get ``{}``.
    The walk stops at a repeated path or after ``MAX_BREADCRUMB_DEPTH``
    steps. An unmatched URL yields ``[]``.
    """
    matched = find_route(url, routes)
    if matched is None:
        return []

    by_path: dict[str, Route[Any, Any, Any]] = {}
    for route in routes:
        by_path.setdefault(route.path, route)

    trail: list[str] = []
    visited: set[str] = set()
    current: Route[Any, Any, Any] | None = matched.route
    while current is not None and len(visited) < MAX_BREADCRUMB_DEPTH:
        if current.path in visited:
            break
        visited.add(current.path)
        args = RouteArgs(
            params=matched.params,
            query=matched.query,
            meta=matched.meta,
            context=context if current is matched.route else {},
            query_params=matched.query_params,
        )
        trail.insert(0, breadcrumb_label(current, args))
        current = by_path.get(current.parent_path) if current.parent_path else None
    return trail
