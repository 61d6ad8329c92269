"""Wayfinder — typed route definitions and URL resolution.

Declare a route table once; resolve URLs against it and build hrefs from
it. Resolution and construction are inverses of each other.

Basic usage::

    from wayfinder import Route, build_href, find_route

    routes = [
        Route(path="", title=lambda args: "Home"),
        Route(
            path="@[handle]",
            title=lambda args: f"@{args.params['handle']}",
            parent_path="",
        ),
    ]

    match = find_route("/@alice?tab=posts", routes)
    match.params                                        # {"handle": "alice"}
    build_href(routes[1], params={"handle": "alice"})   # "/@alice"

Typed query readers and table-wide defaults::

    from wayfinder import apply_typed_defaults

    routes = apply_typed_defaults(routes)
"""

import importlib

__version__ = "0.1.0"
__all__ = [
    "CheckResult",
    "CompiledPattern",
    "ConfigurationError",
    "InvalidURL",
    "MissingPathParams",
    "NestedRoute",
    "PatternError",
    "QueryParams",
    "QueryParamsReader",
    "Route",
    "RouteArgs",
    "RouteDefaults",
    "RouteMatch",
    "RouteNotFound",
    "SerializeQueryArgs",
    "TypedQueryParams",
    "WayfinderError",
    "apply_route_defaults",
    "apply_typed_defaults",
    "build_breadcrumb_trail",
    "build_href",
    "build_nested_routes",
    "build_query_string",
    "check_route_table",
    "compile_pattern",
    "create_default_serializer",
    "encode_key_value",
    "encode_reserved_chars",
    "find_route",
    "get_href",
    "get_relative_part",
    "get_route",
    "parse_url",
    "to_safe_string",
    "validate_routes",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "CheckResult": "wayfinder.contracts",
    "CompiledPattern": "wayfinder.routing.pattern",
    "ConfigurationError": "wayfinder.errors",
    "InvalidURL": "wayfinder.errors",
    "MissingPathParams": "wayfinder.errors",
    "NestedRoute": "wayfinder.routing.nested",
    "PatternError": "wayfinder.errors",
    "QueryParams": "wayfinder.query.params",
    "QueryParamsReader": "wayfinder._internal.multimap",
    "Route": "wayfinder.routing.route",
    "RouteArgs": "wayfinder.routing.route",
    "RouteDefaults": "wayfinder.config",
    "RouteMatch": "wayfinder.routing.route",
    "RouteNotFound": "wayfinder.errors",
    "SerializeQueryArgs": "wayfinder.routing.route",
    "TypedQueryParams": "wayfinder.query.typed",
    "WayfinderError": "wayfinder.errors",
    "apply_route_defaults": "wayfinder.routing.defaults",
    "apply_typed_defaults": "wayfinder.routing.defaults",
    "build_breadcrumb_trail": "wayfinder.routing.nested",
    "build_href": "wayfinder.routing.href",
    "build_nested_routes": "wayfinder.routing.nested",
    "build_query_string": "wayfinder.encoding",
    "check_route_table": "wayfinder.contracts",
    "compile_pattern": "wayfinder.routing.pattern",
    "create_default_serializer": "wayfinder.query.serialize",
    "encode_key_value": "wayfinder.encoding",
    "encode_reserved_chars": "wayfinder.encoding",
    "find_route": "wayfinder.routing.matcher",
    "get_href": "wayfinder.routing.href",
    "get_relative_part": "wayfinder.routing.matcher",
    "get_route": "wayfinder.routing.matcher",
    "parse_url": "wayfinder.routing.matcher",
    "to_safe_string": "wayfinder.encoding",
    "validate_routes": "wayfinder.contracts",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wayfinder`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_path), name)
