"""Href construction — the inverse of ``find_route()``.

``build_href()`` validates path parameters, substitutes them into the
pattern, serializes the typed query, and appends an encoded fragment::

    build_href(route, params={"handle": "alice"}, query={"tag": ["b", "a"]})
    # "/@alice?tag=a&tag=b"

The result always starts with ``/``. Casing is never changed.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from wayfinder.encoding import (
    build_query_string,
    decode_uri_component,
    encode_uri_component,
    to_safe_string,
)
from wayfinder.errors import MissingPathParams, RouteNotFound
from wayfinder.query.params import query_params_from_typed
from wayfinder.routing.pattern import compile_pattern, extract_param_names
from wayfinder.routing.route import Route, SerializeQueryArgs

logger = logging.getLogger("wayfinder.routing")


def validate_path_params(route: Route[Any, Any, Any], params: Mapping[str, Any] | None = None) -> None:
    """Check that *params* covers every parameter in ``route.path``.

    Raises ``PatternError`` if ``route.path`` is malformed, and
    ``MissingPathParams`` naming the missing, provided, and expected names.
    Keys the pattern does not use are logged and ignored.
    """
    compile_pattern(route.path)
    params = params or {}
    expected = list(dict.fromkeys(extract_param_names(route.path)))
    missing = [name for name in expected if params.get(name) is None]
    provided = list(params)
    if missing:
        raise MissingPathParams(route.path, missing, provided, expected)

    unused = [key for key in provided if key not in expected]
    if unused:
        logger.warning(
            "Unused path param keys will be ignored for route %r: [%s]",
            route.path,
            ", ".join(unused),
        )


def build_path(route: Route[Any, Any, Any], params: Mapping[str, Any] | None = None) -> str:
    """Substitute every ``[name]`` token in ``route.path``.

    Uses plain token replacement (no regex), so repeated parameters are all
    replaced and special characters in names need no escaping. Each value
    is safe-stringed, then component-encoded.
    """
    path = route.path
    if params is None:
        return path
    for key, value in params.items():
        token = f"[{key}]"
        if token in path:
            path = path.replace(token, encode_uri_component(to_safe_string(value)))
    return path


def build_fragment(fragment: str | None) -> str:
    """Return ``#fragment`` (or ``""``), encoding only when needed.

    If decoding then re-encoding reproduces the input (hex digits compared
    case-insensitively), the input is taken as already encoded and kept
    as-is. Otherwise the raw text is encoded::

        build_fragment("my%20section")   # "#my%20section"
        build_fragment("my section")     # "#my%20section"
    """
    if not fragment:
        return ""
    try:
        reencoded = encode_uri_component(decode_uri_component(fragment))
    except UnicodeError:
        reencoded = None
    if reencoded is not None and reencoded.lower() == fragment.lower():
        return f"#{fragment}"
    return f"#{encode_uri_component(fragment)}"


def context_fragment(context: object) -> str | None:
    """Return the ``fragment`` a context carries, if it is a string."""
    if isinstance(context, Mapping):
        value = context.get("fragment")
    else:
        value = getattr(context, "fragment", None)
    return value if isinstance(value, str) else None


def _serialize_query(
    route: Route[Any, Any, Any],
    query: Any,
    params: Mapping[str, Any] | None,
    meta: Any,
    context: Any,
    query_params: Any,
) -> str:
    if query is None:
        return ""
    if route.serialize_query is None:
        return build_query_string(query, route.encode_query_value)

    args = SerializeQueryArgs(
        params=params or {},
        meta=meta if meta is not None else route.meta(),
        context=context if context is not None else {},
        query_params=query_params if query_params is not None else query_params_from_typed(query),
    )
    # Custom serializer output is used verbatim; whitespace-only means "no query".
    return route.serialize_query(query, args).strip()


def build_href(
    route: Route[Any, Any, Any],
    *,
    params: Mapping[str, Any] | None = None,
    query: Any = None,
    meta: Any = None,
    context: Any = None,
    fragment: str | None = None,
    query_params: Any = None,
) -> str:
    """Build ``/path?query#fragment`` for *route*.

    Query serialization precedence:

    1. ``route.serialize_query(query, SerializeQueryArgs)``, trimmed; the
       args carry *query_params*, or a synthetic reader rebuilt from *query*
    2. the default pipeline, using ``route.encode_query_value`` for raw
       values when set

    An explicit *fragment* beats a ``fragment`` carried by *context*.
    """
    validate_path_params(route, params)
    path = build_path(route, params)
    query_string = _serialize_query(route, query, params, meta, context, query_params)
    fragment_part = build_fragment(fragment if fragment is not None else context_fragment(context))

    href = f"/{path}"
    if query_string:
        href = f"{href}?{query_string}"
    return f"{href}{fragment_part}"


def build_href_with_query_params(
    route: Route[Any, Any, Any],
    query_params: Any,
    **kwargs: Any,
) -> str:
    """``build_href()`` with an explicit reader for ``serialize_query``.

    Prefer this over the synthetic reader when the real one is at hand
    (e.g. ``RouteMatch.query_params``), since it keeps multi-values intact.
    """
    return build_href(route, query_params=query_params, **kwargs)


def get_href(
    path_or_route: str | Route[Any, Any, Any],
    routes: Sequence[Route[Any, Any, Any]],
    **kwargs: Any,
) -> str:
    """Build an href from a route or from a path string looked up in *routes*.

    Raises ``RouteNotFound`` when a path string names no route.
    """
    if isinstance(path_or_route, str):
        route = next((r for r in routes if r.path == path_or_route), None)
        if route is None:
            raise RouteNotFound(
                path_or_route,
                [r.path for r in routes],
                detail="attempted=str",
            )
    else:
        route = path_or_route
    return build_href(route, **kwargs)
