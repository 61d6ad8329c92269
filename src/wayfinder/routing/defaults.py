"""Apply table-wide defaults to a route list.

Usage::

    routes = apply_route_defaults(
        [home, search, profile],
        query_params_factory=TypedQueryParams.from_raw,
        encode_query_value=encode_typed_value,
    )

Per-route hooks always win; the input routes are never mutated.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from wayfinder._internal.types import QueryParamsFactory, QuerySerializer, ValueEncoder
from wayfinder.config import RouteDefaults, resolve_hook
from wayfinder.encoding import to_safe_string
from wayfinder.query.params import QueryParams
from wayfinder.query.typed import TypedQueryParams
from wayfinder.routing.route import Route


def apply_defaults(routes: Iterable[Route[Any, Any, Any]], defaults: RouteDefaults) -> list[Route[Any, Any, Any]]:
    """Return new routes with every missing hook filled from *defaults*."""
    result: list[Route[Any, Any, Any]] = []
    for route in routes:
        result.append(
            replace(
                route,
                query_params_factory=resolve_hook(
                    route.query_params_factory, defaults.query_params_factory, QueryParams
                ),
                encode_query_value=resolve_hook(route.encode_query_value, defaults.encode_query_value),
                serialize_query=resolve_hook(route.serialize_query, defaults.serialize_query),
            )
        )
    return result


def apply_route_defaults(
    routes: Iterable[Route[Any, Any, Any]],
    *,
    query_params_factory: QueryParamsFactory | None = None,
    encode_query_value: ValueEncoder | None = None,
    serialize_query: QuerySerializer | None = None,
) -> list[Route[Any, Any, Any]]:
    """Fill hooks absent on each route from the given defaults.

    Raises ``ConfigurationError`` without a *query_params_factory*, or when
    neither *encode_query_value* nor *serialize_query* is given.
    """
    defaults = RouteDefaults(
        query_params_factory=query_params_factory,
        encode_query_value=encode_query_value,
        serialize_query=serialize_query,
    )
    return apply_defaults(routes, defaults)


def encode_typed_value(value: object) -> str:
    """Raw query value encoder aware of dates and enums.

    Dates, times and datetimes use ISO 8601, enum members their value;
    everything else follows ``to_safe_string()``. Percent-encoding happens
    later in the pipeline.
    """
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return encode_typed_value(value.value)
    return to_safe_string(value)


def apply_typed_defaults(
    routes: Iterable[Route[Any, Any, Any]],
    *,
    query_params_factory: QueryParamsFactory = TypedQueryParams.from_raw,
    encode_query_value: ValueEncoder = encode_typed_value,
    serialize_query: QuerySerializer | None = None,
) -> list[Route[Any, Any, Any]]:
    """``apply_route_defaults()`` preset with typed readers and encoding."""
    return apply_route_defaults(
        routes,
        query_params_factory=query_params_factory,
        encode_query_value=encode_query_value,
        serialize_query=serialize_query,
    )
