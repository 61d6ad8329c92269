"""Table-wide route defaults.

RouteDefaults is frozen and validated on construction, so a table can never
be configured with a factory but no way to encode query values.
"""

from dataclasses import dataclass
from typing import TypeVar

from wayfinder._internal.types import QueryParamsFactory, QuerySerializer, ValueEncoder
from wayfinder.errors import ConfigurationError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RouteDefaults:
    """Hooks injected into every route that lacks its own.

    A query-params factory is required, plus at least one way to produce
    query values (an encoder, a serializer, or both)::

        defaults = RouteDefaults(
            query_params_factory=TypedQueryParams.from_raw,
            encode_query_value=encode_typed_value,
        )
    """

    query_params_factory: QueryParamsFactory | None = None
    encode_query_value: ValueEncoder | None = None
    serialize_query: QuerySerializer | None = None

    def __post_init__(self) -> None:
        if self.query_params_factory is None:
            msg = "apply_route_defaults: A query params factory must be provided."
            raise ConfigurationError(msg)
        if self.encode_query_value is None and self.serialize_query is None:
            msg = "apply_route_defaults: At least one encoding method must be provided."
            raise ConfigurationError(msg)


def resolve_hook(route_value: T | None, default_value: T | None, fallback: T | None = None) -> T | None:
    """Pick a hook by precedence: route, then table default, then built-in.

    The most specific non-``None`` value wins; nothing is merged.
    """
    if route_value is not None:
        return route_value
    if default_value is not None:
        return default_value
    return fallback
