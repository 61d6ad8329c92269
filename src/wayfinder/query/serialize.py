"""Standalone default query serializer.

``build_href()`` already falls back to the default pipeline when a route
has no ``serialize_query``. These helpers expose the same pipeline as a
hook, for tables that want one serializer everywhere::

    routes = apply_route_defaults(
        routes,
        query_params_factory=QueryParams,
        serialize_query=create_default_serializer(encode_typed_value),
    )
"""

from typing import Any

from wayfinder._internal.types import QuerySerializer, ValueEncoder
from wayfinder.encoding import build_query_string


def serialize_query(query: object, args: Any = None, encoder: ValueEncoder | None = None) -> str:
    """Serialize *query* with the default pipeline; *args* is ignored."""
    return build_query_string(query, encoder)


def create_default_serializer(encoder: ValueEncoder | None = None) -> QuerySerializer:
    """Return a ``serialize_query(query, args)`` hook bound to *encoder*."""

    def serializer(query: object, args: Any = None) -> str:
        return build_query_string(query, encoder)

    return serializer
