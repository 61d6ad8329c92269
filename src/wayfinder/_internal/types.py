"""Shared type aliases used across wayfinder modules."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeAlias

# Raw multi-valued query data, as produced by a URL parser or written by hand
RawQuery: TypeAlias = Mapping[str, str | Sequence[str] | None]

# Normalized query data: key -> distinct, trimmed, non-empty values
QueryMap: TypeAlias = dict[str, list[str]]

# Builds a query reader from a QueryMap
QueryParamsFactory: TypeAlias = Callable[[QueryMap], Any]

# Produces the raw (unencoded) string form of one query value
ValueEncoder: TypeAlias = Callable[[Any], str]

# Serializes a typed query object: (query, SerializeQueryArgs) -> str
QuerySerializer: TypeAlias = Callable[..., str]

# title / breadcrumb / href callables, called with a RouteArgs
RouteTextFn: TypeAlias = Callable[..., str]
