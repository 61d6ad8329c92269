"""Route, RouteArgs, and RouteMatch frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from wayfinder._internal.types import QueryParamsFactory, QuerySerializer, RouteTextFn, ValueEncoder

QueryT = TypeVar("QueryT")
MetaT = TypeVar("MetaT")
ContextT = TypeVar("ContextT")


@dataclass(frozen=True, slots=True)
class RouteArgs(Generic[QueryT, MetaT, ContextT]):
    """Arguments passed to a route's ``title``, ``breadcrumb``, and ``href``."""

    params: Mapping[str, str] = field(default_factory=dict)
    query: QueryT | None = None
    meta: MetaT | None = None
    context: ContextT | None = None
    query_params: Any = None


@dataclass(frozen=True, slots=True)
class SerializeQueryArgs(Generic[MetaT, ContextT]):
    """Second argument of a custom ``serialize_query(query, args)``.

    ``query_params`` is always set: either the reader passed to
    ``build_href()`` or a synthetic one rebuilt from the typed query.
    """

    params: Mapping[str, str]
    meta: MetaT
    context: ContextT
    query_params: Any


@dataclass(frozen=True, slots=True)
class Route(Generic[QueryT, MetaT, ContextT]):
    """A frozen route definition.

    Only ``path`` and ``title`` are required. Every hook left as ``None`` is
    filled by ``apply_route_defaults()`` or by a built-in fallback at use
    time. A route's identity is its ``path``.

    Hook precedence, most specific wins:

    - ``serialize_query`` over ``encode_query_value`` over safe strings
    - ``breadcrumb`` over ``title`` for breadcrumb labels
    - ``href`` over ``build_href()`` for ``RouteMatch.href()``
    """

    path: str
    title: RouteTextFn
    parent_path: str | None = None
    query_params_factory: QueryParamsFactory | None = None
    get_query: Callable[[Any], QueryT] | None = None
    get_meta: Callable[[], MetaT] | None = None
    encode_query_value: ValueEncoder | None = None
    serialize_query: QuerySerializer | None = None
    breadcrumb: RouteTextFn | None = None
    href: RouteTextFn | None = None

    def meta(self) -> MetaT | dict[str, Any]:
        """Materialize route metadata, ``{}`` when no ``get_meta`` is set."""
        if self.get_meta is None:
            return {}
        return self.get_meta()


@dataclass(frozen=True, slots=True)
class RouteMatch(Generic[QueryT, MetaT, ContextT]):
    """Result of a successful URL resolution.

    Created fresh per ``find_route()`` call. ``title``, ``breadcrumb`` and
    ``href`` take the runtime context (entity names, a fragment, ...) that
    the caller only knows later.
    """

    route: Route[QueryT, MetaT, ContextT]
    params: dict[str, str]
    query: QueryT
    meta: MetaT
    full_path: str
    fragment: str
    query_params: Any = None

    def args(self, context: ContextT | None = None) -> RouteArgs[QueryT, MetaT, ContextT]:
        return RouteArgs(
            params=self.params,
            query=self.query,
            meta=self.meta,
            context=context,
            query_params=self.query_params,
        )

    def title(self, context: ContextT | None = None) -> str:
        if self.route.title is None:
            return ""
        return self.route.title(self.args(context))

    def breadcrumb(self, context: ContextT | None = None) -> str:
        return breadcrumb_label(self.route, self.args(context))

    def href(self, context: ContextT | None = None) -> str:
        if self.route.href is not None:
            return self.route.href(self.args(context))
        from wayfinder.routing.href import build_href

        return build_href(
            self.route,
            params=self.params,
            query=self.query,
            meta=self.meta,
            context=context,
        )


def breadcrumb_label(route: Route[Any, Any, Any], args: RouteArgs[Any, Any, Any]) -> str:
    """The breadcrumb label of *route*: ``breadcrumb``, else ``title``, else ``""``."""
    label = route.breadcrumb or route.title
    if label is None:
        return ""
    return label(args)
