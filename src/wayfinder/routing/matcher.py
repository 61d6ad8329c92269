"""URL resolution against an ordered route table.

Resolution is a pure function of the URL and the table: every call scans
the routes in order and the **first match wins**, so more specific patterns
must come before more general ones.

Usage::

    match = find_route("https://example.com/@alice/posts/7?tag=a#top", routes)
    if match is not None:
        match.params      # {"handle": "alice", "id": "7"}
        match.fragment    # "top"
        match.title(ctx)  # route title rendered with a runtime context
"""

import logging
import re
from collections.abc import Sequence
from typing import Any

import httpx

from wayfinder.errors import InvalidURL, RouteNotFound
from wayfinder.query.params import QueryParams, normalize_query_values
from wayfinder.routing.pattern import compile_pattern
from wayfinder.routing.route import Route, RouteMatch

logger = logging.getLogger("wayfinder.routing")

# ``scheme://`` prefix marking a fully-qualified URL
_ABSOLUTE_URL = re.compile(r"^[a-zA-Z][a-zA-Z\d+\-.]*://")

# Origin that relative inputs are resolved against; never exposed
_PLACEHOLDER_ORIGIN = "http://localhost"


def _parse(url: str | httpx.URL) -> tuple[httpx.URL, str] | None:
    """Parse *url* and return it with its relative part, or ``None``."""
    try:
        if isinstance(url, httpx.URL):
            parsed = url
        elif isinstance(url, str):
            text = url.strip()
            if _ABSOLUTE_URL.match(text):
                parsed = httpx.URL(text)
            else:
                relative = text[1:] if text.startswith("/") else text
                parsed = httpx.URL(f"{_PLACEHOLDER_ORIGIN}/{relative}")
        else:
            logger.debug("Cannot resolve a URL from %s", type(url).__name__)
            return None
    except (httpx.InvalidURL, ValueError) as exc:
        logger.debug("Cannot parse URL %r: %s", url, exc)
        return None

    path_and_query = parsed.raw_path.decode("utf-8").removeprefix("/")
    _, hash_mark, fragment = str(parsed).partition("#")
    return parsed, f"{path_and_query}{hash_mark}{fragment}"


def get_relative_part(url: str | httpx.URL) -> str | None:
    """Return the encoded ``path?query#fragment`` of *url* without a leading ``/``.

    Scheme and host are ignored, so absolute and relative inputs give the
    same result::

        get_relative_part("https://example.com/a/b?x=1#top")   # "a/b?x=1#top"
        get_relative_part("/a/b?x=1#top")                      # "a/b?x=1#top"
        get_relative_part("a/b")                               # "a/b"

    Returns ``None`` when the input is not a URL at all.
    """
    result = _parse(url)
    return None if result is None else result[1]


def _query_map(parsed: httpx.URL) -> dict[str, list[str]]:
    # get_list() values are already decoded; decoding again would corrupt "%" sequences.
    params = parsed.params
    return {key: normalize_query_values(params.get_list(key)) for key in params.keys()}


def find_route(
    url: str | httpx.URL,
    routes: Sequence[Route[Any, Any, Any]],
) -> RouteMatch[Any, Any, Any] | None:
    """Resolve *url* to the first matching route, or ``None``.

    On a match, path parameters and the fragment are decoded, the query is
    normalized and handed to the route's ``query_params_factory`` (or the
    base ``QueryParams``), and ``get_query`` / ``get_meta`` are evaluated
    (each defaulting to ``{}``). A miss is not an error.
    """
    result = _parse(url)
    if result is None:
        return None
    parsed, relative = result

    path = parsed.path.removeprefix("/")
    for route in routes:
        params = compile_pattern(route.path).match(path)
        if params is None:
            continue

        query_map = _query_map(parsed)
        if route.query_params_factory is not None:
            reader = route.query_params_factory(query_map)
        else:
            reader = QueryParams(query_map)
        query = route.get_query(reader) if route.get_query is not None else {}

        return RouteMatch(
            route=route,
            params=params,
            query=query,
            meta=route.meta(),
            full_path=relative,
            fragment=parsed.fragment,
            query_params=reader,
        )

    logger.debug("No route matches %r (%d candidates)", relative, len(routes))
    return None


def get_route(
    url: str | httpx.URL,
    routes: Sequence[Route[Any, Any, Any]],
) -> RouteMatch[Any, Any, Any]:
    """Like ``find_route()`` but raises instead of returning ``None``.

    Raises ``InvalidURL`` if *url* is not a URL, ``RouteNotFound`` (listing
    up to 25 candidate paths) if nothing matches.
    """
    relative = get_relative_part(url)
    if relative is None:
        msg = (
            f"A valid page URL is required to get the route: {url!r} "
            f"| type={type(url).__name__}"
        )
        raise InvalidURL(msg)

    found = find_route(url, routes)
    if found is None:
        raise RouteNotFound(relative, [r.path for r in routes])
    return found


def parse_url(url: str | httpx.URL, path: str) -> RouteMatch[Any, Any, Any] | None:
    """Match *url* against a single bare pattern."""
    return find_route(url, [Route(path=path, title=_empty_title)])


def _empty_title(args: Any) -> str:
    return ""
