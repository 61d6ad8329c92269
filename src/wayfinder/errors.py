"""Wayfinder exception hierarchy.

Shared across the pattern compiler, matcher, href builder, and defaults
so every module raises and catches the same types.
"""

from collections.abc import Sequence


class WayfinderError(Exception):
    """Base for all wayfinder-specific errors."""


class ConfigurationError(WayfinderError):
    """Raised when a route table or its defaults are invalid.

    Fails fast at the offending call: a malformed pattern, a missing
    required path parameter, or a missing query-params factory.
    """


class PatternError(ConfigurationError):
    """A route pattern violates the pattern grammar."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


class MissingPathParams(ConfigurationError):  # noqa: N818 — reads like the condition it reports
    """Path parameters required by a pattern were not supplied."""

    def __init__(
        self,
        path: str,
        missing: Sequence[str],
        provided: Sequence[str],
        expected: Sequence[str],
    ) -> None:
        self.path = path
        self.missing = tuple(missing)
        self.provided = tuple(provided)
        self.expected = tuple(expected)
        super().__init__(
            f"Missing required path parameters: {', '.join(self.missing)} "
            f"for route: {path} | provided={{{', '.join(self.provided)}}} "
            f"expected={{{', '.join(self.expected)}}}"
        )


class InvalidURL(WayfinderError):  # noqa: N818 — conventional name, matches httpx
    """The input cannot be interpreted as a URL at all."""


class RouteNotFound(WayfinderError):  # noqa: N818 — conventional name in routers
    """A route was required but none matched.

    ``find_route()`` returns ``None`` on a miss; this is raised only by the
    throwing helpers (``get_route()``, ``get_href()``).
    """

    def __init__(self, target: str, candidates: Sequence[str], detail: str = "") -> None:
        self.target = target
        self.candidates = tuple(candidates)
        listed = format_candidates(self.candidates)
        message = f"Route not found for path: {target}"
        if detail:
            message = f"{message} | {detail}"
        super().__init__(f"{message} | available=[{listed}]")


MAX_LISTED_CANDIDATES = 25


def format_candidates(paths: Sequence[str], limit: int = MAX_LISTED_CANDIDATES) -> str:
    """Join candidate paths for an error message, truncating with ``...``."""
    listed = ", ".join(paths[:limit])
    if len(paths) > limit:
        listed = f"{listed}, ..."
    return listed
