"""Route-table contracts — pre-flight validation of a route list.

The resolver trusts its table: patterns are compiled lazily, duplicates
resolve first-wins, and a dangling ``parent_path`` silently shortens a
breadcrumb trail. This module finds those problems up front.

Usage::

    result = check_route_table(routes)
    print(result.summary())

    # Or fail fast at import time:
    validate_routes(routes)

    # Or via CLI:
    #   wayfinder check myapp.routes:routes

"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from wayfinder.errors import ConfigurationError, PatternError
from wayfinder.routing.pattern import TOKEN_PATTERN, compile_pattern, extract_param_names
from wayfinder.routing.route import Route

# ---------------------------------------------------------------------------
# Issue types
# ---------------------------------------------------------------------------


class Severity(Enum):
    """Severity of a route-table issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class TableIssue:
    """A single problem found while checking a route table."""

    severity: Severity
    category: str
    message: str
    route: str | None = None
    details: str | None = None


# ---------------------------------------------------------------------------
# Checker
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class CheckResult:
    """Result of a route-table check."""

    issues: list[TableIssue] = field(default_factory=list)
    routes_checked: int = 0

    @property
    def errors(self) -> list[TableIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[TableIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [f"Checked {self.routes_checked} routes."]
        if self.ok and not self.warnings:
            lines.append("No issues found.")
        elif self.ok:
            lines.append(f"No errors. {len(self.warnings)} warning(s).")
        else:
            lines.append(f"{len(self.errors)} error(s), {len(self.warnings)} warning(s).")
        for issue in self.issues:
            prefix = issue.severity.value.upper()
            lines.append(f"  [{prefix}] {issue.message}")
            if issue.details:
                lines.append(f"           {issue.details}")
        return "\n".join(lines)


def _shape(path: str) -> str:
    """The pattern with every parameter name erased: ``a/[x]`` -> ``a/[]``."""
    return TOKEN_PATTERN.sub("[]", path)


def _check_patterns(routes: Sequence[Route[Any, Any, Any]], result: CheckResult) -> set[str]:
    """Compile every pattern; return the paths that compiled."""
    valid: set[str] = set()
    for route in routes:
        try:
            compile_pattern(route.path)
        except PatternError as exc:
            result.issues.append(TableIssue(
                severity=Severity.ERROR,
                category="pattern",
                message=str(exc),
                route=route.path,
            ))
            continue
        valid.add(route.path)

        repeated = [name for name, n in Counter(extract_param_names(route.path)).items() if n > 1]
        if repeated:
            result.issues.append(TableIssue(
                severity=Severity.WARNING,
                category="params",
                message=f"Route '{route.path}' repeats parameter(s): {', '.join(repeated)}.",
                route=route.path,
                details="Every occurrence must carry the same value for the URL to match.",
            ))
    return valid


def _check_duplicates(routes: Sequence[Route[Any, Any, Any]], result: CheckResult) -> None:
    for path, count in Counter(r.path for r in routes).items():
        if count > 1:
            result.issues.append(TableIssue(
                severity=Severity.ERROR,
                category="duplicate",
                message=f"Route '{path}' is defined {count} times.",
                route=path,
                details="Only the first definition is ever matched.",
            ))


def _check_shadowing(
    routes: Sequence[Route[Any, Any, Any]],
    valid: set[str],
    result: CheckResult,
) -> None:
    """Flag routes an earlier route always matches first."""
    earlier: list[Route[Any, Any, Any]] = []
    for route in routes:
        if route.path not in valid:
            continue
        has_params = bool(extract_param_names(route.path))
        for previous in earlier:
            if previous.path == route.path:
                break
            previous_names = extract_param_names(previous.path)
            same_shape = (
                _shape(previous.path) == _shape(route.path)
                and len(set(previous_names)) == len(previous_names)
            )
            covers_static = not has_params and compile_pattern(previous.path).match(route.path) is not None
            if same_shape or covers_static:
                result.issues.append(TableIssue(
                    severity=Severity.WARNING,
                    category="shadowed",
                    message=f"Route '{route.path}' is shadowed by earlier route '{previous.path}'.",
                    route=route.path,
                    details="Move more specific routes before more general ones.",
                ))
                break
        earlier.append(route)


def _check_parents(routes: Sequence[Route[Any, Any, Any]], result: CheckResult) -> None:
    parents: dict[str, str | None] = {}
    for route in routes:
        parents.setdefault(route.path, route.parent_path)

    for route in routes:
        if route.parent_path is not None and route.parent_path not in parents:
            result.issues.append(TableIssue(
                severity=Severity.ERROR,
                category="parent",
                message=f"Route '{route.path}' has unknown parent '{route.parent_path}'.",
                route=route.path,
            ))

    reported: set[str] = set()
    for start in parents:
        chain: list[str] = []
        current: str | None = start
        while current is not None and current in parents and current not in chain:
            chain.append(current)
            current = parents[current]
        if current is None or current not in chain:
            continue
        cycle = chain[chain.index(current):]
        if reported.intersection(cycle):
            continue
        reported.update(cycle)
        result.issues.append(TableIssue(
            severity=Severity.ERROR,
            category="cycle",
            message=f"Parent cycle: {' -> '.join([*cycle, current])}.",
            route=current,
            details="Breadcrumb trails stop at the depth limit instead of a root.",
        ))


def check_route_table(routes: Sequence[Route[Any, Any, Any]]) -> CheckResult:
    """Validate a route table without resolving anything.

    Checks:
    1. **Patterns**: every path compiles (error); repeated parameter
       names are reported (warning).
    2. **Duplicates**: no path is defined twice (error).
    3. **Parents**: every ``parent_path`` names a route in the table
       (error), and parent chains end in a root (error on cycles).
    4. **Shadowing**: no route is unreachable because an earlier route
       with the same shape, or a more general one, always wins (warning).

    Args:
        routes: The ordered route table.

    Returns:
        CheckResult with issues and statistics.

    """
    result = CheckResult(routes_checked=len(routes))
    valid = _check_patterns(routes, result)
    _check_duplicates(routes, result)
    _check_parents(routes, result)
    _check_shadowing(routes, valid, result)
    return result


def validate_routes(routes: Sequence[Route[Any, Any, Any]]) -> None:
    """Raise ``ConfigurationError`` listing every error in *routes*.

    Warnings are ignored.
    """
    result = check_route_table(routes)
    if not result.ok:
        lines = "\n".join(f"  - {issue.message}" for issue in result.errors)
        msg = f"Invalid route table ({len(result.errors)} error(s)):\n{lines}"
        raise ConfigurationError(msg)
