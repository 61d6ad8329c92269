"""Route pattern compilation.

Patterns are ``/``-delimited segments with optional bracketed parameter
tokens embedded anywhere inside a segment::

    ""                         -> home route, matches only the empty path
    "posts"                    -> static
    "@[handle]/posts/[id]"     -> two parameters
    "report-[year]-[month]"    -> two parameters in one segment

A token name that repeats is the same logical parameter; the compiled
matcher requires every occurrence to carry the same value.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from wayfinder.errors import PatternError

# One ``[name]`` token. Nested brackets are rejected separately.
TOKEN_PATTERN = re.compile(r"\[([^\[\]]*)\]")

PARAM_NAME = re.compile(r"[A-Za-z_]\w*", re.ASCII)

# A parameter consumes one or more characters up to the next slash
PARAM_REGEX = r"[^/]+"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A pattern compiled to an anchored regex plus its logical parameters."""

    pattern: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Return captured parameters if *path* matches, else ``None``."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return {name: m.group(name) for name in self.param_names}


def extract_param_names(pattern: str) -> list[str]:
    """Scan *pattern* for ``[name]`` tokens without building a matcher.

    Names are returned in left-to-right, segment order. Repeated names are
    kept, so callers can detect them::

        >>> extract_param_names("report/[year]/summary-[year]")
        ['year', 'year']
    """
    names: list[str] = []
    for segment in pattern.split("/"):
        names.extend(m.group(1) for m in TOKEN_PATTERN.finditer(segment))
    return names


def _validate(original: str, pattern: str) -> None:
    if "//" in pattern:
        raise PatternError(original, "contains a duplicate slash segment")
    if re.search(r"\s", pattern):
        raise PatternError(original, "contains whitespace")
    if pattern.startswith("/"):
        raise PatternError(original, "should not start with '/'")
    if pattern.endswith("/"):
        raise PatternError(original, "should not end with '/'")


def _compile_segment(original: str, segment: str, seen: list[str]) -> str:
    parts: list[str] = []
    last = 0
    for m in TOKEN_PATTERN.finditer(segment):
        literal = segment[last : m.start()]
        if "[" in literal or "]" in literal:
            raise PatternError(original, f"unbalanced bracket in segment {segment!r}")
        parts.append(re.escape(literal))

        name = m.group(1)
        if not PARAM_NAME.fullmatch(name):
            raise PatternError(original, f"invalid parameter name {name!r}")
        if name in seen:
            parts.append(f"(?P={name})")
        else:
            seen.append(name)
            parts.append(f"(?P<{name}>{PARAM_REGEX})")
        last = m.end()

    tail = segment[last:]
    if "[" in tail or "]" in tail:
        raise PatternError(original, f"unbalanced bracket in segment {segment!r}")
    parts.append(re.escape(tail))
    return "".join(parts)


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a route pattern into a matcher.

    Surrounding whitespace is stripped; everything else that violates the
    grammar raises ``PatternError`` naming the pattern.

    Examples::

        compile_pattern("@[handle]").match("@alice")        # {"handle": "alice"}
        compile_pattern("").match("")                       # {}
        compile_pattern("a/[x]-[y]").match("a/1-2")         # {"x": "1", "y": "2"}
    """
    if not isinstance(pattern, str):
        msg = f"Route pattern must be a string, got {type(pattern).__name__}"
        raise PatternError(repr(pattern), msg)

    stripped = pattern.strip()
    _validate(pattern, stripped)

    seen: list[str] = []
    if stripped == "":
        body = ""
    else:
        body = "/".join(_compile_segment(pattern, seg, seen) for seg in stripped.split("/"))

    return CompiledPattern(
        pattern=stripped,
        regex=re.compile(f"^{body}$"),
        param_names=tuple(seen),
    )
