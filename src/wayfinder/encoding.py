"""Value encoding for query strings, paths, and fragments.

Two stages turn an arbitrary Python value into something safe to put in a
URL:

1. **Safe string** — ``to_safe_string()`` maps any value to a string,
   absorbing failures as ``""`` so a bad value never aborts href building.
2. **Reserved-character pass** — ``encode_key_value()`` fixes stray ``%``
   characters and percent-encodes the reserved set, leaving valid
   ``%XX`` triplets alone.

A route's custom ``encode_query_value`` only replaces stage 1. Stage 2
always runs, so a misbehaving encoder cannot break the query string's
structure::

    encode_key_value("q", "a&b=c")                       # "q=a%26b%3Dc"
    encode_key_value("q", 1, encoder=lambda v: "x&y")    # "q=x%26y"
"""

import dataclasses
import inspect
import json
import logging
import re
import string
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote, unquote

from wayfinder._internal.types import ValueEncoder
from wayfinder.errors import ConfigurationError

logger = logging.getLogger("wayfinder.encoding")

# RFC 3986 gen-delims + sub-delims
RFC3986_RESERVED = ":/?#[]@!$&'()*+,;="

# Encoded on top of the reserved set by default
DEFAULT_ADDITIONAL_CHARS = string.whitespace

# Characters encodeURIComponent leaves alone beyond quote()'s "_.-~"
_COMPONENT_SAFE = "!*'()"

_STRAY_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Values that expand to one query pair per element
_MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


# ── Safe strings ────────────────────────────────────────────────────────


def has_custom_str(value: object) -> bool:
    """True if *value* has a meaningful string form of its own.

    Primitives always do. Other objects qualify only when their type
    overrides ``__str__``; plain dicts, lists and dataclasses do not.
    """
    if value is None:
        return False
    if isinstance(value, (str, int, float, Enum)):
        return True
    return type(value).__str__ is not object.__str__


def _json_default(value: object) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if hasattr(value, "__dict__") and not inspect.isroutine(value) and not inspect.isclass(value):
        return vars(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _to_json(value: object) -> str:
    try:
        return json.dumps(value, default=_json_default, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.debug("Cannot serialize %s to JSON: %s", type(value).__name__, exc)
        return ""


def to_safe_string(value: object) -> str:
    """Convert any value to the string used before percent-encoding.

    Rules, in order:

    - ``None`` → ``""``
    - enum members → safe string of their value
    - ``str`` → itself; ``bool`` → ``"true"`` / ``"false"``;
      ``int`` / ``float`` → ``str()``
    - functions, methods, classes → ``""``
    - objects whose type overrides ``__str__`` → ``str()``, or ``""`` if
      that raises
    - anything else (dicts, lists, dataclasses, plain objects via their
      attributes) → compact JSON, or ``""`` if it cannot be serialized (e.g. a circular reference)
    """
    if value is None:
        return ""
    if isinstance(value, Enum):
        return to_safe_string(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if inspect.isroutine(value) or inspect.isclass(value):
        return ""
    if has_custom_str(value):
        try:
            return str(value)
        except Exception as exc:
            logger.debug("__str__ of %s raised: %s", type(value).__name__, exc)
            return ""
    return _to_json(value)


# ── Component encoding ──────────────────────────────────────────────────


def encode_uri_component(text: str) -> str:
    """Percent-encode *text* as a URI component.

    Leaves ``A-Z a-z 0-9 - _ . ! ~ * ' ( )`` unescaped, the same set as
    JavaScript's ``encodeURIComponent``.
    """
    return quote(text, safe=_COMPONENT_SAFE)


def decode_uri_component(text: str) -> str:
    """Percent-decode *text*.

    Raises ``UnicodeDecodeError`` when the escapes do not form valid UTF-8.
    """
    return unquote(text, errors="strict")


def encode_value(value: object) -> str:
    """Safe-string and component-encode a single value.

    Sequences encode each element and join them with commas::

        encode_value("hello world")           # "hello%20world"
        encode_value(["a@b", None, "c/d"])    # "a%40b,,c%2Fd"
    """
    if isinstance(value, (list, tuple)):
        return ",".join(encode_value(v) for v in value)
    text = to_safe_string(value)
    return encode_uri_component(text) if text else ""


# ── Reserved-character pipeline ─────────────────────────────────────────


def get_raw_encoded_value(value: object, encoder: ValueEncoder | None = None) -> str:
    """Return the raw (unencoded) string for *value*.

    Uses *encoder* when given, coercing its result with ``str()``; an
    encoder that raises yields ``""``. Without an encoder, falls back to
    ``to_safe_string()``.
    """
    if encoder is None:
        return to_safe_string(value)
    try:
        return str(encoder(value))
    except Exception as exc:
        logger.debug("Custom query value encoder raised: %s", exc)
        return ""


def normalize_percent_escapes(text: str) -> str:
    """Encode every ``%`` not followed by two hex digits as ``%25``."""
    return _STRAY_PERCENT.sub("%25", text)


def _percent_encode_char(char: str) -> str:
    return "".join(f"%{byte:02X}" for byte in char.encode("utf-8"))


def encode_reserved_chars(
    text: str,
    reserved: str = RFC3986_RESERVED,
    additional: str = DEFAULT_ADDITIONAL_CHARS,
) -> str:
    """Percent-encode every character of *text* found in either set.

    Everything else passes through unchanged, including ``%XX`` triplets
    (``%`` is not reserved unless listed in *additional*)::

        encode_reserved_chars("user@host:port")      # "user%40host%3Aport"
        encode_reserved_chars("a|b", "", "|")        # "a%7Cb"

    Raises ``ConfigurationError`` if both sets are empty.
    """
    chars = set(reserved) | set(additional)
    if not chars:
        msg = (
            "encode_reserved_chars: At least one character must be specified for encoding. "
            "Provide either reserved, additional, or both as non-empty strings."
        )
        raise ConfigurationError(msg)
    return "".join(_percent_encode_char(c) if c in chars else c for c in text)


def encode_key_value(key: str, value: object, encoder: ValueEncoder | None = None) -> str:
    """Encode one ``key=value`` pair, or ``""`` if the value is empty."""
    if value is None:
        return ""
    raw = get_raw_encoded_value(value, encoder)
    if raw == "":
        return ""
    safe = encode_reserved_chars(normalize_percent_escapes(raw))
    return f"{encode_uri_component(key)}={safe}"


def encode_key_values(key: str, value: object, encoder: ValueEncoder | None = None) -> list[str]:
    """Encode a query entry into zero or more ``key=value`` pairs.

    Multi-valued entries (lists, tuples, sets) produce one pair per distinct
    element, ordered by the elements' safe strings. Elements without a
    string form of their own (``None``, plain dicts) are skipped.
    """
    if value is None:
        return []

    if isinstance(value, _MULTI_VALUE_TYPES):
        seen: set[str] = set()
        collected: list[tuple[str, str]] = []
        for item in value:
            if item is None or not has_custom_str(item):
                continue
            safe = to_safe_string(item)
            if safe in seen:
                continue
            seen.add(safe)
            pair = encode_key_value(key, item, encoder)
            if pair:
                collected.append((safe, pair))
        collected.sort(key=lambda entry: entry[0])
        return [pair for _, pair in collected]

    pair = encode_key_value(key, value, encoder)
    return [pair] if pair else []


# ── Typed query objects ─────────────────────────────────────────────────


def query_items(query: object) -> Iterator[tuple[str, Any]]:
    """Yield ``(key, value)`` pairs of a typed query object in key order.

    Accepts mappings, dataclass instances (field order), and plain objects
    (``vars()`` order).
    """
    if query is None:
        return
    if isinstance(query, Mapping):
        yield from ((str(k), v) for k, v in query.items())
    elif dataclasses.is_dataclass(query) and not isinstance(query, type):
        for field in dataclasses.fields(query):
            yield field.name, getattr(query, field.name)
    elif hasattr(query, "__dict__"):
        yield from vars(query).items()
    else:
        msg = f"Unsupported query object type: {type(query).__name__}"
        raise TypeError(msg)


def build_query_string(query: object, encoder: ValueEncoder | None = None) -> str:
    """Serialize a typed query object with the default pipeline.

    Keys keep their order, ``None`` entries are dropped, and the result has
    no leading ``?``. Casing is preserved::

        build_query_string({"tag": ["beta", "alpha", "alpha"], "q": None})
        # "tag=alpha&tag=beta"
    """
    if query is None:
        return ""
    pairs: list[str] = []
    for key, value in query_items(query):
        if value is None:
            continue
        pairs.extend(encode_key_values(key, value, encoder))
    return "&".join(pairs)
