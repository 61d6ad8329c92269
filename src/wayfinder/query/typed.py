"""Typed query getters layered on a reader by composition.

``TypedQueryParams`` wraps any ``QueryParamsReader`` and adds parsing
helpers. Each getter reads the *first* value of a key and returns ``None``
when it is missing or does not parse. Getters never raise.

Usage::

    route = Route(
        path="search",
        title=lambda args: "Search",
        query_params_factory=TypedQueryParams.from_raw,
        get_query=lambda qp: {
            "page": qp.integer("page"),
            "since": qp.date("since"),
            "sort": qp.enum_value(Sort, "sort"),
        },
    )
"""

import math
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, TypeAlias

from wayfinder._internal.multimap import QueryParamsReader
from wayfinder._internal.types import RawQuery
from wayfinder.query.params import QueryParams

EnumLike: TypeAlias = type[Enum] | Mapping[str, Any]


# ── Parsers ─────────────────────────────────────────────────────────────


def parse_number(value: str | None) -> int | float | None:
    """Parse a finite int or float; anything else is ``None``."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_integer(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_boolean(value: str | None) -> bool | None:
    """``true`` / ``false`` in any casing; anything else is ``None``."""
    if not value:
        return None
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_date(value: str | None) -> datetime | None:
    """Parse an ISO 8601 date or datetime (``Z`` suffix accepted)."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


# ── Enum lookup ─────────────────────────────────────────────────────────


def _enum_items(enum_like: EnumLike) -> list[tuple[str, Any]]:
    if isinstance(enum_like, type) and issubclass(enum_like, Enum):
        return [(name, member.value) for name, member in enum_like.__members__.items()]
    return list(enum_like.items())


def lookup_enum_key(
    enum_like: EnumLike,
    value: str | None,
    *,
    convert: bool = False,
    ignore_case: bool = False,
) -> str | None:
    """Find the key (member name) of *enum_like* that *value* refers to.

    Strategies, first success wins:

    1. direct key match
    2. case-insensitive key match (``ignore_case``)
    3. match against the values, returning their key (``convert``)
    """
    if not value:
        return None
    items = _enum_items(enum_like)

    for key, _ in items:
        if key == value:
            return key

    if ignore_case:
        folded = value.casefold()
        for key, _ in items:
            if key.casefold() == folded:
                return key

    if convert:
        for key, member_value in items:
            text = str(member_value)
            if text == value or (ignore_case and text.casefold() == value.casefold()):
                return key

    return None


def lookup_enum_value(
    enum_like: EnumLike,
    value: str | None,
    *,
    convert: bool = False,
    ignore_case: bool = False,
) -> Any:
    """Like ``lookup_enum_key()`` but returns the member (or mapping value)."""
    key = lookup_enum_key(enum_like, value, convert=convert, ignore_case=ignore_case)
    if key is None:
        return None
    return enum_like[key]


# ── Reader ──────────────────────────────────────────────────────────────


class TypedQueryParams:
    """A ``QueryParamsReader`` with typed getters, wrapping another reader."""

    __slots__ = ("_reader",)

    def __init__(self, reader: QueryParamsReader) -> None:
        self._reader = reader

    @classmethod
    def from_raw(cls, raw: RawQuery) -> "TypedQueryParams":
        """Factory suitable for ``Route.query_params_factory``."""
        return cls(QueryParams(raw))

    def __repr__(self) -> str:
        return f"TypedQueryParams({self._reader!r})"

    @property
    def reader(self) -> QueryParamsReader:
        return self._reader

    def value(self, key: str) -> str | None:
        return self._reader.value(key)

    def values(self, key: str) -> list[str]:
        return self._reader.values(key)

    def number(self, key: str) -> int | float | None:
        return parse_number(self.value(key))

    def integer(self, key: str) -> int | None:
        return parse_integer(self.value(key))

    def boolean(self, key: str) -> bool | None:
        return parse_boolean(self.value(key))

    def date(self, key: str) -> datetime | None:
        return parse_date(self.value(key))

    def enum_key(
        self,
        enum_like: EnumLike,
        key: str,
        *,
        convert: bool = True,
        ignore_case: bool = True,
    ) -> str | None:
        return lookup_enum_key(enum_like, self.value(key), convert=convert, ignore_case=ignore_case)

    def enum_value(
        self,
        enum_like: EnumLike,
        key: str,
        *,
        convert: bool = True,
        ignore_case: bool = True,
    ) -> Any:
        return lookup_enum_value(enum_like, self.value(key), convert=convert, ignore_case=ignore_case)
