"""Immutable query readers.

``QueryParams`` is the base reader every route gets when it does not
supply its own ``query_params_factory``. It implements the
``QueryParamsReader`` protocol plus read-only mapping dunders. It is not a
``Mapping``: ``values(key)`` takes a key, unlike ``Mapping.values()``.
"""

from collections.abc import Iterable, Iterator

from wayfinder._internal.types import QueryMap, RawQuery
from wayfinder.encoding import has_custom_str, query_items, to_safe_string


def normalize_query_values(values: str | Iterable[str | None] | None) -> list[str]:
    """Trim, drop empties, and deduplicate in first-occurrence order.

    ::

        >>> normalize_query_values(["  react", "react", "typescript", ""])
        ['react', 'typescript']
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    trimmed = (v.strip() for v in values if v is not None)
    return list(dict.fromkeys(v for v in trimmed if v))


class QueryParams:
    """Immutable, normalized multi-valued query data.

    Attributes:
        _data: Field name -> distinct, trimmed, non-empty values.

    ``value`` / ``__getitem__`` return the first value for a key.
    ``values`` returns all values for a key.
    Keys whose values all normalize away are dropped.
    """

    _data: QueryMap

    __slots__ = ("_data",)

    def __init__(self, raw: RawQuery | None = None) -> None:
        data: QueryMap = {}
        for key, values in (raw or {}).items():
            normalized = normalize_query_values(values)
            if normalized:
                data[key] = normalized
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"QueryParams({self._data!r})"

    def value(self, key: str) -> str | None:
        """Return the first value for *key*, or ``None`` if missing."""
        values = self._data.get(key)
        return values[0] if values else None

    def values(self, key: str) -> list[str]:
        """Return every distinct value for *key*, in arrival order."""
        return list(self._data.get(key, ()))

    def keys(self) -> list[str]:
        return list(self._data)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first value for *key*, or *default* if missing."""
        value = self.value(key)
        return default if value is None else value

    def to_dict(self) -> QueryMap:
        """Return a copy of the normalized key -> values map."""
        return {key: list(values) for key, values in self._data.items()}


def query_params_from_typed(query: object) -> QueryParams:
    """Build a reader back out of an already-materialized typed query.

    Lets a custom ``serialize_query`` use the familiar reader API when no
    real reader was passed to ``build_href()``.

    This is a best-effort approximation:

    - it reflects the outbound typed object, not the original URL
    - multi-values that upstream logic collapsed cannot be re-expanded
    - sequence elements without a string form of their own are dropped
    - no locale, numeric, or date formatting beyond ``to_safe_string()``
    """
    raw: dict[str, list[str]] = {}
    for key, value in query_items(query):
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            items = [
                to_safe_string(v) if has_custom_str(v) else ""
                for v in value
                if v is not None
            ]
            items = [s for s in items if s]
            if items:
                raw[key] = items
        else:
            text = to_safe_string(value)
            if text:
                raw[key] = [text]
    return QueryParams(raw)
