"""QueryParamsReader protocol — shared interface for query readers.

A structural protocol so the matcher, the href builder, and user-defined
readers can interoperate without coupling to a concrete type.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class QueryParamsReader(Protocol):
    """Read access to multi-valued query data.

    ``value`` returns the first value for a key (``None`` when absent).
    ``values`` returns every distinct value in first-occurrence order.
    """

    def value(self, key: str) -> str | None: ...
    def values(self, key: str) -> list[str]: ...
