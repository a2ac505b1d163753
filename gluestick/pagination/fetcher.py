"""The window fetch contract and its two implementations' shared pieces.

For a request with limit ``n`` a fetcher returns up to ``n + 1`` rows:

* no cursor: the newest rows, key descending
* cursor ``c``, DESCENDING: rows with ``key < c``, key descending
* cursor ``c``, ASCENDING: rows with ``key > c``, key ascending
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Protocol, TypeVar

from pymongo import ASCENDING, DESCENDING

from gluestick.pagination.keys import HasOrderedKey, key_of
from gluestick.pagination.request import Direction, PageRequest
from gluestick.utils.types import FilterSpec, SortSpec

T = TypeVar("T", bound=HasOrderedKey)
T_co = TypeVar("T_co", covariant=True)


class WindowFetcher(Protocol[T_co]):
    async def __call__(self, request: PageRequest) -> list[T_co]: ...


def walks_ascending(request: PageRequest) -> bool:
    return request.cursor is not None and request.direction is Direction.ASCENDING


def window_filter(request: PageRequest, key_field: str = "_id") -> FilterSpec:
    """Key predicate selecting rows on the far side of the cursor."""
    if request.cursor is None:
        return {}
    operator = "$gt" if walks_ascending(request) else "$lt"
    return {key_field: {operator: request.cursor}}


def window_sort(request: PageRequest, key_field: str = "_id") -> SortSpec:
    """Sort spec putting the row nearest the cursor first."""
    return [(key_field, ASCENDING if walks_ascending(request) else DESCENDING)]


class InMemoryWindowFetcher(Generic[T]):
    """Window fetcher over an in-process collection.

    The collection is snapshotted and sorted by key on construction.
    """

    def __init__(self, items: Iterable[T]) -> None:
        self._items: list[T] = sorted(items, key=key_of)
        for earlier, later in zip(self._items, self._items[1:]):
            if not key_of(earlier) < key_of(later):
                raise ValueError(f"Duplicate ordered key: {key_of(later)!r}")

    def __len__(self) -> int:
        return len(self._items)

    async def __call__(self, request: PageRequest) -> list[T]:
        return self.fetch(request)

    def fetch(self, request: PageRequest) -> list[T]:
        cursor: Any = request.cursor
        if cursor is None:
            candidates = list(reversed(self._items))
        elif walks_ascending(request):
            candidates = [item for item in self._items if key_of(item) > cursor]
        else:
            candidates = [item for item in reversed(self._items) if key_of(item) < cursor]
        return candidates[: request.limit_with_lookahead]
