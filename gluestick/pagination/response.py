from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from gluestick.pagination.request import Direction

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PageResponse(Generic[T]):
    """A resolved page in newest-first order plus its continuation cursors.

    ``prev_cursor`` is set whenever the request carried a cursor, even if
    the page turned out empty. ``next_cursor`` is set only when older
    items exist beyond ``items[-1]``.
    """

    items: list[T]
    prev_cursor: Any | None
    next_cursor: Any | None
    limit: int

    @property
    def has_prev(self) -> bool:
        return self.prev_cursor is not None

    @property
    def has_next(self) -> bool:
        return self.next_cursor is not None

    def pagination(self) -> dict[str, str | None]:
        """Cursor pair as the JSON ``pagination`` object."""
        return {
            "prev_page": _encode(self.prev_cursor),
            "next_page": _encode(self.next_cursor),
        }

    def next_params(self) -> dict[str, Any] | None:
        """Query-string values for a "next" link, or None on the last page."""
        if self.next_cursor is None:
            return None
        return {
            "cursor": _encode(self.next_cursor),
            "dir": Direction.DESCENDING.value,
            "per_page": self.limit,
        }

    def prev_params(self) -> dict[str, Any] | None:
        """Query-string values for a "previous" link, or None on the first page."""
        if self.prev_cursor is None:
            return None
        return {
            "cursor": _encode(self.prev_cursor),
            "dir": Direction.ASCENDING.value,
            "per_page": self.limit,
        }

    def map(self, fn: Callable[[T], U]) -> PageResponse[U]:
        return PageResponse(
            items=[fn(item) for item in self.items],
            prev_cursor=self.prev_cursor,
            next_cursor=self.next_cursor,
            limit=self.limit,
        )


def _encode(key: Any | None) -> str | None:
    return None if key is None else str(key)
