"""Turns a raw fetched window into a display-ready page.

The window must come from a fetcher honouring the window contract: at most
``limit + 1`` rows, walking away from the cursor so that the row nearest
the cursor is first. For a first page (no cursor) that means the newest
rows, newest first.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from gluestick.pagination.keys import HasOrderedKey, key_of
from gluestick.pagination.request import Direction, PageRequest
from gluestick.pagination.response import PageResponse
from gluestick.utils.exceptions import PaginationError

T = TypeVar("T", bound=HasOrderedKey)


def resolve_page(window: Sequence[T], request: PageRequest) -> PageResponse[T]:
    """Resolve a lookahead window (``limit + 1`` rows requested).

    Args:
        window: Rows as returned by the fetcher, nearest-to-cursor first
        request: The request the window was fetched for

    Returns:
        PageResponse with at most ``request.limit`` items, newest first

    Raises:
        PaginationError: If the window holds more than ``limit + 1`` rows
    """
    if len(window) > request.limit_with_lookahead:
        raise PaginationError(
            f"Window of {len(window)} rows exceeds limit + 1 ({request.limit_with_lookahead})"
        )

    items = list(window)

    if not items:
        # Navigated past the end of the data: point back at the cursor we
        # came from in either direction. This can loop on an empty page.
        return PageResponse(
            items=items,
            prev_cursor=request.cursor,
            next_cursor=None,
            limit=request.limit,
        )

    # Read before trimming: the first row is never the lookahead row.
    prev_cursor = key_of(items[0]) if request.cursor is not None else None
    next_cursor = None

    if len(items) > request.limit:
        items.pop()
        next_cursor = key_of(items[-1])

    if request.direction is Direction.ASCENDING and request.cursor is not None:
        items.reverse()
        prev_cursor, next_cursor = next_cursor, prev_cursor

    return PageResponse(
        items=items,
        prev_cursor=prev_cursor,
        next_cursor=next_cursor,
        limit=request.limit,
    )


def resolve_exact_page(window: Sequence[T], request: PageRequest) -> PageResponse[T]:
    """Resolve a window fetched with exactly ``limit`` rows (no lookahead).

    Both cursors are taken from the ends of the window, so they are set
    whenever the page is non-empty and cannot tell whether more data
    exists. Prefer ``resolve_page`` where the fetch can over-read by one.
    """
    if len(window) > request.limit:
        raise PaginationError(
            f"Window of {len(window)} rows exceeds limit ({request.limit})"
        )

    items = list(window)
    prev_cursor = key_of(items[0]) if items else None
    next_cursor = key_of(items[-1]) if items else None

    if request.direction is Direction.ASCENDING and request.cursor is not None:
        items.reverse()
        prev_cursor, next_cursor = next_cursor, prev_cursor

    return PageResponse(
        items=items,
        prev_cursor=prev_cursor,
        next_cursor=next_cursor,
        limit=request.limit,
    )
