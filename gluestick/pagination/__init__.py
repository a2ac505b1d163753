from gluestick.pagination.keys import HasOrderedKey, key_of, parse_ordered_key
from gluestick.pagination.request import (
    PER_PAGE_DEFAULT,
    PER_PAGE_MAX,
    Direction,
    PageRequest,
)
from gluestick.pagination.response import PageResponse
from gluestick.pagination.resolver import resolve_exact_page, resolve_page
from gluestick.pagination.fetcher import (
    InMemoryWindowFetcher,
    WindowFetcher,
    window_filter,
    window_sort,
)


async def paginate(fetcher: WindowFetcher, request: PageRequest) -> PageResponse:
    """Fetch a lookahead window and resolve it into a page."""
    window = await fetcher(request)
    return resolve_page(window, request)


__all__ = [
    "HasOrderedKey",
    "key_of",
    "parse_ordered_key",
    "PER_PAGE_DEFAULT",
    "PER_PAGE_MAX",
    "Direction",
    "PageRequest",
    "PageResponse",
    "resolve_page",
    "resolve_exact_page",
    "InMemoryWindowFetcher",
    "WindowFetcher",
    "window_filter",
    "window_sort",
    "paginate",
]
