import pytest
from bson import ObjectId

from gluestick.pagination import (
    Direction,
    InMemoryWindowFetcher,
    PageRequest,
    resolve_exact_page,
    resolve_page,
)
from gluestick.utils.exceptions import InvalidPageRequest, PaginationError


def _labels(items) -> list[str]:
    return [item.label for item in items]


def _resolve(fetcher, request):
    return resolve_page(fetcher.fetch(request), request)


class TestScenarios:
    """Eight rows k0 < ... < k7, three per page."""

    def test_first_page(self, rows):
        page = _resolve(InMemoryWindowFetcher(rows), PageRequest(limit=3))
        assert _labels(page.items) == ["k7", "k6", "k5"]
        assert page.prev_cursor is None
        assert page.next_cursor == rows[5].key

    def test_second_page(self, rows):
        request = PageRequest(cursor=rows[5].key, limit=3)
        page = _resolve(InMemoryWindowFetcher(rows), request)
        assert _labels(page.items) == ["k4", "k3", "k2"]
        assert page.prev_cursor == rows[4].key
        assert page.next_cursor == rows[2].key

    def test_last_page(self, rows):
        request = PageRequest(cursor=rows[2].key, limit=3)
        page = _resolve(InMemoryWindowFetcher(rows), request)
        assert _labels(page.items) == ["k1", "k0"]
        assert page.prev_cursor == rows[1].key
        assert page.next_cursor is None

    def test_paging_back_reproduces_first_page(self, rows):
        fetcher = InMemoryWindowFetcher(rows)
        first = _resolve(fetcher, PageRequest(limit=3))

        request = PageRequest(cursor=rows[4].key, direction=Direction.ASCENDING, limit=3)
        window = fetcher.fetch(request)
        assert [row.label for row in window] == ["k5", "k6", "k7"]

        page = resolve_page(window, request)
        assert page == first

    def test_paging_back_from_last_page(self, rows):
        fetcher = InMemoryWindowFetcher(rows)
        second = _resolve(fetcher, PageRequest(cursor=rows[5].key, limit=3))
        back = _resolve(
            fetcher, PageRequest(cursor=rows[1].key, direction=Direction.ASCENDING, limit=3)
        )
        assert back == second

    def test_limit_above_maximum_rejected_before_resolution(self):
        with pytest.raises(InvalidPageRequest) as exc_info:
            PageRequest.parse(limit=101)
        assert "per_page" in exc_info.value.errors

    def test_cursor_newer_than_everything_going_back(self, rows):
        cursor = ObjectId()
        request = PageRequest(cursor=cursor, direction=Direction.ASCENDING, limit=3)
        window = InMemoryWindowFetcher(rows).fetch(request)
        assert window == []

        page = resolve_page(window, request)
        assert page.items == []
        assert page.next_cursor is None
        assert page.prev_cursor == cursor


class TestResolvePage:
    def test_exactly_limit_rows_is_last_page(self, make_rows):
        rows = make_rows(3)
        page = _resolve(InMemoryWindowFetcher(rows), PageRequest(limit=3))
        assert len(page.items) == 3
        assert page.next_cursor is None
        assert page.prev_cursor is None

    def test_empty_collection(self):
        page = _resolve(InMemoryWindowFetcher([]), PageRequest(limit=3))
        assert page.items == []
        assert page.prev_cursor is None
        assert page.next_cursor is None

    def test_cursor_past_oldest_row(self, rows):
        cursor = rows[0].key
        page = _resolve(InMemoryWindowFetcher(rows), PageRequest(cursor=cursor, limit=3))
        assert page.items == []
        assert page.prev_cursor == cursor
        assert page.next_cursor is None

    def test_short_page_with_cursor(self, rows):
        page = _resolve(InMemoryWindowFetcher(rows), PageRequest(cursor=rows[2].key, limit=5))
        assert _labels(page.items) == ["k1", "k0"]
        assert page.prev_cursor == rows[1].key
        assert page.next_cursor is None

    def test_ascending_without_cursor_is_a_first_page(self, rows):
        request = PageRequest(direction=Direction.ASCENDING, limit=3)
        page = _resolve(InMemoryWindowFetcher(rows), request)
        assert _labels(page.items) == ["k7", "k6", "k5"]
        assert page.prev_cursor is None
        assert page.next_cursor == rows[5].key

    def test_does_not_mutate_window(self, rows):
        request = PageRequest(cursor=rows[0].key, direction=Direction.ASCENDING, limit=3)
        window = InMemoryWindowFetcher(rows).fetch(request)
        snapshot = list(window)
        resolve_page(window, request)
        assert window == snapshot

    def test_idempotent(self, rows):
        request = PageRequest(cursor=rows[6].key, direction=Direction.DESCENDING, limit=2)
        window = InMemoryWindowFetcher(rows).fetch(request)
        assert resolve_page(window, request) == resolve_page(window, request)

    def test_window_longer_than_lookahead_raises(self, rows):
        with pytest.raises(PaginationError, match="exceeds limit"):
            resolve_page(list(reversed(rows)), PageRequest(limit=3))

    def test_page_carries_limit(self, rows):
        page = _resolve(InMemoryWindowFetcher(rows), PageRequest(limit=4))
        assert page.limit == 4


class TestResolveExactPage:
    def test_first_page_sets_both_cursors(self, rows):
        request = PageRequest(limit=3)
        window = list(reversed(rows))[:3]
        page = resolve_exact_page(window, request)
        assert _labels(page.items) == ["k7", "k6", "k5"]
        assert page.prev_cursor == rows[7].key
        assert page.next_cursor == rows[5].key

    def test_ascending_reverses_and_swaps(self, rows):
        request = PageRequest(cursor=rows[4].key, direction=Direction.ASCENDING, limit=3)
        page = resolve_exact_page(rows[5:8], request)
        assert _labels(page.items) == ["k7", "k6", "k5"]
        assert page.prev_cursor == rows[7].key
        assert page.next_cursor == rows[5].key

    def test_empty_window(self):
        page = resolve_exact_page([], PageRequest(cursor=ObjectId(), limit=3))
        assert page.items == []
        assert page.prev_cursor is None
        assert page.next_cursor is None

    def test_window_longer_than_limit_raises(self, rows):
        with pytest.raises(PaginationError):
            resolve_exact_page(rows[:4], PageRequest(limit=3))
