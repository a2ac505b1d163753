import pytest
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from gluestick.pagination import (
    Direction,
    HasOrderedKey,
    InMemoryWindowFetcher,
    PageRequest,
    parse_ordered_key,
    window_filter,
    window_sort,
)


class TestWindowSpec:
    def test_first_page(self):
        request = PageRequest(limit=5)
        assert window_filter(request) == {}
        assert window_sort(request) == [("_id", DESCENDING)]

    def test_ascending_without_cursor_still_reads_newest_first(self):
        request = PageRequest(direction=Direction.ASCENDING)
        assert window_filter(request) == {}
        assert window_sort(request) == [("_id", DESCENDING)]

    def test_descending_from_cursor(self):
        cursor = ObjectId()
        request = PageRequest(cursor=cursor)
        assert window_filter(request) == {"_id": {"$lt": cursor}}
        assert window_sort(request) == [("_id", DESCENDING)]

    def test_ascending_from_cursor(self):
        cursor = ObjectId()
        request = PageRequest(cursor=cursor, direction=Direction.ASCENDING)
        assert window_filter(request) == {"_id": {"$gt": cursor}}
        assert window_sort(request) == [("_id", ASCENDING)]

    def test_custom_key_field(self):
        cursor = ObjectId()
        request = PageRequest(cursor=cursor)
        assert window_filter(request, "seq") == {"seq": {"$lt": cursor}}
        assert window_sort(request, "seq") == [("seq", DESCENDING)]


class TestInMemoryWindowFetcher:
    def test_fetches_lookahead_row(self, rows):
        window = InMemoryWindowFetcher(rows).fetch(PageRequest(limit=3))
        assert [row.label for row in window] == ["k7", "k6", "k5", "k4"]

    def test_descending_excludes_cursor(self, rows):
        request = PageRequest(cursor=rows[5].key, limit=2)
        window = InMemoryWindowFetcher(rows).fetch(request)
        assert [row.label for row in window] == ["k4", "k3", "k2"]

    def test_ascending_excludes_cursor(self, rows):
        request = PageRequest(cursor=rows[5].key, direction=Direction.ASCENDING, limit=3)
        window = InMemoryWindowFetcher(rows).fetch(request)
        assert [row.label for row in window] == ["k6", "k7"]

    def test_input_order_does_not_matter(self, rows):
        shuffled = rows[::2] + rows[1::2]
        window = InMemoryWindowFetcher(shuffled).fetch(PageRequest(limit=2))
        assert [row.label for row in window] == ["k7", "k6", "k5"]

    def test_duplicate_keys_rejected(self, rows):
        with pytest.raises(ValueError, match="Duplicate ordered key"):
            InMemoryWindowFetcher(rows + [rows[3]])

    async def test_is_awaitable(self, rows):
        fetcher = InMemoryWindowFetcher(rows)
        assert len(fetcher) == 8
        window = await fetcher(PageRequest(limit=1))
        assert [row.label for row in window] == ["k7", "k6"]


class TestKeys:
    def test_rows_satisfy_protocol(self, rows):
        assert isinstance(rows[0], HasOrderedKey)

    def test_parse_ordered_key(self):
        key = ObjectId()
        assert parse_ordered_key(key) is key
        assert parse_ordered_key(str(key)) == key

    @pytest.mark.parametrize("value", [None, 12, "xyz", b"123456789012"])
    def test_parse_ordered_key_rejects(self, value):
        with pytest.raises(ValueError, match="Malformed cursor"):
            parse_ordered_key(value)
