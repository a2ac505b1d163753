"""Walking whole collections page by page in both directions."""

import pytest

from gluestick.pagination import Direction, InMemoryWindowFetcher, PageRequest, paginate

SIZES = [(0, 3), (1, 3), (3, 3), (8, 3), (9, 3), (10, 1), (25, 10), (7, 100)]


async def _walk_forward(fetcher, limit):
    pages = [await paginate(fetcher, PageRequest(limit=limit))]
    while pages[-1].next_cursor is not None:
        request = PageRequest(cursor=pages[-1].next_cursor, direction=Direction.DESCENDING, limit=limit)
        pages.append(await paginate(fetcher, request))
    return pages


@pytest.mark.parametrize("n,limit", SIZES)
async def test_forward_walk_visits_every_row_once(make_rows, n, limit):
    rows = make_rows(n)
    pages = await _walk_forward(InMemoryWindowFetcher(rows), limit)

    seen = [item for page in pages for item in page.items]
    assert seen == list(reversed(rows))
    assert pages[0].prev_cursor is None
    for page in pages:
        assert len(page.items) <= limit
        keys = [item.key for item in page.items]
        assert keys == sorted(keys, reverse=True)
    for page in pages[:-1]:
        assert len(page.items) == limit
        assert page.next_cursor == page.items[-1].key


@pytest.mark.parametrize("n,limit", SIZES)
async def test_backward_walk_retraces_forward_pages(make_rows, n, limit):
    rows = make_rows(n)
    fetcher = InMemoryWindowFetcher(rows)
    forward = await _walk_forward(fetcher, limit)

    backward = [forward[-1]]
    while backward[-1].prev_cursor is not None:
        request = PageRequest(cursor=backward[-1].prev_cursor, direction=Direction.ASCENDING, limit=limit)
        backward.append(await paginate(fetcher, request))

    assert backward == list(reversed(forward))


@pytest.mark.parametrize("n,limit", [(8, 3), (25, 10), (5, 2)])
async def test_adjacent_pages_touch_without_overlap(make_rows, n, limit):
    rows = make_rows(n)
    position = {row.key: index for index, row in enumerate(rows)}
    pages = await _walk_forward(InMemoryWindowFetcher(rows), limit)

    for current, following in zip(pages, pages[1:]):
        assert position[current.items[-1].key] - position[following.items[0].key] == 1


async def test_next_cursor_set_only_when_older_rows_exist(make_rows):
    rows = make_rows(6)
    fetcher = InMemoryWindowFetcher(rows)
    for anchor in rows:
        request = PageRequest(cursor=anchor.key, limit=2)
        page = await paginate(fetcher, request)
        if page.items:
            older = [row for row in rows if row.key < page.items[-1].key]
            assert page.has_next is bool(older)
