from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from gluestick.lifecycle.observability import track_query
from gluestick.pagination.fetcher import window_filter, window_sort
from gluestick.pagination.request import PageRequest
from gluestick.pagination.resolver import resolve_page
from gluestick.pagination.response import PageResponse
from gluestick.utils.types import FilterSpec, SortSpec, merge_filters, merge_key_condition

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuerySet(Generic[T]):
    """Lazy, immutable query over one Document class.

    Chainable methods return a new QuerySet; nothing runs until ``all``,
    ``first``, ``count``, ``fetch_window`` or ``keyset_paginate``.
    """

    document_class: type[T]
    query: FilterSpec = field(default_factory=dict)
    order: SortSpec = field(default_factory=list)
    limit_count: int = 0

    # --- Chainable ---

    def filter(self, _filter: FilterSpec | str | ObjectId | None = None, **kwargs: Any) -> QuerySet[T]:
        """AND more conditions onto the query; a bare id filters on ``_id``.

        Examples:
            Paste.find().filter("507f1f77bcf86cd799439011")
            Paste.find(visibility="public").filter({"user_id": uid})
        """
        if isinstance(_filter, (str, ObjectId)):
            _filter = {"_id": ObjectId(_filter)}
        return replace(self, query=merge_filters(self.query, _filter, **kwargs))

    def sort(self, *fields: str) -> QuerySet[T]:
        """Replace the sort order; ``-`` prefixes a descending field."""
        order = [(f[1:], DESCENDING) if f.startswith("-") else (f, ASCENDING) for f in fields]
        return replace(self, order=order)

    def limit(self, n: int) -> QuerySet[T]:
        return replace(self, limit_count=n)

    # --- Terminal ---

    async def all(self) -> list[T]:
        return await self._load("find")

    async def first(self) -> T | None:
        results = await self.limit(1).all()
        return results[0] if results else None

    async def count(self) -> int:
        async with track_query("count", self._collection, self._class_name, filter=self.query) as stats:
            stats.result_count = await self.document_class.get_collection().count_documents(self.query)
        return stats.result_count

    # --- Keyset pagination ---

    async def fetch_window(self, request: PageRequest, key_field: str = "_id") -> list[T]:
        """Fetch up to ``limit + 1`` rows on the far side of the request cursor.

        Rows come back nearest-to-cursor first: key descending for a first
        page or a descending walk, key ascending when walking back.
        Any sort or limit already set on the QuerySet is replaced.
        """
        key_condition = window_filter(request, key_field).get(key_field)
        window = replace(
            self,
            query=merge_key_condition(self.query, key_field, key_condition),
            order=window_sort(request, key_field),
            limit_count=request.limit_with_lookahead,
        )
        return await window._load("fetch_window")

    async def keyset_paginate(self, request: PageRequest) -> PageResponse[T]:
        """Single-query keyset page: fetch the lookahead window and resolve it."""
        page = resolve_page(await self.fetch_window(request), request)
        logger.debug(
            "Resolved %s page of %d item(s) (cursor=%s, direction=%s, has_prev=%s, has_next=%s)",
            self._class_name,
            len(page.items),
            request.cursor,
            request.direction.value,
            page.has_prev,
            page.has_next,
        )
        return page

    # --- Internal ---

    @property
    def _collection(self) -> str:
        return self.document_class._collection_name

    @property
    def _class_name(self) -> str:
        return self.document_class.__name__

    async def _load(self, operation: str) -> list[T]:
        async with track_query(
            operation,
            self._collection,
            self._class_name,
            filter=self.query,
            sort=self.order or None,
            limit=self.limit_count or None,
        ) as stats:
            cursor = self.document_class.get_collection().find(self.query)
            if self.order:
                cursor = cursor.sort(self.order)
            if self.limit_count:
                cursor = cursor.limit(self.limit_count)
            results = [self.document_class._from_mongo(raw) async for raw in cursor]
            stats.result_count = len(results)
        return results
