"""Query tracing for Document and QuerySet operations.

Tracing is off until ``enable_tracing`` is called. When on, every storage
call produces a ``QueryEvent``; failed and slow ones are logged as warnings
on the ``gluestick`` logger, the rest at debug level.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable

logger = logging.getLogger("gluestick")

Listener = Callable[["QueryEvent"], Any]


@dataclass(frozen=True)
class QueryEvent:
    operation: str
    collection: str
    document_class: str = ""
    filter: dict[str, Any] | None = None
    sort: list[tuple[str, int]] | None = None
    limit: int | None = None
    duration_ms: float = 0.0
    result_count: int | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def describe(self) -> str:
        target = f"{self.operation} on {self.collection}"
        if self.limit is not None:
            target += f" (limit {self.limit})"
        return target


@dataclass
class QueryStats:
    """Filled in by the traced block; read when the event is built."""

    result_count: int | None = None


@dataclass
class _Tracing:
    enabled: bool = False
    slow_query_ms: float = 100.0
    capture: bool = False
    listeners: list[Listener] = field(default_factory=list)
    events: list[QueryEvent] = field(default_factory=list)


_tracing = _Tracing()


def enable_tracing(slow_query_ms: float = 100.0, capture_events: bool = False) -> None:
    """Turn tracing on. ``capture_events`` keeps events for ``get_events``."""
    _tracing.enabled = True
    _tracing.slow_query_ms = slow_query_ms
    _tracing.capture = capture_events


def disable_tracing() -> None:
    """Turn tracing off and drop listeners and captured events."""
    global _tracing
    _tracing = _Tracing()


def get_events() -> list[QueryEvent]:
    return list(_tracing.events)


def clear_events() -> None:
    _tracing.events.clear()


def add_listener(callback: Listener) -> None:
    _tracing.listeners.append(callback)


def remove_listener(callback: Listener) -> None:
    _tracing.listeners.remove(callback)


def emit_event(event: QueryEvent) -> None:
    if not _tracing.enabled:
        return
    if _tracing.capture:
        _tracing.events.append(event)

    if event.failed:
        logger.warning("Query failed: %s after %.1fms: %s", event.describe(), event.duration_ms, event.error)
    elif event.duration_ms > _tracing.slow_query_ms:
        logger.warning(
            "Slow query: %s took %.1fms (threshold %.1fms)",
            event.describe(),
            event.duration_ms,
            _tracing.slow_query_ms,
        )
    else:
        logger.debug("Query: %s returned %s row(s) in %.1fms", event.describe(), event.result_count, event.duration_ms)

    for listener in _tracing.listeners:
        listener(event)


@asynccontextmanager
async def track_query(
    operation: str,
    collection: str,
    document_class: str = "",
    filter: dict[str, Any] | None = None,
    sort: list[tuple[str, int]] | None = None,
    limit: int | None = None,
) -> AsyncIterator[QueryStats]:
    """Time the enclosed storage call and emit a QueryEvent for it.

    Exceptions are recorded on the event and re-raised unchanged.
    """
    stats = QueryStats()
    if not _tracing.enabled:
        yield stats
        return

    start = time.perf_counter()
    error: str | None = None
    try:
        yield stats
    except BaseException as e:
        error = f"{type(e).__name__}: {e}"
        raise
    finally:
        emit_event(
            QueryEvent(
                operation=operation,
                collection=collection,
                document_class=document_class,
                filter=filter,
                sort=sort,
                limit=limit,
                duration_ms=(time.perf_counter() - start) * 1000,
                result_count=stats.result_count,
                error=error,
            )
        )
