"""Parsed and validated pagination input."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gluestick.pagination.keys import parse_ordered_key
from gluestick.utils.exceptions import InvalidPageRequest

PER_PAGE_DEFAULT = 10
PER_PAGE_MAX = 100


class Direction(str, Enum):
    """Which way to walk away from the cursor.

    DESCENDING continues toward older items, ASCENDING goes back toward
    newer ones.
    """

    DESCENDING = "desc"
    ASCENDING = "asc"

    @classmethod
    def _missing_(cls, value: object) -> Direction | None:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if lowered in (member.value, member.name.lower()):
                    return member
        return None


class PageRequest(BaseModel):
    """A validated ``(cursor, direction, limit)`` triple.

    Construction enforces ``1 <= limit <= PER_PAGE_MAX``. Use ``parse`` or
    ``from_links`` for untrusted input so failures surface as
    ``InvalidPageRequest``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    cursor: Optional[ObjectId] = None
    direction: Direction = Direction.DESCENDING
    limit: int = Field(default=PER_PAGE_DEFAULT, ge=1, le=PER_PAGE_MAX)

    @field_validator("cursor", mode="before")
    @classmethod
    def _parse_cursor(cls, value: Any) -> ObjectId | None:
        if value is None:
            return None
        return parse_ordered_key(value)

    @field_validator("direction", mode="before")
    @classmethod
    def _parse_direction(cls, value: Any) -> Direction:
        return Direction(value)

    @property
    def limit_with_lookahead(self) -> int:
        # One extra row tells us whether anything lies beyond this page.
        return self.limit + 1

    @property
    def is_first_page(self) -> bool:
        return self.cursor is None

    def for_cursor(self, cursor: ObjectId | str, direction: Direction) -> PageRequest:
        """Return a request with the same limit anchored at another cursor."""
        return PageRequest(cursor=cursor, direction=direction, limit=self.limit)

    # --- Untrusted input ---

    @classmethod
    def parse(
        cls,
        cursor: Any = None,
        direction: Any = None,
        limit: Any = None,
    ) -> PageRequest:
        """Validate raw client input into a PageRequest.

        Absent values take their defaults. A limit outside
        ``[1, PER_PAGE_MAX]`` is rejected rather than clamped, and a
        malformed cursor is rejected rather than treated as "no cursor".

        Raises:
            InvalidPageRequest: With a per-field report of every problem
        """
        data: dict[str, Any] = {}
        if cursor is not None and cursor != "":
            data["cursor"] = cursor
        if direction is not None and direction != "":
            data["direction"] = direction
        if limit is not None and limit != "":
            data["limit"] = limit

        try:
            return cls(**data)
        except ValidationError as e:
            raise InvalidPageRequest(_report(e)) from e

    @classmethod
    def from_links(
        cls,
        prev_page: Any = None,
        next_page: Any = None,
        per_page: Any = None,
    ) -> PageRequest:
        """Validate the ``prev_page``/``next_page`` link form.

        ``next_page`` wins when both are present; ``prev_page`` on its own
        pages back toward newer items.
        """
        if next_page not in (None, ""):
            return cls.parse(cursor=next_page, direction=Direction.DESCENDING, limit=per_page)
        if prev_page not in (None, ""):
            return cls.parse(cursor=prev_page, direction=Direction.ASCENDING, limit=per_page)
        return cls.parse(limit=per_page)


# Errors are reported under the query parameter the client sent.
_PARAM_NAMES = {"cursor": "cursor", "direction": "dir", "limit": "per_page"}


def _report(error: ValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic ValidationError into ``{param: [messages]}``."""
    report: dict[str, list[str]] = {}
    for detail in error.errors():
        field = str(detail["loc"][0]) if detail["loc"] else "request"
        param = _PARAM_NAMES.get(field, field)
        report.setdefault(param, []).append(_message(field, detail))
    return report


def _message(field: str, detail: dict[str, Any]) -> str:
    kind = detail.get("type")
    if field == "limit" and kind == "less_than_equal":
        return f"'per_page' may not be greater than {PER_PAGE_MAX}"
    if field == "limit" and kind == "greater_than_equal":
        return "'per_page' must be greater than 0"
    if field == "direction":
        return "'dir' must be one of 'desc' or 'asc'"
    if field == "cursor":
        return "'cursor' is not a valid key"
    return detail.get("msg", "invalid value")
