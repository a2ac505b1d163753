from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from gluestick.lifecycle.hooks import pre_save


class TimestampsMixin:
    """Stamps ``created_at`` on first write and ``updated_at`` on every write.

    Usage: class Paste(TimestampsMixin, Document): ...

    Timestamps are informational only; pages are ordered by ``_id``.
    """

    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)

    @pre_save
    def _touch_timestamps(self) -> None:
        now = datetime.now(timezone.utc)
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now
