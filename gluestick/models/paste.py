from __future__ import annotations

import logging
from enum import Enum

from bson import ObjectId
from pydantic import ConfigDict, Field

from gluestick.core.document import Document
from gluestick.fields.base import PyObjectId
from gluestick.fields.indexed import index
from gluestick.lifecycle.hooks import post_delete, pre_validate
from gluestick.pagination.request import PageRequest
from gluestick.pagination.response import PageResponse
from gluestick.plugins.timestamps import TimestampsMixin
from gluestick.utils.exceptions import DocumentInvalid

logger = logging.getLogger(__name__)


class Visibility(str, Enum):
    PUBLIC = "public"
    SECRET = "secret"


class Paste(TimestampsMixin, Document):
    """A single paste. Secret pastes are only listed for their owner."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    user_id: PyObjectId
    filename: str = Field(min_length=1, max_length=256)
    description: str = Field(default="", max_length=256)
    body: str = Field(min_length=1)
    visibility: Visibility = Visibility.PUBLIC

    class Settings:
        collection = "pastes"
        indexes = [
            # Public feed windows never touch secret pastes.
            index("visibility", "-_id", partial={"visibility": Visibility.PUBLIC.value}, name="public_feed"),
            index("user_id", "-_id", name="user_pastes"),
        ]

    @property
    def is_public(self) -> bool:
        return self.visibility == Visibility.PUBLIC.value

    def owned_by(self, user_id: ObjectId | None) -> bool:
        return user_id is not None and self.user_id == user_id

    @pre_validate
    def _stay_public(self) -> None:
        # A public paste may already have been read or indexed elsewhere.
        if self.stored_value("visibility") == Visibility.PUBLIC.value and not self.is_public:
            raise DocumentInvalid("Cannot change a public paste to secret")

    @post_delete
    def _log_deletion(self) -> None:
        logger.info("Deleted paste %s of user %s", self.id, self.user_id)

    @classmethod
    async def public_feed(cls, request: PageRequest) -> PageResponse[Paste]:
        """Everyone's public pastes, newest first."""
        return await cls.find(visibility=Visibility.PUBLIC.value).keyset_paginate(request)

    @classmethod
    async def for_user(
        cls,
        user_id: ObjectId,
        request: PageRequest,
        include_secret: bool = False,
    ) -> PageResponse[Paste]:
        """A user's pastes, newest first. Owners pass ``include_secret=True``."""
        qs = cls.find(user_id=user_id)
        if not include_secret:
            qs = qs.filter(visibility=Visibility.PUBLIC.value)
        return await qs.keyset_paginate(request)
