from __future__ import annotations

from typing import Annotated, Iterable

from bson import ObjectId
from pydantic import Field

from gluestick.core.document import Document
from gluestick.fields.indexed import Indexed
from gluestick.lifecycle.hooks import pre_save
from gluestick.pagination.request import PageRequest
from gluestick.pagination.response import PageResponse
from gluestick.plugins.timestamps import TimestampsMixin


class User(TimestampsMixin, Document):
    """A pastebin account. Passwords and sessions live elsewhere."""

    username: Annotated[str, Indexed(unique=True)] = Field(min_length=1, max_length=32)
    email: Annotated[str, Indexed(unique=True)] = Field(min_length=3, max_length=254)

    class Settings:
        collection = "users"

    @pre_save
    def _normalize(self) -> None:
        self.username = self.username.strip().lower()
        self.email = self.email.strip().lower()

    @classmethod
    async def find_by_username(cls, username: str) -> User | None:
        return await cls.find_one(username=username.strip().lower())

    @classmethod
    async def usernames_for(cls, ids: Iterable[ObjectId]) -> dict[ObjectId, str]:
        """Map user ids to usernames with a single ``$in`` query."""
        unique_ids = list(dict.fromkeys(ids))
        if not unique_ids:
            return {}
        users = await cls.find({"_id": {"$in": unique_ids}}).all()
        return {user.id: user.username for user in users}

    @classmethod
    async def directory(cls, request: PageRequest) -> PageResponse[User]:
        """Newest accounts first."""
        return await cls.find().keyset_paginate(request)
