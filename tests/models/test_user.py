import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from gluestick.models import User
from gluestick.pagination import PageRequest


class TestUser:
    async def test_username_and_email_normalized(self, mongo_connection):
        user = await User.create(username="  Ada ", email="ADA@Example.com")
        assert user.username == "ada"
        assert user.email == "ada@example.com"

    async def test_find_by_username_is_case_insensitive(self, mongo_connection):
        user = await User.create(username="ada", email="ada@example.com")
        found = await User.find_by_username("ADA")
        assert found is not None and found.id == user.id
        assert await User.find_by_username("nobody") is None

    async def test_username_unique(self, mongo_connection):
        await User.ensure_indexes()
        await User.create(username="ada", email="ada@example.com")
        with pytest.raises(DuplicateKeyError):
            await User.create(username="Ada", email="other@example.com")

    async def test_usernames_for(self, mongo_connection):
        ada = await User.create(username="ada", email="ada@example.com")
        bob = await User.create(username="bob", email="bob@example.com")
        mapping = await User.usernames_for([ada.id, bob.id, ada.id, ObjectId()])
        assert mapping == {ada.id: "ada", bob.id: "bob"}

    async def test_usernames_for_nothing(self, mongo_connection):
        assert await User.usernames_for([]) == {}

    async def test_directory_newest_first(self, mongo_connection):
        for name in ["ada", "bob", "cy"]:
            await User.create(username=name, email=f"{name}@example.com")
        page = await User.directory(PageRequest(limit=2))
        assert [user.username for user in page.items] == ["cy", "bob"]
        assert page.has_next
        rest = await User.directory(PageRequest(cursor=page.next_cursor, limit=2))
        assert [user.username for user in rest.items] == ["ada"]
        assert not rest.has_next
