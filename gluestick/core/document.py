from __future__ import annotations

from typing import Any, ClassVar, Optional, Self, TYPE_CHECKING

if TYPE_CHECKING:
    from gluestick.core.queryset import QuerySet

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pymongo.asynchronous.collection import AsyncCollection

from gluestick.core.connection import get_database
from gluestick.fields.base import PyObjectId
from gluestick.fields.indexed import declared_indexes
from gluestick.lifecycle.hooks import Hook, collect_hooks, run_hooks
from gluestick.lifecycle.observability import track_query
from gluestick.utils.exceptions import DocumentNotFound
from gluestick.utils.settings import DocumentOptions
from gluestick.utils.types import DocumentData, FilterSpec, merge_filters


class Document(BaseModel):
    """Base class for MongoDB-backed models.

    The ``_id`` doubles as the ordered pagination key: it is assigned once,
    client-side, when the document is first inserted and never changes.

    A loaded document remembers the stored form it was read as, so ``save``
    writes only the top-level fields that differ from it.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")

    # Stored form as of the last load or write; None until persisted.
    _stored: Optional[DocumentData] = PrivateAttr(default=None)

    _options: ClassVar[DocumentOptions]
    _collection_name: ClassVar[str] = ""
    _connection_alias: ClassVar[str] = "default"
    _hooks: ClassVar[dict[Hook, tuple[str, ...]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._options = DocumentOptions.resolve(cls)
        cls._collection_name = cls._options.collection
        cls._connection_alias = cls._options.connection_alias
        cls._hooks = collect_hooks(cls)

    @property
    def ordered_key(self) -> ObjectId | None:
        return self.id

    @property
    def is_persisted(self) -> bool:
        return self._stored is not None

    # --- Change tracking ---

    def changes(self) -> DocumentData:
        """Stored keys whose current value differs from the stored one."""
        if self._stored is None:
            return {}
        current = self._to_mongo()
        return {
            key: value
            for key, value in current.items()
            if key != "_id" and self._stored.get(key) != value
        }

    @property
    def is_dirty(self) -> bool:
        return bool(self.changes())

    def stored_value(self, field_name: str, default: Any = None) -> Any:
        """Value of ``field_name`` as last read from or written to MongoDB."""
        if self._stored is None:
            return default
        info = type(self).model_fields[field_name]
        return self._stored.get(info.alias or field_name, default)

    def _remember_stored(self, data: DocumentData | None = None) -> None:
        self._stored = data if data is not None else self._to_mongo()

    # --- Serialization ---

    def _to_mongo(self) -> DocumentData:
        """Dump by alias in python mode so ObjectIds and datetimes stay native."""
        data = self.model_dump(by_alias=True, mode="python")
        if data.get("_id") is None:
            data.pop("_id", None)
        return data

    @classmethod
    def _from_mongo(cls, data: DocumentData) -> Self:
        doc = cls.model_validate(data)
        doc._remember_stored()
        return doc

    # --- Collection access ---

    @classmethod
    def get_collection(cls) -> AsyncCollection:
        return get_database(cls._connection_alias)[cls._collection_name]

    @classmethod
    async def ensure_indexes(cls) -> list[str]:
        """Create every declared index; returns the index names."""
        collection = cls.get_collection()
        names: list[str] = []
        for spec in declared_indexes(cls):
            keys, options = spec.create_args()
            names.append(await collection.create_index(keys, **options))
        return names

    # --- Queries ---

    @classmethod
    async def create(cls, **kwargs: Any) -> Self:
        doc = cls(**kwargs)
        await doc.insert()
        return doc

    @classmethod
    async def get(cls, id: ObjectId | str) -> Self:
        """Fetch by ``_id``. An unparseable id is reported as not found.

        Raises:
            DocumentNotFound: If no document has this id
        """
        if isinstance(id, str):
            if not ObjectId.is_valid(id):
                raise DocumentNotFound(f"{cls.__name__} with id '{id}' not found")
            id = ObjectId(id)
        doc = await cls.find_one({"_id": id})
        if doc is None:
            raise DocumentNotFound(f"{cls.__name__} with id '{id}' not found")
        return doc

    @classmethod
    async def find_one(cls, filter: FilterSpec | None = None, **kwargs: Any) -> Self | None:
        filter = merge_filters(filter, **kwargs)
        async with track_query("find_one", cls._collection_name, cls.__name__, filter=filter) as stats:
            data = await cls.get_collection().find_one(filter)
            stats.result_count = 0 if data is None else 1
        return None if data is None else cls._from_mongo(data)

    @classmethod
    def find(cls, filter: FilterSpec | None = None, **kwargs: Any) -> "QuerySet[Self]":
        """Return a lazy QuerySet."""
        from gluestick.core.queryset import QuerySet

        return QuerySet(cls, merge_filters(filter, **kwargs))

    # --- Writes ---

    async def insert(self) -> None:
        """Insert this document, assigning its ObjectId first.

        ObjectIds rise with the clock second and, within one process, with a
        counter. Keys minted by several processes in the same second are
        unique but not in creation order.
        """
        await run_hooks(self, Hook.PRE_VALIDATE)
        await run_hooks(self, Hook.PRE_SAVE)
        if self.id is None:
            self.id = ObjectId()
        data = self._to_mongo()
        async with track_query("insert", self._collection_name, type(self).__name__):
            await self.get_collection().insert_one(data)
        self._remember_stored(data)

    async def save(self) -> None:
        """Insert if never stored, otherwise ``$set`` the changed fields.

        Hooks run only when there is something to write.
        """
        if not self.is_persisted:
            await self.insert()
            return
        if not self.is_dirty:
            return

        await run_hooks(self, Hook.PRE_VALIDATE)
        await run_hooks(self, Hook.PRE_SAVE)
        changed = self.changes()
        async with track_query("save", self._collection_name, type(self).__name__, filter={"_id": self.id}):
            await self.get_collection().update_one({"_id": self.id}, {"$set": changed})
        self._remember_stored()

    async def delete(self) -> None:
        async with track_query("delete", self._collection_name, type(self).__name__, filter={"_id": self.id}):
            await self.get_collection().delete_one({"_id": self.id})
        self._stored = None
        await run_hooks(self, Hook.POST_DELETE)
