from gluestick.fields.base import PyObjectId, to_object_id
from gluestick.fields.indexed import Indexed, IndexSpec, declared_indexes, index

__all__ = [
    "PyObjectId",
    "to_object_id",
    "Indexed",
    "IndexSpec",
    "declared_indexes",
    "index",
]
