from __future__ import annotations

from typing import Annotated, Any

from bson import ObjectId
from pydantic import PlainSerializer, PlainValidator, WithJsonSchema


def to_object_id(value: Any) -> ObjectId:
    """Coerce an ObjectId or its 24-character hex form."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError(f"Not a valid ObjectId: {value!r}")


# Stays a native ObjectId in python-mode dumps so it is stored as one;
# JSON output and schemas see the hex string.
PyObjectId = Annotated[
    ObjectId,
    PlainValidator(to_object_id),
    PlainSerializer(lambda oid: str(oid), return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "pattern": "^[0-9a-fA-F]{24}$"}),
]
