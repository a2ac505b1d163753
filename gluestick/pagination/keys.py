"""The ordered-key capability shared by every paginated entity."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from bson import ObjectId


@runtime_checkable
class HasOrderedKey(Protocol):
    """Anything that exposes a unique, creation-ordered, immutable key.

    Documents implement this through their ``_id``; plain objects can
    implement it with a property of the same name.
    """

    @property
    def ordered_key(self) -> Any: ...


def key_of(item: HasOrderedKey) -> Any:
    return item.ordered_key


def parse_ordered_key(value: Any) -> ObjectId:
    """Parse an ObjectId or its 24-character hex form.

    Raises:
        ValueError: If the value is not a well-formed ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValueError(f"Malformed cursor: {value!r}")
