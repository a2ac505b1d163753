"""Index declarations for Document classes.

A field annotated with ``Indexed`` gets a single-key index. Compound and
partial indexes go in ``Settings.indexes``, built with ``index()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from pymongo import ASCENDING, DESCENDING


@dataclass(frozen=True)
class IndexSpec:
    keys: tuple[tuple[str, int], ...]
    unique: bool = False
    partial: dict[str, Any] | None = None
    name: str | None = None

    def create_args(self) -> tuple[list[tuple[str, int]], dict[str, Any]]:
        """Positional keys and keyword options for ``create_index``."""
        options: dict[str, Any] = {}
        if self.unique:
            options["unique"] = True
        if self.partial:
            options["partialFilterExpression"] = self.partial
        if self.name:
            options["name"] = self.name
        return list(self.keys), options


def index(
    *fields: str,
    unique: bool = False,
    partial: dict[str, Any] | None = None,
    name: str | None = None,
) -> IndexSpec:
    """Build an IndexSpec from sort-style names, ``-`` meaning descending.

    Example: index("user_id", "-_id", name="user_pastes")
    """
    if not fields:
        raise ValueError("An index needs at least one field")
    keys = tuple(
        (field[1:], DESCENDING) if field.startswith("-") else (field, ASCENDING)
        for field in fields
    )
    return IndexSpec(keys, unique=unique, partial=partial, name=name)


@dataclass(frozen=True)
class Indexed:
    """Annotation marker for a single-field index.

    Usage: username: Annotated[str, Indexed(unique=True)] = Field(max_length=32)
    """

    unique: bool = False
    descending: bool = False


def declared_indexes(document_class: Any) -> Iterator[IndexSpec]:
    """Yield field-level indexes, then the ones listed in ``Settings.indexes``."""
    for field_name, info in document_class.model_fields.items():
        for marker in info.metadata:
            if isinstance(marker, Indexed):
                direction = DESCENDING if marker.descending else ASCENDING
                key = ((info.alias or field_name, direction),)
                yield IndexSpec(key, unique=marker.unique)
    yield from document_class._options.indexes
