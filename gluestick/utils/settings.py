"""Per-class options read from a Document's inner ``Settings`` class."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def default_collection_name(class_name: str) -> str:
    """``PasteRevision`` -> ``paste_revisions``, ``Category`` -> ``categories``."""
    snake = _CAMEL_BOUNDARY.sub("_", class_name).lower()
    if snake.endswith("s"):
        return snake
    if snake.endswith("y") and snake[-2:-1] not in "aeiou":
        return snake[:-1] + "ies"
    return snake + "s"


@dataclass(frozen=True)
class DocumentOptions:
    collection: str
    connection_alias: str = "default"
    indexes: tuple[Any, ...] = field(default_factory=tuple)

    @classmethod
    def resolve(cls, document_class: type) -> DocumentOptions:
        """Read ``collection``, ``connection_alias`` and ``indexes``.

        Each one is optional; the collection name falls back to the
        snake-cased, pluralized class name.
        """
        settings = getattr(document_class, "Settings", None)
        return cls(
            collection=getattr(settings, "collection", None)
            or default_collection_name(document_class.__name__),
            connection_alias=getattr(settings, "connection_alias", "default"),
            indexes=tuple(getattr(settings, "indexes", ())),
        )
