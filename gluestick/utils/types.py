from typing import Any, TypeVar
from bson import ObjectId

# Type aliases for better clarity
DocumentData = dict[str, Any]
FilterSpec = dict[str, Any]
SortSpec = list[tuple[str, int]]
DocumentId = ObjectId | str

# Generic type variable for documents
T = TypeVar("T")


def merge_filters(
    base: FilterSpec | None = None,
    override: FilterSpec | None = None,
    **kwargs: Any
) -> FilterSpec:
    """Merge multiple filter dictionaries with proper precedence.

    Args:
        base: Base filter dict
        override: Override filter dict (takes precedence over base)
        **kwargs: Additional filters (highest precedence)

    Returns:
        Merged filter dictionary
    """
    return {**(base or {}), **(override or {}), **kwargs}


def merge_key_condition(filter: FilterSpec, key_field: str, condition: FilterSpec | None) -> FilterSpec:
    """Add a key range condition without discarding one already on the filter.

    Two conditions on the same key field are combined with ``$and`` so that
    an existing ``_id`` restriction still applies inside the window.
    """
    if not condition:
        return dict(filter)
    merged = dict(filter)
    existing = merged.pop(key_field, None)
    if existing is None:
        merged[key_field] = condition
        return merged
    clauses = [{key_field: existing}, {key_field: condition}]
    if "$and" in merged:
        clauses = list(merged["$and"]) + clauses
    merged["$and"] = clauses
    return merged
