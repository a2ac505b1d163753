from gluestick.utils.exceptions import (
    GluestickError,
    DocumentNotFound,
    NotConnected,
    PaginationError,
    InvalidPageRequest,
    DocumentInvalid,
)
from gluestick.utils.types import (
    DocumentData,
    FilterSpec,
    SortSpec,
    DocumentId,
    merge_filters,
    merge_key_condition,
)

__all__ = [
    "GluestickError",
    "DocumentNotFound",
    "NotConnected",
    "PaginationError",
    "InvalidPageRequest",
    "DocumentInvalid",
    "DocumentData",
    "FilterSpec",
    "SortSpec",
    "DocumentId",
    "merge_filters",
    "merge_key_condition",
]
