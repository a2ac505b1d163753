from gluestick.core import (
    Document,
    QuerySet,
    connect,
    disconnect,
    get_database,
    get_client,
)
from gluestick.fields import (
    PyObjectId,
    Indexed,
    IndexSpec,
    index,
)
from gluestick.lifecycle import (
    Hook,
    pre_validate,
    pre_save,
    post_delete,
    enable_tracing,
    disable_tracing,
    QueryEvent,
    add_listener,
)
from gluestick.pagination import (
    Direction,
    HasOrderedKey,
    InMemoryWindowFetcher,
    PageRequest,
    PageResponse,
    WindowFetcher,
    paginate,
    resolve_exact_page,
    resolve_page,
)
from gluestick.plugins import TimestampsMixin
from gluestick.utils import (
    GluestickError,
    DocumentNotFound,
    NotConnected,
    PaginationError,
    InvalidPageRequest,
    DocumentInvalid,
)

__all__ = [
    # Core
    "Document",
    "QuerySet",
    "connect",
    "disconnect",
    "get_database",
    "get_client",
    # Fields
    "PyObjectId",
    "Indexed",
    "IndexSpec",
    "index",
    # Lifecycle
    "Hook",
    "pre_validate",
    "pre_save",
    "post_delete",
    "enable_tracing",
    "disable_tracing",
    "QueryEvent",
    "add_listener",
    # Pagination
    "Direction",
    "HasOrderedKey",
    "InMemoryWindowFetcher",
    "PageRequest",
    "PageResponse",
    "WindowFetcher",
    "paginate",
    "resolve_exact_page",
    "resolve_page",
    # Plugins
    "TimestampsMixin",
    # Utils
    "GluestickError",
    "DocumentNotFound",
    "NotConnected",
    "PaginationError",
    "InvalidPageRequest",
    "DocumentInvalid",
]
