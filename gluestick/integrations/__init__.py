from gluestick.integrations.fastapi import (
    CursorPagination,
    ObjectIDJSONResponse,
    create_schema,
    cursor_pagination_params,
    init_app,
    paginated_body,
    register_exception_handlers,
)

__all__ = [
    "CursorPagination",
    "ObjectIDJSONResponse",
    "create_schema",
    "cursor_pagination_params",
    "init_app",
    "paginated_body",
    "register_exception_handlers",
]
