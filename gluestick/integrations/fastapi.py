from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any, Callable, Iterable, Optional

from bson import ObjectId
from fastapi import Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, create_model

from gluestick.core.connection import connect, disconnect
from gluestick.pagination.request import PageRequest
from gluestick.pagination.response import PageResponse
from gluestick.utils.exceptions import DocumentInvalid, DocumentNotFound, GluestickError, InvalidPageRequest

logger = logging.getLogger(__name__)


class ObjectIDJSONResponse(JSONResponse):
    """JSONResponse that serializes ObjectId to its hex string."""

    def render(self, content: Any) -> bytes:
        def default_handler(obj: Any) -> Any:
            if isinstance(obj, ObjectId):
                return str(obj)
            raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

        return json.dumps(content, default=default_handler, separators=(",", ":")).encode("utf-8")


def init_app(app: Any, uri: str, alias: str = "default", documents: Iterable[type] = ()) -> Any:
    """Initialize a FastAPI app with Gluestick.

    Sets up:
    - MongoDB connection/disconnection in app lifespan
    - Index creation for the given Document classes on startup
    - Custom JSON encoder for ObjectId serialization

    Args:
        app: FastAPI application instance
        uri: MongoDB connection URI
        alias: Connection alias for multi-connection support (default: "default")
        documents: Document classes whose indexes are ensured at startup
    """
    app.default_response_class = ObjectIDJSONResponse
    app.router.default_response_class = ObjectIDJSONResponse
    documents = list(documents)

    original_lifespan = getattr(app, "router", app).lifespan_context

    @asynccontextmanager
    async def lifespan(a: Any):
        await connect(uri, alias=alias)
        for document_class in documents:
            names = await document_class.ensure_indexes()
            logger.debug("Ensured indexes %s on %s", names, document_class.__name__)
        try:
            if original_lifespan is not None:
                async with original_lifespan(a) as state:
                    yield state
            else:
                yield
        finally:
            await disconnect(alias)

    app.router.lifespan_context = lifespan
    return app


def register_exception_handlers(app: Any) -> None:
    """Register gluestick exception handlers on a FastAPI app."""

    @app.exception_handler(InvalidPageRequest)
    async def invalid_page_request_handler(request: Any, exc: InvalidPageRequest):
        return JSONResponse(status_code=400, content={"detail": str(exc), "errors": exc.errors})

    @app.exception_handler(DocumentNotFound)
    async def document_not_found_handler(request: Any, exc: DocumentNotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(DocumentInvalid)
    async def document_invalid_handler(request: Any, exc: DocumentInvalid):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(GluestickError)
    async def gluestick_error_handler(request: Any, exc: GluestickError):
        logger.error("Unhandled gluestick error: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})


def cursor_pagination_params(
    cursor: Optional[str] = Query(default=None),
    dir: Optional[str] = Query(default=None),
    per_page: Optional[str] = Query(default=None),
    prev_page: Optional[str] = Query(default=None),
    next_page: Optional[str] = Query(default=None),
) -> PageRequest:
    """FastAPI dependency turning query parameters into a PageRequest.

    Accepts ``cursor``/``dir``/``per_page`` as well as the link form
    ``prev_page``/``next_page``. Values are taken as raw strings so bad
    input is reported as InvalidPageRequest (HTTP 400) instead of a
    framework validation error.
    """
    # An empty cursor alongside a link is treated as absent so the link wins.
    if not cursor and (prev_page or next_page):
        return PageRequest.from_links(prev_page=prev_page, next_page=next_page, per_page=per_page)
    return PageRequest.parse(cursor=cursor, direction=dir, limit=per_page)


class CursorPagination(BaseModel):
    """The ``pagination`` object of a cursor-paginated response body."""

    prev_page: Optional[str] = None
    next_page: Optional[str] = None

    @classmethod
    def from_page(cls, page: PageResponse) -> CursorPagination:
        return cls(**page.pagination())


def paginated_body(
    page: PageResponse,
    key: str = "pastes",
    serialize: Callable[[Any], Any] | None = None,
) -> dict[str, Any]:
    """Build ``{key: [...], "pagination": {...}}`` for a resolved page."""
    if serialize is None:
        serialize = _dump
    return {
        key: [serialize(item) for item in page.items],
        "pagination": CursorPagination.from_page(page).model_dump(),
    }


def _dump(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_dump(mode="json")
    return item


def create_schema(
    document_class: type,
    *,
    name: str | None = None,
    exclude: Iterable[str] = (),
    partial: bool = False,
) -> type[BaseModel]:
    """Generate a request-body model from a Document class, excluding id.

    With ``partial=True`` every field becomes optional and defaults to
    None, for PATCH-style bodies dumped with ``exclude_none``.
    """
    model_name = name or f"{document_class.__name__}{'Update' if partial else 'Create'}"
    skipped = {"id", *exclude}
    fields: dict[str, Any] = {}

    for field_name, field_info in document_class.model_fields.items():
        if field_name in skipped:
            continue
        if partial:
            # Constraints move inside the Optional so None skips them.
            inner = field_info.annotation
            if field_info.metadata:
                inner = Annotated[(inner, *field_info.metadata)]
            fields[field_name] = (Optional[inner], None)
        else:
            # Reusing the FieldInfo keeps defaults and length constraints.
            fields[field_name] = (field_info.annotation, field_info)

    return create_model(model_name, **fields)
