"""JSON API for the pastebin, wired onto the keyset pagination engine.

Run with:
  uvicorn gluestick.app:create_app --factory --port 3000

Authentication is handled upstream; the acting user id arrives in the
``X-User-Id`` header.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Response

from gluestick.config import GluestickSettings, get_settings
from gluestick.integrations.fastapi import (
    create_schema,
    cursor_pagination_params,
    init_app,
    paginated_body,
    register_exception_handlers,
)
from gluestick.lifecycle.observability import enable_tracing
from gluestick.models import Paste, User
from gluestick.pagination.request import PageRequest
from gluestick.utils.exceptions import DocumentNotFound

logger = logging.getLogger(__name__)

_SERVER_FIELDS = ("user_id", "created_at", "updated_at")
PasteCreate = create_schema(Paste, exclude=_SERVER_FIELDS)
PasteUpdate = create_schema(Paste, exclude=_SERVER_FIELDS, partial=True)

router = APIRouter(prefix="/api")


def current_user_id(x_user_id: Optional[str] = Header(default=None)) -> ObjectId | None:
    if x_user_id is None:
        return None
    if not ObjectId.is_valid(x_user_id):
        raise HTTPException(status_code=401, detail="Invalid X-User-Id header")
    return ObjectId(x_user_id)


async def require_user(user_id: ObjectId | None = Depends(current_user_id)) -> User:
    """The acting user; 401 when the header is missing or names no account."""
    if user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    user = await User.find_one({"_id": user_id})
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def _paste_json(paste: Paste, usernames: dict[ObjectId, str] | None = None) -> dict[str, Any]:
    data = paste.model_dump(mode="json")
    if usernames is not None:
        data["username"] = usernames.get(paste.user_id)
    return data


@router.get("/pastes")
async def list_pastes(request: PageRequest = Depends(cursor_pagination_params)):
    page = await Paste.public_feed(request)
    usernames = await User.usernames_for(paste.user_id for paste in page.items)
    return paginated_body(page, "pastes", lambda paste: _paste_json(paste, usernames))


@router.post("/pastes", status_code=201)
async def create_paste(
    params: PasteCreate,  # type: ignore[valid-type]
    user: User = Depends(require_user),
):
    paste = await Paste.create(user_id=user.id, **params.model_dump())
    logger.info("Created paste %s for user %s", paste.id, user.id)
    return {"id": str(paste.id)}


@router.get("/pastes/{paste_id}")
async def show_paste(paste_id: str):
    # Secret pastes are unlisted, not private: anyone with the id may read them.
    paste = await Paste.get(paste_id)
    return _paste_json(paste)


async def _owned_paste(paste_id: str, user: User) -> Paste:
    paste = await Paste.get(paste_id)
    if not paste.owned_by(user.id):
        raise HTTPException(status_code=403, detail="Only the owner may change this paste")
    return paste


@router.patch("/pastes/{paste_id}")
async def update_paste(
    paste_id: str,
    params: PasteUpdate,  # type: ignore[valid-type]
    user: User = Depends(require_user),
):
    paste = await _owned_paste(paste_id, user)
    for field_name, value in params.model_dump(mode="json", exclude_none=True).items():
        setattr(paste, field_name, value)
    await paste.save()
    return _paste_json(paste)


@router.delete("/pastes/{paste_id}", status_code=204)
async def delete_paste(paste_id: str, user: User = Depends(require_user)):
    paste = await _owned_paste(paste_id, user)
    await paste.delete()
    return Response(status_code=204)


@router.get("/users")
async def list_users(request: PageRequest = Depends(cursor_pagination_params)):
    page = await User.directory(request)
    return paginated_body(page, "users", lambda user: {"id": str(user.id), "username": user.username})


@router.get("/users/{username}/pastes")
async def list_user_pastes(
    username: str,
    request: PageRequest = Depends(cursor_pagination_params),
    viewer_id: ObjectId | None = Depends(current_user_id),
):
    user = await User.find_by_username(username)
    if user is None:
        raise DocumentNotFound(f"User '{username}' not found")
    page = await Paste.for_user(user.id, request, include_secret=viewer_id == user.id)
    usernames = {user.id: user.username}
    return paginated_body(page, "pastes", lambda paste: _paste_json(paste, usernames))


def create_app(settings: GluestickSettings | None = None) -> FastAPI:
    """Build the API application from settings (environment by default)."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if settings.tracing:
        enable_tracing(slow_query_ms=settings.slow_query_ms)

    app = FastAPI(title="Gluestick")
    init_app(app, settings.mongo_uri, documents=(User, Paste))
    register_exception_handlers(app)
    app.include_router(router)
    return app
