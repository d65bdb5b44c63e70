from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session
from blogpost.api.deps import db, current_actor
from blogpost.core.config import settings
from blogpost.models.user import User
from blogpost.schemas.common import envelope, validate_or_fail
from blogpost.schemas.post import Page, PostCreate, PostOut, PostPatch
from blogpost.services import posts as post_service
from blogpost.services.policy import PostAction, authorize

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("")
def list_posts(
    s: Session = Depends(db),
    u: User = Depends(current_actor),
    page: int = Query(default=1, ge=1),
    per_page: int | None = Query(default=None, ge=1),
):
    pg = post_service.list_for_user(s, u, page=page, per_page=per_page or settings.api_page_size)
    return envelope(Page[PostOut].model_validate(pg, from_attributes=True))


@router.post("", status_code=201)
def create_post(body: PostCreate, s: Session = Depends(db), u: User = Depends(current_actor)):
    p = post_service.create_post(s, u, body)
    return envelope(PostOut.model_validate(p))


@router.get("/{post_id}")
def show_post(post_id: int, s: Session = Depends(db), u: User = Depends(current_actor)):
    p = post_service.require_post(s, post_id)
    authorize(u, PostAction.VIEW, p)
    return envelope(PostOut.model_validate(p))


@router.put("/{post_id}")
@router.patch("/{post_id}")
def update_post(
    post_id: int,
    payload: dict[str, Any] | None = Body(default=None),
    s: Session = Depends(db),
    u: User = Depends(current_actor),
):
    p = post_service.require_post(s, post_id)
    # ownership is checked before the payload is looked at
    authorize(u, PostAction.UPDATE, p)
    patch = validate_or_fail(PostPatch, payload)
    p = post_service.update_post(s, p, patch)
    return envelope(PostOut.model_validate(p))


@router.delete("/{post_id}")
def delete_post(post_id: int, s: Session = Depends(db), u: User = Depends(current_actor)):
    p = post_service.require_post(s, post_id)
    authorize(u, PostAction.DELETE, p)
    post_service.delete_post(s, p)
    return envelope(message="Post deleted successfully")
