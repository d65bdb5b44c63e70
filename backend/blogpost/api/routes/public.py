from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from blogpost.api.deps import db
from blogpost.core.config import settings
from blogpost.schemas.common import envelope
from blogpost.schemas.post import Page, PostWithOwnerOut
from blogpost.services import posts as post_service

router = APIRouter(prefix="/api/public/posts", tags=["public"])


@router.get("")
def public_index(
    s: Session = Depends(db),
    page: int = Query(default=1, ge=1),
    per_page: int | None = Query(default=None, ge=1),
):
    pg = post_service.list_all_public(s, page=page, per_page=per_page or settings.api_page_size)
    return envelope(Page[PostWithOwnerOut].model_validate(pg, from_attributes=True))


@router.get("/{post_id}")
def public_show(post_id: int, s: Session = Depends(db)):
    p = post_service.require_post(s, post_id)
    return envelope(PostWithOwnerOut.model_validate(p))
