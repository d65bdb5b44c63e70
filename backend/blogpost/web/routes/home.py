from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from blogpost.api.deps import db, optional_session_actor
from blogpost.core.config import settings
from blogpost.models.user import User
from blogpost.services import posts as post_service
from blogpost.web.templating import render

router = APIRouter(tags=["web"])


@router.get("/")
def welcome(
    request: Request,
    s: Session = Depends(db),
    actor: User | None = Depends(optional_session_actor),
    page: int = Query(default=1, ge=1),
):
    posts = post_service.list_all_public(s, page=page, per_page=settings.public_page_size)
    return render(request, "welcome.html", {"posts": posts, "actor": actor})
