from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from blogpost.api.deps import db, session_actor
from blogpost.core.config import settings
from blogpost.core.errors import MethodNotAllowed, ValidationFailed
from blogpost.models.user import User
from blogpost.schemas.common import validate_or_fail
from blogpost.schemas.post import PostCreate, PostPatch
from blogpost.services import posts as post_service
from blogpost.services.policy import PostAction, authorize
from blogpost.web.templating import form_data, form_method, payload, redirect, render

router = APIRouter(prefix="/posts", tags=["web"])

FIELDS = ("title", "body")


@router.get("")
def index(request: Request, s: Session = Depends(db), u: User = Depends(session_actor)):
    posts = post_service.list_for_user(s, u, per_page=settings.user_posts_page_size)
    return render(request, "posts/index.html", {"posts": posts, "actor": u})


@router.get("/create")
def create_form(request: Request, u: User = Depends(session_actor)):
    return render(request, "posts/form.html", {"post": None, "errors": {}, "old": {}, "actor": u})


@router.post("")
def store(request: Request, form: dict = Depends(form_data), s: Session = Depends(db), u: User = Depends(session_actor)):
    try:
        data = validate_or_fail(PostCreate, payload(form, *FIELDS))
    except ValidationFailed as e:
        ctx = {"post": None, "errors": e.errors, "old": payload(form, *FIELDS), "actor": u}
        return render(request, "posts/form.html", ctx, 422)
    post_service.create_post(s, u, data)
    return redirect("/posts", "Post created successfully!")


@router.get("/{post_id}")
def show(post_id: int, request: Request, s: Session = Depends(db), u: User = Depends(session_actor)):
    p = post_service.require_post(s, post_id)
    authorize(u, PostAction.VIEW, p)
    return render(request, "posts/show.html", {"post": p, "actor": u})


@router.get("/{post_id}/edit")
def edit_form(post_id: int, request: Request, s: Session = Depends(db), u: User = Depends(session_actor)):
    p = post_service.require_post(s, post_id)
    authorize(u, PostAction.UPDATE, p)
    return render(request, "posts/form.html", {"post": p, "errors": {}, "old": {}, "actor": u})


def _update(request: Request, post_id: int, form: dict, s: Session, u: User):
    p = post_service.require_post(s, post_id)
    authorize(u, PostAction.UPDATE, p)
    try:
        patch = validate_or_fail(PostPatch, payload(form, *FIELDS))
    except ValidationFailed as e:
        ctx = {"post": p, "errors": e.errors, "old": payload(form, *FIELDS), "actor": u}
        return render(request, "posts/form.html", ctx, 422)
    post_service.update_post(s, p, patch)
    return redirect(f"/posts/{p.id}", "Post updated successfully!")


def _destroy(post_id: int, s: Session, u: User):
    p = post_service.require_post(s, post_id)
    authorize(u, PostAction.DELETE, p)
    post_service.delete_post(s, p)
    return redirect("/posts", "Post deleted successfully!")


@router.put("/{post_id}")
def update(post_id: int, request: Request, form: dict = Depends(form_data), s: Session = Depends(db), u: User = Depends(session_actor)):
    return _update(request, post_id, form, s, u)


@router.delete("/{post_id}")
def destroy(post_id: int, s: Session = Depends(db), u: User = Depends(session_actor)):
    return _destroy(post_id, s, u)


@router.post("/{post_id}")
def method_override(post_id: int, request: Request, form: dict = Depends(form_data), s: Session = Depends(db), u: User = Depends(session_actor)):
    method = form_method(form)
    if method in ("PUT", "PATCH"):
        return _update(request, post_id, form, s, u)
    if method == "DELETE":
        return _destroy(post_id, s, u)
    raise MethodNotAllowed()
