from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from blogpost.api.deps import db, require_admin_session
from blogpost.core.errors import MethodNotAllowed
from blogpost.models.user import User
from blogpost.services import dashboard
from blogpost.services import posts as post_service
from blogpost.services import users as user_service
from blogpost.web.templating import form_data, form_method, redirect, render

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/dashboard")
def admin_dashboard(request: Request, s: Session = Depends(db), admin: User = Depends(require_admin_session)):
    return render(request, "admin/dashboard.html", {"actor": admin, **dashboard.admin_counts(s)})


@router.get("/users")
def list_users(request: Request, s: Session = Depends(db), admin: User = Depends(require_admin_session)):
    return render(request, "admin/users.html", {"actor": admin, "users": user_service.list_users(s)})


@router.delete("/users/{user_id}")
def delete_user(user_id: int, s: Session = Depends(db), admin: User = Depends(require_admin_session)):
    user = user_service.require_user(s, user_id)
    user_service.delete_user(s, user)
    return redirect("/admin/users", "User deleted successfully.")


@router.get("/posts")
def list_posts(request: Request, s: Session = Depends(db), admin: User = Depends(require_admin_session)):
    return render(request, "admin/posts.html", {"actor": admin, "posts": post_service.list_all(s)})


@router.delete("/posts/{post_id}")
def delete_post(post_id: int, s: Session = Depends(db), admin: User = Depends(require_admin_session)):
    # the role gate is the only check here; ownership does not apply
    post = post_service.require_post(s, post_id)
    post_service.delete_post(s, post)
    return redirect("/admin/posts", "Post deleted successfully.")


def _require_delete(form: dict) -> None:
    if form_method(form) != "DELETE":
        raise MethodNotAllowed()


@router.post("/users/{user_id}")
def delete_user_form(user_id: int, form: dict = Depends(form_data), s: Session = Depends(db), admin: User = Depends(require_admin_session)):
    _require_delete(form)
    return delete_user(user_id, s, admin)


@router.post("/posts/{post_id}")
def delete_post_form(post_id: int, form: dict = Depends(form_data), s: Session = Depends(db), admin: User = Depends(require_admin_session)):
    _require_delete(form)
    return delete_post(post_id, s, admin)
