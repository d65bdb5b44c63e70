from typing import Callable

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from blogpost.api.deps import db, require_admin_session, session_actor
from blogpost.core.errors import ValidationFailed
from blogpost.models.user import User
from blogpost.schemas.common import validate_or_fail
from blogpost.schemas.user import PasswordUpdate, ProfileUpdate
from blogpost.services import users as user_service
from blogpost.web.templating import form_data, payload, redirect, render

PROFILE_FIELDS = ("name", "email")
PASSWORD_FIELDS = ("current_password", "password", "password_confirmation")


def build_profile_router(edit_path: str, update_path: str, gate: Callable, template: str) -> APIRouter:
    router = APIRouter(tags=["web"])

    def _form(request: Request, u: User, errors: dict | None = None, old: dict | None = None, status_code: int = 200):
        ctx = {"actor": u, "errors": errors or {}, "old": old or {}, "update_path": update_path}
        return render(request, template, ctx, status_code)

    @router.get(edit_path)
    def edit(request: Request, u: User = Depends(gate)):
        return _form(request, u)

    @router.api_route(update_path, methods=["PUT", "POST"])
    def update(request: Request, form: dict = Depends(form_data), s: Session = Depends(db), u: User = Depends(gate)):
        old = payload(form, *PROFILE_FIELDS)
        try:
            user_service.update_profile(s, u, validate_or_fail(ProfileUpdate, old))
        except ValidationFailed as e:
            return _form(request, u, e.errors, old, 422)
        return redirect(edit_path, "Profile updated successfully!")

    @router.api_route(f"{update_path}/password", methods=["PUT", "POST"])
    def update_password(request: Request, form: dict = Depends(form_data), s: Session = Depends(db), u: User = Depends(gate)):
        try:
            user_service.update_password(s, u, validate_or_fail(PasswordUpdate, payload(form, *PASSWORD_FIELDS)))
        except ValidationFailed as e:
            # passwords are never echoed back into the form
            return _form(request, u, e.errors, None, 422)
        return redirect(edit_path, "Password updated successfully!")

    return router


user_router = build_profile_router("/profile/edit", "/profile", session_actor, "profile/edit.html")
admin_router = build_profile_router("/admin/profile", "/admin/profile", require_admin_session, "profile/edit.html")
