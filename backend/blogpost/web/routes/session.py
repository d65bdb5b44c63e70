from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from blogpost.api.deps import db, read_claims, session_token
from blogpost.core.config import settings
from blogpost.core.security import create_access_token
from blogpost.services import policy, tokens
from blogpost.services import users as user_service
from blogpost.web.templating import form_data, redirect, render

router = APIRouter(tags=["web"])


@router.get("/login")
def login_form(request: Request):
    return render(request, "login.html", {"errors": {}, "old": {}})


@router.post("/login")
def login(request: Request, form: dict = Depends(form_data), s: Session = Depends(db)):
    u = user_service.authenticate(s, form.get("email", ""), form.get("password", ""))
    if u is None:
        errors = {"email": ["These credentials do not match our records."]}
        return render(request, "login.html", {"errors": errors, "old": {"email": form.get("email", "")}}, 422)

    target = "/admin/dashboard" if policy.is_admin(u) else "/dashboard"
    resp = redirect(target)
    resp.set_cookie(
        settings.session_cookie_name,
        create_access_token(sub=str(u.id), role=u.role.value),
        max_age=settings.jwt_expires_min * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return resp


@router.post("/logout")
def logout(s: Session = Depends(db), token: str | None = Depends(session_token)):
    claims = read_claims(token)
    if claims is not None:
        tokens.revoke_token(s, claims)
    resp = redirect("/")
    resp.delete_cookie(settings.session_cookie_name)
    return resp
