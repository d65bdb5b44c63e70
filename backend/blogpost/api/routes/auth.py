from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from blogpost.api.deps import db, current_actor, token_claims
from blogpost.core.security import create_access_token
from blogpost.models.user import Role, User
from blogpost.schemas.auth import LoginIn, TokenOut
from blogpost.schemas.common import envelope
from blogpost.schemas.user import RegisterIn, UserOut
from blogpost.services import tokens
from blogpost.services import users as user_service

router = APIRouter(prefix="/api", tags=["auth"])


def _token_out(u: User) -> TokenOut:
    token = create_access_token(sub=str(u.id), role=Role(u.role).value)
    return TokenOut(access_token=token, user=UserOut.model_validate(u))


@router.post("/register", status_code=201)
def register(body: RegisterIn, s: Session = Depends(db)):
    u = user_service.register_user(s, body)
    return envelope(_token_out(u))


@router.post("/login")
def login(body: LoginIn, s: Session = Depends(db)):
    u = user_service.authenticate(s, body.email, body.password)
    if u is None:
        return JSONResponse(status_code=401, content=envelope(message="invalid_credentials", success=False))
    return envelope(_token_out(u))


@router.post("/logout")
def logout(s: Session = Depends(db), u: User = Depends(current_actor), claims: dict = Depends(token_claims)):
    tokens.revoke_token(s, claims)
    return envelope(message="Logged out successfully")


@router.get("/user")
def me(u: User = Depends(current_actor)):
    return envelope(UserOut.model_validate(u))
