import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from blogpost.core.config import settings
from blogpost.core.errors import NotAuthenticated
from blogpost.core.security import decode_token
from blogpost.db.session import SessionLocal
from blogpost.models.user import User
from blogpost.services import policy
from blogpost.services.tokens import is_revoked
from blogpost.services.users import get_user

bearer = HTTPBearer(auto_error=False)

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def read_claims(token: str | None) -> dict | None:
    if not token:
        return None
    try:
        return decode_token(token)
    except jwt.PyJWTError:
        return None

def _actor_from_token(s: Session, token: str | None) -> User | None:
    claims = read_claims(token)
    if claims is None or is_revoked(s, claims.get("jti")):
        return None
    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        return None
    return get_user(s, user_id)

def token_claims(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> dict:
    claims = read_claims(creds.credentials if creds else None)
    if claims is None:
        raise NotAuthenticated()
    return claims

def current_actor(s: Session = Depends(db), creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> User:
    u = _actor_from_token(s, creds.credentials if creds else None)
    if u is None:
        raise NotAuthenticated()
    return u

def session_token(request: Request) -> str | None:
    return request.cookies.get(settings.session_cookie_name)

def optional_session_actor(s: Session = Depends(db), token: str | None = Depends(session_token)) -> User | None:
    return _actor_from_token(s, token)

def session_actor(u: User | None = Depends(optional_session_actor)) -> User:
    if u is None:
        raise NotAuthenticated()
    return u

def require_admin_session(u: User = Depends(session_actor)) -> User:
    return policy.require_admin(u)
