import logging
from datetime import datetime, timezone

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from blogpost.models.revoked_token import RevokedToken

logger = logging.getLogger(__name__)


def is_revoked(s: Session, jti: str | None) -> bool:
    if not jti:
        return False
    return s.execute(select(RevokedToken.id).where(RevokedToken.jti == jti)).first() is not None


def revoke_token(s: Session, claims: dict) -> None:
    jti = claims.get("jti")
    if not jti or is_revoked(s, jti):
        return
    exp = datetime.fromtimestamp(int(claims.get("exp", 0)), tz=timezone.utc).replace(tzinfo=None)
    _purge_expired(s)
    s.add(RevokedToken(jti=jti, user_id=_int_or_none(claims.get("sub")), expires_at=exp))
    s.commit()
    logger.info("token.revoke user_id=%s", claims.get("sub"))


def _purge_expired(s: Session) -> None:
    # expired tokens fail signature checks anyway
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    s.execute(delete(RevokedToken).where(RevokedToken.expires_at < now))


def _int_or_none(v) -> int | None:
    try:
        return int(v)
    except (TypeError, ValueError):
        return None
