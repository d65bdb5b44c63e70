from __future__ import annotations

import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blogpost.core.errors import NotFound, ValidationFailed
from blogpost.core.security import hash_password, verify_password
from blogpost.models.post import Post
from blogpost.models.user import Role, User
from blogpost.schemas.user import PasswordUpdate, ProfileUpdate, RegisterIn

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."
CURRENT_PASSWORD_WRONG = "The current password is incorrect."


def _email_taken(s: Session, email: str, exclude_id: int | None = None) -> bool:
    q = select(User.id).where(func.lower(User.email) == email.strip().lower())
    if exclude_id is not None:
        q = q.where(User.id != exclude_id)
    return s.execute(q).first() is not None


def _commit_unique_email(s: Session) -> None:
    # A concurrent writer can still win the race for the same address.
    try:
        s.commit()
    except IntegrityError:
        s.rollback()
        raise ValidationFailed.single("email", EMAIL_TAKEN)


def register_user(s: Session, data: RegisterIn, role: Role = Role.USER) -> User:
    if _email_taken(s, data.email):
        raise ValidationFailed.single("email", EMAIL_TAKEN)
    u = User(name=data.name, email=data.email, password_hash=hash_password(data.password), role=role)
    s.add(u)
    _commit_unique_email(s)
    s.refresh(u)
    logger.info("user.register id=%s", u.id)
    return u


def authenticate(s: Session, email: str, password: str) -> User | None:
    # EmailStr lowercases the domain on the way in, so compare case-insensitively
    u = s.execute(
        select(User).where(func.lower(User.email) == (email or "").strip().lower())
    ).scalar_one_or_none()
    if not u or not verify_password(password, u.password_hash):
        logger.info("login failed email=%s", email)
        return None
    return u


def get_user(s: Session, user_id: int) -> User | None:
    return s.execute(select(User).where(User.id == user_id)).scalar_one_or_none()


def require_user(s: Session, user_id: int) -> User:
    u = get_user(s, user_id)
    if u is None:
        raise NotFound("user")
    return u


def list_users(s: Session) -> list[User]:
    return list(s.execute(select(User).order_by(User.id.asc())).scalars().all())


def update_profile(s: Session, actor: User, data: ProfileUpdate) -> User:
    if _email_taken(s, data.email, exclude_id=actor.id):
        raise ValidationFailed.single("email", EMAIL_TAKEN)
    actor.name = data.name
    actor.email = data.email
    s.add(actor)
    _commit_unique_email(s)
    s.refresh(actor)
    logger.info("user.profile_update id=%s", actor.id)
    return actor


def update_password(s: Session, actor: User, data: PasswordUpdate) -> User:
    if not verify_password(data.current_password, actor.password_hash):
        raise ValidationFailed.single("current_password", CURRENT_PASSWORD_WRONG)
    actor.password_hash = hash_password(data.password)
    s.add(actor)
    s.commit()
    s.refresh(actor)
    logger.info("user.password_update id=%s", actor.id)
    return actor


def delete_user(s: Session, user: User) -> int:
    """Delete ``user`` and return how many of their posts were orphaned."""
    user_id = user.id
    orphaned = s.execute(select(func.count(Post.id)).where(Post.user_id == user_id)).scalar_one()
    s.delete(user)
    s.commit()
    logger.info("user.delete id=%s orphaned_posts=%s", user_id, orphaned)
    return orphaned


def count_users(s: Session) -> int:
    return s.execute(select(func.count(User.id))).scalar_one()
