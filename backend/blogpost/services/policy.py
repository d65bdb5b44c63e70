from __future__ import annotations

import enum

from blogpost.core.errors import Forbidden
from blogpost.models.post import Post
from blogpost.models.user import Role, User


class PostAction(str, enum.Enum):
    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"


def is_admin(actor: User | None) -> bool:
    if actor is None:
        return False
    role = Role(actor.role)
    if role is Role.ADMIN:
        return True
    if role is Role.USER:
        return False
    raise AssertionError(f"unhandled role {role!r}")


def is_owner(actor: User | None, post: Post) -> bool:
    return actor is not None and post.user_id is not None and actor.id == post.user_id


def can(actor: User | None, action: PostAction, post: Post) -> bool:
    # Administrators get no implicit bypass here; the admin area has its own routes.
    if action is PostAction.VIEW:
        return True
    if action in (PostAction.UPDATE, PostAction.DELETE):
        return is_owner(actor, post)
    raise AssertionError(f"unhandled action {action!r}")


def authorize(actor: User | None, action: PostAction, post: Post) -> None:
    if not can(actor, action, post):
        raise Forbidden()


def require_admin(actor: User | None) -> User:
    if not is_admin(actor):
        raise Forbidden()
    return actor
