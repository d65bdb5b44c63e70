from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from blogpost.core.config import settings
from blogpost.core.errors import NotFound
from blogpost.models.post import Post
from blogpost.models.user import User
from blogpost.schemas.post import PostCreate, PostPatch

logger = logging.getLogger(__name__)


@dataclass
class Paginated:
    data: list[Post]
    current_page: int
    per_page: int
    total: int
    last_page: int


def _newest_first(q):
    return q.order_by(Post.created_at.desc(), Post.id.desc())


def _clamp(page: int, per_page: int) -> tuple[int, int]:
    page = max(int(page or 1), 1)
    per_page = min(max(int(per_page or 1), 1), settings.max_page_size)
    return page, per_page


def _paginate(s: Session, q, count_q, page: int, per_page: int) -> Paginated:
    page, per_page = _clamp(page, per_page)
    total = s.execute(count_q).scalar_one()
    rows = s.execute(q.limit(per_page).offset((page - 1) * per_page)).scalars().all()
    return Paginated(
        data=list(rows),
        current_page=page,
        per_page=per_page,
        total=total,
        last_page=max(math.ceil(total / per_page), 1),
    )


def list_for_user(s: Session, user: User, page: int = 1, per_page: int = 15) -> Paginated:
    q = _newest_first(select(Post).where(Post.user_id == user.id))
    count_q = select(func.count(Post.id)).where(Post.user_id == user.id)
    return _paginate(s, q, count_q, page, per_page)


def list_all_public(s: Session, page: int = 1, per_page: int = 10) -> Paginated:
    q = _newest_first(select(Post).options(selectinload(Post.owner)))
    return _paginate(s, q, select(func.count(Post.id)), page, per_page)


def list_all(s: Session) -> list[Post]:
    q = _newest_first(select(Post).options(selectinload(Post.owner)))
    return list(s.execute(q).scalars().all())


def get_post(s: Session, post_id: int) -> Post | None:
    return s.execute(select(Post).where(Post.id == post_id)).scalar_one_or_none()


def require_post(s: Session, post_id: int) -> Post:
    p = get_post(s, post_id)
    if p is None:
        raise NotFound("post")
    return p


def create_post(s: Session, actor: User, data: PostCreate) -> Post:
    p = Post(title=data.title, body=data.body, user_id=actor.id)
    s.add(p)
    s.commit()
    s.refresh(p)
    logger.info("post.create id=%s user_id=%s", p.id, actor.id)
    return p


def update_post(s: Session, post: Post, patch: PostPatch) -> Post:
    changed = False
    if patch.title is not None and patch.title != post.title:
        post.title = patch.title
        changed = True
    if patch.body is not None and patch.body != post.body:
        post.body = patch.body
        changed = True
    if changed:
        s.add(post)
        s.commit()
        logger.info("post.update id=%s", post.id)
    s.refresh(post)
    return post


def delete_post(s: Session, post: Post) -> bool:
    post_id = post.id
    s.delete(post)
    s.commit()
    logger.info("post.delete id=%s", post_id)
    return True


def count_posts(s: Session) -> int:
    return s.execute(select(func.count(Post.id))).scalar_one()


def count_for_user(s: Session, user: User) -> int:
    return s.execute(select(func.count(Post.id)).where(Post.user_id == user.id)).scalar_one()
