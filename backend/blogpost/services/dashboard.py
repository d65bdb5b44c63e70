from sqlalchemy.orm import Session

from blogpost.models.user import User
from blogpost.services import posts as post_service
from blogpost.services import users as user_service


def admin_counts(s: Session) -> dict:
    return {
        "total_users": user_service.count_users(s),
        "total_posts": post_service.count_posts(s),
    }


def user_counts(s: Session, user: User) -> dict:
    return {"post_count": post_service.count_for_user(s, user)}
