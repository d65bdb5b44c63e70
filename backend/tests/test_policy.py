import pytest

from blogpost.core.errors import Forbidden
from blogpost.models.post import Post
from blogpost.models.user import Role, User
from blogpost.services import policy
from blogpost.services.policy import PostAction


def _user(uid: int, role: Role = Role.USER) -> User:
    return User(id=uid, name=f"u{uid}", email=f"u{uid}@example.com", password_hash="x", role=role)


def _post(owner_id: int | None) -> Post:
    return Post(id=10, title="t", body="b", user_id=owner_id)


def test_owner_can_view_update_delete():
    owner = _user(1)
    p = _post(1)
    for action in PostAction:
        assert policy.can(owner, action, p)


def test_other_user_can_view_but_not_write():
    other = _user(2)
    p = _post(1)
    assert policy.can(other, PostAction.VIEW, p)
    assert not policy.can(other, PostAction.UPDATE, p)
    assert not policy.can(other, PostAction.DELETE, p)


def test_admin_has_no_bypass_on_post_writes():
    admin = _user(3, Role.ADMIN)
    p = _post(1)
    assert not policy.can(admin, PostAction.UPDATE, p)
    assert not policy.can(admin, PostAction.DELETE, p)


def test_orphaned_post_is_writable_by_nobody():
    p = _post(None)
    assert not policy.can(_user(1), PostAction.UPDATE, p)
    assert not policy.can(_user(1, Role.ADMIN), PostAction.DELETE, p)
    assert policy.can(_user(1), PostAction.VIEW, p)


def test_anonymous_may_only_view():
    p = _post(1)
    assert policy.can(None, PostAction.VIEW, p)
    assert not policy.can(None, PostAction.UPDATE, p)


def test_authorize_raises_forbidden():
    with pytest.raises(Forbidden):
        policy.authorize(_user(2), PostAction.DELETE, _post(1))
    policy.authorize(_user(1), PostAction.DELETE, _post(1))


def test_role_gate():
    admin = _user(1, Role.ADMIN)
    assert policy.require_admin(admin) is admin
    assert policy.is_admin(admin)
    assert not policy.is_admin(_user(2))
    assert not policy.is_admin(None)
    with pytest.raises(Forbidden):
        policy.require_admin(_user(2))
    with pytest.raises(Forbidden):
        policy.require_admin(None)


def test_role_accepts_stored_string_values():
    u = _user(1)
    u.role = "admin"
    assert policy.is_admin(u)


def test_unknown_role_fails_closed():
    u = _user(1)
    u.role = "Admin"
    with pytest.raises(ValueError):
        policy.is_admin(u)
