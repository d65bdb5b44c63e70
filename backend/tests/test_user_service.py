import pytest
from sqlalchemy import select

from blogpost.core.errors import ValidationFailed
from blogpost.core.security import verify_password
from blogpost.models.post import Post
from blogpost.models.user import Role
from blogpost.schemas.common import validate_or_fail
from blogpost.schemas.user import PasswordUpdate, ProfileUpdate, RegisterIn
from blogpost.services import dashboard
from blogpost.services import users as user_service

from conftest import PASSWORD, mk_post, mk_user


def _pw(current: str, new: str, confirm: str | None = None) -> dict:
    return {"current_password": current, "password": new, "password_confirmation": new if confirm is None else confirm}


def test_register_hashes_password_and_defaults_role(session):
    data = validate_or_fail(
        RegisterIn,
        {"name": "Ann", "email": "ann@example.com", "password": "s3cretpass", "password_confirmation": "s3cretpass"},
    )
    u = user_service.register_user(session, data)
    assert u.role is Role.USER
    assert u.password_hash != "s3cretpass"
    assert verify_password("s3cretpass", u.password_hash)


def test_register_rejects_taken_email(session):
    mk_user(session, email="dup@example.com")
    data = validate_or_fail(
        RegisterIn,
        {"name": "X", "email": "dup@example.com", "password": "longenough", "password_confirmation": "longenough"},
    )
    with pytest.raises(ValidationFailed) as ei:
        user_service.register_user(session, data)
    assert ei.value.errors == {"email": ["The email has already been taken."]}


def test_authenticate(session):
    u = mk_user(session, email="login@example.com")
    assert user_service.authenticate(session, "login@example.com", PASSWORD).id == u.id
    assert user_service.authenticate(session, "login@example.com", "wrong-password") is None
    assert user_service.authenticate(session, "nobody@example.com", PASSWORD) is None


def test_update_profile_to_own_email_succeeds(session):
    u = mk_user(session, email="me@example.com")
    u = user_service.update_profile(session, u, ProfileUpdate(name="New Name", email="me@example.com"))
    assert u.name == "New Name"
    assert u.email == "me@example.com"


def test_update_profile_to_someone_elses_email_fails(session):
    mk_user(session, email="taken@example.com")
    u = mk_user(session, name="Original", email="mine@example.com")
    with pytest.raises(ValidationFailed) as ei:
        user_service.update_profile(session, u, ProfileUpdate(name="Changed", email="taken@example.com"))
    assert "email" in ei.value.errors
    session.refresh(u)
    assert (u.name, u.email) == ("Original", "mine@example.com")


def test_profile_validation_rules():
    with pytest.raises(ValidationFailed) as ei:
        validate_or_fail(ProfileUpdate, {"name": "", "email": "not-an-email"})
    assert set(ei.value.errors) == {"name", "email"}
    with pytest.raises(ValidationFailed) as ei:
        validate_or_fail(ProfileUpdate, {"name": "n" * 256, "email": "ok@example.com"})
    assert list(ei.value.errors) == ["name"]


def test_update_password_requires_correct_current_password(session):
    u = mk_user(session)
    old_hash = u.password_hash
    with pytest.raises(ValidationFailed) as ei:
        user_service.update_password(session, u, PasswordUpdate(**_pw("not-it", "brandnewpass")))
    assert ei.value.errors == {"current_password": ["The current password is incorrect."]}
    session.refresh(u)
    assert u.password_hash == old_hash


def test_update_password_replaces_hash(session):
    u = mk_user(session)
    u = user_service.update_password(session, u, PasswordUpdate(**_pw(PASSWORD, "brandnewpass")))
    assert verify_password("brandnewpass", u.password_hash)
    assert not verify_password(PASSWORD, u.password_hash)


def test_new_password_rules():
    with pytest.raises(ValidationFailed) as ei:
        validate_or_fail(PasswordUpdate, _pw(PASSWORD, "short"))
    assert list(ei.value.errors) == ["password"]
    with pytest.raises(ValidationFailed) as ei:
        validate_or_fail(PasswordUpdate, _pw(PASSWORD, "longenough1", "longenough2"))
    assert ei.value.errors == {"password_confirmation": ["The password field confirmation does not match."]}


def test_delete_user_orphans_posts(session):
    u = mk_user(session)
    p1 = mk_post(session, u)
    p2 = mk_post(session, u)
    before = dashboard.admin_counts(session)["total_posts"]

    assert user_service.delete_user(session, u) == 2

    assert dashboard.admin_counts(session)["total_posts"] == before
    rows = session.execute(select(Post).where(Post.id.in_([p1.id, p2.id]))).scalars().all()
    assert len(rows) == 2
    assert all(r.user_id is None for r in rows)
    assert all(r.owner_name == "Unknown" for r in rows)


def test_list_and_count_users(session):
    before = user_service.count_users(session)
    a = mk_user(session)
    b = mk_user(session, role=Role.ADMIN)
    ids = [u.id for u in user_service.list_users(session)]
    assert a.id in ids and b.id in ids
    assert user_service.count_users(session) == before + 2


def test_user_dashboard_counts_only_own_posts(session):
    a = mk_user(session)
    b = mk_user(session)
    mk_post(session, a)
    mk_post(session, a)
    mk_post(session, b)
    assert dashboard.user_counts(session, a) == {"post_count": 2}


def test_email_uniqueness_ignores_case(session):
    mk_user(session, email="Mixed@example.com")
    data = validate_or_fail(
        RegisterIn,
        {"name": "Y", "email": "mixed@EXAMPLE.com", "password": "longenough", "password_confirmation": "longenough"},
    )
    with pytest.raises(ValidationFailed) as ei:
        user_service.register_user(session, data)
    assert ei.value.errors == {"email": ["The email has already been taken."]}
    assert user_service.authenticate(session, "MIXED@example.com", PASSWORD) is not None
