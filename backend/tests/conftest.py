from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blogpost.api.deps import db
from blogpost.core.config import settings
from blogpost.core.security import create_access_token, hash_password
from blogpost.db.session import init_db
from blogpost.main import app
from blogpost.models.post import Post
from blogpost.models.user import Role, User

PASSWORD = "password123"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture(scope="session")
def engine():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(eng)
    return eng


@pytest.fixture()
def session(engine):
    connection = engine.connect()
    trans = connection.begin()
    Session = sessionmaker(bind=connection, autoflush=False, autocommit=False, future=True)
    s = Session()
    try:
        yield s
    finally:
        s.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def client(session):
    def _db():
        yield session

    app.dependency_overrides[db] = _db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def mk_user(session, name: str | None = None, role: Role = Role.USER, email: str | None = None) -> User:
    tag = uuid4().hex[:8]
    u = User(
        name=name or f"User {tag}",
        email=email or f"user-{tag}@example.com",
        password_hash=PASSWORD_HASH,
        role=role,
    )
    session.add(u)
    session.commit()
    session.refresh(u)
    return u


def mk_post(session, owner: User | None, title: str = "A title", body: str = "Some body text.") -> Post:
    p = Post(title=title, body=body, user_id=owner.id if owner else None)
    session.add(p)
    session.commit()
    session.refresh(p)
    return p


def bearer(u: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(u.id), u.role.value)}"}


def act_as(client: TestClient, u: User) -> TestClient:
    client.cookies.set(settings.session_cookie_name, create_access_token(str(u.id), u.role.value))
    return client
