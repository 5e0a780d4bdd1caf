# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from jokebox.core.security import Caller, create_access_token
from jokebox.db.session import Base
from jokebox.db.session import get_db as app_get_session
from jokebox.main import app as fastapi_app
from jokebox.models import Comment, Post
from jokebox.services.content_service import ContentService
from jokebox.services.interaction_service import InteractionService

TEST_DB_URL = "sqlite://"

AUTHOR_ID = 1
OTHER_USER_ID = 2
THIRD_USER_ID = 3
ADMIN_ID = 99


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Services commit, so each test gets a real session and the tables are
    # wiped afterwards instead of rolling back an outer transaction.
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _headers(user_id: int, *, is_admin: bool = False) -> dict[str, str]:
    token = create_access_token(user_id, is_admin=is_admin)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_token() -> dict[str, str]:
    """Return authorization headers for the post author."""
    return _headers(AUTHOR_ID)


@pytest.fixture()
def other_auth_token() -> dict[str, str]:
    """Return authorization headers for a second, unprivileged user."""
    return _headers(OTHER_USER_ID)


@pytest.fixture()
def third_auth_token() -> dict[str, str]:
    """Return authorization headers for a bystander who never interacts."""
    return _headers(THIRD_USER_ID)


@pytest.fixture()
def admin_auth_token() -> dict[str, str]:
    """Return authorization headers for a privileged user."""
    return _headers(ADMIN_ID, is_admin=True)


@pytest.fixture()
def author() -> Caller:
    return Caller(user_id=AUTHOR_ID)


@pytest.fixture()
def other_user() -> Caller:
    return Caller(user_id=OTHER_USER_ID)


@pytest.fixture()
def admin() -> Caller:
    return Caller(user_id=ADMIN_ID, is_privileged=True)


@pytest.fixture()
def content_service(db_session: Session) -> ContentService:
    return ContentService(db_session)


@pytest.fixture()
def interaction_service(db_session: Session) -> InteractionService:
    return InteractionService(db_session)


@pytest.fixture()
def test_post(db_session: Session) -> Iterator[Post]:
    """Create a baseline post authored by ``AUTHOR_ID``."""
    post = Post(body="Why did the chicken cross the road?", author_id=AUTHOR_ID)
    db_session.add(post)
    db_session.commit()
    yield post


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    """Return a helper that persists a comment on a post."""

    def _make(
        post: Post,
        body: str = "To get to the other side.",
        *,
        author_id: int = OTHER_USER_ID,
        parent: Comment | None = None,
        **kwargs,
    ) -> Comment:
        comment = Comment(
            post_id=post.id,
            parent_id=parent.id if parent is not None else None,
            author_id=author_id,
            body=body,
            **kwargs,
        )
        db_session.add(comment)
        db_session.commit()
        return comment

    return _make
