# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from novel_admin.api.v1.dependencies import get_storage
from novel_admin.core.security import create_access_token, hash_password
from novel_admin.db.session import Base
from novel_admin.db.session import get_db as app_get_session
from novel_admin.db.time import utcnow
from novel_admin.main import app as fastapi_app
from novel_admin.models import (
    AuthUser,
    Book,
    ForumCategory,
    ForumPost,
    ForumThread,
    UserProfile,
    UserStats,
)
from novel_admin.services.gateway import DataGateway
from novel_admin.services.storage import ObjectStorage

TEST_DB_URL = "sqlite://"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct horse battery staple"

_USER_COUNTER = count(1)


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

        # The gateway commits, so every test starts from empty tables.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def gateway(db_session: Session) -> DataGateway:
    return DataGateway(db_session)


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
def storage(app: FastAPI, tmp_path) -> Iterator[ObjectStorage]:
    """Point uploads at a temporary directory."""
    backend = ObjectStorage(tmp_path / "storage", "http://test/storage")
    app.dependency_overrides[get_storage] = lambda: backend
    try:
        yield backend
    finally:
        app.dependency_overrides.pop(get_storage, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., UserProfile]:
    """Create a persisted account with profile and stats."""

    def _make_user(
        username: str | None = None,
        *,
        role: str = "user",
        email: str | None = None,
        password: str = "secret-password",
        level: int = 1,
        **stats: int,
    ) -> UserProfile:
        index = next(_USER_COUNTER)
        username = username or f"reader{index}"
        auth_user = AuthUser(
            email=(email or f"{username}@example.com").lower(),
            password_hash=hash_password(password),
        )
        db_session.add(auth_user)
        db_session.flush()
        profile = UserProfile(id=auth_user.id, username=username, role=role, level=level)
        profile.stats = UserStats(user_id=auth_user.id, **stats)
        db_session.add(profile)
        db_session.commit()
        return profile

    return _make_user


@pytest.fixture()
def admin_credentials() -> dict[str, str]:
    return {"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}


@pytest.fixture()
def admin_user(make_user: Callable[..., UserProfile]) -> UserProfile:
    return make_user("admin", role="admin", email=ADMIN_EMAIL, password=ADMIN_PASSWORD)


@pytest.fixture()
def auth_headers(admin_user: UserProfile) -> dict[str, str]:
    """Authorization headers for the administrator."""
    token = create_access_token(admin_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_book(db_session: Session) -> Callable[..., Book]:
    def _make_book(title: str = "Test Book", **fields: Any) -> Book:
        book = Book(title=title, author_name=fields.pop("author_name", "Author"), **fields)
        db_session.add(book)
        db_session.commit()
        return book

    return _make_book


@pytest.fixture()
def make_category(db_session: Session) -> Callable[..., ForumCategory]:
    def _make_category(name: str, sort_order: int, **fields: Any) -> ForumCategory:
        category = ForumCategory(
            name=name,
            description=fields.pop("description", f"{name} board"),
            sort_order=sort_order,
            **fields,
        )
        db_session.add(category)
        db_session.commit()
        return category

    return _make_category


@pytest.fixture()
def make_thread(db_session: Session) -> Callable[..., ForumThread]:
    def _make_thread(
        category: ForumCategory,
        title: str = "Thread",
        *,
        posts: int = 0,
        created_at: datetime | None = None,
        **fields: Any,
    ) -> ForumThread:
        thread = ForumThread(
            category_id=category.id,
            title=title,
            created_at=created_at or utcnow(),
            **fields,
        )
        thread.posts = [ForumPost(content=f"reply {n}") for n in range(posts)]
        db_session.add(thread)
        db_session.commit()
        return thread

    return _make_thread
