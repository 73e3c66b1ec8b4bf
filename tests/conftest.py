# tests/conftest.py
from __future__ import annotations

import os

# settings are read at import time; point them at sqlite before anything imports pagecraft
os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import pagecraft.models  # noqa: F401  (populates Base.metadata)
from pagecraft.db.base import Base
from pagecraft.db.session import get_db
from pagecraft.models.auth import AppRole, User, UserRole
from pagecraft.models.content import Page
from pagecraft.security.jwt import create_access_token
from pagecraft.services.passwords import hash_password
from pagecraft.services.settings_store import SiteSettingsStore

TEST_PASSWORD = "correct-horse-9"


@pytest.fixture()
def engine():
    """A fresh in-memory database per test; StaticPool keeps the single connection alive."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def db(engine) -> Session:
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db: Session):
    """
    TestClient whose endpoints share the test's session. The settings store is
    replaced so no snapshot leaks between tests.
    """
    from pagecraft.main import app  # late import: env must be set first

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.state.site_settings = SiteSettingsStore()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


# -------------------- users --------------------
@pytest.fixture()
def make_user(db: Session) -> Callable[..., User]:
    def _make(email: str, role: str | None = "editor", *, is_active: bool = True) -> User:
        user = User(
            email=email,
            full_name=email.split("@")[0].title(),
            hashed_password=hash_password(TEST_PASSWORD),
            is_active=is_active,
        )
        db.add(user)
        db.flush()
        if role:
            db.add(UserRole(user_id=user.id, role=AppRole(role)))
        db.commit()
        db.refresh(user)
        return user
    return _make


def _bearer(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def user_password() -> str:
    return TEST_PASSWORD


@pytest.fixture()
def headers_for() -> Callable[[User], Dict[str, str]]:
    return _bearer


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin@example.com", "admin")


@pytest.fixture()
def editor(make_user) -> User:
    return make_user("editor@example.com", "editor")


@pytest.fixture()
def admin_headers(admin: User) -> Dict[str, str]:
    return _bearer(admin)


@pytest.fixture()
def editor_headers(editor: User) -> Dict[str, str]:
    return _bearer(editor)


# -------------------- content --------------------
@pytest.fixture()
def page(db: Session) -> Page:
    p = Page(title="Home", slug="home", status="draft", content=[])
    db.add(p)
    db.commit()
    db.refresh(p)
    return p
