"""Shared fixtures: a throwaway SQLite database and a fresh application."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest
from cryptography.fernet import Fernet

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

TEST_DIR = Path(tempfile.mkdtemp(prefix="synergysphere-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DIR / 'test.db'}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["REPORTS_DIR"] = str(TEST_DIR / "reports")
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["GITHUB_WEBHOOK_SECRET"] = "webhook-secret"
os.environ["CREDENTIALS_ENCRYPTION_KEY"] = Fernet.generate_key().decode()
os.environ["APP_TIMEZONE"] = "UTC"

from synergysphere.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from synergysphere.domain.entities import ROLE_ADMIN, ROLE_USER, User  # noqa: E402
from synergysphere.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from synergysphere.infrastructure.repositories import UserRepository  # noqa: E402
from synergysphere.infrastructure.security import (  # noqa: E402
    create_access_token,
    get_password_hash,
)


class RecordingBroadcaster:
    """Broadcaster double that records every emit instead of delivering it."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str | None, object]] = []
        self.notifications = []

    def emit(self, event, data=None):
        self.events.append((event, None, data))

    def emit_to_room(self, room, event, data=None, *, exclude=None):
        self.events.append((event, room, data))

    def emit_to_user(self, user_id, event, data=None):
        self.emit_to_room(f"user-{user_id}", event, data)

    def push_notification(self, notification):
        self.notifications.append(notification)

    def names(self) -> list[str]:
        return [event for event, _, _ in self.events]


@pytest.fixture(autouse=True)
def reset_database():
    """Recreate every table so each test starts from an empty database."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


def make_user(
    username: str, *, role: str = ROLE_USER, password: str = "secret123"
) -> User:
    with SessionLocal() as db:
        return UserRepository(db).create(
            User(
                id=None,
                username=username,
                email=f"{username}@example.com",
                password=get_password_hash(password),
                role=role,
            )
        )


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice() -> User:
    return make_user("alice")


@pytest.fixture()
def bob() -> User:
    return make_user("bob")


@pytest.fixture()
def admin() -> User:
    return make_user("admin", role=ROLE_ADMIN)


@pytest.fixture()
def client():
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def headers_for():
    """Return a helper building bearer headers for a user."""

    return auth_headers


@pytest.fixture()
def user_factory():
    return make_user
