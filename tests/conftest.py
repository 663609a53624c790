# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from taskboard.config import Settings
from taskboard.database.database import create_db_engine, init_db
from taskboard.main import create_app
from taskboard.models.user import User
from taskboard.services.user_service import UserService


class FakeClock:
    """Controllable time source for token issue/verify."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture()
def settings() -> Settings:
    """Explicit settings; nothing is read from the environment or a .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret="test-secret-key-that-is-long-enough-for-hs256",
        access_token_expire_minutes=30,
        log_level="WARNING",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """In-memory SQLite with the schema created."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def file_engine(tmp_path: Path) -> Iterator[Engine]:
    """File-backed SQLite, for tests that need independent connections."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'tasks.sqlite3'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture()
def alice(session: Session) -> User:
    return UserService.create_user(session, "alice", "pw1")


@pytest.fixture()
def bob(session: Session) -> User:
    return UserService.create_user(session, "bob", "pw2")


@pytest.fixture()
def client(settings: Settings, engine: Engine, clock: FakeClock) -> Iterator[TestClient]:
    app = create_app(settings=settings, engine=engine, clock=clock)
    with TestClient(app) as client:
        yield client


def login_headers(client: TestClient, username: str, password: str) -> dict[str, str]:
    """Register (if needed) and log in; return the Authorization header."""
    client.post("/api/auth/register", json={"username": username, "password": password})
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
