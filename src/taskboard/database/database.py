"""
Database engine and session management for the Taskboard backend
"""
import logging
from typing import Generator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given connection string.

    SQLite connections are shared across request threads, and an in-memory
    database is pinned to a single connection so every session sees the
    same tables. Other backends (PostgreSQL via psycopg2) get a pooled
    engine with liveness checks.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)

    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they are registered on SQLModel.metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database schema ready (%s)", engine.url.render_as_string(hide_password=True))


def get_session(request: Request) -> Generator[Session, None, None]:
    """Yield a session bound to the application's engine, one per request."""
    with Session(request.app.state.engine) as session:
        yield session
