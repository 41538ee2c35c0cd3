"""Database base configuration and utilities."""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    pass


def build_engine(database_url: str) -> Engine:
    """Create and configure a SQLAlchemy engine.

    SQLite connections are shared across threads (FastAPI runs sync handlers
    in a thread pool); an in-memory database uses a single static connection
    so every session sees the same tables.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        Configured SQLAlchemy engine.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


def create_tables(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    # Register models on Base.metadata
    from backend.app.db import models  # noqa: F401

    Base.metadata.create_all(engine)


@contextmanager
def session_scope(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Context manager for a transactional session.

    Example:
        >>> with session_scope(get_session_factory()) as session:
        ...     session.get(UserTrips, "default-user")
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
