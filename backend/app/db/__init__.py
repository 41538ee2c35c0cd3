"""Database package for ORM and session management."""

from .base import Base, build_engine, create_tables, session_scope
from .session import get_engine, get_session, get_session_factory

__all__ = [
    "Base",
    "build_engine",
    "create_tables",
    "session_scope",
    "get_engine",
    "get_session",
    "get_session_factory",
]
