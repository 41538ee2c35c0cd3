"""Pytest configuration and fixtures for testing."""

import random
from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from backend.app.db.base import Base, build_engine, create_tables
from backend.app.models import ItineraryState
from backend.app.models.defaults import DEFAULT_CATEGORIES
from backend.app.store import ItineraryStore
from backend.app.utils.ids import IdGenerator
from tests.unit.store_test_helpers import make_trip

FIXED_TODAY = date(2025, 3, 1)


@pytest.fixture
def id_generator() -> IdGenerator:
    """Deterministic id source."""
    return IdGenerator(random.Random(42))


@pytest.fixture
def store(id_generator: IdGenerator) -> ItineraryStore:
    """Store seeded with the default sample trip."""
    return ItineraryStore(id_generator=id_generator, today=lambda: FIXED_TODAY)


@pytest.fixture
def two_trip_state() -> ItineraryState:
    """Two trips; the first (spots a, b, c on day 0 and d on day 1) is active."""
    return ItineraryState(
        trips=(make_trip("t1"), make_trip("t2", day_spots=(("x",),))),
        active_trip_id="t1",
        saved_categories=DEFAULT_CATEGORIES,
    )


@pytest.fixture
def two_trip_store(two_trip_state: ItineraryState, id_generator: IdGenerator) -> ItineraryStore:
    """Store over ``two_trip_state``."""
    return ItineraryStore(
        two_trip_state, id_generator=id_generator, today=lambda: FIXED_TODAY
    )


@pytest.fixture(scope="function")
def test_db_engine():
    """Create a test database engine with in-memory SQLite."""
    engine = build_engine("sqlite:///:memory:")
    create_tables(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_db_engine):
    """Create a test session factory."""
    return sessionmaker(bind=test_db_engine, expire_on_commit=False)


@pytest.fixture(scope="function")
def test_session(test_session_factory):
    """Create a test database session."""
    session = test_session_factory()

    yield session

    session.close()
