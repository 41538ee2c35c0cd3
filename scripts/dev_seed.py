"""Development database seeding script.

Stores the sample trip for the configured profile. Idempotent - an existing
collection is left untouched.

Usage:
    python scripts/dev_seed.py
"""

from backend.app.config import get_settings
from backend.app.db.base import create_tables, session_scope
from backend.app.db.session import get_engine, get_session_factory
from backend.app.db.trips import get_trips, save_trips
from backend.app.models.defaults import initial_trips


def seed_database() -> None:
    """Seed the database with the sample trip."""
    settings = get_settings()
    create_tables(get_engine())

    with session_scope(get_session_factory()) as session:
        existing = get_trips(session, settings.profile_id)
        if existing:
            print(f"✓ Profile '{settings.profile_id}' already has {len(existing)} trips")
            return

        save_trips(
            session,
            settings.profile_id,
            [trip.to_wire() for trip in initial_trips()],
        )
        print(f"✓ Seeded sample trip for profile '{settings.profile_id}'")


if __name__ == "__main__":
    seed_database()
