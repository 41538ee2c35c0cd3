"""Database-backed document store for trip collections."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from backend.app.db.models.user_trips import UserTrips


def get_trips(session: Session, profile_id: str) -> list[Any]:
    """
    Get the saved trip collection of a profile.

    Args:
        session: SQLAlchemy session
        profile_id: Profile identifier

    Returns:
        The stored list, or an empty list if the profile has no row or the
        stored document is not a list
    """
    row = session.get(UserTrips, profile_id)

    if row is None or not isinstance(row.data, list):
        return []

    return row.data


def save_trips(session: Session, profile_id: str, data: list[Any]) -> UserTrips:
    """
    Save or replace the trip collection of a profile.

    Args:
        session: SQLAlchemy session
        profile_id: Profile identifier
        data: Full trip collection (camelCase documents)

    Returns:
        Created or updated UserTrips row
    """
    now = datetime.now(timezone.utc)

    existing = session.get(UserTrips, profile_id)

    if existing:
        existing.data = data
        existing.updated_at = now
        session.flush()
        return existing

    row = UserTrips(profile_id=profile_id, data=data, updated_at=now)
    session.add(row)
    session.flush()
    return row
