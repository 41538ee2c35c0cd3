"""ORM models for database tables."""

from .user_trips import UserTrips

__all__ = ["UserTrips"]
