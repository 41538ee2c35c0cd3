"""Itinerary state store with lock policy."""

from backend.app.store.lock import is_trip_locked, respects_lock
from backend.app.store.store import ItineraryStore, Listener

__all__ = [
    "ItineraryStore",
    "Listener",
    "is_trip_locked",
    "respects_lock",
]
