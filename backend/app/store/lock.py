"""Per-trip read-only lock.

A locked trip rejects every content mutation. Rejection is a silent no-op:
the operation hands back the unchanged state and never raises. Callers that
want to tell the user must check ``is_trip_locked`` first.
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from backend.app.models.itinerary import ItineraryState, Trip

logger = logging.getLogger(__name__)

Operation = Callable[..., ItineraryState]


def is_trip_locked(trip: Trip | None) -> bool:
    """Whether the trip is locked; a missing trip counts as unlocked."""
    return trip.is_locked if trip is not None else False


def respects_lock(operation: Operation) -> Operation:
    """Turn an active-trip operation into a no-op when the trip is missing or locked."""

    @wraps(operation)
    def wrapper(state: ItineraryState, *args: Any, **kwargs: Any) -> ItineraryState:
        trip = state.active_trip
        if trip is None:
            return state
        if is_trip_locked(trip):
            logger.debug(
                "Ignoring %s on locked trip",
                operation.__name__,
                extra={"trip_id": trip.id},
            )
            return state
        return operation(state, *args, **kwargs)

    return wrapper
