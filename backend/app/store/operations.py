"""Pure store operations.

Every function takes the current ``ItineraryState`` and returns the next one.
Nothing is mutated in place: containers are rebuilt along the path from the
root to the changed leaf and every other trip, day and spot is reused as is.
A rejected or meaningless call returns the very same state object, which is
how the store recognises a no-op.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import date
from typing import Any, Literal, TypeVar

from pydantic import ValidationError

from backend.app.models.common import UNSET_LOCATION
from backend.app.models.defaults import (
    DEFAULT_CATEGORY,
    DEFAULT_FLIGHT,
    NEW_SPOT_NAME,
    NEW_TRIP_DESTINATION,
    initial_trips,
    new_trip_name,
)
from backend.app.models.itinerary import Day, ItineraryState, Spot, Trip, find_trip
from backend.app.models.updates import (
    DayInfoUpdate,
    FlightUpdate,
    SpotDraft,
    SpotUpdate,
    TripInfoUpdate,
    apply_update,
    coerce_update,
)
from backend.app.store.lock import respects_lock
from backend.app.utils.dates import day_count

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]
FlightKind = Literal["outbound", "inbound"]

T = TypeVar("T")


def array_move(items: tuple[T, ...], old_index: int, new_index: int) -> tuple[T, ...]:
    """Move one element to a new position, shifting the ones in between."""
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return tuple(moved)


def _replace_trip(state: ItineraryState, trip: Trip) -> ItineraryState:
    trips = tuple(trip if t.id == trip.id else t for t in state.trips)
    return state.model_copy(update={"trips": trips})


def _replace_day(trip: Trip, index: int, day: Day) -> Trip:
    days = trip.days[:index] + (day,) + trip.days[index + 1 :]
    return trip.model_copy(update={"days": days})


def _with_current_spots(
    state: ItineraryState, trip: Trip, spots: tuple[Spot, ...]
) -> ItineraryState:
    day = trip.current_day.model_copy(update={"spots": spots})
    return _replace_trip(state, _replace_day(trip, trip.current_day_index, day))


def _empty_day(new_id: IdFactory) -> Day:
    return Day(id=new_id(), spots=())


# === Trip library ===


def create_trip(
    state: ItineraryState, *, new_id: IdFactory, today: date
) -> tuple[ItineraryState, str]:
    """Append a trip with one empty day and make it active.

    Returns:
        Tuple of (new state, id of the created trip)
    """
    trip_id = new_id()
    trip = Trip(
        id=trip_id,
        name=new_trip_name(len(state.trips)),
        destination=NEW_TRIP_DESTINATION,
        start_date=today.isoformat(),
        outbound=DEFAULT_FLIGHT,
        inbound=DEFAULT_FLIGHT,
        current_day_index=0,
        days=(_empty_day(new_id),),
    )
    new_state = state.model_copy(
        update={"trips": state.trips + (trip,), "active_trip_id": trip_id}
    )
    return new_state, trip_id


def switch_trip(state: ItineraryState, trip_id: str) -> ItineraryState:
    """Activate another existing trip."""
    if trip_id == state.active_trip_id or find_trip(state.trips, trip_id) is None:
        return state
    return state.model_copy(update={"active_trip_id": trip_id})


def delete_trip(state: ItineraryState, trip_id: str) -> ItineraryState:
    """Remove a trip; the last remaining trip is never removed.

    Deleting is a library-level action, so the lock flag does not apply.
    """
    if len(state.trips) <= 1 or find_trip(state.trips, trip_id) is None:
        return state
    trips = tuple(t for t in state.trips if t.id != trip_id)
    active_id = trips[0].id if state.active_trip_id == trip_id else state.active_trip_id
    return state.model_copy(update={"trips": trips, "active_trip_id": active_id})


def toggle_trip_lock(state: ItineraryState, trip_id: str) -> ItineraryState:
    """Flip a trip's lock flag; the only trip mutation allowed while locked."""
    trip = find_trip(state.trips, trip_id)
    if trip is None:
        return state
    return _replace_trip(state, trip.model_copy(update={"is_locked": not trip.is_locked}))


@respects_lock
def update_trip_info(
    state: ItineraryState, info: TripInfoUpdate | Mapping[str, Any]
) -> ItineraryState:
    """Merge name/destination into the active trip."""
    update = coerce_update(TripInfoUpdate, info)
    if update is None:
        return state
    trip = state.active_trip
    updated = apply_update(trip, update)
    return state if updated is trip else _replace_trip(state, updated)


@respects_lock
def update_trip_dates(
    state: ItineraryState, start_date: str, end_date: str, *, new_id: IdFactory
) -> ItineraryState:
    """Resize the active trip's days to match a date range.

    Extra days are appended empty; surplus trailing days are dropped together
    with their spots. The truncation is unconditional, so callers must confirm
    with the user before shrinking a trip.
    """
    count = day_count(start_date, end_date)
    if count is None:
        logger.debug(f"Ignoring invalid date range {start_date!r}..{end_date!r}")
        return state

    trip = state.active_trip
    if count == len(trip.days) and start_date == trip.start_date:
        return state

    if count > len(trip.days):
        days = trip.days + tuple(_empty_day(new_id) for _ in range(count - len(trip.days)))
    else:
        days = trip.days[:count]

    current_day_index = min(trip.current_day_index, len(days) - 1)
    updated = trip.model_copy(
        update={
            "start_date": start_date,
            "days": days,
            "current_day_index": current_day_index,
        }
    )
    return _replace_trip(state, updated)


@respects_lock
def update_flight(
    state: ItineraryState, kind: FlightKind, info: FlightUpdate | Mapping[str, Any]
) -> ItineraryState:
    """Merge fields into the active trip's outbound or inbound flight."""
    if kind not in ("outbound", "inbound"):
        logger.warning(f"Unknown flight kind {kind!r}")
        return state
    update = coerce_update(FlightUpdate, info)
    if update is None:
        return state
    trip = state.active_trip
    flight = getattr(trip, kind)
    updated = apply_update(flight, update)
    if updated is flight:
        return state
    return _replace_trip(state, trip.model_copy(update={kind: updated}))


# === Days ===


def set_current_day_index(state: ItineraryState, index: int) -> ItineraryState:
    """Point the active trip's view at another day; allowed while locked."""
    trip = state.active_trip
    if trip is None or not 0 <= index < len(trip.days) or index == trip.current_day_index:
        return state
    return _replace_trip(state, trip.model_copy(update={"current_day_index": index}))


@respects_lock
def add_day(state: ItineraryState, *, new_id: IdFactory) -> ItineraryState:
    """Append an empty day and switch the view to it."""
    trip = state.active_trip
    days = trip.days + (_empty_day(new_id),)
    return _replace_trip(
        state, trip.model_copy(update={"days": days, "current_day_index": len(days) - 1})
    )


@respects_lock
def delete_day(state: ItineraryState, index: int) -> ItineraryState:
    """Remove a day; a trip always keeps at least one."""
    trip = state.active_trip
    if len(trip.days) <= 1 or not 0 <= index < len(trip.days):
        return state
    days = trip.days[:index] + trip.days[index + 1 :]
    current_day_index = min(trip.current_day_index, len(days) - 1)
    return _replace_trip(
        state,
        trip.model_copy(update={"days": days, "current_day_index": current_day_index}),
    )


@respects_lock
def reorder_days(state: ItineraryState, old_index: int, new_index: int) -> ItineraryState:
    """Move a day to another position."""
    trip = state.active_trip
    size = len(trip.days)
    if not (0 <= old_index < size and 0 <= new_index < size) or old_index == new_index:
        return state
    days = array_move(trip.days, old_index, new_index)
    return _replace_trip(state, trip.model_copy(update={"days": days}))


@respects_lock
def update_day_info(
    state: ItineraryState, day_index: int, info: DayInfoUpdate | Mapping[str, Any]
) -> ItineraryState:
    """Merge the custom location override into one day."""
    trip = state.active_trip
    if not 0 <= day_index < len(trip.days):
        return state
    update = coerce_update(DayInfoUpdate, info)
    if update is None:
        return state
    day = trip.days[day_index]
    updated = apply_update(day, update)
    if updated is day:
        return state
    return _replace_trip(state, _replace_day(trip, day_index, updated))


# === Spots (current day of the active trip) ===


@respects_lock
def add_spot(
    state: ItineraryState,
    spot_data: SpotDraft | Mapping[str, Any],
    *,
    new_id: IdFactory,
) -> ItineraryState:
    """Append a spot built from a map/search selection."""
    draft = coerce_update(SpotDraft, spot_data)
    if draft is None:
        return state
    trip = state.active_trip
    spot = Spot(
        **draft.model_dump(),
        id=new_id(),
        category=DEFAULT_CATEGORY,
        start_time="",
        end_time="",
    )
    return _with_current_spots(state, trip, trip.current_day.spots + (spot,))


@respects_lock
def add_empty_spot(state: ItineraryState, *, new_id: IdFactory) -> ItineraryState:
    """Append a placeholder spot at the unset location."""
    trip = state.active_trip
    spot = Spot(
        id=new_id(),
        name=NEW_SPOT_NAME,
        category=DEFAULT_CATEGORY,
        location=UNSET_LOCATION,
        start_time="",
        end_time="",
    )
    return _with_current_spots(state, trip, trip.current_day.spots + (spot,))


@respects_lock
def remove_spot(state: ItineraryState, spot_id: str) -> ItineraryState:
    """Remove a spot from the current day."""
    trip = state.active_trip
    spots = trip.current_day.spots
    remaining = tuple(s for s in spots if s.id != spot_id)
    if len(remaining) == len(spots):
        return state
    return _with_current_spots(state, trip, remaining)


@respects_lock
def reorder_spots(state: ItineraryState, active_id: str, over_id: str) -> ItineraryState:
    """Move the ``active_id`` spot to the position held by ``over_id``."""
    trip = state.active_trip
    spots = trip.current_day.spots
    ids = [s.id for s in spots]
    if active_id not in ids or over_id not in ids or active_id == over_id:
        return state
    return _with_current_spots(
        state, trip, array_move(spots, ids.index(active_id), ids.index(over_id))
    )


@respects_lock
def update_spot(
    state: ItineraryState, spot_id: str, info: SpotUpdate | Mapping[str, Any]
) -> ItineraryState:
    """Merge fields into one spot of the current day."""
    trip = state.active_trip
    spots = trip.current_day.spots
    index = next((i for i, s in enumerate(spots) if s.id == spot_id), None)
    if index is None:
        return state
    update = coerce_update(SpotUpdate, info)
    if update is None:
        return state
    updated = apply_update(spots[index], update)
    if updated is spots[index]:
        return state
    return _with_current_spots(state, trip, spots[:index] + (updated,) + spots[index + 1 :])


# === Category vocabulary ===


def add_category(state: ItineraryState, label: str) -> ItineraryState:
    """Add a category label unless blank or already known."""
    label = label.strip()
    if not label or label in state.saved_categories:
        return state
    return state.model_copy(update={"saved_categories": state.saved_categories + (label,)})


def remove_category(state: ItineraryState, label: str) -> ItineraryState:
    """Drop a category label from the vocabulary."""
    if label not in state.saved_categories:
        return state
    categories = tuple(c for c in state.saved_categories if c != label)
    return state.model_copy(update={"saved_categories": categories})


# === Bulk replacement ===


def import_data(
    state: ItineraryState,
    trips: Sequence[Trip | Mapping[str, Any]],
    *,
    today: date,
) -> ItineraryState:
    """Replace the whole trip collection and activate its first trip.

    An empty collection resets to the sample trip so the store is never empty.
    Documents that fail validation leave the state untouched.
    """
    try:
        imported = tuple(
            t if isinstance(t, Trip) else Trip.model_validate(t) for t in trips
        )
    except ValidationError as e:
        logger.warning(f"Rejected trip import: {e.error_count()} validation errors")
        return state

    if not imported:
        imported = initial_trips(today)
    return state.model_copy(
        update={"trips": imported, "active_trip_id": imported[0].id}
    )
