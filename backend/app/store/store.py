"""Itinerary store: owner of all trip data.

One ``ItineraryStore`` per session. It holds the current immutable snapshot,
applies operations from ``backend.app.store.operations`` atomically and tells
subscribers about every new snapshot.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from datetime import date
from typing import TYPE_CHECKING, Any

from backend.app.models.defaults import initial_state
from backend.app.models.itinerary import Day, ItineraryState, Spot, Trip
from backend.app.models.updates import (
    DayInfoUpdate,
    FlightUpdate,
    SpotDraft,
    SpotUpdate,
    TripInfoUpdate,
)
from backend.app.store import operations as ops
from backend.app.utils.ids import IdGenerator

if TYPE_CHECKING:
    from backend.app.persistence.local import LocalStateStorage

logger = logging.getLogger(__name__)

# (new_state, previous_state)
Listener = Callable[[ItineraryState, ItineraryState], None]


class ItineraryStore:
    """Trip → Day → Spot state with an immutable-snapshot mutation API.

    Operations are synchronous and serialized by a re-entrant lock, so two
    mutations never interleave even when called from different threads.
    Invalid input and edits to a locked trip are silent no-ops.
    """

    def __init__(
        self,
        state: ItineraryState | None = None,
        *,
        id_generator: Callable[[], str] | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """Initialize store.

        Args:
            state: Initial snapshot; defaults to the sample trip.
            id_generator: Source of new entity ids (seed it in tests).
            today: Clock used for new trip start dates.
        """
        self._today = today or date.today
        self._new_id = id_generator or IdGenerator()
        self._state = state or initial_state(self._today())
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    @classmethod
    def from_storage(cls, storage: LocalStateStorage, **kwargs: Any) -> ItineraryStore:
        """Build a store from the local snapshot, or defaults if there is none."""
        return cls(storage.load(), **kwargs)

    # === Queries ===

    @property
    def state(self) -> ItineraryState:
        """Current snapshot; never mutated after being handed out."""
        return self._state

    @property
    def trips(self) -> tuple[Trip, ...]:
        return self._state.trips

    @property
    def active_trip_id(self) -> str:
        return self._state.active_trip_id

    @property
    def saved_categories(self) -> tuple[str, ...]:
        return self._state.saved_categories

    @property
    def active_trip(self) -> Trip | None:
        return self._state.active_trip

    @property
    def current_day(self) -> Day | None:
        """The viewed day of the active trip."""
        trip = self.active_trip
        return trip.current_day if trip is not None else None

    @property
    def current_spots(self) -> tuple[Spot, ...]:
        day = self.current_day
        return day.spots if day is not None else ()

    def export_data(self) -> list[dict[str, Any]]:
        """Trip collection as JSON-ready camelCase documents."""
        return [trip.to_wire() for trip in self._state.trips]

    # === Subscriptions ===

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for new snapshots.

        Returns:
            Callable that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: ItineraryState) -> ItineraryState:
        # caller holds self._lock
        previous = self._state
        if state is previous:
            return state
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state, previous)
            except Exception:
                logger.exception("Store listener failed")
        return state

    def _apply(self, operation: Callable[..., ItineraryState], *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self._commit(operation(self._state, *args, **kwargs))

    # === Trip library ===

    def create_trip(self) -> str:
        """Create and activate a new trip; returns its id."""
        with self._lock:
            state, trip_id = ops.create_trip(
                self._state, new_id=self._new_id, today=self._today()
            )
            self._commit(state)
        logger.info("Created trip", extra={"trip_id": trip_id})
        return trip_id

    def switch_trip(self, trip_id: str) -> None:
        self._apply(ops.switch_trip, trip_id)

    def delete_trip(self, trip_id: str) -> None:
        self._apply(ops.delete_trip, trip_id)

    def toggle_trip_lock(self, trip_id: str) -> None:
        self._apply(ops.toggle_trip_lock, trip_id)

    def update_trip_info(self, info: TripInfoUpdate | Mapping[str, Any]) -> None:
        self._apply(ops.update_trip_info, info)

    def update_trip_dates(self, start_date: str, end_date: str) -> None:
        """Resize the active trip to a date range (destructive when shrinking)."""
        self._apply(ops.update_trip_dates, start_date, end_date, new_id=self._new_id)

    def update_flight(
        self, kind: ops.FlightKind, info: FlightUpdate | Mapping[str, Any]
    ) -> None:
        self._apply(ops.update_flight, kind, info)

    # === Days ===

    def set_current_day_index(self, index: int) -> None:
        self._apply(ops.set_current_day_index, index)

    def add_day(self) -> None:
        self._apply(ops.add_day, new_id=self._new_id)

    def delete_day(self, index: int) -> None:
        self._apply(ops.delete_day, index)

    def reorder_days(self, old_index: int, new_index: int) -> None:
        self._apply(ops.reorder_days, old_index, new_index)

    def update_day_info(
        self, day_index: int, info: DayInfoUpdate | Mapping[str, Any]
    ) -> None:
        self._apply(ops.update_day_info, day_index, info)

    # === Spots ===

    def add_spot(self, spot_data: SpotDraft | Mapping[str, Any]) -> None:
        self._apply(ops.add_spot, spot_data, new_id=self._new_id)

    def add_empty_spot(self) -> None:
        self._apply(ops.add_empty_spot, new_id=self._new_id)

    def remove_spot(self, spot_id: str) -> None:
        self._apply(ops.remove_spot, spot_id)

    def reorder_spots(self, active_id: str, over_id: str) -> None:
        self._apply(ops.reorder_spots, active_id, over_id)

    def update_spot(self, spot_id: str, info: SpotUpdate | Mapping[str, Any]) -> None:
        self._apply(ops.update_spot, spot_id, info)

    # === Categories ===

    def add_category(self, label: str) -> None:
        self._apply(ops.add_category, label)

    def remove_category(self, label: str) -> None:
        self._apply(ops.remove_category, label)

    # === Bulk ===

    def import_data(self, trips: Sequence[Trip | Mapping[str, Any]]) -> None:
        """Replace the trip collection (used by the remote load)."""
        self._apply(ops.import_data, trips, today=self._today())
