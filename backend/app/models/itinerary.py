"""Trip, day and spot models."""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from .common import Location, WireModel


class Spot(WireModel):
    """A single itinerary stop."""

    id: str = Field(description="Unique spot identifier")
    name: str = Field(description="Display name")
    category: str = Field(description="Category label from the vocabulary")
    website: str | None = Field(default=None, description="Website URL")
    note: str | None = Field(default=None, description="Free-text note")
    start_time: str | None = Field(default=None, description="Start time, HH:MM")
    end_time: str | None = Field(default=None, description="End time, HH:MM")
    location: Location = Field(description="Coordinates, (0, 0) when unplaced")
    address: str | None = Field(default=None, description="Human-readable address")
    rating: float | None = Field(default=None, description="Place rating")

    @property
    def is_placed(self) -> bool:
        """Whether the spot has a real geographic location."""
        return not self.location.is_unset


class Day(WireModel):
    """An ordered list of spots; order is the visiting order."""

    id: str = Field(description="Unique day identifier")
    spots: tuple[Spot, ...] = Field(default=(), description="Spots in visiting order")
    custom_location: str | None = Field(
        default=None, description="Location name overriding auto-detection"
    )
    custom_lat: float | None = Field(default=None, description="Override latitude")
    custom_lng: float | None = Field(default=None, description="Override longitude")


class FlightInfo(WireModel):
    """Outbound or inbound flight details."""

    flight_no: str = Field(default="", description="Flight number")
    dep_time: str = Field(default="", description="Departure time")
    arr_time: str = Field(default="", description="Arrival time")
    dep_airport: str = Field(default="", description="Departure airport code")
    arr_airport: str = Field(default="", description="Arrival airport code")


class Trip(WireModel):
    """Top-level planning unit."""

    id: str = Field(description="Unique trip identifier")
    name: str = Field(description="Trip name")
    destination: str = Field(default="", description="Destination label")
    start_date: str = Field(description="Trip start date (ISO)")
    outbound: FlightInfo = Field(default_factory=FlightInfo)
    inbound: FlightInfo = Field(default_factory=FlightInfo)
    days: tuple[Day, ...] = Field(min_length=1, description="Days in order")
    current_day_index: int = Field(default=0, description="Index of the viewed day")
    is_locked: bool = Field(default=False, description="Read-only flag")

    @model_validator(mode="before")
    @classmethod
    def _clamp_current_day_index(cls, data: Any) -> Any:
        """Keep the viewed-day pointer inside the day list."""
        if not isinstance(data, dict):
            return data
        days = data.get("days")
        key = "currentDayIndex" if "currentDayIndex" in data else "current_day_index"
        index = data.get(key)
        if isinstance(days, (list, tuple)) and days and isinstance(index, int):
            clamped = min(max(index, 0), len(days) - 1)
            if clamped != index:
                data = {**data, key: clamped}
        return data

    @property
    def current_day(self) -> Day:
        """The day currently being viewed."""
        return self.days[self.current_day_index]


class ItineraryState(WireModel):
    """Aggregate store state: every trip plus activation and vocabulary."""

    trips: tuple[Trip, ...] = Field(min_length=1, description="Trips in display order")
    active_trip_id: str = Field(description="Id of the active trip")
    saved_categories: tuple[str, ...] = Field(
        default=(), description="User-extensible category vocabulary"
    )

    @model_validator(mode="before")
    @classmethod
    def _default_active_trip(cls, data: Any) -> Any:
        """Point a missing or dangling active id at the first trip."""
        if not isinstance(data, dict):
            return data
        trips = data.get("trips")
        if not isinstance(trips, (list, tuple)) or not trips:
            return data
        ids = [
            t.id if isinstance(t, Trip) else t.get("id") if isinstance(t, dict) else None
            for t in trips
        ]
        key = "activeTripId" if "activeTripId" in data else "active_trip_id"
        if data.get(key) not in ids and isinstance(ids[0], str):
            data = {**data, key: ids[0]}
        return data

    @property
    def active_trip(self) -> Trip | None:
        """The active trip, or None if the id is dangling."""
        return find_trip(self.trips, self.active_trip_id)


def find_trip(trips: tuple[Trip, ...], trip_id: str) -> Trip | None:
    """Find a trip by id."""
    return next((trip for trip in trips if trip.id == trip_id), None)
