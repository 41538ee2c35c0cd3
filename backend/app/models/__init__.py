"""Convenient imports for all model types."""

# Common types and enums
from .common import (
    UNSET_LOCATION,
    Location,
    SyncState,
    SyncStatus,
    WireModel,
)

# Itinerary models
from .itinerary import Day, FlightInfo, ItineraryState, Spot, Trip, find_trip

# Partial updates
from .updates import (
    DayInfoUpdate,
    FlightUpdate,
    SpotDraft,
    SpotUpdate,
    TripInfoUpdate,
)

__all__ = [
    # Common
    "Location",
    "SyncState",
    "SyncStatus",
    "UNSET_LOCATION",
    "WireModel",
    # Itinerary
    "Day",
    "FlightInfo",
    "ItineraryState",
    "Spot",
    "Trip",
    "find_trip",
    # Updates
    "DayInfoUpdate",
    "FlightUpdate",
    "SpotDraft",
    "SpotUpdate",
    "TripInfoUpdate",
]
