"""Location helpers for map consumers.

Spots at the (0, 0) sentinel are unplaced and must never be treated as real
points (route lines, map bounds, centering).
"""

from collections.abc import Iterable

from backend.app.models.common import Location
from backend.app.models.defaults import DEFAULT_MAP_CENTER
from backend.app.models.itinerary import Day, Spot


def placed_spots(spots: Iterable[Spot]) -> list[Spot]:
    """Spots that have a real location, in their original order."""
    return [spot for spot in spots if spot.is_placed]


def route_points(spots: Iterable[Spot]) -> list[Location]:
    """Polyline points for a day's route."""
    return [spot.location for spot in placed_spots(spots)]


def map_center(
    spots: Iterable[Spot], default_center: Location = DEFAULT_MAP_CENTER
) -> Location:
    """First placed spot, or the default center when none is placed."""
    placed = placed_spots(spots)
    return placed[0].location if placed else default_center


def day_reference_location(
    day: Day, default_center: Location = DEFAULT_MAP_CENTER
) -> Location:
    """Location used for a day's weather and region label.

    A custom override wins; otherwise the first placed spot; otherwise the
    default center.
    """
    if day.custom_lat is not None and day.custom_lng is not None:
        override = Location(lat=day.custom_lat, lng=day.custom_lng)
        if not override.is_unset:
            return override
    return map_center(day.spots, default_center)
