"""Common data types and enums used across the application."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Immutable model serialized with camelCase keys.

    Snapshots built from these models are never mutated in place; updates go
    through ``model_copy(update=...)`` so untouched children stay shared.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to a JSON-ready dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Location(WireModel):
    """Geographic coordinates in WGS84 decimal degrees.

    ``(0, 0)`` is the sentinel for "no location assigned yet".
    """

    lat: float = Field(description="Latitude in decimal degrees")
    lng: float = Field(description="Longitude in decimal degrees")

    @property
    def is_unset(self) -> bool:
        """True for the (0, 0) placeholder location."""
        return self.lat == 0 and self.lng == 0


UNSET_LOCATION = Location(lat=0.0, lng=0.0)


class SyncStatus(str, Enum):
    """Remote synchronization status."""

    idle = "idle"
    saving = "saving"
    saved = "saved"
    error = "error"


class SyncState(BaseModel):
    """Observable sync status; never part of persisted trip content."""

    model_config = ConfigDict(frozen=True)

    status: SyncStatus = Field(default=SyncStatus.idle)
    last_saved: datetime | None = Field(
        default=None, description="When the last successful save completed"
    )
