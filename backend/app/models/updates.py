"""Partial-update models for store operations.

Each model lists the fields a caller may change. Only fields that were
explicitly provided are merged into the target, mirroring a shallow merge.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .common import Location

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")

UpdateT = TypeVar("UpdateT", bound="PartialUpdate")
TargetT = TypeVar("TargetT", bound=BaseModel)


class PartialUpdate(BaseModel):
    """Base for partial updates; unknown keys are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def changes(self) -> dict[str, Any]:
        """Field values explicitly provided by the caller."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class TripInfoUpdate(PartialUpdate):
    """Editable trip header fields."""

    name: str = Field(default="", description="Trip name")
    destination: str = Field(default="", description="Destination label")


class FlightUpdate(PartialUpdate):
    """Editable flight fields."""

    flight_no: str = Field(default="")
    dep_time: str = Field(default="")
    arr_time: str = Field(default="")
    dep_airport: str = Field(default="")
    arr_airport: str = Field(default="")


class DayInfoUpdate(PartialUpdate):
    """Custom location override for a day."""

    custom_location: str | None = Field(default=None)
    custom_lat: float | None = Field(default=None, ge=-90, le=90)
    custom_lng: float | None = Field(default=None, ge=-180, le=180)


class SpotUpdate(PartialUpdate):
    """Editable spot fields; the id is not editable."""

    name: str = Field(default="")
    category: str = Field(default="")
    website: str | None = Field(default=None)
    note: str | None = Field(default=None)
    start_time: str | None = Field(default=None, description="HH:MM or empty")
    end_time: str | None = Field(default=None, description="HH:MM or empty")
    location: Location = Field(default_factory=lambda: Location(lat=0.0, lng=0.0))
    address: str | None = Field(default=None)
    rating: float | None = Field(default=None, ge=0, le=5)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_of_day(cls, v: str | None) -> str | None:
        """Accept an empty string or a 24-hour HH:MM time."""
        if v is None or v == "":
            return v
        if not _TIME_RE.match(v):
            raise ValueError("Time must be HH:MM")
        return v


class SpotDraft(PartialUpdate):
    """Data for a new spot picked from a map or search result."""

    name: str = Field(description="Display name")
    location: Location = Field(description="Coordinates of the place")
    address: str | None = Field(default=None)
    rating: float | None = Field(default=None)
    website: str | None = Field(default=None)
    note: str | None = Field(default=None)


def coerce_update(
    model_cls: type[UpdateT], info: UpdateT | Mapping[str, Any]
) -> UpdateT | None:
    """
    Turn caller input into a partial-update model.

    Args:
        model_cls: Expected update model
        info: Model instance or mapping with snake_case or camelCase keys

    Returns:
        The validated update, or None if the input is invalid
    """
    if isinstance(info, model_cls):
        return info
    try:
        return model_cls.model_validate(dict(info))
    except (ValidationError, TypeError, ValueError) as e:
        logger.warning("Rejected invalid %s: %s", model_cls.__name__, e)
        return None


def apply_update(target: TargetT, update: PartialUpdate) -> TargetT:
    """Shallow-merge the provided fields into a frozen model copy."""
    changes = update.changes()
    if not changes:
        return target
    return target.model_copy(update=changes)
