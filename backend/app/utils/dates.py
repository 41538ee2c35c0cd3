"""Date helpers for trip date ranges and day headers."""

import logging
import math
from datetime import date, datetime, timedelta

from pydantic import BaseModel

from backend.app.models.itinerary import Trip

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60
_WEEKDAYS = ("週一", "週二", "週三", "週四", "週五", "週六", "週日")


def parse_trip_date(value: str) -> datetime | None:
    """Parse an ISO date or datetime string; None if unparseable."""
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def day_count(start_date: str, end_date: str) -> int | None:
    """
    Number of days covered by a date range, both ends inclusive.

    Computed as ``ceil(|end - start| in days) + 1``, so a reversed range
    yields the same count as the forward one.

    Args:
        start_date: ISO start date
        end_date: ISO end date

    Returns:
        Day count, or None if either date is invalid
    """
    start = parse_trip_date(start_date)
    end = parse_trip_date(end_date)
    if start is None or end is None:
        return None
    try:
        delta = end - start
    except TypeError:
        # naive vs. aware timestamps
        logger.debug(f"Cannot compare dates {start_date!r} and {end_date!r}")
        return None
    count = math.ceil(abs(delta.total_seconds()) / _SECONDS_PER_DAY) + 1
    return count if count >= 1 else None


def day_date(start_date: str, day_offset: int) -> date | None:
    """Calendar date of the day ``day_offset`` days after ``start_date``."""
    start = parse_trip_date(start_date)
    if start is None:
        return None
    return start.date() + timedelta(days=day_offset)


def trip_end_date(trip: Trip) -> date | None:
    """Last calendar day of a trip, derived from its start date and day count."""
    return day_date(trip.start_date, len(trip.days) - 1)


class FormattedDate(BaseModel):
    """Day header labels."""

    month: str
    date: str
    day: str
    full: str
    iso: str


_UNKNOWN_DATE = FormattedDate(month="??", date="??", day="??", full="未定", iso="")


def format_day_date(start_date: str, day_offset: int) -> FormattedDate:
    """
    Header labels for a trip day, e.g. ``1月5日 週一``.

    Args:
        start_date: Trip start date (ISO)
        day_offset: 0-indexed day within the trip

    Returns:
        FormattedDate; placeholder labels when the start date is missing or invalid
    """
    if not start_date:
        return _UNKNOWN_DATE
    target = day_date(start_date, day_offset)
    if target is None:
        return _UNKNOWN_DATE

    weekday = _WEEKDAYS[target.weekday()]
    return FormattedDate(
        month=str(target.month),
        date=f"{target.day:02d}",
        day=weekday,
        full=f"{target.month}月{target.day}日 {weekday}",
        iso=target.isoformat(),
    )
