"""Tests for date helpers."""

from datetime import date

import pytest

from backend.app.utils.dates import day_count, day_date, format_day_date, trip_end_date
from tests.unit.store_test_helpers import make_trip


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ("2025-03-01", "2025-03-01", 1),
        ("2025-03-01", "2025-03-03", 3),
        ("2025-03-03", "2025-03-01", 3),
        ("2025-03-01T00:00", "2025-03-02T06:00", 3),
        ("2024-12-30", "2025-01-02", 4),
    ],
)
def test_day_count(start: str, end: str, expected: int) -> None:
    assert day_count(start, end) == expected


@pytest.mark.parametrize("start, end", [("2025-02-30", "2025-03-01"), ("soon", "later"), ("", "2025-03-01")])
def test_day_count_invalid(start: str, end: str) -> None:
    assert day_count(start, end) is None


def test_day_date_and_trip_end() -> None:
    trip = make_trip(day_spots=(("a",), ("b",), ("c",)), start_date="2025-02-27")

    assert day_date(trip.start_date, 1) == date(2025, 2, 28)
    assert trip_end_date(trip) == date(2025, 3, 1)


def test_format_day_date() -> None:
    label = format_day_date("2025-03-01", 2)

    assert label.month == "3"
    assert label.date == "03"
    assert label.day == "週一"
    assert label.full == "3月3日 週一"
    assert label.iso == "2025-03-03"


def test_format_day_date_placeholder() -> None:
    label = format_day_date("", 0)
    assert label.full == "未定"
    assert format_day_date("bogus", 1).month == "??"
