"""Seed content and constants for a fresh planner."""

from __future__ import annotations

from datetime import date

from .common import Location
from .itinerary import Day, FlightInfo, ItineraryState, Spot, Trip

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "觀光景點",
    "美食餐廳",
    "購物行程",
    "咖啡廳",
    "神社/寺廟",
    "博物館/美術館",
    "公園/自然",
    "居酒屋/酒吧",
    "甜點/下午茶",
    "伴手禮",
    "藥妝店",
    "飯店/住宿",
    "交通/車站",
    "主題樂園",
    "便利商店",
    "休息點",
)

DEFAULT_CATEGORY = DEFAULT_CATEGORIES[0]
INITIAL_TRIP_ID = "trip-default"
STORAGE_KEY = "travel-planner-storage-v31"
SYNC_STATUS_TIMEOUT_S = 3.0
DEFAULT_MAP_CENTER = Location(lat=35.6762, lng=139.6503)

NEW_SPOT_NAME = "新行程"
NEW_TRIP_DESTINATION = "台北"

DEFAULT_FLIGHT = FlightInfo()


def new_trip_name(existing_count: int) -> str:
    """Name for the trip created after ``existing_count`` trips."""
    return f"新行程 {existing_count + 1}"


def initial_trips(today: date | None = None) -> tuple[Trip, ...]:
    """The sample Tokyo trip every new planner starts with."""
    today = today or date.today()
    return (
        Trip(
            id=INITIAL_TRIP_ID,
            name="我的東京冒險",
            destination="日本東京",
            start_date=today.isoformat(),
            outbound=DEFAULT_FLIGHT,
            inbound=DEFAULT_FLIGHT,
            current_day_index=0,
            days=(
                Day(
                    id="day-1",
                    spots=(
                        Spot(
                            id="1",
                            name="淺草寺 (雷門)",
                            category="神社/寺廟",
                            start_time="10:00",
                            end_time="12:00",
                            location=Location(lat=35.7147, lng=139.7967),
                            website="https://www.senso-ji.jp/",
                            rating=4.7,
                        ),
                        Spot(
                            id="2",
                            name="晴空塔敘敘苑",
                            category="美食餐廳",
                            start_time="14:00",
                            end_time="16:00",
                            location=Location(lat=35.7100, lng=139.8107),
                            note="記得要訂位，靠窗位置風景最好！",
                            rating=4.5,
                        ),
                    ),
                ),
            ),
        ),
    )


def initial_state(today: date | None = None) -> ItineraryState:
    """Default store state: the sample trip, active, with default categories."""
    trips = initial_trips(today)
    return ItineraryState(
        trips=trips,
        active_trip_id=trips[0].id,
        saved_categories=DEFAULT_CATEGORIES,
    )
