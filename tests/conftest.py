"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from datetime import datetime

import pytest

from tripboard.config import Settings
from tripboard.engine.mutations import ItineraryEngine
from tripboard.models import Accommodation, Activity, Coordinates, Day, Trip
from tripboard.utils.ids import SequentialIdGenerator


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Deterministic clock for trash timestamps."""
    return lambda: datetime(2025, 6, 10, 12, 0, 0)


@pytest.fixture
def trip() -> Trip:
    """Three-day trip.

    Day 1: breakfast (Food, 20) + museum (Sightseeing, 35), hotel at 150/night
    Day 2: hike (Adventure, 0), no accommodation
    Day 3: empty, hotel at 120/night
    """
    return Trip(
        id="trip-1",
        title="Tokyo Week",
        currency="USD",
        days=[
            Day(
                id="day-a",
                trip_id="trip-1",
                day_number=1,
                theme="Arrival",
                accommodation=Accommodation(
                    id="acc-a", hotel_name="Hotel A", price_per_night=150, rating=4.0
                ),
                activities=[
                    Activity(
                        id="act-breakfast",
                        title="Breakfast",
                        cost_estimate=20,
                        category="Food",
                        duration_minutes=60,
                        coordinates=Coordinates(lat=35.6895, lng=139.6917),
                    ),
                    Activity(
                        id="act-museum",
                        title="Museum",
                        cost_estimate=35,
                        duration_minutes=90,
                        coordinates=Coordinates(lat=35.7188, lng=139.7765),
                    ),
                ],
            ),
            Day(
                id="day-b",
                trip_id="trip-1",
                day_number=2,
                theme="Mountains",
                activities=[
                    Activity(
                        id="act-hike", title="Hike", category="Adventure", duration_minutes=240
                    )
                ],
            ),
            Day(
                id="day-c",
                trip_id="trip-1",
                day_number=3,
                theme="Departure",
                accommodation=Accommodation(
                    id="acc-c", hotel_name="Hotel C", price_per_night=120, rating=3.5
                ),
            ),
        ],
    )


@pytest.fixture
def engine(
    trip: Trip, settings: Settings, fixed_clock: Callable[[], datetime]
) -> ItineraryEngine:
    """Engine over the sample trip with deterministic ids and clock."""
    return ItineraryEngine(
        trip, ids=SequentialIdGenerator(), settings=settings, clock=fixed_clock
    )
