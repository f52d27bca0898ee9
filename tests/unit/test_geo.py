"""Tests for haversine distance and travel-time estimation."""

import math

import pytest

from tripboard.config import Settings
from tripboard.models import Activity, Coordinates
from tripboard.timeline.geo import distance_km, route_distance_km, travel_minutes


def test_distance_same_point_is_zero() -> None:
    """Identical points are zero km apart."""
    point = Coordinates(lat=35.6895, lng=139.6917)
    assert distance_km(point, point) == 0.0


def test_distance_paris_london() -> None:
    """Known city pair is roughly 343 km apart."""
    paris = Coordinates(lat=48.8566, lng=2.3522)
    london = Coordinates(lat=51.5074, lng=-0.1278)
    assert distance_km(paris, london) == pytest.approx(343.5, abs=1.0)


def test_distance_is_symmetric() -> None:
    """Distance does not depend on direction."""
    a = Coordinates(lat=10.0, lng=20.0)
    b = Coordinates(lat=-5.0, lng=44.0)
    assert distance_km(a, b) == pytest.approx(distance_km(b, a))


def test_travel_minutes_for_ninety_km(settings: Settings) -> None:
    """~90 km at 0.5 km/min plus 15 min overhead is 195 minutes."""
    a = Coordinates(lat=0.0, lng=0.0)
    b = Coordinates(lat=0.8093, lng=0.0)  # ~89.99 km due north

    assert distance_km(a, b) == pytest.approx(90.0, abs=0.05)
    assert travel_minutes(a, b, settings) == 195


def test_travel_minutes_same_point_is_overhead_only(settings: Settings) -> None:
    """Zero distance still costs the fixed overhead."""
    point = Coordinates(lat=1.0, lng=1.0)
    assert travel_minutes(point, point, settings) == 15


@pytest.mark.parametrize(
    "bad",
    [
        Coordinates(lat=float("nan"), lng=0.0),
        Coordinates(lat=0.0, lng=float("inf")),
        Coordinates(lat=120.0, lng=0.0),
        Coordinates(lat=0.0, lng=-200.0),
    ],
)
def test_malformed_coordinates_give_nan_and_default_buffer(
    bad: Coordinates, settings: Settings
) -> None:
    """Malformed geography never leaks NaN into travel times."""
    good = Coordinates(lat=0.0, lng=0.0)

    assert math.isnan(distance_km(good, bad))
    assert travel_minutes(good, bad, settings) == settings.default_travel_buffer_min


def test_travel_minutes_respects_settings() -> None:
    """Speed and overhead come from settings."""
    custom = Settings(_env_file=None, travel_km_per_minute=1.0, travel_overhead_min=5)
    a = Coordinates(lat=0.0, lng=0.0)
    b = Coordinates(lat=0.8093, lng=0.0)

    assert travel_minutes(a, b, custom) == 95


def test_route_distance_skips_legs_without_coordinates() -> None:
    """Only consecutive pairs that both have coordinates contribute."""
    activities = [
        Activity(id="a", title="A", coordinates=Coordinates(lat=0.0, lng=0.0)),
        Activity(id="b", title="B", coordinates=Coordinates(lat=0.8093, lng=0.0)),
        Activity(id="c", title="C"),
        Activity(id="d", title="D", coordinates=Coordinates(lat=1.0, lng=1.0)),
    ]

    assert route_distance_km(activities) == pytest.approx(90.0, abs=0.05)


def test_route_distance_empty_list() -> None:
    """No activities means no distance."""
    assert route_distance_km([]) == 0.0
