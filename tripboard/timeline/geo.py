"""Geo-temporal estimation: haversine distance and travel-time buffers.

No external HTTP calls are made. Travel time models an effective speed of
`travel_km_per_minute` plus a fixed `travel_overhead_min` per leg (parking,
boarding, ...).
"""

import math
from collections.abc import Sequence

from tripboard.config import Settings, get_settings
from tripboard.models.activity import Activity
from tripboard.models.common import Coordinates

EARTH_RADIUS_KM = 6371.0


def _usable(point: Coordinates) -> bool:
    """Whether a point is finite and inside the lat/lng numeric ranges."""
    return (
        math.isfinite(point.lat)
        and math.isfinite(point.lng)
        and -90.0 <= point.lat <= 90.0
        and -180.0 <= point.lng <= 180.0
    )


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two points (haversine formula) in km.

    Returns NaN for malformed coordinates; callers fall back to the default
    travel buffer in that case.
    """
    if not (_usable(a) and _usable(b)):
        return math.nan

    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lam = math.radians(b.lng - a.lng)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    # Float error can push h marginally outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def travel_minutes(a: Coordinates, b: Coordinates, settings: Settings | None = None) -> int:
    """Estimated travel time between two points in whole minutes.

    ceil(distance / speed) + overhead. Non-finite distances yield the
    default buffer so NaN never reaches a displayed timeline.
    """
    settings = settings or get_settings()
    km = distance_km(a, b)
    if not math.isfinite(km):
        return settings.default_travel_buffer_min
    return math.ceil(km / settings.travel_km_per_minute) + settings.travel_overhead_min


def route_distance_km(activities: Sequence[Activity]) -> float:
    """Sum of leg distances between consecutive activities with usable coordinates."""
    total = 0.0
    for prev, curr in zip(activities, activities[1:]):
        if prev.coordinates is None or curr.coordinates is None:
            continue
        km = distance_km(prev.coordinates, curr.coordinates)
        if math.isfinite(km):
            total += km
    return total
