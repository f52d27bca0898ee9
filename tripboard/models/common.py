"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Geographic coordinates (WGS84).

    Ranges are not validated here; the timeline treats out-of-range or
    non-finite values as missing geography.
    """

    lat: float
    lng: float


class TimeSlot(BaseModel):
    """Derived display window for an activity."""

    start: str
    end: str


class Stats(BaseModel):
    """Aggregated day statistics (derived, never authoritative)."""

    model_config = ConfigDict(populate_by_name=True)

    total_cost: float = Field(default=0.0, alias="totalCost")
    total_distance_km: float = Field(default=0.0, alias="totalDistanceKm")
    activity_count: int = Field(default=0, alias="activityCount")


class ActivityCategory(str, Enum):
    """Activity category."""

    FOOD = "Food"
    SIGHTSEEING = "Sightseeing"
    ADVENTURE = "Adventure"
    RELAXATION = "Relaxation"
    TRANSPORT = "Transport"
    NIGHTLIFE = "Nightlife"


class ActivityStatus(str, Enum):
    """Lifecycle status of a scheduled activity."""

    planned = "planned"
    completed = "completed"
    skipped = "skipped"


class LodgingType(str, Enum):
    """Lodging type."""

    hotel = "hotel"
    bnb = "bnb"
    resort = "resort"


class BookingStatus(str, Enum):
    """Booking status for a lodging choice."""

    draft = "draft"
    confirmed = "confirmed"
    booked = "booked"


class TrashItemType(str, Enum):
    """Kind of payload held by a trash item."""

    activity = "activity"
    accommodation = "accommodation"
