"""Activity and suggestion models."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tripboard.models.common import ActivityCategory, ActivityStatus, Coordinates, TimeSlot

FLEXIBLE_TIME = "Flexible"


def _coerce_coordinates(value: Any) -> Any:
    """Normalise missing or non-numeric coordinates to None."""
    if value is None or isinstance(value, Coordinates):
        return value
    if not isinstance(value, dict):
        return None
    try:
        lat = float(value["lat"])
        lng = float(value["lng"])
    except (KeyError, TypeError, ValueError):
        return None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return {"lat": lat, "lng": lng}


class Activity(BaseModel):
    """A single scheduled stop within a day."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    location: str = ""
    description: str = ""
    cost_estimate: float = Field(default=0.0, ge=0)
    category: ActivityCategory = ActivityCategory.SIGHTSEEING
    duration_minutes: int | None = Field(default=None, ge=0, alias="durationMinutes")
    coordinates: Coordinates | None = None

    # Derived by the timeline recalculator
    time: str = FLEXIBLE_TIME
    time_slot: TimeSlot | None = Field(default=None, alias="timeSlot")
    travel_time_from_prev: int | None = Field(default=None, alias="travelTimeFromPrev")

    status: ActivityStatus = ActivityStatus.planned
    is_draft: bool = Field(default=False, alias="isDraft")

    @field_validator("coordinates", mode="before")
    @classmethod
    def normalise_coordinates(cls, v: Any) -> Any:
        """Drop coordinates that cannot be used for travel estimation."""
        return _coerce_coordinates(v)


class Suggestion(BaseModel):
    """Activity-like suggestion from an external source (read-only)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    title: str
    reason: str = ""
    location: str = ""
    description: str = ""
    cost_estimate: float = Field(default=0.0, ge=0)
    category: ActivityCategory = ActivityCategory.SIGHTSEEING
    duration_minutes: int | None = Field(default=None, ge=0, alias="durationMinutes")
    coordinates: Coordinates | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("coordinates", mode="before")
    @classmethod
    def normalise_coordinates(cls, v: Any) -> Any:
        """Drop coordinates that cannot be used for travel estimation."""
        return _coerce_coordinates(v)
