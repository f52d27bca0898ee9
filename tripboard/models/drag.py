"""Drag-and-drop models - dragged items and drop targets as tagged unions."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from tripboard.models.accommodation import Accommodation
from tripboard.models.activity import Activity, Suggestion
from tripboard.models.itinerary import Day


class DragKind(str, Enum):
    """Semantic kind of the dragged item."""

    SUGGESTION_ACTIVITY = "new-activity-from-suggestion"
    SUGGESTION_ACCOMMODATION = "new-accommodation-from-suggestion"
    EXISTING_ACTIVITY = "existing-activity"
    WHOLE_DAY = "whole-day"


class SuggestionActivityDrag(BaseModel):
    """Sidebar activity suggestion being dragged onto the board."""

    kind: Literal[DragKind.SUGGESTION_ACTIVITY] = DragKind.SUGGESTION_ACTIVITY
    id: str
    suggestion: Suggestion


class SuggestionAccommodationDrag(BaseModel):
    """Sidebar accommodation suggestion being dragged onto the board."""

    kind: Literal[DragKind.SUGGESTION_ACCOMMODATION] = DragKind.SUGGESTION_ACCOMMODATION
    id: str
    accommodation: Accommodation


class ExistingActivityDrag(BaseModel):
    """An activity already on the board; `id` is the activity id."""

    kind: Literal[DragKind.EXISTING_ACTIVITY] = DragKind.EXISTING_ACTIVITY
    id: str
    activity: Activity


class WholeDayDrag(BaseModel):
    """A whole day card; `id` is the day id."""

    kind: Literal[DragKind.WHOLE_DAY] = DragKind.WHOLE_DAY
    id: str
    day: Day


DragItem = Annotated[
    SuggestionActivityDrag | SuggestionAccommodationDrag | ExistingActivityDrag | WholeDayDrag,
    Field(discriminator="kind"),
]


class ActivityTarget(BaseModel):
    """Pointer is over an activity card."""

    kind: Literal["activity"] = "activity"
    activity_id: str


class ActivityListZone(BaseModel):
    """Pointer is over a day's activity list (append zone)."""

    kind: Literal["activity-list"] = "activity-list"
    day_id: str


class HotelZone(BaseModel):
    """Pointer is over a day's accommodation slot."""

    kind: Literal["hotel-zone"] = "hotel-zone"
    day_id: str


class DayCardTarget(BaseModel):
    """Pointer is over a day card as a whole."""

    kind: Literal["day-card"] = "day-card"
    day_id: str


DropTarget = Annotated[
    ActivityTarget | ActivityListZone | HotelZone | DayCardTarget,
    Field(discriminator="kind"),
]


class DragPhase(str, Enum):
    """Drag session state."""

    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"
    CANCELLED = "cancelled"


class DragOutcome(BaseModel):
    """Result of ending or cancelling a drag session."""

    kind: DragKind | None
    committed: bool
    operation: str | None = None
    rolled_back: bool = False
