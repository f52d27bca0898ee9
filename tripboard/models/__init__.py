"""Models package - re-exports for convenience."""

from tripboard.models.accommodation import Accommodation
from tripboard.models.activity import FLEXIBLE_TIME, Activity, Suggestion
from tripboard.models.budget import BudgetSummary
from tripboard.models.common import (
    ActivityCategory,
    ActivityStatus,
    BookingStatus,
    Coordinates,
    LodgingType,
    Stats,
    TimeSlot,
    TrashItemType,
)
from tripboard.models.drag import (
    ActivityListZone,
    ActivityTarget,
    DayCardTarget,
    DragItem,
    DragKind,
    DragOutcome,
    DragPhase,
    DropTarget,
    ExistingActivityDrag,
    HotelZone,
    SuggestionAccommodationDrag,
    SuggestionActivityDrag,
    WholeDayDrag,
)
from tripboard.models.itinerary import Day, TrashItem, Trip

__all__ = [
    # Common
    "Coordinates",
    "TimeSlot",
    "Stats",
    "ActivityCategory",
    "ActivityStatus",
    "LodgingType",
    "BookingStatus",
    "TrashItemType",
    # Activity
    "Activity",
    "Suggestion",
    "FLEXIBLE_TIME",
    # Accommodation
    "Accommodation",
    # Itinerary
    "Day",
    "Trip",
    "TrashItem",
    # Drag
    "DragKind",
    "DragItem",
    "SuggestionActivityDrag",
    "SuggestionAccommodationDrag",
    "ExistingActivityDrag",
    "WholeDayDrag",
    "DropTarget",
    "ActivityTarget",
    "ActivityListZone",
    "HotelZone",
    "DayCardTarget",
    "DragPhase",
    "DragOutcome",
    # Budget
    "BudgetSummary",
]
