"""Drop-target resolution against the current board state."""

from tripboard.engine.mutations import ItineraryEngine
from tripboard.models.drag import (
    ActivityListZone,
    ActivityTarget,
    DayCardTarget,
    DropTarget,
    HotelZone,
)


def resolve_activity_slot(
    engine: ItineraryEngine, target: DropTarget | None
) -> tuple[str, int | None] | None:
    """Resolve where an activity dropped on `target` would land.

    Returns:
        (day_id, index) where index None means "append"; None when the
        target cannot receive activities or refers to a stale id
    """
    if isinstance(target, ActivityTarget):
        located = engine.locate_activity(target.activity_id)
        if located is None:
            return None
        day, index = located
        return day.id, index
    if isinstance(target, (ActivityListZone, DayCardTarget)):
        if engine.find_day(target.day_id) is None:
            return None
        return target.day_id, None
    return None


def resolve_accommodation_day(engine: ItineraryEngine, target: DropTarget | None) -> str | None:
    """Day id for an accommodation drop (hotel zone or day card), if valid."""
    if not isinstance(target, (HotelZone, DayCardTarget)):
        return None
    return target.day_id if engine.find_day(target.day_id) is not None else None


def resolve_day_index(engine: ItineraryEngine, target: DropTarget | None) -> int | None:
    """Position in the day sequence of the day under `target`, if any."""
    if target is None:
        return None
    if isinstance(target, ActivityTarget):
        day_id = engine.find_day_id(target.activity_id)
    else:
        day_id = target.day_id
    if day_id is None:
        return None
    for index, day in enumerate(engine.trip.days):
        if day.id == day_id:
            return index
    return None
