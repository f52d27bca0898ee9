"""Timeline recalculation for a single day's ordered activity list."""

from collections.abc import Sequence
from datetime import datetime, timedelta

from tripboard.config import Settings, get_settings
from tripboard.models.activity import Activity
from tripboard.models.common import TimeSlot
from tripboard.timeline.geo import travel_minutes

# Only the wall-clock component is displayed; the date is an arbitrary anchor.
_ANCHOR = datetime(2000, 1, 1)


def format_clock(moment: datetime) -> str:
    """Format a moment as a 12-hour clock string, e.g. "9:45 AM"."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def leg_minutes(prev: Activity, curr: Activity, settings: Settings | None = None) -> int:
    """Travel time from `prev` to `curr`, or the default buffer without coordinates."""
    settings = settings or get_settings()
    if prev.coordinates is None or curr.coordinates is None:
        return settings.default_travel_buffer_min
    return travel_minutes(prev.coordinates, curr.coordinates, settings)


def recalculate_day_timeline(
    activities: Sequence[Activity],
    settings: Settings | None = None,
) -> list[Activity]:
    """Derive start/end times and travel buffers for an ordered activity list.

    This is a pure function: the input activities are never mutated and the
    output preserves their order and identity. Only `time`, `time_slot` and
    `travel_time_from_prev` are overwritten.

    Args:
        activities: Activities in visiting order for one day
        settings: Optional settings override (start hour, defaults)

    Returns:
        New Activity objects with derived timeline fields
    """
    settings = settings or get_settings()
    clock = _ANCHOR.replace(hour=settings.day_start_hour)

    result: list[Activity] = []
    for index, activity in enumerate(activities):
        travel = 0 if index == 0 else leg_minutes(activities[index - 1], activity, settings)

        clock += timedelta(minutes=travel)
        start = format_clock(clock)

        duration = activity.duration_minutes or settings.default_activity_minutes
        clock += timedelta(minutes=duration)
        end = format_clock(clock)

        result.append(
            activity.model_copy(
                update={
                    "time": start,
                    "time_slot": TimeSlot(start=start, end=end),
                    "travel_time_from_prev": travel,
                },
                deep=True,
            )
        )

    return result
