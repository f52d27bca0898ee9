"""Tests for the day timeline recalculator."""

from datetime import datetime

from tripboard.config import Settings
from tripboard.models import FLEXIBLE_TIME, Activity, Coordinates, TimeSlot
from tripboard.timeline.recalculate import format_clock, recalculate_day_timeline

DERIVED_FIELDS = {"time", "time_slot", "travel_time_from_prev"}


def make_activity(
    activity_id: str,
    duration: int | None = None,
    coords: tuple[float, float] | None = None,
) -> Activity:
    """Helper to create a test activity."""
    return Activity(
        id=activity_id,
        title=f"Activity {activity_id}",
        location="Somewhere",
        description="Test activity",
        cost_estimate=10,
        duration_minutes=duration,
        coordinates=Coordinates(lat=coords[0], lng=coords[1]) if coords else None,
    )


def test_ninety_km_example(settings: Settings) -> None:
    """A (60 min) then B ~90 km away (45 min): B starts 1:15 PM, ends 2:00 PM."""
    a = make_activity("a", duration=60, coords=(0.0, 0.0))
    b = make_activity("b", duration=45, coords=(0.8093, 0.0))

    result = recalculate_day_timeline([a, b], settings)

    assert result[0].time == "9:00 AM"
    assert result[0].time_slot == TimeSlot(start="9:00 AM", end="10:00 AM")
    assert result[0].travel_time_from_prev == 0

    assert result[1].travel_time_from_prev == 195
    assert result[1].time == "1:15 PM"
    assert result[1].time_slot == TimeSlot(start="1:15 PM", end="2:00 PM")


def test_missing_coordinates_use_default_buffer(settings: Settings) -> None:
    """Without coordinates on both sides the 30-minute buffer applies."""
    a = make_activity("a", duration=60, coords=(0.0, 0.0))
    b = make_activity("b", duration=60)

    result = recalculate_day_timeline([a, b], settings)

    assert result[1].travel_time_from_prev == 30
    assert result[1].time == "10:30 AM"


def test_unset_or_zero_duration_defaults_to_two_hours(settings: Settings) -> None:
    """Duration None or 0 both mean the 120-minute default."""
    a = make_activity("a", duration=None)
    b = make_activity("b", duration=0)

    result = recalculate_day_timeline([a, b], settings)

    assert result[0].time_slot == TimeSlot(start="9:00 AM", end="11:00 AM")
    assert result[1].time_slot == TimeSlot(start="11:30 AM", end="1:30 PM")


def test_malformed_coordinates_fall_back_to_buffer(settings: Settings) -> None:
    """Out-of-range coordinates behave like missing ones."""
    a = make_activity("a", duration=60, coords=(95.0, 0.0))
    b = make_activity("b", duration=60, coords=(0.0, 0.0))

    result = recalculate_day_timeline([a, b], settings)

    assert result[1].travel_time_from_prev == 30
    assert result[1].time == "10:30 AM"


def test_recalculate_is_idempotent(settings: Settings) -> None:
    """Running the recalculator on its own output changes nothing."""
    activities = [
        make_activity("a", duration=45, coords=(35.6895, 139.6917)),
        make_activity("b", duration=None),
        make_activity("c", duration=90, coords=(35.7148, 139.7967)),
        make_activity("d", duration=30, coords=(35.6586, 139.7454)),
    ]

    once = recalculate_day_timeline(activities, settings)
    twice = recalculate_day_timeline(once, settings)

    assert [a.model_dump() for a in twice] == [a.model_dump() for a in once]


def test_recalculate_preserves_order_and_non_derived_fields(settings: Settings) -> None:
    """Only time, time_slot and travel_time_from_prev are overwritten."""
    activities = [
        make_activity("x", duration=30),
        make_activity("y", duration=60, coords=(1.0, 1.0)),
        make_activity("z", duration=90, coords=(1.1, 1.1)),
    ]

    result = recalculate_day_timeline(activities, settings)

    assert [a.id for a in result] == ["x", "y", "z"]
    for before, after in zip(activities, result):
        assert before.model_dump(exclude=DERIVED_FIELDS) == after.model_dump(
            exclude=DERIVED_FIELDS
        )


def test_recalculate_does_not_mutate_input(settings: Settings) -> None:
    """The input list and its activities are left untouched."""
    activities = [make_activity("a", duration=60), make_activity("b", duration=60)]

    recalculate_day_timeline(activities, settings)

    assert all(a.time == FLEXIBLE_TIME for a in activities)
    assert all(a.time_slot is None for a in activities)


def test_empty_list_returns_empty(settings: Settings) -> None:
    """An empty day stays empty."""
    assert recalculate_day_timeline([], settings) == []


def test_clock_wraps_past_midnight(settings: Settings) -> None:
    """Only wall-clock time is shown, so long days wrap around."""
    activities = [make_activity("a", duration=600), make_activity("b", duration=600)]

    result = recalculate_day_timeline(activities, settings)

    assert result[0].time_slot == TimeSlot(start="9:00 AM", end="7:00 PM")
    assert result[1].time_slot == TimeSlot(start="7:30 PM", end="5:30 AM")


def test_start_hour_comes_from_settings() -> None:
    """The day starts at settings.day_start_hour."""
    early = Settings(_env_file=None, day_start_hour=7)

    result = recalculate_day_timeline([make_activity("a", duration=30)], early)

    assert result[0].time == "7:00 AM"


def test_format_clock_edges() -> None:
    """Midnight and noon use 12, minutes are zero padded."""
    assert format_clock(datetime(2000, 1, 1, 0, 5)) == "12:05 AM"
    assert format_clock(datetime(2000, 1, 1, 12, 0)) == "12:00 PM"
    assert format_clock(datetime(2000, 1, 1, 9, 45)) == "9:45 AM"
    assert format_clock(datetime(2000, 1, 1, 23, 59)) == "11:59 PM"
