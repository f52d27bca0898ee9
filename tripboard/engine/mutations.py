"""Itinerary mutation engine - the single owner of a Trip.

Every public mutation runs synchronously under one re-entrant lock and leaves
the trip consistent: each day whose activity list changed is re-run through
the timeline recalculator and day numbers stay contiguous (1..N).

Lookups that fail (stale day/activity/trash ids, out-of-range indices) make
the operation a silent no-op. Mutations return True when they changed state.
"""

import threading
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from tripboard.config import Settings, get_settings
from tripboard.engine.trash import TrashBin
from tripboard.models.accommodation import Accommodation
from tripboard.models.activity import Activity
from tripboard.models.common import TrashItemType
from tripboard.models.itinerary import Day, Trip
from tripboard.timeline.recalculate import recalculate_day_timeline
from tripboard.utils.ids import IdGenerator, UuidIdGenerator
from tripboard.utils.logging import StructuredMutationLogger
from tripboard.utils.metrics import PrometheusBoardMetrics

# Day fields owned by the engine's structural operations
_STRUCTURAL_DAY_FIELDS = frozenset({"id", "day_number", "activities", "accommodation"})


def _normalise_fields(model: type[BaseModel], fields: Mapping[str, Any]) -> dict[str, Any]:
    """Map aliases to attribute names and drop keys the model does not know."""
    by_alias = {info.alias: name for name, info in model.model_fields.items() if info.alias}
    normalised: dict[str, Any] = {}
    for key, value in fields.items():
        name = by_alias.get(key, key)
        if name in model.model_fields:
            normalised[name] = value
    return normalised


class ItineraryEngine:
    """Atomic add/remove/move/reorder operations over a Trip."""

    def __init__(
        self,
        trip: Trip,
        *,
        ids: IdGenerator | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
        metrics: PrometheusBoardMetrics | None = None,
        mutation_logger: StructuredMutationLogger | None = None,
    ) -> None:
        self._trip = trip
        self._ids = ids or UuidIdGenerator()
        self._settings = settings or get_settings()
        self._clock = clock or datetime.now
        self._metrics = metrics or PrometheusBoardMetrics()
        self._logger = mutation_logger or StructuredMutationLogger()
        self._lock = threading.RLock()
        self._selected_day_id: str | None = None
        self.trash = TrashBin(trip, self._ids, self._clock, self._metrics)

    # --- read helpers ---

    @property
    def trip(self) -> Trip:
        return self._trip

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def ids(self) -> IdGenerator:
        return self._ids

    @property
    def selected_day_id(self) -> str | None:
        return self._selected_day_id

    def find_day(self, day_id: str) -> Day | None:
        """Return the day with this id, if any."""
        index = self._day_index(day_id)
        return self._trip.days[index] if index != -1 else None

    def locate_activity(self, activity_id: str) -> tuple[Day, int] | None:
        """Return the owning day and position of an activity."""
        for day in self._trip.days:
            for index, activity in enumerate(day.activities):
                if activity.id == activity_id:
                    return day, index
        return None

    def find_day_id(self, item_id: str) -> str | None:
        """Resolve a day id or an activity id to the owning day's id."""
        if self._day_index(item_id) != -1:
            return item_id
        located = self.locate_activity(item_id)
        return located[0].id if located else None

    # --- activities ---

    def add_activity(self, day_id: str, activity: Activity, index: int | None = None) -> bool:
        """Insert an activity into a day (default: at the end) and recalculate."""
        with self._lock:
            day = self.find_day(day_id)
            if day is None:
                return self._done("add_activity", False, day_id=day_id)
            if self.locate_activity(activity.id) is not None:
                # An activity is owned by exactly one day
                return self._done("add_activity", False, day_id=day_id, activity_id=activity.id)

            activities = list(day.activities)
            activities.insert(self._clamp(index, len(activities)), activity)
            day.activities = recalculate_day_timeline(activities, self._settings)
            return self._done("add_activity", True, day_id=day_id, activity_id=activity.id)

    def remove_activity(self, day_id: str, activity_id: str) -> bool:
        """Move an activity from a day into the trash and recalculate the day."""
        with self._lock:
            day = self.find_day(day_id)
            index = self._activity_index(day, activity_id) if day is not None else -1
            if day is None or index == -1:
                return self._done("remove_activity", False, day_id=day_id, activity_id=activity_id)

            activities = list(day.activities)
            removed = activities.pop(index)
            self.trash.record(TrashItemType.activity, day.id, removed)
            day.activities = recalculate_day_timeline(activities, self._settings)
            return self._done("remove_activity", True, day_id=day_id, activity_id=activity_id)

    def reorder_activity(self, day_id: str, old_index: int, new_index: int) -> bool:
        """Move an activity within one day's list and recalculate."""
        with self._lock:
            day = self.find_day(day_id)
            if day is None or not 0 <= old_index < len(day.activities):
                return self._done("reorder_activity", False, day_id=day_id)

            new_index = max(0, min(new_index, len(day.activities) - 1))
            if new_index == old_index:
                return self._done("reorder_activity", False, day_id=day_id)

            activities = list(day.activities)
            moved = activities.pop(old_index)
            activities.insert(new_index, moved)
            day.activities = recalculate_day_timeline(activities, self._settings)
            return self._done("reorder_activity", True, day_id=day_id, activity_id=moved.id)

    def move_activity_between_days(
        self,
        source_day_id: str,
        target_day_id: str,
        activity_id: str,
        target_index: int | None = None,
    ) -> bool:
        """Transfer an activity to another day; both days are recalculated."""
        with self._lock:
            source = self.find_day(source_day_id)
            target = self.find_day(target_day_id)
            index = self._activity_index(source, activity_id) if source is not None else -1
            if source is None or target is None or index == -1:
                return self._done(
                    "move_activity",
                    False,
                    source_day_id=source_day_id,
                    target_day_id=target_day_id,
                    activity_id=activity_id,
                )

            if source is target:
                last = len(source.activities) - 1
                new_index = last if target_index is None else target_index
                return self.reorder_activity(source.id, index, new_index)

            source_activities = list(source.activities)
            moved = source_activities.pop(index)
            target_activities = list(target.activities)
            target_activities.insert(self._clamp(target_index, len(target_activities)), moved)

            source.activities = recalculate_day_timeline(source_activities, self._settings)
            target.activities = recalculate_day_timeline(target_activities, self._settings)
            return self._done(
                "move_activity",
                True,
                source_day_id=source_day_id,
                target_day_id=target_day_id,
                activity_id=activity_id,
            )

    def update_activity(self, day_id: str, activity_id: str, fields: Mapping[str, Any]) -> bool:
        """Merge fields into an activity, then recalculate its day.

        Raises:
            pydantic.ValidationError: If the merged activity is invalid
        """
        with self._lock:
            day = self.find_day(day_id)
            index = self._activity_index(day, activity_id) if day is not None else -1
            if day is None or index == -1:
                return self._done("update_activity", False, day_id=day_id, activity_id=activity_id)

            updates = _normalise_fields(Activity, fields)
            updates.pop("id", None)
            current = day.activities[index]
            merged = Activity.model_validate({**current.model_dump(), **updates})

            activities = list(day.activities)
            activities[index] = merged
            day.activities = recalculate_day_timeline(activities, self._settings)
            return self._done("update_activity", True, day_id=day_id, activity_id=activity_id)

    # --- accommodation ---

    def set_accommodation(self, day_id: str, accommodation: Accommodation | None) -> bool:
        """Attach, replace or clear a day's accommodation.

        Clearing trashes the existing accommodation. Replacing with a new
        value overwrites the previous one without trashing it.
        """
        with self._lock:
            day = self.find_day(day_id)
            if day is None:
                return self._done("set_accommodation", False, day_id=day_id)

            if accommodation is None:
                if day.accommodation is None:
                    return self._done("set_accommodation", False, day_id=day_id)
                self.trash.record(TrashItemType.accommodation, day.id, day.accommodation)
                day.accommodation = None
                return self._done("set_accommodation", True, day_id=day_id)

            day.accommodation = accommodation.model_copy(deep=True)
            return self._done(
                "set_accommodation", True, day_id=day_id, accommodation_id=accommodation.id
            )

    def remove_accommodation(self, day_id: str) -> bool:
        """Trash a day's accommodation."""
        return self.set_accommodation(day_id, None)

    # --- days ---

    def add_day(self, theme: str | None = None) -> Day:
        """Append an empty day with the next sequential day number."""
        with self._lock:
            day = Day(
                id=self._ids.new_id("day"),
                trip_id=self._trip.id,
                day_number=len(self._trip.days) + 1,
                theme=theme or self._settings.new_day_theme,
            )
            self._trip.days.append(day)
            self._done("add_day", True, day_id=day.id)
            return day

    def delete_day(self, day_id: str) -> bool:
        """Trash a day's contents, remove the day and renumber the rest."""
        with self._lock:
            index = self._day_index(day_id)
            if index == -1:
                return self._done("delete_day", False, day_id=day_id)

            day = self._trip.days[index]
            if day.accommodation is not None:
                self.trash.record(
                    TrashItemType.accommodation,
                    day.id,
                    day.accommodation,
                    description=f"Day {day.day_number} stay: {day.accommodation.hotel_name}",
                )
            for activity in day.activities:
                self.trash.record(
                    TrashItemType.activity,
                    day.id,
                    activity,
                    description=f"Day {day.day_number}: {activity.title}",
                )

            del self._trip.days[index]
            self._renumber()
            if self._selected_day_id == day_id:
                self._selected_day_id = None
            return self._done("delete_day", True, day_id=day_id)

    def reorder_days(self, old_index: int, new_index: int) -> bool:
        """Move a day within the sequence and renumber all days."""
        with self._lock:
            days = self._trip.days
            if not 0 <= old_index < len(days):
                return self._done("reorder_days", False)

            new_index = max(0, min(new_index, len(days) - 1))
            if new_index == old_index:
                return self._done("reorder_days", False)

            moved = days.pop(old_index)
            days.insert(new_index, moved)
            self._renumber()
            return self._done("reorder_days", True, day_id=moved.id)

    def swap_days(self, index_a: int, index_b: int) -> bool:
        """Exchange the positions of two days and renumber."""
        with self._lock:
            days = self._trip.days
            if index_a == index_b or not (0 <= index_a < len(days) and 0 <= index_b < len(days)):
                return self._done("swap_days", False)

            days[index_a], days[index_b] = days[index_b], days[index_a]
            self._renumber()
            return self._done("swap_days", True)

    def update_day(self, day_id: str, fields: Mapping[str, Any]) -> bool:
        """Merge non-temporal fields (e.g. theme) into a day; no recalculation.

        Raises:
            pydantic.ValidationError: If the merged day is invalid
        """
        with self._lock:
            index = self._day_index(day_id)
            updates = {
                k: v
                for k, v in _normalise_fields(Day, fields).items()
                if k not in _STRUCTURAL_DAY_FIELDS
            }
            if index == -1 or not updates:
                return self._done("update_day", False, day_id=day_id)

            current = self._trip.days[index]
            validated = Day.model_validate({**current.model_dump(), **updates})
            for name in updates:
                setattr(current, name, getattr(validated, name))
            return self._done("update_day", True, day_id=day_id)

    def select_day(self, day_id: str | None) -> None:
        """Set the UI's target day for restores; unknown ids clear it."""
        with self._lock:
            self._selected_day_id = day_id if day_id and self._day_index(day_id) != -1 else None

    # --- trash ---

    def restore_from_trash(self, trash_id: str) -> Day | None:
        """Reattach a trashed item to a day and return that day.

        Placement priority, first match wins: the selected day; for
        accommodations, the last day without one; the original day; the last
        day; a new "Restored Day". An accommodation whose target day is
        already occupied gets a brand-new day of its own.
        """
        with self._lock:
            item = self.trash.take(trash_id)
            if item is None:
                self._done("restore_from_trash", False, trash_id=trash_id)
                return None

            target = self._restore_target(item.type, item.original_day_id)
            payload = item.payload

            if isinstance(payload, Activity):
                target.activities = recalculate_day_timeline(
                    [*target.activities, payload], self._settings
                )
            elif target.accommodation is None:
                target.accommodation = payload
            else:
                target = self.add_day(theme=self._settings.restored_day_theme)
                target.accommodation = payload

            self._done("restore_from_trash", True, trash_id=trash_id, day_id=target.id)
            return target

    def empty_trash(self) -> int:
        """Permanently discard every trash item; returns the number purged."""
        with self._lock:
            purged = self.trash.clear()
            self._done("empty_trash", purged > 0, purged=purged)
            return purged

    # --- drag-session support ---

    def snapshot_days(self) -> list[Day]:
        """Deep copy of the current day sequence."""
        with self._lock:
            return [day.model_copy(deep=True) for day in self._trip.days]

    def rollback_days(self, snapshot: list[Day]) -> None:
        """Replace the day sequence with a snapshot taken by `snapshot_days`."""
        with self._lock:
            self._trip.days = [day.model_copy(deep=True) for day in snapshot]
            self._renumber()
            if self._selected_day_id and self._day_index(self._selected_day_id) == -1:
                self._selected_day_id = None
            self._done("rollback_days", True)

    # --- internals ---

    def _restore_target(self, item_type: TrashItemType, original_day_id: str) -> Day:
        days = self._trip.days

        if self._selected_day_id:
            selected = self.find_day(self._selected_day_id)
            if selected is not None:
                return selected

        if item_type == TrashItemType.accommodation:
            for day in reversed(days):
                if day.accommodation is None:
                    return day

        original = self.find_day(original_day_id)
        if original is not None:
            return original

        if days:
            return days[-1]

        return self.add_day(theme=self._settings.restored_day_theme)

    def _day_index(self, day_id: str) -> int:
        for index, day in enumerate(self._trip.days):
            if day.id == day_id:
                return index
        return -1

    @staticmethod
    def _activity_index(day: Day, activity_id: str) -> int:
        for index, activity in enumerate(day.activities):
            if activity.id == activity_id:
                return index
        return -1

    @staticmethod
    def _clamp(index: int | None, length: int) -> int:
        if index is None:
            return length
        return max(0, min(index, length))

    def _renumber(self) -> None:
        for index, day in enumerate(self._trip.days):
            day.day_number = index + 1

    def _done(self, op: str, applied: bool, **ids: str | int | None) -> bool:
        outcome = "applied" if applied else "noop"
        self._metrics.inc_mutation(op, outcome)
        self._logger.log_mutation(self._trip.id, op, outcome, **ids)
        return applied
