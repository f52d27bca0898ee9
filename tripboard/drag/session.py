"""Drag session controller - turns a pointer gesture into engine mutations.

States: IDLE -> DRAGGING -> {COMMITTING, CANCELLED} -> IDLE.

Only existing activities mutate state while hovering: crossing into another
day's activity list or onto one of its activities moves the activity
immediately. The day sequence is snapshotted when such a drag starts and
restored if the gesture is cancelled or dropped nowhere.
Events that arrive while no session is active are ignored.
"""

import logging

from tripboard.adapters.suggestions import suggestion_to_activity
from tripboard.drag.targets import (
    resolve_accommodation_day,
    resolve_activity_slot,
    resolve_day_index,
)
from tripboard.engine.mutations import ItineraryEngine
from tripboard.models.drag import (
    ActivityListZone,
    ActivityTarget,
    DragItem,
    DragOutcome,
    DragPhase,
    DropTarget,
    ExistingActivityDrag,
    SuggestionAccommodationDrag,
    SuggestionActivityDrag,
    WholeDayDrag,
)
from tripboard.models.itinerary import Day
from tripboard.utils.logging import StructuredMutationLogger
from tripboard.utils.metrics import PrometheusBoardMetrics

logger = logging.getLogger(__name__)


class DragSessionController:
    """Single-session drag state machine over an ItineraryEngine."""

    def __init__(
        self,
        engine: ItineraryEngine,
        *,
        metrics: PrometheusBoardMetrics | None = None,
        mutation_logger: StructuredMutationLogger | None = None,
    ) -> None:
        self._engine = engine
        self._metrics = metrics or PrometheusBoardMetrics()
        self._logger = mutation_logger or StructuredMutationLogger()
        self._phase = DragPhase.IDLE
        self._item: DragItem | None = None
        self._snapshot: list[Day] | None = None
        self._hover_moved = False
        self._hover_target: DropTarget | None = None

    @property
    def phase(self) -> DragPhase:
        return self._phase

    @property
    def active_item(self) -> DragItem | None:
        """Payload of the current drag, for rendering the drag preview."""
        return self._item

    def start(self, item: DragItem) -> None:
        """Begin a drag session."""
        if self._phase != DragPhase.IDLE:
            logger.warning(f"[drag] start ignored for item_id={item.id}: session already active")
            return

        self._item = item
        self._hover_moved = False
        self._hover_target = None
        self._snapshot = (
            self._engine.snapshot_days() if isinstance(item, ExistingActivityDrag) else None
        )
        self._phase = DragPhase.DRAGGING

    def over(self, target: DropTarget | None) -> None:
        """Pointer crossed a drop-target boundary."""
        item = self._item
        if self._phase != DragPhase.DRAGGING or not isinstance(item, ExistingActivityDrag):
            return
        if not isinstance(target, (ActivityListZone, ActivityTarget)):
            # Day cards and hotel zones only take part at drop time
            return

        located = self._engine.locate_activity(item.id)
        slot = resolve_activity_slot(self._engine, target)
        if located is None or slot is None:
            return

        current_day, _ = located
        target_day_id, index = slot
        if target_day_id == current_day.id:
            # Same-day reordering waits for the drop
            return

        if self._engine.move_activity_between_days(current_day.id, target_day_id, item.id, index):
            self._hover_moved = True
            self._hover_target = target

    def end(self, target: DropTarget | None) -> DragOutcome:
        """Pointer released; commit the drop or cancel when there is no target."""
        if self._phase != DragPhase.DRAGGING or self._item is None:
            return DragOutcome(kind=None, committed=False)
        if target is None:
            return self._cancel()

        self._phase = DragPhase.COMMITTING
        operation = self._commit(self._item, target)
        if operation is None:
            return self._cancel()

        outcome = DragOutcome(kind=self._item.kind, committed=True, operation=operation)
        self._finish(outcome)
        return outcome

    def cancel(self) -> DragOutcome:
        """Explicit cancellation (escape key, library cancel event)."""
        if self._phase != DragPhase.DRAGGING or self._item is None:
            return DragOutcome(kind=None, committed=False)
        return self._cancel()

    # --- internals ---

    def _commit(self, item: DragItem, target: DropTarget) -> str | None:
        """Apply the drop; returns the applied operation name or None."""
        engine = self._engine

        if isinstance(item, SuggestionActivityDrag):
            slot = resolve_activity_slot(engine, target)
            if slot is None:
                return None
            day_id, index = slot
            activity = suggestion_to_activity(
                item.suggestion, engine.ids.new_id("act"), engine.settings
            )
            return "add_activity" if engine.add_activity(day_id, activity, index) else None

        if isinstance(item, SuggestionAccommodationDrag):
            day_id = resolve_accommodation_day(engine, target)
            if day_id is None:
                return None
            stay = item.accommodation.model_copy(update={"id": engine.ids.new_id("acc")})
            return "set_accommodation" if engine.set_accommodation(day_id, stay) else None

        if isinstance(item, ExistingActivityDrag):
            return self._commit_existing_activity(item, target)

        if isinstance(item, WholeDayDrag):
            old_index = next(
                (i for i, day in enumerate(engine.trip.days) if day.id == item.id), None
            )
            new_index = resolve_day_index(engine, target)
            if old_index is None or new_index is None:
                return None
            return "reorder_days" if engine.reorder_days(old_index, new_index) else None

        return None

    def _commit_existing_activity(
        self, item: ExistingActivityDrag, target: DropTarget
    ) -> str | None:
        engine = self._engine
        located = engine.locate_activity(item.id)
        slot = resolve_activity_slot(engine, target)
        if located is None or slot is None:
            return None

        current_day, current_index = located
        target_day_id, index = slot

        if target_day_id != current_day.id:
            moved = engine.move_activity_between_days(
                current_day.id, target_day_id, item.id, index
            )
            return "move_activity" if moved else None

        if self._hover_moved and target == self._hover_target:
            # Dropped where the hover move already placed it
            return "move_activity"

        if index is not None and index != current_index:
            if engine.reorder_activity(current_day.id, current_index, index):
                return "reorder_activity"
        # Cross-day move already applied while hovering
        return "move_activity" if self._hover_moved else None

    def _cancel(self) -> DragOutcome:
        item = self._item
        self._phase = DragPhase.CANCELLED

        rolled_back = False
        if self._hover_moved and self._snapshot is not None:
            self._engine.rollback_days(self._snapshot)
            rolled_back = True

        outcome = DragOutcome(
            kind=item.kind if item is not None else None, committed=False, rolled_back=rolled_back
        )
        self._finish(outcome)
        return outcome

    def _finish(self, outcome: DragOutcome) -> None:
        kind = outcome.kind.value if outcome.kind else "unknown"
        result = "committed" if outcome.committed else "cancelled"
        self._metrics.inc_drag(kind, result)
        self._logger.log_drag(kind, result, outcome.operation)

        self._phase = DragPhase.IDLE
        self._item = None
        self._snapshot = None
        self._hover_moved = False
        self._hover_target = None
