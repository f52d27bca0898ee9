"""Trash bin service - the only path by which board items are removed."""

from collections.abc import Callable
from datetime import datetime

from tripboard.models.accommodation import Accommodation
from tripboard.models.activity import Activity
from tripboard.models.common import TrashItemType
from tripboard.models.itinerary import TrashItem, Trip
from tripboard.utils.ids import IdGenerator
from tripboard.utils.metrics import PrometheusBoardMetrics


def describe_payload(payload: Activity | Accommodation) -> str:
    """Default human-readable trash description."""
    if isinstance(payload, Accommodation):
        return f"Accommodation: {payload.hotel_name}"
    return f"Activity: {payload.title}"


class TrashBin:
    """Soft-delete holding area backed by ``trip.trash_bin``."""

    def __init__(
        self,
        trip: Trip,
        ids: IdGenerator,
        clock: Callable[[], datetime],
        metrics: PrometheusBoardMetrics,
    ) -> None:
        self._trip = trip
        self._ids = ids
        self._clock = clock
        self._metrics = metrics

    @property
    def items(self) -> list[TrashItem]:
        return self._trip.trash_bin

    def __len__(self) -> int:
        return len(self._trip.trash_bin)

    def record(
        self,
        item_type: TrashItemType,
        origin_day_id: str,
        payload: Activity | Accommodation,
        description: str | None = None,
    ) -> TrashItem:
        """Wrap a removed item and push it onto the trash bin.

        Args:
            item_type: Discriminator for the payload
            origin_day_id: Day the item was removed from
            payload: The removed activity or accommodation
            description: Optional override for the display text

        Returns:
            The recorded TrashItem
        """
        item = TrashItem(
            id=self._ids.new_id("trash"),
            type=item_type,
            original_day_id=origin_day_id,
            description=description or describe_payload(payload),
            payload=payload,
            deleted_at=self._clock(),
        )
        self._trip.trash_bin.append(item)
        self._metrics.inc_trash("recorded", item_type.value)
        return item

    def take(self, trash_id: str) -> TrashItem | None:
        """Remove and return a trash item, or None if it does not exist."""
        for index, item in enumerate(self._trip.trash_bin):
            if item.id == trash_id:
                del self._trip.trash_bin[index]
                self._metrics.inc_trash("restored", item.type.value)
                return item
        return None

    def clear(self) -> int:
        """Irrevocably discard all trash items; returns how many were purged."""
        purged = len(self._trip.trash_bin)
        for item in self._trip.trash_bin:
            self._metrics.inc_trash("purged", item.type.value)
        self._trip.trash_bin.clear()
        return purged
