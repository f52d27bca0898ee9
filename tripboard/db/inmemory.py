"""In-memory implementation of the trip repository."""

from typing import Any

from tripboard.models.itinerary import Trip


class InMemoryTripRepository:
    """In-memory implementation of TripRepository.

    Trips are stored as their JSON payload so callers never share mutable
    state with the store.
    """

    def __init__(self) -> None:
        self._trips: dict[str, dict[str, Any]] = {}

    def load_trip(self, trip_id: str) -> Trip | None:
        """Load trip by ID."""
        payload = self._trips.get(trip_id)
        if payload is None:
            return None
        return Trip.model_validate(payload)

    def save_trip(self, trip: Trip) -> bool:
        """Insert or replace a trip."""
        self._trips[trip.id] = trip.persisted_payload()
        return True
