"""Repository protocol interfaces for trip persistence."""

from typing import Protocol

from tripboard.models.itinerary import Trip


class TripRepository(Protocol):
    """Repository for loading and saving whole trips."""

    def load_trip(self, trip_id: str) -> Trip | None:
        """Load a trip.

        Args:
            trip_id: Trip identifier

        Returns:
            Trip, or None if not found
        """
        ...

    def save_trip(self, trip: Trip) -> bool:
        """Insert or replace a trip.

        Args:
            trip: Trip produced by the mutation engine

        Returns:
            True on success, False on failure
        """
        ...
