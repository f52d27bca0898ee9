"""SQL implementation of the trip repository."""

import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tripboard.db.models import TripRecord
from tripboard.models.itinerary import Trip

logger = logging.getLogger(__name__)


class SqlTripRepository:
    """SQL implementation of TripRepository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def load_trip(self, trip_id: str) -> Trip | None:
        """Load trip by ID; stored payloads that no longer validate count as not found."""
        record = self._session.get(TripRecord, trip_id)
        if record is None:
            return None

        try:
            return Trip.model_validate(record.payload)
        except ValidationError as e:
            logger.error(f"[load_trip] trip_id={trip_id} has an invalid payload: {e}")
            return None

    def save_trip(self, trip: Trip) -> bool:
        """Insert or replace a trip."""
        payload = trip.persisted_payload()

        try:
            record = self._session.get(TripRecord, trip.id)
            if record is None:
                self._session.add(TripRecord(trip_id=trip.id, title=trip.title, payload=payload))
            else:
                record.title = trip.title
                record.payload = payload
            self._session.commit()
        except SQLAlchemyError as e:
            logger.error(f"[save_trip] trip_id={trip.id} failed: {e}", exc_info=True)
            self._session.rollback()
            return False

        return True
