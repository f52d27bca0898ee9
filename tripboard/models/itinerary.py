"""Itinerary models - trip aggregate, days and trash items."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tripboard.models.accommodation import Accommodation
from tripboard.models.activity import Activity, Suggestion
from tripboard.models.common import Stats, TrashItemType


class Day(BaseModel):
    """One calendar day of the trip."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    trip_id: str | None = Field(default=None, alias="tripId")
    day_number: int = Field(alias="day", ge=1)
    theme: str = ""
    stats: Stats | None = None
    accommodation: Accommodation | None = None
    activities: list[Activity] = Field(default_factory=list)


class TrashItem(BaseModel):
    """Soft-deleted activity or accommodation awaiting restore or purge."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: TrashItemType
    original_day_id: str = Field(alias="originalDayId")
    description: str
    payload: Activity | Accommodation
    deleted_at: datetime = Field(alias="deletedAt")

    @model_validator(mode="before")
    @classmethod
    def parse_payload_by_type(cls, data: Any) -> Any:
        """Parse the payload according to the type discriminator."""
        if not isinstance(data, dict):
            return data
        payload = data.get("payload")
        if not isinstance(payload, dict):
            return data
        item_type = data.get("type")
        if isinstance(item_type, TrashItemType):
            item_type = item_type.value
        model = Accommodation if item_type == TrashItemType.accommodation.value else Activity
        return {**data, "payload": model.model_validate(payload)}

    @model_validator(mode="after")
    def validate_payload_matches_type(self) -> "TrashItem":
        """Ensure the payload class agrees with the type discriminator."""
        expected = Accommodation if self.type == TrashItemType.accommodation else Activity
        if not isinstance(self.payload, expected):
            raise ValueError(
                f"Trash item {self.id} has type {self.type.value} "
                f"but payload {type(self.payload).__name__}"
            )
        return self


class Trip(BaseModel):
    """Root aggregate: ordered days plus the trash bin."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = Field(default="", alias="trip_title")
    currency: str = "USD"
    days: list[Day] = Field(default_factory=list, alias="itinerary")
    suggestions: list[Suggestion] = Field(default_factory=list, alias="sidebar_suggestions")
    trash_bin: list[TrashItem] = Field(default_factory=list, alias="trashBin")

    @property
    def total_days(self) -> int:
        """Number of days currently in the trip."""
        return len(self.days)

    def persisted_payload(self) -> dict[str, Any]:
        """JSON payload for storage; draft activities are UI-only and left out."""
        payload = self.model_dump(mode="json", by_alias=True)
        for day in payload["itinerary"]:
            day["activities"] = [a for a in day["activities"] if not a["isDraft"]]
        return payload

    @model_validator(mode="after")
    def normalise_day_numbers(self) -> "Trip":
        """Day numbers always follow sequence order (1..N)."""
        for index, day in enumerate(self.days):
            day.day_number = index + 1
        return self
