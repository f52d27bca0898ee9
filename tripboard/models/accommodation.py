"""Accommodation model - lodging attached to a single day."""

import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tripboard.models.common import BookingStatus, LodgingType


def _new_accommodation_id() -> str:
    return f"acc-{uuid.uuid4().hex[:12]}"


class Accommodation(BaseModel):
    """A lodging choice.

    Each day holds its own copy; a multi-night stay is represented as
    independent copies on consecutive days with no shared identity.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_accommodation_id)
    type: LodgingType = LodgingType.hotel
    hotel_name: str = Field(alias="hotelName")
    address: str = ""
    price_per_night: float = Field(default=0.0, ge=0, alias="pricePerNight")
    rating: float = Field(default=0.0, ge=0, le=5)
    booking_status: BookingStatus = Field(default=BookingStatus.draft, alias="bookingStatus")
    contact_number: str = Field(default="", alias="contactNumber")
    booking_url: str = Field(default="", alias="bookingUrl")
    map_link: str = Field(default="", alias="mapLink")
    image_gallery: list[str] = Field(default_factory=list, alias="imageGallery")
    amenities: list[str] = Field(default_factory=list)
    description: str = ""
    tags: list[str] = Field(default_factory=list)

    @field_validator("amenities")
    @classmethod
    def dedupe_amenities(cls, v: list[str]) -> list[str]:
        """Amenities behave as a set; keep first occurrence order."""
        return list(dict.fromkeys(v))
