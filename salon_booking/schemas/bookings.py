# salon_booking/schemas/bookings.py

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..services.slots.config import minutes_to_label

BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]


class BookedService(BaseModel):
    """Service snapshot frozen into the booking."""
    id: str | int
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    duration: Optional[str | int] = None


class BookingSubmission(BaseModel):
    """Public booking request body (camelCase on the wire)."""
    customer_name: str = Field(min_length=1, max_length=100)
    customer_email: Optional[str] = None
    customer_phone: str
    services: list[BookedService] = Field(min_length=1)
    booking_date: str
    booking_time: str
    notes: Optional[str] = None
    total_price: Optional[float] = Field(None, ge=0)
    recaptcha_token: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AdmittedBooking(BaseModel):
    id: str
    status: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class BookingAccepted(BaseModel):
    success: bool = True
    booking: AdmittedBooking
    remaining: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingRead(BaseModel):
    id: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    services: list[BookedService]
    booking_date: date
    booking_time: int = Field(validation_alias="booking_minute")
    status: str
    notes: Optional[str] = None
    total_price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_serializer("booking_time")
    def _label(self, minute: int) -> str:
        return minutes_to_label(minute)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
