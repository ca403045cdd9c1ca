# salon_booking/schemas/availability.py
"""
Pydantic schemas for the availability endpoint (camelCase on the wire).
"""

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SlotRead(BaseModel):
    time: str  # "9:00 AM"
    available: bool
    remaining_slots: int
    max_slots: int

    model_config = _camel


class DaySettingsRead(BaseModel):
    """Effective hours of the requested date."""
    open_time: time
    close_time: time
    slot_duration: int
    max_bookings_per_slot: int

    model_config = _camel


class AvailabilityResponse(BaseModel):
    date: date
    is_open: bool
    reason: Optional[str] = None
    slots: list[SlotRead] = []
    settings: Optional[DaySettingsRead] = None

    model_config = _camel
