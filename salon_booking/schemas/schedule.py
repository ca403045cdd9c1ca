# salon_booking/schemas/schedule.py

from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def _blank_to_none(value):
    if value == "" or value == 0:
        return None
    return value


class ScheduleSettingBase(BaseModel):
    day_of_week: int = Field(ge=0, le=6, description="0 = Sunday .. 6 = Saturday")
    is_open: bool
    open_time: time
    close_time: time
    slot_duration_minutes: int = Field(gt=0)
    max_bookings_per_slot: int = Field(ge=1)
    break_start: Optional[time] = None
    break_end: Optional[time] = None


class ScheduleSettingWrite(ScheduleSettingBase):

    @field_validator("break_start", "break_end", mode="before")
    @classmethod
    def _empty_break(cls, v):
        return None if v == "" else v

    @model_validator(mode="after")
    def _check_hours(self):
        if (self.break_start is None) != (self.break_end is None):
            raise ValueError("break_start and break_end must be set together")
        # hours of a closed weekday are kept as entered, not checked
        if not self.is_open:
            return self
        if self.open_time >= self.close_time:
            raise ValueError("open_time must be before close_time")
        if self.break_start is not None and self.break_start >= self.break_end:
            raise ValueError("break_start must be before break_end")
        return self


class ScheduleSettingRead(ScheduleSettingBase):
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ScheduleUpdate(BaseModel):
    settings: list[ScheduleSettingWrite] = Field(min_length=7, max_length=7)


class ScheduleOverrideCreate(BaseModel):
    date: date
    is_closed: bool = False
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    max_bookings_per_slot: Optional[int] = Field(None, ge=1)
    reason: Optional[str] = None

    @field_validator("open_time", "close_time", "max_bookings_per_slot", "reason", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        return _blank_to_none(v)

    @field_validator("is_closed", mode="before")
    @classmethod
    def _null_not_closed(cls, v):
        return False if v is None else v

    @model_validator(mode="after")
    def _check_hours(self):
        if (
            self.open_time is not None
            and self.close_time is not None
            and self.open_time >= self.close_time
        ):
            raise ValueError("open_time must be before close_time")
        return self


class ScheduleOverrideRead(BaseModel):
    id: int
    date: date
    is_closed: bool
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    max_bookings_per_slot: Optional[int] = None
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ScheduleOverview(BaseModel):
    """Weekly template plus overrides (admin views)."""
    settings: list[ScheduleSettingRead]
    overrides: list[ScheduleOverrideRead] = []
