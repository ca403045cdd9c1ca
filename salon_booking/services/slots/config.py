# salon_booking/services/slots/config.py
"""
Slot engine configuration and time helpers.

Internally every slot is a minute-of-day integer (0..1439).
The 12-hour label ("9:00 AM") exists only at the API boundary.
"""

import re
from dataclasses import dataclass
from datetime import time
from functools import lru_cache

from ...config import settings


MINUTES_PER_DAY = 24 * 60

_LABEL_12H = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")
_LABEL_24H = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


@dataclass(frozen=True)
class SlotsConfig:
    """
    Configuration for the availability engine.

    Attributes:
        same_day_lead_minutes: Today's slots must start strictly later
            than now + this many minutes.
        default_open / default_close: Hours of a freshly initialised weekday.
        default_slot_minutes: Grid step of a freshly initialised weekday.
        default_capacity: Bookings per slot of a freshly initialised weekday.
        default_break_start / default_break_end: Lunch break of a freshly
            initialised weekday.
        default_closed_days: Weekdays (0 = Sunday) initialised as closed.
    """
    same_day_lead_minutes: int = 60
    default_open: time = time(9, 0)
    default_close: time = time(18, 0)
    default_slot_minutes: int = 60
    default_capacity: int = 1
    default_break_start: time | None = time(12, 0)
    default_break_end: time | None = time(13, 0)
    default_closed_days: tuple[int, ...] = (0,)

    def __post_init__(self):
        if self.same_day_lead_minutes < 0:
            raise ValueError(
                f"same_day_lead_minutes must be >= 0, got {self.same_day_lead_minutes}"
            )
        if self.default_slot_minutes <= 0:
            raise ValueError(
                f"default_slot_minutes must be > 0, got {self.default_slot_minutes}"
            )


@lru_cache
def get_slots_config() -> SlotsConfig:
    """Slots configuration (singleton) built from application settings."""
    return SlotsConfig(same_day_lead_minutes=settings.same_day_lead_minutes)


# ── Time helpers ─────────────────────────────────────────────────────────


def time_to_minutes(value: time) -> int:
    """Minute-of-day for a time value. Seconds are ignored."""
    return value.hour * 60 + value.minute


def minutes_to_time(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def minutes_to_label(minutes: int) -> str:
    """540 → "9:00 AM", 750 → "12:30 PM", 0 → "12:00 AM"."""
    hour, minute = divmod(minutes, 60)
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {period}"


def label_to_minutes(label: str) -> int:
    """
    Parse a slot label back to minute-of-day.

    Accepts the 12-hour form produced by minutes_to_label ("9:00 AM")
    and 24-hour "HH:MM" / "HH:MM:SS".

    Raises:
        ValueError: unrecognised or out-of-range value.
    """
    match = _LABEL_12H.match(label)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if not 1 <= hour <= 12 or minute > 59:
            raise ValueError(f"Invalid time label: {label!r}")
        hour = hour % 12
        if match.group(3).upper() == "PM":
            hour += 12
        return hour * 60 + minute

    match = _LABEL_24H.match(label)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        second = int(match.group(3) or 0)
        if hour > 23 or minute > 59 or second > 59:
            raise ValueError(f"Invalid time label: {label!r}")
        return hour * 60 + minute

    raise ValueError(f"Invalid time label: {label!r}")
