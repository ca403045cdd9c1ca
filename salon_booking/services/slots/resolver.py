# salon_booking/services/slots/resolver.py
"""
Effective day configuration.

Merges the weekly template row for the date's weekday with the date
override (if any):

    no template row            → closed, "Schedule not configured"
    override.is_closed         → closed, override.reason or "Closed"
    template closed, no override → closed, "Closed"
    otherwise                  → open; hours/capacity from the override when
                                 set, else from the template; slot duration
                                 and break always from the template

A non-closing override on a weekday the template marks closed opens that
date with the effective hours.
"""

from dataclasses import dataclass
from datetime import date, time


@dataclass(frozen=True)
class EffectiveDay:
    date: date
    open_time: time
    close_time: time
    slot_duration_minutes: int
    max_bookings_per_slot: int
    break_start: time | None = None
    break_end: time | None = None

    is_open = True


@dataclass(frozen=True)
class ClosedDay:
    date: date
    reason: str

    is_open = False


def day_of_week(target_date: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return target_date.isoweekday() % 7


def resolve_day(store, target_date: date) -> EffectiveDay | ClosedDay:
    template = store.get_template_row(day_of_week(target_date))
    if template is None:
        return ClosedDay(target_date, "Schedule not configured")

    override = store.get_override(target_date)

    if override is not None and override.is_closed:
        return ClosedDay(target_date, override.reason or "Closed")

    if not template.is_open and override is None:
        return ClosedDay(target_date, "Closed")

    open_time = template.open_time
    close_time = template.close_time
    capacity = template.max_bookings_per_slot

    if override is not None:
        if override.open_time is not None:
            open_time = override.open_time
        if override.close_time is not None:
            close_time = override.close_time
        if override.max_bookings_per_slot:
            capacity = override.max_bookings_per_slot

    return EffectiveDay(
        date=target_date,
        open_time=open_time,
        close_time=close_time,
        slot_duration_minutes=template.slot_duration_minutes,
        max_bookings_per_slot=capacity,
        break_start=template.break_start,
        break_end=template.break_end,
    )
