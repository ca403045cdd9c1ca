# salon_booking/services/slots/availability.py
"""
Per-slot availability for a date.

Steps:
1. Resolve the effective day (template + override)
2. Generate the raw grid
3. Subtract occupancy (pending + confirmed bookings per slot)
4. Same-day lead buffer: today's slots must start strictly more than
   `same_day_lead_minutes` after the current minute

Future dates are never time-filtered. Order is chronological (grid order).
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import ACTIVE_STATUSES, Bookings
from .config import SlotsConfig, get_slots_config, minutes_to_label
from .grid import generate_slots
from .resolver import ClosedDay, EffectiveDay, resolve_day


@dataclass(frozen=True)
class SlotAvailability:
    minute: int
    remaining: int
    max_slots: int

    @property
    def available(self) -> bool:
        return self.remaining > 0

    @property
    def label(self) -> str:
        return minutes_to_label(self.minute)


@dataclass
class DayAvailability:
    date: date
    is_open: bool
    day: EffectiveDay | None = None
    reason: str | None = None
    slots: list[SlotAvailability] = field(default_factory=list)

    def get_slot(self, minute: int) -> SlotAvailability | None:
        for slot in self.slots:
            if slot.minute == minute:
                return slot
        return None


def count_occupancy(db: Session, target_date: date) -> Counter:
    """Active bookings per minute-of-day for a date (on or off the grid)."""
    rows = (
        db.query(Bookings.booking_minute, func.count(Bookings.id))
        .filter(
            Bookings.booking_date == target_date,
            Bookings.status.in_(ACTIVE_STATUSES),
        )
        .group_by(Bookings.booking_minute)
        .all()
    )
    return Counter({minute: count for minute, count in rows})


def calculate_day_availability(
    db: Session,
    target_date: date,
    now: datetime | None = None,
    config: SlotsConfig | None = None,
) -> DayAvailability:
    config = config or get_slots_config()
    now = now or datetime.now()

    # Step 1: effective day
    from ..schedule_store import ScheduleStore
    resolved = resolve_day(ScheduleStore(db, config), target_date)
    if isinstance(resolved, ClosedDay):
        return DayAvailability(date=target_date, is_open=False, reason=resolved.reason)

    # Step 2: raw grid
    grid = generate_slots(
        resolved.open_time,
        resolved.close_time,
        resolved.slot_duration_minutes,
        resolved.break_start,
        resolved.break_end,
    )

    # Step 3: subtract occupancy
    occupancy = count_occupancy(db, target_date)
    capacity = resolved.max_bookings_per_slot
    slots = [
        SlotAvailability(
            minute=t,
            remaining=max(0, capacity - occupancy.get(t, 0)),
            max_slots=capacity,
        )
        for t in grid
    ]

    # Step 4: same-day lead buffer
    if target_date == now.date():
        earliest = now.hour * 60 + now.minute + config.same_day_lead_minutes
        slots = [s for s in slots if s.minute > earliest]

    return DayAvailability(date=target_date, is_open=True, day=resolved, slots=slots)
