# salon_booking/routers/availability.py
"""
Availability API.

GET /availability?date=YYYY-MM-DD  - bookable slots for a date
GET /availability                  - weekly template + upcoming overrides
"""

from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.availability import AvailabilityResponse, DaySettingsRead, SlotRead
from ..schemas.schedule import ScheduleOverrideRead, ScheduleOverview, ScheduleSettingRead
from ..services.clock import local_now
from ..services.schedule_store import ScheduleStore
from ..services.slots import calculate_day_availability, get_slots_config

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("")
def get_availability(
    target_date: date | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
    now: datetime = Depends(local_now),
):
    """Slots with remaining capacity for a date, or the raw schedule."""
    if target_date is None:
        store = ScheduleStore(db)
        overview = ScheduleOverview(
            settings=[ScheduleSettingRead.model_validate(r) for r in store.get_template()],
            overrides=[
                ScheduleOverrideRead.model_validate(o)
                for o in store.list_overrides(from_date=now.date())
            ],
        )
        return overview.model_dump(mode="json")

    day = calculate_day_availability(db, target_date, now, get_slots_config())

    if not day.is_open:
        resp = AvailabilityResponse(date=target_date, is_open=False, reason=day.reason, slots=[])
    else:
        resp = AvailabilityResponse(
            date=target_date,
            is_open=True,
            slots=[
                SlotRead(
                    time=slot.label,
                    available=slot.available,
                    remaining_slots=slot.remaining,
                    max_slots=slot.max_slots,
                )
                for slot in day.slots
            ],
            settings=DaySettingsRead(
                open_time=day.day.open_time,
                close_time=day.day.close_time,
                slot_duration=day.day.slot_duration_minutes,
                max_bookings_per_slot=day.day.max_bookings_per_slot,
            ),
        )

    return resp.model_dump(mode="json", by_alias=True, exclude_none=True)
