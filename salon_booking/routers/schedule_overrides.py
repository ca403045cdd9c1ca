# salon_booking/routers/schedule_overrides.py
# Upsert keyed by date: POST replaces an existing override for the same day.

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..schemas.schedule import ScheduleOverrideCreate, ScheduleOverrideRead
from ..services.schedule_store import ScheduleStore, ScheduleStoreError

router = APIRouter(prefix="/schedule/overrides", tags=["schedule_overrides"])


@router.get("")
def list_schedule_overrides(
    from_date: date | None = None,
    db: Session = Depends(get_db),
):
    overrides = ScheduleStore(db).list_overrides(from_date)
    return {
        "overrides": [
            ScheduleOverrideRead.model_validate(o).model_dump(mode="json")
            for o in overrides
        ]
    }


@router.post("", dependencies=[Depends(require_admin)])
def upsert_schedule_override(
    data: ScheduleOverrideCreate,
    db: Session = Depends(get_db),
):
    try:
        obj = ScheduleStore(db).put_override(data.date, data.model_dump(exclude={"date"}))
    except ScheduleStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create override",
        )
    return {
        "success": True,
        "override": ScheduleOverrideRead.model_validate(obj).model_dump(mode="json"),
    }


@router.delete("", dependencies=[Depends(require_admin)])
def delete_schedule_override(
    target_date: date | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    if target_date is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Date is required")

    try:
        ScheduleStore(db).delete_override(target_date)
    except ScheduleStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete override",
        )
    return {"success": True}
