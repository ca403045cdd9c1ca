# salon_booking/routers/schedule.py

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..schemas.schedule import (
    ScheduleOverrideRead,
    ScheduleOverview,
    ScheduleSettingRead,
    ScheduleUpdate,
)
from ..services.clock import local_now
from ..services.schedule_store import (
    InvalidScheduleError,
    ScheduleStore,
    ScheduleStoreError,
)

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("", response_model=ScheduleOverview)
def get_schedule(
    db: Session = Depends(get_db),
    now: datetime = Depends(local_now),
):
    store = ScheduleStore(db)
    return ScheduleOverview(
        settings=[ScheduleSettingRead.model_validate(r) for r in store.get_template()],
        overrides=[
            ScheduleOverrideRead.model_validate(o)
            for o in store.list_overrides(from_date=now.date())
        ],
    )


@router.put("", dependencies=[Depends(require_admin)])
def put_schedule(data: ScheduleUpdate, db: Session = Depends(get_db)):
    """Replace all seven weekday rows in one transaction."""
    store = ScheduleStore(db)
    try:
        store.put_template([row.model_dump() for row in data.settings])
    except InvalidScheduleError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ScheduleStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update schedule",
        )
    return {"success": True}
