# salon_booking/routers/bookings.py
"""
Bookings API.

POST   /bookings                - public admission (anti-abuse chain)
GET    /bookings                - admin list, optional date / status filter
GET    /bookings/{id}           - admin
PATCH  /bookings/{id}/status    - admin status transition
DELETE /bookings/{id}           - admin hard delete (any status)
"""

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..models import Bookings as DBBookings
from ..schemas.bookings import (
    AdmittedBooking,
    BookingAccepted,
    BookingRead,
    BookingStatus,
    BookingStatusUpdate,
)
from ..services.admission import (
    BookingAdmission,
    RateLimitStore,
    RecaptchaVerifier,
    get_rate_limiter,
    get_verifier,
)
from ..services.booking_status import InvalidStatusTransition, apply_status
from ..services.clock import local_now
from ..utils.client_ip import get_client_ip

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingAccepted, status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: Request,
    db: Session = Depends(get_db),
    verifier: RecaptchaVerifier = Depends(get_verifier),
    limiter: RateLimitStore = Depends(get_rate_limiter),
    now: datetime = Depends(local_now),
):
    try:
        payload = await request.json()
    except ValueError:
        payload = {}

    admission = BookingAdmission(db, verifier, limiter, now=now)
    result = await admission.submit(payload, get_client_ip(request))

    return BookingAccepted(
        booking=AdmittedBooking.model_validate(result.booking),
        remaining=result.remaining,
    )


# ── Admin ────────────────────────────────────────────────────────────────


@router.get("", response_model=list[BookingRead], dependencies=[Depends(require_admin)])
def list_bookings(
    booking_date: date | None = Query(None, alias="date"),
    booking_status: BookingStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    query = db.query(DBBookings)
    if booking_date is not None:
        query = query.filter(DBBookings.booking_date == booking_date)
    if booking_status is not None:
        query = query.filter(DBBookings.status == booking_status)
    return query.order_by(DBBookings.booking_date, DBBookings.booking_minute).all()


@router.get("/{booking_id}", response_model=BookingRead, dependencies=[Depends(require_admin)])
def get_booking(booking_id: str, db: Session = Depends(get_db)):
    obj = db.get(DBBookings, booking_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.patch(
    "/{booking_id}/status",
    response_model=BookingRead,
    dependencies=[Depends(require_admin)],
)
def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBBookings, booking_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    try:
        apply_status(obj, data.status)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{booking_id}", dependencies=[Depends(require_admin)])
def delete_booking(booking_id: str, db: Session = Depends(get_db)):
    obj = db.get(DBBookings, booking_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(obj)
    db.commit()
    return {"success": True}
