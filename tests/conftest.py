"""Shared test fixtures and helpers."""

from datetime import date, datetime, time
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon_booking.database import get_db
from salon_booking.main import app
from salon_booking.models import Base, Bookings, ScheduleSettings
from salon_booking.services.admission import (
    InMemoryRateLimitStore,
    RecaptchaVerifier,
    get_rate_limiter,
    get_verifier,
)
from salon_booking.services.clock import local_now
from salon_booking.services.schedule_store import ScheduleStore
from salon_booking.services.slots import SlotsConfig

# 2025-06-02 is a Monday
NOW = datetime(2025, 6, 2, 8, 0)
TODAY = NOW.date()
TUESDAY = date(2025, 6, 3)
SUNDAY = date(2025, 6, 8)

VALID_PHONE = "09123456789"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def bare_db(engine):
    """Session over empty tables (no weekly template)."""
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def db(bare_db):
    """Session with the default weekly template initialised."""
    ScheduleStore(bare_db, SlotsConfig()).ensure_default_template()
    return bare_db


@pytest.fixture
def limiter():
    return InMemoryRateLimitStore()


@pytest.fixture
def verifier():
    return RecaptchaVerifier(secret_key=None)


@pytest.fixture
def client(db, limiter, verifier):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[local_now] = lambda: NOW
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_verifier] = lambda: verifier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def set_day(db, day_of_week: int, **fields) -> ScheduleSettings:
    """Patch one weekday template row in place."""
    row = db.query(ScheduleSettings).filter(ScheduleSettings.day_of_week == day_of_week).one()
    for key, value in fields.items():
        setattr(row, key, value)
    db.commit()
    return row


def make_booking(
    db,
    booking_date: date = TUESDAY,
    minute: int = 10 * 60,
    status: str = "pending",
    phone: str = VALID_PHONE,
    name: str = "Existing Customer",
) -> Bookings:
    booking = Bookings(
        customer_name=name,
        customer_phone=phone,
        services=[{"id": "svc-1", "name": "Classic Facial", "price": 850.0, "duration": "60 mins"}],
        booking_date=booking_date,
        booking_minute=minute,
        status=status,
        total_price=850.0,
    )
    db.add(booking)
    db.commit()
    return booking


def booking_payload(
    booking_date: str = "2025-06-03",
    booking_time: str = "10:00 AM",
    phone: str = VALID_PHONE,
    recaptcha_token: Optional[str] = None,
    **overrides,
) -> dict:
    payload = {
        "customerName": "Maria Santos",
        "customerEmail": "maria@example.com",
        "customerPhone": phone,
        "services": [
            {"id": "svc-1", "name": "Classic Facial", "price": 850, "duration": "60 mins"},
        ],
        "bookingDate": booking_date,
        "bookingTime": booking_time,
        "notes": None,
        "totalPrice": 850,
        "honeypot": "",
    }
    if recaptcha_token is not None:
        payload["recaptchaToken"] = recaptcha_token
    payload.update(overrides)
    return payload


def t(hour: int, minute: int = 0) -> time:
    return time(hour, minute)
