from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    Text,
    Time,
    func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")
ACTIVE_STATUSES = ("pending", "confirmed")


class ScheduleSettings(Base):
    """Weekly template row, one per weekday (0 = Sunday)."""
    __tablename__ = 'schedule_settings'
    __table_args__ = (
        CheckConstraint('day_of_week BETWEEN 0 AND 6'),
        CheckConstraint('slot_duration_minutes > 0'),
        CheckConstraint('max_bookings_per_slot >= 1'),
    )

    id = Column(Integer, primary_key=True)
    day_of_week = Column(Integer, nullable=False, unique=True)
    is_open = Column(Boolean, nullable=False, default=True)
    open_time = Column(Time, nullable=False)
    close_time = Column(Time, nullable=False)
    slot_duration_minutes = Column(Integer, nullable=False, default=60)
    max_bookings_per_slot = Column(Integer, nullable=False, default=1)
    break_start = Column(Time)
    break_end = Column(Time)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class ScheduleOverrides(Base):
    """Date-specific exception to the weekly template."""
    __tablename__ = 'schedule_overrides'

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, unique=True, index=True)
    is_closed = Column(Boolean, nullable=False, default=False)
    open_time = Column(Time)
    close_time = Column(Time)
    max_bookings_per_slot = Column(Integer)
    reason = Column(Text)
    created_at = Column(DateTime, server_default=func.now())


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        Index('ix_bookings_slot', 'booking_date', 'booking_minute'),
        CheckConstraint('total_price >= 0'),
        CheckConstraint(
            'status IN (' + ', '.join(f"'{s}'" for s in BOOKING_STATUSES) + ')',
            name='ck_bookings_status',
        ),
    )

    id = Column(Text, primary_key=True, default=lambda: str(uuid4()))
    customer_name = Column(Text, nullable=False)
    customer_phone = Column(Text, nullable=False, index=True)
    customer_email = Column(Text)
    # frozen snapshot: [{id, name, price, duration}, ...]
    services = Column(JSON, nullable=False)
    booking_date = Column(Date, nullable=False)
    booking_minute = Column(Integer, nullable=False)
    status = Column(Text, nullable=False, default="pending")
    notes = Column(Text)
    total_price = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
