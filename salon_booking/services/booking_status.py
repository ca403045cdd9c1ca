# salon_booking/services/booking_status.py
"""
Booking lifecycle (administrator-driven only).

    pending ──confirm──▶ confirmed ──complete──▶ completed
       └──────cancel──▶ cancelled

Deletion is allowed from any status and is not a transition.
"""

import logging

from ..models import Bookings

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"confirmed", "cancelled"}),
    "confirmed": frozenset({"completed"}),
    "completed": frozenset(),
    "cancelled": frozenset(),
}


class InvalidStatusTransition(ValueError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change booking status from {current} to {target}")
        self.current = current
        self.target = target


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def apply_status(booking: Bookings, target: str) -> Bookings:
    """Move booking to target status or raise InvalidStatusTransition."""
    if not can_transition(booking.status, target):
        raise InvalidStatusTransition(booking.status, target)

    logger.info(f"Booking {booking.id}: {booking.status} → {target}")
    booking.status = target
    return booking
