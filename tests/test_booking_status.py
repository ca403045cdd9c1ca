import pytest

from salon_booking.models import Bookings
from salon_booking.services.booking_status import (
    InvalidStatusTransition,
    apply_status,
    can_transition,
)


@pytest.mark.parametrize(
    "current, target",
    [("pending", "confirmed"), ("pending", "cancelled"), ("confirmed", "completed")],
)
def test_allowed(current, target):
    assert can_transition(current, target)


@pytest.mark.parametrize(
    "current, target",
    [
        ("pending", "completed"),
        ("pending", "pending"),
        ("confirmed", "cancelled"),
        ("confirmed", "pending"),
        ("completed", "pending"),
        ("cancelled", "confirmed"),
        ("unknown", "confirmed"),
    ],
)
def test_forbidden(current, target):
    assert not can_transition(current, target)


def test_apply_status():
    booking = Bookings(id="b-1", status="pending")
    apply_status(booking, "confirmed")
    assert booking.status == "confirmed"

    with pytest.raises(InvalidStatusTransition) as exc:
        apply_status(booking, "pending")
    assert (exc.value.current, exc.value.target) == ("confirmed", "pending")
    assert booking.status == "confirmed"
