from .tables import (
    ACTIVE_STATUSES,
    BOOKING_STATUSES,
    Base,
    Bookings,
    ScheduleOverrides,
    ScheduleSettings,
)

__all__ = [
    "ACTIVE_STATUSES",
    "BOOKING_STATUSES",
    "Base",
    "Bookings",
    "ScheduleOverrides",
    "ScheduleSettings",
]
