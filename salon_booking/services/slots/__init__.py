# salon_booking/services/slots/__init__.py
"""
Slots calculation module.

grid:         pure slot grid generation (minutes-of-day)
resolver:     weekly template + date override → effective day
availability: grid minus occupancy, same-day lead buffer
"""

from .availability import (
    DayAvailability,
    SlotAvailability,
    calculate_day_availability,
    count_occupancy,
)
from .config import (
    SlotsConfig,
    get_slots_config,
    label_to_minutes,
    minutes_to_label,
)
from .grid import generate_slot_labels, generate_slots
from .resolver import ClosedDay, EffectiveDay, resolve_day

__all__ = [
    "SlotsConfig",
    "get_slots_config",
    "label_to_minutes",
    "minutes_to_label",
    "generate_slots",
    "generate_slot_labels",
    "ClosedDay",
    "EffectiveDay",
    "resolve_day",
    "DayAvailability",
    "SlotAvailability",
    "calculate_day_availability",
    "count_occupancy",
]
