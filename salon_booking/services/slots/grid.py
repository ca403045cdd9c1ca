# salon_booking/services/slots/grid.py
"""
Time grid generation.

Turns a day's operating window into ordered slot start times:
    open_time, open_time + step, ... while start < close_time

A start inside the half-open break window [break_start, break_end) is
skipped. Only the start instant is tested, never the slot's span.

Pure functions: no I/O, no clock reads.
"""

from datetime import time

from .config import minutes_to_label, time_to_minutes


def generate_slots(
    open_time: time,
    close_time: time,
    slot_duration_minutes: int,
    break_start: time | None = None,
    break_end: time | None = None,
) -> list[int]:
    """
    Generate slot starts as minutes-of-day.

    Returns:
        Strictly increasing list of minutes. Empty when open >= close.
    """
    if slot_duration_minutes <= 0:
        raise ValueError(
            f"slot_duration_minutes must be > 0, got {slot_duration_minutes}"
        )

    open_min = time_to_minutes(open_time)
    close_min = time_to_minutes(close_time)

    break_window = None
    if break_start is not None and break_end is not None:
        break_window = (time_to_minutes(break_start), time_to_minutes(break_end))

    slots: list[int] = []
    t = open_min
    while t < close_min:
        if break_window is None or not (break_window[0] <= t < break_window[1]):
            slots.append(t)
        t += slot_duration_minutes

    return slots


def generate_slot_labels(
    open_time: time,
    close_time: time,
    slot_duration_minutes: int,
    break_start: time | None = None,
    break_end: time | None = None,
) -> list[str]:
    """Same grid as generate_slots, rendered as "9:00 AM" labels."""
    return [
        minutes_to_label(t)
        for t in generate_slots(
            open_time, close_time, slot_duration_minutes, break_start, break_end
        )
    ]
