# salon_booking/services/clock.py
"""Wall clock of the salon's single fixed locale."""

from datetime import datetime
from zoneinfo import ZoneInfo

from ..config import settings


def local_now() -> datetime:
    """Naive local datetime in the configured salon timezone."""
    return datetime.now(ZoneInfo(settings.timezone)).replace(tzinfo=None)
