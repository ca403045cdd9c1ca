# salon_booking/services/schedule_store.py
"""
Schedule configuration store.

Owns the weekly template (schedule_settings, one row per weekday,
0 = Sunday) and the date overrides (schedule_overrides, unique on date).

The weekly template is replaced in a single transaction: either all seven
weekday rows are written or none are.
"""

import logging
from datetime import date
from typing import Any, Iterable, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import ScheduleOverrides, ScheduleSettings
from .slots.config import SlotsConfig, get_slots_config

logger = logging.getLogger(__name__)

WEEKDAYS = range(7)

TEMPLATE_FIELDS = (
    "is_open",
    "open_time",
    "close_time",
    "slot_duration_minutes",
    "max_bookings_per_slot",
    "break_start",
    "break_end",
)

OVERRIDE_FIELDS = (
    "is_closed",
    "open_time",
    "close_time",
    "max_bookings_per_slot",
    "reason",
)


class InvalidScheduleError(ValueError):
    """Rejected schedule input (caller error)."""


class ScheduleStoreError(Exception):
    """Storage failure while writing schedule data."""


def default_template_row(day_of_week: int, config: SlotsConfig | None = None) -> ScheduleSettings:
    """Transient (not persisted) default row for a weekday."""
    config = config or get_slots_config()
    return ScheduleSettings(
        day_of_week=day_of_week,
        is_open=day_of_week not in config.default_closed_days,
        open_time=config.default_open,
        close_time=config.default_close,
        slot_duration_minutes=config.default_slot_minutes,
        max_bookings_per_slot=config.default_capacity,
        break_start=config.default_break_start,
        break_end=config.default_break_end,
    )


class ScheduleStore:
    """Read/write contract over weekly template and date overrides."""

    def __init__(self, db: Session, config: SlotsConfig | None = None):
        self.db = db
        self.config = config or get_slots_config()

    # ── Weekly template ──────────────────────────────────────────────────

    def get_template_row(self, day_of_week: int) -> ScheduleSettings | None:
        return (
            self.db.query(ScheduleSettings)
            .filter(ScheduleSettings.day_of_week == day_of_week)
            .first()
        )

    def get_template(self) -> list[ScheduleSettings]:
        """
        Seven rows ordered Sunday..Saturday.

        Missing weekdays are filled with transient defaults (not written).
        """
        rows = {
            row.day_of_week: row
            for row in self.db.query(ScheduleSettings).all()
        }
        return [
            rows.get(day) or default_template_row(day, self.config)
            for day in WEEKDAYS
        ]

    def ensure_default_template(self) -> int:
        """Insert default rows for missing weekdays. Returns rows created."""
        existing = {
            day for (day,) in self.db.query(ScheduleSettings.day_of_week).all()
        }
        missing = [day for day in WEEKDAYS if day not in existing]
        if not missing:
            return 0

        for day in missing:
            self.db.add(default_template_row(day, self.config))
        self._commit("initialise weekly template")
        logger.info(f"Weekly template initialised for days {missing}")
        return len(missing)

    def put_template(self, rows: Iterable[Mapping[str, Any]]) -> list[ScheduleSettings]:
        """
        Replace the whole weekly template in one transaction.

        Args:
            rows: exactly seven mappings, one per weekday 0..6, each carrying
                  day_of_week and the TEMPLATE_FIELDS.

        Raises:
            InvalidScheduleError: weekdays missing or duplicated.
            ScheduleStoreError: storage failure (nothing is written).
        """
        rows = list(rows)
        days = [row.get("day_of_week") for row in rows]
        if len(rows) != 7 or sorted(days) != list(WEEKDAYS):
            raise InvalidScheduleError(
                "Schedule must contain exactly one entry per weekday (0-6)"
            )

        try:
            current = {
                row.day_of_week: row
                for row in self.db.query(ScheduleSettings).all()
            }
            for row in rows:
                day = row["day_of_week"]
                obj = current.get(day)
                if obj is None:
                    obj = ScheduleSettings(day_of_week=day)
                    self.db.add(obj)
                for field in TEMPLATE_FIELDS:
                    setattr(obj, field, row.get(field))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Weekly template update failed: {e}")
            raise ScheduleStoreError("Failed to update schedule") from e

        logger.info("Weekly template replaced")
        return self.get_template()

    # ── Overrides ────────────────────────────────────────────────────────

    def get_override(self, target_date: date) -> ScheduleOverrides | None:
        return (
            self.db.query(ScheduleOverrides)
            .filter(ScheduleOverrides.date == target_date)
            .first()
        )

    def list_overrides(self, from_date: date | None = None) -> list[ScheduleOverrides]:
        query = self.db.query(ScheduleOverrides)
        if from_date is not None:
            query = query.filter(ScheduleOverrides.date >= from_date)
        return query.order_by(ScheduleOverrides.date).all()

    def put_override(self, target_date: date, fields: Mapping[str, Any]) -> ScheduleOverrides:
        """Create or replace the override for a date."""
        obj = self.get_override(target_date)
        if obj is None:
            obj = ScheduleOverrides(date=target_date)
            self.db.add(obj)

        obj.is_closed = bool(fields.get("is_closed") or False)
        for field in OVERRIDE_FIELDS[1:]:
            setattr(obj, field, fields.get(field))

        self._commit(f"upsert override {target_date}")
        self.db.refresh(obj)
        logger.info(f"Override saved for {target_date} (closed={obj.is_closed})")
        return obj

    def delete_override(self, target_date: date) -> bool:
        obj = self.get_override(target_date)
        if obj is None:
            return False
        self.db.delete(obj)
        self._commit(f"delete override {target_date}")
        logger.info(f"Override deleted for {target_date}")
        return True

    # ── Helpers ──────────────────────────────────────────────────────────

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Schedule store failed to {action}: {e}")
            raise ScheduleStoreError(f"Failed to {action}") from e
