from datetime import date, time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon_booking import database
from salon_booking.models import Base, ScheduleOverrides, ScheduleSettings
from salon_booking.services.schedule_store import (
    InvalidScheduleError,
    ScheduleStore,
    ScheduleStoreError,
)
from salon_booking.services.slots import SlotsConfig


def week(**fields):
    rows = []
    for day in range(7):
        row = {
            "day_of_week": day,
            "is_open": True,
            "open_time": time(10),
            "close_time": time(19),
            "slot_duration_minutes": 30,
            "max_bookings_per_slot": 2,
            "break_start": None,
            "break_end": None,
        }
        row.update(fields)
        rows.append(row)
    return rows


def test_template_defaults_without_rows(bare_db):
    rows = ScheduleStore(bare_db, SlotsConfig()).get_template()

    assert [r.day_of_week for r in rows] == list(range(7))
    assert not rows[0].is_open
    assert all(r.is_open for r in rows[1:])
    assert rows[1].open_time == time(9)
    # nothing written
    assert bare_db.query(ScheduleSettings).count() == 0


def test_ensure_default_template_is_idempotent(bare_db):
    store = ScheduleStore(bare_db, SlotsConfig())
    assert store.ensure_default_template() == 7
    assert store.ensure_default_template() == 0
    assert bare_db.query(ScheduleSettings).count() == 7


def test_ensure_default_template_fills_gaps(bare_db):
    store = ScheduleStore(bare_db, SlotsConfig())
    store.ensure_default_template()
    bare_db.query(ScheduleSettings).filter(ScheduleSettings.day_of_week == 4).delete()
    bare_db.commit()

    assert store.ensure_default_template() == 1


def test_put_template_replaces_all_rows(db):
    store = ScheduleStore(db)
    rows = store.put_template(week())

    assert len(rows) == 7
    assert all(r.open_time == time(10) and r.max_bookings_per_slot == 2 for r in rows)
    assert db.query(ScheduleSettings).count() == 7


@pytest.mark.parametrize(
    "rows",
    [
        week()[:6],
        week()[:6] + [dict(week()[0])],
        week() + [dict(week()[0])],
    ],
)
def test_put_template_rejects_incomplete_week(db, rows):
    with pytest.raises(InvalidScheduleError):
        ScheduleStore(db).put_template(rows)

    assert db.query(ScheduleSettings).filter(ScheduleSettings.open_time == time(10)).count() == 0


def test_put_template_failure_writes_nothing(db, monkeypatch):
    def broken_commit():
        raise OperationalError("UPDATE schedule_settings", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", broken_commit)
    with pytest.raises(ScheduleStoreError):
        ScheduleStore(db).put_template(week())
    monkeypatch.undo()

    rows = ScheduleStore(db).get_template()
    assert all(r.open_time == time(9) for r in rows)
    assert all(r.max_bookings_per_slot == 1 for r in rows)


def test_override_upsert_keeps_one_row_per_date(db):
    store = ScheduleStore(db)
    day = date(2025, 12, 24)

    first = store.put_override(day, {"is_closed": False, "close_time": time(15), "reason": "Eve"})
    second = store.put_override(day, {"is_closed": True, "reason": "Staff party"})

    assert first.id == second.id
    assert db.query(ScheduleOverrides).count() == 1
    saved = store.get_override(day)
    assert saved.is_closed
    assert saved.close_time is None
    assert saved.reason == "Staff party"


def test_list_overrides_from_date(db):
    store = ScheduleStore(db)
    for d in (date(2025, 5, 1), date(2025, 6, 12), date(2025, 6, 10)):
        store.put_override(d, {"is_closed": True})

    assert [o.date for o in store.list_overrides()] == [
        date(2025, 5, 1), date(2025, 6, 10), date(2025, 6, 12),
    ]
    assert [o.date for o in store.list_overrides(from_date=date(2025, 6, 2))] == [
        date(2025, 6, 10), date(2025, 6, 12),
    ]


def test_delete_override(db):
    store = ScheduleStore(db)
    store.put_override(date(2025, 6, 10), {"is_closed": True})

    assert store.delete_override(date(2025, 6, 10)) is True
    assert store.delete_override(date(2025, 6, 10)) is False
    assert store.get_override(date(2025, 6, 10)) is None


def test_init_db_creates_schema_and_template(monkeypatch):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(database, "SessionLocal", sessionmaker(bind=engine))

    database.init_db()
    database.init_db()

    session = sessionmaker(bind=engine)()
    try:
        assert session.query(ScheduleSettings).count() == 7
    finally:
        session.close()
        engine.dispose()


def test_tables_are_standalone():
    # bookings keep their slot by value; nothing joins schedule rows
    assert all(not table.foreign_keys for table in Base.metadata.tables.values())
    assert not hasattr(database, "enable_sqlite_fk")
