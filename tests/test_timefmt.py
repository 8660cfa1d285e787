# tests/test_timefmt.py

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from timefmt import clock, day_of, due_text, hours, parse_due_input, parse_iso, to_utc_iso


def test_parse_iso_accepts_naive_and_zulu() -> None:
    assert parse_iso("2026-10-20T09:00:00") == datetime(2026, 10, 20, 9, 0)
    aware = parse_iso("2026-10-20T09:00:00Z")
    assert aware is not None and aware.tzinfo is None
    assert parse_iso("") is None
    assert parse_iso("not a date") is None


def test_day_of_uses_date_portion() -> None:
    assert day_of("2026-10-20T23:59:00") == date(2026, 10, 20)
    assert day_of(None) is None


def test_clock_and_hours() -> None:
    assert clock(datetime(2026, 1, 1, 9, 0)) == "9:00 AM"
    assert clock(datetime(2026, 1, 1, 0, 5)) == "12:05 AM"
    assert clock(datetime(2026, 1, 1, 13, 30)) == "1:30 PM"
    assert hours(1.5) == "1.5h"
    assert hours(2.0) == "2h"


def test_to_utc_iso_has_millis_and_z() -> None:
    dt = datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc)
    assert to_utc_iso(dt) == "2026-10-20T09:00:00.000Z"


def test_parse_due_input_formats() -> None:
    assert parse_due_input("2026-10-20 18:30") == datetime(2026, 10, 20, 18, 30)
    assert parse_due_input("2026-10-20T18:30") == datetime(2026, 10, 20, 18, 30)
    assert parse_due_input("2026-10-20") == datetime(2026, 10, 20)
    with pytest.raises(ValueError):
        parse_due_input("next friday")


def test_due_text_relative() -> None:
    now = datetime(2026, 10, 19, 12, 0)
    assert due_text(None, now) == "No due date"
    assert due_text((now + timedelta(days=3)).isoformat(), now) == "Due in 3 days"
    assert due_text((now - timedelta(hours=2)).isoformat(), now) == "Due about 2 hours ago"
