"""Date/time parsing and display helpers.

Backend timestamps are ISO-8601, either naive or with an offset/'Z'.
Aware values are shown in local time; naive values are taken as already local.
"""
from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
from typing import Optional

DUE_INPUT_FORMATS = ('%Y-%m-%d %H:%M', '%Y-%m-%dT%H:%M', '%Y-%m-%d')


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp into a naive local datetime; None if unusable."""
    if not value:
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def day_of(value: Optional[str]) -> Optional[date]:
    dt = parse_iso(value)
    return dt.date() if dt else None


def to_utc_iso(dt: datetime) -> str:
    """UTC ISO string with millisecond precision and a Z suffix."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_due_input(raw: str) -> datetime:
    """Parse a local date-time typed by the user; raises ValueError on bad input."""
    text = raw.strip()
    for fmt in DUE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f'Unrecognised date "{raw}" (use YYYY-MM-DD HH:MM)')


def clock(dt: datetime) -> str:
    """12-hour clock without a leading zero, e.g. 9:00 AM."""
    hour = dt.hour % 12 or 12
    suffix = 'AM' if dt.hour < 12 else 'PM'
    return f'{hour}:{dt.minute:02d} {suffix}'


def hours(value: float) -> str:
    return f'{value:g}h'


def day_label(day: date) -> str:
    return day.strftime('%a %b ') + str(day.day)


def _plural(n: int, unit: str) -> str:
    return f'{n} {unit}' if n == 1 else f'{n} {unit}s'


def distance(delta: timedelta) -> str:
    """Rough human distance for a non-negative timedelta."""
    seconds = abs(delta.total_seconds())
    if seconds < 45:
        return 'less than a minute'
    minutes = round(seconds / 60)
    if minutes < 45:
        return _plural(minutes, 'minute')
    hours_ = round(seconds / 3600)
    if hours_ < 24:
        return 'about ' + _plural(hours_, 'hour')
    days = round(seconds / 86400)
    if days < 30:
        return _plural(days, 'day')
    months = round(days / 30)
    if months < 12:
        return _plural(months, 'month')
    return 'about ' + _plural(round(days / 365), 'year')


def due_text(due: Optional[str], now: Optional[datetime] = None) -> str:
    dt = parse_iso(due)
    if dt is None:
        return 'No due date'
    now = now or datetime.now()
    if dt >= now:
        return f'Due in {distance(dt - now)}'
    return f'Due {distance(now - dt)} ago'
