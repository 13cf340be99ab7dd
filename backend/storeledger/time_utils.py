from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")


def parse_calendar_date(value) -> date:
    """
    Parse a due date given as a date, a datetime or a "YYYY-MM-DD" string.

    Strings may carry a time suffix ("2026-03-01T10:00"); only the calendar
    part is kept. Raises ValueError for anything that is not a real date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"invalid date: {value!r}")
    s = value.strip()
    if len(s) < 10:
        raise ValueError(f"invalid date: {value!r}")
    return date.fromisoformat(s[:10])


def to_iso_date(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def add_days(start: date, days: int) -> date:
    return start + timedelta(days=days)


def clamp_day(year: int, month: int, day: int) -> int:
    """Clamp day-of-month into [1, last day of year/month]."""
    last_day = calendar.monthrange(year, month)[1]
    return min(max(day, 1), last_day)


def month_offset_date(start: date, months: int, day: int) -> date:
    """
    The given day-of-month in the month `months` after start's month.

    Day 31 in a 30-day month becomes day 30; day 30 in February becomes
    the 28th (29th in leap years).
    """
    index = start.year * 12 + (start.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, clamp_day(year, month, day))
