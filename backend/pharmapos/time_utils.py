from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Optional


SECONDS_PER_DAY = 24 * 60 * 60


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(value) -> Optional[date]:
    """
    Parse a calendar date ("YYYY-MM-DD").

    Accepts date objects as-is and datetimes (date part only).
    Raises ValueError on malformed strings.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    return date.fromisoformat(s[:10])


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


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def days_until(d: date, now: Optional[datetime] = None) -> int:
    """
    Whole days from now until the start of ``d``, rounded up.

    A date earlier today (or in the past) yields 0 or a negative number.
    """
    now = now or utcnow()
    delta = start_of_day(d) - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
