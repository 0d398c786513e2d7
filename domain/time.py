"""
Domain time utilities (pure).

Centralized timestamp validation and due-date arithmetic.

Sale timestamps are always UTC so that due dates do not shift by a day
across DST boundaries or between hosts in different timezones.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforces that timestamps are UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def add_calendar_days(start: datetime, days: int) -> date:
    """
    Return the calendar date `days` after `start`.

    Time-of-day is discarded: a sale created at 00:01 or 23:59 UTC on the
    same day gets the same due date.
    """

    require_utc_timestamp("start", start)
    return start.date() + timedelta(days=days)
