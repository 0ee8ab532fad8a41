"""Timestamp helpers"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Render as ISO-8601 UTC with millisecond precision, e.g. 2024-01-18T09:00:00.000Z"""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def add_days(moment: datetime, days: int) -> datetime:
    return moment + timedelta(days=days)


def within_range(value: Optional[str], date_from: Optional[str] = None, date_to: Optional[str] = None) -> bool:
    """
    Inclusive range check on ISO-8601 strings.

    Bounds are compared as strings, so a bare date such as "2024-01-19" works as
    a lower bound for any timestamp on that day.
    """
    if date_from is not None and (value is None or value < date_from):
        return False
    if date_to is not None and (value is None or value > date_to):
        return False
    return True
