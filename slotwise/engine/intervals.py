"""Interval helpers shared by the suggestion engine.

All intervals are half-open [start, end): an interval ending at 10:00 and one
starting at 10:00 are adjacent, not overlapping.
"""

from datetime import datetime, timedelta


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Return True if [start_a, end_a) and [start_b, end_b) share any instant."""
    return start_a < end_b and end_a > start_b


def hour_of_day(dt: datetime) -> int:
    return dt.hour


def minutes_between(start: datetime, end: datetime) -> float:
    """Signed number of minutes from start to end."""
    return (end - start).total_seconds() / 60


def add_minutes(dt: datetime, minutes: int) -> datetime:
    return dt + timedelta(minutes=minutes)


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)
