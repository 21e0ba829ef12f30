"""Local calendar day helpers.

Completions carry a full timestamp but only the local calendar day is
meaningful, so every comparison goes through a half-open day interval
``[start_of_day, start_of_day + 1 day)`` built here.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Union

DateLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)


def to_local_naive(value: DateLike) -> datetime:
    """Return ``value`` as a naive datetime in local time."""

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def start_of_day(value: DateLike) -> datetime:
    """Midnight (local) of the calendar day containing ``value``."""

    return datetime.combine(to_local_naive(value).date(), time.min)


def day_bounds(value: DateLike) -> tuple[datetime, datetime]:
    """Half-open ``(start, end)`` interval covering the day of ``value``."""

    start = start_of_day(value)
    return start, start + ONE_DAY


def days_ago(value: DateLike, days: int) -> datetime:
    """Start of the day ``days`` calendar days before ``value``."""

    return start_of_day(to_local_naive(value).date() - timedelta(days=days))


__all__ = ["DateLike", "ONE_DAY", "day_bounds", "days_ago", "start_of_day", "to_local_naive"]
