"""Streak and completion-rate helpers over in-memory completion days."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from ..dates import DateLike, to_local_naive


def completion_days(values: Iterable[DateLike]) -> set[date]:
    """Collapse completion timestamps to the set of local calendar days."""

    return {to_local_naive(value).date() for value in values}


def longest_streak(days: Iterable[DateLike]) -> int:
    """Length of the longest run of consecutive days in ``days``."""

    by_day = completion_days(days)

    # Sweep through sorted days, counting consecutive runs.
    longest = 0
    run = 0
    last_day: date | None = None
    for d in sorted(by_day):
        if last_day is None or d == last_day + timedelta(days=1):
            run += 1
        else:
            longest = max(longest, run)
            run = 1
        last_day = d
    longest = max(longest, run)

    return longest


def completion_percentage(count: int, days: int) -> float:
    """``count`` completions over a window of ``days`` days, as a percentage."""

    if days <= 0:
        raise ValueError("days must be a positive number of days")
    return count / days * 100.0


__all__ = ["completion_days", "completion_percentage", "longest_streak"]
