"""Sunday-anchored week helpers and current-week proration."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional, Union

import pandas as pd

__all__ = [
    "DAYS_PER_WEEK",
    "sunday_day_of_week",
    "get_week_start",
    "generate_week_dates",
    "days_between",
    "is_date_in_week",
    "get_days_remaining_in_week",
    "get_current_week_proration_factor",
    "duration_to_weeks",
]

DAYS_PER_WEEK = 7

DateLike = Union[date, datetime, pd.Timestamp, str]


def sunday_day_of_week(value: DateLike) -> int:
    """Return the day of week with Sunday as 0 and Saturday as 6."""

    return (pd.Timestamp(value).weekday() + 1) % DAYS_PER_WEEK


def get_week_start(value: DateLike) -> pd.Timestamp:
    """Return midnight on the Sunday that opens the week containing ``value``."""

    day = pd.Timestamp(value).normalize()
    return day - pd.Timedelta(days=sunday_day_of_week(day))


def generate_week_dates(start: DateLike, weeks: int) -> list[pd.Timestamp]:
    if weeks <= 0:
        return []
    return list(pd.date_range(pd.Timestamp(start), periods=weeks, freq="7D"))


def days_between(start: DateLike, end: DateLike) -> int:
    return int((pd.Timestamp(end).normalize() - pd.Timestamp(start).normalize()).days)


def is_date_in_week(value: DateLike, week_start: DateLike) -> bool:
    offset = days_between(week_start, value)
    return 0 <= offset < DAYS_PER_WEEK


def get_days_remaining_in_week(value: DateLike) -> int:
    """Days left in the current week, counting ``value`` itself (Sunday -> 7)."""

    return DAYS_PER_WEEK - sunday_day_of_week(value)


def get_current_week_proration_factor(value: DateLike) -> float:
    """Fraction of the current week still to be played, in ``(0, 1]``."""

    return get_days_remaining_in_week(value) / DAYS_PER_WEEK


def duration_to_weeks(duration_days: Optional[int]) -> int:
    """Convert a duration in days to whole weeks, rounding up.

    ``None`` means a single-week event; an explicit zero maps to zero weeks.
    """

    if duration_days is None:
        return 1
    return math.ceil(duration_days / DAYS_PER_WEEK)
