# astrocal/core/civil.py
from __future__ import annotations

from typing import Tuple

from astrocal.core.circular import sign_of
from astrocal.core.constants import WEEKDAY_OFFSET
from astrocal.core.daycount import (
    GREGORIAN_REFORM,
    CalendarReform,
    civil_to_day_count,
)

__all__ = [
    "is_leap_year",
    "last_day_of_month",
    "days_in_civil_month",
    "day_of_week",
    "add_days_skipping_gap",
]

_THIRTY_DAY_MONTHS: Tuple[int, ...] = (4, 6, 9, 11)


def is_leap_year(year: int, *, reform: CalendarReform = GREGORIAN_REFORM) -> bool:
    """
    Julian rule (every 4th year) up to and including the reform year,
    Gregorian rule (no century years unless divisible by 400) afterwards.
    """
    if year % 4 != 0:
        return False
    if year <= reform.year:
        return True
    return year % 100 != 0 or year % 400 == 0


def last_day_of_month(month: int, year: int, *, reform: CalendarReform = GREGORIAN_REFORM) -> int:
    """Index of the last day of the month (its nominal length)."""
    if month in _THIRTY_DAY_MONTHS:
        return 30
    if month != 2:
        return 31
    return 29 if is_leap_year(year, reform=reform) else 28


def days_in_civil_month(month: int, year: int, *, reform: CalendarReform = GREGORIAN_REFORM) -> int:
    """
    Number of days that actually exist in the month. Equal to
    last_day_of_month except in the reform month, which loses the gap days.
    """
    d = last_day_of_month(month, year, reform=reform)
    if year == reform.year and month == reform.month:
        d -= reform.gap_width
    return d


def day_of_week(month: int, day: int, year: int, *, reform: CalendarReform = GREGORIAN_REFORM) -> int:
    """Day of the week, Sunday = 0 … Saturday = 6 (non-negative for BC dates)."""
    return (civil_to_day_count(month, day, year, reform=reform) + WEEKDAY_OFFSET) % 7


def add_days_skipping_gap(month: int, day: int, year: int, delta: int,
                          *, reform: CalendarReform = GREGORIAN_REFORM) -> int:
    """
    Add ``delta`` days to ``day`` within its month. A result landing inside the
    reform gap is pushed past it in the direction of travel. Month and year
    rollover are left to the caller.
    """
    d = day + delta
    if year == reform.year and month == reform.month:
        if reform.last_old_day < d < reform.first_new_day:
            d += int(sign_of(delta)) * reform.gap_width
    return d
