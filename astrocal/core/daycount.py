# astrocal/core/daycount.py
# -----------------------------------------------------------------------------
# Civil calendar <-> continuous day count (Julian day number)
#
# Public API (locked):
#   civil_to_day_count(month, day, year, *, reform) -> int
#   day_count_to_civil(day_count, *, reform)        -> CivilDate
#
# Guarantees:
#   • Closed-form integer arithmetic only (floor division), valid for BC years
#     in astronomical numbering (year 0 = 1 BC, -1 = 2 BC, ...).
#   • Julian rules before the reform's first new-style day, Gregorian from it.
#   • The day count is continuous across the reform; only the civil
#     representation has a gap.
#   • day_count_to_civil never yields a date inside the reform gap.
#   • civil_to_day_count(*day_count_to_civil(n)) == n for every integer n.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple
import math

__all__ = [
    "CivilDate",
    "CalendarReform",
    "GREGORIAN_REFORM",
    "BRITISH_REFORM",
    "civil_to_day_count",
    "day_count_to_civil",
    "is_gregorian_date",
    "is_in_reform_gap",
    "julian_calendar_day_count",
    "gregorian_calendar_day_count",
]

# ───────────────────────────── Value types ─────────────────────────────

class CivilDate(NamedTuple):
    month: int
    day: int
    year: int

    def to_dict(self) -> Dict[str, int]:
        return self._asdict()


@dataclass(frozen=True)
class CalendarReform:
    """
    A single Julian→Gregorian switch inside one civil month.

    ``last_old_day`` is the last day reckoned in the Julian calendar and
    ``first_new_day`` the first one reckoned in the Gregorian calendar; the
    days strictly between them do not exist in that month. The two days must
    be consecutive in the day count, which pins the gap width to the
    calendars' divergence in that year (10 days in 1582, 11 in 1752).
    """
    year: int
    month: int
    last_old_day: int
    first_new_day: int

    def __post_init__(self) -> None:
        if not (1 <= self.month <= 12):
            raise ValueError(f"reform month out of range: {self.month}")
        if not (1 <= self.last_old_day < self.first_new_day):
            raise ValueError(
                f"reform days must satisfy 1 <= last_old_day < first_new_day "
                f"(got {self.last_old_day}, {self.first_new_day})"
            )
        nxt_month, nxt_year = (1, self.year + 1) if self.month == 12 else (self.month + 1, self.year)
        month_length = (
            gregorian_calendar_day_count(nxt_month, 1, nxt_year)
            - gregorian_calendar_day_count(self.month, 1, self.year)
        )
        if self.first_new_day > month_length:
            raise ValueError(
                f"first_new_day {self.first_new_day} is past the end of "
                f"{self.year:04d}-{self.month:02d} ({month_length} days)"
            )
        # The day count must run on without a break or overlap.
        if self.last_old_day_count + 1 != self.first_new_day_count:
            drift = self.first_new_day_count - self.last_old_day_count - 1
            raise ValueError(
                f"reform is not continuous: {self.year:04d}-{self.month:02d}-"
                f"{self.last_old_day:02d} (Julian) is not followed by day "
                f"{self.first_new_day} (Gregorian); off by {drift} day(s)"
            )

    @property
    def gap_width(self) -> int:
        """Number of civil days skipped by the reform."""
        return self.first_new_day - self.last_old_day - 1

    @property
    def first_new_day_count(self) -> int:
        """Day count of the first Gregorian-reckoned day."""
        return gregorian_calendar_day_count(self.month, self.first_new_day, self.year)

    @property
    def last_old_day_count(self) -> int:
        return julian_calendar_day_count(self.month, self.last_old_day, self.year)

    @classmethod
    def from_config(cls, section: Any) -> "CalendarReform":
        """Build from a mapping with year/month/last_old_day/first_new_day keys."""
        if not section:
            return GREGORIAN_REFORM
        return cls(
            year=int(section["year"]),
            month=int(section["month"]),
            last_old_day=int(section["last_old_day"]),
            first_new_day=int(section["first_new_day"]),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "year": self.year,
            "month": self.month,
            "last_old_day": self.last_old_day,
            "first_new_day": self.first_new_day,
            "gap_width": self.gap_width,
            "first_new_day_count": self.first_new_day_count,
        }


# ───────────────────────────── Calendar formulas ─────────────────────────────
# Both formulas count months from March so the leap day falls at the end of the
# computational year; m2 runs 0..11 for March..February.

def _shift_to_march_year(month: int, year: int) -> tuple[int, int]:
    a = (14 - month) // 12
    return year + 4800 - a, month + 12 * a - 3

def julian_calendar_day_count(month: int, day: int, year: int) -> int:
    """Day count of a date reckoned in the (proleptic) Julian calendar."""
    y2, m2 = _shift_to_march_year(month, year)
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - 32083

def gregorian_calendar_day_count(month: int, day: int, year: int) -> int:
    """Day count of a date reckoned in the (proleptic) Gregorian calendar."""
    y2, m2 = _shift_to_march_year(month, year)
    return (
        day + (153 * m2 + 2) // 5 + 365 * y2
        + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    )

def _from_march_day(e: int, years: int) -> CivilDate:
    """Shared tail of the inverse formulas: day-of-computational-year → date."""
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = years - 4800 + m // 10
    return CivilDate(month, day, year)

def _julian_calendar_civil(n: int) -> CivilDate:
    c = n + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    return _from_march_day(e, d)

def _gregorian_calendar_civil(n: int) -> CivilDate:
    a = n + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    return _from_march_day(e, 100 * b + d)


# ───────────────────────────── Reform boundaries ─────────────────────────────

# Papal reform: Thursday 4 October 1582 was followed by Friday 15 October 1582.
GREGORIAN_REFORM = CalendarReform(year=1582, month=10, last_old_day=4, first_new_day=15)

# Great Britain and colonies: 2 September 1752 was followed by 14 September 1752.
BRITISH_REFORM = CalendarReform(year=1752, month=9, last_old_day=2, first_new_day=14)


def is_gregorian_date(month: int, day: int, year: int,
                      *, reform: CalendarReform = GREGORIAN_REFORM) -> bool:
    """True when the civil date is reckoned in the Gregorian calendar."""
    return (year, month, day) >= (reform.year, reform.month, reform.first_new_day)

def is_in_reform_gap(month: int, day: int, year: int,
                     *, reform: CalendarReform = GREGORIAN_REFORM) -> bool:
    """True for the civil days skipped by the reform (they never existed)."""
    return (
        year == reform.year
        and month == reform.month
        and reform.last_old_day < day < reform.first_new_day
    )


# ───────────────────────────── Public API ─────────────────────────────

def civil_to_day_count(month: int, day: int, year: int,
                       *, reform: CalendarReform = GREGORIAN_REFORM) -> int:
    """
    Convert a civil date to its continuous day count.

    Dates inside the reform gap are outside the domain; they are reckoned as
    proleptic Julian dates rather than rejected (validators reject them first).
    """
    month, day, year = int(month), int(day), int(year)
    if is_gregorian_date(month, day, year, reform=reform):
        return gregorian_calendar_day_count(month, day, year)
    return julian_calendar_day_count(month, day, year)

def day_count_to_civil(day_count: float,
                       *, reform: CalendarReform = GREGORIAN_REFORM) -> CivilDate:
    """
    Convert a day count back to a civil date.

    Fractional counts are rounded half-up to the nearest whole day, so a
    midnight-based astronomical JD (ending in .5) maps to the civil day
    starting then.
    """
    n = int(math.floor(day_count + 0.5))
    if n >= reform.first_new_day_count:
        return _gregorian_calendar_civil(n)
    return _julian_calendar_civil(n)
