# tests/test_daycount.py
from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from astrocal.core.civil import days_in_civil_month, last_day_of_month
from astrocal.core.daycount import (
    BRITISH_REFORM,
    GREGORIAN_REFORM,
    CalendarReform,
    CivilDate,
    civil_to_day_count,
    day_count_to_civil,
    gregorian_calendar_day_count,
    is_gregorian_date,
    is_in_reform_gap,
    julian_calendar_day_count,
)

# Day counts spanning roughly 10000 BC .. AD 10000
day_counts = st.integers(min_value=-1_931_000, max_value=5_373_484)

# ─────────────────────────────────────────────────────────────────────────────
# Known dates
# ─────────────────────────────────────────────────────────────────────────────
KNOWN = [
    # (month, day, year, day count)
    (1, 1, -4712, 0),              # JD epoch, Julian calendar
    (1, 1, 2000, 2451545),         # J2000.0
    (10, 4, 1582, 2299160),        # last Julian day
    (10, 15, 1582, 2299161),       # first Gregorian day
    (1, 1, 1970, 2440588),         # POSIX epoch
    (3, 15, -43, 1705426),         # Ides of March, 44 BC
    (2, 29, 2024, 2460370),
    (12, 31, 1899, 2415020),
    (1, 1, 1, 1721424),            # AD 1, Julian calendar
    (12, 31, 0, 1721423),          # last day of 1 BC
]

@pytest.mark.parametrize("month, day, year, n", KNOWN)
def test_known_day_counts(month, day, year, n) -> None:
    assert civil_to_day_count(month, day, year) == n
    assert day_count_to_civil(n) == CivilDate(month, day, year)

def test_day_count_is_continuous_across_reform() -> None:
    last_old = civil_to_day_count(10, 4, 1582)
    first_new = civil_to_day_count(10, 15, 1582)
    assert first_new - last_old == 1
    assert GREGORIAN_REFORM.first_new_day_count == first_new
    assert GREGORIAN_REFORM.last_old_day_count == last_old

def test_fractional_day_counts_round_half_up() -> None:
    # JD 2451544.5 is 2000-01-01 00:00 UT
    assert day_count_to_civil(2451544.5) == CivilDate(1, 1, 2000)
    assert day_count_to_civil(2451545.49) == CivilDate(1, 1, 2000)
    assert day_count_to_civil(2451545.5) == CivilDate(1, 2, 2000)

def test_bc_dates_are_consecutive() -> None:
    assert civil_to_day_count(1, 1, 1) - civil_to_day_count(12, 31, 0) == 1
    assert civil_to_day_count(1, 1, 0) - civil_to_day_count(12, 31, -1) == 1
    # year 0 (1 BC) is a Julian leap year
    assert civil_to_day_count(3, 1, 0) - civil_to_day_count(2, 28, 0) == 2


# ─────────────────────────────────────────────────────────────────────────────
# Properties
# ─────────────────────────────────────────────────────────────────────────────

@given(n=day_counts)
def test_round_trip(n) -> None:
    d = day_count_to_civil(n)
    assert civil_to_day_count(*d) == n

@given(n=day_counts)
def test_output_is_a_valid_date_and_never_in_gap(n) -> None:
    d = day_count_to_civil(n)
    assert 1 <= d.month <= 12
    assert 1 <= d.day <= last_day_of_month(d.month, d.year)
    assert not is_in_reform_gap(d.month, d.day, d.year)

@given(n=day_counts)
def test_consecutive_counts_are_consecutive_days(n) -> None:
    a = day_count_to_civil(n)
    b = day_count_to_civil(n + 1)
    if (a.month, a.year) == (b.month, b.year):
        step = b.day - a.day
        assert step == (GREGORIAN_REFORM.gap_width + 1
                        if is_in_reform_gap(a.month, a.day + 1, a.year) else 1)
    else:
        assert b.day == 1
        assert a.day == last_day_of_month(a.month, a.year)

@pytest.mark.slow
def test_no_gap_dates_near_reform_exhaustive() -> None:
    start = GREGORIAN_REFORM.first_new_day_count - 400
    for n in range(start, start + 800):
        d = day_count_to_civil(n)
        assert not is_in_reform_gap(*d)
        assert civil_to_day_count(*d) == n
    october = [day_count_to_civil(n) for n in range(2299160 - 3, 2299161 + 17)
               if day_count_to_civil(n)[0::2] == (10, 1582)]
    assert len(october) == days_in_civil_month(10, 1582)


# ─────────────────────────────────────────────────────────────────────────────
# Cross-check against ERFA (proleptic Gregorian)
# ─────────────────────────────────────────────────────────────────────────────

@given(
    y=st.integers(min_value=1583, max_value=9999),
    m=st.integers(min_value=1, max_value=12),
    d=st.integers(min_value=1, max_value=28),
)
def test_gregorian_dates_match_erfa(ensure_erfa, y, m, d) -> None:
    djm0, djm = ensure_erfa.cal2jd(y, m, d)
    assert civil_to_day_count(m, d, y) == int(djm0 + djm + 0.5)

def test_erfa_agrees_on_first_gregorian_day(ensure_erfa) -> None:
    iy, im, iday, _fd = ensure_erfa.jd2cal(float(GREGORIAN_REFORM.first_new_day_count), 0.0)
    assert (int(im), int(iday), int(iy)) == (10, 15, 1582)


# ─────────────────────────────────────────────────────────────────────────────
# Alternate reform boundary
# ─────────────────────────────────────────────────────────────────────────────

def test_british_reform() -> None:
    r = BRITISH_REFORM
    assert civil_to_day_count(9, 14, 1752, reform=r) - civil_to_day_count(9, 2, 1752, reform=r) == 1
    assert day_count_to_civil(civil_to_day_count(9, 2, 1752, reform=r) + 1, reform=r) == CivilDate(9, 14, 1752)
    # 1700 was a Julian leap year in Britain
    assert day_count_to_civil(civil_to_day_count(2, 28, 1700, reform=r) + 1, reform=r) == CivilDate(2, 29, 1700)
    assert is_gregorian_date(9, 14, 1752, reform=r)
    assert not is_gregorian_date(9, 2, 1752, reform=r)

@given(n=st.integers(min_value=2_000_000, max_value=2_700_000))
def test_british_reform_round_trip(n) -> None:
    d = day_count_to_civil(n, reform=BRITISH_REFORM)
    assert not is_in_reform_gap(*d, reform=BRITISH_REFORM)
    assert civil_to_day_count(*d, reform=BRITISH_REFORM) == n

def test_reform_validation() -> None:
    with pytest.raises(ValueError):
        CalendarReform(year=1582, month=13, last_old_day=4, first_new_day=15)
    with pytest.raises(ValueError):
        CalendarReform(year=1582, month=10, last_old_day=15, first_new_day=4)
    with pytest.raises(ValueError, match="past the end"):
        CalendarReform(year=1582, month=9, last_old_day=25, first_new_day=36)
    # gap too wide: the Julian 4th is followed by the Gregorian 15th, not the 20th
    with pytest.raises(ValueError, match="not continuous"):
        CalendarReform(year=1582, month=10, last_old_day=4, first_new_day=20)
    # gap too narrow: two civil dates would share one day count
    with pytest.raises(ValueError, match="not continuous"):
        CalendarReform(year=1582, month=10, last_old_day=4, first_new_day=14)
    # the divergence in 1752 is 11 days, so the papal width does not fit there
    with pytest.raises(ValueError, match="not continuous"):
        CalendarReform(year=1752, month=9, last_old_day=2, first_new_day=13)

def test_reform_from_config() -> None:
    r = CalendarReform.from_config({"year": 1752, "month": 9, "last_old_day": 2, "first_new_day": 14})
    assert r == BRITISH_REFORM
    assert r.gap_width == 11
    assert CalendarReform.from_config(None) is GREGORIAN_REFORM

@pytest.mark.parametrize("year, month, last_old_day", [
    (1582, 12, 9),     # France
    (1584, 1, 6),      # Bohemia
    (1752, 9, 2),      # Britain
    (1918, 2, 1),      # 13-day divergence
])
def test_divergence_width_reforms_round_trip(year, month, last_old_day) -> None:
    gap = julian_calendar_day_count(month, 1, year) - gregorian_calendar_day_count(month, 1, year)
    reform = CalendarReform(year=year, month=month, last_old_day=last_old_day,
                            first_new_day=last_old_day + gap + 1)
    n = reform.first_new_day_count
    for k in range(n - 40, n + 40):
        d = day_count_to_civil(k, reform=reform)
        assert not is_in_reform_gap(*d, reform=reform)
        assert civil_to_day_count(*d, reform=reform) == k
