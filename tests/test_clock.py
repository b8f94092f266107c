# tests/test_clock.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from astrocal.core.clock import civil_now
from astrocal.core.daycount import CivilDate, civil_to_day_count


def test_utc_epoch() -> None:
    got = civil_now("UTC", now=datetime(1970, 1, 1, tzinfo=timezone.utc))
    assert got.date == CivilDate(1, 1, 1970)
    assert got.day_count == 2440588
    assert (got.hour, got.minute, got.second) == (0, 0, 0)

def test_just_before_epoch() -> None:
    got = civil_now("UTC", now=datetime(1969, 12, 31, 23, 59, 59, tzinfo=timezone.utc))
    assert got.date == CivilDate(12, 31, 1969)
    assert (got.hour, got.minute, got.second) == (23, 59, 59)

def test_fractional_second_before_epoch_stays_on_its_day() -> None:
    got = civil_now("UTC", now=datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=timezone.utc))
    assert got.date == CivilDate(12, 31, 1969)
    assert got.day_count == 2440587
    assert (got.hour, got.minute, got.second) == (23, 59, 59)
    got = civil_now("UTC", now=datetime(1969, 12, 31, 0, 0, 0, 250000, tzinfo=timezone.utc))
    assert got.date == CivilDate(12, 31, 1969)
    assert (got.hour, got.minute, got.second) == (0, 0, 0)

def test_positive_offset_crosses_midnight(ensure_tzdata) -> None:
    # 23:30 UTC is 05:00 the next morning in India (+05:30)
    got = civil_now("Asia/Kolkata", now=datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc))
    assert got.date == CivilDate(3, 11, 2024)
    assert (got.hour, got.minute) == (5, 0)
    assert got.day_count == civil_to_day_count(3, 11, 2024)
    assert got.timezone == "Asia/Kolkata"

def test_dst_offset_is_applied(ensure_tzdata) -> None:
    # New York switched to EDT (-04:00) earlier that day
    got = civil_now("America/New_York", now=datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc))
    assert got.date == CivilDate(3, 10, 2024)
    assert (got.hour, got.minute) == (19, 30)

def test_non_utc_input_instant() -> None:
    ist = timezone(timedelta(hours=5, minutes=30))
    got = civil_now("UTC", now=datetime(2000, 1, 1, 5, 0, tzinfo=ist))
    assert got.date == CivilDate(12, 31, 1999)
    assert (got.hour, got.minute) == (23, 30)

def test_live_clock_is_consistent() -> None:
    got = civil_now()
    assert got.day_count == civil_to_day_count(*got.date)
    assert got.to_dict()["date"]["year"] == got.date.year

def test_unknown_zone_raises() -> None:
    with pytest.raises(ValueError):
        civil_now("Mars/Olympus_Mons")

def test_naive_instant_raises() -> None:
    with pytest.raises(ValueError):
        civil_now("UTC", now=datetime(2024, 1, 1))
