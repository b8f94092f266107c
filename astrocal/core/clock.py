# astrocal/core/clock.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from astrocal.core.circular import floor_div
from astrocal.core.daycount import (
    GREGORIAN_REFORM,
    CalendarReform,
    CivilDate,
    day_count_to_civil,
)

__all__ = ["CivilInstant", "civil_now"]

# Day count of 1 January 1970 (the POSIX epoch).
_EPOCH_DAY_COUNT = 2440588


@dataclass(frozen=True)
class CivilInstant:
    date: CivilDate
    hour: int
    minute: int
    second: int
    day_count: int
    timezone: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.to_dict(),
            "hour": self.hour,
            "minute": self.minute,
            "second": self.second,
            "day_count": self.day_count,
            "timezone": self.timezone,
        }


def civil_now(
    tz_name: str = "UTC",
    *,
    now: Optional[datetime] = None,
    reform: CalendarReform = GREGORIAN_REFORM,
) -> CivilInstant:
    """
    Wall-clock date and time in an IANA zone.

    Only the zone offset is taken from ``datetime``; the civil date itself is
    derived from whole days since the POSIX epoch through the day-count
    converter, so it honours ``reform``. ``now`` pins the instant (tests).
    """
    try:
        z = ZoneInfo(tz_name)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unknown IANA time zone '{tz_name}'") from e

    instant = now if now is not None else datetime.now(timezone.utc)
    if instant.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    local = instant.astimezone(z)
    offset = local.utcoffset()
    if offset is None:
        raise ValueError("Timezone returned None utcoffset()")

    # Whole seconds rounded toward the past, also before 1970.
    local_seconds = math.floor(instant.timestamp()) + int(offset.total_seconds())
    days = floor_div(local_seconds, 86400)
    secs = local_seconds - days * 86400
    day_count = _EPOCH_DAY_COUNT + days
    hour, rem = divmod(secs, 3600)
    minute, second = divmod(rem, 60)

    return CivilInstant(
        date=day_count_to_civil(day_count, reform=reform),
        hour=hour,
        minute=minute,
        second=second,
        day_count=day_count,
        timezone=str(tz_name),
    )
