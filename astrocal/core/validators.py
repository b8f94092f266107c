# astrocal/core/validators.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Union

from astrocal.core.civil import last_day_of_month
from astrocal.core.constants import SIGN_COUNT
from astrocal.core.daycount import (
    GREGORIAN_REFORM,
    CalendarReform,
    CivilDate,
    is_in_reform_gap,
)
from astrocal.core.rules import RuleTables

# ───────────────────────── errors ─────────────────────────

class ValidationError(ValueError):
    """Structured validator error compatible with routes.py (has .errors())."""
    def __init__(self, details: Union[str, Dict[str, Any], List[Dict[str, Any]]]):
        if isinstance(details, str):
            self._details = [{"loc": [], "msg": details, "type": "value_error"}]
            super().__init__(details)
        elif isinstance(details, dict):
            self._details = [details]
            super().__init__(details.get("msg", "validation_error"))
        elif isinstance(details, list):
            self._details = details
            super().__init__(self._details[0]["msg"] if self._details else "validation_error")
        else:
            self._details = [{"loc": [], "msg": "validation_error", "type": "value_error"}]
            super().__init__("validation_error")

    def errors(self) -> List[Dict[str, Any]]:
        return list(self._details)


# ───────────────────────── helpers ─────────────────────────

def _err(loc: List[str] | str, msg: str, typ: str = "value_error") -> Dict[str, Any]:
    return {"loc": [loc] if isinstance(loc, str) else loc, "msg": msg, "type": typ}

def _as_float(v: Any) -> Optional[float]:
    if isinstance(v, bool):
        return None
    try:
        if v is None:
            return None
        x = float(v)
        if x != x or x in (float("inf"), float("-inf")):
            return None
        return x
    except (TypeError, ValueError):
        return None

def _as_int(v: Any) -> Optional[int]:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if v.is_integer() else None
    if isinstance(v, str) and re.fullmatch(r"\s*[+-]?\d+\s*", v):
        return int(v)
    return None


# ───────────────────────── atomic parsers ─────────────────────────

def parse_int(v: Any, key: str) -> int:
    out = _as_int(v)
    if out is None:
        raise ValidationError(_err(key, "must be an integer", "type_error.integer"))
    return out

def parse_degree(v: Any, key: str) -> float:
    out = _as_float(v)
    if out is None:
        raise ValidationError(_err(key, "must be a finite number (degrees)", "type_error.float"))
    return out

def parse_day_count(v: Any, key: str = "day_count") -> float:
    out = _as_float(v)
    if out is None:
        raise ValidationError(_err(key, "must be a finite number (days)", "type_error.float"))
    return out

def parse_month(v: Any, key: str = "month") -> int:
    month = parse_int(v, key)
    if not (1 <= month <= 12):
        raise ValidationError(_err(key, "month must be between 1 and 12", "value_error.month"))
    return month

def parse_sign(v: Any, key: str = "sign") -> int:
    sign = parse_int(v, key)
    if not (1 <= sign <= SIGN_COUNT):
        raise ValidationError(_err(key, "sign must be between 1 (Aries) and 12 (Pisces)", "value_error.sign"))
    return sign

def parse_body(v: Any, key: str = "body") -> str:
    """Any non-empty name; unclassified bodies are legal and degrade in the rule tables."""
    if not isinstance(v, str) or not v.strip():
        raise ValidationError(_err(key, "required string", "value_error"))
    return v.strip()

def parse_aspect(v: Any, rules: RuleTables, key: str = "aspect") -> str:
    if not isinstance(v, str) or not v.strip():
        raise ValidationError(_err(key, "required string", "value_error"))
    name = v.strip().lower()
    if name not in rules.aspect_orbs:
        raise ValidationError(_err(
            key, f"unknown aspect; expected one of {sorted(rules.aspect_orbs)}", "value_error.aspect",
        ))
    return name


# ───────────────────────── composite parsers ─────────────────────────

_DATE_RE = re.compile(r"^\s*(?P<y>[+-]?\d{1,6})-(?P<m>\d{1,2})-(?P<d>\d{1,2})\s*$")

def parse_civil_date(
    body: Any,
    *,
    reform: CalendarReform = GREGORIAN_REFORM,
    loc: str = "date",
) -> CivilDate:
    """
    Accept either {"month", "day", "year"} fields or a 'YYYY-MM-DD' string
    (year may be signed; 0 = 1 BC). Rejects days outside the month and the
    days removed by the calendar reform.
    """
    if isinstance(body, str):
        m = _DATE_RE.match(body)
        if not m:
            raise ValidationError(_err(loc, "date must be 'YYYY-MM-DD' (signed year allowed)", "value_error.date"))
        month = parse_month(m.group("m"), loc)
        day = parse_int(m.group("d"), loc)
        year = int(m.group("y"))
    elif isinstance(body, dict):
        if not all(k in body for k in ("month", "day", "year")):
            raise ValidationError(_err(loc, "month, day and year are required", "value_error.missing"))
        month = parse_month(body.get("month"), "month")
        day = parse_int(body.get("day"), "day")
        year = parse_int(body.get("year"), "year")
    else:
        raise ValidationError(_err(loc, "date must be an object or 'YYYY-MM-DD' string", "type_error"))

    last = last_day_of_month(month, year, reform=reform)
    if not (1 <= day <= last):
        raise ValidationError(_err("day", f"day must be between 1 and {last}", "value_error.day"))
    if is_in_reform_gap(month, day, year, reform=reform):
        raise ValidationError(_err(
            "day",
            f"{year:04d}-{month:02d}-{day:02d} was skipped by the calendar reform "
            f"({reform.last_old_day} was followed by {reform.first_new_day})",
            "value_error.reform_gap",
        ))
    return CivilDate(month, day, year)

_REFORM_RE = re.compile(r"^\s*(?P<y>[+-]?\d{1,6})-(?P<m>\d{1,2})-(?P<d1>\d{1,2})/(?P<d2>\d{1,2})\s*$")

def parse_reform(v: Any, key: str = "reform") -> CalendarReform:
    """Parse 'YYYY-MM-DD/DD' (last Julian day / first Gregorian day)."""
    m = _REFORM_RE.match(v or "") if isinstance(v, str) else None
    if not m:
        raise ValidationError(_err(key, "reform must look like '1582-10-04/15'", "value_error.reform"))
    try:
        return CalendarReform(
            year=int(m.group("y")),
            month=int(m.group("m")),
            last_old_day=int(m.group("d1")),
            first_new_day=int(m.group("d2")),
        )
    except ValueError as e:
        raise ValidationError(_err(key, str(e), "value_error.reform")) from e


__all__ = [
    "ValidationError",
    "parse_int",
    "parse_degree",
    "parse_day_count",
    "parse_month",
    "parse_sign",
    "parse_body",
    "parse_aspect",
    "parse_civil_date",
    "parse_reform",
]
