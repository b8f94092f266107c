# astrocal/api/routes.py
"""
astrocal: canonical API routes
- Calendar: civil date <-> day count, month lengths, gap-aware day offsets, now
- Degrees: normalisation, polar angle, distance/difference/midpoint, d.mm notation
- Rules: maximum orb, dignity
- Ops: /api/health, /api/config

Notes:
- The reform boundary and rule tables are built once in the app factory and
  read from current_app.config; handlers never mutate them.
- Validation failures are 422 with pydantic-style details.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from astrocal.version import VERSION
from astrocal.core.circular import (
    circular_midpoint,
    dec_to_deg,
    deg_to_dec,
    normalize_degrees,
    normalize_radians,
    polar_angle,
    polar_angle_rad,
    shortest_distance,
    signed_difference,
)
from astrocal.core.civil import (
    add_days_skipping_gap,
    day_of_week,
    days_in_civil_month,
    is_leap_year,
    last_day_of_month,
)
from astrocal.core.clock import civil_now
from astrocal.core.constants import (
    ASPECT_ANGLES_DEG,
    CONSTANTS_VERSION,
    MONTH_NAMES,
    SIGN_NAMES,
    WEEKDAY_NAMES,
)
from astrocal.core.daycount import (
    CalendarReform,
    CivilDate,
    civil_to_day_count,
    day_count_to_civil,
    is_gregorian_date,
)
from astrocal.core.rules import RuleTables, sign_of_longitude
from astrocal.core.validators import (
    ValidationError,
    parse_aspect,
    parse_body,
    parse_civil_date,
    parse_day_count,
    parse_degree,
    parse_int,
    parse_month,
    parse_sign,
)
from astrocal.utils.metrics import MET_GAP_SHIFTS, MET_VALIDATION_ERRORS

log = logging.getLogger(__name__)
api = Blueprint("api", __name__)


# ───────────────────────── helpers ─────────────────────────
def _engine() -> Tuple[CalendarReform, RuleTables]:
    return current_app.config["ASTROCAL_REFORM"], current_app.config["ASTROCAL_RULES"]


def _body_json() -> Dict[str, Any]:
    data = request.get_json(force=True, silent=False)
    if not isinstance(data, dict):
        raise BadRequest("JSON body must be an object")
    return data


def _json_error(code: str, details: Any = None, http: int = 400):
    out: Dict[str, Any] = {"ok": False, "error": code}
    if details is not None:
        out["details"] = details
    return jsonify(out), http


def _date_blob(d: CivilDate, reform: CalendarReform) -> Dict[str, Any]:
    wd = day_of_week(d.month, d.day, d.year, reform=reform)
    return {
        "date": d.to_dict(),
        "month_name": MONTH_NAMES[d.month - 1],
        "weekday": wd,
        "weekday_name": WEEKDAY_NAMES[wd],
        "calendar": "gregorian" if is_gregorian_date(d.month, d.day, d.year, reform=reform) else "julian",
    }


@api.errorhandler(ValidationError)
def _validation_error(e: ValidationError):
    details = e.errors()
    for item in details:
        MET_VALIDATION_ERRORS.labels(route=request.path, type=item.get("type", "value_error")).inc()
    log.info("validation failed at %s: %s", request.path, e)
    return _json_error("validation_error", details, 422)


# ───────────────────────── ops ─────────────────────────
@api.get("/api/health")
def health():
    return jsonify(ok=True, status="ok", version=VERSION), 200


@api.get("/api/config")
def config():
    reform, rules = _engine()
    return jsonify({
        "ok": True,
        "version": VERSION,
        "tables_version": CONSTANTS_VERSION,
        "reform": reform.to_dict(),
        "aspect_angles": {k: ASPECT_ANGLES_DEG.get(k) for k in rules.aspect_orbs},
        "rules": rules.to_dict(),
    }), 200


# ───────────────────────── calendar ─────────────────────────
@api.post("/api/calendar/day-count")
def calendar_day_count():
    data = _body_json()
    reform, _ = _engine()
    d = parse_civil_date(data.get("date", data), reform=reform)
    n = civil_to_day_count(d.month, d.day, d.year, reform=reform)
    return jsonify({"ok": True, "day_count": n, **_date_blob(d, reform)}), 200


@api.post("/api/calendar/civil")
def calendar_civil():
    data = _body_json()
    reform, _ = _engine()
    raw = parse_day_count(data.get("day_count"))
    d = day_count_to_civil(raw, reform=reform)
    n = civil_to_day_count(d.month, d.day, d.year, reform=reform)
    return jsonify({"ok": True, "day_count": n, **_date_blob(d, reform)}), 200


@api.post("/api/calendar/month")
def calendar_month():
    data = _body_json()
    reform, _ = _engine()
    month = parse_month(data.get("month"))
    year = parse_int(data.get("year"), "year")
    days = days_in_civil_month(month, year, reform=reform)
    last = last_day_of_month(month, year, reform=reform)
    return jsonify({
        "ok": True,
        "month": month,
        "year": year,
        "days": days,
        "last_day": last,
        "leap_year": is_leap_year(year, reform=reform),
        "reform_month": days != last,
    }), 200


@api.post("/api/calendar/add-days")
def calendar_add_days():
    data = _body_json()
    reform, _ = _engine()
    d = parse_civil_date(data.get("date", data), reform=reform)
    delta = parse_int(data.get("delta"), "delta")
    day = add_days_skipping_gap(d.month, d.day, d.year, delta, reform=reform)
    skipped = day != d.day + delta
    if skipped:
        MET_GAP_SHIFTS.inc()
    return jsonify({
        "ok": True,
        "month": d.month,
        "year": d.year,
        "day": day,
        "skipped_gap": skipped,
    }), 200


@api.get("/api/calendar/now")
def calendar_now():
    reform, _ = _engine()
    tz = (request.args.get("tz") or "UTC").strip()
    try:
        now = civil_now(tz, reform=reform)
    except ValueError as e:
        raise ValidationError({"loc": ["tz"], "msg": str(e), "type": "value_error.tz"}) from e
    return jsonify({"ok": True, **now.to_dict()}), 200


# ───────────────────────── degrees ─────────────────────────
@api.post("/api/degrees/normalize")
def degrees_normalize():
    data = _body_json()
    if "degrees" not in data and "radians" not in data:
        raise ValidationError({"loc": ["degrees"], "msg": "provide 'degrees' and/or 'radians'", "type": "value_error"})
    out: Dict[str, Any] = {"ok": True}
    if "degrees" in data:
        out["degrees"] = normalize_degrees(parse_degree(data["degrees"], "degrees"))
    if "radians" in data:
        out["radians"] = normalize_radians(parse_degree(data["radians"], "radians"))
    return jsonify(out), 200


@api.post("/api/degrees/polar")
def degrees_polar():
    data = _body_json()
    x = parse_degree(data.get("x"), "x")
    y = parse_degree(data.get("y"), "y")
    return jsonify({"ok": True, "degrees": polar_angle(x, y), "radians": polar_angle_rad(x, y)}), 200


@api.post("/api/degrees/compare")
def degrees_compare():
    data = _body_json()
    a = parse_degree(data.get("a"), "a")
    b = parse_degree(data.get("b"), "b")
    return jsonify({
        "ok": True,
        "distance": shortest_distance(a, b),
        "difference": signed_difference(a, b),
        "midpoint": circular_midpoint(a, b),
    }), 200


@api.post("/api/degrees/dms")
def degrees_dms():
    data = _body_json()
    value = parse_degree(data.get("value"), "value")
    direction = str(data.get("direction") or "to_decimal").strip().lower()
    if direction == "to_decimal":
        result = dec_to_deg(value)
    elif direction == "to_dms":
        result = deg_to_dec(value)
    else:
        raise ValidationError({"loc": ["direction"], "msg": "direction must be 'to_decimal' or 'to_dms'",
                               "type": "value_error"})
    return jsonify({"ok": True, "direction": direction, "value": result}), 200


# ───────────────────────── rules ─────────────────────────
@api.post("/api/rules/orb")
def rules_orb():
    data = _body_json()
    _, rules = _engine()
    body1 = parse_body(data.get("body1"), "body1")
    body2 = parse_body(data.get("body2"), "body2")
    aspect = parse_aspect(data.get("aspect"), rules)
    return jsonify({
        "ok": True,
        "body1": body1,
        "body2": body2,
        "aspect": aspect,
        "angle": ASPECT_ANGLES_DEG.get(aspect),
        "max_orb": rules.max_orb(body1, body2, aspect),
    }), 200


@api.post("/api/rules/dignity")
def rules_dignity():
    data = _body_json()
    _, rules = _engine()
    body = parse_body(data.get("body"))
    if "sign" in data:
        sign = parse_sign(data.get("sign"))
    elif "longitude" in data:
        sign = sign_of_longitude(parse_degree(data.get("longitude"), "longitude"))
    else:
        raise ValidationError({"loc": ["sign"], "msg": "provide 'sign' (1..12) or 'longitude'", "type": "value_error"})
    dig = rules.dignity(body, sign)
    return jsonify({
        "ok": True,
        "body": body,
        "sign": sign,
        "sign_name": SIGN_NAMES[sign - 1],
        "dignity": dig.value,
        "classified": rules.is_classified(body),
    }), 200
