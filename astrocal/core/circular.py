# astrocal/core/circular.py
from __future__ import annotations

"""
Circular arithmetic on the zodiac (360°) and on radians (2π).

All helpers are pure and total: degenerate inputs (origin in polar_angle,
exact antipodes in circular_midpoint, zero divisor in floor_div) have a
defined result instead of raising.
"""

import math

from astrocal.core.constants import DEG_HALF, DEG_MAX, DEG_QUAD, RAD_MAX

__all__ = [
    "normalize_degrees",
    "normalize_radians",
    "polar_angle",
    "polar_angle_rad",
    "shortest_distance",
    "signed_difference",
    "circular_midpoint",
    "sign_of",
    "dec_to_deg",
    "deg_to_dec",
    "floor_div",
]

# ─────────────────────────────────────────────────────────────────────────────
# Normalisation
# ─────────────────────────────────────────────────────────────────────────────

def _wrap(x: float, period: float) -> float:
    # Common case: only slightly out of range, one add/subtract suffices.
    if x >= period:
        x -= period
    elif x < 0.0:
        x += period
    if 0.0 <= x < period:
        return x
    # Far out of range: single exact reduction (fmod keeps the sign of x).
    x = math.fmod(x, period)
    if x < 0.0:
        x += period
    # A tiny negative remainder can round up to exactly one period.
    return 0.0 if x >= period else x

def normalize_degrees(x: float) -> float:
    """Wrap any angle to [0, 360). In-range values are returned unchanged."""
    return _wrap(float(x), DEG_MAX)

def normalize_radians(x: float) -> float:
    """Wrap any angle to [0, 2π). In-range values are returned unchanged."""
    return _wrap(float(x), RAD_MAX)

# ─────────────────────────────────────────────────────────────────────────────
# Rectangular → polar (angle only)
# ─────────────────────────────────────────────────────────────────────────────

def polar_angle_rad(x: float, y: float) -> float:
    """
    Angle of the vector (x, y) from the origin, in [0, 2π).

    Axis cases are resolved explicitly; the origin maps to 0. Off-axis points
    use atan(y/x), whose principal value only covers the first and fourth
    quadrants: add π when x is negative, 2π when only y is negative. The
    quadrant comes from the signs of x and y, not of the arctangent, so an
    underflowing ratio still lands on the right side of the axis.
    """
    x = float(x); y = float(y)
    if x == 0.0:
        if y == 0.0:
            return 0.0
        return math.pi / 2.0 if y > 0.0 else 3.0 * math.pi / 2.0
    if y == 0.0:
        return math.pi if x < 0.0 else 0.0
    a = math.atan(y / x)
    if x < 0.0:
        a += math.pi
    elif y < 0.0:
        a += 2.0 * math.pi
    return normalize_radians(a)

def polar_angle(x: float, y: float) -> float:
    """Angle of the vector (x, y) from the origin, in degrees [0, 360)."""
    return normalize_degrees(math.degrees(polar_angle_rad(x, y)))

# ─────────────────────────────────────────────────────────────────────────────
# Distances on the circle
# ─────────────────────────────────────────────────────────────────────────────

def shortest_distance(a: float, b: float) -> float:
    """Non-directional distance between two zodiac degrees, in [0, 180]."""
    d = abs(float(a) - float(b)) % DEG_MAX
    return d if d < DEG_HALF else DEG_MAX - d

def signed_difference(a: float, b: float) -> float:
    """
    Shortest signed distance from ``a`` to ``b`` in (-180, 180].
    Positive when ``b`` lies ahead of ``a`` (counter-clockwise, increasing
    longitude) along the short arc.
    """
    d = normalize_degrees(float(b) - float(a))
    return d - DEG_MAX if d > DEG_HALF else d

def circular_midpoint(a: float, b: float) -> float:
    """
    Midpoint of the *short* arc between ``a`` and ``b``, in [0, 360).

    The arithmetic mean lands on the long arc exactly when it is a quarter
    circle or more away from ``a``; the antipodal point is then the answer.
    For exact opposites both candidates are equidistant and the shifted one
    is returned.
    """
    mid = (float(a) + float(b)) / 2.0
    if shortest_distance(a, mid) < DEG_QUAD:
        return normalize_degrees(mid)
    return normalize_degrees(mid + DEG_HALF)

# ─────────────────────────────────────────────────────────────────────────────
# Degree/minute notation & integer helpers
# ─────────────────────────────────────────────────────────────────────────────

def sign_of(x: float) -> float:
    """-1.0, 0.0 or +1.0 according to the sign of ``x``."""
    if x == 0.0:
        return 0.0
    return 1.0 if x > 0.0 else -1.0

def dec_to_deg(d: float) -> float:
    """
    Read a "degrees.minutes" value as decimal degrees: 10.30 (10°30′) → 10.5.
    """
    whole, frac = math.floor(abs(d)), abs(d) % 1.0
    return sign_of(d) * (whole + frac * 100.0 / 60.0)

def deg_to_dec(d: float) -> float:
    """Inverse of dec_to_deg: 10.5 → 10.30 (10°30′)."""
    whole, frac = math.floor(abs(d)), abs(d) % 1.0
    return sign_of(d) * (whole + frac * 60.0 / 100.0)

def floor_div(x: int, y: int) -> int:
    """Integer division rounding toward -∞; a zero divisor returns ``x``."""
    if y == 0:
        return x
    return x // y
