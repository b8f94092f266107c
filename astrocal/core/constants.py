# astrocal/core/constants.py
# -*- coding: utf-8 -*-
"""
astrocal: core constants

Purpose
-------
Single source of truth for:
- circle geometry (degree/radian periods)
- zodiac signs and body sets (classified vs. unclassified)
- aspect angles and default orb tables
- default rulership / exaltation tables
- weekday naming for day-of-week results

Design
------
- Pure-Python, no external dependencies.
- Safe to import from any core module.
- Tables here are *defaults*; the host application may override them through
  configuration (see astrocal.utils.config and RuleTables.from_config).
"""

from __future__ import annotations
from typing import Dict, Tuple
import math

__all__ = [
    # geometry
    "DEG_MAX", "DEG_HALF", "DEG_QUAD", "RAD_MAX", "DEG_PER_SIGN",
    # signs
    "SIGN_COUNT", "SIGN_NAMES",
    # bodies
    "MAJOR_BODIES", "MINOR_BODIES", "CLASSIFIED_BODIES", "UNCLASSIFIED_POINTS",
    # aspects & orbs
    "ASPECT_ANGLES_DEG", "DEFAULT_ASPECT_ORBS", "DEFAULT_BODY_ORB_CAPS",
    "DEFAULT_BODY_ORB_ADD", "FALLBACK_ORB_CAP",
    # dignities
    "DEFAULT_RULERS", "DEFAULT_EXALTATIONS",
    # weekdays
    "WEEKDAY_OFFSET", "WEEKDAY_NAMES", "MONTH_NAMES",
    # version tag
    "CONSTANTS_VERSION",
]

# ── version tag ───────────────────────────────────────────────────────────────
CONSTANTS_VERSION: str = "1.0.0"

# ── circle geometry ──────────────────────────────────────────────────────────
DEG_MAX: float = 360.0
DEG_HALF: float = 180.0
DEG_QUAD: float = 90.0
RAD_MAX: float = 2.0 * math.pi
DEG_PER_SIGN: float = 30.0

# ── zodiac ───────────────────────────────────────────────────────────────────
# Sign indices are 1-based: 1 = Aries … 12 = Pisces.
SIGN_COUNT: int = 12
SIGN_NAMES: Tuple[str, ...] = (
    "Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
    "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces",
)

# ── canonical bodies ─────────────────────────────────────────────────────────
MAJOR_BODIES: Tuple[str, ...] = (
    "Sun", "Moon", "Mercury", "Venus", "Mars",
    "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto",
)

MINOR_BODIES: Tuple[str, ...] = (
    "Chiron", "Ceres", "Pallas", "Juno", "Vesta", "North Node", "South Node",
)

# Bodies with entries in the orb/dignity tables. Everything else is treated as
# an unclassified point (fallback orb cap, no dignity).
CLASSIFIED_BODIES: Tuple[str, ...] = MAJOR_BODIES + MINOR_BODIES

UNCLASSIFIED_POINTS: Tuple[str, ...] = (
    "Lilith", "Fortune", "Vertex", "East Point", "Ascendant", "Midheaven",
)

# ── aspect geometry ──────────────────────────────────────────────────────────
ASPECT_ANGLES_DEG: Dict[str, float] = {
    "conjunction": 0.0,
    "opposition": 180.0,
    "square": 90.0,
    "trine": 120.0,
    "sextile": 60.0,
    "quincunx": 150.0,
    "semisextile": 30.0,
    "semisquare": 45.0,
    "sesquiquadrate": 135.0,
    "quintile": 72.0,
    "biquintile": 144.0,
    "semiquintile": 36.0,
    "septile": 360.0 / 7.0,
    "biseptile": 720.0 / 7.0,
    "triseptile": 1080.0 / 7.0,
    "novile": 40.0,
    "binovile": 80.0,
    "quatronovile": 160.0,
}

# Base orb per aspect (degrees).
DEFAULT_ASPECT_ORBS: Dict[str, float] = {
    "conjunction": 7.0,
    "opposition": 7.0,
    "square": 7.0,
    "trine": 7.0,
    "sextile": 6.0,
    "quincunx": 3.0,
    "semisextile": 3.0,
    "semisquare": 3.0,
    "sesquiquadrate": 3.0,
    "quintile": 2.0,
    "biquintile": 2.0,
    "semiquintile": 1.0,
    "septile": 1.0,
    "biseptile": 1.0,
    "triseptile": 1.0,
    "novile": 1.0,
    "binovile": 1.0,
    "quatronovile": 1.0,
}

# Per-body orb caps. 360 means "no cap" for practical purposes.
DEFAULT_BODY_ORB_CAPS: Dict[str, float] = {
    "Sun": 360.0, "Moon": 360.0, "Mercury": 360.0, "Venus": 360.0, "Mars": 360.0,
    "Jupiter": 360.0, "Saturn": 360.0, "Uranus": 360.0, "Neptune": 360.0, "Pluto": 360.0,
    "Chiron": 3.0, "Ceres": 3.0, "Pallas": 3.0, "Juno": 3.0, "Vesta": 3.0,
    "North Node": 360.0, "South Node": 360.0,
}

# Per-body additive orb widening (luminaries get a wider orb).
DEFAULT_BODY_ORB_ADD: Dict[str, float] = {
    "Sun": 1.0, "Moon": 1.0,
}

# Cap applied to any body outside CLASSIFIED_BODIES.
FALLBACK_ORB_CAP: float = 2.0

# ── dignities ────────────────────────────────────────────────────────────────
# Ruling signs (one or two per body), modern assignment.
DEFAULT_RULERS: Dict[str, Tuple[int, ...]] = {
    "Sun": (5,),
    "Moon": (4,),
    "Mercury": (3, 6),
    "Venus": (2, 7),
    "Mars": (1,),
    "Jupiter": (9,),
    "Saturn": (10,),
    "Uranus": (11,),
    "Neptune": (12,),
    "Pluto": (8,),
}

DEFAULT_EXALTATIONS: Dict[str, int] = {
    "Sun": 1,
    "Moon": 2,
    "Mercury": 6,
    "Venus": 12,
    "Mars": 10,
    "Jupiter": 4,
    "Saturn": 7,
    "Uranus": 8,
    "Neptune": 4,
    "Pluto": 5,
}

# ── calendar naming ──────────────────────────────────────────────────────────
# JD 0 fell on a Monday; (JD + 1) mod 7 gives Sunday = 0.
WEEKDAY_OFFSET: int = 1
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)
MONTH_NAMES: Tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
