# astrocal/core/rules.py
from __future__ import annotations

"""
Astrological rule tables: maximum orb and planetary dignity.

Tables are immutable once built. The module-level DEFAULT_RULES is bound to
the defaults in astrocal.core.constants; hosts build their own instance from
configuration with RuleTables.from_config(...).
"""

import enum
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from astrocal.core.circular import normalize_degrees
from astrocal.core.constants import (
    DEFAULT_ASPECT_ORBS,
    DEFAULT_BODY_ORB_ADD,
    DEFAULT_BODY_ORB_CAPS,
    DEFAULT_EXALTATIONS,
    DEFAULT_RULERS,
    DEG_PER_SIGN,
    FALLBACK_ORB_CAP,
    SIGN_COUNT,
)

__all__ = [
    "Dignity",
    "RuleTables",
    "DEFAULT_RULES",
    "sign_mod12",
    "opposite_sign",
    "sign_of_longitude",
]

log = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Sign arithmetic
# ─────────────────────────────────────────────────────────────────────────────

def sign_mod12(i: int) -> int:
    """Wrap any integer sign index into 1..12."""
    return (int(i) - 1) % SIGN_COUNT + 1

def opposite_sign(sign: int) -> int:
    return sign_mod12(sign + SIGN_COUNT // 2)

def sign_of_longitude(deg: float) -> int:
    """Zodiac sign (1 = Aries … 12 = Pisces) containing a longitude."""
    return sign_mod12(int(normalize_degrees(deg) // DEG_PER_SIGN) + 1)

# ─────────────────────────────────────────────────────────────────────────────
# Dignity
# ─────────────────────────────────────────────────────────────────────────────

class Dignity(enum.Enum):
    RULERSHIP = "rulership"
    FALL = "fall"
    EXALTATION = "exaltation"
    DEBILITATION = "debilitation"
    NONE = "none"

# ─────────────────────────────────────────────────────────────────────────────
# Tables
# ─────────────────────────────────────────────────────────────────────────────

def _frozen(d: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(d))

@dataclass(frozen=True)
class RuleTables:
    aspect_orbs: Mapping[str, float] = field(default_factory=lambda: _frozen(DEFAULT_ASPECT_ORBS))
    body_orb_caps: Mapping[str, float] = field(default_factory=lambda: _frozen(DEFAULT_BODY_ORB_CAPS))
    body_orb_add: Mapping[str, float] = field(default_factory=lambda: _frozen(DEFAULT_BODY_ORB_ADD))
    rulers: Mapping[str, Tuple[int, ...]] = field(default_factory=lambda: _frozen(DEFAULT_RULERS))
    exaltations: Mapping[str, int] = field(default_factory=lambda: _frozen(DEFAULT_EXALTATIONS))
    fallback_orb_cap: float = FALLBACK_ORB_CAP

    def is_classified(self, body: str) -> bool:
        """Bodies listed in the orb-cap table form the classified set."""
        return body in self.body_orb_caps

    # ── orbs ─────────────────────────────────────────────────────────────────
    def _cap(self, body: str) -> float:
        if not self.is_classified(body):
            return self.fallback_orb_cap
        return float(self.body_orb_caps[body])

    def _add(self, body: str) -> float:
        if not self.is_classified(body):
            return 0.0
        return float(self.body_orb_add.get(body, 0.0))

    def max_orb(self, body1: str, body2: str, aspect: str) -> float:
        """
        Largest deviation from the exact aspect angle still counted as the
        aspect: the tightest of the aspect's base orb and both bodies' caps,
        widened by each body's additive adjustment.
        """
        orb = float(self.aspect_orbs[aspect])
        orb = min(orb, self._cap(body1), self._cap(body2))
        return orb + self._add(body1) + self._add(body2)

    # ── dignities ────────────────────────────────────────────────────────────
    def dignity(self, body: str, sign: int) -> Dignity:
        if not self.is_classified(body):
            return Dignity.NONE
        rulers = self.rulers.get(body, ())
        opposite = opposite_sign(sign)
        if sign in rulers:
            return Dignity.RULERSHIP
        if opposite in rulers:
            return Dignity.FALL
        exalt = self.exaltations.get(body)
        if exalt is None:
            return Dignity.NONE
        if exalt == sign:
            return Dignity.EXALTATION
        if exalt == opposite:
            return Dignity.DEBILITATION
        return Dignity.NONE

    # ── (de)serialisation ────────────────────────────────────────────────────
    @classmethod
    def from_config(cls, section: Optional[Mapping[str, Any]]) -> "RuleTables":
        """
        Build tables from a config mapping. Each of ``aspect_orbs``,
        ``body_orb_caps``, ``body_orb_add``, ``rulers`` and ``exaltations`` is
        optional and replaces the corresponding default table wholesale.
        """
        section = section or {}
        rulers_in = section.get("rulers")
        rulers = DEFAULT_RULERS if rulers_in is None else {
            str(k): tuple(sign_mod12(s) for s in (v if isinstance(v, (list, tuple)) else [v]))
            for k, v in rulers_in.items()
        }
        exalt_in = section.get("exaltations")
        exaltations = DEFAULT_EXALTATIONS if exalt_in is None else {
            str(k): sign_mod12(v) for k, v in exalt_in.items()
        }

        def _floats(key: str, default: Mapping[str, float]) -> Dict[str, float]:
            raw = section.get(key)
            if raw is None:
                return dict(default)
            return {str(k): float(v) for k, v in raw.items()}

        tables = cls(
            aspect_orbs=_frozen(_floats("aspect_orbs", DEFAULT_ASPECT_ORBS)),
            body_orb_caps=_frozen(_floats("body_orb_caps", DEFAULT_BODY_ORB_CAPS)),
            body_orb_add=_frozen(_floats("body_orb_add", DEFAULT_BODY_ORB_ADD)),
            rulers=_frozen(rulers),
            exaltations=_frozen(exaltations),
            fallback_orb_cap=float(section.get("fallback_orb_cap", FALLBACK_ORB_CAP)),
        )
        log.debug(
            "rule tables built: %d aspects, %d classified bodies",
            len(tables.aspect_orbs), len(tables.body_orb_caps),
        )
        return tables

    def to_dict(self) -> Dict[str, Any]:
        return {
            "aspect_orbs": dict(self.aspect_orbs),
            "body_orb_caps": dict(self.body_orb_caps),
            "body_orb_add": dict(self.body_orb_add),
            "rulers": {k: list(v) for k, v in self.rulers.items()},
            "exaltations": dict(self.exaltations),
            "fallback_orb_cap": self.fallback_orb_cap,
        }


DEFAULT_RULES = RuleTables()
