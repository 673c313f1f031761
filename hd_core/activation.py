"""hd_core.activation
================================================================================
Longitude -> gate activation decoding and small zodiac helpers.

A longitude is shifted by the wheel offset (3.875°) and then divided down a
fixed hierarchy: gate (5.625°), line (0.9375°), color (0.15625°), tone
(color/6) and base (tone/5). Every level uses floor semantics, so a value
sitting exactly on a boundary belongs to the upper division
(the one that starts at that boundary).

Public API (stable)
-------------------
decode(longitude) -> Activation
whole_sign_house(planet_lon, asc_lon) -> int
zodiac_sign(lon) -> str
format_degrees(lon) -> str
modality_of(lon) -> Modality
opposite(lon) -> float
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from numbers import Real
from typing import Optional

from hd_core.definitions import WHEEL_ORDER, Modality
from hd_core.errors import InvalidInputError

# --- Wheel constants (degrees) ---
WHEEL_OFFSET_DEG = 3.875
DEGREE_PER_GATE = 5.625
DEGREE_PER_LINE = 0.9375
DEGREE_PER_COLOR = 0.15625
DEGREE_PER_TONE = DEGREE_PER_COLOR / 6
DEGREE_PER_BASE = DEGREE_PER_TONE / 5

SIGNS = [
    "Aries", "Taurus", "Gemini", "Cancer", "Leo", "Virgo",
    "Libra", "Scorpio", "Sagittarius", "Capricorn", "Aquarius", "Pisces",
]
_MODALITIES = (Modality.CARDINAL, Modality.FIXED, Modality.MUTABLE)


@dataclass(frozen=True)
class Activation:
    gate: int
    line: int
    color: int
    tone: int
    base: int
    longitude: float
    house: Optional[int] = None  # whole-sign house (1..12) when an Ascendant is known

    def with_house(self, house: Optional[int]) -> "Activation":
        return replace(self, house=house)

    @property
    def label(self) -> str:
        return f"{self.gate}.{self.line}"

    def to_dict(self) -> dict:
        return {
            "gate": self.gate,
            "line": self.line,
            "color": self.color,
            "tone": self.tone,
            "base": self.base,
            "longitude": self.longitude,
            "house": self.house,
        }


def _finite_degrees(longitude: object) -> float:
    if isinstance(longitude, bool) or not isinstance(longitude, Real):
        raise InvalidInputError(f"longitude must be a real number, got {longitude!r}")
    value = float(longitude)
    if not math.isfinite(value):
        raise InvalidInputError(f"longitude must be finite, got {value!r}")
    return value


def _level(remainder: float, size: float, upper: int) -> int:
    # min() only absorbs float residue just below the top of a division
    return min(int(math.floor(remainder / size)) + 1, upper)


def decode(longitude: float) -> Activation:
    """Decode an ecliptic longitude into its gate/line/color/tone/base activation."""
    value = _finite_degrees(longitude)

    adjusted = (value % 360.0) - WHEEL_OFFSET_DEG
    if adjusted < 0:
        adjusted += 360.0
    if adjusted >= 360.0:
        # the wrap can round up to 360.0 for values just below the offset
        adjusted = math.nextafter(360.0, 0.0)

    index = int(math.floor(adjusted / DEGREE_PER_GATE))
    gate = WHEEL_ORDER[index]

    rem_line = adjusted % DEGREE_PER_GATE
    line = _level(rem_line, DEGREE_PER_LINE, 6)

    rem_color = rem_line % DEGREE_PER_LINE
    color = _level(rem_color, DEGREE_PER_COLOR, 6)

    rem_tone = rem_color % DEGREE_PER_COLOR
    tone = _level(rem_tone, DEGREE_PER_TONE, 6)

    rem_base = rem_tone % DEGREE_PER_TONE
    base = _level(rem_base, DEGREE_PER_BASE, 5)

    return Activation(gate=gate, line=line, color=color, tone=tone, base=base, longitude=value)


# --------------- Zodiac helpers ---------------
def sign_index(lon: float) -> int:
    """0..11 for Aries..Pisces."""
    return int((lon % 360.0) // 30.0)


def zodiac_sign(lon: float) -> str:
    return SIGNS[sign_index(lon)]


def whole_sign_house(planet_lon: float, asc_lon: float) -> int:
    return ((sign_index(planet_lon) - sign_index(asc_lon) + 12) % 12) + 1  # 1..12


def modality_of(lon: float) -> Modality:
    return _MODALITIES[sign_index(lon) % 3]


def opposite(lon: float) -> float:
    return (lon + 180.0) % 360.0


def format_degrees(lon: float) -> str:
    """Position within its sign as ``D°MM'SS"``."""
    in_sign = lon % 30.0
    degrees = int(math.floor(in_sign))
    total_minutes = (in_sign - degrees) * 60.0
    minutes = int(math.floor(total_minutes))
    seconds = int(round((total_minutes - minutes) * 60.0))

    if seconds == 60:
        seconds = 0
        minutes += 1
    if minutes == 60:
        minutes = 0
        degrees += 1

    return f"{degrees}°{minutes:02d}'{seconds:02d}\""
