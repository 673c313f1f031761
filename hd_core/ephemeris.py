"""hd_core.ephemeris
================================================================================
Swiss Ephemeris adapter: instants -> longitudes -> activation maps.

This is the only part of the package that talks to the ephemeris; everything
it hands to the chart engine is plain decoded activations.

Public API (stable)
-------------------
julday_utc(dtu) -> float
jd_to_utc(jd) -> datetime
local_to_utc(date, time, tz_name) -> datetime
body_longitudes(jd_ut, config) -> dict[str, float]
design_julian_day(birth_jd, birth_sun_lon, config) -> float
asc_mc(jd_ut, lat, lon, config) -> tuple[float, ...] | None
activations_at(jd_ut, asc_lon, config) -> dict[str, Activation]
compute_birth_chart(date, time, tz_name, lat, lon, config) -> BirthChartData
compute_transit_activations(date, time, config) -> (dict[str, Activation], ascmc | None)

Key Concepts
------------
"Personality" : positions at the birth instant.
"Design"      : positions when the Sun stood ``design_offset_deg`` (88°)
                behind its birth longitude, found iteratively.
"Earth"/"SouthNode" are derived as the opposite points of Sun/NorthNode.

Dependencies
------------
swisseph (pyswisseph), zoneinfo (standard library, PEP 615).
"""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import swisseph as swe

from hd_core.activation import Activation, decode, opposite, whole_sign_house
from hd_core.chart import NORTH_NODE, SUN, ChartResult, build_chart
from hd_core.config import ChartConfig
from hd_core.definitions import NON_ACTIVATING_BODIES
from hd_core.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Requested from the ephemeris, in calculation order
BODIES: Tuple[Tuple[str, int], ...] = (
    ("Sun", swe.SUN),
    ("Moon", swe.MOON),
    ("NorthNode", swe.TRUE_NODE),
    ("Mercury", swe.MERCURY),
    ("Venus", swe.VENUS),
    ("Mars", swe.MARS),
    ("Jupiter", swe.JUPITER),
    ("Saturn", swe.SATURN),
    ("Uranus", swe.URANUS),
    ("Neptune", swe.NEPTUNE),
    ("Pluto", swe.PLUTO),
    ("Chiron", swe.CHIRON),
    ("Black Moon Lilith", swe.MEAN_APOG),
)

# Derived as opposite points, never requested
DERIVED_BODIES = {"Earth": SUN, "SouthNode": NORTH_NODE}


@dataclass(frozen=True)
class BirthChartData:
    chart: ChartResult
    birth_utc: dt.datetime
    design_utc: dt.datetime
    birth_ascmc: Optional[Tuple[float, ...]]   # Asc, MC, ARMC, Vertex
    design_ascmc: Optional[Tuple[float, ...]]


# ----------------- Time helpers -----------------
def julday_utc(dtu: dt.datetime) -> float:
    """Build UT Julian day from a UTC datetime (aware)."""
    if dtu.tzinfo is None:
        raise InvalidInputError("UTC datetime must be timezone-aware")
    dtu = dtu.astimezone(dt.UTC)
    frac_hour = dtu.hour + dtu.minute / 60.0 + dtu.second / 3600.0 + dtu.microsecond / 3_600_000_000.0
    return swe.julday(dtu.year, dtu.month, dtu.day, frac_hour)


def jd_to_utc(jd_ut: float) -> dt.datetime:
    year, month, day, frac_hour = swe.revjul(jd_ut)
    base = dt.datetime(year, month, day, tzinfo=dt.UTC)
    return base + dt.timedelta(hours=frac_hour)


def _parse_time(t: Optional[str]) -> Tuple[int, int, int]:
    if not t:
        return (0, 0, 0)
    try:
        parts = [int(x) for x in t.split(":")]
    except ValueError as exc:
        raise InvalidInputError(f"time must be 'HH:MM' or 'HH:MM:SS', got {t!r}") from exc
    if len(parts) == 2:
        h, m = parts
        s = 0
    elif len(parts) == 3:
        h, m, s = parts
    else:
        raise InvalidInputError(f"time must be 'HH:MM' or 'HH:MM:SS', got {t!r}")
    return (h, m, s)


def local_to_utc(date: str | dt.date, time: Optional[str], tz_name: str) -> dt.datetime:
    """Interpret a local calendar date/time in ``tz_name`` and return it in UTC."""
    try:
        tz = ZoneInfo((tz_name or "UTC").strip() or "UTC")
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInputError(f"unknown time zone {tz_name!r}") from exc
    try:
        d = date if isinstance(date, dt.date) else dt.date.fromisoformat(date)
        h, m, s = _parse_time(time)
        local_dt = dt.datetime(d.year, d.month, d.day, h, m, s, tzinfo=tz)
    except ValueError as exc:
        raise InvalidInputError(f"invalid date or time: {exc}") from exc
    return local_dt.astimezone(dt.UTC)


# --------------- Ephemeris calls ---------------
def _configure(config: ChartConfig) -> None:
    swe.set_ephe_path(config.ephe_path)


def _calc(jd_ut: float, pid: int) -> float:
    pos, _ = swe.calc_ut(jd_ut, pid, swe.FLG_SWIEPH | swe.FLG_SPEED)
    return pos[0]  # ecliptic longitude in degrees


def body_longitudes(jd_ut: float, config: ChartConfig) -> Dict[str, float]:
    """Tropical geocentric longitudes for every requested body.

    Cosmetic bodies need extra ephemeris files; when those are missing the
    body is left out instead of failing the whole chart.
    """
    _configure(config)
    out: Dict[str, float] = {}
    for name, pid in BODIES:
        if name in NON_ACTIVATING_BODIES:
            if not config.include_cosmetic_bodies:
                continue
            try:
                out[name] = _calc(jd_ut, pid)
            except swe.Error as exc:
                logger.warning("cosmetic_body_unavailable", extra={"body": name, "error": str(exc)})
            continue
        out[name] = _calc(jd_ut, pid)
    return out


def design_julian_day(birth_jd: float, birth_sun_lon: float, config: ChartConfig) -> float:
    """Julian day at which the Sun stood ``design_offset_deg`` before its birth position."""
    _configure(config)
    target = (birth_sun_lon - config.design_offset_deg) % 360.0
    jd = birth_jd - config.design_offset_deg  # ~1° of Sun per day
    for _ in range(config.design_iterations):
        diff = target - _calc(jd, swe.SUN)
        if diff > 180.0:
            diff -= 360.0
        if diff < -180.0:
            diff += 360.0
        if abs(diff) < config.design_tolerance_deg:
            break
        jd += diff
    return jd


def asc_mc(jd_ut: float, lat_deg: float, lon_deg: float, config: ChartConfig) -> Optional[Tuple[float, ...]]:
    """(Asc, MC, ARMC, Vertex) or None when houses cannot be computed."""
    hsys = config.house_system[0].encode("ascii")
    try:
        try:
            _, ascmc = swe.houses_ex(jd_ut, lat_deg, lon_deg, hsys)
        except TypeError:
            _, ascmc = swe.houses(jd_ut, lat_deg, lon_deg, hsys)
    except swe.Error as exc:
        logger.warning("houses_unavailable", extra={"lat": lat_deg, "lon": lon_deg, "error": str(exc)})
        return None
    return tuple(float(x) for x in ascmc[:4])


def activations_at(jd_ut: float, asc_lon: Optional[float], config: ChartConfig) -> Dict[str, Activation]:
    """Decode every body at ``jd_ut``; attach whole-sign houses when the Ascendant is known."""
    longitudes = body_longitudes(jd_ut, config)
    for derived, source in DERIVED_BODIES.items():
        longitudes[derived] = opposite(longitudes[source])

    out: Dict[str, Activation] = {}
    for name, lon in longitudes.items():
        activation = decode(lon)
        if asc_lon is not None:
            activation = activation.with_house(whole_sign_house(lon, asc_lon))
        out[name] = activation
    return out


def compute_birth_chart(
    date: str | dt.date,
    time: Optional[str],
    tz_name: str,
    lat_deg: float,
    lon_deg: float,
    config: Optional[ChartConfig] = None,
) -> BirthChartData:
    """End-to-end: local birth data -> personality/design activations -> chart."""
    config = config or ChartConfig()
    birth_utc = local_to_utc(date, time, tz_name)
    birth_jd = julday_utc(birth_utc)

    birth_ascmc = asc_mc(birth_jd, lat_deg, lon_deg, config)
    personality = activations_at(birth_jd, birth_ascmc[0] if birth_ascmc else None, config)

    design_jd = design_julian_day(birth_jd, personality[SUN].longitude, config)
    design_ascmc = asc_mc(design_jd, lat_deg, lon_deg, config)
    design = activations_at(design_jd, design_ascmc[0] if design_ascmc else None, config)

    logger.info("birth_chart_computed", extra={"birth_utc": birth_utc.isoformat(), "design_jd": round(design_jd, 6)})
    return BirthChartData(
        chart=build_chart(personality, design),
        birth_utc=birth_utc,
        design_utc=jd_to_utc(design_jd),
        birth_ascmc=birth_ascmc,
        design_ascmc=design_ascmc,
    )


def compute_transit_activations(
    date: str | dt.date,
    time: Optional[str],
    config: Optional[ChartConfig] = None,
) -> Tuple[Dict[str, Activation], Optional[Tuple[float, ...]]]:
    """Activations for a UTC instant at the configured transit location."""
    config = config or ChartConfig()
    jd = julday_utc(local_to_utc(date, time, "UTC"))
    ascmc = asc_mc(jd, config.transit_latitude, config.transit_longitude, config)
    return activations_at(jd, ascmc[0] if ascmc else None, config), ascmc
