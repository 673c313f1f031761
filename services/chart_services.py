"""
Chart services: birth payloads -> charts, text reports and batch decoding.

Public API
----------
calculate_chart(payload: BirthPayload) -> ChartData
    Birth data -> personality/design activations -> full chart.

build_chart_report(payload: BirthPayload) -> str
    Plain-text birth chart analysis (positions, cross points, core
    information, centers, variables, destiny map, active channels).

decode_longitudes(values: list[float]) -> list[ActivationOut]
    Batch decode of raw ecliptic longitudes.

Notes
-----
- Ephemeris settings come from ``HD_CONFIG_PATH`` (YAML) when set.
- Houses are whole-sign houses counted from the chart's own Ascendant.
"""
from __future__ import annotations

import datetime as dt
import logging
from functools import lru_cache
from typing import List, Mapping, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from hd_core.activation import Activation, decode, format_degrees, opposite, whole_sign_house, zodiac_sign
from hd_core.chart import ChartResult, defined_center_rows, destiny_points
from hd_core.config import ChartConfig, load_config
from hd_core.ephemeris import BirthChartData, compute_birth_chart
from schemas import (
    ActivationOut,
    BirthPayload,
    ChartData,
    PlanetActivation,
    VariablesOut,
)
import settings

logger = logging.getLogger(__name__)

# Report order for positions
REPORT_BODIES = (
    "Sun", "Earth", "Moon", "Mercury", "Venus", "Mars", "Jupiter",
    "Saturn", "Uranus", "Neptune", "Pluto", "NorthNode", "SouthNode",
    "Chiron", "Black Moon Lilith",
)

RULE = "-------------------------------"


@lru_cache(maxsize=1)
def get_chart_config() -> ChartConfig:
    config = load_config(settings.HD_CONFIG_PATH)
    logger.info("chart_config_loaded", extra={"path": settings.HD_CONFIG_PATH or None, "ephe_path": config.ephe_path})
    return config


def compute_for_payload(payload: BirthPayload, config: Optional[ChartConfig] = None) -> BirthChartData:
    return compute_birth_chart(
        payload.dateOfBirth,
        payload.timeOfBirth,
        payload.timeZone,
        payload.latitude,
        payload.longitude,
        config or get_chart_config(),
    )


# ---------------------------- serialisation ----------------------------
def planet_rows(activations: Mapping[str, Activation]) -> List[PlanetActivation]:
    rows: List[PlanetActivation] = []
    for name in REPORT_BODIES:
        act = activations.get(name)
        if act is None:
            continue
        rows.append(PlanetActivation(
            planetName=name,
            planetSign=zodiac_sign(act.longitude),
            planetDegree=format_degrees(act.longitude),
            **act.to_dict(),
        ))
    return rows


def chart_to_data(name: str, data: BirthChartData) -> ChartData:
    chart = data.chart
    raw = chart.to_dict()
    return ChartData(
        name=name,
        birthUtc=data.birth_utc.isoformat(),
        designUtc=data.design_utc.isoformat(),
        personality=planet_rows(chart.personality),
        design=planet_rows(chart.design),
        activeGates=raw["activeGates"],
        activeChannels=raw["activeChannels"],
        definedCenters=raw["definedCenters"],
        openCenters=[c.value for c in chart.open_centers],
        type=raw["type"],
        authority=raw["authority"],
        profile=raw["profile"],
        definition=raw["definition"],
        variables=VariablesOut.model_validate(raw["variables"]),
        incarnationCross=raw["incarnationCross"],
        modality=raw["modality"],
    )


def calculate_chart(payload: BirthPayload) -> ChartData:
    data = compute_for_payload(payload)
    logger.info("chart_calculated", extra={"chart_type": data.chart.type.value, "profile": data.chart.profile.value})
    return chart_to_data(payload.name, data)


def decode_longitudes(values: Sequence[float]) -> List[ActivationOut]:
    return [ActivationOut(**decode(v).to_dict()) for v in values]


# ---------------------------- text report ----------------------------
def position_line(name: str, act: Activation) -> str:
    line = f"{name}: {act.label}, {zodiac_sign(act.longitude)} {format_degrees(act.longitude)}"
    if act.house is not None:
        line += f", House {act.house}"
    return line


def format_positions(activations: Mapping[str, Activation]) -> str:
    return "".join(position_line(name, activations[name]) + "\n" for name in REPORT_BODIES if name in activations)


def format_cross_points(ascmc: Optional[Tuple[float, ...]]) -> str:
    if not ascmc or len(ascmc) < 4:
        return "Cross points unavailable (houses data not available).\n"

    asc, mc, vertex = ascmc[0], ascmc[1], ascmc[3]
    points = (
        ("Ascendant", asc),
        ("Midheaven", mc),
        ("Imum Coeli", opposite(mc)),
        ("Descendant", opposite(asc)),
        ("Vertex", vertex),
    )
    out = ""
    for name, lon in points:
        out += position_line(name, decode(lon).with_house(whole_sign_house(lon, asc))) + "\n"
    return out


def format_centers(chart: ChartResult) -> str:
    return "".join(f"{label}: {'Defined' if defined else 'Undefined'}\n" for label, defined in defined_center_rows(chart))


def format_channels(chart: ChartResult) -> str:
    if not chart.active_channels:
        return "None\n"
    return "".join(f"Channel {ch}\n" for ch in chart.active_channels)


def _us_date(value: dt.datetime, with_seconds: bool) -> str:
    if with_seconds:
        return f"{value.month}/{value.day}/{value.year} {value:%H:%M:%S}"
    hour12 = value.hour % 12 or 12
    return f"{value.month}/{value.day}/{value.year} {hour12}:{value:%M} {'AM' if value.hour < 12 else 'PM'}"


def render_chart_report(payload: BirthPayload, data: BirthChartData) -> str:
    chart = data.chart
    local_birth = data.birth_utc.astimezone(ZoneInfo((payload.timeZone or "UTC").strip() or "UTC"))

    out = f"Human Design Birth Chart Analysis\n{RULE}\n"
    out += f"Name: {payload.name}\n"
    out += f"Birth Date (Local): {_us_date(local_birth, with_seconds=True)}\n"
    out += f"Design Date (UTC): {_us_date(data.design_utc, with_seconds=False)}\n"
    out += f"Location: {payload.placeOfBirth or 'Unknown'}\n"
    out += f"Coordinates: {payload.latitude:.2f}°, {payload.longitude:.2f}°\n\n"

    out += "Birth Chart Planetary Positions:\n\n"
    out += format_positions(chart.personality)
    out += "\nBirth Chart Cross Points:\n"
    out += format_cross_points(data.birth_ascmc)

    out += "\nDesign Chart Planetary Positions:\n\n"
    out += format_positions(chart.design)
    out += "\nDesign Chart Cross Points:\n"
    out += format_cross_points(data.design_ascmc)

    out += "\nHuman Design Core Information:\n"
    out += f"Type: {chart.type.value}\n"
    out += f"Authority: {chart.authority.value}\n"
    out += f"Definition: {chart.definition.value}\n"
    out += f"Profile: {chart.profile.label}\n"
    out += f"Incarnation Cross: {chart.incarnation_cross}\n"
    out += f"Modality: {chart.modality}\n"

    out += "\nDefined/Undefined Centers:\n"
    out += format_centers(chart)

    v = chart.variables
    out += "\nVariables:\n"
    for label, var in (("Digestion", v.digestion), ("Environment", v.environment),
                       ("Awareness", v.awareness), ("Perspective", v.perspective)):
        out += f"{label}: {var.orientation.value}, Color {var.color}-Tone {var.tone}\n"

    out += "\nDestiny Map:\n"
    for label, activations in (("Life Purpose", chart.personality), ("Soul Purpose", chart.design)):
        best = destiny_points(activations)
        if best:
            name, act = best
            out += f"{label} ({name}): {act.label}, {zodiac_sign(act.longitude)} {format_degrees(act.longitude)}\n"

    out += "\nActive Channels:\n"
    out += format_channels(chart)
    return out


def build_chart_report(payload: BirthPayload) -> str:
    data = compute_for_payload(payload)
    return render_chart_report(payload, data)

