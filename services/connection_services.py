"""
Connection services: two-person composites and birth-vs-transit composites.

Public API
----------
calculate_connection(pair: ConnectionPairIn) -> ConnectionData
    Both birth charts -> merged gates -> classified channels and centers.

calculate_transit_connection(payload, transit_date, transit_time) -> TransitConnectionData
    Birth chart (A) against the personality-only chart of a UTC instant (B),
    plus a text transit report.

Notes
-----
Transit charts are computed for the configured transit location (0°/0° by
default); stelliums count the ten planets only (no nodes, Earth or cosmetic
bodies).
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, Mapping, Optional, Tuple

from hd_core.activation import Activation, modality_of, zodiac_sign
from hd_core.chart import SUN, ChartResult, build_personality_chart
from hd_core.connection import CompositeAnalysis, classify
from hd_core.definitions import ConnectionType
from hd_core.ephemeris import compute_transit_activations
from schemas import (
    BirthPayload,
    ConnectionData,
    ConnectionPairIn,
    TransitConnectionData,
)
from services.chart_services import (
    RULE,
    compute_for_payload,
    format_centers,
    format_channels,
    format_cross_points,
    format_positions,
    get_chart_config,
)

logger = logging.getLogger(__name__)

STELLIUM_PLANETS = (
    "Sun", "Moon", "Mercury", "Venus", "Mars",
    "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto",
)
STELLIUM_MIN = 3


def _connection_data(name_a: str, name_b: str, analysis: CompositeAnalysis) -> ConnectionData:
    return ConnectionData.model_validate({"personA": name_a, "personB": name_b, **analysis.to_dict()})


def summarize(analysis: CompositeAnalysis) -> Dict[str, int]:
    return {kind.value: len(analysis.by_type(kind)) for kind in ConnectionType}


def calculate_connection(pair: ConnectionPairIn) -> ConnectionData:
    chart_a = compute_for_payload(pair.person1).chart
    chart_b = compute_for_payload(pair.person2).chart
    analysis = classify(chart_a, chart_b)
    logger.info(
        "connection_calculated",
        extra={"composite_code": analysis.composite_centers.code, **summarize(analysis)},
    )
    return _connection_data(pair.person1.name, pair.person2.name, analysis)


# ---------------------------- transit report ----------------------------
def stelliums(activations: Mapping[str, Activation]) -> List[str]:
    """Signs holding at least three of the ten planets, in first-seen order."""
    counts = Counter(
        zodiac_sign(activations[p].longitude) for p in STELLIUM_PLANETS if p in activations
    )
    return [sign for sign, n in counts.items() if n >= STELLIUM_MIN]


def render_transit_report(
    transit_date: str,
    transit_time: Optional[str],
    activations: Mapping[str, Activation],
    chart: ChartResult,
    ascmc: Optional[Tuple[float, ...]],
    latitude: float,
    longitude: float,
) -> str:
    out = f"Human Design Transit Analysis\n{RULE}\n"
    out += f"Date/Time (UTC): {transit_date} {transit_time or '00:00'}\n"
    out += f"Coordinates: {latitude:.2f}°, {longitude:.2f}°\n\n"

    out += "Transit Planetary Positions:\n\n"
    out += format_positions(activations)

    signs = stelliums(activations)
    if signs:
        out += "\nTransit Stelliums:\n"
        out += "".join(f"Stellium in {sign}\n" for sign in signs)

    sun = activations.get(SUN)
    if sun is not None:
        out += f"\nTransit Modality (Sun): {modality_of(sun.longitude).value}\n"

    out += "\nTransit Active Channels (Personality-only):\n"
    out += format_channels(chart)

    out += "\nTransit Defined Centers (Personality-only):\n"
    out += format_centers(chart)

    if ascmc:
        out += "\nTransit Cross Points (Personality):\n"
        out += format_cross_points(ascmc)
    return out


def calculate_transit_connection(
    payload: BirthPayload,
    transit_date: str,
    transit_time: Optional[str] = None,
) -> TransitConnectionData:
    config = get_chart_config()
    birth = compute_for_payload(payload, config)

    activations, ascmc = compute_transit_activations(transit_date, transit_time, config)
    transit_chart = build_personality_chart(activations)

    analysis = classify(birth.chart, transit_chart)
    summary = summarize(analysis)
    logger.info(
        "transit_connection_calculated",
        extra={"transit_date": transit_date, "composite_code": analysis.composite_centers.code, **summary},
    )

    report = render_transit_report(
        transit_date, transit_time, activations, transit_chart, ascmc,
        config.transit_latitude, config.transit_longitude,
    )
    return TransitConnectionData(
        connection=_connection_data(payload.name, "Transit", analysis),
        transitChannels=list(transit_chart.active_channels),
        transitDefinedCenters=transit_chart.to_dict()["definedCenters"],
        report=report,
        summary=summary,
    )
