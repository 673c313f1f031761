"""hd_core.connection
================================================================================
Connection (composite) analysis between two charts.

The gates of both subjects are merged; every channel that is complete in the
merged set is classified by how the two subjects contribute to it:

    companion        both subjects already have the channel on their own
    electromagnetic  each holds one gate, together they complete it
    compromise       one has the channel, the other doubles one of its gates
    dominance        one has the channel, the other holds neither gate

Channels completed by overlapping partial contributions (for example both
subjects holding the same single gate plus one of them the other gate) do not
fit any of the four cases; they are reported as electromagnetic with
``approximate=True``.

Public API (stable)
-------------------
classify(chart_a, chart_b) -> CompositeAnalysis
build_composite_centers(chart_a, chart_b, composite_channels) -> CompositeCenterSummary
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Tuple

from hd_core.chart import ChartResult
from hd_core.definitions import CENTER_ORDER, CHANNELS, CHANNELS_BY_ID, Center, Channel, ConnectionType

logger = logging.getLogger(__name__)

ORIGIN_A = "A"
ORIGIN_B = "B"
ORIGIN_COMPOSITE = "composite"


@dataclass(frozen=True)
class ClassifiedChannel:
    channel_id: str
    name: str
    type: ConnectionType
    gate1: int
    gate2: int
    owner_a: str  # "both" | "gate1" | "gate2" | "none"
    owner_b: str
    origin: str = ORIGIN_COMPOSITE
    description: Optional[str] = None
    approximate: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.channel_id,
            "name": self.name,
            "type": self.type.value,
            "fromPerson": self.origin,
            "description": self.description,
            "approximate": self.approximate,
            "gates": {"gate1": self.gate1, "gate2": self.gate2, "ownerA": self.owner_a, "ownerB": self.owner_b},
        }


@dataclass(frozen=True)
class CompositeCenterSummary:
    defined: Tuple[Center, ...]
    open: Tuple[Center, ...]
    defined_by_a_only: Tuple[Center, ...]
    defined_by_b_only: Tuple[Center, ...]
    defined_by_both: Tuple[Center, ...]
    defined_by_composite: Tuple[Center, ...]

    @property
    def code(self) -> str:
        return f"{len(self.defined)}-{len(self.open)}"

    def to_dict(self) -> dict:
        def names(centers: Sequence[Center]) -> List[str]:
            return [c.value for c in centers]

        return {
            "code": self.code,
            "definedCenters": names(self.defined),
            "openCenters": names(self.open),
            "definedByAOnly": names(self.defined_by_a_only),
            "definedByBOnly": names(self.defined_by_b_only),
            "definedByBoth": names(self.defined_by_both),
            "definedByComposite": names(self.defined_by_composite),
        }


@dataclass(frozen=True)
class CompositeAnalysis:
    composite_gates: FrozenSet[int]
    composite_channels: Tuple[str, ...]
    composite_centers: CompositeCenterSummary
    electromagnetic: Tuple[ClassifiedChannel, ...] = field(default_factory=tuple)
    compromise: Tuple[ClassifiedChannel, ...] = field(default_factory=tuple)
    companion: Tuple[ClassifiedChannel, ...] = field(default_factory=tuple)
    dominance: Tuple[ClassifiedChannel, ...] = field(default_factory=tuple)

    def by_type(self, connection_type: ConnectionType) -> Tuple[ClassifiedChannel, ...]:
        return {
            ConnectionType.ELECTROMAGNETIC: self.electromagnetic,
            ConnectionType.COMPROMISE: self.compromise,
            ConnectionType.COMPANION: self.companion,
            ConnectionType.DOMINANCE: self.dominance,
        }[connection_type]

    def to_dict(self) -> dict:
        return {
            "compositeGates": sorted(self.composite_gates),
            "compositeChannels": list(self.composite_channels),
            "compositeCenters": self.composite_centers.to_dict(),
            "electromagnetic": [c.to_dict() for c in self.electromagnetic],
            "compromise": [c.to_dict() for c in self.compromise],
            "companion": [c.to_dict() for c in self.companion],
            "dominance": [c.to_dict() for c in self.dominance],
        }


def _owner_tag(has1: bool, has2: bool) -> str:
    if has1 and has2:
        return "both"
    if has1:
        return "gate1"
    if has2:
        return "gate2"
    return "none"


def _classify_channel(
    channel: Channel,
    gates_a: FrozenSet[int],
    gates_b: FrozenSet[int],
) -> ClassifiedChannel:
    g1, g2 = channel.gates
    a1, a2 = g1 in gates_a, g2 in gates_a
    b1, b2 = g1 in gates_b, g2 in gates_b
    a_full = a1 and a2
    b_full = b1 and b2

    def make(kind: ConnectionType, origin: str = ORIGIN_COMPOSITE, description: Optional[str] = None,
             approximate: bool = False) -> ClassifiedChannel:
        return ClassifiedChannel(
            channel_id=channel.id, name=channel.name, type=kind, gate1=g1, gate2=g2,
            owner_a=_owner_tag(a1, a2), owner_b=_owner_tag(b1, b2),
            origin=origin, description=description, approximate=approximate,
        )

    if a_full and b_full:
        return make(ConnectionType.COMPANION, ORIGIN_COMPOSITE, "Both people have this channel.")

    a_only1, a_only2 = a1 and not a2, a2 and not a1
    b_only1, b_only2 = b1 and not b2, b2 and not b1
    if not a_full and not b_full and ((a_only1 and b_only2) or (a_only2 and b_only1)):
        return make(ConnectionType.ELECTROMAGNETIC, ORIGIN_COMPOSITE, "Each person brings one gate of this channel.")

    a_single = (a1 or a2) and not a_full
    b_single = (b1 or b2) and not b_full
    if a_full and b_single:
        return make(ConnectionType.COMPROMISE, ORIGIN_A, "Person A holds full channel, Person B doubles a gate.")
    if b_full and a_single:
        return make(ConnectionType.COMPROMISE, ORIGIN_B, "Person B holds full channel, Person A doubles a gate.")

    if a_full and not (b1 or b2):
        return make(ConnectionType.DOMINANCE, ORIGIN_A, "Only Person A has this channel.")
    if b_full and not (a1 or a2):
        return make(ConnectionType.DOMINANCE, ORIGIN_B, "Only Person B has this channel.")

    # overlapping partial contributions; kept as electromagnetic
    logger.debug("connection_fallback_electromagnetic", extra={"channel_id": channel.id})
    return make(ConnectionType.ELECTROMAGNETIC, ORIGIN_COMPOSITE,
                "Both people contribute overlapping gates to this channel.", approximate=True)


def build_composite_centers(
    chart_a: ChartResult,
    chart_b: ChartResult,
    composite_channels: Sequence[str],
) -> CompositeCenterSummary:
    by_channels = set()
    for channel_id in composite_channels:
        by_channels.update(CHANNELS_BY_ID[channel_id].centers)

    defined: List[Center] = []
    open_: List[Center] = []
    a_only: List[Center] = []
    b_only: List[Center] = []
    both: List[Center] = []
    composite_only: List[Center] = []

    for center in CENTER_ORDER:
        if center not in by_channels:
            open_.append(center)
            continue
        defined.append(center)
        a_def = center in chart_a.defined_centers
        b_def = center in chart_b.defined_centers
        if a_def and b_def:
            both.append(center)
        elif a_def:
            a_only.append(center)
        elif b_def:
            b_only.append(center)
        else:
            composite_only.append(center)

    return CompositeCenterSummary(
        defined=tuple(defined),
        open=tuple(open_),
        defined_by_a_only=tuple(a_only),
        defined_by_b_only=tuple(b_only),
        defined_by_both=tuple(both),
        defined_by_composite=tuple(composite_only),
    )


def classify(chart_a: ChartResult, chart_b: ChartResult) -> CompositeAnalysis:
    """Merge two charts and classify every channel they complete together."""
    gates_a = chart_a.active_gates
    gates_b = chart_b.active_gates
    composite_gates = gates_a | gates_b

    buckets = {kind: [] for kind in ConnectionType}
    composite_channels: List[str] = []

    for channel in CHANNELS:
        if channel.gate_low not in composite_gates or channel.gate_high not in composite_gates:
            continue
        composite_channels.append(channel.id)
        classified = _classify_channel(channel, gates_a, gates_b)
        buckets[classified.type].append(classified)

    centers = build_composite_centers(chart_a, chart_b, composite_channels)
    logger.debug("composite_classified", extra={"composite_code": centers.code, "channels": len(composite_channels)})

    return CompositeAnalysis(
        composite_gates=composite_gates,
        composite_channels=tuple(composite_channels),
        composite_centers=centers,
        electromagnetic=tuple(buckets[ConnectionType.ELECTROMAGNETIC]),
        compromise=tuple(buckets[ConnectionType.COMPROMISE]),
        companion=tuple(buckets[ConnectionType.COMPANION]),
        dominance=tuple(buckets[ConnectionType.DOMINANCE]),
    )
