"""hd_core.chart
================================================================================
Chart properties engine: activations -> bodygraph classification.

Given the personality (birth instant) and design (~88° of Sun earlier)
activation maps of one subject, build the active gate set, the active
channels in table order, a center adjacency graph local to the call, and
derive Type, Authority, Profile, Definition, the four Variables, the
Incarnation Cross and the Sun modality.

Public API (stable)
-------------------
build_chart(personality, design) -> ChartResult
build_personality_chart(activations) -> ChartResult
destiny_points(activations) -> tuple[str, Activation] | None

Thread Safety
-------------
Pure functions over immutable tables; safe to call concurrently.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from hd_core.activation import Activation, modality_of
from hd_core.definitions import (
    AUTHORITY_PRIORITY,
    CENTER_ORDER,
    CHANNELS,
    MOTOR_CENTERS,
    NON_ACTIVATING_BODIES,
    Angle,
    Authority,
    Center,
    ChartType,
    Definition,
    Orientation,
    Profile,
    angle_for_profile,
    incarnation_cross_name,
    lookup_profile,
)
from hd_core.errors import InvalidInputError

logger = logging.getLogger(__name__)

SUN = "Sun"
NORTH_NODE = "NorthNode"
_NODE_ALIASES = (NORTH_NODE, "North Node")

# Bodies considered for the destiny map, in report order
DESTINY_BODIES = (
    "Sun", "Earth", "NorthNode", "SouthNode", "Moon", "Mercury",
    "Venus", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto",
)

_DEFINITION_BY_COMPONENTS = {
    0: Definition.NONE,
    1: Definition.SINGLE,
    2: Definition.SPLIT,
    3: Definition.TRIPLE_SPLIT,
}

Adjacency = Dict[Center, Set[Center]]


@dataclass(frozen=True)
class Variable:
    orientation: Orientation
    color: int
    tone: int
    base: int

    @classmethod
    def from_activation(cls, activation: Activation) -> "Variable":
        orientation = Orientation.LEFT if activation.tone <= 3 else Orientation.RIGHT
        return cls(orientation=orientation, color=activation.color, tone=activation.tone, base=activation.base)

    def to_dict(self) -> dict:
        return {"orientation": self.orientation.value, "color": self.color, "tone": self.tone, "base": self.base}


@dataclass(frozen=True)
class Variables:
    digestion: Variable     # design Sun
    environment: Variable   # design node
    perspective: Variable   # personality Sun
    awareness: Variable     # personality node

    def to_dict(self) -> dict:
        return {
            "digestion": self.digestion.to_dict(),
            "environment": self.environment.to_dict(),
            "perspective": self.perspective.to_dict(),
            "awareness": self.awareness.to_dict(),
        }


@dataclass(frozen=True)
class ChartResult:
    personality: Mapping[str, Activation]
    design: Mapping[str, Activation]
    active_gates: FrozenSet[int]
    active_channels: Tuple[str, ...]
    defined_centers: FrozenSet[Center]
    type: ChartType
    authority: Authority
    profile: Profile
    definition: Definition
    variables: Variables
    incarnation_cross: str
    modality: str

    @property
    def open_centers(self) -> Tuple[Center, ...]:
        return tuple(c for c in CENTER_ORDER if c not in self.defined_centers)

    def to_dict(self) -> dict:
        """Flat serialisation; centers are listed in bodygraph order."""
        return {
            "personality": {name: act.to_dict() for name, act in self.personality.items()},
            "design": {name: act.to_dict() for name, act in self.design.items()},
            "activeGates": sorted(self.active_gates),
            "activeChannels": list(self.active_channels),
            "definedCenters": [c.value for c in CENTER_ORDER if c in self.defined_centers],
            "type": self.type.value,
            "authority": self.authority.value,
            "profile": self.profile.value,
            "definition": self.definition.value,
            "variables": self.variables.to_dict(),
            "incarnationCross": self.incarnation_cross,
            "modality": self.modality,
        }


# --------------- graph helpers ---------------
def _build_adjacency(active_channels: Iterable[str]) -> Adjacency:
    adjacency: Adjacency = {}
    for channel in CHANNELS:
        if channel.id not in active_channels:
            continue
        c1, c2 = channel.centers
        adjacency.setdefault(c1, set()).add(c2)
        adjacency.setdefault(c2, set()).add(c1)
    return adjacency


def is_connected(start: Center, end: Center, defined: FrozenSet[Center], adjacency: Adjacency) -> bool:
    """Breadth-first reachability between two defined centers."""
    if start not in defined or end not in defined:
        return False
    if start == end:
        return True

    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == end:
            return True
        for neighbour in adjacency.get(current, ()):
            if neighbour in defined and neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)
    return False


def count_components(defined: FrozenSet[Center], adjacency: Adjacency) -> int:
    visited: Set[Center] = set()
    components = 0
    for start in CENTER_ORDER:
        if start not in defined or start in visited:
            continue
        components += 1
        visited.add(start)
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbour in adjacency.get(current, ()):
                if neighbour in defined and neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)
    return components


# --------------- classification ---------------
def _chart_type(defined: FrozenSet[Center], adjacency: Adjacency) -> ChartType:
    if not defined:
        return ChartType.REFLECTOR

    motor_to_throat = any(is_connected(m, Center.THROAT, defined, adjacency) for m in MOTOR_CENTERS)
    if Center.SACRAL in defined:
        return ChartType.MANIFESTING_GENERATOR if motor_to_throat else ChartType.GENERATOR
    return ChartType.MANIFESTOR if motor_to_throat else ChartType.PROJECTOR


def _authority(defined: FrozenSet[Center]) -> Authority:
    for centers, authority in AUTHORITY_PRIORITY:
        if any(c in defined for c in centers):
            return authority
    return Authority.OUTER


def _definition(defined: FrozenSet[Center], adjacency: Adjacency) -> Definition:
    components = count_components(defined, adjacency)
    return _DEFINITION_BY_COMPONENTS.get(components, Definition.QUADRUPLE_SPLIT)


def _modality(personality_sun: Activation, design_sun: Activation) -> str:
    p_mod = modality_of(personality_sun.longitude).value
    d_mod = modality_of(design_sun.longitude).value
    return p_mod if p_mod == d_mod else f"{p_mod}/{d_mod}"


def _require(activations: Mapping[str, Activation], side: str) -> Tuple[Activation, Activation]:
    sun = activations.get(SUN)
    node = next((activations[k] for k in _NODE_ALIASES if k in activations), None)
    missing = [name for name, act in ((SUN, sun), (NORTH_NODE, node)) if act is None]
    if missing:
        raise InvalidInputError(f"{side} activations missing required bodies: {', '.join(missing)}")
    return sun, node


def active_gate_set(*activation_maps: Mapping[str, Activation]) -> FrozenSet[int]:
    gates: Set[int] = set()
    for activations in activation_maps:
        for name, activation in activations.items():
            if name in NON_ACTIVATING_BODIES:
                continue
            gates.add(activation.gate)
    return frozenset(gates)


def build_chart(
    personality: Mapping[str, Activation],
    design: Mapping[str, Activation],
    *,
    single_instant: bool = False,
) -> ChartResult:
    """Derive the full chart for one subject from its two activation maps."""
    p_sun, p_node = _require(personality, "personality")
    d_sun, d_node = _require(design, "design")

    active_gates = active_gate_set(personality, design)
    active_channels = tuple(
        ch.id for ch in CHANNELS if ch.gate_low in active_gates and ch.gate_high in active_gates
    )
    adjacency = _build_adjacency(active_channels)
    defined = frozenset(adjacency.keys())

    # a single-instant chart has no real design side, so its profile is always a fallback
    profile = lookup_profile(p_sun.line, d_sun.line, miss_level=logging.DEBUG if single_instant else logging.WARNING)
    angle: Angle = angle_for_profile(profile)

    chart = ChartResult(
        personality=MappingProxyType(dict(personality)),
        design=MappingProxyType(dict(design)),
        active_gates=active_gates,
        active_channels=active_channels,
        defined_centers=defined,
        type=_chart_type(defined, adjacency),
        authority=_authority(defined),
        profile=profile,
        definition=_definition(defined, adjacency),
        variables=Variables(
            digestion=Variable.from_activation(d_sun),
            environment=Variable.from_activation(d_node),
            perspective=Variable.from_activation(p_sun),
            awareness=Variable.from_activation(p_node),
        ),
        incarnation_cross=incarnation_cross_name(p_sun.gate, angle),
        modality=_modality(p_sun, d_sun),
    )
    logger.debug(
        "chart_built",
        extra={"chart_type": chart.type.value, "channels": len(active_channels), "definition": chart.definition.value},
    )
    return chart


def build_personality_chart(activations: Mapping[str, Activation]) -> ChartResult:
    """Chart for a single instant (e.g. a transit).

    Only Sun and node are cloned into the design side so that profile and
    variables stay computable; bodygraph definition comes from the given
    activations alone.
    """
    sun, node = _require(activations, "transit")
    return build_chart(activations, {SUN: sun, NORTH_NODE: node}, single_instant=True)


def destiny_points(activations: Mapping[str, Activation]) -> Optional[Tuple[str, Activation]]:
    """Body with the highest degree within its sign (ties keep the earlier body)."""
    best: Optional[Tuple[str, Activation]] = None
    for name in DESTINY_BODIES:
        act = activations.get(name)
        if act is None:
            continue
        if best is None or act.longitude % 30.0 > best[1].longitude % 30.0:
            best = (name, act)
    return best


def defined_center_rows(chart: ChartResult) -> List[Tuple[str, bool]]:
    return [(c.display_name, c in chart.defined_centers) for c in CENTER_ORDER]