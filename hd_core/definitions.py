"""hd_core.definitions
================================================================================
Static Human Design domain tables.

Everything in this module is built once at import time and never mutated:
the gate wheel used by the activation decoder, the nine centers and the gates
each one owns, the channel table, profile lookup and incarnation cross names.

Public API (stable)
-------------------
center_of(gate) -> Center
channel_by_id(channel_id) -> Channel
lookup_profile(personality_line, design_line) -> Profile
angle_for_profile(profile) -> Angle
incarnation_cross_name(gate, angle) -> str

Key Concepts
------------
"Gate"    : one of 64 positional categories on the wheel (1..64).
"Center"  : one of 9 energy centers; every gate belongs to exactly one.
"Channel" : a fixed pair of gates; active when both gates are activated.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple

logger = logging.getLogger(__name__)


# ---------------- Enumerations ----------------
class Center(str, Enum):
    ROOT = "Root"
    SACRAL = "Sacral"
    EMOTIONS = "Emotions"
    SPLEEN = "Spleen"
    HEART = "Heart"
    G_CENTER = "G-Center"
    THROAT = "Throat"
    MIND = "Mind"
    CROWN = "Crown"

    @property
    def display_name(self) -> str:
        return CENTER_DISPLAY_NAMES[self]


class ChartType(str, Enum):
    MANIFESTOR = "Manifestor"
    GENERATOR = "Generator"
    MANIFESTING_GENERATOR = "Manifesting Generator"
    PROJECTOR = "Projector"
    REFLECTOR = "Reflector"


class Authority(str, Enum):
    EMOTIONAL = "Emotional"
    SACRAL = "Sacral"
    SPLENIC = "Splenic"
    EGO_PROJECTED = "Ego Projected"
    SELF_PROJECTED = "Self Projected"
    MENTAL = "Mental"
    OUTER = "Outer (None/Lunar)"


class Profile(str, Enum):
    P1_3 = "1/3"
    P1_4 = "1/4"
    P2_4 = "2/4"
    P2_5 = "2/5"
    P3_5 = "3/5"
    P3_6 = "3/6"
    P4_6 = "4/6"
    P4_1 = "4/1"
    P5_1 = "5/1"
    P5_2 = "5/2"
    P6_2 = "6/2"
    P6_3 = "6/3"

    @property
    def label(self) -> str:
        """Spaced form used in reports, e.g. ``"1 / 3"``."""
        return self.value.replace("/", " / ")


class Angle(str, Enum):
    RIGHT = "Right"
    LEFT = "Left"
    JUXTAPOSITION = "Juxtaposition"


class Orientation(str, Enum):
    LEFT = "Left"
    RIGHT = "Right"


class Definition(str, Enum):
    NONE = "No Definition"
    SINGLE = "Single Definition"
    SPLIT = "Split Definition"
    TRIPLE_SPLIT = "Triple Split Definition"
    QUADRUPLE_SPLIT = "Quadruple Split Definition"


class Modality(str, Enum):
    CARDINAL = "Cardinal"
    FIXED = "Fixed"
    MUTABLE = "Mutable"


class ConnectionType(str, Enum):
    ELECTROMAGNETIC = "electromagnetic"
    COMPROMISE = "compromise"
    COMPANION = "companion"
    DOMINANCE = "dominance"


# ---------------- Wheel ----------------
# Gate order around the wheel, starting at 3.875° of tropical longitude.
WHEEL_ORDER: Tuple[int, ...] = (
    17, 21, 51, 42, 3, 27, 24, 2, 23, 8,
    20, 16, 35, 45, 12, 15, 52, 39, 53, 62,
    56, 31, 33, 7, 4, 29, 59, 40, 64, 47,
    6, 46, 18, 48, 57, 32, 50, 28, 44, 1,
    43, 14, 34, 9, 5, 26, 11, 10, 58, 38,
    54, 61, 60, 41, 19, 13, 49, 30, 55, 37,
    63, 22, 36, 25,
)

# ---------------- Centers ----------------
# Report order (bottom of the bodygraph to the top)
CENTER_ORDER: Tuple[Center, ...] = (
    Center.ROOT, Center.SACRAL, Center.EMOTIONS, Center.SPLEEN, Center.HEART,
    Center.G_CENTER, Center.THROAT, Center.MIND, Center.CROWN,
)

CENTER_DISPLAY_NAMES: Mapping[Center, str] = MappingProxyType({
    Center.ROOT: "Root",
    Center.SACRAL: "Sacral",
    Center.EMOTIONS: "Emotions",
    Center.SPLEEN: "Spleen",
    Center.HEART: "Ego/Willpower",
    Center.G_CENTER: "G-Center",
    Center.THROAT: "Throat",
    Center.MIND: "Mind",
    Center.CROWN: "Crown",
})

CENTER_GATES: Mapping[Center, FrozenSet[int]] = MappingProxyType({
    Center.ROOT: frozenset({58, 38, 54, 53, 60, 52, 19, 39, 41}),
    Center.SACRAL: frozenset({27, 34, 5, 14, 29, 59, 9, 3, 42}),
    Center.SPLEEN: frozenset({18, 28, 32, 50, 44, 57, 48}),
    Center.EMOTIONS: frozenset({6, 37, 22, 36, 30, 55, 49}),
    Center.HEART: frozenset({21, 40, 26, 51}),
    Center.G_CENTER: frozenset({1, 13, 25, 46, 2, 15, 10, 7}),
    Center.THROAT: frozenset({20, 16, 62, 23, 56, 35, 12, 45, 33, 8, 31}),
    Center.MIND: frozenset({43, 17, 47, 24, 4, 11}),
    Center.CROWN: frozenset({64, 61, 63}),
})

GATE_TO_CENTER: Mapping[int, Center] = MappingProxyType({
    gate: center for center, gates in CENTER_GATES.items() for gate in gates
})

MOTOR_CENTERS: Tuple[Center, ...] = (Center.SACRAL, Center.HEART, Center.EMOTIONS, Center.ROOT)

# First defined center wins
AUTHORITY_PRIORITY: Tuple[Tuple[Tuple[Center, ...], Authority], ...] = (
    ((Center.EMOTIONS,), Authority.EMOTIONAL),
    ((Center.SACRAL,), Authority.SACRAL),
    ((Center.SPLEEN,), Authority.SPLENIC),
    ((Center.HEART,), Authority.EGO_PROJECTED),
    ((Center.G_CENTER,), Authority.SELF_PROJECTED),
    ((Center.MIND, Center.CROWN), Authority.MENTAL),
)

# Cosmetic bodies: shown in reports, never activate gates on the bodygraph
NON_ACTIVATING_BODIES: FrozenSet[str] = frozenset({"Chiron", "Black Moon Lilith"})


# ---------------- Channels ----------------
@dataclass(frozen=True)
class Channel:
    gate_low: int
    gate_high: int
    name: str

    @property
    def id(self) -> str:
        return f"{self.gate_low}-{self.gate_high}"

    @property
    def gates(self) -> Tuple[int, int]:
        return (self.gate_low, self.gate_high)

    @property
    def centers(self) -> Tuple[Center, Center]:
        return (GATE_TO_CENTER[self.gate_low], GATE_TO_CENTER[self.gate_high])


CHANNELS: Tuple[Channel, ...] = (
    Channel(1, 8, "Inspiration"),
    Channel(2, 14, "The Beat"),
    Channel(3, 60, "Mutation"),
    Channel(4, 63, "Logic"),
    Channel(5, 15, "Rhythm"),
    Channel(6, 59, "Mating"),
    Channel(7, 31, "The Alpha"),
    Channel(9, 52, "Concentration"),
    Channel(10, 20, "Awakening"),
    Channel(10, 34, "Exploration"),
    Channel(10, 57, "Perfected Form"),
    Channel(11, 56, "Curiosity"),
    Channel(12, 22, "Openness"),
    Channel(13, 33, "The Prodigal"),
    Channel(16, 48, "The Wavelength"),
    Channel(17, 62, "Acceptance"),
    Channel(18, 58, "Judgment"),
    Channel(19, 49, "Synthesis"),
    Channel(20, 34, "Charisma"),
    Channel(20, 57, "The Brain Wave"),
    Channel(21, 45, "The Money Line"),
    Channel(23, 43, "Structuring"),
    Channel(24, 61, "Awareness"),
    Channel(25, 51, "Initiation"),
    Channel(26, 44, "Surrender"),
    Channel(27, 50, "Preservation"),
    Channel(28, 38, "Struggle"),
    Channel(29, 46, "Discovery"),
    Channel(30, 41, "Recognition"),
    Channel(32, 54, "Transformation"),
    Channel(34, 57, "Power"),
    Channel(35, 36, "Transitoriness"),
    Channel(37, 40, "Community"),
    Channel(39, 55, "Emoting"),
    Channel(42, 53, "Maturation"),
    Channel(47, 64, "Abstraction"),
)

CHANNELS_BY_ID: Mapping[str, Channel] = MappingProxyType({ch.id: ch for ch in CHANNELS})


# ---------------- Profiles ----------------
PROFILES: Mapping[str, Profile] = MappingProxyType({p.value: p for p in Profile})
DEFAULT_PROFILE = Profile.P1_3

LEFT_ANGLE_PROFILES: FrozenSet[Profile] = frozenset({Profile.P5_1, Profile.P5_2, Profile.P6_2, Profile.P6_3})


# ---------------- Incarnation crosses ----------------
# (angle, personality Sun gate) -> cross enum name
_CROSS_ENUM_NAMES: Dict[Tuple[Angle, int], str] = {
    (Angle.JUXTAPOSITION, 44): "JuxtapositionCrossOfAlertness",
    (Angle.JUXTAPOSITION, 54): "JuxtapositionCrossOfAmbition",
    (Angle.JUXTAPOSITION, 12): "JuxtapositionCrossOfArticulation",
    (Angle.JUXTAPOSITION, 23): "JuxtapositionCrossOfAssimilation",
    (Angle.JUXTAPOSITION, 37): "JuxtapositionCrossOfBargains",
    (Angle.JUXTAPOSITION, 53): "JuxtapositionCrossOfBeginnings",
    (Angle.JUXTAPOSITION, 10): "JuxtapositionCrossOfBehavior",
    (Angle.JUXTAPOSITION, 27): "JuxtapositionCrossOfCaring",
    (Angle.JUXTAPOSITION, 29): "JuxtapositionCrossOfCommitment",
    (Angle.JUXTAPOSITION, 42): "JuxtapositionCrossOfCompletion",
    (Angle.JUXTAPOSITION, 6): "JuxtapositionCrossOfConflict",
    (Angle.JUXTAPOSITION, 64): "JuxtapositionCrossOfConfusion",
    (Angle.JUXTAPOSITION, 32): "JuxtapositionCrossOfConservation",
    (Angle.JUXTAPOSITION, 8): "JuxtapositionCrossOfContribution",
    (Angle.JUXTAPOSITION, 21): "JuxtapositionCrossOfControl",
    (Angle.JUXTAPOSITION, 18): "JuxtapositionCrossOfCorrection",
    (Angle.JUXTAPOSITION, 36): "JuxtapositionCrossOfCrisis",
    (Angle.JUXTAPOSITION, 40): "JuxtapositionCrossOfDenial",
    (Angle.JUXTAPOSITION, 48): "JuxtapositionCrossOfDepth",
    (Angle.JUXTAPOSITION, 62): "JuxtapositionCrossOfDetail",
    (Angle.JUXTAPOSITION, 63): "JuxtapositionCrossOfDoubts",
    (Angle.JUXTAPOSITION, 14): "JuxtapositionCrossOfEmpowering",
    (Angle.JUXTAPOSITION, 35): "JuxtapositionCrossOfExperience",
    (Angle.JUXTAPOSITION, 16): "JuxtapositionCrossOfExperimentation",
    (Angle.JUXTAPOSITION, 15): "JuxtapositionCrossOfExtremes",
    (Angle.JUXTAPOSITION, 41): "JuxtapositionCrossOfFantasy",
    (Angle.JUXTAPOSITION, 30): "JuxtapositionCrossOfFates",
    (Angle.JUXTAPOSITION, 9): "JuxtapositionCrossOfFocus",
    (Angle.JUXTAPOSITION, 4): "JuxtapositionCrossOfFormulization",
    (Angle.JUXTAPOSITION, 22): "JuxtapositionCrossOfGrace",
    (Angle.JUXTAPOSITION, 5): "JuxtapositionCrossOfHabits",
    (Angle.JUXTAPOSITION, 11): "JuxtapositionCrossOfIdeas",
    (Angle.JUXTAPOSITION, 31): "JuxtapositionCrossOfInfluence",
    (Angle.JUXTAPOSITION, 25): "JuxtapositionCrossOfInnocence",
    (Angle.JUXTAPOSITION, 43): "JuxtapositionCrossOfInsight",
    (Angle.JUXTAPOSITION, 7): "JuxtapositionCrossOfInteraction",
    (Angle.JUXTAPOSITION, 57): "JuxtapositionCrossOfIntuition",
    (Angle.JUXTAPOSITION, 60): "JuxtapositionCrossOfLimitation",
    (Angle.JUXTAPOSITION, 13): "JuxtapositionCrossOfListening",
    (Angle.JUXTAPOSITION, 55): "JuxtapositionCrossOfMoods",
    (Angle.JUXTAPOSITION, 3): "JuxtapositionCrossOfMutation",
    (Angle.JUXTAPOSITION, 19): "JuxtapositionCrossOfNeed",
    (Angle.JUXTAPOSITION, 17): "JuxtapositionCrossOfOpinions",
    (Angle.JUXTAPOSITION, 38): "JuxtapositionCrossOfOpposition",
    (Angle.JUXTAPOSITION, 47): "JuxtapositionCrossOfOppression",
    (Angle.JUXTAPOSITION, 45): "JuxtapositionCrossOfPossession",
    (Angle.JUXTAPOSITION, 34): "JuxtapositionCrossOfPower",
    (Angle.JUXTAPOSITION, 49): "JuxtapositionCrossOfPrinciples",
    (Angle.JUXTAPOSITION, 39): "JuxtapositionCrossOfProvocation",
    (Angle.JUXTAPOSITION, 24): "JuxtapositionCrossOfRationalization",
    (Angle.JUXTAPOSITION, 33): "JuxtapositionCrossOfRetreat",
    (Angle.JUXTAPOSITION, 28): "JuxtapositionCrossOfRisks",
    (Angle.JUXTAPOSITION, 1): "JuxtapositionCrossOfSelfExpression",
    (Angle.JUXTAPOSITION, 46): "JuxtapositionCrossOfSerendipity",
    (Angle.JUXTAPOSITION, 51): "JuxtapositionCrossOfShock",
    (Angle.JUXTAPOSITION, 52): "JuxtapositionCrossOfStillness",
    (Angle.JUXTAPOSITION, 56): "JuxtapositionCrossOfStimulation",
    (Angle.JUXTAPOSITION, 59): "JuxtapositionCrossOfStrategy",
    (Angle.JUXTAPOSITION, 61): "JuxtapositionCrossOfThinking",
    (Angle.JUXTAPOSITION, 50): "JuxtapositionCrossOfValues",
    (Angle.JUXTAPOSITION, 58): "JuxtapositionCrossOfVitality",
    (Angle.JUXTAPOSITION, 2): "JuxtapositionCrossOfTheDriver",
    (Angle.JUXTAPOSITION, 20): "JuxtapositionCrossOfTheNow",
    (Angle.JUXTAPOSITION, 26): "JuxtapositionCrossOfTheTrickster",
    (Angle.LEFT, 34): "LeftAngleCrossOfDuality2",
    (Angle.LEFT, 39): "LeftAngleCrossOfIndividualism",
    (Angle.LEFT, 38): "LeftAngleCrossOfIndividualism2",
    (Angle.LEFT, 32): "LeftAngleCrossOfLimitation2",
    (Angle.LEFT, 33): "LeftAngleCrossOfRefinement",
    (Angle.LEFT, 36): "LeftAngleCrossOfThePlane",
    (Angle.LEFT, 27): "LeftAngleCrossOfAlignment",
    (Angle.LEFT, 28): "LeftAngleCrossOfAlignment2",
    (Angle.LEFT, 45): "LeftAngleCrossOfConfrontation",
    (Angle.LEFT, 26): "LeftAngleCrossOfConfrontation2",
    (Angle.LEFT, 53): "LeftAngleCrossOfCycles",
    (Angle.LEFT, 54): "LeftAngleCrossOfCycles2",
    (Angle.LEFT, 23): "LeftAngleCrossOfDedication",
    (Angle.LEFT, 43): "LeftAngleCrossOfDedication2",
    (Angle.LEFT, 2): "LeftAngleCrossOfDefiance",
    (Angle.LEFT, 1): "LeftAngleCrossOfDefiance2",
    (Angle.LEFT, 52): "LeftAngleCrossOfDemands",
    (Angle.LEFT, 58): "LeftAngleCrossOfDemands2",
    (Angle.LEFT, 56): "LeftAngleCrossOfDistraction",
    (Angle.LEFT, 60): "LeftAngleCrossOfDistraction2",
    (Angle.LEFT, 63): "LeftAngleCrossOfDominion",
    (Angle.LEFT, 64): "LeftAngleCrossOfDominion2",
    (Angle.LEFT, 20): "LeftAngleCrossOfDuality",
    (Angle.LEFT, 12): "LeftAngleCrossOfEducation",
    (Angle.LEFT, 11): "LeftAngleCrossOfEducation2",
    (Angle.LEFT, 21): "LeftAngleCrossOfEndeavour",
    (Angle.LEFT, 48): "LeftAngleCrossOfEndeavour2",
    (Angle.LEFT, 25): "LeftAngleCrossOfHealing",
    (Angle.LEFT, 46): "LeftAngleCrossOfHealing2",
    (Angle.LEFT, 16): "LeftAngleCrossOfIdentification",
    (Angle.LEFT, 9): "LeftAngleCrossOfIdentification2",
    (Angle.LEFT, 24): "LeftAngleCrossOfIncarnation",
    (Angle.LEFT, 44): "LeftAngleCrossOfIncarnation2",
    (Angle.LEFT, 30): "LeftAngleCrossOfIndustry",
    (Angle.LEFT, 29): "LeftAngleCrossOfIndustry2",
    (Angle.LEFT, 22): "LeftAngleCrossOfInforming",
    (Angle.LEFT, 47): "LeftAngleCrossOfInforming2",
    (Angle.LEFT, 42): "LeftAngleCrossOfLimitation",
    (Angle.LEFT, 13): "LeftAngleCrossOfMasks",
    (Angle.LEFT, 7): "LeftAngleCrossOfMasks2",
    (Angle.LEFT, 37): "LeftAngleCrossOfMigration",
    (Angle.LEFT, 40): "LeftAngleCrossOfMigration2",
    (Angle.LEFT, 62): "LeftAngleCrossOfObscuration",
    (Angle.LEFT, 61): "LeftAngleCrossOfObscuration2",
    (Angle.LEFT, 15): "LeftAngleCrossOfPrevention",
    (Angle.LEFT, 10): "LeftAngleCrossOfPrevention2",
    (Angle.LEFT, 19): "LeftAngleCrossOfRefinement2",
    (Angle.LEFT, 49): "LeftAngleCrossOfRevolution",
    (Angle.LEFT, 4): "LeftAngleCrossOfRevolution2",
    (Angle.LEFT, 35): "LeftAngleCrossOfSeparation",
    (Angle.LEFT, 5): "LeftAngleCrossOfSeparation2",
    (Angle.LEFT, 55): "LeftAngleCrossOfSpirit",
    (Angle.LEFT, 59): "LeftAngleCrossOfSpirit2",
    (Angle.LEFT, 8): "LeftAngleCrossOfUncertainty",
    (Angle.LEFT, 14): "LeftAngleCrossOfUncertainty2",
    (Angle.LEFT, 17): "LeftAngleCrossOfUpheaval",
    (Angle.LEFT, 18): "LeftAngleCrossOfUpheaval2",
    (Angle.LEFT, 3): "LeftAngleCrossOfWishes",
    (Angle.LEFT, 50): "LeftAngleCrossOfWishes2",
    (Angle.LEFT, 31): "LeftAngleCrossOfTheAlpha",
    (Angle.LEFT, 41): "LeftAngleCrossOfTheAlpha2",
    (Angle.LEFT, 51): "LeftAngleCrossOfTheClarion",
    (Angle.LEFT, 57): "LeftAngleCrossOfTheClarion2",
    (Angle.LEFT, 6): "LeftAngleCrossOfThePlane2",
    (Angle.RIGHT, 63): "RightAngleCrossOfConsciousness",
    (Angle.RIGHT, 35): "RightAngleCrossOfConsciousness2",
    (Angle.RIGHT, 64): "RightAngleCrossOfConsciousness3",
    (Angle.RIGHT, 5): "RightAngleCrossOfConsciousness4",
    (Angle.RIGHT, 30): "RightAngleCrossOfContagion",
    (Angle.RIGHT, 8): "RightAngleCrossOfContagion2",
    (Angle.RIGHT, 29): "RightAngleCrossOfContagion3",
    (Angle.RIGHT, 14): "RightAngleCrossOfContagion4",
    (Angle.RIGHT, 12): "RightAngleCrossOfEden2",
    (Angle.RIGHT, 6): "RightAngleCrossOfEden3",
    (Angle.RIGHT, 11): "RightAngleCrossOfEden4",
    (Angle.RIGHT, 49): "RightAngleCrossOfExplanation",
    (Angle.RIGHT, 23): "RightAngleCrossOfExplanation2",
    (Angle.RIGHT, 4): "RightAngleCrossOfExplanation3",
    (Angle.RIGHT, 43): "RightAngleCrossOfExplanation4",
    (Angle.RIGHT, 3): "RightAngleCrossOfLaws",
    (Angle.RIGHT, 56): "RightAngleCrossOfLaws2",
    (Angle.RIGHT, 50): "RightAngleCrossOfLaws3",
    (Angle.RIGHT, 60): "RightAngleCrossOfLaws4",
    (Angle.RIGHT, 42): "RightAngleCrossOfMaya",
    (Angle.RIGHT, 62): "RightAngleCrossOfMaya2",
    (Angle.RIGHT, 32): "RightAngleCrossOfMaya3",
    (Angle.RIGHT, 61): "RightAngleCrossOfMaya4",
    (Angle.RIGHT, 51): "RightAngleCrossOfPenetration",
    (Angle.RIGHT, 53): "RightAngleCrossOfPenetration2",
    (Angle.RIGHT, 57): "RightAngleCrossOfPenetration3",
    (Angle.RIGHT, 54): "RightAngleCrossOfPenetration4",
    (Angle.RIGHT, 37): "RightAngleCrossOfPlanning",
    (Angle.RIGHT, 16): "RightAngleCrossOfPlanning2",
    (Angle.RIGHT, 40): "RightAngleCrossOfPlanning3",
    (Angle.RIGHT, 9): "RightAngleCrossOfPlanning4",
    (Angle.RIGHT, 22): "RightAngleCrossOfRulership",
    (Angle.RIGHT, 45): "RightAngleCrossOfRulership2",
    (Angle.RIGHT, 47): "RightAngleCrossOfRulership3",
    (Angle.RIGHT, 26): "RightAngleCrossOfRulership4",
    (Angle.RIGHT, 17): "RightAngleCrossOfService",
    (Angle.RIGHT, 52): "RightAngleCrossOfService2",
    (Angle.RIGHT, 18): "RightAngleCrossOfService3",
    (Angle.RIGHT, 58): "RightAngleCrossOfService4",
    (Angle.RIGHT, 21): "RightAngleCrossOfTension",
    (Angle.RIGHT, 39): "RightAngleCrossOfTension2",
    (Angle.RIGHT, 48): "RightAngleCrossOfTension3",
    (Angle.RIGHT, 38): "RightAngleCrossOfTension4",
    (Angle.RIGHT, 10): "RightAngleCrossOfVesselOfLove4",
    (Angle.RIGHT, 36): "RightAngleCrossOfTheEden",
    (Angle.RIGHT, 24): "RightAngleCrossOfTheFourWays",
    (Angle.RIGHT, 33): "RightAngleCrossOfTheFourWays2",
    (Angle.RIGHT, 44): "RightAngleCrossOfTheFourWays3",
    (Angle.RIGHT, 19): "RightAngleCrossOfTheFourWays4",
    (Angle.RIGHT, 55): "RightAngleCrossOfTheSleepingPhoenix",
    (Angle.RIGHT, 20): "RightAngleCrossOfTheSleepingPhoenix2",
    (Angle.RIGHT, 59): "RightAngleCrossOfTheSleepingPhoenix3",
    (Angle.RIGHT, 34): "RightAngleCrossOfTheSleepingPhoenix4",
    (Angle.RIGHT, 13): "RightAngleCrossOfTheSphinx",
    (Angle.RIGHT, 2): "RightAngleCrossOfTheSphinx2",
    (Angle.RIGHT, 7): "RightAngleCrossOfTheSphinx3",
    (Angle.RIGHT, 1): "RightAngleCrossOfTheSphinx4",
    (Angle.RIGHT, 27): "RightAngleCrossOfTheUnexpected",
    (Angle.RIGHT, 31): "RightAngleCrossOfTheUnexpected2",
    (Angle.RIGHT, 28): "RightAngleCrossOfTheUnexpected3",
    (Angle.RIGHT, 41): "RightAngleCrossOfTheUnexpected4",
    (Angle.RIGHT, 25): "RightAngleCrossOfTheVesselOfLove",
    (Angle.RIGHT, 15): "RightAngleCrossOfTheVesselOfLove2",
    (Angle.RIGHT, 46): "RightAngleCrossOfTheVesselOfLove3",
}


def _prettify_cross(enum_name: str) -> str:
    """``RightAngleCrossOfTheUnexpected4`` -> ``The Right Angle Cross of The Unexpected 4``."""
    text = re.sub(r"([a-z])([A-Z0-9])", r"\1 \2", enum_name)
    for prefix in ("Right Angle Cross", "Left Angle Cross", "Juxtaposition Cross"):
        text = re.sub(rf"^{prefix} Of ", f"{prefix} of ", text)
    if text.startswith("Right Angle"):
        text = "The " + text
    return text.strip()


INCARNATION_CROSSES: Mapping[Tuple[Angle, int], str] = MappingProxyType({
    key: _prettify_cross(name) for key, name in _CROSS_ENUM_NAMES.items()
})


# ---------------- Lookups ----------------
def center_of(gate: int) -> Center:
    return GATE_TO_CENTER[gate]


def channel_by_id(channel_id: str) -> Channel:
    return CHANNELS_BY_ID[channel_id]


def lookup_profile(personality_line: int, design_line: int, *, miss_level: int = logging.WARNING) -> Profile:
    """Profile for the personality/design Sun lines.

    Unknown combinations fall back to ``DEFAULT_PROFILE``; the miss is logged
    because it means an upstream line value was out of range.
    """
    key = f"{personality_line}/{design_line}"
    profile = PROFILES.get(key)
    if profile is None:
        logger.log(miss_level, "profile_fallback", extra={"profile_key": key, "used": DEFAULT_PROFILE.value})
        return DEFAULT_PROFILE
    return profile


def angle_for_profile(profile: Profile) -> Angle:
    if profile is Profile.P4_1:
        return Angle.JUXTAPOSITION
    if profile in LEFT_ANGLE_PROFILES:
        return Angle.LEFT
    return Angle.RIGHT


def incarnation_cross_name(gate: int, angle: Angle) -> str:
    name = INCARNATION_CROSSES.get((angle, gate))
    if name is None:
        return f"{angle.value} Angle Cross of Gate {gate}"
    return name
