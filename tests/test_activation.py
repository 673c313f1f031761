from __future__ import annotations

import math

import pytest

from hd_core.activation import (
    DEGREE_PER_GATE,
    DEGREE_PER_LINE,
    WHEEL_OFFSET_DEG,
    decode,
    format_degrees,
    modality_of,
    opposite,
    whole_sign_house,
    zodiac_sign,
)
from hd_core.definitions import WHEEL_ORDER, Modality
from hd_core.errors import InvalidInputError


def test_wheel_start_is_gate_17_line_1():
    a = decode(WHEEL_OFFSET_DEG)
    assert (a.gate, a.line, a.color, a.tone, a.base) == (17, 1, 1, 1, 1)


def test_each_wheel_slot_decodes_to_its_gate():
    for i, gate in enumerate(WHEEL_ORDER):
        lon = WHEEL_OFFSET_DEG + i * DEGREE_PER_GATE + DEGREE_PER_GATE / 2
        assert decode(lon).gate == gate


def test_lines_step_through_one_gate():
    start = WHEEL_OFFSET_DEG + DEGREE_PER_GATE  # gate 21
    lines = [decode(start + (n + 0.5) * DEGREE_PER_LINE).line for n in range(6)]
    assert lines == [1, 2, 3, 4, 5, 6]
    assert decode(start).gate == 21


def test_just_below_offset_wraps_to_last_gate():
    a = decode(WHEEL_OFFSET_DEG - 1e-6)
    assert a.gate == WHEEL_ORDER[-1] == 25
    assert a.line == 6


def test_one_step_below_offset_is_top_of_last_gate():
    a = decode(math.nextafter(WHEEL_OFFSET_DEG, 0.0))
    assert (a.gate, a.line, a.color, a.tone, a.base) == (25, 6, 6, 6, 5)
    assert decode(math.nextafter(WHEEL_OFFSET_DEG + 360.0, 0.0)).gate == 25


def test_longitudes_are_normalised():
    assert decode(360.0 + 100.0).gate == decode(100.0).gate
    assert decode(-1.0).gate == decode(359.0).gate
    assert decode(-1.0).longitude == -1.0


def test_all_levels_within_range():
    lon = 0.0
    while lon < 360.0:
        a = decode(lon)
        assert 1 <= a.line <= 6
        assert 1 <= a.color <= 6
        assert 1 <= a.tone <= 6
        assert 1 <= a.base <= 5
        lon += 0.0731


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, True, "10", None])
def test_non_finite_or_non_numeric_rejected(bad):
    with pytest.raises(InvalidInputError):
        decode(bad)


def test_label_and_dict():
    a = decode(WHEEL_OFFSET_DEG)
    assert a.label == "17.1"
    assert a.to_dict()["house"] is None
    assert a.with_house(3).house == 3


def test_zodiac_helpers():
    assert zodiac_sign(0.0) == "Aries"
    assert zodiac_sign(359.9) == "Pisces"
    assert modality_of(0.0) is Modality.CARDINAL
    assert modality_of(30.0) is Modality.FIXED
    assert modality_of(60.0) is Modality.MUTABLE
    assert modality_of(95.0) is Modality.CARDINAL
    assert opposite(350.0) == 170.0


def test_whole_sign_house():
    assert whole_sign_house(45.0, 15.0) == 2
    assert whole_sign_house(10.0, 350.0) == 2
    assert whole_sign_house(15.0, 15.0) == 1
    assert whole_sign_house(340.0, 15.0) == 12


def test_format_degrees():
    assert format_degrees(45.5) == "15°30'00\""
    assert format_degrees(0.0) == "0°00'00\""
    # rounding carries into minutes
    assert format_degrees(10.0 + 59.9999 / 3600.0) == "10°01'00\""


def test_gate_edges_are_deterministic():
    base_unit = DEGREE_PER_GATE / 6 / 6 / 6 / 6 / 5
    for i in range(1, len(WHEEL_ORDER)):
        edge = WHEEL_OFFSET_DEG + i * DEGREE_PER_GATE
        assert decode(edge).gate == WHEEL_ORDER[i]
        assert decode(edge + base_unit / 10).gate == WHEEL_ORDER[i]
        assert decode(edge - base_unit / 10).gate == WHEEL_ORDER[i - 1]
