from __future__ import annotations

import logging

import pytest

from hd_core.chart import (
    build_chart,
    build_personality_chart,
    count_components,
    destiny_points,
    _build_adjacency,
)
from hd_core.definitions import (
    CENTER_ORDER,
    Authority,
    Center,
    ChartType,
    Definition,
    Orientation,
    Profile,
)
from hd_core.errors import InvalidInputError

from tests.factories import act


def test_no_channels_is_reflector(make_maps):
    p, d = make_maps([1, 2])
    chart = build_chart(p, d)
    assert chart.active_channels == ()
    assert chart.defined_centers == frozenset()
    assert chart.type is ChartType.REFLECTOR
    assert chart.definition is Definition.NONE
    assert chart.authority is Authority.OUTER
    assert chart.open_centers == CENTER_ORDER


@pytest.mark.parametrize(
    "gates, chart_type, authority",
    [
        ([3, 60], ChartType.GENERATOR, Authority.SACRAL),
        ([34, 20], ChartType.MANIFESTING_GENERATOR, Authority.SACRAL),
        ([21, 45], ChartType.MANIFESTOR, Authority.EGO_PROJECTED),
        ([1, 8], ChartType.PROJECTOR, Authority.SELF_PROJECTED),
        ([12, 22], ChartType.MANIFESTOR, Authority.EMOTIONAL),
        ([4, 63], ChartType.PROJECTOR, Authority.MENTAL),
        ([26, 44], ChartType.PROJECTOR, Authority.SPLENIC),
    ],
)
def test_type_and_authority(make_maps, gates, chart_type, authority):
    p, d = make_maps(gates)
    chart = build_chart(p, d)
    assert chart.type is chart_type
    assert chart.authority is authority
    assert chart.definition is Definition.SINGLE


def test_emotions_outrank_sacral(make_maps):
    # Sacral-Root plus Throat-Emotions
    p, d = make_maps([3, 60, 12, 22])
    chart = build_chart(p, d)
    assert chart.authority is Authority.EMOTIONAL
    assert chart.type is ChartType.MANIFESTING_GENERATOR


def test_motor_reaches_throat_through_chain(make_maps):
    # Root-Spleen (28-38), Spleen-Throat (16-48): Root motor -> Throat
    p, d = make_maps([28, 38, 16, 48])
    chart = build_chart(p, d)
    assert chart.type is ChartType.MANIFESTOR
    assert chart.definition is Definition.SINGLE


@pytest.mark.parametrize(
    "gates, definition",
    [
        ([4, 63, 3, 60], Definition.SPLIT),
        ([4, 63, 3, 60, 21, 45], Definition.TRIPLE_SPLIT),
        ([4, 63, 3, 60, 21, 45, 10, 57], Definition.QUADRUPLE_SPLIT),
    ],
)
def test_definition_counts_components(make_maps, gates, definition):
    p, d = make_maps(gates)
    assert build_chart(p, d).definition is definition


def test_design_gates_count(make_maps):
    p, d = make_maps([1, 2], d_gates=[8, 14])
    chart = build_chart(p, d)
    assert chart.active_gates == frozenset({1, 2, 8, 14})
    assert chart.active_channels == ("1-8", "2-14")


def test_cosmetic_bodies_do_not_activate(make_maps):
    p, d = make_maps([1, 2])
    p["Chiron"] = act(8)
    p["Black Moon Lilith"] = act(8)
    chart = build_chart(p, d)
    assert 8 not in chart.active_gates
    assert chart.active_channels == ()


def test_channels_follow_table_order(make_maps):
    p, d = make_maps([57, 34, 20, 10])
    chart = build_chart(p, d)
    assert chart.active_channels == ("10-20", "10-34", "10-57", "20-34", "20-57", "34-57")


def test_profile_cross_and_variables():
    personality = {
        "Sun": act(44, line=4, longitude=10.0, tone=2),
        "NorthNode": act(2, tone=5),
    }
    design = {
        "Sun": act(1, line=1, longitude=40.0, tone=4),
        "NorthNode": act(7, tone=3),
    }
    chart = build_chart(personality, design)
    assert chart.profile is Profile.P4_1
    assert chart.incarnation_cross == "Juxtaposition Cross of Alertness"
    assert chart.modality == "Cardinal/Fixed"

    v = chart.variables
    assert v.perspective.orientation is Orientation.LEFT
    assert v.awareness.orientation is Orientation.RIGHT
    assert v.digestion.orientation is Orientation.RIGHT
    assert v.environment.orientation is Orientation.LEFT


def test_same_modality_is_not_joined(make_maps):
    p, d = make_maps([1, 2])
    assert build_chart(p, d).modality == "Cardinal"


def test_profile_fallback_logs_warning(make_maps, caplog):
    p, d = make_maps([1, 2], p_line=2, d_line=2)
    with caplog.at_level(logging.WARNING):
        chart = build_chart(p, d)
    assert chart.profile is Profile.P1_3
    assert "profile_fallback" in [r.getMessage() for r in caplog.records]


def test_missing_sun_is_rejected(make_maps):
    p, d = make_maps([1, 2])
    del p["Sun"]
    with pytest.raises(InvalidInputError):
        build_chart(p, d)


def test_missing_design_node_is_rejected(make_maps):
    p, d = make_maps([1, 2])
    del d["NorthNode"]
    with pytest.raises(InvalidInputError, match="NorthNode"):
        build_chart(p, d)


def test_spaced_node_alias_is_accepted(make_maps):
    p, d = make_maps([1, 2])
    p["North Node"] = p.pop("NorthNode")
    assert build_chart(p, d).type is ChartType.REFLECTOR


def test_personality_chart_for_single_instant(caplog):
    activations = {"Sun": act(34, line=3), "NorthNode": act(20)}
    with caplog.at_level(logging.WARNING):
        chart = build_personality_chart(activations)
    assert chart.type is ChartType.MANIFESTING_GENERATOR
    assert chart.active_channels == ("20-34",)
    assert not [r for r in caplog.records if r.getMessage() == "profile_fallback"]


def test_components_helper():
    adjacency = _build_adjacency(("1-8", "3-60"))
    defined = frozenset(adjacency)
    assert count_components(defined, adjacency) == 2
    assert Center.THROAT in defined


def test_destiny_points_picks_highest_degree_in_sign():
    acts = {
        "Sun": act(1, longitude=10.0),
        "Moon": act(2, longitude=59.5),  # 29.5° Taurus
        "Mars": act(3, longitude=300.2),
        "Chiron": act(4, longitude=29.9),
    }
    name, best = destiny_points(acts)
    assert name == "Moon"
    assert best.gate == 2
    assert destiny_points({}) is None
