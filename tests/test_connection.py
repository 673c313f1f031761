from __future__ import annotations

from hd_core.chart import build_chart
from hd_core.connection import ORIGIN_A, ORIGIN_B, ORIGIN_COMPOSITE, classify
from hd_core.definitions import Center, ConnectionType

from tests.factories import activation_map


def _chart(gates):
    return build_chart(activation_map(gates), activation_map(gates[:2], sun_line=3))


# A: 1, 3-60, 21-45, 20-34    B: 8, 21, 20-34
CHART_A = _chart([1, 3, 60, 21, 45, 34, 20])
CHART_B = _chart([8, 21, 34, 20])


def _ids(items):
    return [c.channel_id for c in items]


def test_composite_channels_in_table_order():
    analysis = classify(CHART_A, CHART_B)
    assert analysis.composite_gates == frozenset({1, 3, 8, 20, 21, 34, 45, 60})
    assert analysis.composite_channels == ("1-8", "3-60", "20-34", "21-45")


def test_each_connection_type():
    analysis = classify(CHART_A, CHART_B)
    assert _ids(analysis.electromagnetic) == ["1-8"]
    assert _ids(analysis.dominance) == ["3-60"]
    assert _ids(analysis.companion) == ["20-34"]
    assert _ids(analysis.compromise) == ["21-45"]

    em = analysis.electromagnetic[0]
    assert em.origin == ORIGIN_COMPOSITE
    assert (em.owner_a, em.owner_b) == ("gate1", "gate2")
    assert not em.approximate

    assert analysis.dominance[0].origin == ORIGIN_A
    assert analysis.compromise[0].origin == ORIGIN_A
    assert analysis.companion[0].origin == ORIGIN_COMPOSITE


def test_swapping_people_swaps_origins():
    analysis = classify(CHART_B, CHART_A)
    assert analysis.dominance[0].origin == ORIGIN_B
    assert analysis.compromise[0].origin == ORIGIN_B
    assert analysis.by_type(ConnectionType.ELECTROMAGNETIC)[0].owner_a == "gate2"


def test_every_composite_channel_is_classified_once():
    analysis = classify(CHART_A, CHART_B)
    classified = []
    for kind in ConnectionType:
        classified.extend(_ids(analysis.by_type(kind)))
    assert sorted(classified) == sorted(analysis.composite_channels)


def test_composite_centers():
    centers = classify(CHART_A, CHART_B).composite_centers
    assert centers.code == "5-4"
    assert len(centers.defined) + len(centers.open) == 9
    assert centers.defined_by_both == (Center.SACRAL, Center.THROAT)
    assert centers.defined_by_a_only == (Center.ROOT, Center.HEART)
    assert centers.defined_by_b_only == ()
    assert centers.defined_by_composite == (Center.G_CENTER,)
    assert centers.open == (Center.EMOTIONS, Center.SPLEEN, Center.MIND, Center.CROWN)


def test_swapping_people_swaps_center_summary():
    centers = classify(CHART_B, CHART_A).composite_centers
    assert centers.code == "5-4"
    assert centers.defined_by_both == (Center.SACRAL, Center.THROAT)
    assert centers.defined_by_a_only == ()
    assert centers.defined_by_b_only == (Center.ROOT, Center.HEART)
    assert centers.defined_by_composite == (Center.G_CENTER,)


def test_centers_defined_by_second_person_alone():
    a = _chart([1, 3, 60])
    b = _chart([8, 12, 22])
    centers = classify(a, b).composite_centers
    assert centers.defined_by_both == ()
    assert centers.defined_by_a_only == (Center.ROOT, Center.SACRAL)
    assert centers.defined_by_b_only == (Center.EMOTIONS, Center.THROAT)
    assert centers.defined_by_composite == (Center.G_CENTER,)


def test_no_shared_channels():
    a = _chart([1, 2])
    b = _chart([5, 7])
    analysis = classify(a, b)
    assert analysis.composite_channels == ()
    assert analysis.composite_centers.code == "0-9"


def test_to_dict_shape():
    out = classify(CHART_A, CHART_B).to_dict()
    assert out["compositeCenters"]["code"] == "5-4"
    em = out["electromagnetic"][0]
    assert em["id"] == "1-8"
    assert em["type"] == "electromagnetic"
    assert em["fromPerson"] == "composite"
    assert em["gates"] == {"gate1": 1, "gate2": 8, "ownerA": "gate1", "ownerB": "gate2"}
