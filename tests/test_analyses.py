import logging

import pytest

from cephtrace import definitions as d
from cephtrace.analyses import ANALYSES, get_analysis, get_name_for_analysis, list_analyses
from cephtrace.evaluation import evaluate
from cephtrace.geometry import GeoPoint
from cephtrace.landmarks import LandmarkKind
from cephtrace.steps import extract_steps


def test_registry_lookup():
    assert d.get_landmark("SNA") is d.SNA
    assert d.get_landmark("Björk Sum") is d.bjorkSum
    assert d.FMA is d.FMPA
    assert d.L1_MP is d.IMPA
    with pytest.raises(KeyError):
        d.get_landmark("XYZ")


@pytest.mark.parametrize(
    "landmark, symbol",
    [
        (d.SNA, "SNA"),
        (d.SNB, "SNB"),
        (d.ANB, "ANB"),
        (d.NSAr, "NSAr"),
        (d.SArGo, "SArGo"),
        (d.ArGoMe, "ArGoMe"),
        (d.facialAngle, "Or-Po,N-Pog"),
        (d.downsABPlaneAngle, "B-A,Pog-N"),
    ],
)
def test_catalogue_symbols(landmark, symbol):
    assert landmark.symbol == symbol
    assert d.REGISTRY[symbol] is landmark


def test_catalogue_shares_points():
    line_ns, line_na = d.SNA.components
    assert line_ns.components[0] is d.N
    assert line_na.components[1] is d.A
    assert d.bjorkSum.kind is LandmarkKind.SUM


def test_every_registered_symbol_is_unique():
    assert len({landmark.symbol for landmark in d.REGISTRY.values()}) == len(d.REGISTRY)


def test_analysis_catalogue():
    assert list(ANALYSES) == ["basic", "common", "downs", "steiner", "bjork"]
    assert get_name_for_analysis("bjork") == "Björk"
    assert get_name_for_analysis("custom") == "custom"
    assert list_analyses("ceph_lateral") == list(ANALYSES.values())
    assert list_analyses("panoramic") == []
    with pytest.raises(KeyError, match="basic"):
        get_analysis("unknown")


def test_common_extends_basic():
    basic = get_analysis("basic")
    common = get_analysis("common")
    assert common.components[: len(basic.components)] == basic.components
    assert d.yAxis in common.landmarks


@pytest.mark.parametrize("analysis_id", list(ANALYSES))
def test_every_analysis_component_is_measurable(analysis_id):
    for landmark in get_analysis(analysis_id).landmarks:
        assert landmark.is_calculable


def test_convexity_sign_follows_side_of_facial_plane():
    manual = {"N": GeoPoint(0, 0), "Pog": GeoPoint(0, 20), "A": GeoPoint(3, 10)}
    convex = evaluate(extract_steps([d.downsAngleOfConvexity]), manual)
    manual["A"] = GeoPoint(-3, 10)
    concave = evaluate(extract_steps([d.downsAngleOfConvexity]), manual)
    assert convex.values["NAPog"] == pytest.approx(-concave.values["NAPog"])
    assert convex.values["NAPog"] != 0


def test_evaluate_emits_debug_trace(caplog):
    caplog.set_level(logging.DEBUG, logger="cephtrace")
    evaluate(extract_steps([d.SNA]), {"S": GeoPoint(0, 0), "N": GeoPoint(0, -10)})

    messages = [record.getMessage() for record in caplog.records]
    assert any(m.startswith("Entering evaluate") for m in messages)
    assert any(m.startswith("Unresolved step: every component must be mapped in order to map N-A") for m in messages)
    assert any("1 unresolved" in m or "2 unresolved" in m for m in messages)


def test_debug_trace_summarises_landmarks(caplog):
    caplog.set_level(logging.DEBUG, logger="cephtrace")
    extract_steps([d.SNA], "symbol")

    messages = [record.getMessage() for record in caplog.records]
    assert "Entering extract_steps([<angle SNA>], 'symbol')" in messages
    assert (
        "Exiting extract_steps -> [<point N>, <point S>, <line N-S>, <point A>, <line N-A>, ... (6 items)]"
        in messages
    )
