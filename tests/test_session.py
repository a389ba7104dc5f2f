import pytest

from cephtrace.geometry import GeoPoint
from cephtrace.session import TracingSession


BJORK_POINTS = {
    "N": GeoPoint(10, 0),
    "S": GeoPoint(0, 0),
    "Ar": GeoPoint(-2, 8),
    "Go": GeoPoint(0, 20),
    "Me": GeoPoint(12, 24),
}


def test_new_session_starts_with_first_point():
    session = TracingSession("basic")
    assert session.analysis_id == "basic"
    assert session.next_step().symbol == "N"
    assert not session.is_complete()


def test_skipping_and_placing_advance_next_step():
    session = TracingSession("basic")
    session.skip_step("N")
    assert session.next_step().symbol == "S"

    session.unskip_step("N")
    session.set_manual_landmark("N", GeoPoint(0, -10))
    assert session.next_step().symbol == "S"
    assert "N" not in [step.symbol for step in session.pending_steps()]


def test_pending_steps_are_points_only():
    session = TracingSession("bjork")
    pending = [step.symbol for step in session.pending_steps()]
    assert pending == ["S", "N", "Ar", "Go", "Me"]


def test_sna_evaluation_and_interpretation():
    session = TracingSession(
        "basic",
        manual_landmarks={"S": GeoPoint(0, 0), "N": GeoPoint(0, -10), "A": GeoPoint(10, -10)},
    )
    evaluation = session.evaluate()
    assert evaluation.values["SNA"] == pytest.approx(90.0)
    assert "SNB" not in evaluation.values

    indexed = session.index(evaluation)
    assert list(indexed) == ["maxilla"]
    assert indexed["maxilla"].indication == "prognathic"


def test_manual_value_overrides_measurement():
    session = TracingSession(
        "basic",
        manual_landmarks={"S": GeoPoint(0, 0), "N": GeoPoint(0, -10), "A": GeoPoint(10, -10)},
    )
    session.set_manual_value("SNA", 83)
    assert session.index()["maxilla"].indication == "normal"

    session.remove_manual_value("SNA")
    assert session.index()["maxilla"].indication == "prognathic"


def test_complete_bjork_session_resolves_every_component():
    session = TracingSession("bjork", manual_landmarks=BJORK_POINTS)
    assert session.is_complete()
    assert session.next_step() is None

    evaluation = session.evaluate()
    for symbol in ("NSAr", "SArGo", "ArGoMe", "Björk Sum", "SN-MP"):
        assert symbol in evaluation.values
    assert evaluation.unresolved == []

    session.remove_manual_landmark("Me")
    assert session.next_step().symbol == "Me"
    assert "Björk Sum" not in session.evaluate().values


def test_display_steps_follow_requested_strategy():
    session = TracingSession("bjork")
    structural = [step.symbol for step in session.steps("structural")]
    by_symbol = [step.symbol for step in session.steps("symbol")]
    assert "SN" not in structural
    assert "SN" in by_symbol


def test_session_without_analysis():
    session = TracingSession()
    assert session.analysis_id is None
    assert session.image_type == "ceph_lateral"
    assert session.steps() == []
    assert session.interpret() == []
    assert session.is_complete()


def test_switching_analysis():
    session = TracingSession("basic")
    session.set_analysis("bjork")
    assert session.analysis_id == "bjork"
    session.set_analysis(None)
    assert session.analysis is None


def test_unknown_analysis_raises_key_error():
    with pytest.raises(KeyError):
        TracingSession("unknown")
    session = TracingSession("basic")
    with pytest.raises(KeyError):
        session.set_analysis("unknown")
    assert session.analysis_id == "basic"
