import math

import pytest

from cephtrace import definitions as d
from cephtrace.evaluation import Evaluation, UnresolvedStep, evaluate, try_calculate, try_map
from cephtrace.geometry import GeoAngle, GeoPoint, GeoVector
from cephtrace.steps import extract_steps


def _sna_points():
    return {
        "S": GeoPoint(0, 0),
        "N": GeoPoint(0, -10),
        "A": GeoPoint(10, -10),
    }


def _unsigned_degrees(u, v):
    cos_theta = (u[0] * v[0] + u[1] * v[1]) / (math.hypot(*u) * math.hypot(*v))
    return math.degrees(math.acos(cos_theta))


def test_sna_is_right_angle():
    result = evaluate(extract_steps([d.SNA]), _sna_points())
    assert isinstance(result, Evaluation)
    assert math.isclose(result.values["SNA"], 90.0, abs_tol=1e-6)
    assert result.objects["N-S"] == GeoVector(0, -10, 0, 0)
    assert isinstance(result.objects["SNA"], GeoAngle)
    assert result.unresolved == []


@pytest.mark.parametrize(
    "a, sign",
    [
        ((3.0, 8.0), 1),
        ((0.0, 8.0), -1),
    ],
)
def test_anb_sign_follows_side_of_nb(a, sign):
    manual = {"N": GeoPoint(0, 0), "B": GeoPoint(2, 10), "A": GeoPoint(*a)}
    result = evaluate(extract_steps([d.ANB]), manual)
    magnitude = _unsigned_degrees(a, (2.0, 10.0))
    assert result.values["ANB"] == pytest.approx(sign * magnitude)


def test_unresolved_component_leaves_step_absent():
    manual = {"S": GeoPoint(0, 0), "N": GeoPoint(0, -10)}
    result = evaluate(extract_steps([d.SNA]), manual)

    assert "N-S" in result.objects
    for symbol in ("N-A", "SNA"):
        assert symbol not in result.objects
        assert symbol not in result.values
        assert not result.is_resolved(symbol)
    assert result.unresolved == [
        UnresolvedStep("N-A", ("A",)),
        UnresolvedStep("SNA", ("N-A",)),
    ]
    assert "missing: A" in str(result.unresolved[0])


def test_unordered_steps_under_resolve_silently():
    steps = list(reversed(extract_steps([d.SNA])))
    result = evaluate(steps, _sna_points())
    assert "SNA" not in result.values
    assert set(result.objects) == {"S", "N", "A", "N-S", "N-A"}


def test_evaluate_does_not_mutate_inputs():
    manual = _sna_points()
    values = {"SNB": 70.0}
    evaluate(extract_steps([d.SNA]), manual, values)
    assert set(manual) == {"S", "N", "A"}
    assert values == {"SNB": 70.0}


def test_manual_value_takes_precedence():
    result = evaluate(extract_steps([d.SNA]), _sna_points(), {"SNA": 80.0})
    assert result.value_of("SNA") == 80.0
    assert isinstance(result.object_of("SNA"), GeoAngle)


def test_manual_object_takes_precedence_over_mapping():
    manual = dict(_sna_points())
    manual["N-A"] = GeoVector(0, -10, -10, -10)
    result = evaluate(extract_steps([d.SNA]), manual)
    assert result.objects["N-A"] == GeoVector(0, -10, -10, -10)
    assert math.isclose(result.values["SNA"], 90.0, abs_tol=1e-6)


def test_distance_to_line():
    manual = {
        "L1 Incisal Edge": GeoPoint(3, 4),
        "N": GeoPoint(0, 0),
        "B": GeoPoint(10, 0),
    }
    result = evaluate(extract_steps([d.L1_NB]), manual)
    assert result.values["L1-NB"] == pytest.approx(4.0)
    perpendicular = result.objects["L1-NB"]
    assert isinstance(perpendicular, GeoVector)
    assert (perpendicular.x2, perpendicular.y2) == pytest.approx((3.0, 0.0))


def test_sum_adds_evaluated_angles():
    manual = {
        "N": GeoPoint(10, 0),
        "S": GeoPoint(0, 0),
        "Ar": GeoPoint(-2, 8),
        "Go": GeoPoint(0, 20),
        "Me": GeoPoint(12, 24),
    }
    result = evaluate(extract_steps([d.bjorkSum], "symbol"), manual)
    expected = result.values["NSAr"] + result.values["SArGo"] + result.values["ArGoMe"]
    assert result.values["Björk Sum"] == pytest.approx(expected)
    assert "Björk Sum" not in result.objects


def test_sum_is_unresolved_when_an_angle_is_missing():
    manual = {"N": GeoPoint(10, 0), "S": GeoPoint(0, 0), "Ar": GeoPoint(-2, 8)}
    result = evaluate(extract_steps([d.bjorkSum], "symbol"), manual)
    assert "NSAr" in result.values
    assert "Björk Sum" not in result.values
    assert any(u.symbol == "Björk Sum" for u in result.unresolved)


def test_try_map_and_try_calculate_resolve_on_demand():
    manual = _sna_points()
    assert isinstance(try_map(d.SNA, manual), GeoAngle)
    assert try_calculate(d.SNA, manual, {}) == pytest.approx(90.0)
    assert try_calculate(d.SNA, manual, {"SNA": 85.0}) == 85.0


def test_try_map_and_try_calculate_report_unresolved():
    manual = {"S": GeoPoint(0, 0)}
    assert try_map(d.SNA, manual) is None
    assert try_map(d.S, {}) is None
    assert try_calculate(d.SNA, manual, {}) is None
    assert try_calculate(d.S, manual, {}) is None


def test_try_calculate_anb_matches_batch_evaluation():
    manual = {"N": GeoPoint(0, 0), "B": GeoPoint(2, 10), "A": GeoPoint(0, 8)}
    batch = evaluate(extract_steps([d.ANB]), manual)
    assert try_calculate(d.ANB, manual, {}) == pytest.approx(batch.values["ANB"])
    assert batch.values["ANB"] < 0
