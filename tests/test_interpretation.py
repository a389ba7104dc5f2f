import pytest

from cephtrace import definitions as d
from cephtrace.analyses import common, get_analysis
from cephtrace.interpretation import (
    CategorizedResult,
    LandmarkInterpretation,
    compose_interpretation,
    default_interpret_landmark,
    get_display_name_for_category,
    get_display_name_for_indication,
    get_display_name_for_severity,
    index_results,
    interpret_analysis,
    resolve_indication,
    resolve_severity,
)


def _record(indication, severity="none", category="skeletalProfile"):
    return LandmarkInterpretation(
        category=category,
        indication=indication,
        severity=severity,
        value=0.0,
        min=None,
        max=None,
        mean=None,
    )


@pytest.mark.parametrize(
    "value, expected",
    [
        (79.0, "retrognathic"),
        (80.0, "normal"),
        (82.0, "normal"),
        (84.0, "normal"),
        (84.5, "prognathic"),
    ],
)
def test_default_interpretation_classifies_against_range(value, expected):
    interpret = default_interpret_landmark("maxilla", ("retrognathic", "normal", "prognathic"))
    (record,) = interpret(value, 80, 84, 82)
    assert record.category == "maxilla"
    assert record.indication == expected
    assert record.severity == "none"
    assert (record.value, record.min, record.max, record.mean) == (value, 80, 84, 82)


def test_default_interpretation_without_bounds_is_normal():
    interpret = default_interpret_landmark("maxilla", ("retrognathic", "normal", "prognathic"))
    (record,) = interpret(500.0, None, None, None)
    assert record.indication == "normal"


def test_compose_interpretation_concatenates_records():
    records = d.facialAngle.interpret(100.0, 82, 95, 87.8)
    assert [(r.category, r.indication) for r in records] == [
        ("skeletalProfile", "convex"),
        ("chin", "prominent"),
    ]

    empty = compose_interpretation()
    assert empty(1.0, None, None, None) == []


def test_default_interpretation_with_narrow_range():
    interpret = default_interpret_landmark("maxilla", ("retrognathic", "normal", "prognathic"))
    assert interpret(5, 0, 4, None)[0].indication == "prognathic"
    assert interpret(2, 0, 4, None)[0].indication == "normal"
    assert {r.severity for r in interpret(5, 0, 4, None) + interpret(2, 0, 4, None)} == {"none"}


def test_resolution_picks_majority():
    group = [_record("class1"), _record("class1"), _record("class2")]
    assert resolve_indication(group) == "class1"
    group = [_record("convex"), _record("normal"), _record("convex")]
    assert resolve_indication(group) == "convex"


def test_resolution_tie_keeps_first_seen():
    assert resolve_indication([_record("normal"), _record("convex")]) == "normal"
    assert resolve_indication([_record("convex"), _record("normal")]) == "convex"
    assert resolve_severity([_record("x", "low"), _record("x", "high")]) == "low"


def test_resolution_of_empty_group_raises():
    with pytest.raises(ValueError):
        resolve_indication([])
    with pytest.raises(ValueError):
        resolve_severity([])


@pytest.mark.parametrize(
    "value, min, max, expected",
    [
        (1.0, 0, 4, "tendency_for_class3"),
        (0.0, 0, 4, "class3"),
        (-1.0, 0, 4, "class3"),
        (3.0, 0, 4, "class1"),
        (5.0, 0, 4, "class2"),
        (3.0, None, None, "class1"),
    ],
)
def test_anb_interpretation(value, min, max, expected):
    (record,) = d.ANB.interpret(value, min, max, 2)
    assert record.category == "skeletalPattern"
    assert record.indication == expected
    assert record.severity == "none"


def test_interpret_analysis_groups_by_category_and_skips_missing_values():
    results = get_analysis("basic").interpret({"SNA": 86.0, "SNB": 80.0, "FMPA": None})
    indexed = index_results(results)

    assert [r.category for r in results] == ["maxilla", "mandible"]
    assert indexed["maxilla"].indication == "prognathic"
    assert indexed["mandible"].indication == "normal"
    assert indexed["maxilla"].severity == "none"

    (component,) = indexed["maxilla"].relevant_components
    assert component.symbol == "SNA"
    assert (component.value, component.mean, component.min, component.max) == (86.0, 82, 80, 84)


def test_interpret_analysis_resolves_shared_category_in_component_order():
    values = {"Or-Po,N-Pog": 90.0, "NAPog": 12.0}
    indexed = index_results(interpret_analysis(common.components, values))

    profile = indexed["skeletalProfile"]
    assert [c.symbol for c in profile.relevant_components] == ["Or-Po,N-Pog", "NAPog"]
    assert profile.indication == "normal"
    assert indexed["chin"].indication == "normal"


def test_interpret_analysis_without_values_is_empty():
    assert interpret_analysis(common.components, {}) == []


def test_categorized_result_to_dict():
    result = get_analysis("basic").interpret({"ANB": 5.0})[0]
    assert isinstance(result, CategorizedResult)
    assert result.to_dict() == {
        "category": "skeletalPattern",
        "indication": "class2",
        "severity": "none",
        "relevantComponents": [
            {"symbol": "ANB", "value": 5.0, "mean": 2, "max": 4, "min": 2},
        ],
    }


def test_display_names_fall_back_to_key():
    assert get_display_name_for_category("skeletalPattern") == "Skeletal pattern"
    assert get_display_name_for_indication("tendency_for_class3") == "Class 3 Tendency"
    assert get_display_name_for_severity("high") == "Severe"
    assert get_display_name_for_severity("none") == "None"
    assert get_display_name_for_category("unknownCategory") == "unknownCategory"
