"""Diagnostic interpretation of measured landmark values.

Each interpretable landmark turns its value into one or more
:class:`LandmarkInterpretation` records.  An analysis gathers the records of
all its components, groups them by category and settles each category on a
single indication and severity by majority vote.  When counts tie, the value
seen first in the group wins.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .logging_utils import debug_log_call

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .analyses import AnalysisComponent

logger = logging.getLogger(__name__)

Category = str
Indication = str
Severity = str


@dataclass(frozen=True)
class LandmarkInterpretation:
    category: Category
    indication: Indication
    severity: Severity
    value: float
    min: Optional[float]
    max: Optional[float]
    mean: Optional[float]
    symbol: Optional[str] = None


InterpretLandmark = Callable[
    [float, Optional[float], Optional[float], Optional[float]],
    List[LandmarkInterpretation],
]


@dataclass(frozen=True)
class RelevantComponent:
    symbol: str
    value: float
    mean: Optional[float]
    max: Optional[float]
    min: Optional[float]


@dataclass
class CategorizedResult:
    category: Category
    indication: Indication
    severity: Severity
    relevant_components: List[RelevantComponent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "category": self.category,
            "indication": self.indication,
            "severity": self.severity,
            "relevantComponents": [
                {"symbol": c.symbol, "value": c.value, "mean": c.mean, "max": c.max, "min": c.min}
                for c in self.relevant_components
            ],
        }


CATEGORY_NAMES: Mapping[Category, str] = MappingProxyType(
    {
        "growthPattern": "Growth Pattern",
        "lowerIncisorInclination": "Lower incisor inclination",
        "upperIncisorInclination": "Upper incisor inclination",
        "mandible": "Mandible",
        "maxilla": "Maxilla",
        "mandibularRotation": "Mandibular rotation",
        "skeletalBite": "Skeletal bite",
        "skeletalPattern": "Skeletal pattern",
        "skeletalProfile": "Skeletal profile",
        "chin": "Chin prominence",
        "lowerLipProminence": "Lower lip prominence",
        "upperLipProminence": "Upper lip prominence",
        "overbite": "Overbite",
        "overjet": "Overjet",
    }
)

INDICATION_NAMES: Mapping[Indication, str] = MappingProxyType(
    {
        "labial": "Labial",
        "class1": "Class 1",
        "class2": "Class 2",
        "class3": "Class 3",
        "clockwise": "Clockwise",
        "closed": "Closed",
        "concave": "Concave",
        "convex": "Convex",
        "counterclockwise": "Counter-clockwise",
        "horizontal": "Horizontal",
        "vertical": "Vertical",
        "lingual": "Lingual",
        "normal": "Normal",
        "open": "Open",
        "palatal": "Palatal",
        "prognathic": "Prognathic",
        "prominent": "Prominent",
        "recessive": "Recessive",
        "retrognathic": "Retrognathic",
        "tendency_for_class3": "Class 3 Tendency",
        "decreased": "Decreased",
        "increased": "Increased",
        "negative": "Negative",
    }
)

SEVERITY_NAMES: Mapping[Severity, str] = MappingProxyType(
    {
        "low": "Slight",
        "medium": "Medium",
        "high": "Severe",
        "none": "None",
    }
)


def get_display_name_for_category(category: Category) -> str:
    return CATEGORY_NAMES.get(category, category)


def get_display_name_for_indication(indication: Indication) -> str:
    return INDICATION_NAMES.get(indication, indication)


def get_display_name_for_severity(severity: Severity) -> str:
    return SEVERITY_NAMES.get(severity, severity)


def default_interpret_landmark(
    category: Category, ranges: Tuple[Indication, Indication, Indication]
) -> InterpretLandmark:
    """Classify a value against ``[min, max]`` into ``(low, normal, high)``.

    Severity is not graded and is always reported as ``'none'``.
    """

    low, normal, high = ranges

    def interpret(
        value: float,
        min: Optional[float],
        max: Optional[float],
        mean: Optional[float],
    ) -> List[LandmarkInterpretation]:
        indication = normal
        if max is not None and value > max:
            indication = high
        elif min is not None and value < min:
            indication = low
        return [
            LandmarkInterpretation(
                category=category,
                indication=indication,
                severity="none",
                value=value,
                min=min,
                max=max,
                mean=mean,
            )
        ]

    return interpret


def compose_interpretation(*fns: InterpretLandmark) -> InterpretLandmark:
    """Interpret one value with every function in ``fns`` and concatenate the records."""

    def interpret(
        value: float,
        min: Optional[float],
        max: Optional[float],
        mean: Optional[float],
    ) -> List[LandmarkInterpretation]:
        results: List[LandmarkInterpretation] = []
        for fn in fns:
            results.extend(fn(value, min, max, mean))
        return results

    return interpret


def _most_common(values: Iterable[str], what: str) -> str:
    counts = Counter(values)
    if not counts:
        raise ValueError(f"cannot resolve {what} of an empty group")
    # Counter keeps first-seen order and most_common() is stable on ties.
    return counts.most_common(1)[0][0]


def resolve_indication(results: Sequence[LandmarkInterpretation]) -> Indication:
    return _most_common((r.indication for r in results), "indication")


def resolve_severity(results: Sequence[LandmarkInterpretation]) -> Severity:
    return _most_common((r.severity for r in results), "severity")


@debug_log_call(logger)
def interpret_analysis(
    components: Sequence["AnalysisComponent"],
    values: Mapping[str, Optional[float]],
) -> List[CategorizedResult]:
    """Interpret every measured component and resolve one result per category."""

    records: List[LandmarkInterpretation] = []
    for component in components:
        landmark = component.landmark
        value = values.get(landmark.symbol)
        if landmark.interpret is None or not isinstance(value, (int, float)):
            continue
        for record in landmark.interpret(value, component.min, component.max, component.mean):
            records.append(replace(record, symbol=landmark.symbol))

    groups: Dict[Category, List[LandmarkInterpretation]] = {}
    for record in records:
        groups.setdefault(record.category, []).append(record)

    results: List[CategorizedResult] = []
    for category, group in groups.items():
        results.append(
            CategorizedResult(
                category=category,
                indication=resolve_indication(group),
                severity=resolve_severity(group),
                relevant_components=[
                    RelevantComponent(
                        symbol=r.symbol or "",
                        value=r.value,
                        mean=r.mean,
                        max=r.max,
                        min=r.min,
                    )
                    for r in group
                ],
            )
        )
    logger.info(
        "Interpreted %d record(s) from %d component(s) into %d categor%s",
        len(records),
        len(components),
        len(results),
        "y" if len(results) == 1 else "ies",
    )
    return results


def index_results(results: Iterable[CategorizedResult]) -> Dict[Category, CategorizedResult]:
    return {result.category: result for result in results}


__all__ = [
    "CATEGORY_NAMES",
    "Category",
    "CategorizedResult",
    "INDICATION_NAMES",
    "Indication",
    "InterpretLandmark",
    "LandmarkInterpretation",
    "RelevantComponent",
    "SEVERITY_NAMES",
    "Severity",
    "compose_interpretation",
    "default_interpret_landmark",
    "get_display_name_for_category",
    "get_display_name_for_indication",
    "get_display_name_for_severity",
    "index_results",
    "interpret_analysis",
    "resolve_indication",
    "resolve_severity",
]
