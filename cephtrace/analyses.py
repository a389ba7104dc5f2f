"""Named cephalometric analyses and their statistical reference ranges."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from . import definitions as d
from .interpretation import CategorizedResult, interpret_analysis
from .landmarks import DEFAULT_IMAGE_TYPE, Landmark


@dataclass(frozen=True)
class AnalysisComponent:
    landmark: Landmark
    mean: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class Analysis:
    id: str
    name: str
    components: Tuple[AnalysisComponent, ...]
    image_type: str = DEFAULT_IMAGE_TYPE

    @property
    def landmarks(self) -> List[Landmark]:
        return [c.landmark for c in self.components]

    def interpret(self, values: Mapping[str, Optional[float]]) -> List[CategorizedResult]:
        return interpret_analysis(self.components, values)


def _component(landmark: Landmark, mean: float, min: float, max: float) -> AnalysisComponent:
    return AnalysisComponent(landmark=landmark, mean=mean, min=min, max=max)


def _analysis(id: str, name: str, components: Sequence[AnalysisComponent]) -> Analysis:
    return Analysis(id=id, name=name, components=tuple(components))


basic = _analysis(
    "basic",
    "Basic",
    [
        _component(d.SNA, 82, 80, 84),
        _component(d.SNB, 80, 78, 82),
        _component(d.ANB, 2, 0, 4),
        _component(d.FMPA, 25, 21, 29),
        _component(d.MM, 25, 20, 30),
        _component(d.U1_SN, 103, 97, 109),
        _component(d.IMPA, 90, 85, 95),
        _component(d.interincisalAngle, 135, 130, 140),
    ],
)

common = _analysis(
    "common",
    "Common",
    list(basic.components)
    + [
        _component(d.yAxis, 59.4, 53, 66),
        _component(d.facialAngle, 87.8, 82, 95),
        _component(d.downsAngleOfConvexity, 0, -8.5, 10),
        _component(d.downsABPlaneAngle, -4.6, -9, 0),
    ],
)

downs = _analysis(
    "downs",
    "Downs",
    [
        _component(d.facialAngle, 87.8, 82, 95),
        _component(d.downsAngleOfConvexity, 0, -8.5, 10),
        _component(d.downsABPlaneAngle, -4.6, -9, 0),
        _component(d.FMPA, 21.9, 17, 28),
        _component(d.yAxis, 59.4, 53, 66),
        _component(d.interincisalAngle, 135.4, 130, 150.5),
        _component(d.IMPA, 91.4, 81.5, 97),
        _component(d.L1ToDentalPlaneAngle, 22, 18, 26),
    ],
)

steiner = _analysis(
    "steiner",
    "Steiner",
    [
        _component(d.SNA, 82, 80, 84),
        _component(d.SNB, 80, 78, 82),
        _component(d.ANB, 2, 0, 4),
        _component(d.SN_MP, 32, 27, 37),
        _component(d.U1_SN, 103, 97, 109),
        _component(d.L1_NB, 4, 2, 6),
        _component(d.Pog_NB, 2, 0, 4),
        _component(d.interincisalAngle, 131, 126, 136),
    ],
)

bjork = _analysis(
    "bjork",
    "Björk",
    [
        _component(d.NSAr, 123, 118, 128),
        _component(d.SArGo, 143, 137, 149),
        _component(d.ArGoMe, 130, 123, 137),
        _component(d.bjorkSum, 396, 390, 402),
        _component(d.SN_MP, 32, 27, 37),
    ],
)

ANALYSES: Mapping[str, Analysis] = MappingProxyType(
    {analysis.id: analysis for analysis in (basic, common, downs, steiner, bjork)}
)

_ANALYSIS_NAMES: Mapping[str, str] = MappingProxyType(
    {analysis.id: analysis.name for analysis in ANALYSES.values()}
)


def get_analysis(analysis_id: str) -> Analysis:
    try:
        return ANALYSES[analysis_id]
    except KeyError:
        raise KeyError(
            f"unknown analysis {analysis_id!r}; expected one of {sorted(ANALYSES)}"
        ) from None


def get_name_for_analysis(analysis_id: str) -> str:
    return _ANALYSIS_NAMES.get(analysis_id, analysis_id)


def list_analyses(image_type: Optional[str] = None) -> List[Analysis]:
    return [a for a in ANALYSES.values() if image_type is None or a.image_type == image_type]


__all__ = [
    "ANALYSES",
    "Analysis",
    "AnalysisComponent",
    "get_analysis",
    "get_name_for_analysis",
    "list_analyses",
]
