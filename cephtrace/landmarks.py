"""Declarative cephalometric landmark definitions.

A :class:`Landmark` is an immutable node in a dependency graph.  Points are
leaves placed by the user; lines, angles, distances and sums are built from
other landmarks and know how to map their components to a geometric object
and how to calculate a numeric value from them.  The same sub-landmark
instance is shared by every parent that uses it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence, Tuple, Union, overload

from .geometry import (
    GeoAngle,
    GeoObject,
    GeoVector,
    calculate_angle,
    create_angle_from_vectors,
    create_perpendicular,
    create_vector_from_points,
    get_segment_length,
    radians_to_degrees,
)

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .interpretation import InterpretLandmark

DEFAULT_IMAGE_TYPE = "ceph_lateral"

IMAGE_TYPES = (
    "ceph_lateral",
    "ceph_pa",
    "photo_lateral",
    "photo_frontal",
    "panoramic",
)


class LandmarkKind(str, Enum):
    POINT = "point"
    LINE = "line"
    ANGLE = "angle"
    DISTANCE = "distance"
    SUM = "sum"


@dataclass(frozen=True)
class CalculationInput:
    """Everything a landmark calculator may read.

    ``component_values`` and ``component_objects`` follow the order of the
    landmark's components; entries are ``None`` when unresolved.
    """

    component_values: Tuple[Optional[float], ...]
    component_objects: Tuple[Optional[GeoObject], ...]
    self_object: Optional[GeoObject]


MapLandmark = Callable[..., GeoObject]
CalculateLandmark = Callable[[CalculationInput], Optional[float]]


@dataclass(frozen=True, eq=False)
class Landmark:
    kind: LandmarkKind
    symbol: str
    components: Tuple["Landmark", ...] = ()
    name: Optional[str] = None
    description: Optional[str] = None
    unit: Optional[str] = None
    image_type: str = DEFAULT_IMAGE_TYPE
    mapper: Optional[MapLandmark] = None
    calculator: Optional[CalculateLandmark] = None
    interpret: Optional["InterpretLandmark"] = None

    @property
    def is_mappable(self) -> bool:
        return self.mapper is not None

    @property
    def is_calculable(self) -> bool:
        return self.calculator is not None

    @property
    def is_interpretable(self) -> bool:
        return self.interpret is not None

    def map(self, *objects: GeoObject) -> GeoObject:
        if self.mapper is None:
            raise TypeError(f"landmark {self.symbol!r} cannot be mapped")
        return self.mapper(*objects)

    def calculate(self, bundle: CalculationInput) -> Optional[float]:
        if self.calculator is None:
            raise TypeError(f"landmark {self.symbol!r} cannot be calculated")
        return self.calculator(bundle)

    def __repr__(self) -> str:
        return f"Landmark({self.kind.value}, {self.symbol!r})"


def _angle_value(unit: str) -> CalculateLandmark:
    def calculate(bundle: CalculationInput) -> Optional[float]:
        angle = bundle.self_object
        if not isinstance(angle, GeoAngle):
            return None
        radians = calculate_angle(angle)
        if unit == "radian":
            return radians
        return radians_to_degrees(radians)

    return calculate


def _segment_value(bundle: CalculationInput) -> Optional[float]:
    segment = bundle.self_object
    if not isinstance(segment, GeoVector):
        return None
    return get_segment_length(segment)


def _sum_value(bundle: CalculationInput) -> Optional[float]:
    if any(value is None for value in bundle.component_values):
        return None
    return float(sum(bundle.component_values))  # type: ignore[arg-type]


def _symbol_for_angle(line1: Landmark, line2: Landmark) -> str:
    A, B = line1.components
    C, D = line2.components
    if A.symbol == C.symbol or B.symbol == D.symbol:
        ordered: Dict[str, None] = {}
        for landmark in (B, C, D, A):
            ordered.setdefault(landmark.symbol, None)
        return "".join(ordered)
    return f"{line1.symbol},{line2.symbol}"


def point(
    symbol: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    image_type: str = DEFAULT_IMAGE_TYPE,
) -> Landmark:
    return Landmark(
        kind=LandmarkKind.POINT,
        symbol=symbol,
        name=name,
        description=description,
        image_type=image_type,
    )


def line(
    A: Landmark,
    B: Landmark,
    name: Optional[str] = None,
    symbol: Optional[str] = None,
    image_type: str = DEFAULT_IMAGE_TYPE,
) -> Landmark:
    """Create a line from ``A`` to ``B``; the default symbol is ``"A-B"``."""

    return Landmark(
        kind=LandmarkKind.LINE,
        symbol=symbol or f"{A.symbol}-{B.symbol}",
        components=(A, B),
        name=name,
        image_type=image_type,
        mapper=create_vector_from_points,
    )


def angle_between_lines(
    line_a: Landmark,
    line_b: Landmark,
    name: Optional[str] = None,
    symbol: Optional[str] = None,
    unit: str = "degree",
    image_type: str = DEFAULT_IMAGE_TYPE,
) -> Landmark:
    """Create an angle between two lines.

    When the lines share their first or their last point the default symbol
    spells the distinct points (``S-N`` and ``N-A`` give ``SNA``); otherwise it
    is the two line symbols joined by a comma.
    """

    return Landmark(
        kind=LandmarkKind.ANGLE,
        symbol=symbol or _symbol_for_angle(line_a, line_b),
        components=(line_a, line_b),
        name=name,
        unit=unit,
        image_type=image_type,
        mapper=create_angle_from_vectors,
        calculator=_angle_value(unit),
    )


def angle_between_points(
    A: Landmark,
    B: Landmark,
    C: Landmark,
    name: Optional[str] = None,
    unit: str = "degree",
) -> Landmark:
    """Create the angle at vertex ``B`` between ``B-A`` and ``B-C``."""

    return angle_between_lines(line(B, A), line(B, C), name, None, unit)


def distance(
    A: Landmark,
    to_line: Landmark,
    name: Optional[str] = None,
    symbol: Optional[str] = None,
    unit: str = "mm",
    image_type: str = DEFAULT_IMAGE_TYPE,
) -> Landmark:
    return Landmark(
        kind=LandmarkKind.DISTANCE,
        symbol=symbol or f"{A.symbol}-{to_line.symbol}",
        components=(A, to_line),
        name=name,
        unit=unit,
        image_type=image_type,
        mapper=lambda a, vector: create_perpendicular(vector, a),
        calculator=_segment_value,
    )


def angular_sum(
    components: Sequence[Landmark],
    name: str,
    symbol: Optional[str] = None,
    image_type: str = DEFAULT_IMAGE_TYPE,
) -> Landmark:
    angles = tuple(components)
    return Landmark(
        kind=LandmarkKind.SUM,
        symbol=symbol or "+".join(c.symbol for c in angles),
        components=angles,
        name=name,
        unit=angles[0].unit,
        image_type=image_type,
        calculator=_sum_value,
    )


def flip_vector(vector: Landmark) -> Landmark:
    A, B = vector.components
    return line(B, A)


@overload
def reuse_for_image_type(image_type: str) -> Callable[[Landmark], Landmark]: ...


@overload
def reuse_for_image_type(image_type: str, landmark: Landmark) -> Landmark: ...


def reuse_for_image_type(
    image_type: str, landmark: Optional[Landmark] = None
) -> Union[Landmark, Callable[[Landmark], Landmark]]:
    """Project ``landmark`` onto another image type.

    The returned tree has the same shape, symbols, names and behaviour as the
    source; only ``image_type`` differs on every node.  Sub-landmarks shared
    inside the source stay shared in the copy.  Called without a landmark the
    function returns the transformer itself.
    """

    if landmark is None:
        return lambda target: reuse_for_image_type(image_type, target)

    projected: Dict[int, Landmark] = {}

    def project(node: Landmark) -> Landmark:
        cached = projected.get(id(node))
        if cached is not None:
            return cached
        result = replace(
            node,
            image_type=image_type,
            components=tuple(project(c) for c in node.components),
        )
        projected[id(node)] = result
        return result

    return project(landmark)


def is_point(landmark: object) -> bool:
    return isinstance(landmark, Landmark) and landmark.kind is LandmarkKind.POINT


def is_line(landmark: object) -> bool:
    return isinstance(landmark, Landmark) and landmark.kind is LandmarkKind.LINE


def is_angle(landmark: object) -> bool:
    return isinstance(landmark, Landmark) and landmark.kind is LandmarkKind.ANGLE


def is_step_automatic(step: Landmark) -> bool:
    """A step is automatic when it can be mapped from its components."""

    return step.is_mappable


def is_step_manual(step: Landmark) -> bool:
    return not is_step_automatic(step)


def is_step_computable(step: Landmark) -> bool:
    return step.is_calculable


__all__ = [
    "CalculateLandmark",
    "CalculationInput",
    "DEFAULT_IMAGE_TYPE",
    "IMAGE_TYPES",
    "Landmark",
    "LandmarkKind",
    "MapLandmark",
    "angle_between_lines",
    "angle_between_points",
    "angular_sum",
    "distance",
    "flip_vector",
    "is_angle",
    "is_line",
    "is_point",
    "is_step_automatic",
    "is_step_computable",
    "is_step_manual",
    "line",
    "point",
    "reuse_for_image_type",
]
