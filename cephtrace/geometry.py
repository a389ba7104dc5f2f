"""Planar geometry primitives consumed by landmark definitions.

Landmarks map to three kinds of geometric objects: points, directed segments
("vectors") and angles formed by two vectors.  The helpers below are pure and
never mutate their arguments.  Coordinates follow the image convention used by
radiograph viewers: ``x`` grows to the right and ``y`` grows downwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple, Union

import numpy as np

_EPS = 1e-12


@dataclass(frozen=True)
class GeoPoint:
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "point", "x": self.x, "y": self.y}


@dataclass(frozen=True)
class GeoVector:
    """Directed segment from ``(x1, y1)`` to ``(x2, y2)``."""

    x1: float
    y1: float
    x2: float
    y2: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "vector", "x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2}


@dataclass(frozen=True)
class GeoAngle:
    vectors: Tuple[GeoVector, GeoVector]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "angle", "vectors": [v.to_dict() for v in self.vectors]}


GeoObject = Union[GeoPoint, GeoVector, GeoAngle]


def _as_array(point: GeoPoint) -> np.ndarray:
    return np.array([point.x, point.y], dtype=float)


def _direction(vector: GeoVector) -> np.ndarray:
    return np.array([vector.x2 - vector.x1, vector.y2 - vector.y1], dtype=float)


def _infer_kind(data: Mapping[str, Any]) -> Any:
    kind = data.get("type")
    if kind is not None:
        return kind
    if "vectors" in data:
        return "angle"
    if "x1" in data:
        return "vector"
    if "x" in data:
        return "point"
    return None


def geo_object_from_dict(data: Mapping[str, Any]) -> GeoObject:
    """Rebuild a geometric object from its serialized ``dict`` form.

    The ``type`` tag is optional; untagged objects are recognised by their
    keys (``x``/``y``, ``x1``..``y2`` or ``vectors``).
    """

    kind = _infer_kind(data)
    if kind == "point":
        return GeoPoint(float(data["x"]), float(data["y"]))
    if kind == "vector":
        return GeoVector(float(data["x1"]), float(data["y1"]), float(data["x2"]), float(data["y2"]))
    if kind == "angle":
        vectors = data.get("vectors")
        if not isinstance(vectors, (list, tuple)) or len(vectors) != 2:
            raise ValueError("angle requires exactly two vectors")
        v1, v2 = (geo_object_from_dict(v) for v in vectors)
        if not isinstance(v1, GeoVector) or not isinstance(v2, GeoVector):
            raise ValueError("angle vectors must be of type 'vector'")
        return GeoAngle((v1, v2))
    raise ValueError(f"unknown geometric object type {kind!r}")


def create_vector_from_points(A: GeoPoint, B: GeoPoint) -> GeoVector:
    return GeoVector(A.x, A.y, B.x, B.y)


def create_angle_from_vectors(V1: GeoVector, V2: GeoVector) -> GeoAngle:
    return GeoAngle((V1, V2))


def get_vector_points(vector: GeoVector) -> Tuple[GeoPoint, GeoPoint]:
    return GeoPoint(vector.x1, vector.y1), GeoPoint(vector.x2, vector.y2)


def get_segment_length(vector: GeoVector) -> float:
    return float(np.linalg.norm(_direction(vector)))


def create_perpendicular(vector: GeoVector, point: GeoPoint) -> GeoVector:
    """Return the segment from ``point`` to its projection on the line through ``vector``.

    A collapsed ``vector`` has no direction, so the projection falls back to
    its start point.
    """

    start, _ = get_vector_points(vector)
    direction = _direction(vector)
    denom = float(np.dot(direction, direction))
    if denom <= _EPS:
        return create_vector_from_points(point, start)
    t = float(np.dot(_as_array(point) - _as_array(start), direction)) / denom
    foot = _as_array(start) + t * direction
    return GeoVector(point.x, point.y, float(foot[0]), float(foot[1]))


def calculate_angle(angle: GeoAngle) -> float:
    """Return the unsigned angle between the two vectors of ``angle`` in radians.

    The result lies in ``[0, pi]``; ``nan`` is returned when either vector
    has zero length.
    """

    d1 = _direction(angle.vectors[0])
    d2 = _direction(angle.vectors[1])
    n1 = float(np.linalg.norm(d1))
    n2 = float(np.linalg.norm(d2))
    if n1 <= _EPS or n2 <= _EPS:
        return math.nan
    cos_theta = float(np.dot(d1, d2)) / (n1 * n2)
    return float(np.arccos(np.clip(cos_theta, -1.0, 1.0)))


def radians_to_degrees(value: float) -> float:
    return float(np.degrees(value))


def is_behind(point: GeoPoint, vector: GeoVector) -> bool:
    """Return ``True`` when ``point`` lies on the posterior side of ``vector``.

    For a profile facing ``+x`` with ``y`` growing downwards, a point is
    "behind" a downward directed line (for example N to B) when it sits to
    the left of it.
    """

    start, _ = get_vector_points(vector)
    direction = _direction(vector)
    offset = _as_array(point) - _as_array(start)
    side = offset[0] * direction[1] - offset[1] * direction[0]
    return bool(side < 0)


__all__ = [
    "GeoAngle",
    "GeoObject",
    "GeoPoint",
    "GeoVector",
    "calculate_angle",
    "create_angle_from_vectors",
    "create_perpendicular",
    "create_vector_from_points",
    "geo_object_from_dict",
    "get_segment_length",
    "get_vector_points",
    "is_behind",
    "radians_to_degrees",
]
