"""Read and write tracing state in the WCeph v1 ``index.json`` shape.

Only the fields this engine consumes are handled: the image ``type``,
``tracing.manualLandmarks``, ``tracing.skippedSteps`` and
``analysis.activeId``.  Image data and archive packaging are left to the
host application.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .analyses import ANALYSES
from .geometry import GeoObject, geo_object_from_dict
from .landmarks import IMAGE_TYPES
from .session import TracingSession

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

# Analysis ids a version 1 document may reference.
KNOWN_ANALYSIS_IDS = frozenset(
    {
        "basic",
        "bjork",
        "common",
        "downs",
        "frontal_face_proportions",
        "panoramic_analysis",
        "ricketts_frontal",
        "ricketts_lateral",
        "soft_tissues_lateral",
        "soft_tissues_photo_frontal",
        "soft_tissues_photo_lateral",
        "steiner",
        "tweed",
    }
)


class TracingFormatError(ValueError):
    pass


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TracingFormatError(f"{where} must be an object, got {type(value).__name__}")
    return value


def _load_manual_landmarks(value: Any, where: str) -> Dict[str, GeoObject]:
    landmarks: Dict[str, GeoObject] = {}
    for symbol, raw in _require_mapping(value, where).items():
        try:
            landmarks[symbol] = geo_object_from_dict(_require_mapping(raw, f"{where}.{symbol}"))
        except (KeyError, TypeError, ValueError) as exc:
            raise TracingFormatError(f"{where}.{symbol}: {exc}") from exc
    return landmarks


def load_tracing(data: Mapping[str, Any], *, where: str = "image") -> TracingSession:
    """Build a :class:`TracingSession` from one ``data[imageId]`` entry."""

    entry = _require_mapping(data, where)
    image_type = entry.get("type")
    if image_type is not None and image_type not in IMAGE_TYPES:
        raise TracingFormatError(f"{where}.type: unknown image type {image_type!r}")

    tracing = _require_mapping(entry.get("tracing", {}), f"{where}.tracing")
    manual = _load_manual_landmarks(
        tracing.get("manualLandmarks", {}), f"{where}.tracing.manualLandmarks"
    )
    skipped = _require_mapping(tracing.get("skippedSteps", {}), f"{where}.tracing.skippedSteps")

    analysis = _require_mapping(entry.get("analysis", {}), f"{where}.analysis")
    analysis_id = analysis.get("activeId")
    if analysis_id is not None and not isinstance(analysis_id, str):
        raise TracingFormatError(f"{where}.analysis.activeId must be a string or null")
    if analysis_id is not None and analysis_id not in ANALYSES:
        if analysis_id not in KNOWN_ANALYSIS_IDS:
            raise TracingFormatError(f"{where}.analysis.activeId: unknown analysis {analysis_id!r}")
        logger.warning(
            "%s uses analysis %r which is not available; loading without an active analysis",
            where,
            analysis_id,
        )
        analysis_id = None
    session = TracingSession(
        analysis_id,
        image_type=image_type,
        manual_landmarks=manual,
        skipped_steps=[symbol for symbol, flag in skipped.items() if flag],
    )
    logger.info("Loaded %s with %d manual landmark(s)", where, len(manual))
    return session


def load_workspace(data: Mapping[str, Any]) -> Dict[str, TracingSession]:
    """Build one session per image of a whole ``index.json`` document."""

    document = _require_mapping(data, "document")
    version = document.get("version")
    if version != FORMAT_VERSION:
        raise TracingFormatError(f"unsupported format version {version!r}")
    images = _require_mapping(document.get("data", {}), "data")
    return {
        image_id: load_tracing(entry, where=f"data.{image_id}")
        for image_id, entry in images.items()
    }


def load_tracing_file(path: Union[str, Path]) -> Dict[str, TracingSession]:
    """Read ``path`` as either a full ``index.json`` document or a single image entry.

    A single entry is returned under the key ``"image"``.
    """

    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TracingFormatError(f"{path}: invalid JSON ({exc})") from exc
    if isinstance(data, Mapping) and "version" in data:
        return load_workspace(data)
    return {"image": load_tracing(data)}


def dump_tracing(session: TracingSession) -> Dict[str, Any]:
    return {
        "type": session.image_type,
        "tracing": {
            "manualLandmarks": {
                symbol: obj.to_dict() for symbol, obj in session.manual_landmarks.items()
            },
            "skippedSteps": {symbol: True for symbol in sorted(session.skipped_steps)},
        },
        "analysis": {"activeId": session.analysis_id},
    }


__all__ = [
    "FORMAT_VERSION",
    "KNOWN_ANALYSIS_IDS",
    "TracingFormatError",
    "dump_tracing",
    "load_tracing",
    "load_tracing_file",
    "load_workspace",
]
