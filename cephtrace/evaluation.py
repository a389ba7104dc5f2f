"""Resolve landmarks to geometric objects and numeric values.

Two modes share the same definitions:

* :func:`try_map` / :func:`try_calculate` resolve a single landmark on demand
  by recursing into its components.
* :func:`evaluate` walks a dependency-ordered step list (see
  :func:`cephtrace.steps.extract_steps`) exactly once.  A step whose
  components are not all resolved is left out and reported in
  :attr:`Evaluation.unresolved`; evaluation never raises because of missing
  input.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .config import get_engine_config
from .geometry import GeoObject
from .landmarks import CalculationInput, Landmark
from .logging_utils import debug_log_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnresolvedStep:
    """A step that could not be mapped because some components are missing."""

    symbol: str
    missing: Tuple[str, ...]

    def __str__(self) -> str:
        return (
            f"every component must be mapped in order to map {self.symbol}; "
            f"missing: {', '.join(self.missing)}"
        )


@dataclass
class Evaluation:
    objects: Dict[str, GeoObject] = field(default_factory=dict)
    values: Dict[str, float] = field(default_factory=dict)
    unresolved: List[UnresolvedStep] = field(default_factory=list)

    def is_resolved(self, symbol: str) -> bool:
        return symbol in self.objects or symbol in self.values

    def value_of(self, symbol: str) -> Optional[float]:
        return self.values.get(symbol)

    def object_of(self, symbol: str) -> Optional[GeoObject]:
        return self.objects.get(symbol)


def try_map(landmark: Landmark, manual_objects: Mapping[str, Optional[GeoObject]]) -> Optional[GeoObject]:
    """Return the geometric object for ``landmark`` or ``None`` when it cannot be mapped."""

    manual = manual_objects.get(landmark.symbol)
    if manual is not None:
        return manual
    if not landmark.is_mappable:
        return None
    mapped = [try_map(c, manual_objects) for c in landmark.components]
    if any(obj is None for obj in mapped):
        return None
    return landmark.map(*mapped)


def try_calculate(
    landmark: Landmark,
    manual_objects: Mapping[str, Optional[GeoObject]],
    values: Mapping[str, Optional[float]],
) -> Optional[float]:
    """Return the numeric value of ``landmark`` or ``None`` when it cannot be calculated."""

    manual = values.get(landmark.symbol)
    if manual is not None:
        return manual
    if not landmark.is_calculable:
        return None
    bundle = CalculationInput(
        component_values=tuple(try_calculate(c, manual_objects, values) for c in landmark.components),
        component_objects=tuple(try_map(c, manual_objects) for c in landmark.components),
        self_object=try_map(landmark, manual_objects),
    )
    return landmark.calculate(bundle)


@debug_log_call(logger, log_result=False)
def evaluate(
    steps: Sequence[Landmark],
    manual_landmarks: Mapping[str, GeoObject],
    manual_values: Optional[Mapping[str, float]] = None,
) -> Evaluation:
    """Map and calculate every step in a single pass.

    ``steps`` must be topologically sorted: a step is only resolved when all
    of its components were resolved by earlier steps or are present in
    ``manual_landmarks``.  Values in ``manual_values`` take precedence over
    calculated ones.
    """

    log_unresolved = get_engine_config().log_unresolved_steps
    objects: Dict[str, GeoObject] = dict(manual_landmarks)
    values: Dict[str, float] = dict(manual_values or {})
    unresolved: List[UnresolvedStep] = []

    for step in steps:
        missing = tuple(c.symbol for c in step.components if c.symbol not in objects)
        if missing:
            diagnostic = UnresolvedStep(step.symbol, missing)
            unresolved.append(diagnostic)
            if log_unresolved:
                logger.debug("Unresolved step: %s", diagnostic)
            continue

        mapped = tuple(objects[c.symbol] for c in step.components)
        calculated = tuple(values.get(c.symbol) for c in step.components)
        if step.is_mappable and step.symbol not in manual_landmarks:
            objects[step.symbol] = step.map(*mapped)
        if step.is_calculable and step.symbol not in values:
            value = step.calculate(
                CalculationInput(
                    component_values=calculated,
                    component_objects=mapped,
                    self_object=objects.get(step.symbol),
                )
            )
            if value is not None:
                values[step.symbol] = value

    logger.info(
        "Evaluated %d step(s): %d object(s), %d value(s), %d unresolved",
        len(steps),
        len(objects),
        len(values),
        len(unresolved),
    )
    return Evaluation(objects=objects, values=values, unresolved=unresolved)


__all__ = [
    "Evaluation",
    "UnresolvedStep",
    "evaluate",
    "try_calculate",
    "try_map",
]
