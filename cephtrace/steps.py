"""Flatten landmark graphs into dependency-ordered evaluation steps."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Sequence, Union

from .config import get_engine_config
from .landmarks import Landmark
from .logging_utils import debug_log_call

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .analyses import Analysis

logger = logging.getLogger(__name__)

StepEquality = Callable[[Landmark, Landmark], bool]


def are_equal_symbols(l1: Landmark, l2: Landmark) -> bool:
    return l1.symbol == l2.symbol


def are_equal_steps(l1: Landmark, l2: Landmark) -> bool:
    """Structural equality of two landmarks.

    Landmarks with the same symbol are equal.  Otherwise they must be of the
    same kind, be composite, and have components that match one another as an
    unordered collection under this same equality.
    """

    if l1.symbol == l2.symbol:
        return True
    if l1.kind is not l2.kind:
        return False
    if len(l1.components) == 0:
        return False
    if len(l1.components) != len(l2.components):
        return False
    return not _symmetric_difference(l1.components, l2.components, are_equal_steps)


def _symmetric_difference(
    left: Sequence[Landmark], right: Sequence[Landmark], equal: StepEquality
) -> List[Landmark]:
    diff = [a for a in left if not any(equal(a, b) for b in right)]
    diff.extend(b for b in right if not any(equal(b, a) for a in left))
    return diff


_STRATEGIES = {
    "structural": are_equal_steps,
    "symbol": are_equal_symbols,
}


def resolve_strategy(strategy: Union[str, StepEquality, None] = None) -> StepEquality:
    if strategy is None:
        strategy = get_engine_config().dedupe_strategy
    if callable(strategy):
        return strategy
    try:
        return _STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"unknown dedupe strategy {strategy!r}; expected one of {sorted(_STRATEGIES)}"
        ) from None


def _unique(steps: Iterable[Landmark], equal: StepEquality) -> List[Landmark]:
    unique: List[Landmark] = []
    for step in steps:
        if not any(equal(kept, step) for kept in unique):
            unique.append(step)
    return unique


def _collect(landmarks: Iterable[Optional[Landmark]], equal: StepEquality) -> List[Landmark]:
    flat: List[Landmark] = []
    for landmark in landmarks:
        if landmark is None:
            logger.warning(
                "Skipping unexpected value while extracting steps: expected a Landmark, got %r",
                landmark,
            )
            continue
        flat.extend(_collect(landmark.components, equal))
        flat.append(landmark)
    return _unique(flat, equal)


@debug_log_call(logger)
def extract_steps(
    landmarks: Iterable[Optional[Landmark]],
    strategy: Union[str, StepEquality, None] = None,
) -> List[Landmark]:
    """Return the deduplicated, dependency-ordered steps for ``landmarks``.

    Components are visited depth first and always precede the landmark that
    uses them.  Duplicates are dropped keeping their first occurrence, using
    structural equality by default or symbol equality when
    ``strategy='symbol'``.
    """

    equal = resolve_strategy(strategy)
    steps = _collect(landmarks, equal)
    logger.debug("Extracted %d step(s)", len(steps))
    return steps


def get_steps_for_analysis(
    analysis: "Analysis",
    strategy: Union[str, StepEquality, None] = None,
) -> List[Landmark]:
    return extract_steps([c.landmark for c in analysis.components], strategy)


__all__ = [
    "StepEquality",
    "are_equal_steps",
    "are_equal_symbols",
    "extract_steps",
    "get_steps_for_analysis",
    "resolve_strategy",
]
