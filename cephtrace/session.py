"""Per-image tracing state.

A :class:`TracingSession` owns the manual overrides and skipped steps of one
image.  Nothing is cached: every query re-extracts steps and re-evaluates
from scratch, so callers serialize updates and re-query after each change.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Set

from .analyses import Analysis, get_analysis
from .config import get_engine_config
from .evaluation import Evaluation, evaluate
from .geometry import GeoObject
from .interpretation import CategorizedResult, index_results
from .landmarks import Landmark, is_step_manual
from .steps import extract_steps

logger = logging.getLogger(__name__)


class TracingSession:
    def __init__(
        self,
        analysis_id: Optional[str] = None,
        *,
        image_type: Optional[str] = None,
        manual_landmarks: Optional[Mapping[str, GeoObject]] = None,
        manual_values: Optional[Mapping[str, float]] = None,
        skipped_steps: Optional[Iterable[str]] = None,
    ) -> None:
        self.image_type = image_type or get_engine_config().default_image_type
        self.manual_landmarks: Dict[str, GeoObject] = dict(manual_landmarks or {})
        self.manual_values: Dict[str, float] = dict(manual_values or {})
        self.skipped_steps: Set[str] = set(skipped_steps or ())
        self.analysis: Optional[Analysis] = None
        if analysis_id is not None:
            self.set_analysis(analysis_id)

    @property
    def analysis_id(self) -> Optional[str]:
        return self.analysis.id if self.analysis is not None else None

    def set_analysis(self, analysis_id: Optional[str]) -> None:
        self.analysis = get_analysis(analysis_id) if analysis_id is not None else None
        logger.info("Active analysis set to %s", analysis_id)

    def set_manual_landmark(self, symbol: str, value: GeoObject) -> None:
        self.manual_landmarks[symbol] = value

    def remove_manual_landmark(self, symbol: str) -> None:
        self.manual_landmarks.pop(symbol, None)

    def set_manual_value(self, symbol: str, value: float) -> None:
        self.manual_values[symbol] = float(value)

    def remove_manual_value(self, symbol: str) -> None:
        self.manual_values.pop(symbol, None)

    def skip_step(self, symbol: str) -> None:
        self.skipped_steps.add(symbol)

    def unskip_step(self, symbol: str) -> None:
        self.skipped_steps.discard(symbol)

    def _landmarks(self) -> List[Landmark]:
        if self.analysis is None:
            return []
        return self.analysis.landmarks

    def steps(self, strategy: Optional[str] = None) -> List[Landmark]:
        """Ordered steps of the active analysis, deduplicated for display."""

        return extract_steps(self._landmarks(), strategy)

    def evaluate(self) -> Evaluation:
        # Every symbol a parent refers to needs its own step, so evaluation
        # deduplicates by symbol rather than structurally.
        steps = extract_steps(self._landmarks(), "symbol")
        return evaluate(steps, self.manual_landmarks, self.manual_values)

    def interpret(self, evaluation: Optional[Evaluation] = None) -> List[CategorizedResult]:
        if self.analysis is None:
            return []
        if evaluation is None:
            evaluation = self.evaluate()
        return self.analysis.interpret(evaluation.values)

    def index(self, evaluation: Optional[Evaluation] = None) -> Dict[str, CategorizedResult]:
        return index_results(self.interpret(evaluation))

    def pending_steps(self) -> List[Landmark]:
        """Points that still need to be placed by the user and were not skipped.

        Sums are neither mapped nor placed, they only add up other values, so
        they never count as pending.
        """

        return [
            step
            for step in self.steps()
            if is_step_manual(step)
            and not step.is_calculable
            and step.symbol not in self.manual_landmarks
            and step.symbol not in self.skipped_steps
        ]

    def next_step(self) -> Optional[Landmark]:
        pending = self.pending_steps()
        return pending[0] if pending else None

    def is_complete(self) -> bool:
        return self.next_step() is None

    def __repr__(self) -> str:
        return (
            f"TracingSession(analysis_id={self.analysis_id!r}, image_type={self.image_type!r}, "
            f"manual={len(self.manual_landmarks)}, skipped={len(self.skipped_steps)})"
        )


__all__ = ["TracingSession"]
