"""Process-wide configuration for the tracing engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Literal

DedupeStrategyName = Literal["structural", "symbol"]


@dataclass
class EngineConfig:
    """Defaults used when callers do not pass explicit options.

    ``dedupe_strategy`` selects the equality used by step extraction,
    ``log_unresolved_steps`` controls the DEBUG record emitted for every step
    that could not be resolved, and ``default_image_type`` is the modality new
    landmark definitions and tracing sessions apply to.
    """

    dedupe_strategy: DedupeStrategyName = "structural"
    log_unresolved_steps: bool = True
    default_image_type: str = "ceph_lateral"


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    if config.dedupe_strategy not in ("structural", "symbol"):
        raise ValueError(f"unknown dedupe strategy {config.dedupe_strategy!r}")
    _ENGINE_CONFIG = copy.deepcopy(config)


__all__ = [
    "DedupeStrategyName",
    "EngineConfig",
    "get_engine_config",
    "set_engine_config",
]
