"""Immutable snapshot of the environmental knobs that reach the simulation.

A new snapshot replaces the old one whenever a setting changes; growth
receives whichever snapshot is current at the start of a tick. The values are
collected and validated but not yet consumed by the growth rule.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .config import float_env

_LOGGER = logging.getLogger(__name__)

# Allowed (min, max) per setting; None means unbounded above.
_RANGES: Dict[str, Tuple[float, Any]] = {
    "sunlight": (0.0, 1.0),
    "gravity": (0.0, 20.0),
    "moisture": (0.0, 1.0),
    "nitrogen": (0.0, None),
    "potassium": (0.0, None),
    "phosphorus": (0.0, None),
}


@dataclass(frozen=True)
class Environment:
    """Environmental settings for one tick.

    Attributes:
        sunlight (float): Light level in [0, 1].
        gravity (float): Gravitational acceleration in [0, 20].
        moisture (float): Soil moisture in [0, 1].
        nitrogen (float): Nutrient level, non-negative.
        potassium (float): Nutrient level, non-negative.
        phosphorus (float): Nutrient level, non-negative.
    """

    sunlight: float = 1.0
    gravity: float = 9.8
    moisture: float = 1.0
    nitrogen: float = 1.0
    potassium: float = 1.0
    phosphorus: float = 1.0

    def __post_init__(self) -> None:
        for name, (lo, hi) in _RANGES.items():
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value}")
            if value < lo or (hi is not None and value > hi):
                bound = f"[{lo}, {hi}]" if hi is not None else f">= {lo}"
                raise ValueError(f"{name}={value} outside allowed range {bound}")
            object.__setattr__(self, name, value)

    def with_updates(self, **changes: float) -> "Environment":
        """Return a new snapshot with `changes` applied."""
        unknown = set(changes) - set(_RANGES)
        if unknown:
            raise ValueError(f"unknown environment settings: {sorted(unknown)}")
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> Dict[str, float]:
        return dataclasses.asdict(self)

    @classmethod
    def from_env(cls) -> "Environment":
        """Build a snapshot from ``SPROUT_<NAME>`` environment variables."""
        defaults = cls()
        values = {
            name: float_env(f"SPROUT_{name.upper()}", getattr(defaults, name))
            for name in _RANGES
        }
        _LOGGER.debug("Environment from env: %s", values)
        return cls(**values)
