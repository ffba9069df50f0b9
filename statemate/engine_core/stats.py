"""
Stat Vector - The four bounded governance metrics.

Every field lives in [0, 100]. The clamp happens on construction,
so no caller can ever observe an out-of-range value.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Mapping

from ..spec_schema.scenario_spec import STAT_NAMES

STAT_MIN = 0
STAT_MAX = 100

# Applied at every round transition, independent of any action
STANDARD_DECAY: dict[str, int] = {
    "economy": -10,
    "security": -5,
    "diplomacy": -5,
    "social": -10,
}


def clamp(value: int) -> int:
    return max(STAT_MIN, min(STAT_MAX, value))


@dataclass(frozen=True)
class StatVector:
    """Economy, security, diplomacy and social, each clamped to [0, 100]."""
    economy: int
    security: int
    diplomacy: int
    social: int

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, clamp(int(getattr(self, f.name))))

    @classmethod
    def from_dict(cls, values: Mapping[str, int]) -> StatVector:
        return cls(**{name: values[name] for name in STAT_NAMES})

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in STAT_NAMES}

    @property
    def total(self) -> int:
        return sum(self.as_dict().values())

    @property
    def average(self) -> float:
        return self.total / len(STAT_NAMES)

    def clamp_apply(self, deltas: Mapping[str, int], multiplier: int = 1) -> StatVector:
        """Return a new vector with delta * multiplier added per stat, then clamped."""
        values = self.as_dict()
        for name, delta in deltas.items():
            if name in values:
                values[name] += delta * multiplier
        return StatVector(**values)

    def decay(self, decay_map: Mapping[str, int] | None = None) -> StatVector:
        """Apply the per-round decay through the same clamp path."""
        return self.clamp_apply(STANDARD_DECAY if decay_map is None else decay_map, 1)
