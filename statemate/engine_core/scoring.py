"""
Score Classifier - End-of-game outcome classification.

The final stat vector is averaged and mapped onto ordered,
non-overlapping bands. Bands are evaluated high to low and the
first match wins.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .stats import StatVector

if TYPE_CHECKING:
    from ..spec_schema import OutcomeTierDefinition


@dataclass(frozen=True)
class Outcome:
    """Classified result of a finished game."""
    tier: str
    label: str
    icon: str
    color: str
    average: float


def classify(stats: StatVector, tiers: list[OutcomeTierDefinition]) -> Outcome:
    """
    Classify final stats into an outcome tier.

    Args:
        stats: Final stat vector
        tiers: Outcome tiers, highest min_average first

    Returns:
        Outcome for the first tier whose threshold the average meets
    """
    if not tiers:
        raise ValueError("No outcome tiers defined")

    average = stats.average
    for tier in tiers:
        if average >= tier.min_average:
            return _to_outcome(tier, average)
    # Averages are never negative, so the last tier is the catch-all
    return _to_outcome(tiers[-1], average)


def _to_outcome(tier: OutcomeTierDefinition, average: float) -> Outcome:
    return Outcome(
        tier=tier.tier,
        label=tier.label,
        icon=tier.icon,
        color=tier.color,
        average=average,
    )
