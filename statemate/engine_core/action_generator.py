"""
Action Generator - Lists the actions a participant may pick right now.

Used by:
1. Policies to enumerate choices
2. UI to enable or disable action buttons
3. The CLI prompt
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .state import GameState

if TYPE_CHECKING:
    from ..spec_schema import ScenarioSpec


def legal_actions(spec: ScenarioSpec, state: GameState) -> list[str]:
    """
    Action IDs that a submission would accept in this state.

    Empty once voting is locked or the game is over.
    """
    if state.voting_locked:
        return []
    return spec.action_ids
