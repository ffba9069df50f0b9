"""
Participant Policy - Interface for simulated participants' choices.

A ParticipantPolicy takes a game state and the actions on offer
and returns a vote. Simulated votes are display-only: they are
recorded on the participant but never touch the stats.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..spec_schema import ScenarioSpec


@dataclass
class VoteDecision:
    """A vote chosen by a policy."""
    action_id: str


class ParticipantPolicy(ABC):
    """
    Abstract base class for participant policies.

    A policy defines how a participant picks an action each round.
    """

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        spec: ScenarioSpec,
        legal_actions: list[str],
    ) -> VoteDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            spec: Scenario specification
            legal_actions: Action IDs to choose from

        Returns:
            VoteDecision with the selected action
        """

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(ParticipantPolicy):
    """
    Random policy - selects actions uniformly at random.

    Pass a shared rng to make every draw in a game reproducible
    from one seed.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def select_action(
        self,
        state: GameState,
        spec: ScenarioSpec,
        legal_actions: list[str],
    ) -> VoteDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return VoteDecision(action_id=self.rng.choice(legal_actions))


class FirstActionPolicy(ParticipantPolicy):
    """
    First-action policy - always selects the first legal action.

    Used for deterministic testing.
    """

    def select_action(
        self,
        state: GameState,
        spec: ScenarioSpec,
        legal_actions: list[str],
    ) -> VoteDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return VoteDecision(action_id=legal_actions[0])
