"""
Game State - Immutable snapshot of one game at a point in time.

Design principles:
- Immutable: every transition returns a new GameState
- Observable: presentation subscribes to the latest value
- Serializable: plain values only, no live handles
- The voting lock is the lifecycle phase, never a separate flag
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TYPE_CHECKING

from .stats import StatVector

if TYPE_CHECKING:
    from ..spec_schema import CrisisDefinition
    from .scoring import Outcome


class GameMode(str, Enum):
    """Engine variant."""
    SINGLE = "single"
    MULTIPLAYER = "multiplayer"


class RoundPhase(Enum):
    """Round lifecycle phases."""
    AWAITING_VOTE = "awaiting_vote"
    RESOLVED = "resolved"  # Vote submitted, waiting for the timer
    ROUND_ADVANCING = "round_advancing"  # Transient, never observed by subscribers
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Participant:
    """
    A seat at the cabinet table (multiplayer only).

    The opposition flag is recorded at game start but does not
    affect vote resolution or scoring.
    """
    participant_id: str
    name: str
    avatar: str
    is_human: bool = False
    is_opposition: bool = False
    vote: str | None = None

    def with_vote(self, action_id: str | None) -> Participant:
        return replace(self, vote=action_id)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state.

    This is the canonical state the reducer operates on.
    All state changes go through the reducer.
    """
    game_id: str
    spec_id: str
    mode: GameMode
    crisis: CrisisDefinition
    stats: StatVector

    phase: RoundPhase = RoundPhase.AWAITING_VOTE
    round_number: int = 1
    time_left: int = 60
    max_rounds: int = 5

    participants: tuple[Participant, ...] = ()
    diversion: bool = False

    # Set once, on the transition into GAME_OVER
    outcome: Outcome | None = None

    # Accepted player commands, for replay and debugging
    action_history: tuple[Any, ...] = ()

    @property
    def voting_locked(self) -> bool:
        return self.phase != RoundPhase.AWAITING_VOTE

    @property
    def is_over(self) -> bool:
        return self.phase == RoundPhase.GAME_OVER

    @property
    def is_multiplayer(self) -> bool:
        return self.mode == GameMode.MULTIPLAYER

    @property
    def human(self) -> Participant | None:
        """The human-controlled participant, if any."""
        for p in self.participants:
            if p.is_human:
                return p
        return None

    @property
    def opposition(self) -> Participant | None:
        for p in self.participants:
            if p.is_opposition:
                return p
        return None

    def get_participant(self, participant_id: str) -> Participant | None:
        """Get participant by ID."""
        for p in self.participants:
            if p.participant_id == participant_id:
                return p
        return None

    def with_participants(self, participants: list[Participant]) -> GameState:
        return self._copy_with(participants=tuple(participants))

    def clear_votes(self) -> GameState:
        return self.with_participants([p.with_vote(None) for p in self.participants])

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
