"""
Engine Core - Deterministic round simulation.

The engine is the runtime that:
1. Loads a ScenarioSpec
2. Manages GameState
3. Lists legal actions
4. Applies commands via the reducer
5. Resolves votes and classifies the final outcome
"""

from .stats import StatVector, STANDARD_DECAY
from .state import GameState, GameMode, RoundPhase, Participant
from .command import Command, CommandType, CommandResult, RejectReason
from .reducer import Reducer, apply_command
from .voting import VoteAggregator
from .scoring import Outcome, classify
from .action_generator import legal_actions
from .engine import RoundEngine, MultiplayerRoundEngine

__all__ = [
    "StatVector",
    "STANDARD_DECAY",
    "GameState",
    "GameMode",
    "RoundPhase",
    "Participant",
    "Command",
    "CommandType",
    "CommandResult",
    "RejectReason",
    "Reducer",
    "apply_command",
    "VoteAggregator",
    "Outcome",
    "classify",
    "legal_actions",
    "RoundEngine",
    "MultiplayerRoundEngine",
]
