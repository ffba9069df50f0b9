"""
Command System - Commands, rejection reasons and results.

Commands represent everything presentation can ask of the engine:
1. Player commands (submit action, toggle diversion)
2. Clock commands (tick)
3. Lifecycle commands (start / restart game)

All state changes flow through commands. Out-of-contract commands are
not failures: they come back as rejected results carrying the unchanged
state and a reason code.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CommandType(Enum):
    """Types of commands the reducer accepts."""
    START_GAME = "start_game"
    SUBMIT_ACTION = "submit_action"
    SET_DIVERSION = "set_diversion"
    TICK = "tick"


class RejectReason(str, Enum):
    """Why a command was a no-op."""
    VOTING_LOCKED = "VOTING_LOCKED"
    GAME_OVER = "GAME_OVER"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    NOT_MULTIPLAYER = "NOT_MULTIPLAYER"


@dataclass(frozen=True)
class Command:
    """A complete command to be applied to the game state."""
    command_type: CommandType
    action_id: str | None = None
    enabled: bool | None = None

    @classmethod
    def start_game(cls) -> Command:
        return cls(command_type=CommandType.START_GAME)

    @classmethod
    def submit(cls, action_id: str) -> Command:
        """Factory for the human's action submission."""
        return cls(command_type=CommandType.SUBMIT_ACTION, action_id=action_id)

    @classmethod
    def diversion(cls, enabled: bool) -> Command:
        return cls(command_type=CommandType.SET_DIVERSION, enabled=enabled)

    @classmethod
    def tick(cls) -> Command:
        return cls(command_type=CommandType.TICK)


@dataclass
class CommandResult:
    """
    Result of applying a command.

    Contains:
    - Whether the command took effect
    - The resulting state (unchanged when rejected)
    - The rejection reason, if any
    - Human-readable changes for logs and UI
    """
    accepted: bool
    new_state: Any  # GameState
    reason: RejectReason | None = None
    message: str | None = None

    state_changes: list[str] = field(default_factory=list)

    # Lifecycle events raised by this command
    round_advanced: bool = False
    game_over: bool = False

    @classmethod
    def rejected(cls, state: Any, reason: RejectReason, message: str) -> CommandResult:
        """Create a no-op result."""
        return cls(accepted=False, new_state=state, reason=reason, message=message)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        round_advanced: bool = False,
        game_over: bool = False,
    ) -> CommandResult:
        """Create an accepted result with new state."""
        return cls(
            accepted=True,
            new_state=state,
            state_changes=changes or [],
            round_advanced=round_advanced,
            game_over=game_over,
        )
