"""
Reducer - The round lifecycle state machine.

The reducer is the single point of state transition.
All state changes must go through apply_command().

Lifecycle:
    AWAITING_VOTE --submit--> RESOLVED
    AWAITING_VOTE / RESOLVED --tick--> (time - 1)
    time reaches 0 --> ROUND_ADVANCING
    ROUND_ADVANCING --> AWAITING_VOTE (next round) | GAME_OVER (last round)
    any --start_game--> AWAITING_VOTE at round 1

Design principles:
- Pure given its random source: (state, command) -> CommandResult
- Out-of-contract commands are rejected no-ops, never exceptions
- The phase is the only arbiter of the tick/submission race
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random
from typing import TYPE_CHECKING

from .state import GameState, RoundPhase
from .command import Command, CommandType, CommandResult, RejectReason
from .voting import VoteAggregator
from .scoring import classify

if TYPE_CHECKING:
    from ..spec_schema import ScenarioSpec
    from ..bots import ParticipantPolicy

logger = logging.getLogger(__name__)

# Commands recorded in action_history. Ticks are not.
_LOGGED_COMMANDS = {CommandType.SUBMIT_ACTION, CommandType.SET_DIVERSION}


@dataclass
class Reducer:
    """
    Reducer applies commands to game state.

    Stateless apart from the injected random source, which feeds
    crisis draws and simulated participants' votes.
    """
    spec: ScenarioSpec
    rng: random.Random = field(default_factory=random.Random)
    policy: ParticipantPolicy | None = None

    def __post_init__(self):
        if self.policy is None:
            from ..bots import RandomPolicy
            self.policy = RandomPolicy(rng=self.rng)
        self.voting = VoteAggregator(spec=self.spec, policy=self.policy)

    def apply(self, state: GameState, command: Command) -> CommandResult:
        """
        Apply a command to the game state.

        Returns CommandResult with the new state, or the unchanged
        state and a reason when the command is a no-op.
        """
        handler = self._get_handler(command.command_type)
        result = handler(state, command)

        if not result.accepted:
            logger.debug(
                "Rejected %s in game %s: %s",
                command.command_type.value, state.game_id, result.reason.value,
            )
        elif command.command_type in _LOGGED_COMMANDS:
            result.new_state = result.new_state._copy_with(
                action_history=result.new_state.action_history + (command,)
            )
        return result

    def _get_handler(self, command_type: CommandType):
        """Get the handler function for a command type."""
        handlers = {
            CommandType.START_GAME: self._handle_start_game,
            CommandType.SUBMIT_ACTION: self._handle_submit_action,
            CommandType.SET_DIVERSION: self._handle_set_diversion,
            CommandType.TICK: self._handle_tick,
        }
        return handlers[command_type]

    def _handle_start_game(self, state: GameState, command: Command) -> CommandResult:
        """Reinitialize everything exactly as at game creation."""
        from ..games.crisis.setup import setup_crisis_game

        new_state = setup_crisis_game(
            mode=state.mode,
            rng=self.rng,
            spec=self.spec,
            game_id=state.game_id,
            human_name=state.human.name if state.human else "You",
        )
        logger.info("Game %s started (%s)", state.game_id, state.mode.value)
        return CommandResult.success_with_state(
            new_state,
            changes=[f"Round 1 started: {new_state.crisis.title}"],
        )

    def _handle_submit_action(self, state: GameState, command: Command) -> CommandResult:
        """Accept one submission per round, only while awaiting a vote."""
        if state.is_over:
            return CommandResult.rejected(state, RejectReason.GAME_OVER, "Game is over")
        if state.voting_locked:
            return CommandResult.rejected(
                state, RejectReason.VOTING_LOCKED, "A vote was already cast this round"
            )

        action = self.spec.get_action(command.action_id or "")
        if action is None:
            return CommandResult.rejected(
                state, RejectReason.UNKNOWN_ACTION, f"Unknown action: {command.action_id}"
            )

        new_state, changes = self.voting.resolve(state, action)
        return CommandResult.success_with_state(new_state, changes=changes)

    def _handle_set_diversion(self, state: GameState, command: Command) -> CommandResult:
        """Diversion can only be toggled in multiplayer, before the vote."""
        if not state.is_multiplayer:
            return CommandResult.rejected(
                state, RejectReason.NOT_MULTIPLAYER, "Diversion mode needs a multiplayer game"
            )
        if state.is_over:
            return CommandResult.rejected(state, RejectReason.GAME_OVER, "Game is over")
        if state.voting_locked:
            return CommandResult.rejected(
                state, RejectReason.VOTING_LOCKED, "Diversion is fixed once the vote is cast"
            )

        enabled = bool(command.enabled)
        new_state = state._copy_with(diversion=enabled)
        return CommandResult.success_with_state(
            new_state,
            changes=[f"Diversion mode {'on' if enabled else 'off'}"],
        )

    def _handle_tick(self, state: GameState, command: Command) -> CommandResult:
        """Count down one unit; on expiry advance the round."""
        if state.is_over:
            return CommandResult.rejected(state, RejectReason.GAME_OVER, "Game is over")

        time_left = max(0, state.time_left - 1)
        new_state = state._copy_with(time_left=time_left)
        if time_left > 0:
            return CommandResult.success_with_state(new_state)

        return self._advance_round(new_state._copy_with(phase=RoundPhase.ROUND_ADVANCING))

    def _advance_round(self, state: GameState) -> CommandResult:
        """
        Resolve the expired round.

        The last round ends the game with stats frozen. Any other round
        unlocks voting, clears votes, draws a crisis and applies decay.
        """
        if state.round_number >= state.max_rounds:
            outcome = classify(state.stats, self.spec.outcome_tiers)
            new_state = state._copy_with(
                phase=RoundPhase.GAME_OVER,
                time_left=0,
                outcome=outcome,
            )
            logger.info(
                "Game %s over after round %d: %s (average %.1f)",
                state.game_id, state.round_number, outcome.tier, outcome.average,
            )
            return CommandResult.success_with_state(
                new_state,
                changes=[f"Game over: {outcome.label}"],
                game_over=True,
            )

        crisis = self.rng.choice(self.spec.crises)
        new_state = state.clear_votes()._copy_with(
            phase=RoundPhase.AWAITING_VOTE,
            round_number=state.round_number + 1,
            time_left=self.spec.round_seconds,
            crisis=crisis,
            stats=state.stats.decay(self.spec.decay),
        )
        logger.info(
            "Game %s advanced to round %d: %s",
            state.game_id, new_state.round_number, crisis.title,
        )
        return CommandResult.success_with_state(
            new_state,
            changes=[
                f"Round {new_state.round_number} started: {crisis.title}",
                "Decay applied",
            ],
            round_advanced=True,
        )


def apply_command(
    spec: ScenarioSpec,
    state: GameState,
    command: Command,
    rng: random.Random | None = None,
) -> CommandResult:
    """
    Convenience function to apply a command.

    Creates a Reducer and applies the command.
    """
    reducer = Reducer(spec=spec, rng=rng or random.Random())
    return reducer.apply(state, command)
