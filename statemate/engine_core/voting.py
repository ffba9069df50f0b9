"""
Vote Aggregator - Resolves one round's submission into a stat effect.

Single-player:
    The human's action is applied directly (multiplier 1).

Multiplayer:
    The human's vote is recorded, every simulated participant gets an
    independent vote from the policy, and only the human's effect is
    applied, scaled by -1 when diversion mode is on. Simulated votes are
    recorded for display and never touch the stats.

The aggregator only resolves. Phase checks (is voting open?) belong to
the reducer, which calls in here after they pass.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .state import GameState, RoundPhase

if TYPE_CHECKING:
    from ..bots import ParticipantPolicy
    from ..spec_schema import ScenarioSpec, ActionDefinition


@dataclass
class VoteAggregator:
    """Collects the round's votes and produces the single resolved effect."""
    spec: ScenarioSpec
    policy: ParticipantPolicy

    def resolve(self, state: GameState, action: ActionDefinition) -> tuple[GameState, list[str]]:
        """
        Lock voting and apply the human's action.

        Returns (new state, human-readable changes).
        """
        if not state.is_multiplayer:
            new_stats = state.stats.clamp_apply(action.effects, 1)
            new_state = state._copy_with(phase=RoundPhase.RESOLVED, stats=new_stats)
            return new_state, [f"Cabinet chose {action.name}"]

        changes = []
        participants = []
        for participant in state.participants:
            if participant.is_human:
                participants.append(participant.with_vote(action.action_id))
                continue
            decision = self.policy.select_action(state, self.spec, self.spec.action_ids)
            participants.append(participant.with_vote(decision.action_id))
            changes.append(f"{participant.name} voted {decision.action_id}")

        multiplier = self.effect_multiplier(state)
        new_stats = state.stats.clamp_apply(action.effects, multiplier)
        verb = "sabotaged" if multiplier < 0 else "chose"
        changes.insert(0, f"Human {verb} {action.name}")

        new_state = state._copy_with(
            phase=RoundPhase.RESOLVED,
            stats=new_stats,
            participants=tuple(participants),
        )
        return new_state, changes

    @staticmethod
    def effect_multiplier(state: GameState) -> int:
        return -1 if state.diversion else 1

    def tally(self, state: GameState) -> dict[str, int]:
        """Votes per action ID this round, in catalog order."""
        counts = {action_id: 0 for action_id in self.spec.action_ids}
        for participant in state.participants:
            if participant.vote in counts:
                counts[participant.vote] += 1
        return counts
