"""
Game Loop - Drives a whole game without a real clock.

The loop, per round:
1. Ask the human's policy for an action (unless idle)
2. Submit it
3. Tick until the round expires
4. Record what happened

Used by the CLI's simulate command and by end-to-end tests.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.action_generator import legal_actions

if TYPE_CHECKING:
    from ..engine_core import RoundEngine, Outcome
    from ..bots import ParticipantPolicy


@dataclass
class RoundResult:
    """What happened in one round."""
    round_number: int
    crisis_title: str
    human_vote: str | None
    stats_after_vote: dict[str, int]
    stats_after_round: dict[str, int]
    simulated_votes: dict[str, str | None] = field(default_factory=dict)
    diversion: bool = False


@dataclass
class GameReport:
    """Summary of a finished game."""
    game_id: str
    outcome: Outcome
    final_stats: dict[str, int]
    rounds: list[RoundResult] = field(default_factory=list)

    @property
    def rounds_played(self) -> int:
        return len(self.rounds)


class GameLoop:
    """
    Plays an engine to completion.

    Usage:
        loop = GameLoop(engine, policy=RandomPolicy(seed=1))
        report = loop.run()
        print(report.outcome.label)

    Pass policy=None to let every round expire without a vote.
    """

    def __init__(
        self,
        engine: RoundEngine,
        policy: ParticipantPolicy | None = None,
        diversion: bool = False,
    ):
        self.engine = engine
        self.policy = policy
        self.diversion = diversion

    def play_round(self) -> RoundResult:
        """Vote (if a policy is set), then tick until the round ends."""
        state = self.engine.state
        round_number = state.round_number
        crisis_title = state.crisis.title

        if self.diversion and state.is_multiplayer:
            self.engine.set_diversion_mode(True)

        human_vote = None
        if self.policy is not None:
            choices = legal_actions(self.engine.spec, self.engine.state)
            if choices:
                decision = self.policy.select_action(
                    self.engine.state, self.engine.spec, choices
                )
                if self.engine.submit_action(decision.action_id).accepted:
                    human_vote = decision.action_id

        voted = self.engine.state
        simulated_votes = {
            p.participant_id: p.vote for p in voted.participants if not p.is_human
        }

        while self.engine.is_active and self.engine.state.round_number == round_number:
            self.engine.tick()

        return RoundResult(
            round_number=round_number,
            crisis_title=crisis_title,
            human_vote=human_vote,
            stats_after_vote=voted.stats.as_dict(),
            stats_after_round=self.engine.state.stats.as_dict(),
            simulated_votes=simulated_votes,
            diversion=voted.diversion,
        )

    def run(self) -> GameReport:
        """Play every remaining round and return the report."""
        rounds = []
        while self.engine.is_active:
            rounds.append(self.play_round())

        state = self.engine.state
        return GameReport(
            game_id=state.game_id,
            outcome=state.outcome,
            final_stats=state.stats.as_dict(),
            rounds=rounds,
        )
