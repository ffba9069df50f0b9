"""
Crisis Game Setup - Creates initial game state.

This module handles:
- Initial stats and round counters
- The opening crisis
- Seating the human and simulated participants
- Picking the opposition seat

Restarting a game calls back in here, so a restart is identical
to a fresh game.
"""

from __future__ import annotations
import random
import uuid
from typing import TYPE_CHECKING

from ...engine_core.state import GameState, GameMode, Participant, RoundPhase
from ...engine_core.stats import StatVector
from .spec import create_crisis_spec

if TYPE_CHECKING:
    from ...spec_schema import ScenarioSpec


HUMAN_PARTICIPANT_ID = "human"

SIMULATED_ROSTER: list[tuple[str, str]] = [
    ("Minister Aldana", "bg-emerald-500"),
    ("Minister Brandt", "bg-amber-500"),
    ("Minister Chen", "bg-rose-500"),
    ("Minister Duval", "bg-cyan-500"),
    ("Minister Eriksen", "bg-violet-500"),
]


def setup_crisis_game(
    mode: GameMode = GameMode.SINGLE,
    rng: random.Random | None = None,
    spec: ScenarioSpec | None = None,
    game_id: str | None = None,
    human_name: str = "You",
) -> GameState:
    """
    Set up a new crisis game.

    Args:
        mode: Single-player or multiplayer
        rng: Random source for the opposition seat
        spec: Scenario spec (creates default if not provided)
        game_id: Keep an existing ID across restarts
        human_name: Display name for the human participant

    Returns:
        Initial GameState in AWAITING_VOTE at round 1
    """
    game_spec = spec or create_crisis_spec()
    rng = rng or random.Random()

    participants: tuple[Participant, ...] = ()
    if mode == GameMode.MULTIPLAYER:
        participants = _create_participants(
            game_spec.simulated_participants, human_name, rng
        )

    return GameState(
        game_id=game_id or str(uuid.uuid4()),
        spec_id=game_spec.scenario_id,
        mode=mode,
        crisis=game_spec.opening_crisis,
        stats=StatVector.from_dict(game_spec.initial_stats),
        phase=RoundPhase.AWAITING_VOTE,
        round_number=1,
        time_left=game_spec.round_seconds,
        max_rounds=game_spec.max_rounds,
        participants=participants,
        diversion=False,
    )


def _create_participants(
    num_simulated: int, human_name: str, rng: random.Random
) -> tuple[Participant, ...]:
    """Seat the human first, then the simulated participants."""
    seats = [(HUMAN_PARTICIPANT_ID, human_name, "bg-blue-500", True)]
    for i in range(num_simulated):
        name, avatar = SIMULATED_ROSTER[i % len(SIMULATED_ROSTER)]
        if i >= len(SIMULATED_ROSTER):
            name = f"{name} {i // len(SIMULATED_ROSTER) + 1}"
        seats.append((f"sim_{i + 1}", name, avatar, False))

    opposition_idx = rng.randrange(len(seats))
    return tuple(
        Participant(
            participant_id=pid,
            name=name,
            avatar=avatar,
            is_human=is_human,
            is_opposition=(i == opposition_idx),
        )
        for i, (pid, name, avatar, is_human) in enumerate(seats)
    )
