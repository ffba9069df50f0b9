"""
Tests for the reducer (round lifecycle).

Tests:
- Start / restart
- Action submission and the voting lock
- Tick countdown and round advance
- Game over after the last round
- Invariants across a whole game
"""

import random

import pytest

from ..engine_core import (
    Command,
    CommandType,
    GameMode,
    Reducer,
    RejectReason,
    RoundPhase,
    apply_command,
)
from ..games.crisis.catalog import CRISES, ECONOMIC_DOWNTURN


def _tick(reducer, state, times):
    result = None
    for _ in range(times):
        result = reducer.apply(state, Command.tick())
        state = result.new_state
    return state, result


class TestStartGame:
    """Tests for game start and restart."""

    def test_initial_state(self, single_state):
        """A new game starts at round 1 with the opening crisis."""
        assert single_state.stats.as_dict() == {
            "economy": 60,
            "security": 80,
            "diplomacy": 20,
            "social": 50,
        }
        assert single_state.round_number == 1
        assert single_state.time_left == 60
        assert single_state.crisis == ECONOMIC_DOWNTURN
        assert single_state.phase == RoundPhase.AWAITING_VOTE
        assert not single_state.voting_locked
        assert single_state.outcome is None

    def test_restart_resets_everything(self, reducer, single_state):
        """Restarting mid-game is identical to a fresh game."""
        state = reducer.apply(single_state, Command.submit("security")).new_state
        state, _ = _tick(reducer, state, 130)
        assert state.round_number == 3

        result = reducer.apply(state, Command.start_game())

        assert result.accepted
        restarted = result.new_state
        assert restarted.stats == single_state.stats
        assert restarted.round_number == 1
        assert restarted.time_left == 60
        assert restarted.crisis == ECONOMIC_DOWNTURN
        assert restarted.phase == RoundPhase.AWAITING_VOTE
        assert restarted.action_history == ()
        assert restarted.game_id == single_state.game_id

    def test_restart_after_game_over(self, reducer, single_state):
        state, _ = _tick(reducer, single_state, 300)
        assert state.is_over

        restarted = reducer.apply(state, Command.start_game()).new_state
        assert not restarted.is_over
        assert restarted.outcome is None

    def test_restart_clears_diversion(self, reducer, multiplayer_state):
        state = reducer.apply(multiplayer_state, Command.diversion(True)).new_state
        assert state.diversion

        restarted = reducer.apply(state, Command.start_game()).new_state
        assert not restarted.diversion
        assert restarted.mode == GameMode.MULTIPLAYER


class TestSubmitAction:
    """Tests for the human's submission."""

    def test_submit_applies_effect(self, reducer, single_state):
        result = reducer.apply(single_state, Command.submit("economy"))

        assert result.accepted
        assert result.new_state.stats.economy == 75
        assert result.new_state.stats.social == 45
        assert result.new_state.phase == RoundPhase.RESOLVED
        assert result.new_state.voting_locked

    @pytest.mark.parametrize(
        "action_id, expected",
        [
            ("economy", {"economy": 75, "security": 80, "diplomacy": 20, "social": 45}),
            ("security", {"economy": 55, "security": 100, "diplomacy": 20, "social": 50}),
            ("diplomacy", {"economy": 60, "security": 75, "diplomacy": 38, "social": 50}),
            ("social", {"economy": 55, "security": 80, "diplomacy": 20, "social": 70}),
        ],
    )
    def test_catalog_effects(self, reducer, single_state, action_id, expected):
        result = reducer.apply(single_state, Command.submit(action_id))
        assert result.new_state.stats.as_dict() == expected

    def test_second_submission_is_noop(self, reducer, single_state):
        """Only one submission counts per round."""
        first = reducer.apply(single_state, Command.submit("economy")).new_state
        second = reducer.apply(first, Command.submit("social"))

        assert not second.accepted
        assert second.reason == RejectReason.VOTING_LOCKED
        assert second.new_state is first

    def test_unknown_action_rejected(self, reducer, single_state):
        result = reducer.apply(single_state, Command.submit("bribery"))

        assert not result.accepted
        assert result.reason == RejectReason.UNKNOWN_ACTION
        assert not result.new_state.voting_locked

    def test_submission_recorded_in_history(self, reducer, single_state):
        state = reducer.apply(single_state, Command.submit("economy")).new_state
        assert len(state.action_history) == 1
        assert state.action_history[0].command_type == CommandType.SUBMIT_ACTION

    def test_submission_after_game_over_rejected(self, reducer, single_state):
        state, _ = _tick(reducer, single_state, 300)
        result = reducer.apply(state, Command.submit("economy"))

        assert not result.accepted
        assert result.reason == RejectReason.GAME_OVER
        assert result.new_state.stats == state.stats

    def test_submission_does_not_touch_timer(self, reducer, single_state):
        state, _ = _tick(reducer, single_state, 10)
        state = reducer.apply(state, Command.submit("economy")).new_state
        assert state.time_left == 50
        assert state.round_number == 1


class TestTick:
    """Tests for the countdown."""

    def test_tick_decrements(self, reducer, single_state):
        result = reducer.apply(single_state, Command.tick())
        assert result.accepted
        assert result.new_state.time_left == 59
        assert not result.round_advanced

    def test_round_advances_at_zero(self, reducer, single_state):
        state, result = _tick(reducer, single_state, 60)

        assert result.round_advanced
        assert state.round_number == 2
        assert state.time_left == 60
        assert state.phase == RoundPhase.AWAITING_VOTE
        assert state.crisis in CRISES

    def test_voting_unlocks_on_advance(self, reducer, single_state):
        state = reducer.apply(single_state, Command.submit("economy")).new_state
        assert state.voting_locked

        state, _ = _tick(reducer, state, 60)
        assert not state.voting_locked
        assert reducer.apply(state, Command.submit("social")).accepted

    def test_tick_is_not_idempotent_per_round(self, reducer, single_state):
        """Each tick is one unit; a round needs exactly round_seconds ticks."""
        state, result = _tick(reducer, single_state, 59)
        assert state.round_number == 1
        assert state.time_left == 1
        assert not result.round_advanced

    def test_ticks_not_recorded_in_history(self, reducer, single_state):
        state, _ = _tick(reducer, single_state, 5)
        assert state.action_history == ()


class TestScenarioA:
    """Submit economy in round 1, then let the round expire."""

    def test_economy_then_expire(self, reducer, single_state):
        state = reducer.apply(single_state, Command.submit("economy")).new_state
        assert state.stats.economy == 75
        assert state.stats.social == 45

        state, result = _tick(reducer, state, 60)

        assert result.round_advanced
        assert state.round_number == 2
        assert state.stats.as_dict() == {
            "economy": 65,
            "security": 75,
            "diplomacy": 15,
            "social": 35,
        }
        assert state.crisis in CRISES
        assert not state.voting_locked


class TestScenarioB:
    """Five idle rounds: decay only, then game over."""

    def test_idle_game(self, reducer, single_state):
        state = single_state
        history = [state.stats]
        for expected_round in range(2, 6):
            state, result = _tick(reducer, state, 60)
            assert result.round_advanced
            assert state.round_number == expected_round
            history.append(state.stats)

        assert state.stats.as_dict() == {
            "economy": 20,
            "security": 60,
            "diplomacy": 0,
            "social": 10,
        }
        for before, after in zip(history, history[1:]):
            for name, value in after.as_dict().items():
                assert value <= before.as_dict()[name]

        # Round 5 expiry ends the game without decay
        state, result = _tick(reducer, state, 60)
        assert result.game_over
        assert not result.round_advanced
        assert state.is_over
        assert state.round_number == 5
        assert state.time_left == 0
        assert state.stats == history[-1]
        assert state.outcome.tier == "collapse"
        assert state.outcome.average == 22.5

    def test_no_sixth_round(self, reducer, single_state):
        state, _ = _tick(reducer, single_state, 300)
        assert state.is_over

        result = reducer.apply(state, Command.tick())
        assert not result.accepted
        assert result.reason == RejectReason.GAME_OVER
        assert result.new_state.round_number == 5


class TestInvariants:
    """Properties that hold through any sequence of commands."""

    def test_random_play_keeps_invariants(self, crisis_spec):
        rng = random.Random(99)
        reducer = Reducer(spec=crisis_spec, rng=rng)
        from ..games.crisis.setup import setup_crisis_game
        state = setup_crisis_game(mode=GameMode.MULTIPLAYER, rng=rng, spec=crisis_spec)

        for _ in range(1000):
            roll = rng.random()
            if roll < 0.05:
                command = Command.submit(rng.choice(crisis_spec.action_ids))
            elif roll < 0.07:
                command = Command.diversion(rng.random() < 0.5)
            else:
                command = Command.tick()
            result = reducer.apply(state, command)
            new_state = result.new_state

            for value in new_state.stats.as_dict().values():
                assert 0 <= value <= 100
            assert 1 <= new_state.round_number <= 5
            assert new_state.round_number >= state.round_number
            assert new_state.voting_locked == (new_state.phase != RoundPhase.AWAITING_VOTE)
            if state.is_over:
                assert new_state is state
            state = new_state

        assert state.is_over

    def test_apply_command_helper(self, crisis_spec, single_state):
        result = apply_command(crisis_spec, single_state, Command.submit("diplomacy"))
        assert result.accepted
        assert result.new_state.stats.diplomacy == 38

    def test_seeded_games_are_reproducible(self, crisis_spec):
        from ..games.crisis.setup import setup_crisis_game

        def play(seed):
            rng = random.Random(seed)
            reducer = Reducer(spec=crisis_spec, rng=rng)
            state = setup_crisis_game(mode=GameMode.MULTIPLAYER, rng=rng, spec=crisis_spec, game_id="g")
            crises = []
            for _ in range(4):
                state = reducer.apply(state, Command.submit("social")).new_state
                state, _ = _tick(reducer, state, 60)
                crises.append(state.crisis.title)
            return crises, state.stats

        assert play(5) == play(5)
