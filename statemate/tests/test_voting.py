"""
Tests for multiplayer vote resolution.

Tests:
- Seating and the opposition flag
- Simulated votes drawn from the catalog
- Only the human's effect reaches the stats
- Diversion mode inverts the human's effect
- Vote tally
"""

from dataclasses import replace

import pytest

from ..engine_core import Command, RejectReason, VoteAggregator
from ..bots import FirstActionPolicy


class TestSeating:
    """Tests for multiplayer setup."""

    def test_human_plus_three(self, multiplayer_state):
        participants = multiplayer_state.participants
        assert len(participants) == 4
        assert participants[0].is_human
        assert participants[0].participant_id == "human"
        assert [p.is_human for p in participants[1:]] == [False, False, False]

    def test_exactly_one_opposition(self, multiplayer_state):
        flagged = [p for p in multiplayer_state.participants if p.is_opposition]
        assert len(flagged) == 1
        assert multiplayer_state.opposition is flagged[0]

    def test_nobody_has_voted(self, multiplayer_state):
        assert all(p.vote is None for p in multiplayer_state.participants)

    def test_single_player_has_no_seats(self, single_state):
        assert single_state.participants == ()
        assert single_state.human is None


class TestScenarioC:
    """Human submits security in a multiplayer game."""

    def test_simulated_votes_from_catalog(self, reducer, multiplayer_state, crisis_spec):
        result = reducer.apply(multiplayer_state, Command.submit("security"))
        state = result.new_state

        assert result.accepted
        assert state.human.vote == "security"
        simulated = [p for p in state.participants if not p.is_human]
        assert len(simulated) == 3
        for participant in simulated:
            assert participant.vote in crisis_spec.action_ids

    def test_only_human_effect_applied(self, crisis_spec, multiplayer_state):
        """Simulated ministers all vote economy; only security lands."""
        from ..engine_core import Reducer

        reducer = Reducer(spec=crisis_spec, policy=FirstActionPolicy())
        state = reducer.apply(multiplayer_state, Command.submit("security")).new_state

        assert [p.vote for p in state.participants[1:]] == ["economy"] * 3
        assert state.stats.as_dict() == {
            "economy": 55,
            "security": 100,
            "diplomacy": 20,
            "social": 50,
        }

    def test_diversion_inverts_effect(self, reducer, multiplayer_state):
        state = reducer.apply(multiplayer_state, Command.diversion(True)).new_state
        state = reducer.apply(state, Command.submit("security")).new_state

        assert state.stats.security == 60
        assert state.stats.economy == 65
        assert state.diversion

    def test_diversion_off_is_normal(self, reducer, multiplayer_state):
        state = reducer.apply(multiplayer_state, Command.diversion(False)).new_state
        state = reducer.apply(state, Command.submit("economy")).new_state
        assert state.stats.economy == 75


class TestDiversion:
    """Tests for the diversion toggle."""

    def test_rejected_in_single_player(self, reducer, single_state):
        result = reducer.apply(single_state, Command.diversion(True))

        assert not result.accepted
        assert result.reason == RejectReason.NOT_MULTIPLAYER
        assert not result.new_state.diversion

    def test_fixed_after_vote(self, reducer, multiplayer_state):
        state = reducer.apply(multiplayer_state, Command.submit("social")).new_state
        result = reducer.apply(state, Command.diversion(True))

        assert not result.accepted
        assert result.reason == RejectReason.VOTING_LOCKED

    def test_persists_across_rounds(self, reducer, multiplayer_state):
        state = reducer.apply(multiplayer_state, Command.diversion(True)).new_state
        for _ in range(60):
            state = reducer.apply(state, Command.tick()).new_state

        assert state.round_number == 2
        assert state.diversion


class TestOpposition:
    """The opposition flag is recorded but inert."""

    def test_opposition_does_not_change_resolution(self, crisis_spec, multiplayer_state):
        from ..engine_core import Reducer

        reducer = Reducer(spec=crisis_spec, policy=FirstActionPolicy())
        flipped = multiplayer_state.with_participants(
            [replace(p, is_opposition=not p.is_opposition)
             for p in multiplayer_state.participants]
        )

        a = reducer.apply(multiplayer_state, Command.submit("diplomacy")).new_state
        b = reducer.apply(flipped, Command.submit("diplomacy")).new_state
        assert a.stats == b.stats


class TestTally:
    """Tests for vote counting."""

    def test_tally_counts_votes(self, crisis_spec, multiplayer_state):
        aggregator = VoteAggregator(spec=crisis_spec, policy=FirstActionPolicy())
        action = crisis_spec.get_action("social")
        state, changes = aggregator.resolve(multiplayer_state, action)

        assert aggregator.tally(state) == {
            "economy": 3,
            "security": 0,
            "diplomacy": 0,
            "social": 1,
        }
        assert changes[0].startswith("Human chose")

    def test_tally_empty_before_vote(self, crisis_spec, multiplayer_state):
        aggregator = VoteAggregator(spec=crisis_spec, policy=FirstActionPolicy())
        assert sum(aggregator.tally(multiplayer_state).values()) == 0

    def test_votes_cleared_on_advance(self, reducer, multiplayer_state):
        state = reducer.apply(multiplayer_state, Command.submit("economy")).new_state
        for _ in range(60):
            state = reducer.apply(state, Command.tick()).new_state
        assert all(p.vote is None for p in state.participants)

    @pytest.mark.parametrize("diversion, expected", [(False, 1), (True, -1)])
    def test_effect_multiplier(self, multiplayer_state, diversion, expected):
        state = multiplayer_state._copy_with(diversion=diversion)
        assert VoteAggregator.effect_multiplier(state) == expected
