"""
Tests for the command-line interface.
"""

import argparse

import pytest

from ..cli import main, cmd_play


class TestSimulate:
    """Tests for the simulate command."""

    def test_simulate_prints_distribution(self, capsys):
        main(["simulate", "--games", "5", "--seed", "1"])
        out = capsys.readouterr().out

        assert "Simulated 5 game(s)" in out
        for tier in ("victory", "stability", "crisis", "collapse"):
            assert tier in out

    def test_idle_games_all_collapse(self, capsys):
        main(["simulate", "--games", "3", "--idle"])
        out = capsys.readouterr().out

        assert "collapse       3  (100.0%)" in out
        assert "Mean final average: 22.5" in out

    def test_multiplayer_diversion(self, capsys):
        main(["simulate", "--games", "2", "--seed", "4", "--multiplayer", "--diversion"])
        assert "Simulated 2 game(s)" in capsys.readouterr().out


class TestPlay:
    """Tests for the interactive play command."""

    def _args(self, **overrides):
        values = {"multiplayer": False, "seed": 1, "name": "You"}
        values.update(overrides)
        return argparse.Namespace(**values)

    def test_play_to_the_end(self, capsys):
        answers = iter(["economy", "security", "wait", "bribery", "social", "diplomacy"])
        cmd_play(self._args(), input_fn=lambda _prompt: next(answers))
        out = capsys.readouterr().out

        assert "Ignored: Unknown action: bribery" in out
        assert "Final stats:" in out

    def test_quit(self, capsys):
        cmd_play(self._args(multiplayer=True), input_fn=lambda _prompt: "quit")
        assert "Game abandoned." in capsys.readouterr().out

    def test_divert_in_multiplayer(self, capsys):
        answers = iter(["divert", "economy", "quit"])
        cmd_play(self._args(multiplayer=True), input_fn=lambda _prompt: next(answers))
        out = capsys.readouterr().out

        assert "Diversion mode on" in out
        assert "Human sabotaged Economy" in out

    def test_votes_shown_for_the_round_that_ended(self, capsys):
        answers = iter(["economy", "wait", "quit"])
        cmd_play(self._args(multiplayer=True), input_fn=lambda _prompt: next(answers))
        out = capsys.readouterr().out

        assert out.count("You: economy") == 1
        assert out.count("You: no vote") == 1
        assert out.count("Minister Aldana: no vote") == 1

    def test_single_player_prints_no_votes(self, capsys):
        answers = iter(["economy", "quit"])
        cmd_play(self._args(), input_fn=lambda _prompt: next(answers))
        assert "no vote" not in capsys.readouterr().out

    def test_end_of_input_quits(self, capsys):
        def closed(_prompt):
            raise EOFError

        cmd_play(self._args(), input_fn=closed)
        assert "Game abandoned." in capsys.readouterr().out


def test_no_command_exits():
    with pytest.raises(SystemExit):
        main([])
