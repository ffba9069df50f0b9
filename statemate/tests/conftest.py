"""
Pytest fixtures for Statemate tests.
"""

import random

import pytest

from ..spec_schema import ScenarioSpec
from ..engine_core import GameState, GameMode, Reducer, RoundEngine, MultiplayerRoundEngine
from ..bots import FirstActionPolicy
from ..games.crisis.spec import create_crisis_spec
from ..games.crisis.setup import setup_crisis_game


@pytest.fixture
def crisis_spec() -> ScenarioSpec:
    """Create the base crisis spec with three simulated participants."""
    return create_crisis_spec(simulated_participants=3)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def reducer(crisis_spec, rng) -> Reducer:
    return Reducer(spec=crisis_spec, rng=rng)


@pytest.fixture
def single_state(crisis_spec, rng) -> GameState:
    """Fresh single-player game at round 1."""
    return setup_crisis_game(
        mode=GameMode.SINGLE, rng=rng, spec=crisis_spec, game_id="test_game"
    )


@pytest.fixture
def multiplayer_state(crisis_spec, rng) -> GameState:
    """Fresh multiplayer game: the human plus three simulated ministers."""
    return setup_crisis_game(
        mode=GameMode.MULTIPLAYER, rng=rng, spec=crisis_spec, game_id="test_game"
    )


@pytest.fixture
def engine(crisis_spec) -> RoundEngine:
    return RoundEngine(spec=crisis_spec, seed=7)


@pytest.fixture
def multiplayer_engine(crisis_spec) -> MultiplayerRoundEngine:
    return MultiplayerRoundEngine(spec=crisis_spec, seed=7)


@pytest.fixture
def predictable_multiplayer_engine(crisis_spec) -> MultiplayerRoundEngine:
    """Multiplayer engine whose simulated ministers always vote 'economy'."""
    return MultiplayerRoundEngine(spec=crisis_spec, seed=7, policy=FirstActionPolicy())


def expire_round(engine: RoundEngine) -> None:
    """Tick until the current round ends."""
    round_number = engine.state.round_number
    while engine.is_active and engine.state.round_number == round_number:
        engine.tick()
