"""
Round Engine - Stateful facade over the reducer.

The engine holds the latest GameState, exposes the four commands
presentation may issue, and notifies subscribers with every new state.

Usage:
    engine = RoundEngine(seed=7)
    engine.subscribe(render)

    engine.submit_action("economy")
    for _ in range(60):
        engine.tick()
"""

from __future__ import annotations
import random
from typing import Callable, TYPE_CHECKING

from .state import GameState, GameMode
from .command import Command, CommandResult
from .reducer import Reducer
from .action_generator import legal_actions
from ..spec_schema.validation import validate_catalog

if TYPE_CHECKING:
    from ..spec_schema import ScenarioSpec
    from ..bots import ParticipantPolicy
    from .scoring import Outcome

Subscriber = Callable[[GameState], None]


class RoundEngine:
    """
    Single-player engine: the human's action applies directly.

    Raises CatalogValidationError if the scenario is malformed.
    """

    mode = GameMode.SINGLE

    def __init__(
        self,
        spec: ScenarioSpec | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        policy: ParticipantPolicy | None = None,
        game_id: str | None = None,
        human_name: str = "You",
    ):
        from ..games.crisis.setup import setup_crisis_game
        from ..games.crisis.spec import create_crisis_spec

        self.spec = spec or create_crisis_spec()
        validate_catalog(self.spec, raise_on_error=True)
        self.rng = rng if rng is not None else random.Random(seed)
        self.reducer = Reducer(spec=self.spec, rng=self.rng, policy=policy)
        self._subscribers: list[Subscriber] = []
        self.state: GameState = setup_crisis_game(
            mode=self.mode,
            rng=self.rng,
            spec=self.spec,
            game_id=game_id,
            human_name=human_name,
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def start_game(self) -> CommandResult:
        """Reinitialize all state. Valid from any phase."""
        return self.dispatch(Command.start_game())

    def submit_action(self, action_id: str) -> CommandResult:
        return self.dispatch(Command.submit(action_id))

    def set_diversion_mode(self, enabled: bool) -> CommandResult:
        return self.dispatch(Command.diversion(enabled))

    def tick(self) -> CommandResult:
        """Advance the countdown by one unit."""
        return self.dispatch(Command.tick())

    def dispatch(self, command: Command) -> CommandResult:
        result = self.reducer.apply(self.state, command)
        if result.accepted:
            self.state = result.new_state
            self._notify()
        return result

    # =========================================================================
    # Snapshots
    # =========================================================================

    @property
    def is_active(self) -> bool:
        """True while a round is in play."""
        return not self.state.is_over

    @property
    def outcome(self) -> Outcome | None:
        return self.state.outcome

    def available_actions(self) -> list[str]:
        return legal_actions(self.spec, self.state)

    def vote_tally(self) -> dict[str, int]:
        return self.reducer.voting.tally(self.state)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for every new state.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def close(self):
        """
        Notify subscribers one last time and drop them.

        Called when the owning session ends; the engine must not be used after.
        """
        self._notify()
        self._subscribers.clear()

    def _notify(self):
        for callback in list(self._subscribers):
            callback(self.state)


class MultiplayerRoundEngine(RoundEngine):
    """
    Multiplayer engine: one human plus simulated participants.

    Simulated votes are drawn when the human submits. Only the human's
    effect reaches the stats, inverted while diversion mode is on.
    """

    mode = GameMode.MULTIPLAYER
