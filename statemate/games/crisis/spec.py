"""
Crisis Scenario Specification

The base scenario: five one-minute rounds, four ministries,
a fixed decay applied at every round transition.

The scenario defines:
- Initial stats
- Decay per round transition
- Round structure
- Crisis, action and outcome catalogs
"""

from ...spec_schema.scenario_spec import ScenarioSpec
from ...engine_core.stats import STANDARD_DECAY
from ...config import SIMULATED_PARTICIPANTS
from .catalog import CRISES, ACTIONS, OUTCOME_TIERS


INITIAL_STATS = {
    "economy": 60,
    "security": 80,
    "diplomacy": 20,
    "social": 50,
}


def create_crisis_spec(simulated_participants: int | None = None) -> ScenarioSpec:
    """
    Create the base crisis scenario specification.

    Catalog lists are copied so callers can tweak a spec
    without touching the module-level catalogs.
    """
    return ScenarioSpec(
        scenario_id="crisis_base",
        scenario_name="Statemate: Crisis Cabinet",
        version="1.0.0",
        initial_stats=dict(INITIAL_STATS),
        decay=dict(STANDARD_DECAY),
        max_rounds=5,
        round_seconds=60,
        simulated_participants=(
            SIMULATED_PARTICIPANTS
            if simulated_participants is None
            else simulated_participants
        ),
        crises=list(CRISES),
        actions=list(ACTIONS),
        outcome_tiers=list(OUTCOME_TIERS),
        metadata={
            "genre": "political strategy",
        },
    )
