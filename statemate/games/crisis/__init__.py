"""
Crisis Cabinet - The base scenario

Five timed rounds. Each round a crisis hits, the cabinet picks one of
four ministries to back, and every ministry decays at round end.
After the last round the average of the four stats decides the outcome.

This module contains:
- Crisis, action and outcome catalogs
- The scenario spec
- Game setup (initial state, participants)
"""

from .catalog import CRISES, ACTIONS, OUTCOME_TIERS, get_action_by_id
from .spec import create_crisis_spec, INITIAL_STATS
from .setup import setup_crisis_game, HUMAN_PARTICIPANT_ID

__all__ = [
    "CRISES",
    "ACTIONS",
    "OUTCOME_TIERS",
    "get_action_by_id",
    "create_crisis_spec",
    "INITIAL_STATS",
    "setup_crisis_game",
    "HUMAN_PARTICIPANT_ID",
]
