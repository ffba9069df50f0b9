"""
Session Module - Manages ephemeral game sessions.

A session represents one seat at the game:
- Created when presentation starts a game
- Holds the engine and, for real-time play, its tick scheduler
- Restartable in place
- Destroyed when presentation leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .scheduler import TickScheduler
from .game_loop import GameLoop, GameReport, RoundResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "TickScheduler",
    "GameLoop",
    "GameReport",
    "RoundResult",
]
