"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Presentation creates a session (single-player or multiplayer)
2. During the game:
   - The clock ticks the engine (real-time scheduler or manual ticks)
   - Presentation submits actions and reads snapshots
3. Game over -> the scheduler stops, the outcome is frozen
4. Restart -> same session, fresh game state, fresh scheduler
5. Session ended -> scheduler cancelled, ALL state discarded

PERSISTENCE RULES:
- No database, no files
- Nothing survives the session
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import time
import uuid

from ..engine_core import RoundEngine, MultiplayerRoundEngine, GameMode, CommandResult
from ..spec_schema import ScenarioSpec
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # A round is in play
    GAME_OVER = "game_over"  # Outcome available, waiting for restart or end
    ENDED = "ended"  # Session closed, state discarded


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The engine (and through it the current GameState)
    - The tick scheduler for real-time sessions

    State is NOT persisted.
    """
    session_id: str
    engine: RoundEngine | None
    created_at: float
    realtime: bool = False
    tick_period: float | None = None
    scheduler: TickScheduler | None = None
    ended: bool = False

    @property
    def state(self) -> SessionState:
        if self.ended or self.engine is None:
            return SessionState.ENDED
        if self.engine.is_active:
            return SessionState.ACTIVE
        return SessionState.GAME_OVER

    @property
    def mode(self) -> GameMode:
        return self.engine.mode

    def is_active(self) -> bool:
        """Check if session is still usable."""
        return self.state != SessionState.ENDED

    def start_clock(self):
        """
        Attach a fresh scheduler and start it.

        Needs a running event loop. No-op for manually ticked sessions.
        """
        if not self.realtime or self.engine is None:
            return
        self.stop_clock()
        if self.tick_period is None:
            self.scheduler = TickScheduler(self.engine)
        else:
            self.scheduler = TickScheduler(self.engine, period=self.tick_period)
        self.scheduler.start()

    def stop_clock(self):
        if self.scheduler is not None:
            self.scheduler.cancel()
            self.scheduler = None

    def close(self):
        """Stop the clock, wake subscribers and discard the engine."""
        self.stop_clock()
        engine, self.engine = self.engine, None
        self.ended = True
        if engine is not None:
            engine.close()

    def restart(self) -> CommandResult:
        """Start a new game in this session."""
        result = self.engine.start_game()
        self.start_clock()
        return result


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with a fresh engine
    - Track active sessions
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        mode: GameMode = GameMode.SINGLE,
        seed: int | None = None,
        realtime: bool = False,
        spec: ScenarioSpec | None = None,
        human_name: str = "You",
        tick_period: float | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            mode: Single-player or multiplayer engine
            seed: Seed for reproducible crisis draws and votes
            realtime: Attach a tick scheduler (needs a running event loop)
            spec: Scenario spec (default crisis scenario if not provided)
            human_name: Display name for the human participant
            tick_period: Override the configured tick period

        Returns:
            New Session with a game at round 1
        """
        session_id = str(uuid.uuid4())
        engine_cls = MultiplayerRoundEngine if mode == GameMode.MULTIPLAYER else RoundEngine
        engine = engine_cls(
            spec=spec,
            seed=seed,
            game_id=session_id,
            human_name=human_name,
        )

        session = Session(
            session_id=session_id,
            engine=engine,
            created_at=time.time(),
            realtime=realtime,
            tick_period=tick_period,
        )
        # Raises before registering if a real-time clock has no running loop
        session.start_clock()
        self._sessions[session_id] = session

        logger.info("Session %s created (%s, realtime=%s)", session_id, mode.value, realtime)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        The scheduler is cancelled and the session is removed from memory.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        session.close()
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
            and session.state == SessionState.GAME_OVER
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
