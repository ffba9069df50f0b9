"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine commands
2. Manages sessions
3. Formats engine snapshots for presentation clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    CreateSessionRequest,
    SubmitActionRequest,
    DiversionRequest,
    TickRequest,
    # Responses
    GameStateResponse,
    CommandResponse,
    CatalogResponse,
    ErrorResponse,
    # Shared
    StatsInfo,
    CrisisInfo,
    ActionInfo,
    ParticipantInfo,
    OutcomeInfo,
    # Enums
    SessionStatus,
    GameModeSchema,
    RoundPhaseSchema,
    RejectReasonSchema,
    ErrorCode,
)
from ..engine_core import GameMode, CommandResult, RejectReason
from ..games.crisis.spec import create_crisis_spec
from ..session import SessionManager, Session

logger = logging.getLogger(__name__)

# Rejections caused by a bad request rather than bad timing
_CLIENT_ERRORS = {
    RejectReason.UNKNOWN_ACTION: ErrorCode.UNKNOWN_ACTION,
    RejectReason.NOT_MULTIPLAYER: ErrorCode.NOT_MULTIPLAYER,
}


@dataclass
class APIService:
    """
    Main API service for presentation clients.

    Usage:
        service = APIService()

        state = service.create_session(CreateSessionRequest(mode="multiplayer"))
        result = service.submit_action(state.session_id, SubmitActionRequest(action_id="economy"))
        result = service.tick(state.session_id, TickRequest(count=60))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    tick_period: float | None = None

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse:
        """
        Create a new game session.

        Real-time sessions must be created from inside a running event loop.
        """
        session = self.session_manager.create_session(
            mode=GameMode(request.mode.value),
            seed=request.seed,
            realtime=request.realtime,
            human_name=request.human_name,
            tick_period=self.tick_period,
        )
        return self._state_to_response(session)

    def get_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._state_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def get_session(self, session_id: str) -> Session | None:
        return self.session_manager.get_session(session_id)

    # =========================================================================
    # Commands
    # =========================================================================

    def start_game(self, session_id: str) -> CommandResponse | ErrorResponse:
        """Restart the session's game from round 1."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._command_response(session, session.restart())

    def submit_action(
        self, session_id: str, request: SubmitActionRequest
    ) -> CommandResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._command_response(session, session.engine.submit_action(request.action_id))

    def set_diversion(
        self, session_id: str, request: DiversionRequest
    ) -> CommandResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._command_response(
            session, session.engine.set_diversion_mode(request.enabled)
        )

    def tick(self, session_id: str, request: TickRequest) -> CommandResponse | ErrorResponse:
        """
        Apply up to request.count ticks.

        Stops early when the game ends. Changes from every tick are collected.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        engine = session.engine
        changes: list[str] = []
        result = None
        for _ in range(request.count):
            result = engine.tick()
            changes.extend(result.state_changes)
            if not result.accepted or result.game_over:
                break

        response = self._command_response(session, result)
        response.changes = changes
        return response

    # =========================================================================
    # Catalog
    # =========================================================================

    def get_catalog(self) -> CatalogResponse:
        spec = create_crisis_spec()
        return CatalogResponse(
            scenario_id=spec.scenario_id,
            scenario_name=spec.scenario_name,
            max_rounds=spec.max_rounds,
            round_seconds=spec.round_seconds,
            crises=[CrisisInfo.model_validate(c) for c in spec.crises],
            actions=[ActionInfo.model_validate(a) for a in spec.actions],
        )

    # =========================================================================
    # Formatting
    # =========================================================================

    def _command_response(
        self, session: Session, result: CommandResult
    ) -> CommandResponse | ErrorResponse:
        if not result.accepted and result.reason in _CLIENT_ERRORS:
            return ErrorResponse(
                error=result.message or result.reason.value,
                error_code=_CLIENT_ERRORS[result.reason],
                details={"session_id": session.session_id},
            )

        return CommandResponse(
            accepted=result.accepted,
            reason=RejectReasonSchema(result.reason.value) if result.reason else None,
            message=result.message,
            changes=result.state_changes,
            state=self._state_to_response(session),
        )

    def _state_to_response(self, session: Session) -> GameStateResponse:
        engine = session.engine
        state = engine.state
        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            mode=GameModeSchema(state.mode.value),
            phase=RoundPhaseSchema(state.phase.value),
            round_number=state.round_number,
            max_rounds=state.max_rounds,
            time_left=state.time_left,
            crisis=CrisisInfo.model_validate(state.crisis),
            stats=StatsInfo(**state.stats.as_dict()),
            voting_locked=state.voting_locked,
            diversion=state.diversion,
            available_actions=engine.available_actions(),
            participants=[ParticipantInfo.model_validate(p) for p in state.participants],
            vote_tally=engine.vote_tally() if state.is_multiplayer else {},
            outcome=OutcomeInfo.model_validate(state.outcome) if state.outcome else None,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
