"""
FastAPI Application - REST API for presentation clients.

Endpoints:
    GET    /api/v1/health                      Liveness check
    GET    /api/v1/catalog                     Crisis and action catalogs
    POST   /api/v1/sessions                    Create game session
    GET    /api/v1/sessions                    List active sessions
    GET    /api/v1/sessions/{id}               Get game snapshot
    DELETE /api/v1/sessions/{id}               End session
    POST   /api/v1/sessions/{id}/start         Restart the game
    POST   /api/v1/sessions/{id}/actions       Submit the human's action
    POST   /api/v1/sessions/{id}/diversion     Toggle diversion mode
    POST   /api/v1/sessions/{id}/tick          Advance the manual clock
    WS     /api/v1/sessions/{id}/ws            Push snapshots as they change

Clock:
    Sessions created with realtime=true are ticked server-side once per
    STATEMATE_TICK_SECONDS. Other sessions are ticked by the client
    through POST /tick.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Union
import asyncio
import logging

from .. import __version__
from ..config import ALLOWED_ORIGINS, STATEMATE_ENV

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query, WebSocket, WebSocketDisconnect
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        SubmitActionRequest,
        DiversionRequest,
        TickRequest,
        # Response models
        GameStateResponse,
        CommandResponse,
        CatalogResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Statemate Engine API",
        description="""
Political crisis round engine - five timed rounds, four ministries.

## Commands

Commands sent at the wrong moment are **not** errors. A second vote in the
same round, a diversion toggle after voting, or a tick after game over all
return `200` with `accepted=false` and a `reason`:

| Reason | Meaning |
|--------|---------|
| `VOTING_LOCKED` | A vote was already cast this round |
| `GAME_OVER` | The game has ended; restart with `POST /start` |

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `UNKNOWN_ACTION` | Action ID is not in the catalog |
| `NOT_MULTIPLAYER` | Diversion needs a multiplayer session |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    _status_codes = {
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.UNKNOWN_ACTION: 400,
        ErrorCode.NOT_MULTIPLAYER: 400,
    }

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=_status_codes.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Meta
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Meta"],
        summary="Liveness check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            service="statemate",
            version=__version__,
            environment=STATEMATE_ENV,
        )

    @app.get(
        "/api/v1/catalog",
        response_model=CatalogResponse,
        tags=["Meta"],
        summary="Crisis and action catalogs",
    )
    async def catalog() -> CatalogResponse:
        return api_service.get_catalog()

    # =========================================================================
    # Sessions
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        status_code=201,
        tags=["Sessions"],
        summary="Create a game session",
    )
    async def create_session(request: CreateSessionRequest) -> GameStateResponse:
        """
        Create a new game session at round 1.

        Declared async so real-time sessions can attach their
        scheduler to the server's event loop.
        """
        return api_service.create_session(request)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get the current game snapshot",
    )
    async def get_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_state(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session, stop its clock and discard its state."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Commands
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/start",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Restart the game from round 1",
    )
    async def start_game(session_id: str) -> Union[CommandResponse, JSONResponse]:
        return respond(api_service.start_game(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=CommandResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown action"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game"],
        summary="Submit the human's action for this round",
    )
    async def submit_action(
        session_id: str, request: SubmitActionRequest
    ) -> Union[CommandResponse, JSONResponse]:
        return respond(api_service.submit_action(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/diversion",
        response_model=CommandResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Not a multiplayer session"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game"],
        summary="Toggle diversion mode",
    )
    async def set_diversion(
        session_id: str, request: DiversionRequest
    ) -> Union[CommandResponse, JSONResponse]:
        return respond(api_service.set_diversion(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/tick",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Advance the manual clock",
    )
    async def tick(
        session_id: str, request: TickRequest
    ) -> Union[CommandResponse, JSONResponse]:
        return respond(api_service.tick(session_id, request))

    # =========================================================================
    # WebSocket
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def session_updates(websocket: WebSocket, session_id: str):
        """Send the current snapshot, then one snapshot per state change."""
        session = api_service.get_session(session_id)
        await websocket.accept()
        if session is None or session.engine is None:
            await websocket.send_json(
                ErrorResponse(
                    error=f"Session {session_id} not found",
                    error_code=ErrorCode.SESSION_NOT_FOUND,
                ).model_dump(mode="json")
            )
            await websocket.close(code=1008)
            return

        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        def on_state(_state):
            # Commands may arrive from another thread
            loop.call_soon_threadsafe(queue.put_nowait, True)

        async def watch_client():
            # Incoming messages are ignored; a disconnect ends the stream
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    queue.put_nowait(False)
                    return

        unsubscribe = session.engine.subscribe(on_state)
        watcher = asyncio.create_task(watch_client())
        try:
            await websocket.send_json(_snapshot(session_id))
            while await queue.get():
                snapshot = _snapshot(session_id)
                if snapshot is None:
                    # Session ended while the client was listening
                    await websocket.close(code=1000)
                    break
                await websocket.send_json(snapshot)
        except WebSocketDisconnect:
            logger.debug("WebSocket for session %s disconnected", session_id)
        finally:
            watcher.cancel()
            unsubscribe()

    def _snapshot(session_id: str):
        response = api_service.get_state(session_id)
        if isinstance(response, ErrorResponse):
            return None
        return response.model_dump(mode="json")

    return app


# For running directly: uvicorn statemate.api.app:app
app = create_app()
