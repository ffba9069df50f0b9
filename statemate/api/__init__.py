"""
API Module - Presentation client interface.

Exposes the engine via REST API. A client:
1. Creates a game session
2. Ticks the clock (or lets the server do it)
3. Submits the human's action each round
4. Reads snapshots and, at the end, the outcome

All state is session-scoped. No persistent user accounts required.
"""

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
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SubmitActionRequest",
    "DiversionRequest",
    "TickRequest",
    # Responses
    "GameStateResponse",
    "CommandResponse",
    "CatalogResponse",
    "ErrorResponse",
    # Shared
    "StatsInfo",
    "CrisisInfo",
    "ActionInfo",
    "ParticipantInfo",
    "OutcomeInfo",
    # Service
    "APIService",
    "create_app",
]
