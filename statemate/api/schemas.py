"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between presentation clients
and the engine. All responses include explicit types for OpenAPI
schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- UNKNOWN_ACTION: Action ID is not in the catalog
- NOT_MULTIPLAYER: Diversion requested on a single-player session

Commands that arrive at the wrong moment (voting locked, game over)
are not errors: they return accepted=false with a reason code.
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ENDED = "ended"


class GameModeSchema(str, Enum):
    """Engine variant."""
    SINGLE = "single"
    MULTIPLAYER = "multiplayer"


class RoundPhaseSchema(str, Enum):
    """Round lifecycle phase."""
    AWAITING_VOTE = "awaiting_vote"
    RESOLVED = "resolved"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    NOT_MULTIPLAYER = "NOT_MULTIPLAYER"


class RejectReasonSchema(str, Enum):
    """Why a command was a no-op."""
    VOTING_LOCKED = "VOTING_LOCKED"
    GAME_OVER = "GAME_OVER"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    NOT_MULTIPLAYER = "NOT_MULTIPLAYER"


# =============================================================================
# Shared Models
# =============================================================================

class StatsInfo(BaseModel):
    """The four governance stats, each 0-100."""
    economy: int = Field(..., ge=0, le=100)
    security: int = Field(..., ge=0, le=100)
    diplomacy: int = Field(..., ge=0, le=100)
    social: int = Field(..., ge=0, le=100)


class CrisisInfo(BaseModel):
    """Crisis card for display."""
    title: str
    description: str
    icon: str

    model_config = {"from_attributes": True}


class ActionInfo(BaseModel):
    """Action button for display."""
    action_id: str
    name: str
    icon: str
    effects: dict[str, int] = Field(default_factory=dict)
    color: str = ""

    model_config = {"from_attributes": True}


class ParticipantInfo(BaseModel):
    """A seat in a multiplayer game."""
    participant_id: str
    name: str
    avatar: str
    is_human: bool
    is_opposition: bool = False
    vote: Optional[str] = None

    model_config = {"from_attributes": True}


class OutcomeInfo(BaseModel):
    """Classified end-of-game result."""
    tier: str = Field(description="victory, stability, crisis, collapse")
    label: str
    icon: str
    color: str
    average: float

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    mode: GameModeSchema = Field(GameModeSchema.SINGLE, description="single or multiplayer")
    seed: Optional[int] = Field(None, description="Seed for reproducible games")
    realtime: bool = Field(
        False, description="Tick the clock server-side once per period"
    )
    human_name: str = Field("You", min_length=1, max_length=40)


class SubmitActionRequest(BaseModel):
    """The human's choice for this round."""
    action_id: str = Field(..., description="economy, security, diplomacy or social")


class DiversionRequest(BaseModel):
    """Toggle diversion mode (multiplayer only, before voting)."""
    enabled: bool


class TickRequest(BaseModel):
    """Advance the manual clock."""
    count: int = Field(1, ge=1, le=600, description="Number of ticks to apply")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game snapshot for display."""
    session_id: str
    status: SessionStatus
    mode: GameModeSchema
    phase: RoundPhaseSchema
    round_number: int = Field(..., ge=1)
    max_rounds: int
    time_left: int = Field(..., ge=0)
    crisis: CrisisInfo
    stats: StatsInfo
    voting_locked: bool
    diversion: bool = False
    available_actions: list[str] = Field(default_factory=list)
    participants: list[ParticipantInfo] = Field(default_factory=list)
    vote_tally: dict[str, int] = Field(default_factory=dict)
    outcome: Optional[OutcomeInfo] = None
    api_version: str = "v1"


class CommandResponse(BaseModel):
    """Result of a command plus the resulting snapshot."""
    accepted: bool
    reason: Optional[RejectReasonSchema] = None
    message: Optional[str] = None
    changes: list[str] = Field(default_factory=list)
    state: GameStateResponse
    api_version: str = "v1"


class CatalogResponse(BaseModel):
    """Crisis and action catalogs."""
    scenario_id: str
    scenario_name: str
    max_rounds: int
    round_seconds: int
    crises: list[CrisisInfo]
    actions: list[ActionInfo]


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
