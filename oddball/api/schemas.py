"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client and the engine.
Ball weights and the identity of the odd ball are never exposed.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_PAN: Pan index is not 0 or 1
- GUESS_NOT_AVAILABLE: Not enough weighings yet, or already guessed
- VALIDATION_ERROR: Request body is malformed
- INTERNAL_ERROR: Unexpected engine failure
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
    SOLVED = "solved"
    FAILED = "failed"
    ABANDONED = "abandoned"


class Direction(str, Enum):
    """Guess directions."""
    HEAVIER = "heavier"
    LIGHTER = "lighter"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_PAN = "INVALID_PAN"
    GUESS_NOT_AVAILABLE = "GUESS_NOT_AVAILABLE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class WeighingInfo(BaseModel):
    """One completed weighing, as shown in the history."""
    left: list[int] = Field(default_factory=list, description="Ball ids on the left pan")
    right: list[int] = Field(default_factory=list, description="Ball ids on the right pan")
    outcome: int = Field(..., ge=-1, le=1, description="+1 left heavier, -1 right heavier, 0 balanced")
    symbol: str = Field(..., description=">, < or =")


class PuzzleView(BaseModel):
    """Everything a client needs to render the puzzle."""
    available_balls: list[int] = Field(default_factory=list)
    left_pan: list[int] = Field(default_factory=list)
    right_pan: list[int] = Field(default_factory=list)
    active_pan: Optional[int] = Field(None, description="0, 1, or null when no pan is selected")
    history: list[WeighingInfo] = Field(default_factory=list)
    can_guess: bool = False
    guess_correct: Optional[bool] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new puzzle session."""
    ball_count: Optional[int] = Field(None, ge=1, le=100, description="Number of balls")
    seed: Optional[int] = Field(None, description="Seed for a reproducible puzzle")


class SelectPanRequest(BaseModel):
    pan: int = Field(..., description="0 for the left pan, 1 for the right pan")


class BallRequest(BaseModel):
    """Request naming a single ball."""
    ball_id: int


class GuessRequest(BaseModel):
    """The player's accusation."""
    ball_id: int
    direction: Direction


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information and the puzzle view."""
    session_id: str
    status: SessionStatus
    ball_count: int
    seed: Optional[int] = Field(None, description="Seed to replay this puzzle, if one was given")
    created_at: float = 0.0
    puzzle: PuzzleView
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Response after a scale action."""
    session_id: str
    applied: bool = Field(..., description="False when the action was a tolerated no-op")
    ignored_reason: Optional[str] = None
    changes: list[str] = Field(default_factory=list)
    puzzle: PuzzleView
    api_version: str = "v1"


class WeighResponse(BaseModel):
    """Response after a weighing."""
    session_id: str
    weighing: WeighingInfo
    puzzle: PuzzleView
    api_version: str = "v1"


class GuessResponse(BaseModel):
    """Response after a guess."""
    session_id: str
    status: SessionStatus
    correct: Optional[bool] = Field(None, description="Null when the ball id was unknown")
    ignored_reason: Optional[str] = None
    puzzle: PuzzleView
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing sessions."""
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
