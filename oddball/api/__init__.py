"""
API Module - HTTP interface for puzzle clients.

Exposes the engine via REST API. A client:
1. Creates a session
2. Selects pans and places balls
3. Weighs
4. Submits a guess once it is offered

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectPanRequest,
    BallRequest,
    GuessRequest,
    # Responses
    SessionResponse,
    ActionResponse,
    WeighResponse,
    GuessResponse,
    ErrorResponse,
    # Shared
    PuzzleView,
    WeighingInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SelectPanRequest",
    "BallRequest",
    "GuessRequest",
    # Responses
    "SessionResponse",
    "ActionResponse",
    "WeighResponse",
    "GuessResponse",
    "ErrorResponse",
    # Shared
    "PuzzleView",
    "WeighingInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
