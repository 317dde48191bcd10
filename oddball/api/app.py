"""
FastAPI Application - REST API for puzzle clients.

Endpoints:
    GET    /api/health                        Health check
    POST   /api/v1/sessions                   Create puzzle session
    GET    /api/v1/sessions                   List active sessions
    GET    /api/v1/sessions/{id}              Get session and puzzle view
    DELETE /api/v1/sessions/{id}              End session
    POST   /api/v1/sessions/{id}/pan          Select the active pan
    POST   /api/v1/sessions/{id}/place        Place a ball on the active pan
    POST   /api/v1/sessions/{id}/remove       Remove a ball from its pan
    POST   /api/v1/sessions/{id}/weigh        Weigh the pans
    POST   /api/v1/sessions/{id}/guess        Submit the final guess

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Union

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import PuzzleConfig, load_config
from ..session import SessionManager
from .service import APIService
from .schemas import (
    # Request models
    CreateSessionRequest,
    SelectPanRequest,
    BallRequest,
    GuessRequest,
    # Response models
    SessionResponse,
    ActionResponse,
    WeighResponse,
    GuessResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.INVALID_PAN: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.GUESS_NOT_AVAILABLE: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


def create_app(service: APIService | None = None, config: PuzzleConfig | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        config: Puzzle settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    config = config or load_config()

    app = FastAPI(
        title="Oddball Puzzle API",
        description="""
Balance scale puzzle - find the odd ball with a two-pan scale.

## Flow

1. `POST /sessions` to start a puzzle
2. `POST /pan` to pick a pan, then `POST /place` for each ball
3. `POST /weigh` to compare; the pans empty after each weighing
4. Once enough weighings are recorded (`can_guess=true`), `POST /guess`

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_PAN` | Pan index is not 0 or 1 |
| `GUESS_NOT_AVAILABLE` | Too few weighings, or already guessed |
| `VALIDATION_ERROR` | Malformed request |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(session_manager=SessionManager(config))

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Turn a service ErrorResponse into a JSON response with its status."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="oddball", version=__version__)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new puzzle session",
    )
    async def create_session(body: CreateSessionRequest) -> SessionResponse:
        """
        Create a new puzzle session.

        Pass a `seed` for a reproducible puzzle.
        """
        return api_service.create_session(body)

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
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the session status and the current puzzle view."""
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a puzzle session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a session and release its state."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Scale Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/pan",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Scale"],
        summary="Select the pan new balls are placed on",
    )
    async def select_pan(
        session_id: str, body: SelectPanRequest
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.select_pan(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/place",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Scale"],
        summary="Place a ball on the active pan",
    )
    async def place_ball(
        session_id: str, body: BallRequest
    ) -> Union[ActionResponse, JSONResponse]:
        """
        Place a ball on the active pan.

        Ignored (`applied=false`) when no pan is selected or the ball is
        already on a pan.
        """
        return respond(api_service.place_ball(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/remove",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Scale"],
        summary="Remove a ball from its pan",
    )
    async def remove_ball(
        session_id: str, body: BallRequest
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.remove_ball(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/weigh",
        response_model=WeighResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Scale"],
        summary="Weigh the pans",
    )
    async def weigh(session_id: str) -> Union[WeighResponse, JSONResponse]:
        """Compare the pans, record the outcome and empty both pans."""
        return respond(api_service.weigh(session_id))

    # =========================================================================
    # Guess Endpoint
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/guess",
        response_model=GuessResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Guess"],
        summary="Name the odd ball and whether it is heavier or lighter",
    )
    async def submit_guess(
        session_id: str, body: GuessRequest
    ) -> Union[GuessResponse, JSONResponse]:
        return respond(api_service.submit_guess(session_id, body))

    return app


# For running directly: uvicorn oddball.api.app:app
app = create_app()
