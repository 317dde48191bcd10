"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages sessions
3. Enforces the guess gating the engine only reports
4. Formats responses without leaking ball weights

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

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
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..engine_core import Action, ActionResult, Pan, PuzzleState, WeighingRecord, apply_action
from ..session import SessionManager, Session

logger = logging.getLogger(__name__)


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest(seed=3))
        service.select_pan(session.session_id, SelectPanRequest(pan=0))
        service.place_ball(session.session_id, BallRequest(ball_id=1))
        service.weigh(session.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Create a new puzzle session."""
        session = self.session_manager.create_session(
            ball_count=request.ball_count,
            seed=request.seed,
        )
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Scale actions
    # =========================================================================

    def select_pan(
        self, session_id: str, request: SelectPanRequest
    ) -> ActionResponse | ErrorResponse:
        try:
            pan = Pan.from_index(request.pan)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_PAN)
        return self._run_scale_action(session_id, Action.select_pan(pan))

    def place_ball(
        self, session_id: str, request: BallRequest
    ) -> ActionResponse | ErrorResponse:
        return self._run_scale_action(session_id, Action.place_ball(request.ball_id))

    def remove_ball(
        self, session_id: str, request: BallRequest
    ) -> ActionResponse | ErrorResponse:
        return self._run_scale_action(session_id, Action.remove_ball(request.ball_id))

    def weigh(self, session_id: str) -> WeighResponse | ErrorResponse:
        """Weigh the current pans and record the outcome."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        with session.lock:
            result = apply_action(session.puzzle, Action.weigh())
            if not result.success:
                return self._failure(result)
            session.update(result.new_state)
            return WeighResponse(
                session_id=session_id,
                weighing=self._weighing_info(result.weighing),
                puzzle=self._puzzle_view(session.puzzle),
            )

    def submit_guess(
        self, session_id: str, request: GuessRequest
    ) -> GuessResponse | ErrorResponse:
        """
        Submit the player's guess.

        Rejected while the puzzle does not offer a guess: too few
        weighings, or a guess was already made.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        with session.lock:
            puzzle = session.puzzle
            if not puzzle.can_guess:
                if puzzle.last_guess_correct is not None:
                    message = "A guess has already been submitted"
                else:
                    message = (
                        f"Guessing requires {puzzle.min_weighings_to_guess} weighing(s), "
                        f"{len(puzzle.history)} made"
                    )
                return ErrorResponse(
                    error=message,
                    error_code=ErrorCode.GUESS_NOT_AVAILABLE,
                    details={
                        "weighings": len(puzzle.history),
                        "required": puzzle.min_weighings_to_guess,
                    },
                )

            result = apply_action(
                puzzle, Action.submit_guess(request.ball_id, request.direction.value)
            )
            if not result.success:
                return self._failure(result)
            session.update(result.new_state)

            return GuessResponse(
                session_id=session_id,
                status=SessionStatus(session.state.value),
                correct=result.guess_correct,
                ignored_reason=result.ignored,
                puzzle=self._puzzle_view(session.puzzle),
            )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _run_scale_action(
        self, session_id: str, action: Action
    ) -> ActionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        with session.lock:
            result = apply_action(session.puzzle, action)
            if not result.success:
                return self._failure(result)
            session.update(result.new_state)
            return ActionResponse(
                session_id=session_id,
                applied=result.applied,
                ignored_reason=result.ignored,
                changes=result.state_changes,
                puzzle=self._puzzle_view(session.puzzle),
            )

    def _failure(self, result: ActionResult) -> ErrorResponse:
        logger.warning("Engine rejected action: %s (%s)", result.error, result.error_code)
        code = (
            ErrorCode.VALIDATION_ERROR
            if result.error_code == "INVALID_ACTION"
            else ErrorCode.INTERNAL_ERROR
        )
        return ErrorResponse(error=result.error or "Action failed", error_code=code)

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            ball_count=len(session.puzzle.balls),
            seed=session.seed,
            created_at=session.created_at,
            puzzle=self._puzzle_view(session.puzzle),
        )

    def _puzzle_view(self, puzzle: PuzzleState) -> PuzzleView:
        return PuzzleView(
            available_balls=[b.ball_id for b in puzzle.available_balls],
            left_pan=list(puzzle.left),
            right_pan=list(puzzle.right),
            active_pan=puzzle.active_pan.index if puzzle.active_pan is not None else None,
            history=[self._weighing_info(r) for r in puzzle.history],
            can_guess=puzzle.can_guess,
            guess_correct=puzzle.last_guess_correct,
        )

    def _weighing_info(self, record: WeighingRecord) -> WeighingInfo:
        return WeighingInfo(
            left=list(record.left_ids),
            right=list(record.right_ids),
            outcome=record.outcome,
            symbol=record.symbol,
        )
