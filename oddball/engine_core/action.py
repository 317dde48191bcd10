"""
Action System - Actions, payloads, and results.

Actions represent the player's moves on the puzzle:
1. Scale actions (select pan, place ball, remove ball)
2. Weighing
3. The final guess

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import GuessDirection, Pan, PuzzleState, WeighingRecord


class ActionType(Enum):
    """Types of actions in the system."""
    SELECT_PAN = "select_pan"
    PLACE_BALL = "place_ball"
    REMOVE_BALL = "remove_ball"
    WEIGH = "weigh"
    SUBMIT_GUESS = "submit_guess"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Validation happens in the reducer.
    """
    ball_id: int | None = None
    pan: Pan | None = None
    direction: GuessDirection | None = None


@dataclass
class Action:
    """A complete action to be applied to the puzzle state."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def select_pan(cls, pan: Pan | int) -> Action:
        """Factory for pan selection."""
        if not isinstance(pan, Pan):
            pan = Pan.from_index(pan)
        return cls(
            action_type=ActionType.SELECT_PAN,
            payload=ActionPayload(pan=pan),
        )

    @classmethod
    def place_ball(cls, ball_id: int) -> Action:
        """Factory for placing a ball on the active pan."""
        return cls(
            action_type=ActionType.PLACE_BALL,
            payload=ActionPayload(ball_id=ball_id),
        )

    @classmethod
    def remove_ball(cls, ball_id: int) -> Action:
        """Factory for taking a ball off whichever pan holds it."""
        return cls(
            action_type=ActionType.REMOVE_BALL,
            payload=ActionPayload(ball_id=ball_id),
        )

    @classmethod
    def weigh(cls) -> Action:
        return cls(action_type=ActionType.WEIGH)

    @classmethod
    def submit_guess(cls, ball_id: int, direction: GuessDirection | str) -> Action:
        """Factory for the player's accusation."""
        return cls(
            action_type=ActionType.SUBMIT_GUESS,
            payload=ActionPayload(
                ball_id=ball_id,
                direction=GuessDirection.parse(direction),
            ),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded; unchanged state for ignored actions)
    - Why the action was ignored, if it was a no-op
    - Errors (if failed)
    """
    success: bool
    new_state: PuzzleState | None = None
    error: str | None = None
    error_code: str | None = None

    # Set when a tolerated action left the state unchanged
    ignored: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)
    weighing: WeighingRecord | None = None
    guess_correct: bool | None = None

    @property
    def applied(self) -> bool:
        return self.success and self.ignored is None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def unchanged(cls, state: PuzzleState, reason: str) -> ActionResult:
        """Create a result for a tolerated no-op."""
        return cls(success=True, new_state=state, ignored=reason)

    @classmethod
    def success_with_state(
        cls,
        state: PuzzleState,
        changes: list[str] | None = None,
        **extra: Any,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            **extra,
        )
