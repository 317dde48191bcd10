"""
Reducer - Applies actions to puzzle state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Tolerated conditions (no pan selected, ball already placed, unknown
  ball, empty weighing) are no-ops, not failures
- Returns ActionResult with success/failure
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import math

from .state import Pan, PuzzleState, WeighingRecord, GuessDirection
from .action import Action, ActionType, ActionResult

logger = logging.getLogger(__name__)


def weighing_outcome(left: float, right: float) -> int:
    """Sign of left - right: +1, -1 or 0."""
    diff = left - right
    if diff > 0:
        return 1
    if diff < 0:
        return -1
    return 0


@dataclass
class Reducer:
    """
    Reducer applies actions to puzzle state.

    Stateless - all state is in PuzzleState.
    """

    def apply(self, state: PuzzleState, action: Action) -> ActionResult:
        """
        Apply an action to the puzzle state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code="INVALID_ACTION")

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(state, action)
        except Exception as e:
            logger.exception("Handler for %s raised", action.action_type.value)
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR")

        if result.ignored:
            logger.debug("Ignored %s: %s", action.action_type.value, result.ignored)
        return result

    def _validate_action(self, state: PuzzleState, action: Action) -> str | None:
        """
        Check the payload carries what the action type needs.

        Returns error message if invalid, None if valid.
        """
        payload = action.payload
        if action.action_type == ActionType.SELECT_PAN and payload.pan is None:
            return "select_pan requires a pan"
        if action.action_type in {
            ActionType.PLACE_BALL,
            ActionType.REMOVE_BALL,
            ActionType.SUBMIT_GUESS,
        } and payload.ball_id is None:
            return f"{action.action_type.value} requires a ball_id"
        if action.action_type == ActionType.SUBMIT_GUESS and payload.direction is None:
            return "submit_guess requires a direction"
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SELECT_PAN: self._handle_select_pan,
            ActionType.PLACE_BALL: self._handle_place_ball,
            ActionType.REMOVE_BALL: self._handle_remove_ball,
            ActionType.WEIGH: self._handle_weigh,
            ActionType.SUBMIT_GUESS: self._handle_submit_guess,
        }
        return handlers.get(action_type)

    def _handle_select_pan(self, state: PuzzleState, action: Action) -> ActionResult:
        """Handle pan selection. Always succeeds."""
        pan = action.payload.pan
        new_state = state._copy_with(active_pan=pan)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Selected {pan.name.lower()} pan"],
        )

    def _handle_place_ball(self, state: PuzzleState, action: Action) -> ActionResult:
        """Handle placing a ball on the active pan."""
        ball_id = action.payload.ball_id

        if state.active_pan is None:
            return ActionResult.unchanged(state, "No pan selected")

        if state.get_ball(ball_id) is None:
            return ActionResult.unchanged(state, f"Ball {ball_id} not found")

        current = state.pan_of(ball_id)
        if current is not None:
            return ActionResult.unchanged(
                state, f"Ball {ball_id} already on {current.name.lower()} pan"
            )

        pan = state.active_pan
        new_state = state.with_pan(pan, state.pan(pan) + (ball_id,))
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Placed ball {ball_id} on {pan.name.lower()} pan"],
        )

    def _handle_remove_ball(self, state: PuzzleState, action: Action) -> ActionResult:
        """Handle removing a ball from whichever pan holds it."""
        ball_id = action.payload.ball_id

        pan = state.pan_of(ball_id)
        if pan is None:
            return ActionResult.unchanged(state, f"Ball {ball_id} is not on a pan")

        remaining = tuple(i for i in state.pan(pan) if i != ball_id)
        new_state = state.with_pan(pan, remaining)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Removed ball {ball_id} from {pan.name.lower()} pan"],
        )

    def _handle_weigh(self, state: PuzzleState, action: Action) -> ActionResult:
        """
        Handle a weighing.

        Compares the pans, appends the record to history and empties both
        pans. The active pan selection is kept. Empty pans balance.
        """
        left_balls = state.pan_balls(Pan.LEFT)
        right_balls = state.pan_balls(Pan.RIGHT)

        outcome = weighing_outcome(
            math.fsum(b.weight for b in left_balls),
            math.fsum(b.weight for b in right_balls),
        )
        record = WeighingRecord(
            left_balls=left_balls,
            right_balls=right_balls,
            outcome=outcome,
        )

        new_state = state._copy_with(
            left=(),
            right=(),
            history=state.history + (record,),
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[
                f"Weighed {list(record.left_ids)} {record.symbol} {list(record.right_ids)}"
            ],
            weighing=record,
        )

    def _handle_submit_guess(self, state: PuzzleState, action: Action) -> ActionResult:
        """
        Handle the player's guess.

        Correct when the named ball deviates from baseline in the named
        direction. Unknown ball ids are ignored.
        """
        ball_id = action.payload.ball_id
        direction: GuessDirection = action.payload.direction

        ball = state.get_ball(ball_id)
        if ball is None:
            return ActionResult.unchanged(state, f"Ball {ball_id} not found")

        correct = ball.anomaly_direction(state.baseline) == direction
        new_state = state._copy_with(last_guess_correct=correct)

        logger.info(
            "Guess ball %s %s after %d weighing(s): %s",
            ball_id, direction.value, len(state.history),
            "correct" if correct else "incorrect",
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[
                f"Guessed ball {ball_id} is {direction.value}: "
                f"{'correct' if correct else 'incorrect'}"
            ],
            guess_correct=correct,
        )


def apply_action(state: PuzzleState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
