"""
Puzzle interface - the operations a presentation layer calls.

Every mutating operation takes a state and returns a new one; the
input state is never modified.

    state = init_session(12, random.Random(7))
    state = select_pan(state, 0)
    state = place_ball(state, 1)
    state, record = weigh(state)
    state, correct = submit_guess(state, 5, "heavier")
"""

from __future__ import annotations
import random

from .state import Ball, GuessDirection, Pan, PuzzleState, WeighingRecord
from .action import Action
from .generator import DEFAULT_BASELINE, DEFAULT_OFFSET, generate_balls
from .reducer import apply_action


def init_session(
    n: int = 12,
    rng: random.Random | None = None,
    baseline: float = DEFAULT_BASELINE,
    offset: float = DEFAULT_OFFSET,
    min_weighings_to_guess: int = 2,
    with_anomaly: bool = True,
) -> PuzzleState:
    """Create a fresh puzzle with n balls and a hidden odd ball."""
    if min_weighings_to_guess < 0:
        raise ValueError("min_weighings_to_guess cannot be negative")
    balls = generate_balls(
        n, rng=rng, baseline=baseline, offset=offset, with_anomaly=with_anomaly
    )
    return PuzzleState(
        balls=balls,
        baseline=baseline,
        min_weighings_to_guess=min_weighings_to_guess,
    )


def _reduce(state: PuzzleState, action: Action):
    result = apply_action(state, action)
    if not result.success:
        # Factories always build complete payloads
        raise ValueError(result.error)
    return result


def select_pan(state: PuzzleState, index: Pan | int) -> PuzzleState:
    return _reduce(state, Action.select_pan(index)).new_state


def place_ball(state: PuzzleState, ball_id: int) -> PuzzleState:
    """Put a ball on the active pan. No-op without a pan or if already placed."""
    return _reduce(state, Action.place_ball(ball_id)).new_state


def remove_ball(state: PuzzleState, ball_id: int) -> PuzzleState:
    """Take a ball off whichever pan holds it. No-op if it is on neither."""
    return _reduce(state, Action.remove_ball(ball_id)).new_state


def weigh(state: PuzzleState) -> tuple[PuzzleState, WeighingRecord]:
    """Compare the pans, record the outcome and empty both pans."""
    result = _reduce(state, Action.weigh())
    return result.new_state, result.weighing


def submit_guess(
    state: PuzzleState,
    ball_id: int,
    direction: GuessDirection | str,
) -> tuple[PuzzleState, bool | None]:
    """
    Accuse a ball of being heavier or lighter.

    Returns the new state and whether the guess was correct. For an
    unknown ball id the state is unchanged and the result is None.
    """
    result = _reduce(state, Action.submit_guess(ball_id, direction))
    return result.new_state, result.guess_correct


def available_balls(state: PuzzleState) -> tuple[Ball, ...]:
    return state.available_balls


def pans(state: PuzzleState) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """(left, right) ball ids."""
    return state.left, state.right


def history(state: PuzzleState) -> tuple[WeighingRecord, ...]:
    return state.history


def guess_result(state: PuzzleState) -> bool | None:
    return state.last_guess_correct


def can_guess(state: PuzzleState) -> bool:
    """Whether enough weighings have been made and no guess was submitted yet."""
    return state.can_guess
