"""
Engine Core - Deterministic puzzle state management.

The engine is the runtime that:
1. Generates the ball set with a hidden odd ball
2. Manages PuzzleState
3. Applies actions via the reducer
4. Evaluates weighings and verifies guesses
"""

from .state import Ball, GuessDirection, Pan, PuzzleState, WeighingRecord
from .generator import generate_balls
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action, weighing_outcome
from .puzzle import (
    init_session,
    select_pan,
    place_ball,
    remove_ball,
    weigh,
    submit_guess,
    available_balls,
    pans,
    history,
    guess_result,
    can_guess,
)

__all__ = [
    "Ball",
    "GuessDirection",
    "Pan",
    "PuzzleState",
    "WeighingRecord",
    "generate_balls",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "weighing_outcome",
    "init_session",
    "select_pan",
    "place_ball",
    "remove_ball",
    "weigh",
    "submit_guess",
    "available_balls",
    "pans",
    "history",
    "guess_result",
    "can_guess",
]
