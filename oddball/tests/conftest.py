"""
Pytest fixtures for Oddball tests.
"""

import pytest

from ..config import PuzzleConfig
from ..engine_core.state import Ball, PuzzleState
from ..engine_core.puzzle import init_session
from ..session import SessionManager
from ..api.service import APIService


class ScriptedRandom:
    """
    Random source that picks a fixed odd ball and direction.

    The generator calls randint(1, n) for the odd ball, then random()
    for the direction (> 0.5 is heavier).
    """

    def __init__(self, odd_id: int, heavier: bool):
        self.odd_id = odd_id
        self.heavier = heavier

    def randint(self, a, b):
        return self.odd_id

    def random(self):
        return 0.9 if self.heavier else 0.1


@pytest.fixture
def heavy_state() -> PuzzleState:
    """3 balls, ball 2 heavier (1.01 vs baseline 1.0)."""
    return init_session(3, rng=ScriptedRandom(2, heavier=True))


@pytest.fixture
def light_state() -> PuzzleState:
    """12 balls, ball 7 lighter."""
    return init_session(12, rng=ScriptedRandom(7, heavier=False))


@pytest.fixture
def fair_state() -> PuzzleState:
    """12 balls, none anomalous."""
    return init_session(12, with_anomaly=False)


@pytest.fixture
def zero_baseline_state() -> PuzzleState:
    """The baseline-0 convention: ordinary balls weigh 0."""
    balls = tuple(Ball(ball_id=i, weight=0.0) for i in range(1, 5))
    balls = balls[:2] + (Ball(ball_id=3, weight=-0.01),) + balls[3:]
    return PuzzleState(balls=balls, baseline=0.0)


@pytest.fixture
def config() -> PuzzleConfig:
    return PuzzleConfig(ball_count=12, min_weighings_to_guess=2)


@pytest.fixture
def service(config) -> APIService:
    """Create a fresh API service."""
    return APIService(session_manager=SessionManager(config))
