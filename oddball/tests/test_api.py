"""
Tests for API layer.

Tests:
- API service methods
- Guess gating
- Session lifecycle via API
- HTTP endpoints
"""

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.schemas import (
    BallRequest,
    CreateSessionRequest,
    Direction,
    ErrorCode,
    ErrorResponse,
    GuessRequest,
    SelectPanRequest,
    SessionStatus,
)
from ..api.service import APIService
from ..config import PuzzleConfig
from ..session import SessionManager
from .conftest import ScriptedRandom


@pytest.fixture
def scripted_service(config):
    """Service whose sessions always hide a heavy ball 4."""

    class ScriptedManager(SessionManager):
        def create_session(self, ball_count=None, seed=None, rng=None):
            return super().create_session(ball_count, seed, rng=ScriptedRandom(4, heavier=True))

    return APIService(session_manager=ScriptedManager(config))


def _place(service, session_id, pan, *ball_ids):
    service.select_pan(session_id, SelectPanRequest(pan=pan))
    for ball_id in ball_ids:
        service.place_ball(session_id, BallRequest(ball_id=ball_id))


class TestAPIService:
    """Tests for APIService."""

    def test_create_session(self, service):
        response = service.create_session(CreateSessionRequest())

        assert response.session_id
        assert response.status == SessionStatus.ACTIVE
        assert response.ball_count == 12
        assert response.puzzle.available_balls == list(range(1, 13))
        assert response.puzzle.active_pan is None
        assert not response.puzzle.can_guess

    def test_create_with_ball_count(self, service):
        response = service.create_session(CreateSessionRequest(ball_count=5))
        assert response.ball_count == 5

    def test_seed_returned(self, service):
        seeded = service.create_session(CreateSessionRequest(seed=7))

        assert seeded.seed == 7
        assert service.get_session(seeded.session_id).seed == 7
        assert service.create_session(CreateSessionRequest()).seed is None

    def test_get_nonexistent_session(self, service):
        response = service.get_session("nonexistent-id")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_end_session(self, service):
        session_id = service.create_session(CreateSessionRequest()).session_id

        assert service.end_session(session_id)
        assert isinstance(service.get_session(session_id), ErrorResponse)
        assert session_id not in service.list_sessions()

    def test_scale_actions(self, service):
        session_id = service.create_session(CreateSessionRequest()).session_id

        response = service.place_ball(session_id, BallRequest(ball_id=1))
        assert not response.applied
        assert response.ignored_reason

        response = service.select_pan(session_id, SelectPanRequest(pan=1))
        assert response.applied
        assert response.puzzle.active_pan == 1

        response = service.place_ball(session_id, BallRequest(ball_id=1))
        assert response.applied
        assert response.puzzle.right_pan == [1]
        assert 1 not in response.puzzle.available_balls

        response = service.remove_ball(session_id, BallRequest(ball_id=1))
        assert response.puzzle.right_pan == []

    def test_invalid_pan(self, service):
        session_id = service.create_session(CreateSessionRequest()).session_id
        response = service.select_pan(session_id, SelectPanRequest(pan=3))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INVALID_PAN

    def test_weigh(self, scripted_service):
        session_id = scripted_service.create_session(CreateSessionRequest()).session_id
        _place(scripted_service, session_id, 0, 1, 2)
        _place(scripted_service, session_id, 1, 3, 4)

        response = scripted_service.weigh(session_id)

        assert response.weighing.left == [1, 2]
        assert response.weighing.right == [3, 4]
        assert response.weighing.outcome == -1
        assert response.weighing.symbol == "<"
        assert response.puzzle.left_pan == []
        assert response.puzzle.right_pan == []
        assert len(response.puzzle.history) == 1

    def test_weigh_missing_session(self, service):
        response = service.weigh("missing")
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_guess_gated_until_two_weighings(self, scripted_service):
        session_id = scripted_service.create_session(CreateSessionRequest()).session_id
        guess = GuessRequest(ball_id=4, direction=Direction.HEAVIER)

        response = scripted_service.submit_guess(session_id, guess)
        assert response.error_code == ErrorCode.GUESS_NOT_AVAILABLE
        assert response.details == {"weighings": 0, "required": 2}

        scripted_service.weigh(session_id)
        response = scripted_service.submit_guess(session_id, guess)
        assert response.error_code == ErrorCode.GUESS_NOT_AVAILABLE

        scripted_service.weigh(session_id)
        response = scripted_service.submit_guess(session_id, guess)
        assert response.correct is True
        assert response.status == SessionStatus.SOLVED
        assert response.puzzle.guess_correct is True
        assert not response.puzzle.can_guess

    def test_guess_only_once(self, scripted_service):
        session_id = scripted_service.create_session(CreateSessionRequest()).session_id
        scripted_service.weigh(session_id)
        scripted_service.weigh(session_id)

        wrong = GuessRequest(ball_id=1, direction=Direction.LIGHTER)
        response = scripted_service.submit_guess(session_id, wrong)
        assert response.correct is False
        assert response.status == SessionStatus.FAILED

        right = GuessRequest(ball_id=4, direction=Direction.HEAVIER)
        response = scripted_service.submit_guess(session_id, right)
        assert response.error_code == ErrorCode.GUESS_NOT_AVAILABLE

    def test_guess_unknown_ball(self, scripted_service):
        session_id = scripted_service.create_session(CreateSessionRequest()).session_id
        scripted_service.weigh(session_id)
        scripted_service.weigh(session_id)

        response = scripted_service.submit_guess(
            session_id, GuessRequest(ball_id=99, direction=Direction.HEAVIER)
        )
        assert response.correct is None
        assert response.ignored_reason
        assert response.status == SessionStatus.ACTIVE
        assert response.puzzle.can_guess

    def test_sessions_are_independent(self, service):
        a = service.create_session(CreateSessionRequest()).session_id
        b = service.create_session(CreateSessionRequest()).session_id

        _place(service, a, 0, 1, 2)
        service.end_session(b)

        assert service.get_session(a).puzzle.left_pan == [1, 2]
        assert isinstance(service.get_session(b), ErrorResponse)

    def test_weights_not_exposed(self, scripted_service):
        response = scripted_service.create_session(CreateSessionRequest())
        assert "weight" not in response.model_dump_json()


class TestHTTP:
    """Tests through the FastAPI app."""

    @pytest.fixture
    def client(self, scripted_service):
        app = create_app(service=scripted_service, config=PuzzleConfig())
        return TestClient(app)

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_full_game(self, client):
        session = client.post("/api/v1/sessions", json={}).json()
        sid = session["session_id"]
        base = f"/api/v1/sessions/{sid}"

        client.post(f"{base}/pan", json={"pan": 0})
        for ball_id in (1, 2, 3):
            client.post(f"{base}/place", json={"ball_id": ball_id})
        client.post(f"{base}/pan", json={"pan": 1})
        for ball_id in (4, 5, 6):
            client.post(f"{base}/place", json={"ball_id": ball_id})

        response = client.post(f"{base}/weigh")
        assert response.status_code == 200
        assert response.json()["weighing"]["outcome"] == -1

        early = client.post(f"{base}/guess", json={"ball_id": 4, "direction": "heavier"})
        assert early.status_code == 409
        assert early.json()["error_code"] == "GUESS_NOT_AVAILABLE"

        client.post(f"{base}/weigh")
        response = client.post(f"{base}/guess", json={"ball_id": 4, "direction": "heavier"})
        assert response.status_code == 200
        assert response.json()["correct"] is True

        state = client.get(base).json()
        assert state["status"] == "solved"
        assert len(state["puzzle"]["history"]) == 2

    def test_session_not_found(self, client):
        response = client.get("/api/v1/sessions/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "SESSION_NOT_FOUND"

    def test_invalid_pan(self, client):
        sid = client.post("/api/v1/sessions", json={}).json()["session_id"]
        response = client.post(f"/api/v1/sessions/{sid}/pan", json={"pan": 2})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_PAN"

    def test_invalid_direction(self, client):
        sid = client.post("/api/v1/sessions", json={}).json()["session_id"]
        response = client.post(
            f"/api/v1/sessions/{sid}/guess", json={"ball_id": 1, "direction": "up"}
        )
        assert response.status_code == 422

    def test_list_and_delete(self, client):
        sid = client.post("/api/v1/sessions", json={"seed": 3}).json()["session_id"]
        assert sid in client.get("/api/v1/sessions").json()["sessions"]

        response = client.delete(f"/api/v1/sessions/{sid}")
        assert response.json()["success"] is True
        assert sid not in client.get("/api/v1/sessions").json()["sessions"]
