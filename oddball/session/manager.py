"""
Session Manager - Creates and manages puzzle sessions.

LIFECYCLE:
1. Player starts a session -> ball set generated, anomaly hidden
2. During play:
   - Player selects pans, places and removes balls
   - Player weighs; outcome appended to history
   - After enough weighings the guess is offered
3. Player guesses -> session is SOLVED or FAILED
4. Session ends -> removed from memory

PERSISTENCE RULES:
- No database
- Puzzle state is ephemeral (session-scoped only)
- Sessions never share state

Each session carries its own lock; callers mutate a session only while
holding it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import threading
import time
import uuid

from ..config import PuzzleConfig
from ..engine_core import PuzzleState, init_session

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a puzzle session."""
    ACTIVE = "active"  # Weighing in progress
    SOLVED = "solved"  # Correct guess submitted
    FAILED = "failed"  # Incorrect guess submitted
    ABANDONED = "abandoned"  # Player quit


@dataclass
class Session:
    """
    An ephemeral puzzle session.

    The session is destroyed when the player ends it.
    State is NOT persisted.
    """
    session_id: str
    puzzle: PuzzleState
    created_at: float
    seed: int | None = None
    state: SessionState = SessionState.ACTIVE
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def is_active(self) -> bool:
        """Check if session is still being played."""
        return self.state == SessionState.ACTIVE

    def update(self, puzzle: PuzzleState):
        """Store a new puzzle state and refresh the session state."""
        self.puzzle = puzzle
        if puzzle.last_guess_correct is True:
            self.state = SessionState.SOLVED
        elif puzzle.last_guess_correct is False:
            self.state = SessionState.FAILED


class SessionManager:
    """
    Manages puzzle sessions.

    Responsibilities:
    - Create sessions from the puzzle config
    - Track sessions
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: PuzzleConfig | None = None):
        self.config = config or PuzzleConfig()
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        ball_count: int | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> Session:
        """
        Create a new puzzle session.

        Args:
            ball_count: Number of balls (config default if None)
            seed: Seed for a reproducible puzzle
            rng: Explicit random source, overrides seed

        Returns:
            New Session ready to play
        """
        session_id = str(uuid.uuid4())
        puzzle = init_session(
            self.config.ball_count if ball_count is None else ball_count,
            rng=rng or random.Random(seed),
            baseline=self.config.baseline_weight,
            offset=self.config.anomaly_offset,
            min_weighings_to_guess=self.config.min_weighings_to_guess,
        )

        session = Session(
            session_id=session_id,
            puzzle=puzzle,
            created_at=time.time(),
            seed=seed,
        )
        with self._lock:
            self._sessions[session_id] = session

        logger.info("Created session %s with %d balls", session_id, len(puzzle.balls))
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        with self._lock:
            return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and remove it from memory.

        Returns False if the session did not exist.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if not session:
            return False

        if session.is_active():
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still being played."""
        with self._lock:
            return [
                sid for sid, session in self._sessions.items()
                if session.is_active()
            ]

    def list_sessions(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove sessions older than max_age_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        with self._lock:
            to_remove = [
                session_id for session_id, session in self._sessions.items()
                if current_time - session.created_at > max_age_seconds
            ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
