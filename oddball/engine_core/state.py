"""
Puzzle State - Immutable container for one puzzle session.

Design principles:
- Immutable: all mutations return new state
- The ball set is fixed at session start; only pan membership changes
- History is append-only
- Two pans, never more
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum


class Pan(Enum):
    """The two pans of the balance scale."""
    LEFT = 0
    RIGHT = 1

    @property
    def index(self) -> int:
        return self.value

    @classmethod
    def from_index(cls, index: int) -> Pan:
        """Map a pan index (0 or 1) to a Pan."""
        for pan in cls:
            if pan.value == index:
                return pan
        raise ValueError(f"Invalid pan index: {index} (expected 0 or 1)")


class GuessDirection(Enum):
    """Which way the player claims the odd ball deviates."""
    HEAVIER = "heavier"
    LIGHTER = "lighter"

    @classmethod
    def parse(cls, value: str | GuessDirection) -> GuessDirection:
        if isinstance(value, GuessDirection):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid guess direction: {value!r}")


@dataclass(frozen=True)
class Ball:
    """
    A ball in the puzzle.

    ball_id is stable for the whole session (1..N).
    """
    ball_id: int
    weight: float

    def is_anomalous(self, baseline: float) -> bool:
        return self.weight != baseline

    def anomaly_direction(self, baseline: float) -> GuessDirection | None:
        """Direction this ball deviates from baseline, or None if it doesn't."""
        if self.weight > baseline:
            return GuessDirection.HEAVIER
        if self.weight < baseline:
            return GuessDirection.LIGHTER
        return None


@dataclass(frozen=True)
class WeighingRecord:
    """
    Snapshot of one completed weighing.

    outcome is +1 when the left pan is heavier, -1 when the right pan
    is heavier and 0 when they balance.
    """
    left_balls: tuple[Ball, ...]
    right_balls: tuple[Ball, ...]
    outcome: int

    @property
    def left_ids(self) -> tuple[int, ...]:
        return tuple(b.ball_id for b in self.left_balls)

    @property
    def right_ids(self) -> tuple[int, ...]:
        return tuple(b.ball_id for b in self.right_balls)

    @property
    def symbol(self) -> str:
        """Left-versus-right comparison symbol."""
        if self.outcome > 0:
            return ">"
        if self.outcome < 0:
            return "<"
        return "="


@dataclass(frozen=True)
class PuzzleState:
    """
    Complete puzzle state at a point in time.

    All state changes go through the reducer.
    """
    balls: tuple[Ball, ...]
    baseline: float = 1.0

    # Ball ids currently on each pan, in placement order
    left: tuple[int, ...] = ()
    right: tuple[int, ...] = ()
    active_pan: Pan | None = None

    history: tuple[WeighingRecord, ...] = ()
    last_guess_correct: bool | None = None

    # Weighings required before the guess is offered to the player
    min_weighings_to_guess: int = 2

    @property
    def ball_ids(self) -> tuple[int, ...]:
        return tuple(b.ball_id for b in self.balls)

    def get_ball(self, ball_id: int) -> Ball | None:
        """Get ball by ID."""
        for b in self.balls:
            if b.ball_id == ball_id:
                return b
        return None

    def pan(self, pan: Pan) -> tuple[int, ...]:
        return self.left if pan is Pan.LEFT else self.right

    def pan_of(self, ball_id: int) -> Pan | None:
        """Which pan holds ball_id, if any."""
        if ball_id in self.left:
            return Pan.LEFT
        if ball_id in self.right:
            return Pan.RIGHT
        return None

    def pan_balls(self, pan: Pan) -> tuple[Ball, ...]:
        by_id = {b.ball_id: b for b in self.balls}
        return tuple(by_id[i] for i in self.pan(pan))

    @property
    def available_balls(self) -> tuple[Ball, ...]:
        """Balls not on either pan, in ball order."""
        placed = set(self.left) | set(self.right)
        return tuple(b for b in self.balls if b.ball_id not in placed)

    @property
    def anomalous_ball(self) -> Ball | None:
        for b in self.balls:
            if b.is_anomalous(self.baseline):
                return b
        return None

    @property
    def can_guess(self) -> bool:
        """Whether the guess should be offered to the player."""
        return (
            self.last_guess_correct is None
            and len(self.history) >= self.min_weighings_to_guess
        )

    def with_pan(self, pan: Pan, ball_ids: tuple[int, ...]) -> PuzzleState:
        """Return new state with one pan's contents replaced."""
        if pan is Pan.LEFT:
            return self._copy_with(left=ball_ids)
        return self._copy_with(right=ball_ids)

    def _copy_with(self, **kwargs) -> PuzzleState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
