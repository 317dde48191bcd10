"""
Configuration - Environment-driven puzzle settings.

Variables:
    ODDBALL_BALL_COUNT              Number of balls per session (default 12)
    ODDBALL_ANOMALY_OFFSET          Weight offset of the odd ball (default 0.01)
    ODDBALL_BASELINE_WEIGHT         Weight of every ordinary ball (default 1.0)
    ODDBALL_MIN_WEIGHINGS_TO_GUESS  Weighings required before guessing (default 2)
    ODDBALL_LOG_LEVEL               Logging level name (default WARNING)
    ALLOWED_ORIGINS                 Comma separated CORS origins (default *)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os

DEFAULT_BALL_COUNT = 12
DEFAULT_ANOMALY_OFFSET = 0.01
DEFAULT_BASELINE_WEIGHT = 1.0
DEFAULT_MIN_WEIGHINGS_TO_GUESS = 2

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class PuzzleConfig:
    """Settings shared by every session created from this config."""
    ball_count: int = DEFAULT_BALL_COUNT
    anomaly_offset: float = DEFAULT_ANOMALY_OFFSET
    baseline_weight: float = DEFAULT_BASELINE_WEIGHT
    min_weighings_to_guess: int = DEFAULT_MIN_WEIGHINGS_TO_GUESS
    log_level: str = "WARNING"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        if self.ball_count < 1:
            raise ValueError("ball_count must be at least 1")
        if self.anomaly_offset <= 0:
            raise ValueError("anomaly_offset must be positive")
        if (
            self.baseline_weight + self.anomaly_offset == self.baseline_weight
            or self.baseline_weight - self.anomaly_offset == self.baseline_weight
        ):
            raise ValueError("anomaly_offset is too small to change baseline_weight")
        if self.min_weighings_to_guess < 0:
            raise ValueError("min_weighings_to_guess cannot be negative")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a valid {cast.__name__}, got {raw!r}")


def _env_log_level() -> str:
    raw = os.getenv("ODDBALL_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
    if raw not in LOG_LEVELS:
        raise ValueError(
            f"ODDBALL_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw!r}"
        )
    return raw


def load_config() -> PuzzleConfig:
    """Build a PuzzleConfig from the process environment."""
    return PuzzleConfig(
        ball_count=_env_number("ODDBALL_BALL_COUNT", DEFAULT_BALL_COUNT, int),
        anomaly_offset=_env_number("ODDBALL_ANOMALY_OFFSET", DEFAULT_ANOMALY_OFFSET, float),
        baseline_weight=_env_number("ODDBALL_BASELINE_WEIGHT", DEFAULT_BASELINE_WEIGHT, float),
        min_weighings_to_guess=_env_number(
            "ODDBALL_MIN_WEIGHINGS_TO_GUESS", DEFAULT_MIN_WEIGHINGS_TO_GUESS, int
        ),
        log_level=_env_log_level(),
        allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
    )


def configure_logging(level: str = "WARNING"):
    """Configure root logging for the CLI and server entry points."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
