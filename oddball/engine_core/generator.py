"""
Ball Set Generator - Creates the balls for a new session.

Exactly one ball is given an anomalous weight unless with_anomaly is
False. The random source is injectable so tests can pin the odd ball
and its direction.
"""

from __future__ import annotations
import random

from .state import Ball

DEFAULT_BASELINE = 1.0
DEFAULT_OFFSET = 0.01


def generate_balls(
    n: int,
    rng: random.Random | None = None,
    baseline: float = DEFAULT_BASELINE,
    offset: float = DEFAULT_OFFSET,
    with_anomaly: bool = True,
) -> tuple[Ball, ...]:
    """
    Generate n balls with ids 1..n.

    Args:
        n: Number of balls
        rng: Random source (a fresh unseeded Random if None)
        baseline: Weight of every ordinary ball
        offset: How far the odd ball deviates from baseline
        with_anomaly: If False, every ball has baseline weight

    Returns:
        Balls in id order
    """
    if n < 1:
        raise ValueError("Ball count must be at least 1")
    if offset <= 0:
        raise ValueError("Anomaly offset must be positive")
    if baseline + offset == baseline or baseline - offset == baseline:
        raise ValueError(
            f"Anomaly offset {offset} is lost in rounding against baseline {baseline}"
        )

    rng = rng or random.Random()

    odd_id = None
    odd_weight = baseline
    if with_anomaly:
        odd_id = rng.randint(1, n)
        # Heavier on a coin flip
        odd_weight = baseline + offset if rng.random() > 0.5 else baseline - offset

    return tuple(
        Ball(ball_id=i, weight=odd_weight if i == odd_id else baseline)
        for i in range(1, n + 1)
    )
