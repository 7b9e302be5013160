"""Score-driven pacing: how fast the snake moves and the level shown."""

from __future__ import annotations

BASE_INTERVAL = 0.15
MIN_INTERVAL = 0.05
SPEED_DECREMENT = 0.02
SPEED_SCORE_STEP = 30
LEVEL_SCORE_STEP = 50


def speed_interval(score: int) -> float:
    """Seconds between snake ticks at *score*, clamped at ``MIN_INTERVAL``."""
    steps = max(0, score) // SPEED_SCORE_STEP
    return round(max(MIN_INTERVAL, BASE_INTERVAL - steps * SPEED_DECREMENT), 6)


def difficulty_level(score: int) -> int:
    return max(0, score) // LEVEL_SCORE_STEP + 1
