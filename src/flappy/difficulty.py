"""
difficulty.py: Deterministic mapping from cumulative score to obstacle tuning.
"""

from .constants import (
    DIFFICULTY_STEP_SCORE, INITIAL_PIPE_GAP, INITIAL_PIPE_SPACING,
    INITIAL_PIPE_VELOCITY_X, INITIAL_SPAWN_DELAY_MS, MAX_PIPE_VELOCITY_X,
    MIN_PIPE_GAP, MIN_PIPE_SPACING, MIN_SPAWN_DELAY_MS, MS_PER_SECOND,
    PIPE_GAP_STEP, PIPE_SPACING_STEP, PIPE_VELOCITY_X_PER_SCORE,
    SOUNDTRACK_THRESHOLDS, SPAWN_DELAY_DECREMENT_PER_SCORE,
)
from .data_models import DifficultyState


def pipe_velocity(score: int) -> float:
    velocity = INITIAL_PIPE_VELOCITY_X + score * PIPE_VELOCITY_X_PER_SCORE
    # Velocities are negative: the floor caps the magnitude
    return max(velocity, MAX_PIPE_VELOCITY_X)


def _stepped(initial: float, step: float, floor: float, score: int) -> float:
    steps = score // DIFFICULTY_STEP_SCORE
    return max(initial - steps * step, floor)


def gap_height(score: int) -> float:
    return _stepped(INITIAL_PIPE_GAP, PIPE_GAP_STEP, MIN_PIPE_GAP, score)


def pipe_spacing(score: int) -> float:
    return _stepped(INITIAL_PIPE_SPACING, PIPE_SPACING_STEP, MIN_PIPE_SPACING, score)


def spawn_interval(score: int) -> float:
    """
    Milliseconds between spawns. Never shorter than the time a pair needs
    to travel `spacing` pixels, otherwise consecutive pairs would overlap.
    """
    decayed = max(INITIAL_SPAWN_DELAY_MS - score * SPAWN_DELAY_DECREMENT_PER_SCORE,
                  MIN_SPAWN_DELAY_MS)
    travel = pipe_spacing(score) / abs(pipe_velocity(score)) * MS_PER_SECOND
    return max(decayed, travel)


def difficulty_for(score: int) -> DifficultyState:
    score = max(0, int(score))
    return DifficultyState(
        velocity_x=pipe_velocity(score),
        gap_height=gap_height(score),
        spacing=pipe_spacing(score),
        spawn_interval=spawn_interval(score),
    )


INITIAL_DIFFICULTY = difficulty_for(0)


def soundtrack_level(score: int) -> int:
    """Music level 1..6 for a running session; each threshold reached adds one."""
    return 1 + sum(1 for threshold in SOUNDTRACK_THRESHOLDS if score >= threshold)
