from __future__ import annotations

import pytest

from flappy.constants import MAX_PIPE_VELOCITY_X, MIN_PIPE_GAP, MIN_PIPE_SPACING, MS_PER_SECOND
from flappy.difficulty import INITIAL_DIFFICULTY, difficulty_for, soundtrack_level

SCORES = range(0, 400)


def test_initial_difficulty() -> None:
    d = difficulty_for(0)
    assert d == INITIAL_DIFFICULTY
    assert d.velocity_x == -150
    assert d.gap_height == 150
    assert d.spacing == 250
    assert d.spawn_interval == 2000


def test_gap_and_spacing_shrink_stepwise() -> None:
    assert difficulty_for(1).gap_height == 150
    assert difficulty_for(2).gap_height == 148
    assert difficulty_for(2).spacing == 248
    assert difficulty_for(3).spacing == 248


def test_velocity_grows_linearly_then_floors() -> None:
    assert difficulty_for(40).velocity_x == -230
    assert difficulty_for(75).velocity_x == MAX_PIPE_VELOCITY_X
    assert difficulty_for(10_000).velocity_x == -300


def test_curve_is_monotonic_and_bounded() -> None:
    previous = difficulty_for(0)
    for score in SCORES:
        d = difficulty_for(score)
        assert abs(d.velocity_x) >= abs(previous.velocity_x)
        assert d.gap_height <= previous.gap_height
        assert d.spacing <= previous.spacing
        assert abs(d.velocity_x) <= abs(MAX_PIPE_VELOCITY_X)
        assert d.gap_height >= MIN_PIPE_GAP
        assert d.spacing >= MIN_PIPE_SPACING
        previous = d


@pytest.mark.parametrize("score", SCORES)
def test_spawn_cadence_never_outruns_spacing(score: int) -> None:
    d = difficulty_for(score)
    travelled = d.spawn_interval / MS_PER_SECOND * abs(d.velocity_x)
    assert travelled >= d.spacing


def test_negative_score_is_treated_as_zero() -> None:
    assert difficulty_for(-5) == INITIAL_DIFFICULTY


def test_soundtrack_levels() -> None:
    assert soundtrack_level(0) == 1
    assert soundtrack_level(19) == 1
    assert soundtrack_level(20) == 2
    assert soundtrack_level(59) == 3
    assert soundtrack_level(100) == 6
    assert soundtrack_level(500) == 6
