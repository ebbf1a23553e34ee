from __future__ import annotations

import random
from collections.abc import Callable, Generator

import pytest

from flappy.data_models import GamePhase
from flappy.events import EventBus, EventRecorder
from flappy.game import FlappyGame
from flappy.score_store import ScoreStore


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def recorder(bus: EventBus) -> EventRecorder:
    return EventRecorder(bus)


@pytest.fixture()
def store() -> Generator[ScoreStore, None, None]:
    s = ScoreStore(":memory:")
    yield s
    s.close()


@pytest.fixture()
def game(bus: EventBus, recorder: EventRecorder, store: ScoreStore) -> FlappyGame:
    # Request the recorder first so it subscribes before boot and sees every event
    g = FlappyGame(store=store, rng=random.Random(1234), bus=bus)
    g.boot()
    return g


@pytest.fixture()
def run_for() -> Callable[..., None]:
    """Ticks a game for `ms` milliseconds of simulated time in fixed steps."""

    def _run(game: FlappyGame, ms: float, step: float = 10.0) -> None:
        elapsed = 0.0
        while elapsed < ms:
            delta = min(step, ms - elapsed)
            elapsed += delta
            game.tick(elapsed, delta)

    return _run


@pytest.fixture()
def run_until() -> Callable[..., bool]:
    """Ticks until `predicate(game)` holds; False if it never did within `max_ms`."""

    def _run(game: FlappyGame, predicate: Callable[[FlappyGame], bool],
             max_ms: float = 10_000.0, step: float = 10.0) -> bool:
        elapsed = 0.0
        while elapsed < max_ms:
            elapsed += step
            game.tick(elapsed, step)
            if predicate(game):
                return True
        return False

    return _run


@pytest.fixture()
def running_game(game: FlappyGame, run_for: Callable[..., None]) -> FlappyGame:
    """A booted game that has been started and is in RUNNING."""
    game.activate()
    run_for(game, 100)
    assert game.phase is GamePhase.RUNNING
    return game
