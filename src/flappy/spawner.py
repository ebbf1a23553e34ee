"""
spawner.py: Procedural obstacle generation, scrolling and retirement.
"""

import logging
import random
import uuid
from typing import List, Optional

from .constants import (
    GROUND_Y, MIN_PIPE_GAP, MS_PER_SECOND, PIPE_MARGIN, PIPE_WIDTH,
    SCREEN_WIDTH, TOP_BOUNDARY,
)
from .data_models import ObstaclePair, Session
from .difficulty import INITIAL_DIFFICULTY, difficulty_for
from .events import EventBus, EventType
from .timers import RepeatingTimer

logger = logging.getLogger(__name__)


class ObstacleSpawner:
    """
    Owns the live pipe pairs of a session. New pairs are created off-screen
    right on a cooperative timer and scroll left until they leave the
    playfield, which is the only way a pair is destroyed during play.
    """

    def __init__(self, session: Session, bus: EventBus, rng: Optional[random.Random] = None,
                 spawn_x: float = SCREEN_WIDTH, pipe_width: float = PIPE_WIDTH,
                 floor_y: float = GROUND_Y, top_y: float = TOP_BOUNDARY,
                 margin: float = PIPE_MARGIN, min_gap: float = MIN_PIPE_GAP):
        self.session = session
        self.bus = bus
        self.rng = rng if rng is not None else random.Random()
        self.spawn_x = float(spawn_x)
        self.pipe_width = pipe_width
        self.floor_y = floor_y
        self.top_y = top_y
        self.margin = margin
        self.min_gap = min_gap
        self.timer = RepeatingTimer(session.difficulty.spawn_interval, self.spawn_cycle)

    @property
    def pairs(self) -> List[ObstaclePair]:
        return self.session.pairs

    @property
    def spawning(self) -> bool:
        return not self.timer.paused

    # -------- Difficulty --------

    def update_difficulty(self, score: int):
        self.session.difficulty = difficulty_for(score)
        self.timer.set_delay(self.session.difficulty.spawn_interval)
        logger.debug("Difficulty at score %d: %s", score, self.session.difficulty)

    # -------- Spawning --------

    def start(self):
        """Resets the curve to its initial values and begins spawning."""
        self.session.difficulty = INITIAL_DIFFICULTY
        self.timer.reset(INITIAL_DIFFICULTY.spawn_interval)
        self.timer.paused = False
        if not self.pairs:
            self.try_spawn()

    def spawn_cycle(self):
        self.try_spawn()

    def _gap_bounds(self, gap: float):
        low = self.top_y + gap / 2 + self.margin
        high = self.floor_y - gap / 2 - self.margin
        return low, high

    def _clamped_gap(self, gap: float) -> float:
        widest = self.floor_y - self.top_y - 2 * self.margin
        return max(self.min_gap, min(gap, widest))

    def try_spawn(self) -> Optional[ObstaclePair]:
        difficulty = self.session.difficulty
        for pair in self.pairs:
            if self.spawn_x - pair.x < difficulty.spacing:
                logger.debug("Spawn skipped: pair %s is %.1fpx from the edge",
                             pair.pair_id, self.spawn_x - pair.x)
                return None

        gap = self._clamped_gap(difficulty.gap_height)
        low, high = self._gap_bounds(gap)
        if low <= high:
            gap_center_y = self.rng.uniform(low, high)
        else:
            gap_center_y = (self.top_y + self.floor_y) / 2

        pair = ObstaclePair(
            pair_id=str(uuid.UUID(int=self.rng.getrandbits(128), version=4)),
            x=self.spawn_x,
            gap_center_y=gap_center_y,
            gap_height=gap,
            velocity_x=difficulty.velocity_x,
            width=self.pipe_width,
            floor_y=self.floor_y,
        )
        self.pairs.append(pair)
        logger.debug("Spawned pair %s gap_y=%.1f gap=%.1f", pair.pair_id, gap_center_y, gap)
        self.bus.emit(EventType.PAIR_CREATED, **pair.to_event_data())
        return pair

    # -------- Movement --------

    def advance(self, delta: float):
        scale = delta / MS_PER_SECOND
        for pair in self.pairs:
            pair.x = round(pair.x + pair.velocity_x * scale, 4)

        retired = [p for p in self.pairs if p.is_off_screen()]
        if not retired:
            return
        self.session.pairs = [p for p in self.pairs if not p.is_off_screen()]
        for pair in retired:
            logger.debug("Retired pair %s", pair.pair_id)
            self.bus.emit(EventType.PAIR_RETIRED, **pair.to_event_data())

    def update(self, time: float, delta: float):
        self.advance(delta)
        self.timer.advance(delta)

    # -------- Pause / stop --------

    def pause_timer(self):
        self.timer.paused = True

    def suspend(self):
        """Freezes everything in place: no spawns, no movement."""
        self.timer.paused = True
        for pair in self.pairs:
            pair.velocity_x = 0.0

    def resume(self):
        # Pairs pick up the current difficulty, not the one they were born with
        velocity = self.session.difficulty.velocity_x
        for pair in self.pairs:
            pair.velocity_x = velocity
        self.timer.paused = False

    def stop_and_clear(self):
        self.timer.paused = True
        self.session.pairs = []
