"""
scoring.py: Per-tick score detection and collision resolution.
"""

import logging
from typing import Callable, Iterable, Optional

from .actor import Actor
from .constants import GROUND_Y, MILESTONE_INTERVAL, TOP_BOUNDARY
from .data_models import CollisionKind, ObstaclePair, Session
from .difficulty import soundtrack_level
from .events import EventBus, EventType

logger = logging.getLogger(__name__)


class ScoreTracker:
    """
    Awards one point per pair once the pair's scoring pipe is fully behind
    the bird. The pair is marked scored as a whole, so neither member can
    award it again.
    """

    def __init__(self, bus: EventBus, on_score: Optional[Callable[[int], None]] = None,
                 milestone_interval: int = MILESTONE_INTERVAL):
        self.bus = bus
        self.on_score = on_score
        self.milestone_interval = milestone_interval

    def has_passed(self, actor: Actor, pair: ObstaclePair) -> bool:
        return pair.scoring_member.bounds.right < actor.bounds.left

    def check(self, session: Session) -> int:
        """Scores every newly passed pair; returns the points awarded this call."""
        awarded = 0
        for pair in list(session.pairs):
            if pair.scored or not self.has_passed(session.actor, pair):
                continue
            pair.scored = True
            session.score += 1
            awarded += 1
            logger.info("Score: %d (pair %s)", session.score, pair.pair_id)
            self.bus.emit(EventType.SCORE_CHANGED, score=session.score, pair_id=pair.pair_id)
            self._presentation_hooks(session)
            if self.on_score is not None:
                self.on_score(session.score)
        return awarded

    def _presentation_hooks(self, session: Session):
        level = soundtrack_level(session.score)
        if level > session.soundtrack_level:
            session.soundtrack_level = level
            self.bus.emit(EventType.SOUNDTRACK_CHANGED, level=level)

        if session.score > 0 and session.score % self.milestone_interval == 0:
            self.bus.emit(EventType.SCORE_MILESTONE, score=session.score)
            session.background_is_day = not session.background_is_day
            self.bus.emit(EventType.BACKGROUND_CHANGED, is_day=session.background_is_day)


class CollisionResolver:
    """Checks the bird against the ground, the top boundary and every live pipe."""

    def __init__(self, ground_y: float = GROUND_Y, top_boundary: float = TOP_BOUNDARY):
        self.ground_y = ground_y
        self.top_boundary = top_boundary

    def check(self, actor: Actor, pairs: Iterable[ObstaclePair]) -> Optional[CollisionKind]:
        """Returns the first collision found, or None."""
        box = actor.bounds
        if box.bottom >= self.ground_y:
            return CollisionKind.GROUND

        for pair in pairs:
            # Broad phase: skip pairs that are not level with the bird
            if pair.right <= box.left or pair.x >= box.right:
                continue
            if any(member.bounds.intersects(box) for member in pair.members):
                return CollisionKind.OBSTACLE

        if actor.y < self.top_boundary:
            return CollisionKind.TOP
        return None
