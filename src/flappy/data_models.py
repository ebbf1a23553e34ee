"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from .constants import GROUND_Y, PIPE_WIDTH, TOP_BOUNDARY

if TYPE_CHECKING:
    from .actor import Actor


class GamePhase(str, Enum):
    PRESTART = "prestart"
    RUNNING = "running"
    GAMEOVER = "gameover"
    PAUSED = "paused"


class CollisionKind(str, Enum):
    GROUND = "ground"
    OBSTACLE = "obstacle"
    TOP = "top"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box in screen coordinates (y grows downwards)."""
    left: float
    top: float
    right: float
    bottom: float

    def intersects(self, other: "Bounds") -> bool:
        # Touching edges do not count as an overlap
        return (self.left < other.right and other.left < self.right
                and self.top < other.bottom and other.top < self.bottom)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class DifficultyState:
    """Obstacle tuning for a given cumulative score."""
    velocity_x: float
    gap_height: float
    spacing: float
    spawn_interval: float       # ms


@dataclass(frozen=True)
class PipeMember:
    """
    One barrier of an obstacle pair. Members are views computed from their
    pair, so the upper and lower pipe can never disagree about the gap or
    about having been scored.
    """
    pair: "ObstaclePair"
    upper: bool

    @property
    def pair_id(self) -> str:
        return self.pair.pair_id

    @property
    def is_score_target(self) -> bool:
        return self.upper

    @property
    def scored(self) -> bool:
        return self.pair.scored

    @property
    def bounds(self) -> Bounds:
        p = self.pair
        if self.upper:
            return Bounds(p.x, float(TOP_BOUNDARY), p.right, p.gap_top)
        return Bounds(p.x, p.gap_bottom, p.right, float(p.floor_y))


@dataclass
class ObstaclePair:
    """The authoritative pipe pair state. `x` is the left edge of both pipes."""
    pair_id: str
    x: float
    gap_center_y: float
    gap_height: float
    velocity_x: float
    scored: bool = False
    width: float = PIPE_WIDTH
    floor_y: float = GROUND_Y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_top(self) -> float:
        return self.gap_center_y - self.gap_height / 2

    @property
    def gap_bottom(self) -> float:
        return self.gap_center_y + self.gap_height / 2

    @property
    def upper(self) -> PipeMember:
        return PipeMember(self, upper=True)

    @property
    def lower(self) -> PipeMember:
        return PipeMember(self, upper=False)

    @property
    def members(self) -> Tuple[PipeMember, PipeMember]:
        return (self.upper, self.lower)

    @property
    def scoring_member(self) -> PipeMember:
        return self.upper

    def is_off_screen(self) -> bool:
        return self.right < 0

    def to_event_data(self) -> dict:
        """Geometry handed to the renderer."""
        return {
            "pair_id": self.pair_id,
            "x": round(self.x, 2),
            "width": self.width,
            "gap_center_y": round(self.gap_center_y, 2),
            "gap_height": self.gap_height,
            "upper": self.upper.bounds.as_tuple(),
            "lower": self.lower.bounds.as_tuple(),
        }


@dataclass
class Session:
    """
    Everything a play session mutates, owned by the game and handed to each
    component. The current phase is not stored here: only the state machine
    may change it.
    """
    actor: "Actor"
    difficulty: DifficultyState
    pairs: List[ObstaclePair] = field(default_factory=list)
    score: int = 0
    high_score: int = 0
    background_is_day: bool = True
    soundtrack_level: int = 0
    last_collision: Optional[CollisionKind] = None

