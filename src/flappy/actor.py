"""
actor.py: The player-controlled bird: gravity integration, flap impulse and bounds.
"""

from typing import Optional

from .constants import (
    BIRD_HEIGHT, BIRD_START_Y, BIRD_WIDTH, BIRD_X, FLAP_IMPULSE, GRAVITY_ACCEL,
    MAX_FALL_VELOCITY, MS_PER_SECOND, SCREEN_HEIGHT, TILT_DOWN, TILT_UP,
    TOP_BOUNDARY,
)
from .data_models import Bounds, GamePhase


class Actor:
    """
    Vertical-only kinematics: the bird's X is fixed and the world scrolls.
    `y` is the centre of the body.
    """

    def __init__(self, gravity: float = GRAVITY_ACCEL, flap_impulse: float = FLAP_IMPULSE,
                 terminal_velocity: float = MAX_FALL_VELOCITY,
                 x: float = BIRD_X, start_y: float = BIRD_START_Y,
                 width: float = BIRD_WIDTH, height: float = BIRD_HEIGHT,
                 world_top: float = TOP_BOUNDARY, world_bottom: float = SCREEN_HEIGHT):
        self.gravity = gravity
        self.flap_impulse = flap_impulse
        self.terminal_velocity = terminal_velocity
        self.x = float(x)
        self.start_y = float(start_y)
        self.width = width
        self.height = height
        self.world_top = world_top
        self.world_bottom = world_bottom

        self.y = self.start_y
        self.velocity = 0.0
        self.tilt = 0.0
        self.gravity_enabled = False
        self.alive = False
        self._held_velocity: Optional[float] = None

    # -------- Lifecycle --------

    def reset(self):
        """Back to the start position, at rest, with gravity on."""
        self.y = self.start_y
        self.velocity = 0.0
        self.tilt = 0.0
        self.gravity_enabled = True
        self.alive = True
        self._held_velocity = None

    def deactivate(self):
        self.alive = False
        self.gravity_enabled = False
        self.velocity = 0.0
        self._held_velocity = None

    def freeze(self):
        """Stop dead where we are (game over)."""
        self.gravity_enabled = False
        self.velocity = 0.0

    def hold(self):
        """Suspend motion, remembering the velocity so `release` resumes it exactly."""
        self._held_velocity = self.velocity
        self.velocity = 0.0
        self.gravity_enabled = False

    def release(self):
        if self._held_velocity is not None:
            self.velocity = self._held_velocity
            self._held_velocity = None
        self.gravity_enabled = True

    # -------- Physics --------

    def apply_gravity(self, delta: float):
        """Integrates gravity over `delta` milliseconds, clamped to terminal velocity."""
        if not self.gravity_enabled:
            return
        self.velocity += self.gravity * (delta / MS_PER_SECOND)
        self.velocity = round(min(self.velocity, self.terminal_velocity), 4)

    def flap(self, phase: GamePhase) -> bool:
        """
        Overrides the vertical velocity with the flap impulse. Only honoured
        while running; a flap in any other phase is dropped, never queued.
        """
        if phase is not GamePhase.RUNNING or not self.alive:
            return False
        self.velocity = self.flap_impulse
        return True

    def update(self, time: float, delta: float):
        self.apply_gravity(delta)
        self.y = round(self.y + self.velocity * (delta / MS_PER_SECOND), 4)
        self._clamp_to_world()
        self.tilt = self.tilt_for(self.velocity)

    def _clamp_to_world(self):
        # Hitting the ceiling stops the climb; it is not a collision by itself
        half = self.height / 2
        if self.y - half < self.world_top:
            self.y = self.world_top + half
            if self.velocity < 0:
                self.velocity = 0.0
        elif self.y + half > self.world_bottom:
            self.y = self.world_bottom - half
            if self.velocity > 0:
                self.velocity = 0.0

    @staticmethod
    def tilt_for(velocity: float) -> float:
        if velocity < 0:
            return TILT_UP
        if velocity > 0:
            return TILT_DOWN
        return 0.0

    # -------- Geometry --------

    @property
    def bounds(self) -> Bounds:
        half_w = self.width / 2
        half_h = self.height / 2
        return Bounds(self.x - half_w, self.y - half_h, self.x + half_w, self.y + half_h)
