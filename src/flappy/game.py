"""
game.py: Wires the actor, obstacles, scoring and persistence into the phase lifecycle.

The frontend drives everything through three calls: `tick` once per frame,
`activate` for the coalesced press/tap signal and `suspend` when the window
loses focus.
"""

import logging
import random
from typing import Optional

from .actor import Actor
from .constants import RESTART_ARM_DELAY_MS, START_DELAY_MS
from .data_models import CollisionKind, GamePhase, Session
from .difficulty import INITIAL_DIFFICULTY
from .events import EventBus, EventType, Subscription
from .input_router import InputRouter
from .score_store import ScoreStore
from .scoring import CollisionResolver, ScoreTracker
from .spawner import ObstacleSpawner
from .state_machine import GameStateMachine, PhaseHandlers
from .timers import DelayedCall, Scheduler

logger = logging.getLogger(__name__)


class FlappyGame:
    def __init__(self, store: Optional[ScoreStore] = None, rng: Optional[random.Random] = None,
                 bus: Optional[EventBus] = None, actor: Optional[Actor] = None,
                 start_delay: float = START_DELAY_MS,
                 restart_arm_delay: float = RESTART_ARM_DELAY_MS):
        self.bus = bus if bus is not None else EventBus()
        self.store = store
        self.start_delay = start_delay
        self.restart_arm_delay = restart_arm_delay

        self.input = InputRouter()
        self.scheduler = Scheduler()

        high_score = store.load_high_score() if store is not None else 0
        self.session = Session(actor=actor if actor is not None else Actor(),
                               difficulty=INITIAL_DIFFICULTY, high_score=high_score)

        self.spawner = ObstacleSpawner(self.session, self.bus, rng)
        self.scorer = ScoreTracker(self.bus, on_score=self.spawner.update_difficulty)
        self.resolver = CollisionResolver()

        self.machine = GameStateMachine(self.bus, event_data=self._board)
        self.machine.register(GamePhase.PRESTART, PhaseHandlers(
            on_enter=self._enter_prestart, on_exit=self._exit_prestart))
        self.machine.register(GamePhase.RUNNING, PhaseHandlers(
            on_enter=self._enter_running, on_update=self._update_running,
            on_exit=self._exit_running))
        self.machine.register(GamePhase.GAMEOVER, PhaseHandlers(
            on_enter=self._enter_gameover, on_exit=self._exit_gameover))
        self.machine.register(GamePhase.PAUSED, PhaseHandlers(
            on_enter=self._enter_paused, on_exit=self._exit_paused))

        # Phase-scoped one-shot hooks, released whenever their phase exits
        self._phase_input: Optional[Subscription] = None
        self._phase_delay: Optional[DelayedCall] = None

        self.input.subscribe(self._flap)

    # -------- Frontend API --------

    @property
    def phase(self) -> GamePhase:
        return self.machine.current

    @property
    def actor(self) -> Actor:
        return self.session.actor

    def boot(self):
        """Enters the initial phase. Subscribe presentation listeners first."""
        self.machine.start()

    def tick(self, time: float, delta: float):
        self.scheduler.advance(delta)
        self.machine.tick(time, delta)

    def activate(self):
        self.input.activate()

    def suspend(self) -> bool:
        """Window hidden or unfocused. Only a running game pauses."""
        if self.phase is not GamePhase.RUNNING:
            return False
        return self.machine.transition(GamePhase.PAUSED)

    def close(self):
        self.scheduler.cancel_all()
        if self.store is not None:
            self.store.close()

    # -------- Shared helpers --------

    def _board(self) -> dict:
        return {"score": self.session.score, "high_score": self.session.high_score}

    def _await_input(self, handler):
        if self._phase_input is not None:
            self._phase_input.revoke()
        self._phase_input = self.input.once(handler)

    def _release_phase_hooks(self):
        if self._phase_input is not None:
            self._phase_input.revoke()
            self._phase_input = None
        if self._phase_delay is not None:
            self._phase_delay.cancel()
            self._phase_delay = None

    def _flap(self):
        if self.actor.flap(self.phase):
            self.bus.emit(EventType.FLAPPED, velocity=self.actor.velocity)

    def _set_soundtrack(self, level: int):
        if self.session.soundtrack_level != level:
            self.session.soundtrack_level = level
            self.bus.emit(EventType.SOUNDTRACK_CHANGED, level=level)

    # -------- PRESTART --------

    def _enter_prestart(self, previous: Optional[GamePhase]):
        self.session.score = 0
        self.session.last_collision = None
        self.bus.emit(EventType.SCORE_CHANGED, score=0, pair_id=None)
        self.actor.deactivate()
        self.spawner.stop_and_clear()
        self._set_soundtrack(0)
        self.session.background_is_day = True
        self.bus.emit(EventType.BACKGROUND_CHANGED, is_day=True)
        self._await_input(self._on_start_input)

    def _on_start_input(self):
        self._phase_delay = self.scheduler.delay(self.start_delay, self._begin_if_waiting)

    def _begin_if_waiting(self):
        # The phase may have changed while the start cue was playing
        if self.phase is GamePhase.PRESTART:
            self.machine.transition(GamePhase.RUNNING)

    def _exit_prestart(self, next_phase: GamePhase):
        self._release_phase_hooks()

    # -------- RUNNING --------

    def _enter_running(self, previous: Optional[GamePhase]):
        if previous is GamePhase.PAUSED:
            return
        self.actor.reset()
        self.spawner.start()
        self._set_soundtrack(1)

    def _update_running(self, time: float, delta: float):
        self.actor.update(time, delta)
        self.spawner.update(time, delta)

        kind = self.resolver.check(self.actor, self.session.pairs)
        if kind is not None:
            self._crash(kind)
            return
        self.scorer.check(self.session)

    def _crash(self, kind: CollisionKind):
        if self.phase is not GamePhase.RUNNING:
            return
        self.session.last_collision = kind
        logger.info("Collision with %s detected!", kind.value)
        self.bus.emit(EventType.COLLISION, kind=kind.value, y=self.actor.y)
        self.machine.transition(GamePhase.GAMEOVER)

    def _exit_running(self, next_phase: GamePhase):
        if next_phase is GamePhase.PAUSED:
            return
        # Pairs are not cleared here: GAMEOVER shows them frozen where the bird
        # crashed, so clearing on this exit would empty that screen.
        # _enter_prestart clears them instead.
        self.actor.deactivate()
        self.spawner.pause_timer()

    # -------- GAMEOVER --------

    def _enter_gameover(self, previous: Optional[GamePhase]):
        self.actor.freeze()
        self.spawner.pause_timer()
        self._set_soundtrack(0)

        if self.session.score > self.session.high_score:
            self.session.high_score = self.session.score
            logger.info("New high score: %d", self.session.high_score)
            if self.store is not None:
                self.store.save_high_score(self.session.high_score)
            self.bus.emit(EventType.HIGH_SCORE_CHANGED, high_score=self.session.high_score)

        self._phase_delay = self.scheduler.delay(self.restart_arm_delay, self._arm_restart)

    def _arm_restart(self):
        if self.phase is GamePhase.GAMEOVER:
            self._await_input(self._on_restart_input)

    def _on_restart_input(self):
        self.machine.transition(GamePhase.PRESTART)

    def _exit_gameover(self, next_phase: GamePhase):
        self._release_phase_hooks()

    # -------- PAUSED --------

    def _enter_paused(self, previous: Optional[GamePhase]):
        self.actor.hold()
        self.spawner.suspend()
        self._await_input(self._on_resume_input)

    def _on_resume_input(self):
        self.machine.transition(GamePhase.RUNNING)

    def _exit_paused(self, next_phase: GamePhase):
        self._release_phase_hooks()
        self.actor.release()
        self.spawner.resume()
