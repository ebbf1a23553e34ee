"""
state_machine.py: Game lifecycle, PRESTART -> RUNNING -> GAMEOVER -> PRESTART,
with a RUNNING <-> PAUSED side branch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from statemachine import State, StateMachine

from .data_models import GamePhase
from .events import EventBus, EventType

logger = logging.getLogger(__name__)


class LifecycleChart(StateMachine):
    """Declares which phase changes are legal. It guards transitions and holds
    the current phase; side effects live in the phase handlers."""

    prestart = State("Prestart", value=GamePhase.PRESTART.value, initial=True)
    running = State("Running", value=GamePhase.RUNNING.value)
    gameover = State("Game over", value=GamePhase.GAMEOVER.value)
    paused = State("Paused", value=GamePhase.PAUSED.value)

    begin = prestart.to(running)
    crash = running.to(gameover)
    restart = gameover.to(prestart)
    suspend = running.to(paused)
    resume = paused.to(running)


@dataclass(frozen=True)
class PhaseHandlers:
    """
    Side effects of one phase. `on_enter` receives the phase we came from
    (None for the initial entry), `on_exit` the phase we are going to.
    """
    on_enter: Optional[Callable[[Optional[GamePhase]], None]] = None
    on_update: Optional[Callable[[float, float], None]] = None
    on_exit: Optional[Callable[[GamePhase], None]] = None


class GameStateMachine:
    def __init__(self, bus: Optional[EventBus] = None,
                 event_data: Optional[Callable[[], dict]] = None,
                 chart: Optional[StateMachine] = None):
        self.chart = chart if chart is not None else LifecycleChart()
        self.handlers: Dict[GamePhase, PhaseHandlers] = {}
        self.bus = bus
        self.event_data = event_data
        self.started = False
        self._transitioning = False

    @property
    def current(self) -> GamePhase:
        return GamePhase(self.chart.current_state.value)

    def register(self, phase: GamePhase, handlers: PhaseHandlers):
        self.handlers[phase] = handlers

    def start(self):
        """Runs the initial phase's enter handler. Calling it twice is a no-op."""
        if self.started:
            return
        self.started = True
        phase = self.current
        handlers = self.handlers.get(phase)
        if handlers is not None and handlers.on_enter is not None:
            handlers.on_enter(None)
        self._emit(EventType.PHASE_ENTERED, phase, previous=None)

    def _coerce(self, target: Union[GamePhase, str]) -> Optional[GamePhase]:
        if isinstance(target, GamePhase):
            return target
        try:
            return GamePhase(str(target).lower())
        except ValueError:
            logger.warning("State '%s' not found.", target)
            return None

    def transition(self, target: Union[GamePhase, str]) -> bool:
        """
        Exit the current phase, switch, enter the target. Unknown or
        unregistered targets and illegal edges are logged and ignored.
        """
        phase = self._coerce(target)
        if phase is None:
            return False
        if phase not in self.handlers:
            logger.warning("State '%s' is not registered.", phase.value)
            return False
        if self._transitioning:
            logger.warning("Ignoring transition to '%s' requested mid-transition.", phase.value)
            return False

        source = self.current
        event = self._edge_to(phase)
        if event is None:
            logger.warning("No transition from '%s' to '%s'.", source.value, phase.value)
            return False

        self._transitioning = True
        try:
            outgoing = self.handlers.get(source)
            if outgoing is not None and outgoing.on_exit is not None:
                outgoing.on_exit(phase)
            self._emit(EventType.PHASE_EXITED, source, next=phase.value)

            logger.info("Changing state from '%s' to '%s'", source.value, phase.value)
            self.chart.send(event)

            incoming = self.handlers[phase]
            if incoming.on_enter is not None:
                incoming.on_enter(source)
        finally:
            self._transitioning = False

        self._emit(EventType.PHASE_ENTERED, phase, previous=source.value)
        return True

    def _edge_to(self, phase: GamePhase) -> Optional[str]:
        """Name of the chart event leading from the current phase to `phase`, if any."""
        for edge in self.chart.current_state.transitions:
            if edge.target.value == phase.value:
                return edge.event
        return None

    def tick(self, time: float, delta: float):
        handlers = self.handlers.get(self.current)
        if handlers is not None and handlers.on_update is not None:
            handlers.on_update(time, delta)

    def _emit(self, event_type: EventType, phase: GamePhase, **data):
        if self.bus is None:
            return
        if self.event_data is not None:
            data.update(self.event_data())
        self.bus.emit(event_type, phase=phase.value, **data)
