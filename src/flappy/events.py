"""
events.py: Presentation events emitted by the simulation.

Renderers and audio subscribe here. Delivery is synchronous and happens
inside the tick that produced the event.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    PHASE_ENTERED = "phase_entered"
    PHASE_EXITED = "phase_exited"
    SCORE_CHANGED = "score_changed"
    SCORE_MILESTONE = "score_milestone"
    BACKGROUND_CHANGED = "background_changed"
    SOUNDTRACK_CHANGED = "soundtrack_changed"
    HIGH_SCORE_CHANGED = "high_score_changed"
    COLLISION = "collision"
    PAIR_CREATED = "pair_created"
    PAIR_RETIRED = "pair_retired"
    FLAPPED = "flapped"


@dataclass
class GameEvent:
    type: EventType
    data: dict = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


class Subscription:
    """Handle returned by every subscribe call. Revoking is immediate and idempotent."""

    def __init__(self, on_revoke: Optional[Callable[["Subscription"], None]] = None):
        self.active = True
        self._on_revoke = on_revoke

    def revoke(self) -> None:
        if not self.active:
            return
        self.active = False
        if self._on_revoke is not None:
            self._on_revoke(self)
            self._on_revoke = None


Listener = Callable[[GameEvent], None]


class EventBus:
    """Fan-out of GameEvents to callbacks, optionally filtered by type."""

    def __init__(self) -> None:
        self._subscribers: List[tuple[Optional[EventType], Listener, Subscription]] = []

    def subscribe(self, callback: Listener, event_type: Optional[EventType] = None) -> Subscription:
        sub = Subscription(self._remove)
        self._subscribers.append((event_type, callback, sub))
        return sub

    def _remove(self, sub: Subscription) -> None:
        self._subscribers = [entry for entry in self._subscribers if entry[2] is not sub]

    def emit(self, event_type: EventType, **data) -> GameEvent:
        event = GameEvent(type=event_type, data=data)
        for wanted, callback, sub in list(self._subscribers):
            if not sub.active or (wanted is not None and wanted is not event_type):
                continue
            try:
                callback(event)
            except Exception:
                # A broken renderer must not take the simulation down with it
                logger.exception("Listener failed on %s", event_type.value)
        return event


class EventRecorder:
    """Keeps every event it sees; handy for headless runs and replays."""

    def __init__(self, bus: EventBus, event_type: Optional[EventType] = None) -> None:
        self.events: List[GameEvent] = []
        self.subscription = bus.subscribe(self.events.append, event_type)

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.type is event_type]
