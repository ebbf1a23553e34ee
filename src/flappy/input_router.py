"""
input_router.py: Routes the single coalesced "activate" signal to listeners.

Pointer presses and the designated key are merged into one logical signal
by the frontend. Phases listen for it with one-shot subscriptions that are
revoked before their callback runs, so re-entering a phase can never stack
duplicate listeners.
"""

from __future__ import annotations

from typing import Callable, List, Tuple

from .events import Subscription

Handler = Callable[[], None]


class InputRouter:
    def __init__(self) -> None:
        self._listeners: List[Tuple[Handler, Subscription, bool]] = []

    def subscribe(self, handler: Handler) -> Subscription:
        """Persistent listener, called on every activation until revoked."""
        return self._add(handler, once=False)

    def once(self, handler: Handler) -> Subscription:
        """Listener that detaches itself on the first activation."""
        return self._add(handler, once=True)

    def _add(self, handler: Handler, once: bool) -> Subscription:
        sub = Subscription(self._remove)
        self._listeners.append((handler, sub, once))
        return sub

    def _remove(self, sub: Subscription) -> None:
        self._listeners = [entry for entry in self._listeners if entry[1] is not sub]

    def activate(self) -> int:
        """Dispatches one activation; returns how many listeners ran."""
        fired = 0
        # Listeners added while dispatching wait for the next activation
        for handler, sub, once in list(self._listeners):
            if not sub.active:
                continue
            if once:
                sub.revoke()
            handler()
            fired += 1
        return fired

    @property
    def pending_once(self) -> int:
        return sum(1 for _, sub, once in self._listeners if once and sub.active)
