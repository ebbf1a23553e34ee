"""
timers.py: Cooperative timers advanced only by simulation ticks.

Nothing here runs on its own: every timer moves forward when the frame
driver ticks the game, so pausing is just a flag and replays are exact.
"""

from typing import Callable, List


class RepeatingTimer:
    """Fires `callback` every `delay` ms of advanced time, at most once per advance."""

    def __init__(self, delay: float, callback: Callable[[], None], paused: bool = True):
        self.delay = float(delay)
        self.callback = callback
        self.paused = paused
        self.elapsed = 0.0
        self._next_delay = self.delay

    def set_delay(self, delay: float):
        """Applies from the next cycle; the cycle in progress keeps its delay."""
        self._next_delay = float(delay)

    def reset(self, delay: float):
        self.delay = self._next_delay = float(delay)
        self.elapsed = 0.0

    def advance(self, delta: float) -> bool:
        if self.paused:
            return False
        self.elapsed += delta
        if self.elapsed < self.delay:
            return False

        # Backlog beyond one cycle is dropped, keeping the phase within the cycle
        self.elapsed %= self.delay
        self.delay = self._next_delay
        self.callback()
        return True


class DelayedCall:
    """A one-shot action scheduled on a Scheduler."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.remaining = float(delay)
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self):
        self.cancelled = True


class Scheduler:
    """Owns the delayed calls of a game; ticked once per frame in every phase."""

    def __init__(self):
        self._calls: List[DelayedCall] = []

    def delay(self, delay: float, callback: Callable[[], None]) -> DelayedCall:
        call = DelayedCall(delay, callback)
        self._calls.append(call)
        return call

    def advance(self, delta: float):
        due = []
        for call in self._calls:
            if not call.pending:
                continue
            call.remaining -= delta
            if call.remaining <= 0:
                due.append(call)

        self._calls = [c for c in self._calls if c.pending and c not in due]
        for call in due:
            # An earlier callback in this batch may have cancelled it
            if call.cancelled:
                continue
            call.fired = True
            call.callback()

    def cancel_all(self):
        for call in self._calls:
            call.cancel()
        self._calls.clear()

    def __len__(self) -> int:
        return sum(1 for c in self._calls if c.pending)
