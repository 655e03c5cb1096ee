"""
Tick loops that drive the simulation.

Both strategies share one contract: while running, call the tick callback
each time the latched interval has elapsed. The interval is latched when a
tick is scheduled, so a speed change only affects ticks scheduled after it.
Stopping is synchronous and a stopped loop never calls back.
"""

import functools
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ClockState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


def _check_interval(interval_ms):
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)) or interval_ms <= 0:
        raise ValueError(f"tick interval must be a positive number of ms, got {interval_ms!r}")
    return interval_ms


class TickLoop:
    """Base class holding the Stopped/Running state and the tick interval."""

    def __init__(self, callback, interval_ms):
        self.callback = callback
        self.interval_ms = _check_interval(interval_ms)
        self.state = ClockState.STOPPED
        self.ticks = 0

    @property
    def running(self):
        return self.state is ClockState.RUNNING

    def set_interval(self, interval_ms):
        """Change the interval used for the next scheduled tick."""
        self.interval_ms = _check_interval(interval_ms)
        logger.debug("%s interval set to %sms", type(self).__name__, interval_ms)

    def start(self):
        if self.running:
            return
        self.state = ClockState.RUNNING
        self._on_start()
        logger.debug("%s started at %sms", type(self).__name__, self.interval_ms)

    def stop(self):
        if not self.running:
            return
        self.state = ClockState.STOPPED
        self._on_stop()
        logger.debug("%s stopped after %d ticks", type(self).__name__, self.ticks)

    def _fire(self):
        self.ticks += 1
        self.callback()

    def _on_start(self):
        raise NotImplementedError

    def _on_stop(self):
        raise NotImplementedError


class ScheduledTickLoop(TickLoop):
    """
    Timer-driven loop that chains one-shot timers on a scheduler.

    The scheduler needs ``call_later(delay_seconds, fn)`` returning a handle
    with ``cancel()``; an asyncio event loop fits. Each timer carries a
    generation number so a handle that fires after stop() is ignored.
    """

    def __init__(self, callback, interval_ms, scheduler):
        super().__init__(callback, interval_ms)
        self.scheduler = scheduler
        self._handle = None
        self._generation = 0

    def _schedule(self):
        self._generation += 1
        self._handle = self.scheduler.call_later(
            self.interval_ms / 1000.0,
            functools.partial(self._on_timer, self._generation),
        )

    def _on_timer(self, generation):
        if not self.running or generation != self._generation:
            return
        self._handle = None
        self._fire()
        # The callback may have stopped, or stopped and restarted, the loop.
        if self.running and self._handle is None:
            self._schedule()

    def _on_start(self):
        self._schedule()

    def _on_stop(self):
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AccumulatorTickLoop(TickLoop):
    """
    Frame-driven loop: the caller feeds elapsed milliseconds each frame.

    Elapsed time accumulates until it crosses the latched interval. At most
    max_catch_up ticks run per update; any backlog beyond that is dropped so
    a long stall does not turn into a burst of moves.
    """

    def __init__(self, callback, interval_ms, max_catch_up=3):
        super().__init__(callback, interval_ms)
        self.max_catch_up = max_catch_up
        self.accumulated_ms = 0.0
        self._threshold_ms = self.interval_ms

    def update(self, dt_ms):
        """Advance by dt_ms and return how many ticks fired."""
        if not self.running:
            return 0
        self.accumulated_ms += max(0, dt_ms)

        fired = 0
        while self.running and self.accumulated_ms >= self._threshold_ms:
            if fired >= self.max_catch_up:
                self.accumulated_ms = 0.0
                break
            self.accumulated_ms -= self._threshold_ms
            fired += 1
            self._fire()
            self._threshold_ms = self.interval_ms
        return fired

    def _on_start(self):
        self.accumulated_ms = 0.0
        self._threshold_ms = self.interval_ms

    def _on_stop(self):
        self.accumulated_ms = 0.0
