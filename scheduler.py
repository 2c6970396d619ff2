# scheduler.py

"""
Scheduling Primitives

Cooperative, single-threaded scheduling for the display's two loops. Nothing
here runs on its own: the host loop pumps TimerScheduler.run_due() and
FrameScheduler.run_frame(), and every callback runs to completion before the
next one starts.

Data Contract:
- schedule(callback, delay_ms) returns a Handle; cancel(handle) revokes it.
- Cancelling None, a cancelled handle or an already fired handle is a no-op.
- Callbacks scheduled while a pump is in progress never run in that same pump.
"""

import heapq
import itertools
import logging
import time

logger = logging.getLogger("fireworks")


class Handle:
    """A pending callback. Only the scheduler that issued it may cancel it."""
    __slots__ = ("callback", "due", "cancelled")

    def __init__(self, callback, due: float):
        self.callback = callback
        self.due = due
        self.cancelled = False


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TimerScheduler:
    """
    A plain one-shot timer queue (setTimeout semantics).

    Delays are measured from the moment schedule() is called, read from
    `clock` (milliseconds). Due callbacks run in due-time order.
    """
    def __init__(self, clock=None):
        self.clock = clock or _monotonic_ms
        self._queue = []
        self._sequence = itertools.count()
        self._now = None

    def _current_time(self) -> float:
        # Inside a pump, "now" is the pump time so rescheduling is deterministic.
        return self._now if self._now is not None else self.clock()

    def schedule(self, callback, delay_ms: float) -> Handle:
        handle = Handle(callback, self._current_time() + max(0.0, delay_ms))
        heapq.heappush(self._queue, (handle.due, next(self._sequence), handle))
        return handle

    def cancel(self, handle):
        if handle is not None:
            handle.cancelled = True

    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def run_due(self, now=None) -> int:
        """
        Runs every callback due at `now` (defaults to the clock).
        Returns the number of callbacks executed.
        """
        now = self.clock() if now is None else now
        due = []
        while self._queue and self._queue[0][0] <= now:
            due.append(heapq.heappop(self._queue)[2])

        executed = 0
        self._now = now
        try:
            for handle in due:
                # An earlier callback in this batch may have cancelled it.
                if handle.cancelled:
                    continue
                handle.cancelled = True
                handle.callback()
                executed += 1
        finally:
            self._now = None
        return executed


class FrameScheduler:
    """
    Display-refresh scheduling (requestAnimationFrame semantics).

    The delay is ignored: a callback runs on the next call to run_frame(),
    which the host makes once per presented frame.
    """
    def __init__(self):
        self._pending = []

    def schedule(self, callback, delay_ms: float = 0.0) -> Handle:
        handle = Handle(callback, 0.0)
        self._pending.append(handle)
        return handle

    def cancel(self, handle):
        if handle is not None:
            handle.cancelled = True

    def pending(self) -> int:
        return sum(1 for handle in self._pending if not handle.cancelled)

    def run_frame(self) -> int:
        batch, self._pending = self._pending, []
        executed = 0
        for handle in batch:
            if handle.cancelled:
                continue
            handle.cancelled = True
            handle.callback()
            executed += 1
        return executed


class RepeatingTask:
    """
    Runs `step` over and over through a scheduler.

    Each tick performs one step, then asks the scheduler for the next one
    after `interval()` milliseconds (or `interval` if it is a number). The
    cancelled flag is checked after the step, so a step that cancels its own
    task is not rescheduled.
    """
    def __init__(self, scheduler, step, interval, name="task"):
        self.scheduler = scheduler
        self.step = step
        self.interval = interval
        self.name = name
        self.handle = None
        self._cancelled = True

    @property
    def is_running(self) -> bool:
        return not self._cancelled

    def _next_delay(self) -> float:
        return self.interval() if callable(self.interval) else self.interval

    def start(self):
        """Schedules the first tick. Starting a running task does nothing."""
        if self.is_running:
            return
        self._cancelled = False
        self.handle = self.scheduler.schedule(self._tick, self._next_delay())
        logger.debug(f"Task '{self.name}' started.")

    def cancel(self):
        """Revokes the pending tick, if any. Safe to call repeatedly."""
        if self.handle is not None:
            self.scheduler.cancel(self.handle)
            self.handle = None
        if not self._cancelled:
            self._cancelled = True
            logger.debug(f"Task '{self.name}' cancelled.")

    def _tick(self):
        self.handle = None
        try:
            self.step()
        except Exception:
            # The loop is broken; leave the task restartable.
            self._cancelled = True
            raise
        if not self._cancelled:
            self.handle = self.scheduler.schedule(self._tick, self._next_delay())
