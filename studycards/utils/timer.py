"""
Cancellable timers and the per-question countdown
"""
import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Protocol, Tuple

from studycards.utils.logger import get_logger

logger = get_logger(__name__)


class TimerHandle(Protocol):
    """Handle returned by a scheduler; asyncio.TimerHandle satisfies it"""

    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...


class Scheduler(ABC):
    """Runs a callback once after a delay in seconds"""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        pass


class ManualTimerHandle:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    Virtual clock that only moves when ``advance`` is called.

    Callbacks fire in due order; callbacks scheduled by other callbacks
    inside the advanced window fire in the same call.
    """

    def __init__(self):
        self.time = 0.0
        self._queue: List[Tuple[float, int, ManualTimerHandle]] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimerHandle:
        handle = ManualTimerHandle(self.time + delay, callback)
        heapq.heappush(self._queue, (handle.when, next(self._sequence), handle))
        return handle

    @property
    def pending(self) -> int:
        return len([h for _, _, h in self._queue if not h.cancelled()])

    def advance(self, seconds: float):
        target = self.time + seconds
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self.time = when
            handle.callback()
        self.time = target


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on the running asyncio event loop"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class Countdown:
    """
    Counts down whole seconds by re-arming a one-second timer.

    Every ``start`` and ``cancel`` moves to a new generation; a tick carrying
    an older generation is ignored, so a timer that fires after being
    cancelled changes nothing.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        seconds: int,
        on_expire: Callable[[], None],
        on_tick: Optional[Callable[[int], None]] = None,
        interval: float = 1.0
    ):
        self.scheduler = scheduler
        self.seconds = seconds
        self.on_expire = on_expire
        self.on_tick = on_tick
        self.interval = interval
        self.remaining = seconds
        self.running = False
        self._generation = 0
        self._handle: Optional[TimerHandle] = None

    def start(self):
        """(Re)start from the full duration"""
        self.cancel()
        self.remaining = self.seconds
        self.running = True
        self._arm()

    def cancel(self):
        """Stop counting; remaining time is kept"""
        self._generation += 1
        self.running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _arm(self):
        generation = self._generation
        self._handle = self.scheduler.call_later(self.interval, lambda: self._tick(generation))

    def _tick(self, generation: int):
        if not self.running or generation != self._generation:
            logger.debug("Ignoring stale countdown tick")
            return

        self.remaining -= 1
        if self.on_tick is not None:
            self.on_tick(self.remaining)
            if generation != self._generation:
                return

        if self.remaining <= 0:
            self.running = False
            self._handle = None
            self.on_expire()
        else:
            self._arm()
