"""
Timer-driven lifecycle shared by all simulator units.

Each unit owns one recurring timer and its private state. ``start()`` mounts
the unit (initial state + timer), ``stop()`` unmounts it (timer cancelled,
state discarded). Ticks and reads are serialized by a per-unit lock because
the Flask server answers requests from worker threads.
"""

import threading
from typing import Any, Callable, Dict, Optional

from qtelemetry.utils.logger import get_logger
from .random_source import RandomSource

logger = get_logger(__name__)


class TickTimer(threading.Thread):
    """Daemon thread calling ``callback`` every ``interval`` seconds until cancelled."""

    def __init__(self, interval: float, callback: Callable[[], None], name: str = 'tick-timer'):
        super().__init__(name=name, daemon=True)
        self.interval = interval
        self.callback = callback
        self._stop_event = threading.Event()

    def run(self):
        while not self._stop_event.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception(f"Tick failed in {self.name}")

    def cancel(self, timeout: Optional[float] = 2.0) -> None:
        self._stop_event.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join(timeout=timeout)


class PeriodicSimulator:
    """
    Base class for a self-contained, timer-driven simulation unit.

    Subclasses implement ``reset()`` (initial state), ``clear()`` (discard
    state), ``tick()`` (one update) and ``snapshot()`` (serializable view).
    """

    name = 'simulator'
    interval = 1.0

    def __init__(self, rng: Optional[RandomSource] = None, interval: Optional[float] = None):
        self.rng = rng if rng is not None else RandomSource()
        if interval is not None:
            self.interval = interval
        self._lock = threading.RLock()
        self._timer: Optional[TickTimer] = None
        self.active = False

    def start(self) -> None:
        """Initialize state and schedule the recurring tick."""
        with self._lock:
            if self.active:
                return
            self.reset()
            self.active = True
            self._schedule()
        logger.info(f"{self.name} simulator started (interval {self.interval}s)")

    def stop(self) -> None:
        """Cancel the tick and discard state. Safe to call more than once."""
        with self._lock:
            was_active = self.active
            self.active = False
            timer = self._detach_timer()
            self.clear()
        # Join outside the lock so a tick blocked on it can finish.
        if timer is not None:
            timer.cancel()
        if was_active:
            logger.info(f"{self.name} simulator stopped")

    def _schedule(self) -> None:
        if self._timer is None:
            self._timer = TickTimer(self.interval, self._on_tick, name=f'{self.name}-timer')
            self._timer.start()

    def _detach_timer(self) -> Optional[TickTimer]:
        timer, self._timer = self._timer, None
        return timer

    def _on_tick(self) -> None:
        with self._lock:
            # A cancelled timer may still be waiting on the lock.
            if not self.active or threading.current_thread() is not self._timer:
                return
            self.tick()

    @property
    def scheduled(self) -> bool:
        """True while a tick timer is registered."""
        return self._timer is not None

    def reset(self) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def tick(self) -> None:
        raise NotImplementedError

    def snapshot(self) -> Dict[str, Any]:
        raise NotImplementedError

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
