"""
System clock for the dashboard header: wall-clock time and an uptime counter.
"""

import time
from typing import Any, Callable, Dict, Optional

from ..utils.formatters import system_time_fmt, uptime_fmt, uptime_humanize
from .base import PeriodicSimulator
from .random_source import RandomSource


class SystemClock(PeriodicSimulator):
    """Counts whole seconds since the session started."""

    name = 'clock'
    interval = 1.0

    def __init__(self, rng: Optional[RandomSource] = None, interval: Optional[float] = None,
                 clock: Callable[[], float] = time.time):
        super().__init__(rng, interval)
        self.clock = clock
        self.uptime_seconds = 0

    def reset(self) -> None:
        self.uptime_seconds = 0

    def clear(self) -> None:
        self.uptime_seconds = 0

    def tick(self) -> None:
        with self._lock:
            self.uptime_seconds += 1

    @property
    def system_time(self) -> str:
        return system_time_fmt(self.clock())

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            uptime = self.uptime_seconds
        return {
            'active': self.active,
            'system_time': self.system_time,
            'uptime_seconds': uptime,
            'uptime': uptime_fmt(uptime),
            'uptime_human': uptime_humanize(uptime),
        }
