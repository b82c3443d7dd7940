"""
Gate-operation feed simulator: a bounded, pausable log of random gate events.
"""

import itertools
import time
from collections import deque
from dataclasses import dataclass, asdict
from typing import Any, Callable, Deque, Dict, Optional

from qtelemetry.utils.logger import get_logger
from ..utils.formatters import time_of_day_fmt
from .base import PeriodicSimulator
from .random_source import RandomSource

logger = get_logger(__name__)

GATES = ('H', 'X', 'Y', 'Z', 'CNOT', 'T', 'S', 'RX', 'RY', 'RZ')
TWO_QUBIT_GATES = ('CNOT',)
NUM_QUBITS = 8
LOG_CAPACITY = 16
RECENT_ENTRIES = 5


@dataclass
class GateEvent:
    id: int
    gate: str
    target: int
    timestamp_ms: int
    control: Optional[int] = None

    @property
    def category(self) -> str:
        if self.gate in TWO_QUBIT_GATES:
            return 'entangling'
        if self.gate == 'H':
            return 'hadamard'
        return 'single'

    def describe(self) -> str:
        """Log line such as '12:30:01.250 CNOT on Q3 (ctrl: Q5)'."""
        text = f"{time_of_day_fmt(self.timestamp_ms)} {self.gate} on Q{self.target}"
        if self.control is not None:
            text += f" (ctrl: Q{self.control})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GateEvent':
        control = data.get('control')
        return cls(
            id=int(data['id']),
            gate=str(data['gate']),
            target=int(data['target']),
            timestamp_ms=int(data['timestamp_ms']),
            control=None if control is None else int(control),
        )


class GateFeedSimulator(PeriodicSimulator):
    """
    Appends a random gate event every tick while running.

    Pausing cancels the tick timer but keeps the log; resuming schedules a
    new timer. The running flag survives ``stop()``/``start()``.
    """

    name = 'gates'
    interval = 0.3

    def __init__(self, rng: Optional[RandomSource] = None, interval: Optional[float] = None,
                 clock: Callable[[], float] = time.time, capacity: int = LOG_CAPACITY,
                 num_qubits: int = NUM_QUBITS):
        super().__init__(rng, interval)
        self.clock = clock
        self.num_qubits = num_qubits
        self.running = True
        self.log: Deque[GateEvent] = deque(maxlen=capacity)
        self._ids = itertools.count(1)

    def reset(self) -> None:
        self.log.clear()
        self._ids = itertools.count(1)

    def clear(self) -> None:
        self.log.clear()

    def _schedule(self) -> None:
        if self.running:
            super()._schedule()

    def tick(self) -> None:
        with self._lock:
            if not self.active or not self.running:
                return
            gate = self.rng.choice(GATES)
            target = self.rng.integer(0, self.num_qubits - 1)
            control = None
            if gate in TWO_QUBIT_GATES:
                control = self.rng.integer(0, self.num_qubits - 1)
            self.log.append(GateEvent(
                id=next(self._ids),
                gate=gate,
                target=target,
                control=control,
                timestamp_ms=int(self.clock() * 1000),
            ))

    def set_running(self, running: bool) -> bool:
        """Start or stop tick scheduling without touching the log."""
        timer = None
        with self._lock:
            if running == self.running:
                return self.running
            self.running = running
            if self.active:
                if running:
                    self._schedule()
                else:
                    timer = self._detach_timer()
        if timer is not None:
            timer.cancel()
        logger.info(f"Gate feed {'resumed' if running else 'paused'} with {len(self.log)} entries")
        return self.running

    def pause(self) -> bool:
        return self.set_running(False)

    def resume(self) -> bool:
        return self.set_running(True)

    def toggle(self) -> bool:
        with self._lock:
            target = not self.running
        return self.set_running(target)

    def recent(self, count: int = RECENT_ENTRIES):
        """Most recent events, newest first."""
        with self._lock:
            return list(self.log)[-count:][::-1]

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            events = list(self.log)
            running = self.running
        return {
            'active': self.active,
            'running': running,
            'operations': [{**e.to_dict(), 'category': e.category} for e in events],
            'recent': [e.describe() for e in events[-RECENT_ENTRIES:][::-1]],
        }
