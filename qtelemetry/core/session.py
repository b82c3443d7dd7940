"""
Dashboard session: composes the independent simulator units.
"""

import atexit
import time
from typing import Any, Callable, Dict, Optional

from qtelemetry.utils.logger import get_logger
from ..simulators import (
    RandomSource,
    QubitRegisterSimulator,
    CoherenceSeriesSimulator,
    GateFeedSimulator,
    ProbabilityGridSimulator,
    SystemClock
)
from .config import DEFAULT_INTERVALS

logger = get_logger(__name__)

UNIT_TYPES = {
    'qubits': QubitRegisterSimulator,
    'coherence': CoherenceSeriesSimulator,
    'gates': GateFeedSimulator,
    'probability': ProbabilityGridSimulator,
    'clock': SystemClock,
}


class DashboardSession:
    """
    Owns one instance of every simulator unit.

    Units share nothing: each gets its own random source derived from the
    session seed and its own timer.
    """

    def __init__(self, seed: Optional[int] = None, intervals: Optional[Dict[str, float]] = None,
                 clock: Callable[[], float] = time.time):
        self.seed = seed
        intervals = {**DEFAULT_INTERVALS, **(intervals or {})}
        sources = RandomSource.spawn(seed, len(UNIT_TYPES))

        self.units = {}
        for (name, unit_type), rng in zip(UNIT_TYPES.items(), sources):
            kwargs = {'rng': rng, 'interval': intervals[name]}
            if name in ('gates', 'clock'):
                kwargs['clock'] = clock
            self.units[name] = unit_type(**kwargs)
        self._atexit_registered = False

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'DashboardSession':
        return cls(seed=config.get('seed'), intervals=config.get('intervals'))

    @property
    def qubits(self) -> QubitRegisterSimulator:
        return self.units['qubits']

    @property
    def coherence(self) -> CoherenceSeriesSimulator:
        return self.units['coherence']

    @property
    def gates(self) -> GateFeedSimulator:
        return self.units['gates']

    @property
    def probability(self) -> ProbabilityGridSimulator:
        return self.units['probability']

    @property
    def clock(self) -> SystemClock:
        return self.units['clock']

    @property
    def active(self) -> bool:
        return any(unit.active for unit in self.units.values())

    def start(self) -> None:
        for unit in self.units.values():
            unit.start()
        if not self._atexit_registered:
            atexit.register(self.stop)
            self._atexit_registered = True
        logger.info(f"Dashboard session started (seed={self.seed})")

    def stop(self) -> None:
        was_active = self.active
        for unit in self.units.values():
            unit.stop()
        if was_active:
            logger.info("Dashboard session stopped")

    def snapshot(self) -> Dict[str, Any]:
        return {name: unit.snapshot() for name, unit in self.units.items()}

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
