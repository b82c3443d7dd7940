"""
Coherence time-series simulator: a sliding window of decaying metrics.
"""

from collections import deque
from dataclasses import dataclass, asdict
from typing import Any, Deque, Dict, Optional

from ..utils.formatters import pct_fmt
from .base import PeriodicSimulator
from .random_source import RandomSource

WINDOW_SIZE = 50

COHERENCE_FLOOR = 0.3
FIDELITY_FLOOR = 0.7
ERROR_RATE_CEILING = 0.15

# Latest coherence above this is shown as nominal
COHERENCE_NOMINAL = 0.7


@dataclass
class CoherenceSample:
    tick: int
    coherence: float
    fidelity: float
    error_rate: float

    @classmethod
    def initial(cls, tick: int, rng: RandomSource) -> 'CoherenceSample':
        return cls(
            tick=tick,
            coherence=0.95 - tick * 0.008 + rng.uniform(0.0, 0.05),
            fidelity=0.99 - tick * 0.002 + rng.uniform(0.0, 0.02),
            error_rate=0.01 + tick * 0.001 + rng.uniform(0.0, 0.005),
        )

    def next(self, rng: RandomSource) -> 'CoherenceSample':
        return CoherenceSample(
            tick=self.tick + 1,
            coherence=max(COHERENCE_FLOOR, self.coherence - 0.008 + rng.uniform(0.0, 0.01)),
            fidelity=max(FIDELITY_FLOOR, self.fidelity - 0.002 + rng.uniform(0.0, 0.004)),
            error_rate=min(ERROR_RATE_CEILING, self.error_rate + 0.001 + rng.uniform(0.0, 0.002)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CoherenceSample':
        return cls(
            tick=int(data['tick']),
            coherence=float(data['coherence']),
            fidelity=float(data['fidelity']),
            error_rate=float(data['error_rate']),
        )


class CoherenceSeriesSimulator(PeriodicSimulator):
    """Fixed-length window of coherence, fidelity and error-rate samples, oldest first."""

    name = 'coherence'
    interval = 0.5

    def __init__(self, rng: Optional[RandomSource] = None, interval: Optional[float] = None,
                 window: int = WINDOW_SIZE):
        super().__init__(rng, interval)
        self.samples: Deque[CoherenceSample] = deque(maxlen=window)

    def reset(self) -> None:
        self.samples.clear()
        self.samples.extend(CoherenceSample.initial(t, self.rng) for t in range(self.samples.maxlen))

    def clear(self) -> None:
        self.samples.clear()

    def tick(self) -> None:
        with self._lock:
            if self.samples:
                self.samples.append(self.samples[-1].next(self.rng))

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            samples = list(self.samples)
        latest = samples[-1] if samples else None
        return {
            'active': self.active,
            'series': [s.to_dict() for s in samples],
            'latest': None if latest is None else {
                **latest.to_dict(),
                'coherence_pct': pct_fmt(latest.coherence, 1),
                'fidelity_pct': pct_fmt(latest.fidelity, 2),
                'error_rate_pct': pct_fmt(latest.error_rate, 3),
                'coherence_status': 'nominal' if latest.coherence > COHERENCE_NOMINAL else 'degraded',
            },
        }
