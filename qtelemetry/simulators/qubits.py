"""
Qubit register simulator: eight Bloch-sphere indicators perturbed every 100 ms.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from ..utils.formatters import basis_label, pct_fmt
from .base import PeriodicSimulator
from .random_source import RandomSource

TWO_PI = 2 * math.pi
NUM_QUBITS = 8
PREVIEW_QUBITS = 4

AMPLITUDE_STEP = 0.05
PHASE_STEP = 0.1
COHERENCE_DRIFT = 0.002
COHERENCE_FLOOR = 0.5

# Bloch indicator travels at most this far from the centre, in percent
BLOCH_RADIUS_PCT = 40


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class QubitRecord:
    alpha: float
    beta: float
    phase: float
    coherence: float

    @classmethod
    def random(cls, rng: RandomSource) -> 'QubitRecord':
        alpha = rng.uniform(0.0, 1.0)
        return cls(
            alpha=alpha,
            beta=math.sqrt(1 - alpha * alpha),
            phase=rng.uniform(0.0, TWO_PI),
            coherence=0.7 + rng.uniform(0.0, 0.3),
        )

    def perturbed(self, rng: RandomSource) -> 'QubitRecord':
        """
        Next state of this record.

        ``alpha`` and ``beta`` drift independently and are not renormalized,
        so ``alpha**2 + beta**2 == 1`` only holds for a freshly created record.
        """
        return QubitRecord(
            alpha=clamp(self.alpha + rng.uniform(-AMPLITUDE_STEP, AMPLITUDE_STEP), 0.0, 1.0),
            beta=clamp(self.beta + rng.uniform(-AMPLITUDE_STEP, AMPLITUDE_STEP), 0.0, 1.0),
            phase=(self.phase + PHASE_STEP) % TWO_PI,
            coherence=clamp(self.coherence - COHERENCE_DRIFT + rng.uniform(0.0, 2 * COHERENCE_DRIFT),
                            COHERENCE_FLOOR, 1.0),
        )

    @property
    def coherence_level(self) -> str:
        if self.coherence > 0.8:
            return 'high'
        if self.coherence > 0.6:
            return 'medium'
        return 'low'

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QubitRecord':
        return cls(
            alpha=float(data['alpha']),
            beta=float(data['beta']),
            phase=float(data['phase']),
            coherence=float(data['coherence']),
        )


def state_vector_preview(qubits: List[QubitRecord], count: int = PREVIEW_QUBITS) -> str:
    """Abbreviated |psi> built from the first qubits' alpha amplitudes."""
    terms = [f"{q.alpha:.2f}|{basis_label(i)}⟩" for i, q in enumerate(qubits[:count])]
    return ' + '.join(terms + ['...'])


class QubitRegisterSimulator(PeriodicSimulator):
    """Eight independent qubit records with drifting amplitudes, phase and coherence."""

    name = 'qubits'
    interval = 0.1

    def __init__(self, rng: Optional[RandomSource] = None, interval: Optional[float] = None,
                 size: int = NUM_QUBITS):
        super().__init__(rng, interval)
        self.size = size
        self.qubits: List[QubitRecord] = []

    def reset(self) -> None:
        self.qubits = [QubitRecord.random(self.rng) for _ in range(self.size)]

    def clear(self) -> None:
        self.qubits = []

    def tick(self) -> None:
        with self._lock:
            self.qubits = [q.perturbed(self.rng) for q in self.qubits]

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            qubits = list(self.qubits)
        return {
            'active': self.active,
            'qubits': [
                {
                    'index': i,
                    'label': f'Q{i}',
                    **q.to_dict(),
                    'coherence_pct': pct_fmt(q.coherence, 0),
                    'coherence_level': q.coherence_level,
                    'bloch_x': math.cos(q.phase) * q.alpha * BLOCH_RADIUS_PCT,
                    'bloch_y': math.sin(q.phase) * q.beta * BLOCH_RADIUS_PCT,
                    'rotation_deg': math.degrees(q.phase),
                }
                for i, q in enumerate(qubits)
            ],
            'state_vector': state_vector_preview(qubits) if qubits else '',
        }
