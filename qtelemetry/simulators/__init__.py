"""Timer-driven simulation units behind the dashboard widgets."""

from .random_source import RandomSource
from .base import PeriodicSimulator, TickTimer
from .qubits import QubitRecord, QubitRegisterSimulator, state_vector_preview
from .coherence import CoherenceSample, CoherenceSeriesSimulator
from .gates import GateEvent, GateFeedSimulator, GATES
from .probability import (
    ProbabilityGridSimulator,
    grid_entropy,
    grid_purity,
    grid_statistics,
    cell_color
)
from .clock import SystemClock

__all__ = [
    'RandomSource',
    'PeriodicSimulator',
    'TickTimer',
    'QubitRecord',
    'QubitRegisterSimulator',
    'state_vector_preview',
    'CoherenceSample',
    'CoherenceSeriesSimulator',
    'GateEvent',
    'GateFeedSimulator',
    'GATES',
    'ProbabilityGridSimulator',
    'grid_entropy',
    'grid_purity',
    'grid_statistics',
    'cell_color',
    'SystemClock'
]
