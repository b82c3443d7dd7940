"""
Probability grid simulator: a 16x16 heatmap of drifting values.

Aggregate statistics are pure functions of the grid and are recomputed on
every read.
"""

import math
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..utils.formatters import pct_fmt
from .base import PeriodicSimulator
from .random_source import RandomSource

GRID_SIZE = 16
CELL_STEP = 0.05

# Heatmap end points: value 0 -> LOW_COLOR, value 1 -> HIGH_COLOR
LOW_COLOR = (37, 99, 235)
HIGH_COLOR = (6, 182, 212)
MIN_OPACITY = 0.2


def grid_entropy(grid: np.ndarray) -> float:
    """Shannon entropy (bits) of the grid treated as an unnormalized distribution."""
    total = float(grid.sum())
    if total <= 0:
        return 0.0
    normalized = grid.ravel() / total
    normalized = normalized[normalized > 0]
    return float(-np.sum(normalized * np.log2(normalized)))


def grid_purity(grid: np.ndarray) -> float:
    """Participation-ratio purity ``N * sum(p^2) / sum(p)^2``; 1.0 for a uniform grid."""
    total = float(grid.sum())
    if total <= 0:
        return 1.0
    return float(grid.size * np.sum(np.square(grid)) / total ** 2)


def grid_statistics(grid: np.ndarray) -> Dict[str, float]:
    return {
        'max': float(grid.max()),
        'min': float(grid.min()),
        'entropy': grid_entropy(grid),
        'purity': grid_purity(grid),
    }


def cell_rgb(p: float) -> Tuple[int, int, int]:
    return tuple(math.floor(lo + (hi - lo) * p) for lo, hi in zip(LOW_COLOR, HIGH_COLOR))


def cell_color(p: float) -> str:
    """CSS colour of a heatmap cell; opacity grows with the value."""
    r, g, b = cell_rgb(p)
    return f"rgba({r}, {g}, {b}, {MIN_OPACITY + p * (1 - MIN_OPACITY):.3f})"


class ProbabilityGridSimulator(PeriodicSimulator):
    """16x16 grid of values in [0, 1], each cell perturbed independently every tick."""

    name = 'probability'
    interval = 0.2

    def __init__(self, rng: Optional[RandomSource] = None, interval: Optional[float] = None,
                 size: int = GRID_SIZE):
        super().__init__(rng, interval)
        self.size = size
        self.grid: Optional[np.ndarray] = None

    def reset(self) -> None:
        self.grid = self.rng.uniform_array(0.0, 1.0, (self.size, self.size))

    def clear(self) -> None:
        self.grid = None

    def tick(self) -> None:
        with self._lock:
            if self.grid is None:
                return
            noise = self.rng.uniform_array(-CELL_STEP, CELL_STEP, self.grid.shape)
            self.grid = np.clip(self.grid + noise, 0.0, 1.0)

    def statistics(self) -> Optional[Dict[str, float]]:
        with self._lock:
            grid = self.grid
        return None if grid is None else grid_statistics(grid)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            grid = self.grid
        if grid is None:
            return {'active': self.active, 'grid': [], 'colors': [], 'statistics': None}
        stats = grid_statistics(grid)
        return {
            'active': self.active,
            'grid': grid.tolist(),
            'colors': [[cell_color(p) for p in row] for row in grid.tolist()],
            'statistics': {
                **stats,
                'max_pct': pct_fmt(stats['max'], 2),
                'min_pct': pct_fmt(stats['min'], 2),
                'entropy_fmt': f"{stats['entropy']:.3f}",
                'purity_fmt': f"{stats['purity']:.4f}",
            },
        }
