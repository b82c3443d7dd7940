"""
Injectable pseudo-random source shared by the simulator units.
"""

from typing import List, Optional, Sequence

import numpy as np


class RandomSource:
    """
    Thin wrapper around a numpy ``Generator``.

    Every random draw made by a simulator goes through one of these, so a
    fixed seed reproduces the exact output sequence of a unit.
    """

    def __init__(self, seed: Optional[int] = None, generator: Optional[np.random.Generator] = None):
        self._rng = generator if generator is not None else np.random.default_rng(seed)

    @classmethod
    def spawn(cls, seed: Optional[int], count: int) -> List['RandomSource']:
        """Derive ``count`` independent sources from one optional seed."""
        children = np.random.SeedSequence(seed).spawn(count)
        return [cls(generator=np.random.default_rng(child)) for child in children]

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        return float(self._rng.uniform(low, high))

    def uniform_array(self, low: float, high: float, shape) -> np.ndarray:
        return self._rng.uniform(low, high, size=shape)

    def integer(self, low: int, high: int) -> int:
        """Uniform integer in the closed range [low, high]."""
        return int(self._rng.integers(low, high + 1))

    def choice(self, options: Sequence):
        return options[self.integer(0, len(options) - 1)]
