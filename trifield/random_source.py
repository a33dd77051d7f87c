"""Explicit random streams threaded through candidate sampling."""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Minimal set of draws the placement generator needs."""

    def uniform(self, low: float, high: float) -> float:
        ...

    def normal(self, mean: float, stddev: float) -> float:
        ...

    def bool(self, probability: float) -> bool:
        ...


class NumpyRandomSource:
    """:class:`RandomSource` backed by a ``numpy.random.Generator``."""

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    @classmethod
    def from_seed(cls, seed: Optional[int] = None) -> "NumpyRandomSource":
        return cls(np.random.default_rng(seed))

    def uniform(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))

    def normal(self, mean: float, stddev: float) -> float:
        return float(self.rng.normal(mean, stddev))

    def bool(self, probability: float) -> bool:
        return bool(self.rng.random() < probability)


__all__ = ["RandomSource", "NumpyRandomSource"]
