"""Gaussian random sources accepted by the vertex sampler.

The model never owns or seeds a random engine: the caller passes one per
sampling call, and each processing stream is expected to bring its own.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class GaussianSource(Protocol):
    def gauss(self, mean: float, sigma: float) -> float:
        """Draw one normally distributed value."""
        ...


class NumpyGaussianSource:
    """Adapter exposing :meth:`gauss` on top of a :class:`numpy.random.Generator`."""

    def __init__(self, rng: np.random.Generator | int | None = None):
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

    def gauss(self, mean: float, sigma: float) -> float:
        # One standard draw per call, also when sigma == 0
        return mean + sigma * float(self.rng.standard_normal())
