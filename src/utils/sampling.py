"""
Uniform random source shared by the stochastic components.

Components that need random draws accept any callable ``uniform(lo, hi)``
returning an independent float in ``[lo, hi)``. The default draws from
numpy's global generator, so ``np.random.seed`` makes runs reproducible.
"""

from typing import Callable

import numpy as np

UniformSource = Callable[[float, float], float]


def uniform(lo: float, hi: float) -> float:
    """Draw one uniform sample from ``[lo, hi)``."""
    return float(np.random.uniform(lo, hi))
