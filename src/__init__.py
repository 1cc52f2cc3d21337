"""Digital signal processing primitives for radio channel simulation.

This package provides the building blocks of communication-system simulation
pipelines: fast in-place orthogonal transforms, a Rayleigh fading generator
that uses the Hadamard transform to produce many fading processes at
O(N log N) cost, bounded-history delay lines, FIR filtering and complex
Gaussian noise.

Modules:
    transforms: Fast Walsh-Hadamard transform and Fourier transform engine
    channel: Fading, noise and multipath channel models, PSK/QAM modems
    filters: Delay line, FIR filter and pulse-shaping design
    utils: Error types, precondition checks and unit conversions
"""

__version__ = "1.0.0"
__author__ = "Radio DSP Team"
__email__ = "contact@example.com"

# Import key classes and functions for easy access
from .transforms import (
    TransformEngine,
    unnormalized,
    normalized,
    fht,
    ifht,
)
from .channel import (
    RayleighFading,
    FadingType,
    GaussNoise,
    MultipathChannel,
    ModulationMap,
    Modulator,
    Demodulator,
)
from .filters import (
    DelayLine,
    FIRFilter,
)
from .utils import (
    DSPError,
    PreconditionError,
    DomainError,
)

__all__ = [
    "TransformEngine",
    "unnormalized",
    "normalized",
    "fht",
    "ifht",
    "RayleighFading",
    "FadingType",
    "GaussNoise",
    "MultipathChannel",
    "ModulationMap",
    "Modulator",
    "Demodulator",
    "DelayLine",
    "FIRFilter",
    "DSPError",
    "PreconditionError",
    "DomainError",
]
