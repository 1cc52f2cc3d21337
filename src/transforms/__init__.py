"""Fast orthogonal transforms: Walsh-Hadamard and Fourier."""

from .hadamard import unnormalized, normalized, fht, ifht
from .fourier import TransformEngine, Radix2Kernel, ScipyKernel, fft, ifft, fft_shift

__all__ = [
    "unnormalized",
    "normalized",
    "fht",
    "ifht",
    "TransformEngine",
    "Radix2Kernel",
    "ScipyKernel",
    "fft",
    "ifft",
    "fft_shift",
]
