"""Delay lines and FIR filtering."""

from .delay_line import DelayLine
from .fir import FIRFilter, raised_cosine, root_raised_cosine

__all__ = [
    "DelayLine",
    "FIRFilter",
    "raised_cosine",
    "root_raised_cosine",
]
