"""Channel models and modems: fading, noise, multipath propagation, modulation."""

from .fading import RayleighFading, FadingType
from .noise import GaussNoise, add_awgn
from .multipath import MultipathChannel
from .modem import ModulationMap, Modulator, Demodulator

__all__ = [
    "RayleighFading",
    "FadingType",
    "GaussNoise",
    "add_awgn",
    "MultipathChannel",
    "ModulationMap",
    "Modulator",
    "Demodulator",
]
