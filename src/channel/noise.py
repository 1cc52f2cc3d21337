"""
Complex additive white Gaussian noise.

Samples are drawn with the polar (Marsaglia) method from a uniform source:
real and imaginary parts are independent, zero-mean normal variables with
variance ``stdev**2 / 2`` each, so ``E|n|**2 == stdev**2`` and ``|n|`` is
Rayleigh distributed.
"""

from typing import Optional, Tuple

import numpy as np

from ..utils.contracts import require
from ..utils.conversions import db_to_linear
from ..utils.errors import DomainError
from ..utils.sampling import UniformSource, uniform as default_uniform


def _check_stdev(stdev: float) -> float:
    stdev = float(stdev)
    if not (np.isfinite(stdev) and stdev >= 0.0):
        raise DomainError(f"Noise standard deviation must be finite and non-negative, got {stdev}")
    return stdev


def _polar_sample(stdev: float, uniform: UniformSource) -> complex:
    while True:
        re = uniform(-1.0, 1.0)
        im = uniform(-1.0, 1.0)
        r2 = re * re + im * im
        if 0.0 < r2 < 1.0:
            break

    scale = stdev * np.sqrt(-np.log(r2) / r2)
    return complex(re * scale, im * scale)


class GaussNoise:
    """
    Complex Gaussian noise source with a fixed standard deviation.

    Parameters
    ----------
    stdev : float, default=1.0
        Standard deviation of the complex sample (RMS magnitude).
    dtype : numpy dtype, default=complex128
        Dtype of arrays returned by :meth:`generate`.
    uniform : callable, optional
        Uniform source ``uniform(lo, hi)`` used by :meth:`sample`. Defaults
        to numpy's global generator.

    Examples
    --------
    >>> import numpy as np
    >>> np.random.seed(0)
    >>> noise = GaussNoise(0.1)
    >>> n = noise.generate(100000)
    >>> bool(abs(np.mean(np.abs(n) ** 2) - 0.01) < 1e-3)
    True
    """

    def __init__(self, stdev: float = 1.0, dtype=np.complex128,
                 uniform: Optional[UniformSource] = None):
        self._stdev = _check_stdev(stdev)
        self._dtype = np.dtype(dtype)
        self._uniform = default_uniform if uniform is None else uniform
        require(np.issubdtype(self._dtype, np.complexfloating),
                f"Noise dtype must be complex, got {self._dtype}")

    @classmethod
    def from_snr(cls, snr_db: float, signal_power: float = 1.0, **kwargs) -> 'GaussNoise':
        """
        Noise source giving ``snr_db`` against a signal of ``signal_power``.

        Raises
        ------
        DomainError
            If ``signal_power`` is not positive.
        """
        if not signal_power > 0.0:
            raise DomainError(f"Signal power must be positive, got {signal_power}")
        return cls(np.sqrt(signal_power / db_to_linear(snr_db)), **kwargs)

    @property
    def stdev(self) -> float:
        return self._stdev

    def sample(self) -> complex:
        """Draw one complex noise sample."""
        return _polar_sample(self._stdev, self._uniform)

    __call__ = sample

    @staticmethod
    def get_sample(stdev: float, uniform: Optional[UniformSource] = None) -> complex:
        """Draw one complex sample with deviation ``stdev`` without an instance."""
        return _polar_sample(_check_stdev(stdev), default_uniform if uniform is None else uniform)

    def generate(self, n: int) -> np.ndarray:
        """Draw ``n`` samples at once from numpy's global generator."""
        scale = self._stdev / np.sqrt(2.0)
        noise = scale * (np.random.standard_normal(n) + 1j * np.random.standard_normal(n))
        return noise.astype(self._dtype)

    def __repr__(self) -> str:
        return f"GaussNoise(stdev={self._stdev!r})"


def add_awgn(signal: np.ndarray, snr_db: float,
             signal_power: Optional[float] = None) -> Tuple[np.ndarray, float]:
    """
    Add complex white Gaussian noise at a given SNR.

    Parameters
    ----------
    signal : array-like
        Input samples.
    snr_db : float
        Target signal-to-noise ratio in dB.
    signal_power : float, optional
        Reference signal power; measured as ``mean(|signal|**2)`` if omitted.

    Returns
    -------
    noisy : ndarray
        ``signal`` plus noise.
    stdev : float
        Standard deviation of the added noise.

    Raises
    ------
    DomainError
        If the signal power is zero (for example an all-zero signal).
    """
    signal = np.asarray(signal)
    if signal_power is None:
        signal_power = float(np.mean(np.abs(signal) ** 2))

    noise = GaussNoise.from_snr(snr_db, signal_power)
    return signal + noise.generate(signal.size).reshape(signal.shape), noise.stdev
