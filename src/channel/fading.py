"""
Rayleigh fading generator based on the sum-of-sinusoids model.

Each of the N fading processes is a weighted sum of N Doppler-shifted
sinusoids. Evaluating N independent weighted sums directly costs O(N**2) per
time instant. Instead, the N raw oscillator values
``a[i] * sin(w[i] * t + phi[i])`` are computed once and then mixed by the
normalized Hadamard transform, which gives N decorrelated fading samples in
O(N log N): row ``k`` of the Hadamard matrix is the sign pattern of process
``k``.

Oscillator frequencies follow either the Jakes (U-shaped) Doppler spectrum,
``w[i] = 2*pi*Fd*cos(pi/2 * (i + 0.5) / N)``, or a flat spectrum,
``w[i] = 2*pi*Fd*(i + 0.5) / N``. Every frequency is perturbed by a random
relative jitter of at most 1e-5 so that the sum never becomes exactly
periodic. The amplitudes ``sqrt(2N) * exp(1j*pi*(i + 1)/N)`` give each
output process unit mean power.

References
----------
.. [1] Jakes, W. C. (1974). Microwave Mobile Communications. Wiley.
.. [2] Dent, P., Bottomley, G. E., & Croft, T. (1993). Jakes fading model
       revisited. Electronics Letters, 29(13), 1162-1163.
"""

from enum import Enum
from typing import Optional, Union
import warnings

import numpy as np

from ..transforms import hadamard
from ..utils.contracts import next_pow2, require, require_index
from ..utils.errors import PreconditionError
from ..utils.sampling import UniformSource, uniform as default_uniform

MIN_PROCESSES = 16
FREQ_JITTER = 1.0e-5


class FadingType(Enum):
    """Doppler spectrum shape."""

    JAKES = "jakes"
    FLAT = "flat"


def _resolve_type(fading_type: Union[FadingType, str]) -> FadingType:
    if isinstance(fading_type, FadingType):
        return fading_type
    if isinstance(fading_type, str):
        try:
            return FadingType(fading_type.lower())
        except ValueError:
            pass
    raise PreconditionError(f"Unknown fading type: {fading_type!r}")


class RayleighFading:
    """
    Generator of N correlated-in-time, mutually decorrelated fading processes.

    Parameters
    ----------
    doppler_freq : float
        Maximum Doppler frequency in Hz.
    fading_type : FadingType or {'jakes', 'flat'}, default=FadingType.JAKES
        Doppler spectrum shape.
    n_processes : int, default=1
        Requested number of fading processes. The actual number is the next
        power of two, and at least 16.
    uniform : callable, optional
        Uniform source ``uniform(lo, hi)`` used for the initial phases and
        frequency jitter. Defaults to numpy's global generator.

    Attributes
    ----------
    doppler_freq : float
        Maximum Doppler frequency in Hz.
    fading_type : FadingType
        Doppler spectrum shape.
    evaluated : bool
        True once :meth:`evaluate` has been called.

    Examples
    --------
    >>> fading = RayleighFading(10.0, FadingType.JAKES, n_processes=4)
    >>> fading.size()
    16
    >>> h = fading.evaluate(1e-3)[0]
    """

    def __init__(
        self,
        doppler_freq: float,
        fading_type: Union[FadingType, str] = FadingType.JAKES,
        n_processes: int = 1,
        uniform: Optional[UniformSource] = None
    ):
        self.doppler_freq = float(doppler_freq)
        self.fading_type = _resolve_type(fading_type)
        require(int(n_processes) >= 0,
                f"Number of fading processes must be non-negative, got {n_processes}")
        self._validate_parameters()

        if uniform is None:
            uniform = default_uniform

        n = max(MIN_PROCESSES, next_pow2(n_processes))
        index = np.arange(n)

        if self.fading_type is FadingType.JAKES:
            shape = np.cos(0.5 * np.pi * (index + 0.5) / n)
        else:
            shape = (index + 0.5) / n

        phase = np.empty(n)
        freq = np.empty(n)
        for i in range(n):
            phase[i] = uniform(0.0, 2.0 * np.pi)
            jitter = 1.0 + uniform(-FREQ_JITTER, FREQ_JITTER)
            freq[i] = 2.0 * np.pi * self.doppler_freq * shape[i] * jitter

        self._ampl = np.sqrt(2.0 * n) * np.exp(1j * np.pi * (index + 1.0) / n)
        self._phase = phase
        self._freq = freq
        for descriptor in (self._ampl, self._phase, self._freq):
            descriptor.flags.writeable = False

        self._samples = np.zeros(n, dtype=np.complex128)
        self.evaluated = False

    def _validate_parameters(self) -> None:
        """Validate initialization parameters."""
        if not np.isfinite(self.doppler_freq):
            raise ValueError("Doppler frequency must be finite")
        if self.doppler_freq == 0.0:
            warnings.warn("Zero Doppler frequency: fading samples will not change with time",
                          RuntimeWarning)

    def evaluate(self, t: float) -> 'RayleighFading':
        """
        Compute the fading samples of all processes at time ``t``.

        Parameters
        ----------
        t : float
            Time in seconds.

        Returns
        -------
        self : RayleighFading
            The generator, for chained indexing.
        """
        np.multiply(self._ampl, np.sin(self._freq * t + self._phase), out=self._samples)
        hadamard.normalized(self._samples)
        self.evaluated = True
        return self

    __call__ = evaluate

    def trajectory(self, times) -> np.ndarray:
        """
        Fading samples at several time instants.

        The generator state is not modified.

        Parameters
        ----------
        times : array-like of shape (n_times,)
            Time instants in seconds.

        Returns
        -------
        samples : ndarray of shape (n_times, size())
            Row ``j`` equals the samples produced by ``evaluate(times[j])``.
        """
        t = np.asarray(times, dtype=float).reshape(-1)
        out = self._ampl * np.sin(np.outer(t, self._freq) + self._phase)
        return hadamard.normalized(out)

    def at(self, i: int) -> complex:
        """Sample of process ``i`` from the latest evaluation (zero before any)."""
        require_index(i, len(self._samples))
        return complex(self._samples[i])

    def __getitem__(self, i: int) -> complex:
        return self.at(i)

    def size(self) -> int:
        """Number of fading processes."""
        return len(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    @property
    def samples(self) -> np.ndarray:
        """Read-only view of the latest samples."""
        view = self._samples.view()
        view.flags.writeable = False
        return view

    @property
    def amplitudes(self) -> np.ndarray:
        return self._ampl

    @property
    def phases(self) -> np.ndarray:
        return self._phase

    @property
    def frequencies(self) -> np.ndarray:
        """Angular oscillator frequencies in rad/s."""
        return self._freq

    @property
    def amplitude_bound(self) -> float:
        """Upper bound of the sample magnitude, ``sqrt(2N)``."""
        return float(np.sqrt(2.0 * len(self._samples)))

    def __repr__(self) -> str:
        return (f"RayleighFading(doppler_freq={self.doppler_freq!r}, "
                f"fading_type={self.fading_type.name}, size={self.size()})")
