"""
Tapped-delay-line multipath channel with Rayleigh-faded taps.

The channel output is a weighted sum of delayed copies of the input, each
path scaled by its own fading process, plus optional complex white noise::

    y[n] = sum_k g[k] * h_k(n / fs) * x[n - d[k]] + w[n]

Tap delays ``d[k]`` are integer sample counts and ``g[k]`` the linear
amplitude gains derived from the tap powers in dB. All tap fading processes
come from a single :class:`~radio_dsp.channel.fading.RayleighFading`
generator, so the paths fade independently of each other.
"""

from typing import Optional, Sequence, Union

import numpy as np

from ..filters.delay_line import DelayLine
from ..utils.contracts import require
from ..utils.conversions import db_to_linear
from ..utils.sampling import UniformSource
from .fading import FadingType, RayleighFading
from .noise import GaussNoise


class MultipathChannel:
    """
    Sample-by-sample multipath fading channel.

    Parameters
    ----------
    delays : sequence of int
        Path delays in samples.
    gains_db : sequence of float
        Average path powers in dB, one per delay.
    doppler_freq : float
        Maximum Doppler frequency in Hz.
    sample_rate : float
        Sample rate in Hz; sample ``n`` is processed at time ``n / sample_rate``.
    fading_type : FadingType or str, default=FadingType.JAKES
        Doppler spectrum shape of the tap processes.
    noise_stdev : float, default=0.0
        Standard deviation of the additive complex noise (0 disables noise).
    uniform : callable, optional
        Uniform source for the fading and noise generators.

    Examples
    --------
    >>> channel = MultipathChannel([0, 3], [0.0, -6.0], doppler_freq=50.0,
    ...                            sample_rate=1e4)
    >>> y = channel.run(np.ones(16))
    >>> y.shape
    (16,)
    """

    def __init__(
        self,
        delays: Sequence[int],
        gains_db: Sequence[float],
        doppler_freq: float,
        sample_rate: float,
        fading_type: Union[FadingType, str] = FadingType.JAKES,
        noise_stdev: float = 0.0,
        uniform: Optional[UniformSource] = None
    ):
        self.delays = np.asarray(delays, dtype=int).reshape(-1)
        self.gains_db = np.asarray(gains_db, dtype=float).reshape(-1)
        self.sample_rate = float(sample_rate)
        self._validate_parameters()

        self._gains = np.sqrt(db_to_linear(self.gains_db))
        self._delay = DelayLine(int(self.delays.max()) + 1, dtype=complex)
        self._fading = RayleighFading(doppler_freq, fading_type, len(self.delays), uniform)
        self._noise = GaussNoise(noise_stdev, uniform=uniform) if noise_stdev else None
        self._n = 0

    def _validate_parameters(self) -> None:
        """Validate initialization parameters."""
        require(len(self.delays) > 0, "At least one path is required")
        require(len(self.delays) == len(self.gains_db),
                f"Got {len(self.delays)} delays but {len(self.gains_db)} gains")
        require(bool(np.all(self.delays >= 0)), "Path delays must be non-negative")
        if not self.sample_rate > 0:
            raise ValueError("Sample rate must be positive")

    @property
    def fading(self) -> RayleighFading:
        return self._fading

    @property
    def time(self) -> float:
        """Time of the next processed sample in seconds."""
        return self._n / self.sample_rate

    def reset(self) -> None:
        """Clear the path history and restart the channel clock."""
        self._delay.reset()
        self._n = 0

    def __call__(self, x: complex) -> complex:
        """Pass one sample through the channel."""
        self._delay.push(x)
        self._fading.evaluate(self.time)

        taps = self._fading.samples[:len(self.delays)]
        history = self._delay.to_array()[self.delays]
        y = np.sum(self._gains * taps * history)

        if self._noise is not None:
            y += self._noise.sample()

        self._n += 1
        return complex(y)

    def run(self, signal) -> np.ndarray:
        """Pass a whole sequence through the channel."""
        return np.array([self(x) for x in signal], dtype=complex)
