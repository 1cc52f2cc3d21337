"""
Direct-form FIR filtering and pulse-shaping filter design.

:class:`FIRFilter` keeps its input history in a
:class:`~radio_dsp.filters.delay_line.DelayLine` and computes
``y[n] = sum_k h[k] * x[n - k]`` one sample at a time, which makes it usable
inside sample-by-sample simulation loops. For whole arrays its output equals
``scipy.signal.lfilter(h, 1, x)``.

References
----------
.. [1] Proakis, J. G., & Salehi, M. (2008). Digital Communications (5th ed.).
       McGraw-Hill. Section 9.2.
"""

from typing import Any, Optional

import numpy as np

from ..utils.contracts import require
from .delay_line import DelayLine


class FIRFilter:
    """
    Finite impulse response filter driven sample by sample.

    Parameters
    ----------
    coefficients : array-like
        Impulse response ``h``. An empty response gives a transparent filter.
    fill : optional
        Initial content of the input history (defaults to zero).
    dtype : numpy dtype, default=complex
        Element type of the input history.

    Examples
    --------
    >>> fir = FIRFilter([0.5, 0.5], dtype=float)
    >>> fir.filter([2.0, 2.0, 4.0]).tolist()
    [1.0, 2.0, 3.0]
    """

    def __init__(self, coefficients, fill: Optional[Any] = None, dtype=complex):
        self._coef = np.array(coefficients)
        require(self._coef.ndim == 1, "FIR coefficients must be a 1-D sequence")
        self._delay = DelayLine(len(self._coef), dtype=dtype, fill=fill)

    @property
    def coefficients(self) -> np.ndarray:
        return self._coef.copy()

    def __len__(self) -> int:
        return len(self._coef)

    def reset(self, fill: Optional[Any] = None) -> None:
        """Clear the input history."""
        self._delay.reset(fill)

    def put(self, x: Any) -> None:
        """Push ``x`` into the history without computing an output."""
        if len(self._coef):
            self._delay.push(x)

    def __call__(self, x: Any) -> Any:
        """Filter one sample."""
        if not len(self._coef):
            return x

        self._delay.push(x)
        return np.dot(self._coef, self._delay.to_array())

    def filter(self, signal) -> np.ndarray:
        """Filter a whole sequence, continuing from the current history."""
        return np.array([self(x) for x in signal])


def _check_design(rolloff: float, span: int, sps: int) -> None:
    require(0.0 <= rolloff <= 1.0, f"Roll-off factor must be in [0, 1], got {rolloff}")
    require(span > 0 and span % 2 == 0, f"Filter span must be a positive even integer, got {span}")
    require(sps > 0, f"Samples per symbol must be positive, got {sps}")


def _symbol_time(span: int, sps: int) -> np.ndarray:
    return (np.arange(span * sps + 1) - sps * span / 2.0) / sps


def raised_cosine(rolloff: float, span: int, sps: int) -> np.ndarray:
    """
    Raised-cosine pulse.

    Parameters
    ----------
    rolloff : float
        Excess bandwidth factor in ``[0, 1]``.
    span : int
        Filter length in symbols, positive and even.
    sps : int
        Samples per symbol.

    Returns
    -------
    taps : ndarray of shape (span * sps + 1,)
        Filter taps, 1.0 at the center and zero at every other symbol
        instant.
    """
    _check_design(rolloff, span, sps)

    t = _symbol_time(span, sps)
    den = 1.0 - (2.0 * rolloff * t) ** 2
    singular = np.isclose(den, 0.0, atol=1e-12)

    taps = np.sinc(t) * np.pi / 4.0
    regular = ~singular
    taps[regular] = np.sinc(t[regular]) * np.cos(np.pi * rolloff * t[regular]) / den[regular]
    return taps


def root_raised_cosine(rolloff: float, span: int, sps: int) -> np.ndarray:
    """
    Square-root raised-cosine pulse, scaled by ``1/sqrt(sps)``.

    Two cascaded root raised-cosine filters (transmit and receive) form a
    raised-cosine response. Parameters are as for :func:`raised_cosine`.
    """
    _check_design(rolloff, span, sps)

    t = _symbol_time(span, sps)
    den = 1.0 - (4.0 * rolloff * t) ** 2
    at_zero = t == 0.0
    singular = np.isclose(den, 0.0, atol=1e-12) & ~at_zero
    regular = ~(at_zero | singular)

    taps = np.empty_like(t)
    taps[at_zero] = 1.0 + 4.0 * rolloff / np.pi - rolloff
    if np.any(singular):
        arg = np.pi / (4.0 * rolloff)
        taps[singular] = rolloff / np.sqrt(2.0) * (
            (1.0 + 2.0 / np.pi) * np.sin(arg) + (1.0 - 2.0 / np.pi) * np.cos(arg))
    tr = t[regular]
    taps[regular] = (np.sin(np.pi * (1.0 - rolloff) * tr)
                     + 4.0 * rolloff * tr * np.cos(np.pi * (1.0 + rolloff) * tr)) \
        / (np.pi * tr * den[regular])

    return taps / np.sqrt(sps)
