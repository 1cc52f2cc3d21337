"""
Fast Walsh-Hadamard transform.

The transform multiplies a vector of length N = 2**k by the Sylvester-ordered
Hadamard matrix H (entries +1/-1, ``H @ H.T == N * I``). It runs in place in
O(N log N) operations with k butterfly stages: at each stage the elements
spaced ``P`` apart are combined as ``a' = a + b``, ``b' = a' - 2b``, starting
with ``P = N/2`` and halving ``P`` every stage.

Two entry points are provided:

- :func:`unnormalized` applies H once.
- :func:`normalized` applies H and scales by 1/N.

Since ``H @ H == N * I``, ``normalized(unnormalized(x))`` restores ``x``.
Historically the unnormalized entry point was exposed as ``ifht`` and the
normalized one as ``fht``, which is the reverse of the Fourier naming
convention used by :class:`~radio_dsp.transforms.fourier.TransformEngine`.
Both aliases are kept with their original behavior.

References
----------
.. [1] Fino, B. J., & Algazi, V. R. (1976). Unified matrix treatment of the
       fast Walsh-Hadamard transform. IEEE Transactions on Computers, 25(11),
       1142-1146.
"""

from collections.abc import MutableSequence
from typing import Union

import numpy as np

from ..utils.contracts import require, require_pow2

Buffer = Union[np.ndarray, MutableSequence]


def _check_buffer(x: Buffer) -> int:
    if isinstance(x, np.ndarray):
        require(x.ndim >= 1, "Hadamard transform needs at least a 1-D array")
        n = x.shape[-1]
    else:
        require(isinstance(x, MutableSequence),
                f"Hadamard transform works in place, got immutable {type(x).__name__}")
        n = len(x)
    require_pow2(n, "Hadamard transform length")
    return n


def _butterflies_array(x: np.ndarray) -> None:
    """Run all butterfly stages over the last axis of a contiguous array."""
    if x.size == 0:
        return
    lead = x.shape[:-1]
    half = x.shape[-1] // 2
    while half >= 1:
        view = x.reshape(lead + (-1, 2, half))
        top = view[..., 0, :]
        bottom = view[..., 1, :]
        top += bottom
        bottom *= -2
        bottom += top
        half //= 2


def _butterflies_sequence(x: MutableSequence) -> None:
    """Scalar butterflies; only ``+`` and ``-`` are required of the elements."""
    n = len(x)
    half = n // 2
    while half >= 1:
        for s1 in range(0, n, 2 * half):
            s2 = s1 + half
            for k in range(half):
                x[s1 + k] = x[s1 + k] + x[s2 + k]
                x[s2 + k] = x[s1 + k] - (x[s2 + k] + x[s2 + k])
        half //= 2


def unnormalized(x: Buffer) -> Buffer:
    """
    Apply the Hadamard matrix to ``x`` in place, without scaling.

    Parameters
    ----------
    x : ndarray or mutable sequence
        Buffer whose length is a power of two. For N-D arrays the transform
        runs along the last axis. Elements may be of any type supporting
        addition and subtraction.

    Returns
    -------
    x : ndarray or mutable sequence
        The same buffer object, now holding ``H @ x``.

    Raises
    ------
    PreconditionError
        If the length is not a power of two or the buffer is immutable.

    Examples
    --------
    >>> unnormalized([1, 1, 1, 1])
    [4, 0, 0, 0]
    """
    _check_buffer(x)

    if isinstance(x, np.ndarray):
        if x.flags.c_contiguous:
            _butterflies_array(x)
        else:
            work = np.ascontiguousarray(x)
            _butterflies_array(work)
            x[...] = work
    else:
        _butterflies_sequence(x)

    return x


def normalized(x: Buffer) -> Buffer:
    """
    Apply the Hadamard matrix to ``x`` in place and scale by ``1/N``.

    This is the inverse of :func:`unnormalized`.

    Parameters
    ----------
    x : ndarray or mutable sequence
        Buffer whose length is a power of two. Arrays must have a floating
        point or complex dtype.

    Returns
    -------
    x : ndarray or mutable sequence
        The same buffer object, now holding ``H @ x / N``.

    Examples
    --------
    >>> normalized([1.0, 1.0, 1.0, 1.0])
    [1.0, 0.0, 0.0, 0.0]
    """
    n = _check_buffer(x)
    if isinstance(x, np.ndarray):
        require(np.issubdtype(x.dtype, np.inexact),
                f"normalized Hadamard transform needs a float or complex array, got {x.dtype}")

    unnormalized(x)

    scale = 1.0 / n
    if isinstance(x, np.ndarray):
        x *= scale
    else:
        for i in range(n):
            x[i] = x[i] * scale

    return x


# Original entry point names (see module docstring).
ifht = unnormalized
fht = normalized
