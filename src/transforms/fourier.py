"""
In-place discrete Fourier transform engine for power-of-two sizes.

The engine fixes the transform size and the forward/inverse scale factors at
construction. The transform itself is delegated to a kernel object owned by
the engine:

- :class:`Radix2Kernel` - iterative radix-2 Cooley-Tukey (decimation in time)
  with bit-reversal reordering and a precomputed twiddle table.
- :class:`ScipyKernel` - delegates to ``scipy.fft``.

The forward kernel uses ``exp(-2j*pi*n*k/N)`` and the inverse kernel
``exp(+2j*pi*n*k/N)``, both unscaled; the engine multiplies the result by the
configured scale. With the default scales (forward 1, inverse 1/N) the engine
agrees with ``numpy.fft.fft`` / ``numpy.fft.ifft``.

References
----------
.. [1] Cooley, J. W., & Tukey, J. W. (1965). An algorithm for the machine
       calculation of complex Fourier series. Mathematics of Computation,
       19(90), 297-301.
"""

from collections.abc import MutableSequence
from typing import Optional, Union
import copy
import warnings

import numpy as np
import scipy.fft

from ..utils.contracts import ilog2, require, require_length, require_pow2

Buffer = Union[np.ndarray, MutableSequence]


def _bit_reversal_permutation(n: int) -> np.ndarray:
    """Indices ``perm`` such that ``x[perm]`` is ``x`` in bit-reversed order."""
    perm = np.zeros(n, dtype=np.intp)
    bits = n.bit_length() - 1
    for b in range(bits):
        perm |= ((np.arange(n) >> b) & 1) << (bits - 1 - b)
    return perm


class Radix2Kernel:
    """
    Radix-2 FFT kernel working on a contiguous complex array of fixed size.

    Parameters
    ----------
    size : int
        Transform length, a power of two.
    dtype : numpy dtype
        Complex dtype of the twiddle tables.
    """

    name = "radix2"

    def __init__(self, size: int, dtype=np.complex128):
        self.size = size
        self.log2_size = ilog2(size)
        self._perm = _bit_reversal_permutation(size)
        k = np.arange(size // 2)
        self._forward_table = np.exp(-2j * np.pi * k / size).astype(dtype)
        self._inverse_table = np.conj(self._forward_table)

    def copy(self) -> 'Radix2Kernel':
        """Return a kernel with its own copies of the tables."""
        other = copy.copy(self)
        other._perm = self._perm.copy()
        other._forward_table = self._forward_table.copy()
        other._inverse_table = self._inverse_table.copy()
        return other

    def forward(self, x: np.ndarray) -> None:
        self._run(x, self._forward_table)

    def inverse(self, x: np.ndarray) -> None:
        self._run(x, self._inverse_table)

    def _run(self, x: np.ndarray, table: np.ndarray) -> None:
        n = self.size
        if n == 1:
            return

        x[:] = x[self._perm]

        half = 1
        while half < n:
            span = 2 * half
            twiddles = table[::n // span]
            view = x.reshape(-1, span)
            top = view[:, :half]
            bottom = view[:, half:]

            t = bottom * twiddles
            np.subtract(top, t, out=bottom)
            top += t

            half = span


class ScipyKernel:
    """Kernel backed by ``scipy.fft``; results are copied back into the buffer."""

    name = "scipy"

    def __init__(self, size: int, dtype=np.complex128):
        self.size = size
        self.log2_size = ilog2(size)

    def copy(self) -> 'ScipyKernel':
        return copy.copy(self)

    def forward(self, x: np.ndarray) -> None:
        x[...] = scipy.fft.fft(x)

    def inverse(self, x: np.ndarray) -> None:
        # norm="forward" leaves the inverse unscaled
        x[...] = scipy.fft.ifft(x, norm="forward")


_KERNELS = {
    Radix2Kernel.name: Radix2Kernel,
    ScipyKernel.name: ScipyKernel,
}


class TransformEngine:
    """
    Fixed-size, in-place Fourier transform with configurable scaling.

    Parameters
    ----------
    size : int
        Transform length, a power of two.
    forward_scale : float, default=1.0
        Factor applied after the forward kernel.
    inverse_scale : float, optional
        Factor applied after the inverse kernel. Defaults to ``1/size`` so
        that ``inverse(forward(x))`` reproduces ``x``.
    dtype : numpy dtype, default=complex128
        Working precision of the kernel tables.
    backend : {'radix2', 'scipy'}, default='radix2'
        Kernel implementation.

    Attributes
    ----------
    size : int
        Transform length.
    log2_size : int
        Binary logarithm of the length.
    forward_scale, inverse_scale : float
        Configured scale factors.

    Examples
    --------
    >>> import numpy as np
    >>> engine = TransformEngine(8)
    >>> x = np.arange(8, dtype=complex)
    >>> _ = engine.forward(x)
    >>> _ = engine.inverse(x)
    >>> np.allclose(x, np.arange(8))
    True
    """

    def __init__(
        self,
        size: int,
        forward_scale: float = 1.0,
        inverse_scale: Optional[float] = None,
        dtype=np.complex128,
        backend: str = "radix2"
    ):
        require_pow2(size, "transform size")
        require(backend in _KERNELS,
                f"Unknown transform backend: {backend!r}, expected one of {sorted(_KERNELS)}")

        self._size = int(size)
        self._dtype = np.dtype(dtype)
        self._forward_scale = float(forward_scale)
        self._inverse_scale = 1.0 / self._size if inverse_scale is None else float(inverse_scale)
        self._validate_parameters()

        self._kernel = _KERNELS[backend](self._size, self._dtype)

    def _validate_parameters(self) -> None:
        """Validate initialization parameters."""
        require(np.issubdtype(self._dtype, np.complexfloating),
                f"Transform dtype must be complex, got {self._dtype}")
        if not (np.isfinite(self._forward_scale) and np.isfinite(self._inverse_scale)):
            raise ValueError("Transform scale factors must be finite")

        round_trip = self._forward_scale * self._inverse_scale * self._size
        if not np.isclose(round_trip, 1.0):
            warnings.warn(f"Scale factors give inverse(forward(x)) = {round_trip:g} * x, "
                          "not the identity", RuntimeWarning)

    @property
    def size(self) -> int:
        return self._size

    @property
    def log2_size(self) -> int:
        return self._kernel.log2_size

    @property
    def forward_scale(self) -> float:
        return self._forward_scale

    @property
    def inverse_scale(self) -> float:
        return self._inverse_scale

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def backend(self) -> str:
        return self._kernel.name

    def forward(self, buffer: Buffer) -> Buffer:
        """
        Forward transform of ``buffer`` in place, scaled by ``forward_scale``.

        Parameters
        ----------
        buffer : ndarray or mutable sequence
            1-D complex buffer of length ``size``.

        Returns
        -------
        buffer : ndarray or mutable sequence
            The same object, overwritten with its spectrum.

        Raises
        ------
        PreconditionError
            If the buffer length differs from ``size`` or the array is not
            a 1-D complex array.
        """
        return self._apply(buffer, self._kernel.forward, self._forward_scale)

    def inverse(self, buffer: Buffer) -> Buffer:
        """Inverse transform of ``buffer`` in place, scaled by ``inverse_scale``."""
        return self._apply(buffer, self._kernel.inverse, self._inverse_scale)

    def _apply(self, buffer: Buffer, kernel, scale: float) -> Buffer:
        if isinstance(buffer, np.ndarray):
            require(buffer.ndim == 1, f"Transform buffer must be 1-D, got {buffer.ndim}-D")
            require(np.issubdtype(buffer.dtype, np.complexfloating),
                    f"Transform buffer must be complex, got {buffer.dtype}")
            require_length(buffer, self._size, "transform buffer")

            work = buffer if buffer.flags.c_contiguous else np.ascontiguousarray(buffer)
            kernel(work)
            if scale != 1.0:
                work *= scale
            if work is not buffer:
                buffer[...] = work
        else:
            require(isinstance(buffer, MutableSequence),
                    f"Transform works in place, got immutable {type(buffer).__name__}")
            require_length(buffer, self._size, "transform buffer")

            work = np.array(buffer, dtype=self._dtype)
            kernel(work)
            if scale != 1.0:
                work *= scale
            for i, value in enumerate(work.tolist()):
                buffer[i] = value

        return buffer

    def copy(self) -> 'TransformEngine':
        """Return an independent engine with the same configuration."""
        return self.__copy__()

    def __copy__(self) -> 'TransformEngine':
        other = self.__class__.__new__(self.__class__)
        other.__dict__.update(self.__dict__)
        other._kernel = self._kernel.copy()
        return other

    def __deepcopy__(self, memo) -> 'TransformEngine':
        return self.__copy__()

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransformEngine):
            return NotImplemented
        return (self._size == other._size
                and self._forward_scale == other._forward_scale
                and self._inverse_scale == other._inverse_scale
                and self._dtype == other._dtype
                and self.backend == other.backend)

    __hash__ = None

    def __repr__(self) -> str:
        return (f"TransformEngine(size={self._size}, forward_scale={self._forward_scale!r}, "
                f"inverse_scale={self._inverse_scale!r}, dtype={self._dtype.name!r}, "
                f"backend={self.backend!r})")


def fft(x: Buffer) -> Buffer:
    """One-shot forward transform of a power-of-two length buffer, in place."""
    return TransformEngine(len(x)).forward(x)


def ifft(x: Buffer) -> Buffer:
    """One-shot inverse transform (scaled by 1/N) of a buffer, in place."""
    return TransformEngine(len(x)).inverse(x)


def fft_shift(x: Buffer) -> Buffer:
    """
    Swap the two halves of ``x`` in place, moving DC to the center.

    For even lengths this matches ``numpy.fft.fftshift``.
    """
    half = len(x) // 2
    if isinstance(x, np.ndarray):
        head = x[:half].copy()
        x[:half] = x[half:2 * half]
        x[half:2 * half] = head
    else:
        for i in range(half):
            x[i], x[i + half] = x[i + half], x[i]
    return x
