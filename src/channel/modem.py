"""
Digital modulation: constellations, modulator and soft-output demodulator.

A :class:`ModulationMap` holds the constellation points indexed by codeword
and is scaled to unit average power on construction. Codewords carry
``bps`` bits, most significant bit first. :class:`Modulator` maps a bit
stream onto symbols and :class:`Demodulator` turns received symbols back
into per-bit log-likelihood ratios with the max-log rule

    LLR_b = scale * (min_{m: bit b = 1} |r - s_m|^2 - min_{m: bit b = 0} |r - s_m|^2)

so a positive LLR favors bit 0 and a negative one favors bit 1.

Examples
--------
>>> import numpy as np
>>> mmap = ModulationMap.psk(4)
>>> bits = np.array([0, 1, 1, 0, 1, 1, 0, 0])
>>> tx = Modulator(mmap).modulate_bits(bits)
>>> llr = Demodulator(mmap).demodulate(tx)
>>> Demodulator.soft2hard(llr).tolist()
[0, 1, 1, 0, 1, 1, 0, 0]
"""

from typing import Optional

import numpy as np

from ..utils.contracts import ilog2, is_pow2, next_pow2, require, require_index
from ..utils.errors import DomainError


def bits_to_codewords(bits, bps: int) -> np.ndarray:
    """
    Pack a bit stream into codewords of ``bps`` bits, MSB first.

    Any nonzero element counts as a one bit.

    Raises
    ------
    PreconditionError
        If the number of bits is not a multiple of ``bps``.
    """
    bits = np.asarray(bits).ravel() != 0
    require(bits.size % bps == 0,
            f"Bit count {bits.size} is not a multiple of {bps} bits per symbol")
    weights = 1 << np.arange(bps - 1, -1, -1)
    return bits.reshape(-1, bps).astype(np.intp) @ weights


def codewords_to_bits(codewords, bps: int) -> np.ndarray:
    """Unpack codewords into a flat bit array of ``bps`` bits each, MSB first."""
    codewords = np.asarray(codewords, dtype=np.intp).ravel()
    shifts = np.arange(bps - 1, -1, -1)
    return ((codewords[:, None] >> shifts) & 1).ravel()


class ModulationMap:
    """
    Constellation normalized to unit average symbol power.

    Parameters
    ----------
    symbols : array_like of complex, default=(1, -1)
        Constellation point of each codeword. At least two points; the
        default is BPSK. A size that is not a power of two leaves the
        upper codewords unused.

    Attributes
    ----------
    bps : int
        Bits per symbol, ``log2`` of the size rounded up to a power of two.
    """

    def __init__(self, symbols=(1.0, -1.0)):
        symbols = np.array(symbols, dtype=np.complex128).ravel()
        require(symbols.size >= 2,
                f"Modulation map needs at least 2 symbols, got {symbols.size}")

        power = np.mean(np.abs(symbols) ** 2)
        require(power > 0.0, "Modulation map has zero power")

        symbols *= np.sqrt(1.0 / power)
        symbols.flags.writeable = False
        self._symbols = symbols
        self.bps = ilog2(next_pow2(symbols.size))

    @classmethod
    def psk(cls, size: int) -> 'ModulationMap':
        """
        Gray-coded phase-shift keying with ``size`` points.

        BPSK uses the real points ``+1, -1``. Larger maps place codeword
        ``gray(k)`` at phase ``2*pi*(k + 0.5)/size``.
        """
        _check_map_size(size, "PSK")
        if size == 2:
            return cls((1.0, -1.0))

        k = np.arange(size)
        symbols = np.empty(size, dtype=np.complex128)
        symbols[k ^ (k >> 1)] = np.exp(2j * np.pi * (k + 0.5) / size)
        return cls(symbols)

    @classmethod
    def qam(cls, size: int) -> 'ModulationMap':
        """
        Gray-coded quadrature amplitude modulation with ``size`` points.

        The upper ``bps // 2`` bits select the real level and the rest
        the imaginary level, each Gray coded over ``max - 2*gray(level)``.
        Odd ``bps`` gives a rectangular grid with more imaginary levels.
        """
        _check_map_size(size, "QAM")
        bps = ilog2(size)
        re_bps = bps // 2
        im_bps = bps - re_bps
        re_max = (1 << re_bps) - 1
        im_max = (1 << im_bps) - 1

        cw = np.arange(size)
        re = cw >> im_bps
        im = cw & im_max
        return cls((re_max - 2.0 * (re ^ (re >> 1)))
                   + 1j * (im_max - 2.0 * (im ^ (im >> 1))))

    @property
    def symbols(self) -> np.ndarray:
        """Read-only array of normalized constellation points."""
        return self._symbols

    def size(self) -> int:
        return self._symbols.size

    def __len__(self) -> int:
        return self._symbols.size

    def __getitem__(self, codeword: int) -> complex:
        require_index(codeword, self._symbols.size)
        return complex(self._symbols[codeword])

    def __eq__(self, other) -> bool:
        if not isinstance(other, ModulationMap):
            return NotImplemented
        return np.array_equal(self._symbols, other._symbols)

    __hash__ = None

    def __repr__(self) -> str:
        return f"ModulationMap(size={self._symbols.size}, bps={self.bps})"


def _check_map_size(size: int, name: str) -> None:
    require(size >= 2 and is_pow2(size),
            f"{name} map size must be a power of two >= 2, got {size}")


class Modulator:
    """
    Maps bits or codewords onto constellation symbols.

    The result of the last call is kept in :attr:`out` and can be indexed
    on the modulator itself.

    Parameters
    ----------
    modulation_map : ModulationMap
        Constellation to modulate with.
    """

    def __init__(self, modulation_map: ModulationMap):
        self.map = modulation_map
        self.out = np.zeros(0, dtype=np.complex128)

    def modulate_bits(self, bits) -> np.ndarray:
        """
        Modulate a bit stream, ``bps`` bits per symbol, MSB first.

        Raises
        ------
        PreconditionError
            If the number of bits is not a multiple of ``bps``.
        """
        return self.modulate_codewords(bits_to_codewords(bits, self.map.bps))

    __call__ = modulate_bits

    def modulate_codewords(self, codewords) -> np.ndarray:
        """Modulate one symbol per codeword."""
        codewords = np.asarray(codewords, dtype=np.intp).ravel()
        require(np.all((codewords >= 0) & (codewords < len(self.map))),
                f"Codewords must lie in [0, {len(self.map)})")
        self.out = self.map.symbols[codewords]
        return self.out

    def size(self) -> int:
        return self.out.size

    def __len__(self) -> int:
        return self.out.size

    def __getitem__(self, k: int) -> complex:
        require_index(k, self.out.size)
        return complex(self.out[k])


class Demodulator:
    """
    Max-log soft demodulator producing one LLR per bit.

    Parameters
    ----------
    modulation_map : ModulationMap
        Constellation the transmitter used.

    Examples
    --------
    Flat fading with known channel coefficients:

    >>> import numpy as np
    >>> mmap = ModulationMap.qam(16)
    >>> h = np.array([0.5j, -2.0])
    >>> tx = Modulator(mmap).modulate_codewords([3, 12])
    >>> llr = Demodulator(mmap).demodulate(h * tx, channel=h)
    >>> Demodulator.soft2hard(llr).tolist()
    [0, 0, 1, 1, 1, 1, 0, 0]
    """

    def __init__(self, modulation_map: ModulationMap):
        self.map = modulation_map
        self.out = np.zeros(0)

    def demodulate(self, symbols, channel: Optional[np.ndarray] = None) -> np.ndarray:
        """
        LLRs of the bits carried by ``symbols``.

        Parameters
        ----------
        symbols : array_like of complex
            Received symbols.
        channel : array_like of complex, optional
            Channel coefficient of each symbol, ``r = h*s + n``. The symbol
            is equalized by ``h`` and its LLRs are weighted by ``|h|**2``.
            Without it a unit channel (pure AWGN) is assumed.

        Returns
        -------
        llr : ndarray of float
            ``len(symbols) * bps`` values, MSB first within each symbol.

        Raises
        ------
        PreconditionError
            If ``channel`` does not match the number of symbols.
        DomainError
            If a channel coefficient is zero.
        """
        symbols = np.asarray(symbols, dtype=np.complex128).ravel()
        if channel is None:
            scale = np.ones(symbols.size)
        else:
            channel = np.asarray(channel, dtype=np.complex128).ravel()
            require(channel.size == symbols.size,
                    f"Channel length {channel.size} does not match {symbols.size} symbols")
            scale = np.abs(channel) ** 2
            if np.any(scale == 0.0):
                raise DomainError("Channel coefficients must be nonzero to demodulate")
            symbols = symbols * np.conj(channel) / scale

        # ones[m, b] is bit b of codeword m, MSB first
        ones = codewords_to_bits(np.arange(len(self.map)), self.map.bps)
        ones = ones.reshape(-1, self.map.bps).astype(bool)

        dist = np.abs(symbols[:, None] - self.map.symbols[None, :]) ** 2
        dist = dist[:, :, None]
        min_1 = np.where(ones, dist, np.inf).min(axis=1)
        min_0 = np.where(~ones, dist, np.inf).min(axis=1)

        self.out = ((min_1 - min_0) * scale[:, None]).ravel()
        return self.out

    __call__ = demodulate

    @staticmethod
    def soft2hard(llr):
        """Hard decision: 1 where the LLR is negative, else 0."""
        if np.ndim(llr) == 0:
            return int(llr < 0.0)
        return (np.asarray(llr) < 0.0).astype(int)

    def size(self) -> int:
        return self.out.size

    def __len__(self) -> int:
        return self.out.size

    def __getitem__(self, k: int) -> float:
        require_index(k, self.out.size)
        return float(self.out[k])
