"""
Fixed-capacity delay line.

A delay line of capacity C keeps the C most recent samples of a stream. Each
new sample "pushes" the contents one step further and the sample pushed C
steps earlier falls out. Index ``i`` addresses the sample delayed by ``i``
steps: ``line[0]`` is the newest sample, ``line[C - 1]`` the oldest retained.

Examples
--------
>>> line = DelayLine(3, dtype=int)
>>> [int(line.push(k)) for k in range(1, 6)]
[0, 0, 0, 1, 2]
>>> [int(v) for v in line]
[5, 4, 3]

A multipath channel is a weighted sum of delayed inputs:

>>> line = DelayLine(10, dtype=float)
>>> def channel(x):
...     line.push(x)
...     return 1.0 * line[0] + 0.5 * line[5] + 0.1 * line[9]
"""

from typing import Any, Iterator, Optional

import numpy as np

from ..utils.contracts import require, require_index


class DelayLine:
    """
    Circular buffer giving bounded-lag access to a sample stream.

    Parameters
    ----------
    capacity : int
        Number of retained samples. Zero gives a transparent line: ``push``
        returns its argument immediately.
    dtype : numpy dtype, default=complex
        Element type of the storage. Pushed samples are converted to it
        with numpy assignment casting, so ``2.7`` pushed into an integer
        line is stored as ``2``. Use ``object`` to keep arbitrary Python
        values unchanged.
    fill : optional
        Value of slots that have not been written yet. Defaults to the zero
        of ``dtype``.

    Attributes
    ----------
    capacity : int
        Number of retained samples.
    out
        The sample evicted by the most recent push.
    """

    def __init__(self, capacity: int, dtype=complex, fill: Optional[Any] = None):
        require(int(capacity) >= 0, f"Delay line capacity must be non-negative, got {capacity}")

        self._capacity = int(capacity)
        self._dtype = np.dtype(dtype)
        self._fill = np.zeros((), dtype=self._dtype)[()] if fill is None else fill

        self._buffer = np.empty(self._capacity, dtype=self._dtype)
        self.reset()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def out(self) -> Any:
        """The sample evicted by the most recent push."""
        return self._out

    def reset(self, fill: Optional[Any] = None) -> None:
        """
        Refill every slot, keeping the capacity.

        Parameters
        ----------
        fill : optional
            New fill value; the constructor's fill value is used if omitted.
        """
        if fill is not None:
            self._fill = fill
        self._buffer[...] = self._fill
        self._latest = self._capacity - 1
        self._out = self._fill

    def push(self, sample: Any) -> Any:
        """
        Insert ``sample`` as the newest element.

        Returns
        -------
        evicted
            The sample pushed ``capacity`` pushes earlier, or the fill value
            while the line is still filling.
        """
        if self._capacity == 0:
            self._out = sample
            return sample

        pos = self._latest + 1
        if pos == self._capacity:
            pos = 0

        evicted = self._buffer[pos]
        self._buffer[pos] = sample
        self._latest = pos
        self._out = evicted
        return evicted

    __call__ = push

    def at(self, i: int) -> Any:
        """Sample delayed by ``i`` steps, ``0 <= i < capacity``."""
        require_index(i, self._capacity)
        pos = self._latest - i
        if pos < 0:
            pos += self._capacity
        return self._buffer[pos]

    def __getitem__(self, i: int) -> Any:
        return self.at(i)

    def front(self) -> Any:
        """The newest sample."""
        return self.at(0)

    def back(self) -> Any:
        """The oldest retained sample."""
        return self.at(self._capacity - 1)

    def to_array(self) -> np.ndarray:
        """Contents as a new array, newest sample first."""
        index = (self._latest - np.arange(self._capacity)) % max(self._capacity, 1)
        return self._buffer[index]

    def __len__(self) -> int:
        return self._capacity

    def __iter__(self) -> Iterator[Any]:
        for i in range(self._capacity):
            yield self.at(i)

    def __repr__(self) -> str:
        return f"DelayLine(capacity={self._capacity}, dtype={self._dtype.name!r})"
