"""
Power-of-two helpers and the central precondition checks.

All size and index checks of the transforms, the delay line and the fading
generator go through the ``require_*`` functions below, so the failure mode
is uniform: a :class:`~radio_dsp.utils.errors.PreconditionError` raised
before any buffer is touched.
"""

from typing import Sized

from .errors import PreconditionError


def is_pow2(n: int) -> bool:
    """
    Check whether ``n`` is an integer power of two.

    Parameters
    ----------
    n : int
        Value to check.

    Returns
    -------
    bool
        True for 1, 2, 4, 8, ...; False for zero, negatives and other values.
    """
    n = int(n)
    return n > 0 and not (n & (n - 1))


def ilog2(n: int) -> int:
    """
    Binary logarithm of a power of two.

    >>> ilog2(1), ilog2(2), ilog2(1024)
    (0, 1, 10)
    """
    require_pow2(n, "ilog2() argument")
    return int(n).bit_length() - 1


def next_pow2(n: int) -> int:
    """Smallest power of two greater than or equal to ``n`` (1 for n <= 1)."""
    n = int(n)
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def prev_pow2(n: int) -> int:
    """Largest power of two less than or equal to ``n`` (0 for n < 1)."""
    n = int(n)
    if n < 1:
        return 0
    return 1 << (n.bit_length() - 1)


def require(condition: bool, message: str) -> None:
    """Raise PreconditionError with ``message`` unless ``condition`` holds."""
    if not condition:
        raise PreconditionError(message)


def require_pow2(n: int, what: str = "size") -> None:
    """Check that ``n`` is a power of two."""
    require(is_pow2(n), f"{what} must be an integer power of two, got {n}")


def require_length(buffer: Sized, n: int, what: str = "buffer") -> None:
    """Check that ``buffer`` holds exactly ``n`` elements."""
    length = len(buffer)
    require(length == n, f"{what} length {length} does not match expected size {n}")


def require_index(i: int, size: int) -> None:
    """Check that ``0 <= i < size``."""
    require(0 <= i < size, f"index {i} out of range [0, {size})")
