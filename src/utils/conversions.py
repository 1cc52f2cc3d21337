"""
Unit conversions used when configuring channel models.

Logarithmic conversions are only defined for positive arguments; passing
zero or a negative value raises :class:`~radio_dsp.utils.errors.DomainError`.
"""

import numpy as np

from .errors import DomainError


def deg2rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * np.pi / 180.0


def rad2deg(rad: float) -> float:
    """Convert radians to degrees."""
    return rad * 180.0 / np.pi


def db_to_linear(db: float) -> float:
    """Convert a power ratio in dB to linear scale, ``10**(dB/10)``."""
    return 10.0 ** (0.1 * db)


def linear_to_db(value: float) -> float:
    """
    Convert a positive power ratio to dB, ``10*log10(value)``.

    Raises
    ------
    DomainError
        If ``value`` is not positive.
    """
    if not value > 0.0:
        raise DomainError(f"linear_to_db() argument must be positive, got {value}")
    return 10.0 * np.log10(value)


def dbm_to_watt(dbm: float) -> float:
    """Convert dBm to watts."""
    return 10.0 ** (0.1 * dbm - 3.0)


def watt_to_dbm(watt: float) -> float:
    """
    Convert watts to dBm.

    Raises
    ------
    DomainError
        If ``watt`` is not positive.
    """
    if not watt > 0.0:
        raise DomainError(f"watt_to_dbm() argument must be positive, got {watt}")
    return 10.0 * np.log10(watt) + 30.0


def kph_to_mps(kph: float) -> float:
    """Convert kilometers per hour to meters per second."""
    return kph / 3.6


def mps_to_kph(mps: float) -> float:
    """Convert meters per second to kilometers per hour."""
    return mps * 3.6
