"""Error types, precondition checks, conversions and random sources."""

from .errors import DSPError, PreconditionError, DomainError
from .contracts import (
    is_pow2,
    ilog2,
    next_pow2,
    prev_pow2,
    require,
    require_pow2,
    require_length,
    require_index,
)
from .conversions import (
    deg2rad,
    rad2deg,
    db_to_linear,
    linear_to_db,
    dbm_to_watt,
    watt_to_dbm,
    kph_to_mps,
    mps_to_kph,
)
from .sampling import UniformSource, uniform

__all__ = [
    "DSPError",
    "PreconditionError",
    "DomainError",
    "is_pow2",
    "ilog2",
    "next_pow2",
    "prev_pow2",
    "require",
    "require_pow2",
    "require_length",
    "require_index",
    "deg2rad",
    "rad2deg",
    "db_to_linear",
    "linear_to_db",
    "dbm_to_watt",
    "watt_to_dbm",
    "kph_to_mps",
    "mps_to_kph",
    "UniformSource",
    "uniform",
]
