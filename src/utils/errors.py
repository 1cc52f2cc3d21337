"""
Exception hierarchy for the DSP primitives.

Two kinds of failure are distinguished:

- :class:`PreconditionError` marks a programmer error (wrong buffer length,
  index out of range, unknown fading type). These are raised at component
  boundaries and are not meant to be caught and recovered from.
- :class:`DomainError` marks a value outside the mathematical domain of an
  operation, typically coming from external data (logarithm of a
  non-positive power, negative noise deviation). Callers may recover.
"""


class DSPError(Exception):
    """Base class for all errors raised by radio_dsp."""


class PreconditionError(DSPError, AssertionError):
    """A contract of the calling code was violated."""


class DomainError(DSPError, ValueError):
    """An argument lies outside the domain of a numeric operation."""
