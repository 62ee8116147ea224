"""
Exceptions raised by pyukfm.

All errors are raised immediately at the call that detects them, nothing
is retried internally.
"""


class UkfmError(Exception):
    """Base exception for pyukfm errors."""


class DimensionMismatch(UkfmError, ValueError):
    """Raised when operand shapes are incompatible."""


class Singular(UkfmError, ArithmeticError):
    """Raised when a matrix that must be inverted is not invertible."""


class NumericalInstability(UkfmError, ArithmeticError):
    """Raised when a covariance is not positive definite."""


class InvalidElement(UkfmError, ValueError):
    """Raised when a value is not an element of the requested manifold."""


__all__ = [
    "UkfmError",
    "DimensionMismatch",
    "Singular",
    "NumericalInstability",
    "InvalidElement",
]
