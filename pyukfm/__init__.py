"""
Sigma point Kalman filters on manifolds.
"""
from .errors import (
    UkfmError,
    DimensionMismatch,
    Singular,
    NumericalInstability,
    InvalidElement,
)
from .matrix import Matrix, as_column, forward_sub, backward_sub, chol_update
from .distributions import MultivariateGaussian, VonMises

__version__ = "0.1.0"
