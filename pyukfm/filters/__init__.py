"""
This package contains the sigma point filtering algorithms.

kalman: Kalman Filter - linear reference filter
ukf: Unscented Kalman Filter - uses sigma points to approximate the PDF
srukf: Square Root Unscented Kalman Filter - propagates a Cholesky factor of the covariance
ukfm: Unscented Kalman Filter on manifolds - uses phi/phi_inverse for perturbation and correction
srukfm: Square Root Unscented Kalman Filter on manifolds
"""
from .sigma_points import (
    JITTER,
    SigmaPoints,
    MerweScaledSigmaPoints,
    JulierSigmaPoints,
    unscented_transform,
    sqrt_unscented_transform,
    cross_covariance,
)
from .kalman import KalmanFilter
from .ukf import UnscentedKalmanFilter
from .srukf import SquareRootUnscentedKalmanFilter
from .ukfm import ManifoldUnscentedKalmanFilter
from .srukfm import SquareRootManifoldUnscentedKalmanFilter
