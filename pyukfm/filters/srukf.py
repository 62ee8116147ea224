"""
Square root unscented Kalman filter on a vector state.

The covariance is carried as its lower triangular square root S, P = S S^T.
Propagation re-factors the weighted sigma deviations by QR and folds in
the center point with a rank one update, the gain is found with two
triangular solves and the correction is a rank one downdate.

see: van der Merwe and Wan, 'The Square-Root Unscented Kalman Filter for
State and Parameter-Estimation', 2001
"""
import logging

from ..errors import DimensionMismatch
from ..matrix import Matrix, as_column, backward_sub, chol_update, forward_sub
from .sigma_points import cross_covariance, sqrt_unscented_transform
from .ukf import SigmaPointFilter

logger = logging.getLogger(__name__)


class SquareRootUnscentedKalmanFilter(SigmaPointFilter):
    """
    Square root unscented Kalman filter, same contract as
    UnscentedKalmanFilter.

    @param x: initial mean
    @param P: initial covariance, or its lower triangular square root when sqrt is True
    @param Q: process noise covariance
    @param f: transition function f(x, w, u, dt)
    @param u: control input passed through to f
    @param points: sigma point generator
    @param sqrt: P is already a square root
    """

    def __init__(self, x, P, Q, f=None, u=None, points=None, sqrt=False):
        super().__init__(Q, f=f, u=u, points=points)
        self.x = as_column(x)
        P = Matrix(P)
        if P.shape != (self.dim, self.dim):
            raise DimensionMismatch(
                "covariance of shape {} does not match state of length {}".format(P.shape, self.dim)
            )
        self.S = P if sqrt else self.points.sqrt_factor(P)
        logger.debug("%s created, n=%d, points=%r", type(self).__name__, self.dim, self.points)

    @property
    def dim(self):
        return self.x.rows

    def get_covariance(self) -> Matrix:
        return self.S @ self.S.T

    def get_covariance_sqrt(self) -> Matrix:
        return self.S

    def predict(self, dt):
        f = self._transition()
        n = self.dim
        if self.Q.shape != (n, n):
            raise DimensionMismatch("Q must be {}x{} for additive noise, got {}".format(n, n, self.Q.shape))
        Wm, Wc = self.points.weights(n)
        w = Matrix.zeros(n, 1)
        sigmas = [
            as_column(f(s, w, self.u, dt), n) for s in self.points.sigma_points_sqrt(self.x, self.S)
        ]
        x, S = sqrt_unscented_transform(sigmas, Wm, Wc, noise_sqrt=self.points.sqrt_factor(self.Q))
        self.x, self.S = x, S
        logger.debug("srukf predict, dt=%g", dt)

    def predict_aug(self, dt):
        f = self._transition()
        n = self.dim
        q = self.Q.rows
        x_aug = Matrix.vertical(self.x, Matrix.zeros(q, 1))
        S_aug = Matrix.diagonal(self.S, self.points.sqrt_factor(self.Q))
        Wm, Wc = self.points.weights(n + q)
        sigmas = [
            as_column(f(s[0:n], s[n : n + q], self.u, dt), n)
            for s in self.points.sigma_points_sqrt(x_aug, S_aug)
        ]
        x, S = sqrt_unscented_transform(sigmas, Wm, Wc)
        self.x, self.S = x, S
        logger.debug("srukf augmented predict, dt=%g, q=%d", dt, q)

    def update(self, h, z, R):
        n = self.dim
        Wm, Wc = self.points.weights(n)
        sigmas_x = self.points.sigma_points_sqrt(self.x, self.S)
        sigmas_z = [as_column(h(s)) for s in sigmas_x]
        z_hat, s = sqrt_unscented_transform(
            sigmas_z, Wm, Wc, noise_sqrt=self.points.sqrt_factor(R)
        )
        z = as_column(z, z_hat.rows)
        T = cross_covariance([p - self.x for p in sigmas_x], [p - z_hat for p in sigmas_z], Wc)
        # K = T (s s^T)^-1 without forming the inverse
        K = backward_sub(s.T, forward_sub(s, T.T)).T
        y = z - z_hat
        x = self.x + K @ y
        S = chol_update(self.S, K @ s, -1)
        self.x, self.S = x, S
        logger.debug("srukf update, |y|=%g", y.norm())
