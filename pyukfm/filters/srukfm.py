"""
Square root unscented Kalman filter on a manifold (SRUKF-M).

Same contract as ManifoldUnscentedKalmanFilter with the tangent space
covariance carried as its lower triangular square root.
"""
import logging

import numpy as np

from ..matrix import Matrix, as_column, backward_sub, chol_update, forward_sub
from .sigma_points import cross_covariance, lower_factor, sqrt_unscented_transform, stack
from .ukfm import ManifoldSigmaPointFilter

logger = logging.getLogger(__name__)


def sqrt_sum(*clouds):
    """
    Square root of the sum of the unscented covariances of several sigma
    point clouds.

    The weighted deviations of every cloud are reduced by a single QR, the
    center point of each cloud is then folded in with a rank one update.

    @param clouds: (sigmas, Wm, Wc) tuples
    @return: lower triangular S
    """
    blocks = []
    centers = []
    for sigmas, Wm, Wc in clouds:
        Y = stack(sigmas)
        dev = Y - (Y @ Wm)[:, None]
        blocks.append(Matrix(dev[:, 1:] * np.sqrt(Wc[1:])))
        centers.append((Matrix(dev[:, 0]), Wc[0]))
    S = lower_factor(Matrix.horizontal(blocks))
    for d, w in centers:
        S = chol_update(S, d, w)
    return S


class SquareRootManifoldUnscentedKalmanFilter(ManifoldSigmaPointFilter):
    """
    Square root unscented Kalman filter on a manifold.

    @param manifold: Manifold of the state, usually a CompoundManifold
    @param x: initial mean, an element of manifold
    @param P: initial covariance, or its lower triangular square root when sqrt is True
    @param Q: process noise covariance
    @param f: transition function f(x, w, u, dt)
    @param u: control input passed through to f
    @param points: sigma point generator
    @param sqrt: P is already a square root
    """

    def __init__(self, manifold, x, P, Q, f=None, u=None, points=None, sqrt=False):
        super().__init__(manifold, x, Q, f=f, u=u, points=points)
        P = self._check_covariance(P)
        self.S = P if sqrt else self.points.sqrt_factor(P)
        logger.debug(
            "%s created on %r, points=%r", type(self).__name__, self.manifold, self.points
        )

    def get_covariance(self) -> Matrix:
        return self.S @ self.S.T

    def get_covariance_sqrt(self) -> Matrix:
        return self.S

    def predict(self, dt):
        f = self._transition()
        n = self.dim
        q = self.Q.rows
        w0 = Matrix.zeros(q, 1)
        x_pred = f(self.x, w0, self.u, dt)

        Wm_x, Wc_x = self.points.weights(n)
        xis = self.points.sigma_points_sqrt(Matrix.zeros(n, 1), self.S)
        state = self._state_tangents(f, x_pred, xis, w0, dt)

        Wm_w, Wc_w = self.points.weights(q)
        ws = self.points.sigma_points_sqrt(w0, self.points.sqrt_factor(self.Q))
        noise = self._noise_tangents(f, x_pred, ws, dt)

        S = sqrt_sum((state, Wm_x, Wc_x), (noise, Wm_w, Wc_w))
        self.x, self.S = x_pred, S
        logger.debug("srukfm predict, dt=%g", dt)

    def update(self, h, z, R):
        n = self.dim
        Wm, Wc = self.points.weights(n)
        xis = self.points.sigma_points_sqrt(Matrix.zeros(n, 1), self.S)
        ys = self._measurements(h, xis)
        y_hat, s = sqrt_unscented_transform(ys, Wm, Wc, noise_sqrt=self.points.sqrt_factor(R))
        self._correct(ys, xis, y_hat, s, Wc, z)
        logger.debug("srukfm update")

    def update_aug(self, h, z, R):
        n = self.dim
        R = Matrix(R)
        m = R.rows
        Wm, Wc = self.points.weights(n + m)
        S_aug = Matrix.diagonal(self.S, self.points.sqrt_factor(R))
        sigmas = self.points.sigma_points_sqrt(Matrix.zeros(n + m, 1), S_aug)
        ys = self._measurements_aug(h, sigmas, m)
        y_hat, s = sqrt_unscented_transform(ys, Wm, Wc)
        self._correct(ys, [p[0:n] for p in sigmas], y_hat, s, Wc, z)
        logger.debug("srukfm augmented update, m=%d", m)

    def _correct(self, ys, xis, y_hat, s, Wc, z):
        z = as_column(z, y_hat.rows)
        T = cross_covariance(xis, [y - y_hat for y in ys], Wc)
        K = backward_sub(s.T, forward_sub(s, T.T)).T
        y = z - y_hat
        x = self.manifold.phi(self.x, K @ y)
        S = chol_update(self.S, K @ s, -1)
        self.x, self.S = x, S
        logger.debug("srukfm correction, |y|=%g", y.norm())
