"""
Unscented Kalman filter on a manifold (UKF-M).

The mean is an element of a manifold, the covariance lives in the tangent
space at the mean. Sigma points are tangent vectors mapped onto the
manifold with phi and mapped back with phi_inverse, so the filter never
adds or subtracts manifold elements.

The transition function has the signature f(x, w, u, dt) -> x' with w a
process noise tangent vector. Measurement functions are h(x) -> z, or
h(x, xi, v) -> z for update_aug, where xi perturbs the state and v is
the measurement noise.

see: Brossard, Barrau and Bonnabel, 'A Code for Unscented Kalman Filtering
on Manifolds (UKF-M)', 2020
"""
import logging

from ..errors import DimensionMismatch
from ..matrix import Matrix, as_column
from .sigma_points import cross_covariance, unscented_transform
from .ukf import SigmaPointFilter

logger = logging.getLogger(__name__)


class ManifoldSigmaPointFilter(SigmaPointFilter):
    """
    Sigma point propagation shared by the manifold filters.
    """

    def __init__(self, manifold, x, Q, f=None, u=None, points=None):
        super().__init__(Q, f=f, u=u, points=points)
        self.manifold = manifold
        self.x = manifold.make(x)

    @property
    def dim(self):
        return self.manifold.dim

    def _check_covariance(self, P):
        P = Matrix(P)
        if P.shape != (self.dim, self.dim):
            raise DimensionMismatch(
                "covariance of shape {} does not match {} of dimension {}".format(
                    P.shape, self.manifold, self.dim
                )
            )
        return P

    def _state_tangents(self, f, x_pred, xis, w, dt):
        """
        Tangents at x_pred of f applied to the mean perturbed by each xi,
        point 0 is the unperturbed mean.
        """
        M = self.manifold
        return [M.zero_tangent()] + [
            M.phi_inverse(x_pred, f(M.phi(self.x, xi), w, self.u, dt)) for xi in xis[1:]
        ]

    def _noise_tangents(self, f, x_pred, ws, dt):
        """
        Tangents at x_pred of f applied to the mean with each noise sample.
        """
        M = self.manifold
        return [M.zero_tangent()] + [
            M.phi_inverse(x_pred, f(self.x, w, self.u, dt)) for w in ws[1:]
        ]

    def _measurements(self, h, xis):
        return [as_column(h(self.manifold.phi(self.x, xi))) for xi in xis]

    def _measurements_aug(self, h, sigmas, m):
        n = self.dim
        return [as_column(h(self.x, s[0:n], s[n : n + m])) for s in sigmas]


class ManifoldUnscentedKalmanFilter(ManifoldSigmaPointFilter):
    """
    Unscented Kalman filter on a manifold.

    @param manifold: Manifold of the state, usually a CompoundManifold
    @param x: initial mean, an element of manifold
    @param P: initial covariance in the tangent space at x
    @param Q: process noise covariance
    @param f: transition function f(x, w, u, dt)
    @param u: control input passed through to f
    @param points: sigma point generator
    """

    def __init__(self, manifold, x, P, Q, f=None, u=None, points=None):
        super().__init__(manifold, x, Q, f=f, u=u, points=points)
        self.P = self._check_covariance(P)
        logger.debug(
            "%s created on %r, points=%r", type(self).__name__, self.manifold, self.points
        )

    def get_covariance(self) -> Matrix:
        return self.P

    def predict(self, dt):
        """
        Propagate the mean through f, the state uncertainty and the process
        noise are propagated separately and their covariances summed.
        """
        f = self._transition()
        n = self.dim
        q = self.Q.rows
        w0 = Matrix.zeros(q, 1)
        x_pred = f(self.x, w0, self.u, dt)

        Wm, Wc = self.points.weights(n)
        xis = self.points.sigma_points(Matrix.zeros(n, 1), self.P)
        P1 = unscented_transform(self._state_tangents(f, x_pred, xis, w0, dt), Wm, Wc).covariance

        Wm, Wc = self.points.weights(q)
        ws = self.points.sigma_points(w0, self.Q)
        P2 = unscented_transform(self._noise_tangents(f, x_pred, ws, dt), Wm, Wc).covariance

        self.x, self.P = x_pred, P1 + P2
        logger.debug("ukfm predict, dt=%g", dt)

    def update(self, h, z, R):
        """
        Correct the state with the measurement z of h(x) with noise
        covariance R.
        """
        n = self.dim
        Wm, Wc = self.points.weights(n)
        xis = self.points.sigma_points(Matrix.zeros(n, 1), self.P)
        ys = self._measurements(h, xis)
        self._correct(ys, xis, Wm, Wc, z, Matrix(R))
        logger.debug("ukfm update")

    def update_aug(self, h, z, R):
        """
        Correct the state with the measurement z of h(x, xi, v), sigma
        points are drawn jointly for the state perturbation xi and the
        measurement noise v.
        """
        n = self.dim
        R = Matrix(R)
        m = R.rows
        Wm, Wc = self.points.weights(n + m)
        sigmas = self.points.sigma_points(Matrix.zeros(n + m, 1), Matrix.diagonal(self.P, R))
        ys = self._measurements_aug(h, sigmas, m)
        self._correct(ys, [s[0:n] for s in sigmas], Wm, Wc, z, None)
        logger.debug("ukfm augmented update, m=%d", m)

    def _correct(self, ys, xis, Wm, Wc, z, R):
        pred = unscented_transform(ys, Wm, Wc, noise_cov=R)
        z = as_column(z, pred.dim)
        S = pred.covariance
        T = cross_covariance(xis, [y - pred.mean for y in ys], Wc)
        K = T @ S.inverse()
        y = z - pred.mean
        x = self.manifold.phi(self.x, K @ y)
        P = self.P - K @ S @ K.T
        P = (P + P.T) / 2
        self.x, self.P = x, P
        logger.debug("ukfm correction, |y|=%g", y.norm())
