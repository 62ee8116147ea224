"""
Unscented Kalman filter on a vector state.

The transition function has the signature f(x, w, u, dt) -> x' with w the
process noise vector, which is zero for the additive noise prediction. The
measurement function is h(x) -> z.
"""
import logging

from ..errors import DimensionMismatch
from ..matrix import Matrix, as_column
from .sigma_points import MerweScaledSigmaPoints, cross_covariance, unscented_transform

logger = logging.getLogger(__name__)


class SigmaPointFilter:
    """
    State shared by the sigma point filters: process noise, transition
    function, control input and the sigma point generator.
    """

    def __init__(self, Q, f=None, u=None, points=None):
        self.Q = Matrix(Q)
        self.f = f
        self.u = u
        self.points = MerweScaledSigmaPoints() if points is None else points

    def get_state(self):
        return self.x

    def set_f(self, f):
        self.f = f

    def set_q(self, Q):
        self.Q = Matrix(Q)

    def set_u(self, u):
        self.u = u

    def _transition(self):
        if self.f is None:
            raise ValueError("transition function is not set")
        return self.f


class UnscentedKalmanFilter(SigmaPointFilter):
    """
    Unscented Kalman filter.

    @param x: initial mean, length n
    @param P: initial covariance, n x n
    @param Q: process noise covariance, n x n for predict, any size the
        transition function accepts for predict_aug
    @param f: transition function f(x, w, u, dt)
    @param u: control input passed through to f
    @param points: sigma point generator, Merwe's scaled points by default
    """

    def __init__(self, x, P, Q, f=None, u=None, points=None):
        self.x = as_column(x)
        self.P = Matrix(P)
        if self.P.shape != (self.dim, self.dim):
            raise DimensionMismatch(
                "covariance of shape {} does not match state of length {}".format(
                    self.P.shape, self.dim
                )
            )
        super().__init__(Q, f=f, u=u, points=points)
        logger.debug("%s created, n=%d, points=%r", type(self).__name__, self.dim, self.points)

    @property
    def dim(self):
        return self.x.rows

    def get_covariance(self) -> Matrix:
        return self.P

    def predict(self, dt):
        """
        Propagate the sigma points through f and add Q to the transformed
        covariance.
        """
        f = self._transition()
        n = self.dim
        if self.Q.shape != (n, n):
            raise DimensionMismatch("Q must be {}x{} for additive noise, got {}".format(n, n, self.Q.shape))
        Wm, Wc = self.points.weights(n)
        w = Matrix.zeros(self.Q.rows, 1)
        sigmas = [as_column(f(s, w, self.u, dt), n) for s in self.points.sigma_points(self.x, self.P)]
        prior = unscented_transform(sigmas, Wm, Wc, noise_cov=self.Q)
        self.x, self.P = prior.mean, prior.covariance
        logger.debug("ukf predict, dt=%g", dt)

    def predict_aug(self, dt):
        """
        Propagate sigma points of the state augmented with the process
        noise, f consumes the noise part of each point.
        """
        f = self._transition()
        n = self.dim
        q = self.Q.rows
        x_aug = Matrix.vertical(self.x, Matrix.zeros(q, 1))
        P_aug = Matrix.diagonal(self.P, self.Q)
        Wm, Wc = self.points.weights(n + q)
        sigmas = [
            as_column(f(s[0:n], s[n : n + q], self.u, dt), n)
            for s in self.points.sigma_points(x_aug, P_aug)
        ]
        prior = unscented_transform(sigmas, Wm, Wc)
        self.x, self.P = prior.mean, prior.covariance
        logger.debug("ukf augmented predict, dt=%g, q=%d", dt, q)

    def update(self, h, z, R):
        """
        Correct the state with the measurement z of h(x) with noise
        covariance R.
        """
        n = self.dim
        Wm, Wc = self.points.weights(n)
        sigmas_x = self.points.sigma_points(self.x, self.P)
        sigmas_z = [as_column(h(s)) for s in sigmas_x]
        pred = unscented_transform(sigmas_z, Wm, Wc)
        z = as_column(z, pred.dim)
        S = pred.covariance + Matrix(R)
        T = cross_covariance(
            [s - self.x for s in sigmas_x], [s - pred.mean for s in sigmas_z], Wc
        )
        K = T @ S.inverse()
        y = z - pred.mean
        x = self.x + K @ y
        P = self.P - K @ S @ K.T
        self.x, self.P = x, P
        logger.debug("ukf update, |y|=%g", y.norm())
