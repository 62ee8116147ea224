import logging

from ..errors import DimensionMismatch
from ..matrix import Matrix, as_column

logger = logging.getLogger(__name__)


class KalmanFilter:
    """
    Linear Kalman filter.

    predict: x <- F x + B u, P <- F P F^T + Q
    update: K = P H^T (H P H^T + R)^-1, x <- x + K (z - H x), P <- (I - K H) P

    @param x: initial mean
    @param P: initial covariance
    @param F: state transition matrix
    @param Q: process noise covariance
    @param u: control input, optional
    @param B: control input matrix, optional
    """

    def __init__(self, x, P, F, Q, u=None, B=None):
        self.x = as_column(x)
        self.P = Matrix(P)
        self.F = Matrix(F)
        self.Q = Matrix(Q)
        self.B = None if B is None else Matrix(B)
        self.u = None if u is None else as_column(u)
        n = self.x.rows
        for name, M in (("P", self.P), ("F", self.F), ("Q", self.Q)):
            if M.shape != (n, n):
                raise DimensionMismatch(
                    "{} must be {}x{} for a state of length {}, got {}".format(name, n, n, n, M.shape)
                )
        logger.debug("kalman filter created, n=%d", n)

    def get_state(self) -> Matrix:
        return self.x

    def get_covariance(self) -> Matrix:
        return self.P

    def set_u(self, u):
        self.u = None if u is None else as_column(u)

    def set_q(self, Q):
        self.Q = Matrix(Q)

    def predict(self):
        x = self.F @ self.x
        if self.B is not None and self.u is not None:
            x = x + self.B @ self.u
        P = self.F @ self.P @ self.F.T + self.Q
        self.x, self.P = x, P
        logger.debug("kalman predict, trace(P)=%g", P.trace())

    def update(self, H, z, R):
        H = Matrix(H)
        z = as_column(z, H.rows)
        R = Matrix(R)
        y = z - H @ self.x
        S = H @ self.P @ H.T + R
        K = self.P @ H.T @ S.inverse()
        x = self.x + K @ y
        P = (Matrix.identity(self.x.rows) - K @ H) @ self.P
        self.x, self.P = x, P
        logger.debug("kalman update, |y|=%g", y.norm())
