"""
Sigma point generators and the unscented transform.

A generator turns a mean and a covariance (or its lower triangular square
root) into 2n+1 sigma points: point 0 is the mean, points 1..n add and
points n+1..2n subtract the columns of sqrt(n + lambda) S. Weights depend
only on the dimension n, so they are computed on demand and never stored
with the points.
"""
import abc
import math

import numpy as np

from ..distributions import MultivariateGaussian
from ..errors import DimensionMismatch
from ..matrix import Matrix, as_column, chol_update

# regularizing diagonal added to a covariance before taking its square root
JITTER = 1e-9


class SigmaPoints(abc.ABC):
    def __init__(self, jitter=JITTER):
        self.jitter = jitter

    @abc.abstractmethod
    def lambda_for(self, n):
        """Scaling parameter lambda for an n dimensional state."""
        ...

    @abc.abstractmethod
    def weights(self, n):
        """Mean and covariance weights (Wm, Wc) as numpy arrays of length 2n+1."""
        ...

    def num_sigmas(self, n):
        return 2 * n + 1

    def sqrt_factor(self, P) -> Matrix:
        """
        Lower triangular square root of P + jitter I.
        """
        P = Matrix(P)
        if self.jitter:
            P = P + Matrix.identity(P.rows) * self.jitter
        return P.cholesky()

    def offsets(self, S) -> Matrix:
        """
        The 2n scaled perturbations sqrt(n + lambda) [S, -S] as columns.
        """
        S = Matrix(S)
        n = S.rows
        scale = math.sqrt(n + self.lambda_for(n))
        return Matrix.horizontal(S, -S) * scale

    def sigma_points_sqrt(self, x, S):
        """
        Sigma points of the mean x and covariance square root S.

        @param x: mean, n x 1
        @param S: lower triangular square root of the covariance, n x n
        @return: list of 2n+1 column matrices
        """
        x = as_column(x)
        S = Matrix(S)
        if S.shape != (x.rows, x.rows):
            raise DimensionMismatch(
                "square root of shape {} does not match mean of length {}".format(S.shape, x.rows)
            )
        offsets = self.offsets(S)
        return [x] + [x + offsets.get_col(i) for i in range(offsets.cols)]

    def sigma_points(self, x, P):
        """
        Sigma points of the mean x and covariance P.
        """
        return self.sigma_points_sqrt(x, self.sqrt_factor(P))


class MerweScaledSigmaPoints(SigmaPoints):
    """
    Merwe's scaled sigma points.

    @param alpha: spread of the points around the mean
    @param beta: prior knowledge of the distribution, 2 is optimal for a Gaussian
    @param kappa: secondary scaling parameter
    @param jitter: regularization added to the covariance diagonal
    """

    def __init__(self, alpha=1e-3, beta=2.0, kappa=0.0, jitter=JITTER):
        super().__init__(jitter=jitter)
        self.alpha = alpha
        self.beta = beta
        self.kappa = kappa

    def lambda_for(self, n):
        return self.alpha**2 * (n + self.kappa) - n

    def weights(self, n):
        lambda_ = self.lambda_for(n)
        Wm = np.full(2 * n + 1, 0.5 / (n + lambda_))
        Wc = np.copy(Wm)
        Wm[0] = lambda_ / (n + lambda_)
        Wc[0] = lambda_ / (n + lambda_) + (1 - self.alpha**2 + self.beta)
        return Wm, Wc

    def __repr__(self):
        return "MerweScaledSigmaPoints(alpha={}, beta={}, kappa={})".format(
            self.alpha, self.beta, self.kappa
        )


class JulierSigmaPoints(SigmaPoints):
    """
    Julier's sigma points, a single weight vector is used for both the mean
    and the covariance.

    @param lambda_: scaling parameter, 3 - n when None
    @param jitter: regularization added to the covariance diagonal
    """

    def __init__(self, lambda_=None, jitter=JITTER):
        super().__init__(jitter=jitter)
        self.lambda_ = lambda_

    def lambda_for(self, n):
        if self.lambda_ is None:
            return 3.0 - n
        return self.lambda_

    def weights(self, n):
        lambda_ = self.lambda_for(n)
        W = np.full(2 * n + 1, 0.5 / (n + lambda_))
        W[0] = lambda_ / (n + lambda_)
        return W, np.copy(W)

    def __repr__(self):
        return "JulierSigmaPoints(lambda_={})".format(self.lambda_)


def stack(sigmas):
    """
    Sigma points as the columns of a numpy array.
    """
    return np.hstack([as_column(s).to_numpy() for s in sigmas])


def lower_factor(A) -> Matrix:
    """
    Lower triangular L with L L^T = A A^T, from the QR factorization of A^T.
    """
    _, R = Matrix(A).transpose().qr()
    L = R.transpose().to_numpy()
    # qr leaves the sign of each diagonal entry free
    signs = np.where(np.diag(L) < 0, -1.0, 1.0)
    return Matrix(L * signs)


def unscented_transform(sigmas, Wm, Wc, noise_cov=None):
    """
    Weighted mean and covariance of transformed sigma points.

    @param sigmas: list of 2n+1 column matrices
    @param Wm: mean weights
    @param Wc: covariance weights
    @param noise_cov: additive noise covariance, optional
    @return: MultivariateGaussian
    """
    Y = stack(sigmas)
    mean = Y @ Wm
    dev = Y - mean[:, None]
    cov = (dev * Wc) @ dev.T
    if noise_cov is not None:
        cov = cov + np.asarray(Matrix(noise_cov))
    return MultivariateGaussian(mean, cov)


def sqrt_unscented_transform(sigmas, Wm, Wc, noise_sqrt=None):
    """
    Weighted mean and lower triangular covariance square root of
    transformed sigma points.

    The deviations of points 1..2n, scaled by sqrt(Wc), are stacked next to
    the noise square root and reduced by QR. The center point, whose weight
    may be negative, is folded in with a rank one update.

    @return: (mean, S) with S S^T the covariance
    """
    Y = stack(sigmas)
    mean = Y @ Wm
    dev = Y - mean[:, None]
    if np.any(Wc[1:] <= 0):
        raise ValueError("square root transform needs positive weights for points 1..2n")
    blocks = [Matrix(dev[:, 1:] * np.sqrt(Wc[1:]))]
    if noise_sqrt is not None:
        blocks.append(Matrix(noise_sqrt))
    S = lower_factor(Matrix.horizontal(blocks))
    S = chol_update(S, Matrix(dev[:, 0]), Wc[0])
    return Matrix(mean), S


def cross_covariance(dx, dz, Wc) -> Matrix:
    """
    Weighted cross covariance sum_i Wc_i dx_i dz_i^T of centered deviations.

    @param dx: state deviations, n x (2m+1) or list of columns
    @param dz: measurement deviations, p x (2m+1) or list of columns
    """
    dx = stack(dx) if isinstance(dx, (list, tuple)) else np.asarray(Matrix(dx))
    dz = stack(dz) if isinstance(dz, (list, tuple)) else np.asarray(Matrix(dz))
    if dx.shape[1] != dz.shape[1] or dx.shape[1] != len(Wc):
        raise DimensionMismatch(
            "deviation counts {} and {} do not match {} weights".format(
                dx.shape[1], dz.shape[1], len(Wc)
            )
        )
    return Matrix((dx * Wc) @ dz.T)
