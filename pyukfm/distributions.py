import numpy as np
import scipy.stats

from .errors import DimensionMismatch
from .matrix import Matrix, as_column


class MultivariateGaussian:
    """
    Gaussian distribution over R^n given by its mean and covariance.
    """

    def __init__(self, mean, covariance):
        self.mean = as_column(mean)
        self.covariance = Matrix(covariance)
        if self.covariance.shape != (self.dim, self.dim):
            raise DimensionMismatch(
                "covariance of shape {} does not match mean of length {}".format(
                    self.covariance.shape, self.dim
                )
            )

    @property
    def dim(self):
        return self.mean.rows

    def sample(self, rng=None, size=None):
        """
        Draw samples from the distribution.

        @param rng: numpy Generator, a fresh default generator when None
        @param size: number of samples, a single column Matrix when None
        @return: Matrix column, or a dim x size Matrix with one sample per column
        """
        if rng is None:
            rng = np.random.default_rng()
        L = self.covariance.cholesky().to_numpy()
        n = 1 if size is None else size
        z = rng.standard_normal((self.dim, n))
        return Matrix(self.mean.to_numpy() + L @ z)

    def _frozen(self):
        return scipy.stats.multivariate_normal(
            mean=self.mean.to_numpy().ravel(), cov=self.covariance.to_numpy()
        )

    def pdf(self, x) -> float:
        """
        Probability density at x, raises DimensionMismatch when x is not a
        vector of length dim.
        """
        x = as_column(x, self.dim)
        return float(self._frozen().pdf(x.to_numpy().ravel()))

    def logpdf(self, x) -> float:
        x = as_column(x, self.dim)
        return float(self._frozen().logpdf(x.to_numpy().ravel()))

    def __repr__(self):
        return "MultivariateGaussian(mean={}, covariance={})".format(
            self.mean.to_list(), self.covariance.to_list()
        )


class VonMises:
    """
    Von Mises distribution on the circle.

    @param mean: mean angle
    @param k: concentration, positive
    """

    def __init__(self, mean, k):
        if k <= 0:
            raise ValueError("concentration must be positive, got {}".format(k))
        self.mean = float(mean)
        self.k = float(k)

    def _frozen(self):
        return scipy.stats.vonmises(self.k, loc=self.mean)

    def pdf(self, x) -> float:
        return float(self._frozen().pdf(float(x)))

    def cdf(self, x, lower=0.0) -> float:
        """
        Probability mass of the arc from lower to x, counterclockwise.
        """
        dist = self._frozen()
        return float(dist.cdf(float(x)) - dist.cdf(float(lower)))

    def __repr__(self):
        return "VonMises(mean={}, k={})".format(self.mean, self.k)
