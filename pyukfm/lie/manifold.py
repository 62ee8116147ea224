import abc

from ..errors import DimensionMismatch
from ..matrix import Matrix


class Manifold(abc.ABC):
    """
    A manifold described by a chart around each of its points.

    Manifold objects are stateless descriptors, elements are plain values
    (complex numbers, matrices, tuples) owned by the caller. A tangent
    vector at a point is a dim x 1 Matrix which phi maps back onto the
    manifold.
    """

    def __init__(self, dim: int):
        """
        @param dim: dimension of the tangent space
        """
        self.dim = dim

    def tangent(self, v) -> Matrix:
        """
        Coerce v to a dim x 1 column vector.
        """
        m = Matrix(v)
        if m.rows == 1 and m.cols == self.dim and self.dim != 1:
            m = m.transpose()
        if m.shape != (self.dim, 1):
            raise DimensionMismatch(
                "{} expects a tangent vector of length {}, got shape {}".format(
                    self, self.dim, m.shape
                )
            )
        return m

    def zero_tangent(self) -> Matrix:
        return Matrix.zeros(self.dim, 1)

    @abc.abstractmethod
    def make(self, value):
        """
        Validate value as an element of the manifold and return it in
        canonical form, raises InvalidElement otherwise.
        """
        ...

    @abc.abstractmethod
    def phi(self, a, v):
        """
        Retraction, move from a along the tangent vector v.
        """
        ...

    @abc.abstractmethod
    def phi_inverse(self, a, b) -> Matrix:
        """
        Chart, the tangent vector at a that phi maps onto b.
        """
        ...

    def __repr__(self):
        return type(self).__name__.lstrip("_")


class ChartManifold(Manifold):
    """
    Manifold given directly by its retraction and chart.

    Covers state spaces that are not Lie groups, such as the unit sphere,
    and vector spaces with a custom chart.

    @param dim: dimension of the tangent space
    @param phi: callable phi(a, v) -> b, v is a dim x 1 Matrix
    @param phi_inverse: callable phi_inverse(a, b) -> tangent vector at a
    @param make: callable validating an element, raising InvalidElement,
        elements are accepted unchanged when None
    @param name: name used by repr
    """

    def __init__(self, dim, phi, phi_inverse, make=None, name=None):
        super().__init__(dim)
        self._phi = phi
        self._phi_inverse = phi_inverse
        self._make = make
        self.name = name

    def make(self, value):
        if self._make is None:
            return value
        return self._make(value)

    def phi(self, a, v):
        return self._phi(a, self.tangent(v))

    def phi_inverse(self, a, b) -> Matrix:
        return self.tangent(self._phi_inverse(a, b))

    def __repr__(self):
        if self.name is not None:
            return self.name
        return "ChartManifold({})".format(self.dim)
