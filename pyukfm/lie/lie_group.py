import abc

from ..matrix import Matrix
from .manifold import Manifold


class LieGroup(Manifold):
    """
    This is a generic Lie Group class. It does NOT assume matrix
    lie groups, the circle group for instance is represented directly
    by unit complex numbers.

    All groups share the same chart, built from the group operations:

        phi(a, v) = product(a, exp(v))
        phi_inverse(a, b) = log(product(inv(a), b))

    so the tangent vector is expressed in the body frame of a.
    """

    def __init__(self, group_params: int, algebra_params: int, group_shape):
        """
        @param group_params: The number of parameters in the group, (e.g. for
        a rotation matrix this would be 9, for a unit complex number 2)
        @param algebra_params: The number of parameters for the Lie algebra
        (e.g. for SO3 this would be 3, for SO2 this would be 1)
        @param group_shape: The shape of a group element
        """
        super().__init__(dim=algebra_params)
        self.group_params = group_params
        self.algebra_params = algebra_params
        self.group_shape = group_shape

    @abc.abstractmethod
    def identity(self):
        ...

    @abc.abstractmethod
    def product(self, a, b):
        ...

    @abc.abstractmethod
    def inv(self, a):
        ...

    @abc.abstractmethod
    def exp(self, v):
        ...

    @abc.abstractmethod
    def log(self, a) -> Matrix:
        ...

    @abc.abstractmethod
    def adjoint(self, a) -> Matrix:
        """
        Matrix Ad_a with a exp(v) inv(a) = exp(Ad_a v).
        """
        ...

    def phi(self, a, v):
        return self.product(a, self.exp(v))

    def phi_inverse(self, a, b) -> Matrix:
        return self.log(self.product(self.inv(a), b))
