import abc

import numpy as np

from ..errors import InvalidElement
from ..matrix import Matrix
from .lie_group import LieGroup
from .util import GROUP_TOL


class MatrixLieGroup(LieGroup):
    """
    Lie group whose elements are square matrices, composed by matrix
    multiplication.
    """

    def __init__(self, algebra_params: int, n: int):
        super().__init__(
            group_params=n * n, algebra_params=algebra_params, group_shape=(n, n)
        )

    def check_group_shape(self, a) -> Matrix:
        a = Matrix(a)
        if a.shape != self.group_shape:
            raise InvalidElement(
                "{} element must have shape {}, got {}".format(
                    self, self.group_shape, a.shape
                )
            )
        return a

    def identity(self) -> Matrix:
        return Matrix.identity(self.group_shape[0])

    def product(self, a, b) -> Matrix:
        return Matrix(a) @ Matrix(b)

    def is_rotation(self, R) -> bool:
        """
        Check that R is orthogonal with determinant +1.
        """
        R = np.asarray(R)
        n = R.shape[0]
        return bool(
            np.allclose(R.T @ R, np.eye(n), rtol=0, atol=GROUP_TOL)
            and abs(np.linalg.det(R) - 1) < GROUP_TOL
        )

    @abc.abstractmethod
    def wedge(self, v) -> Matrix:
        """
        Lie algebra matrix of the tangent vector v.
        """
        ...

    @abc.abstractmethod
    def vee(self, X) -> Matrix:
        """
        Tangent vector of the Lie algebra matrix X.
        """
        ...
