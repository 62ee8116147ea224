import numpy as np

from ..errors import InvalidElement
from ..matrix import Matrix
from .matrix_lie_group import MatrixLieGroup


class _SO2(MatrixLieGroup):
    """
    Planar rotations as 2x2 rotation matrices, tangent [theta].
    """

    def __init__(self):
        super().__init__(algebra_params=1, n=2)

    def make(self, value) -> Matrix:
        R = self.check_group_shape(value)
        if not self.is_rotation(R):
            raise InvalidElement("not a rotation matrix: {}".format(R.to_list()))
        return R

    def from_angle(self, theta) -> Matrix:
        c = np.cos(theta)
        s = np.sin(theta)
        return Matrix([[c, -s], [s, c]])

    def angle(self, R) -> float:
        return float(np.arctan2(R[1, 0], R[0, 0]))

    def inv(self, a) -> Matrix:
        return Matrix(a).transpose()

    def exp(self, v) -> Matrix:
        return self.from_angle(self.tangent(v)[0])

    def log(self, a) -> Matrix:
        return Matrix([self.angle(a)])

    def adjoint(self, a) -> Matrix:
        # the group is abelian
        return Matrix.identity(1)

    def wedge(self, v) -> Matrix:
        theta = self.tangent(v)[0]
        return Matrix([[0, -theta], [theta, 0]])

    def vee(self, X) -> Matrix:
        return Matrix([X[1, 0]])


SO2 = _SO2()
