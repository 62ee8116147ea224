import numpy as np

from ..errors import InvalidElement
from ..matrix import Matrix, as_column
from .matrix_lie_group import MatrixLieGroup
from .so2 import SO2
from .util import SMALL_ANGLE, GROUP_TOL, series


class _SE2(MatrixLieGroup):
    """
    Rigid motions of the plane as 3x3 homogeneous transforms.

    The tangent vector is [x, y, theta], translation first.
    """

    def __init__(self):
        super().__init__(algebra_params=3, n=3)

    def make(self, value) -> Matrix:
        T = self.check_group_shape(value)
        if not np.allclose(T.get_row(2).to_numpy(), [[0, 0, 1]], rtol=0, atol=GROUP_TOL):
            raise InvalidElement("last row of an SE2 element must be [0, 0, 1]")
        if not self.is_rotation(self.rotation(T)):
            raise InvalidElement("rotation block is not a rotation matrix")
        return T

    def from_parts(self, R, t) -> Matrix:
        """
        Transform from a 2x2 rotation and a translation of length 2.
        """
        R = Matrix(R)
        t = as_column(t, 2)
        return Matrix.vertical(Matrix.horizontal(R, t), Matrix([[0, 0, 1]]))

    def rotation(self, T) -> Matrix:
        return Matrix(T).sub_matrix(0, 0, 2, 2)

    def translation(self, T) -> Matrix:
        return Matrix(T).sub_matrix(0, 2, 2, 1)

    def V(self, theta) -> Matrix:
        """
        Left Jacobian of SO2 coupling rotation into translation.
        """
        if abs(theta) < SMALL_ANGLE:
            return Matrix.identity(2)
        A = series("sin(x)/x", theta)
        B = series("(1 - cos(x))/x", theta)
        return Matrix([[A, -B], [B, A]])

    def vee(self, X) -> Matrix:
        """
        This takes in an element of the se2 Lie algebra (matrix form) and
        returns the tangent vector [x, y, theta]
        """
        X = Matrix(X)
        return Matrix([X[0, 2], X[1, 2], X[1, 0]])

    def wedge(self, v) -> Matrix:
        """
        This takes in a tangent vector [x, y, theta] and returns the se2
        Lie algebra matrix
        """
        x, y, theta = self.tangent(v).to_numpy()[:, 0]
        return Matrix([[0, -theta, x], [theta, 0, y], [0, 0, 0]])

    def inv(self, T) -> Matrix:
        R = self.rotation(T)
        t = self.translation(T)
        return self.from_parts(R.T, -(R.T @ t))

    def exp(self, v) -> Matrix:
        v = self.tangent(v)
        u = v[0:2]
        theta = v[2]
        return self.from_parts(SO2.from_angle(theta), self.V(theta) @ u)

    def log(self, T) -> Matrix:
        R = self.rotation(T)
        theta = SO2.angle(R)
        u = self.V(theta).inverse() @ self.translation(T)
        return Matrix.vertical(u, Matrix([theta]))

    def adjoint(self, T) -> Matrix:
        R = self.rotation(T)
        t = self.translation(T)
        Ad = np.eye(3)
        Ad[:2, :2] = R.to_numpy()
        Ad[0, 2] = t[1]
        Ad[1, 2] = -t[0]
        return Matrix(Ad)

    def pseudo_exp(self, p) -> Matrix:
        """
        Transform of the pose vector [x, y, theta], translation is taken
        as is.
        """
        p = self.tangent(p)
        return self.from_parts(SO2.from_angle(p[2]), p[0:2])

    def pseudo_log(self, T) -> Matrix:
        """
        Pose vector [x, y, theta] of a transform.
        """
        return Matrix.vertical(self.translation(T), Matrix([SO2.angle(self.rotation(T))]))


SE2 = _SE2()
