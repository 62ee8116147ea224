import numpy as np

from ..errors import InvalidElement
from ..matrix import Matrix, as_column
from .matrix_lie_group import MatrixLieGroup
from .so3 import SO3
from .util import SMALL_ANGLE, GROUP_TOL, series


class _SE3(MatrixLieGroup):
    """
    Rigid motions of 3D space as 4x4 homogeneous transforms.

    The tangent vector is [rho, omega]: translational part rho (3) followed
    by the rotation vector omega (3).
    """

    def __init__(self):
        super().__init__(algebra_params=6, n=4)

    def make(self, value) -> Matrix:
        T = self.check_group_shape(value)
        if not np.allclose(T.get_row(3).to_numpy(), [[0, 0, 0, 1]], rtol=0, atol=GROUP_TOL):
            raise InvalidElement("last row of an SE3 element must be [0, 0, 0, 1]")
        if not self.is_rotation(self.rotation(T)):
            raise InvalidElement("rotation block is not a rotation matrix")
        return T

    def from_parts(self, R, t) -> Matrix:
        """
        Transform from a 3x3 rotation and a translation of length 3.
        """
        R = Matrix(R)
        t = as_column(t, 3)
        return Matrix.vertical(Matrix.horizontal(R, t), Matrix([[0, 0, 0, 1]]))

    def rotation(self, T) -> Matrix:
        return Matrix(T).sub_matrix(0, 0, 3, 3)

    def translation(self, T) -> Matrix:
        return Matrix(T).sub_matrix(0, 3, 3, 1)

    def V(self, omega) -> Matrix:
        theta = omega.norm()
        if theta < SMALL_ANGLE:
            return Matrix.identity(3)
        X = SO3.wedge(omega)
        B = series("(1 - cos(x))/x^2", theta)
        C = series("(x - sin(x))/x^3", theta)
        return Matrix.identity(3) + X * B + (X @ X) * C

    def V_inv(self, omega) -> Matrix:
        theta = omega.norm()
        if theta < SMALL_ANGLE:
            return Matrix.identity(3)
        X = SO3.wedge(omega)
        A = series("sin(x)/x", theta)
        B = series("(1 - cos(x))/x^2", theta)
        return Matrix.identity(3) - X / 2 + (X @ X) * ((1 - A / (2 * B)) / theta**2)

    def vee(self, X) -> Matrix:
        """
        This takes in an element of the se3 Lie algebra (matrix form) and
        returns the tangent vector [x, y, z, theta0, theta1, theta2]
        """
        X = Matrix(X)
        return Matrix.vertical(X.sub_matrix(0, 3, 3, 1), SO3.vee(X.sub_matrix(0, 0, 3, 3)))

    def wedge(self, v) -> Matrix:
        """
        This takes in a tangent vector [x, y, z, theta0, theta1, theta2] and
        returns the se3 Lie algebra matrix
        """
        v = self.tangent(v)
        top = Matrix.horizontal(SO3.wedge(v[3:6]), v[0:3])
        return Matrix.vertical(top, Matrix.zeros(1, 4))

    def inv(self, T) -> Matrix:
        R = self.rotation(T)
        t = self.translation(T)
        return self.from_parts(R.T, -(R.T @ t))

    def exp(self, v) -> Matrix:
        v = self.tangent(v)
        rho = v[0:3]
        omega = v[3:6]
        return self.from_parts(SO3.exp(omega), self.V(omega) @ rho)

    def log(self, T) -> Matrix:
        omega = SO3.log(self.rotation(T))
        rho = self.V_inv(omega) @ self.translation(T)
        return Matrix.vertical(rho, omega)

    def adjoint(self, T) -> Matrix:
        R = self.rotation(T)
        t = self.translation(T)
        top = Matrix.horizontal(R, SO3.wedge(t) @ R)
        bottom = Matrix.horizontal(Matrix.zeros(3, 3), R)
        return Matrix.vertical(top, bottom)

    def pseudo_exp(self, p) -> Matrix:
        """
        Transform of the pose vector [x, y, z, omega], translation is taken
        as is.
        """
        p = self.tangent(p)
        return self.from_parts(SO3.exp(p[3:6]), p[0:3])

    def pseudo_log(self, T) -> Matrix:
        """
        Pose vector [x, y, z, omega] of a transform.
        """
        return Matrix.vertical(self.translation(T), SO3.log(self.rotation(T)))


SE3 = _SE3()
