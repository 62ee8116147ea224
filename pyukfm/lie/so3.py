import numpy as np

from ..errors import InvalidElement
from ..matrix import Matrix
from .matrix_lie_group import MatrixLieGroup
from .util import series


# see: https://ethaneade.com/lie.pdf

# log switches to the symmetric part of R when pi - theta is below this
NEAR_PI = 1e-3


class _SO3(MatrixLieGroup):
    """
    Rotations of 3D space as direction cosine matrices, tangent is the
    rotation vector omega.
    """

    def __init__(self):
        super().__init__(algebra_params=3, n=3)

    def make(self, value) -> Matrix:
        R = self.check_group_shape(value)
        if not self.is_rotation(R):
            raise InvalidElement("not a rotation matrix: {}".format(R.to_list()))
        return R

    def vee(self, X) -> Matrix:
        X = Matrix(X)
        return Matrix([X[2, 1], X[0, 2], X[1, 0]])

    def wedge(self, v) -> Matrix:
        v = self.tangent(v)
        return Matrix(
            [
                [0, -v[2], v[1]],
                [v[2], 0, -v[0]],
                [-v[1], v[0], 0],
            ]
        )

    def inv(self, a) -> Matrix:
        return Matrix(a).transpose()

    def exp(self, v) -> Matrix:
        v = self.tangent(v)
        theta = v.norm()
        X = self.wedge(v)
        A = series("sin(x)/x", theta)
        B = series("(1 - cos(x))/x^2", theta)
        return Matrix.identity(3) + X * A + (X @ X) * B

    def log(self, R) -> Matrix:
        R = Matrix(R)
        w = self.vee(R - R.T)  # 2 sin(theta) axis
        c = (R.trace() - 1) / 2
        theta = float(np.arctan2(w.norm() / 2, c))
        if np.pi - theta < NEAR_PI:
            # sin(theta) vanishes, recover the axis from the symmetric part
            S = ((R + R.T) / 2 - Matrix.identity(3) * c) / (1 - c)
            i = int(np.argmax([S[0, 0], S[1, 1], S[2, 2]]))
            axis = S.get_col(i) / np.sqrt(max(S[i, i], 0.0))
            if (axis.T @ w)[0, 0] < 0:
                axis = -axis
            return axis * theta
        return w * series("x/(2 sin(x))", theta)

    def adjoint(self, a) -> Matrix:
        return Matrix(a)

    def from_axis_angle(self, theta, axis) -> Matrix:
        axis = self.tangent(axis)
        return self.exp(axis * (float(theta) / axis.norm()))


SO3 = _SO3()
