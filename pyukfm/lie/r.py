from ..errors import DimensionMismatch, InvalidElement
from ..matrix import Matrix, as_column
from .lie_group import LieGroup


class R(LieGroup):
    """
    n dimensional vector space as an additive group, elements are n x 1
    columns and the chart reduces to phi(a, v) = a + v.
    """

    def __init__(self, n):
        super().__init__(group_params=n, algebra_params=n, group_shape=(n, 1))

    def make(self, value) -> Matrix:
        try:
            return as_column(value, self.group_params)
        except DimensionMismatch as exc:
            raise InvalidElement(str(exc)) from exc

    def identity(self) -> Matrix:
        return Matrix.zeros(self.group_params, 1)

    def product(self, a, b) -> Matrix:
        return self.tangent(a) + self.tangent(b)

    def inv(self, a) -> Matrix:
        return -self.tangent(a)

    def exp(self, v) -> Matrix:
        return self.tangent(v)

    def log(self, a) -> Matrix:
        return self.tangent(a)

    def adjoint(self, a) -> Matrix:
        return Matrix.identity(self.group_params)

    def vee(self, X) -> Matrix:
        X = Matrix(X)
        return X.sub_matrix(0, self.group_params, self.group_params, 1)

    def wedge(self, v) -> Matrix:
        n = self.group_params
        X = Matrix.horizontal(Matrix.zeros(n, n), self.tangent(v))
        return Matrix.vertical(X, Matrix.zeros(1, n + 1))

    def __repr__(self):
        return "R({})".format(self.group_params)


R1 = R(1)
R2 = R(2)
R3 = R(3)
