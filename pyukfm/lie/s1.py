import cmath
import numbers

from ..errors import InvalidElement
from ..matrix import Matrix
from .lie_group import LieGroup
from .util import GROUP_TOL


class _S1(LieGroup):
    """
    Circle group of unit complex numbers.
    """

    def __init__(self):
        super().__init__(group_params=2, algebra_params=1, group_shape=())

    def make(self, value) -> complex:
        if not isinstance(value, numbers.Complex):
            raise InvalidElement("S1 element must be a complex number, got {!r}".format(value))
        z = complex(value)
        if abs(abs(z) - 1) > GROUP_TOL:
            raise InvalidElement("S1 element must have unit modulus, got |z| = {}".format(abs(z)))
        return z

    def from_angle(self, theta) -> complex:
        return cmath.exp(1j * float(theta))

    def angle(self, z) -> float:
        return cmath.phase(z)

    def identity(self) -> complex:
        return complex(1, 0)

    def product(self, a, b) -> complex:
        return complex(a) * complex(b)

    def inv(self, a) -> complex:
        return complex(a).conjugate()

    def exp(self, v) -> complex:
        return self.from_angle(self.tangent(v)[0])

    def log(self, a) -> Matrix:
        return Matrix([cmath.phase(complex(a))])

    def adjoint(self, a) -> Matrix:
        return Matrix.identity(1)


S1 = _S1()
