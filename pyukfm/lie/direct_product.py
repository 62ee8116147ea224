import numbers

from ..errors import DimensionMismatch, InvalidElement
from ..matrix import Matrix
from .lie_group import LieGroup
from .manifold import Manifold


class CompoundManifold(Manifold):
    """
    Product of heterogeneous manifolds.

    Elements are tuples with one component per manifold, tangent vectors
    are the component tangents stacked in the same order. When every
    component is a Lie group the product is a Lie group too, and the group
    operations are applied component wise.
    """

    def __init__(self, manifolds):
        self.manifolds = tuple(manifolds)
        if len(self.manifolds) == 0:
            raise DimensionMismatch("a compound manifold needs at least one component")
        self.dims = [m.dim for m in self.manifolds]
        self.n_algebra = [0]
        for d in self.dims:
            self.n_algebra.append(self.n_algebra[-1] + d)
        super().__init__(dim=self.n_algebra[-1])

    def __len__(self):
        return len(self.manifolds)

    def __repr__(self):
        return "CompoundManifold({})".format(", ".join(repr(m) for m in self.manifolds))

    def check_element(self, a) -> tuple:
        if not isinstance(a, (tuple, list)) or len(a) != len(self.manifolds):
            raise DimensionMismatch(
                "{} element must be a tuple of {} components".format(self, len(self.manifolds))
            )
        return tuple(a)

    def component(self, a, i):
        return self.check_element(a)[i]

    def subalgebra(self, v, i) -> Matrix:
        start = self.n_algebra[i]
        return v.sub_matrix(start, 0, self.dims[i], 1)

    def split(self, v):
        """
        Partition a stacked tangent vector into per component tangents. A
        sequence of per component tangents is accepted as well.
        """
        if isinstance(v, (tuple, list)) and not all(isinstance(vi, numbers.Real) for vi in v):
            if len(v) != len(self.manifolds):
                raise DimensionMismatch(
                    "{} expects {} component tangents, got {}".format(
                        self, len(self.manifolds), len(v)
                    )
                )
            return [m.tangent(vi) for m, vi in zip(self.manifolds, v)]
        v = self.tangent(v)
        return [self.subalgebra(v, i) for i in range(len(self.manifolds))]

    def join(self, vs) -> Matrix:
        return Matrix.vertical([m.tangent(vi) for m, vi in zip(self.manifolds, vs)])

    def make(self, value) -> tuple:
        if not isinstance(value, (tuple, list)) or len(value) != len(self.manifolds):
            raise InvalidElement(
                "{} element must be a sequence of {} components".format(self, len(self.manifolds))
            )
        return tuple(m.make(ai) for m, ai in zip(self.manifolds, value))

    def phi(self, a, v) -> tuple:
        a = self.check_element(a)
        return tuple(m.phi(ai, vi) for m, ai, vi in zip(self.manifolds, a, self.split(v)))

    def phi_inverse(self, a, b) -> Matrix:
        a = self.check_element(a)
        b = self.check_element(b)
        return self.join(m.phi_inverse(ai, bi) for m, ai, bi in zip(self.manifolds, a, b))

    # group operations, available when every component is a Lie group

    def is_group(self) -> bool:
        return all(isinstance(m, LieGroup) for m in self.manifolds)

    def _groups(self):
        if not self.is_group():
            raise TypeError("{} has components that are not Lie groups".format(self))
        return self.manifolds

    def identity(self) -> tuple:
        return tuple(g.identity() for g in self._groups())

    def product(self, a, b) -> tuple:
        a = self.check_element(a)
        b = self.check_element(b)
        return tuple(g.product(ai, bi) for g, ai, bi in zip(self._groups(), a, b))

    def inv(self, a) -> tuple:
        a = self.check_element(a)
        return tuple(g.inv(ai) for g, ai in zip(self._groups(), a))

    def exp(self, v) -> tuple:
        return tuple(g.exp(vi) for g, vi in zip(self._groups(), self.split(v)))

    def log(self, a) -> Matrix:
        a = self.check_element(a)
        return self.join(g.log(ai) for g, ai in zip(self._groups(), a))

    def adjoint(self, a) -> Matrix:
        a = self.check_element(a)
        return Matrix.diagonal([g.adjoint(ai) for g, ai in zip(self._groups(), a)])

