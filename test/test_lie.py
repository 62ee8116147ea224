import cmath

import numpy as np
import pytest

from pyukfm import DimensionMismatch, InvalidElement, Matrix
from pyukfm.lie import R, R2, R3, S1, SE2, SE3, SO2, SO3, ChartManifold, CompoundManifold
from pyukfm.lie.util import series

from models import S2

eps = 1e-9

COMPOUNDS = [CompoundManifold([SO3, R3, S1]), CompoundManifold([SE2, R2])]
GROUPS = [S1, SO2, SO3, SE2, SE3, R2, R3] + COMPOUNDS
MANIFOLDS = GROUPS + [S2, CompoundManifold([SO2, S2])]


def close(G, a, b, tol=eps):
    if isinstance(G, CompoundManifold):
        return all(close(g, x, y, tol) for g, x, y in zip(G.manifolds, a, b))
    if G is S1:
        return abs(a - b) < tol
    return Matrix(a).allclose(Matrix(b), tol)


def random_element(G, rng):
    if isinstance(G, CompoundManifold):
        return tuple(random_element(g, rng) for g in G.manifolds)
    if G is S2:
        return S2.phi(Matrix([0.0, 0.0, 1.0]), rng.uniform(-1, 1, 2))
    return G.exp(rng.uniform(-1, 1, G.dim))


def test_series():
    for x in [1e-3, 0.5, 2.0]:
        assert abs(series("sin(x)/x", x) - np.sin(x) / x) < 1e-12
        assert abs(series("(1 - cos(x))/x^2", x) - (1 - np.cos(x)) / x**2) < 1e-9
        assert abs(series("(x - sin(x))/x^3", x) - (x - np.sin(x)) / x**3) < 1e-6
        assert abs(series("x/(2 sin(x))", x) - x / (2 * np.sin(x))) < 1e-12
    # limits below EPS come from the series expansions
    for x in [0, 1e-9]:
        assert series("sin(x)/x", x) == pytest.approx(1.0)
        assert series("(1 - cos(x))/x", x) == pytest.approx(0.0, abs=1e-9)
        assert series("(1 - cos(x))/x^2", x) == pytest.approx(0.5)
        assert series("(x - sin(x))/x^3", x) == pytest.approx(1 / 6)
        assert series("x/(2 sin(x))", x) == pytest.approx(0.5)


@pytest.mark.parametrize("G", MANIFOLDS, ids=repr)
def test_chart_identity(G, rng):
    a = random_element(G, rng)
    assert close(G, G.phi(a, G.zero_tangent()), a)


@pytest.mark.parametrize("G", MANIFOLDS, ids=repr)
def test_chart_round_trip(G, rng):
    for _ in range(10):
        a = random_element(G, rng)
        v = Matrix(rng.uniform(-1, 1, G.dim))
        assert G.phi_inverse(a, G.phi(a, v)).allclose(v, 1e-6)


@pytest.mark.parametrize("G", GROUPS, ids=repr)
def test_group_axioms(G, rng):
    a, b, c = (random_element(G, rng) for _ in range(3))
    assert close(G, G.product(a, G.identity()), a)
    assert close(G, G.product(G.identity(), a), a)
    assert close(G, G.product(a, G.inv(a)), G.identity())
    assert close(G, G.product(G.product(a, b), c), G.product(a, G.product(b, c)))


@pytest.mark.parametrize("G", GROUPS, ids=repr)
def test_exp_log(G, rng):
    v = Matrix(rng.uniform(-1, 1, G.dim))
    assert G.log(G.exp(v)).allclose(v, eps)
    assert G.log(G.identity()).allclose(G.zero_tangent(), eps)


@pytest.mark.parametrize("G", [SO2, SO3, SE2, SE3], ids=repr)
def test_wedge_vee(G, rng):
    v = Matrix(rng.uniform(-1, 1, G.dim))
    assert G.vee(G.wedge(v)).allclose(v, eps)


@pytest.mark.parametrize("G", [SO3, SE2, SE3], ids=repr)
def test_adjoint(G, rng):
    a = random_element(G, rng)
    v = Matrix(rng.uniform(-0.5, 0.5, G.dim))
    lhs = G.product(G.product(a, G.exp(v)), G.inv(a))
    rhs = G.exp(G.adjoint(a) @ v)
    assert close(G, lhs, rhs, 1e-8)


def test_s1():
    z = S1.from_angle(0.3)
    assert abs(z - cmath.exp(0.3j)) < eps
    assert abs(S1.log(z)[0] - 0.3) < eps
    assert S1.make(1j) == 1j
    with pytest.raises(InvalidElement):
        S1.make(1.5)
    with pytest.raises(InvalidElement):
        S1.make("a")
    assert S1.adjoint(z) == Matrix.identity(1)


def test_so2():
    R = SO2.from_angle(np.pi / 4)
    assert abs(SO2.angle(R) - np.pi / 4) < eps
    assert SO2.make(R) == R
    with pytest.raises(InvalidElement):
        SO2.make([[1, 0], [0, 2]])
    with pytest.raises(InvalidElement):
        SO2.make(np.eye(3))


def test_so3():
    R = SO3.from_axis_angle(0.5, [0, 0, 2])
    assert R.allclose(Matrix([[np.cos(0.5), -np.sin(0.5), 0], [np.sin(0.5), np.cos(0.5), 0], [0, 0, 1]]))
    assert SO3.make(R) == R
    with pytest.raises(InvalidElement):
        SO3.make(np.diag([1, 1, -1]))
    # small angles use the series expansion
    v = Matrix([1e-9, -2e-9, 3e-9])
    assert SO3.log(SO3.exp(v)).allclose(v, 1e-15)


@pytest.mark.parametrize("theta", [np.pi - 1e-2, np.pi - 1e-5, np.pi])
def test_so3_log_near_pi(theta):
    axis = Matrix([1, 2, -2]) / 3
    v = axis * theta
    w = SO3.log(SO3.exp(v))
    if theta == np.pi:
        # axis and its opposite give the same rotation
        assert w.allclose(v, 1e-6) or w.allclose(-v, 1e-6)
    else:
        assert w.allclose(v, 1e-6)


def test_se2():
    T = SE2.from_parts(SO2.from_angle(0.3), [1, 2])
    assert SE2.make(T) == T
    assert SE2.translation(T) == Matrix([1, 2])
    assert SE2.pseudo_log(T).allclose(Matrix([1, 2, 0.3]))
    assert SE2.pseudo_exp(Matrix([1, 2, 0.3])).allclose(T)
    with pytest.raises(InvalidElement):
        SE2.make([[1, 0, 0], [0, 1, 0], [1, 0, 1]])
    # V is the identity for tiny angles
    v = Matrix([1.0, 2.0, 1e-6])
    assert SE2.translation(SE2.exp(v)) == Matrix([1.0, 2.0])
    assert SE2.log(SE2.exp(v)).allclose(v, eps)


def test_se3():
    R = SO3.exp([0.1, 0.2, 0.3])
    T = SE3.from_parts(R, [1, 2, 3])
    assert SE3.make(T) == T
    assert SE3.rotation(T) == R
    assert SE3.pseudo_exp(SE3.pseudo_log(T)).allclose(T)
    with pytest.raises(InvalidElement):
        SE3.make(np.eye(3))
    v = Matrix([10, 20, 30, 0.4, 0.5, 0.6])
    assert SE3.log(SE3.exp(v)).allclose(v, 1e-8)
    v = Matrix([1.0, 2.0, 3.0, 1e-6, 0, 0])
    assert SE3.translation(SE3.exp(v)) == Matrix([1.0, 2.0, 3.0])


def test_r():
    v1 = Matrix([1, 2, 3])
    v2 = Matrix([4, 5, 6])
    assert R3.product(v1, v2) == v1 + v2
    assert R3.phi(v1, v2) == v1 + v2
    assert R3.phi_inverse(v1, v2) == v2 - v1
    assert R(4).dim == 4
    assert R3.vee(R3.wedge(v1)) == v1
    with pytest.raises(InvalidElement):
        R3.make([1, 2])
    with pytest.raises(DimensionMismatch):
        R3.phi(v1, Matrix([1, 2]))


def test_compound_manifold(rng):
    M = CompoundManifold([SO3, R3, S1])
    assert M.dim == 7
    assert M.dims == [3, 3, 1]
    a = M.make((SO3.exp([0.1, 0.2, 0.3]), [1, 2, 3], S1.from_angle(0.2)))
    v = Matrix(rng.uniform(-1, 1, 7))
    b = M.phi(a, v)
    assert SO3.exp([0.1, 0.2, 0.3]) @ SO3.exp(v[0:3]) == M.component(b, 0)
    assert M.phi_inverse(a, b).allclose(v, 1e-6)
    assert all(close(G, x, y) for G, x, y in zip(M.manifolds, M.phi(a, M.split(v)), b))
    with pytest.raises(DimensionMismatch):
        M.phi(a, Matrix([1, 2, 3]))
    with pytest.raises(DimensionMismatch):
        M.phi_inverse(a, b[:2])
    with pytest.raises(InvalidElement):
        M.make((np.eye(3), [1, 2, 3]))
    with pytest.raises(InvalidElement):
        M.make((np.eye(3), [1, 2, 3], 2.0))


def test_compound_group(rng):
    G = CompoundManifold([R3, R3])
    v1 = Matrix([1, 2, 3, 4, 5, 6])
    a = G.exp(v1)
    assert G.log(G.product(a, a)).allclose(v1 * 2)
    assert G.adjoint(a) == Matrix.identity(6)

    G = CompoundManifold([SO3, R3])
    v = Matrix([0.1, 0.2, 0.3, 4, 5, 6])
    assert G.log(G.exp(v)).allclose(v, eps)
    a = G.exp(v)
    ident = G.product(a, G.inv(a))
    assert all(close(g, x, y) for g, x, y in zip(G.manifolds, ident, G.identity()))


def test_chart_manifold(rng):
    assert S2.dim == 2
    assert repr(S2) == "S2"
    a = S2.make([0.0, 0.6, 0.8])
    with pytest.raises(InvalidElement):
        S2.make([1.0, 1.0, 0.0])
    with pytest.raises(DimensionMismatch):
        S2.phi(a, [1.0, 2.0, 3.0])
    # the chart is the great circle distance
    b = S2.phi(a, [0.5, 0.0])
    assert float(Matrix(a).T @ Matrix(b)) == pytest.approx(np.cos(0.5))
    assert S2.phi_inverse(a, a).allclose(S2.zero_tangent(), eps)

    V = ChartManifold(2, lambda a, v: a + v, lambda a, b: b - a)
    assert repr(V) == "ChartManifold(2)"
    x = V.make(Matrix([1.0, 2.0]))
    assert V.phi(x, [0.5, -0.5]) == Matrix([1.5, 1.5])
    assert V.phi_inverse(x, Matrix([0.0, 0.0])) == Matrix([-1.0, -2.0])


def test_compound_with_chart_manifold(rng):
    M = CompoundManifold([SO2, S2])
    assert M.dim == 3
    assert not M.is_group()
    a = M.make((SO2.from_angle(0.2), [0.0, 0.0, 1.0]))
    v = Matrix(rng.uniform(-1, 1, 3))
    assert M.phi_inverse(a, M.phi(a, v)).allclose(v, 1e-6)
    with pytest.raises(TypeError):
        M.product(a, a)
    with pytest.raises(TypeError):
        M.identity()
    with pytest.raises(TypeError):
        M.exp(v)
    with pytest.raises(InvalidElement):
        M.make((SO2.from_angle(0.2), [0.0, 0.0, 2.0]))
