import numpy as np
import pytest

from pyukfm import (
    DimensionMismatch,
    Matrix,
    NumericalInstability,
    Singular,
    UkfmError,
    as_column,
    backward_sub,
    chol_update,
    forward_sub,
)

eps = 1e-10


def test_construction():
    assert Matrix(2.0).shape == (1, 1)
    assert Matrix([1, 2, 3]).shape == (3, 1)
    assert Matrix([[1, 2, 3]]).shape == (1, 3)
    m = Matrix([[1, 2], [3, 4]])
    assert Matrix(m) == m
    assert m[1, 0] == 3.0
    assert Matrix([1, 2, 3])[2] == 3.0
    with pytest.raises(DimensionMismatch):
        Matrix(np.zeros((2, 2, 2)))


def test_immutable():
    data = np.eye(2)
    m = Matrix(data)
    data[0, 0] = 5
    assert m[0, 0] == 1.0
    with pytest.raises(ValueError):
        np.asarray(m._data)[0, 0] = 3
    m2 = m.set(0, 1, 7)
    assert m[0, 1] == 0.0
    assert m2[0, 1] == 7.0


def test_blocks():
    m = Matrix(np.arange(12.0).reshape(3, 4))
    assert m.sub_matrix(1, 1, 2, 2) == Matrix([[5, 6], [9, 10]])
    assert m.get_row(2) == Matrix([[8, 9, 10, 11]])
    assert m.get_col(1) == Matrix([1, 5, 9])
    assert m.get_row(-1) == Matrix([[8, 9, 10, 11]])
    assert m.get_row(-2) == Matrix([[4, 5, 6, 7]])
    assert m.get_col(-1) == Matrix([3, 7, 11])
    assert m.get_col(-3) == Matrix([1, 5, 9])
    assert m.minor(0, 0) == Matrix([[5, 6, 7], [9, 10, 11]])
    assert m.to_vector()[0:3] == Matrix([0, 4, 8])
    assert m[0:2, 3] == Matrix([3, 7])
    with pytest.raises(DimensionMismatch):
        m.sub_matrix(2, 2, 2, 2)


def test_concatenation():
    a = Matrix([[1, 2]])
    b = Matrix([[3, 4]])
    assert Matrix.vertical(a, b) == Matrix([[1, 2], [3, 4]])
    assert Matrix.horizontal(a, b) == Matrix([[1, 2, 3, 4]])
    d = Matrix.diagonal(Matrix.identity(2), Matrix(3.0))
    assert d == Matrix([[1, 0, 0], [0, 1, 0], [0, 0, 3]])
    with pytest.raises(DimensionMismatch):
        Matrix.horizontal(a, Matrix([1, 2]))
    with pytest.raises(DimensionMismatch):
        Matrix.vertical(a, Matrix([1, 2]))


def test_arithmetic():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[0, 1], [1, 0]])
    assert a + b == Matrix([[1, 3], [4, 4]])
    assert a - b == Matrix([[1, 1], [2, 4]])
    assert a @ b == Matrix([[2, 1], [4, 3]])
    assert a.multiply(b) == a @ b
    assert a * 2 == Matrix([[2, 4], [6, 8]])
    assert 2 * a == a.multiply(2)
    assert a / 2 == Matrix([[0.5, 1], [1.5, 2]])
    assert -a == a * -1
    assert a.T == Matrix([[1, 3], [2, 4]])
    assert a.trace() == 5.0
    with pytest.raises(DimensionMismatch):
        a + Matrix([1, 2])
    with pytest.raises(DimensionMismatch):
        a @ Matrix([1, 2, 3])


def test_numpy_interop():
    a = Matrix([[1, 2], [3, 4]])
    assert np.allclose(np.asarray(a), [[1, 2], [3, 4]])
    assert (np.eye(2) + a) == Matrix([[2, 2], [3, 5]])


def test_determinant_inverse():
    a = Matrix([[4, 7], [2, 6]])
    assert abs(a.determinant() - 10) < eps
    assert (a @ a.inverse()).allclose(Matrix.identity(2), eps)
    singular = Matrix([[1, 2], [2, 4]])
    assert abs(singular.determinant()) < eps
    with pytest.raises(Singular):
        singular.inverse()
    with pytest.raises(UkfmError):
        singular.inverse()
    with pytest.raises(DimensionMismatch):
        Matrix([[1, 2, 3]]).inverse()


def test_cholesky(spd):
    P = Matrix(spd(4))
    L = P.cholesky()
    assert np.allclose(np.triu(np.asarray(L), 1), 0)
    assert (L @ L.T).allclose(P, 1e-9)
    with pytest.raises(NumericalInstability):
        Matrix([[1, 2], [2, 1]]).cholesky()


def test_qr(rng):
    A = Matrix(rng.standard_normal((6, 3)))
    Q, R = A.qr()
    assert Q.shape == (6, 3)
    assert R.shape == (3, 3)
    assert np.allclose(np.tril(np.asarray(R), -1), 0)
    assert (Q @ R).allclose(A, 1e-9)
    assert (Q.T @ Q).allclose(Matrix.identity(3), 1e-9)


def test_triangular_solves(spd, rng):
    L = Matrix(spd(4)).cholesky()
    b = Matrix(rng.standard_normal((4, 2)))
    x = forward_sub(L, b)
    assert (L @ x).allclose(b, 1e-9)
    U = L.T
    x = backward_sub(U, b)
    assert (U @ x).allclose(b, 1e-9)
    with pytest.raises(Singular):
        forward_sub(Matrix([[1, 0], [1, 0]]), Matrix([1, 1]))
    with pytest.raises(DimensionMismatch):
        backward_sub(U, Matrix([1, 2]))


@pytest.mark.parametrize("beta", [1.0, -1.0])
def test_chol_update(spd, rng, beta):
    P = spd(5)
    W = 0.3 * rng.standard_normal((5, 3))
    L = Matrix(P).cholesky()
    L2 = chol_update(L, W, beta)
    assert np.allclose(np.triu(np.asarray(L2), 1), 0)
    assert (L2 @ L2.T).allclose(Matrix(P + beta * W @ W.T), 1e-8)


def test_chol_update_single_vector(spd, rng):
    P = spd(3)
    w = rng.standard_normal(3)
    L2 = chol_update(Matrix(P).cholesky(), Matrix(w), 0.5)
    assert (L2 @ L2.T).allclose(Matrix(P + 0.5 * np.outer(w, w)), 1e-8)
    with pytest.raises(DimensionMismatch):
        chol_update(Matrix(P).cholesky(), Matrix([1, 2]), 1.0)


def test_as_column():
    assert as_column([1, 2, 3]).shape == (3, 1)
    assert as_column(Matrix([[1, 2, 3]])).shape == (3, 1)
    with pytest.raises(DimensionMismatch):
        as_column([1, 2], dim=3)
    with pytest.raises(DimensionMismatch):
        as_column(np.eye(2))
