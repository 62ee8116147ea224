"""
Dense real matrix value type.

Matrix wraps a read-only 2-D numpy array. Every operation returns a new
Matrix, so instances can be shared freely between filters and callbacks.
Decompositions are delegated to scipy.linalg.
"""
import numbers

import numpy as np
import scipy.linalg

from .errors import DimensionMismatch, NumericalInstability, Singular

# smallest LU pivot, relative to the largest, accepted by Matrix.inverse
SINGULAR_TOL = 1e-12


class Matrix:
    """
    Immutable rows x cols matrix of floats.

    Scalars become 1x1 matrices and 1-D sequences become column vectors,
    which is how tangent vectors and measurements are passed around.
    """

    __slots__ = ("_data",)

    # let numpy defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, data):
        if isinstance(data, Matrix):
            self._data = data._data
            return
        arr = np.array(data, dtype=float)
        if arr.ndim == 0:
            arr = arr.reshape(1, 1)
        elif arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        elif arr.ndim != 2:
            raise DimensionMismatch(
                "matrix data must be at most 2-D, got shape {}".format(arr.shape)
            )
        arr.flags.writeable = False
        self._data = arr

    @classmethod
    def _wrap(cls, arr):
        m = cls.__new__(cls)
        arr = np.asarray(arr, dtype=float)
        if arr.ndim != 2:
            arr = arr.reshape(-1, 1)
        arr.flags.writeable = False
        m._data = arr
        return m

    # construction helpers

    @classmethod
    def identity(cls, n):
        return cls._wrap(np.eye(n))

    @classmethod
    def zeros(cls, rows, cols=1):
        return cls._wrap(np.zeros((rows, cols)))

    @classmethod
    def horizontal(cls, *matrices):
        """Concatenate matrices left to right."""
        matrices = _flatten_args(matrices)
        rows = {m.rows for m in matrices}
        if len(rows) != 1:
            raise DimensionMismatch(
                "horizontal concatenation needs equal row counts, got {}".format(
                    [m.shape for m in matrices]
                )
            )
        return cls._wrap(np.hstack([m._data for m in matrices]))

    @classmethod
    def vertical(cls, *matrices):
        """Concatenate matrices top to bottom."""
        matrices = _flatten_args(matrices)
        cols = {m.cols for m in matrices}
        if len(cols) != 1:
            raise DimensionMismatch(
                "vertical concatenation needs equal column counts, got {}".format(
                    [m.shape for m in matrices]
                )
            )
        return cls._wrap(np.vstack([m._data for m in matrices]))

    @classmethod
    def diagonal(cls, *matrices):
        """Block diagonal matrix of the given blocks."""
        matrices = _flatten_args(matrices)
        return cls._wrap(scipy.linalg.block_diag(*[m._data for m in matrices]))

    # shape and access

    @property
    def rows(self):
        return self._data.shape[0]

    @property
    def cols(self):
        return self._data.shape[1]

    @property
    def shape(self):
        return self._data.shape

    def is_square(self):
        return self.rows == self.cols

    def is_vector(self):
        return self.cols == 1 or self.rows == 1

    def __getitem__(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError("matrix index must have two components")
            if all(isinstance(k, numbers.Integral) for k in key):
                return float(self._data[key])
            key = tuple(
                slice(k, k + 1 if k != -1 else None) if isinstance(k, numbers.Integral) else k
                for k in key
            )
            return Matrix._wrap(self._data[key])
        if isinstance(key, numbers.Integral) and self.is_vector():
            return float(self._data.reshape(-1)[key])
        if isinstance(key, slice) and self.cols == 1:
            return Matrix._wrap(self._data[key, :])
        if isinstance(key, numbers.Integral):
            return self.get_row(key)
        raise IndexError("unsupported matrix index {!r}".format(key))

    def get(self, row, col):
        return float(self._data[row, col])

    def get_row(self, row):
        return Matrix._wrap(self._data[[row], :])

    def get_col(self, col):
        return Matrix._wrap(self._data[:, [col]])

    def sub_matrix(self, row, col, height, width):
        if row < 0 or col < 0 or row + height > self.rows or col + width > self.cols:
            raise DimensionMismatch(
                "block ({}, {}, {}, {}) outside of {} matrix".format(
                    row, col, height, width, self.shape
                )
            )
        return Matrix._wrap(self._data[row : row + height, col : col + width])

    def minor(self, row, col):
        """Matrix with the given row and column removed."""
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix._wrap(data)

    def set(self, row, col, value):
        data = self._data.copy()
        data[row, col] = value
        return Matrix._wrap(data)

    def to_vector(self):
        """Stack the columns into a single column vector."""
        return Matrix._wrap(self._data.reshape(-1, 1, order="F"))

    def to_numpy(self):
        return self._data.copy()

    def to_list(self):
        return self._data.tolist()

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    def __float__(self):
        if self.shape != (1, 1):
            raise DimensionMismatch("only 1x1 matrices convert to float, got {}".format(self.shape))
        return float(self._data[0, 0])

    def __repr__(self):
        return "Matrix({})".format(self._data.tolist())

    def __str__(self):
        return str(self._data)

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def allclose(self, other, tol=1e-9):
        other = Matrix(other)
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=tol))

    # arithmetic

    def transpose(self):
        return Matrix._wrap(self._data.T)

    @property
    def T(self):
        return self.transpose()

    def add(self, other):
        other = Matrix(other)
        _check_same_shape(self, other, "add")
        return Matrix._wrap(self._data + other._data)

    def subtract(self, other):
        other = Matrix(other)
        _check_same_shape(self, other, "subtract")
        return Matrix._wrap(self._data - other._data)

    def multiply(self, other):
        """Matrix product with another matrix, or scaling by a number."""
        if isinstance(other, numbers.Real):
            return Matrix._wrap(self._data * float(other))
        other = Matrix(other)
        if self.cols != other.rows:
            raise DimensionMismatch(
                "cannot multiply {} by {}".format(self.shape, other.shape)
            )
        return Matrix._wrap(self._data @ other._data)

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return Matrix(other).add(self)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        return Matrix(other).subtract(self)

    def __neg__(self):
        return Matrix._wrap(-self._data)

    def __matmul__(self, other):
        return self.multiply(Matrix(other))

    def __rmatmul__(self, other):
        return Matrix(other).multiply(self)

    def __mul__(self, scalar):
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return Matrix._wrap(self._data / float(scalar))

    # decompositions

    def trace(self):
        _check_square(self, "trace")
        return float(np.trace(self._data))

    def norm(self):
        """Frobenius norm (2-norm for vectors)."""
        return float(np.linalg.norm(self._data))

    def determinant(self):
        """
        Determinant from an LU factorization.

        A singular matrix yields 0.0 (or a value at round-off level) rather
        than an error; use inverse() when invertibility must be enforced.
        """
        _check_square(self, "determinant")
        return float(scipy.linalg.det(self._data))

    def inverse(self):
        _check_square(self, "inverse")
        lu, piv = scipy.linalg.lu_factor(self._data)
        pivots = np.abs(np.diag(lu))
        if not np.all(np.isfinite(pivots)) or pivots.min() <= SINGULAR_TOL * pivots.max():
            raise Singular("matrix of shape {} is not invertible".format(self.shape))
        return Matrix._wrap(scipy.linalg.lu_solve((lu, piv), np.eye(self.rows)))

    def cholesky(self):
        """
        Lower triangular L such that L L^T = A.

        Only the lower triangle of A is read, A is assumed symmetric.
        """
        _check_square(self, "cholesky")
        try:
            L = scipy.linalg.cholesky(self._data, lower=True)
        except np.linalg.LinAlgError as exc:
            raise NumericalInstability(
                "matrix is not positive definite: {}".format(exc)
            ) from exc
        return Matrix._wrap(L)

    def qr(self):
        """Economic QR factorization, returns (Q, R) with A = Q R."""
        Q, R = scipy.linalg.qr(self._data, mode="economic")
        return Matrix._wrap(Q), Matrix._wrap(R)


def as_column(value, dim=None):
    """
    Coerce a vector-like value to a column Matrix.

    @param value: Matrix, array or sequence holding a single row or column
    @param dim: expected length, checked when given
    """
    m = Matrix(value)
    if m.cols != 1:
        if m.rows == 1:
            m = m.transpose()
        else:
            raise DimensionMismatch("expected a vector, got shape {}".format(m.shape))
    if dim is not None and m.rows != dim:
        raise DimensionMismatch("expected a vector of length {}, got {}".format(dim, m.rows))
    return m


def forward_sub(A, b):
    """
    Solve A x = b for lower triangular A, one column of b at a time.
    """
    A, b = Matrix(A), Matrix(b)
    _check_triangular_system(A, b)
    try:
        x = scipy.linalg.solve_triangular(A._data, b._data, lower=True)
    except np.linalg.LinAlgError as exc:
        raise Singular("zero on the diagonal of a triangular system") from exc
    return Matrix._wrap(x)


def backward_sub(A, b):
    """
    Solve A x = b for upper triangular A, one column of b at a time.
    """
    A, b = Matrix(A), Matrix(b)
    _check_triangular_system(A, b)
    try:
        x = scipy.linalg.solve_triangular(A._data, b._data, lower=False)
    except np.linalg.LinAlgError as exc:
        raise Singular("zero on the diagonal of a triangular system") from exc
    return Matrix._wrap(x)


def chol_update(L, W, beta):
    """
    Rank-one update of a lower triangular Cholesky factor.

    Returns L' with L' L'^T = L L^T + beta * sum_i w_i w_i^T where w_i are
    the columns of W. Columns are folded in one after another, each against
    the factor produced by the previous one. A negative beta is a downdate,
    the result must stay positive definite but this is not checked.

    see: Krause and Igel, 'A More Efficient Rank-one Covariance Matrix
    Update for Evolution Strategies', 2015
    """
    L = Matrix(L)
    W = Matrix(W)
    n = L.rows
    if not L.is_square():
        raise DimensionMismatch("cholesky factor must be square, got {}".format(L.shape))
    if W.rows != n:
        if W.cols == n and W.rows == 1:
            W = W.transpose()
        else:
            raise DimensionMismatch(
                "update vectors of shape {} do not match factor {}".format(W.shape, L.shape)
            )
    beta = float(beta)

    current = L.to_numpy()
    vectors = W.to_numpy()
    for i in range(vectors.shape[1]):
        w = vectors[:, i].copy()
        out = np.zeros_like(current)
        b = 1.0
        for j in range(n):
            ljj = current[j, j]
            out[j, j] = np.sqrt(ljj * ljj + (beta / b) * w[j] * w[j])
            upsilon = ljj * ljj * b + beta * w[j] * w[j]
            w[j + 1 :] -= (w[j] / ljj) * current[j + 1 :, j]
            out[j + 1 :, j] = (out[j, j] / ljj) * current[j + 1 :, j] + (
                out[j, j] * beta * w[j] * w[j + 1 :] / upsilon
            )
            b += beta * w[j] * w[j] / (ljj * ljj)
        current = out
    return Matrix._wrap(current)


def _flatten_args(matrices):
    if len(matrices) == 1 and isinstance(matrices[0], (list, tuple)):
        matrices = matrices[0]
    if len(matrices) == 0:
        raise DimensionMismatch("at least one matrix is required")
    return [Matrix(m) for m in matrices]


def _check_same_shape(a, b, op):
    if a.shape != b.shape:
        raise DimensionMismatch("cannot {} {} and {}".format(op, a.shape, b.shape))


def _check_square(a, op):
    if not a.is_square():
        raise DimensionMismatch("{} requires a square matrix, got {}".format(op, a.shape))


def _check_triangular_system(A, b):
    if not A.is_square():
        raise DimensionMismatch("triangular matrix must be square, got {}".format(A.shape))
    if A.rows != b.rows:
        raise DimensionMismatch(
            "right hand side of shape {} does not match {}".format(b.shape, A.shape)
        )
