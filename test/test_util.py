import numpy as np

from pyukfm import Matrix
from pyukfm.util import rk4


def test_rk4_exponential():
    y = Matrix([1.0])
    h = 0.1
    for i in range(10):
        y = rk4(lambda t, y: -y, i * h, y, h)
    assert abs(y[0] - np.exp(-1.0)) < 1e-6


def test_rk4_time_dependent():
    # y' = t, y(0) = 0 is integrated exactly
    y = rk4(lambda t, y: Matrix([t]), 0.0, Matrix([0.0]), 2.0)
    assert abs(y[0] - 2.0) < 1e-12
