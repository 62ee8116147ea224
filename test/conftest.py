import numpy as np
import pytest


def random_spd(rng, n, scale=1.0):
    """Random symmetric positive definite n x n array."""
    A = rng.standard_normal((n, n))
    return scale * (A @ A.T + n * np.eye(n))


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def spd(rng):
    return lambda n, scale=1.0: random_spd(rng, n, scale)
