import logging

import numpy as np
import pytest

from pyukfm import DimensionMismatch, Matrix, NumericalInstability
from pyukfm.filters import (
    JulierSigmaPoints,
    KalmanFilter,
    MerweScaledSigmaPoints,
    UnscentedKalmanFilter,
)

from models import A, H, P0, Q, R, dt, f_linear, h_linear, linear_measurements, x0

tol = 1e-6


@pytest.mark.parametrize(
    "points", [None, MerweScaledSigmaPoints(alpha=0.3), JulierSigmaPoints()], ids=repr
)
def test_matches_kalman_filter(points):
    kf = KalmanFilter(x0, P0, A, Q)
    ukf = UnscentedKalmanFilter(x0, P0, Q, f=f_linear, points=points)
    for z in linear_measurements(20):
        kf.predict()
        ukf.predict(dt)
        assert ukf.get_state().allclose(kf.get_state(), tol)
        assert ukf.get_covariance().allclose(kf.get_covariance(), tol)
        kf.update(H, z, R)
        ukf.update(h_linear, z, R)
        assert ukf.get_state().allclose(kf.get_state(), tol)
        assert ukf.get_covariance().allclose(kf.get_covariance(), tol)


def test_predict_aug_matches_predict():
    ukf = UnscentedKalmanFilter(x0, P0, Q, f=f_linear)
    ukf_aug = UnscentedKalmanFilter(x0, P0, Q, f=f_linear)
    for _ in range(5):
        ukf.predict(dt)
        ukf_aug.predict_aug(dt)
    assert ukf_aug.get_state().allclose(ukf.get_state(), tol)
    assert ukf_aug.get_covariance().allclose(ukf.get_covariance(), tol)


def test_predict_aug_noise_input():
    # scalar noise entering through the velocity only
    def f(x, w, u, dt):
        return A @ x + Matrix([0.0, dt]) * w[0]

    ukf = UnscentedKalmanFilter(x0, P0, [[4.0]], f=f, points=JulierSigmaPoints(jitter=0))
    ukf.predict_aug(dt)
    G = Matrix([0.0, dt])
    assert ukf.get_covariance().allclose(A @ P0 @ A.T + G @ G.T * 4.0, 1e-9)


def test_setters():
    ukf = UnscentedKalmanFilter(x0, P0, Q)
    with pytest.raises(ValueError):
        ukf.predict(dt)
    ukf.set_f(f_linear)
    ukf.set_q(Q * 2)
    ukf.set_u([1.0])
    assert ukf.u == [1.0]
    ukf.predict(dt)
    assert ukf.get_covariance().allclose(A @ P0 @ A.T + Q * 2, tol)


def test_failed_calls_leave_state():
    ukf = UnscentedKalmanFilter(x0, P0, Q, f=f_linear)
    with pytest.raises(DimensionMismatch):
        ukf.update(h_linear, [1.0], np.eye(2))
    with pytest.raises(DimensionMismatch):
        ukf.update(h_linear, [1.0, 2.0], R)
    assert ukf.get_state() == x0
    assert ukf.get_covariance() == P0

    bad = UnscentedKalmanFilter(x0, [[1.0, 2.0], [2.0, 1.0]], Q, f=f_linear)
    with pytest.raises(NumericalInstability):
        bad.predict(dt)
    assert bad.get_state() == x0

    with pytest.raises(DimensionMismatch):
        UnscentedKalmanFilter(x0, np.eye(3), Q)
    with pytest.raises(DimensionMismatch):
        UnscentedKalmanFilter(x0, P0, np.eye(3), f=f_linear).predict(dt)


def test_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="pyukfm.filters.ukf")
    ukf = UnscentedKalmanFilter(x0, P0, Q, f=f_linear)
    ukf.predict(dt)
    ukf.update(h_linear, [0.1], R)
    assert "ukf predict" in caplog.text
    assert "ukf update" in caplog.text
