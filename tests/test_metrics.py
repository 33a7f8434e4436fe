# -*- coding: utf-8 -*-
import math

import numpy as np

from metrics.estimation import compute_estimation_metrics, wrap_angle_error


def test_metrics_values() -> None:
    t = np.array([0.0, 1.0, 2.0, 3.0])
    omega_true = np.array([10.0, 10.0, 10.0, 10.0])
    omega_est = np.array([0.0, 12.0, 8.0, 11.0])
    angle = np.zeros(4)
    flux_true = np.full(4, 0.5)
    flux_est = np.array([0.0, 0.5, 0.5, 0.4])

    metrics = compute_estimation_metrics(
        t, omega_true, omega_est, angle, angle, flux_true, flux_est, settle_time=1.0
    )
    assert abs(metrics["speed_rmse"] - math.sqrt((4.0 + 4.0 + 1.0) / 3.0)) < 1e-9
    assert metrics["speed_final_error"] == 1.0
    assert metrics["angle_rmse"] == 0.0
    assert abs(metrics["flux_final_error"] + 0.1) < 1e-9
    assert metrics["n_samples"] == 3.0


def test_angle_error_wraps() -> None:
    err = wrap_angle_error(np.array([math.pi - 0.1]), np.array([-math.pi + 0.1]))
    assert abs(err[0] - 0.2) < 1e-9


def test_metrics_empty_window() -> None:
    t = np.array([0.0, 1.0])
    zeros = np.zeros(2)
    metrics = compute_estimation_metrics(t, zeros, zeros, zeros, zeros, zeros, zeros, settle_time=5.0)
    assert metrics["n_samples"] == 0.0
    assert metrics["speed_rmse"] == 0.0
