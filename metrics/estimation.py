# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Dict

import numpy as np


def _rms(x: np.ndarray) -> float:
    if x.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(x * x)))


def wrap_angle_error(angle_true: np.ndarray, angle_est: np.ndarray) -> np.ndarray:
    """Angle difference wrapped to (-pi, pi]."""
    return np.angle(np.exp(1j * (np.asarray(angle_est) - np.asarray(angle_true))))


def compute_estimation_metrics(
    t: np.ndarray,
    omega_true: np.ndarray,
    omega_est: np.ndarray,
    angle_true: np.ndarray,
    angle_est: np.ndarray,
    flux_true: np.ndarray,
    flux_est: np.ndarray,
    settle_time: float = 0.0,
) -> Dict[str, float]:
    """
    Estimation errors of the speed and rotor flux observer.

    Samples before settle_time are ignored. Speeds in rad/s (electrical),
    angles in rad, flux in Wb.
    """
    t = np.asarray(t, dtype=float)
    mask = t >= settle_time
    if not np.any(mask):
        return {
            "speed_rmse": 0.0,
            "speed_final_error": 0.0,
            "angle_rmse": 0.0,
            "flux_rmse": 0.0,
            "flux_final_error": 0.0,
            "n_samples": 0.0,
        }

    speed_err = np.asarray(omega_est, dtype=float)[mask] - np.asarray(omega_true, dtype=float)[mask]
    angle_err = wrap_angle_error(np.asarray(angle_true)[mask], np.asarray(angle_est)[mask])
    flux_err = np.asarray(flux_est, dtype=float)[mask] - np.asarray(flux_true, dtype=float)[mask]

    return {
        "speed_rmse": _rms(speed_err),
        "speed_final_error": float(speed_err[-1]),
        "angle_rmse": _rms(angle_err),
        "flux_rmse": _rms(flux_err),
        "flux_final_error": float(flux_err[-1]),
        "n_samples": float(speed_err.size),
    }


__all__ = ["compute_estimation_metrics", "wrap_angle_error"]
