"""
Coordinate helpers for the stationary alpha-beta frame.
"""

from __future__ import annotations

import math
from typing import Tuple


SQRT3 = math.sqrt(3.0)
TWO_THIRDS = 2.0 / 3.0


def abc_to_alpha_beta(x_a: float, x_b: float, x_c: float) -> Tuple[float, float]:
    """Amplitude-invariant Clarke transform."""
    x_alpha = TWO_THIRDS * (x_a - 0.5 * (x_b + x_c))
    x_beta = (x_b - x_c) / SQRT3
    return x_alpha, x_beta


def alpha_beta_to_abc(x_alpha: float, x_beta: float) -> Tuple[float, float, float]:
    """Inverse Clarke transform."""
    x_a = x_alpha
    x_b = -0.5 * x_alpha + 0.5 * SQRT3 * x_beta
    x_c = -0.5 * x_alpha - 0.5 * SQRT3 * x_beta
    return x_a, x_b, x_c


def rotate(x_alpha: float, x_beta: float, theta: float) -> Tuple[float, float]:
    """Express an alpha-beta vector in a frame at angle theta (Park)."""
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return x_alpha * cos_t + x_beta * sin_t, -x_alpha * sin_t + x_beta * cos_t


def polar_to_alpha_beta(magnitude: float, theta: float) -> Tuple[float, float]:
    return magnitude * math.cos(theta), magnitude * math.sin(theta)


def wrap_angle(theta: float) -> float:
    """Wrap an angle to (-pi, pi]."""
    wrapped = math.atan2(math.sin(theta), math.cos(theta))
    if wrapped == -math.pi:
        return math.pi
    return wrapped


__all__ = [
    "abc_to_alpha_beta",
    "alpha_beta_to_abc",
    "rotate",
    "polar_to_alpha_beta",
    "wrap_angle",
]
