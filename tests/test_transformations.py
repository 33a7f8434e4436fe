import math

import numpy as np
import pytest

from models.transformations import (
    abc_to_alpha_beta,
    alpha_beta_to_abc,
    polar_to_alpha_beta,
    rotate,
    wrap_angle,
)


def test_clarke_is_amplitude_invariant():
    theta = 0.4
    x_abc = [math.cos(theta - k * 2.0 * math.pi / 3.0) for k in range(3)]
    x_alpha, x_beta = abc_to_alpha_beta(*x_abc)
    assert x_alpha == pytest.approx(math.cos(theta))
    assert x_beta == pytest.approx(math.sin(theta))


def test_clarke_inverse_consistency():
    i_alpha, i_beta = abc_to_alpha_beta(1.0, -0.5, -0.5)
    assert i_alpha == pytest.approx(1.0)
    assert i_beta == pytest.approx(0.0, abs=1e-12)
    i_a, i_b, i_c = alpha_beta_to_abc(i_alpha, i_beta)
    assert np.allclose((i_a, i_b, i_c), (1.0, -0.5, -0.5))
    assert i_a + i_b + i_c == pytest.approx(0.0, abs=1e-12)


def test_rotate_into_flux_frame():
    x_alpha, x_beta = polar_to_alpha_beta(2.0, 1.1)
    x_d, x_q = rotate(x_alpha, x_beta, 1.1)
    assert x_d == pytest.approx(2.0)
    assert x_q == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize(
    "theta, expected",
    [
        (0.0, 0.0),
        (0.5, 0.5),
        (2.0 * math.pi + 0.5, 0.5),
        (-2.0 * math.pi - 0.5, -0.5),
        (math.pi, math.pi),
        (-math.pi, math.pi),
    ],
)
def test_wrap_angle(theta: float, expected: float):
    wrapped = wrap_angle(theta)
    assert wrapped == pytest.approx(expected)
    assert -math.pi < wrapped <= math.pi
