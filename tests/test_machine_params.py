import math

import pytest

from config.env import create_default_env, create_machine_parameters
from models.machine_params import MachineParameterError, MachineParameters


def make_params(**overrides) -> MachineParameters:
    values = dict(dt=1e-4, pole_pairs=2, Rs=1.0, Rr=1.0, Ls=0.1, Lr=0.1, Lm=0.095)
    values.update(overrides)
    return MachineParameters(**values)


def test_init_derives_coefficients():
    params = make_params()
    params.init()
    assert params.inv_tr == pytest.approx(10.0)
    assert params.inv_kr == pytest.approx(0.1 / 0.095)
    assert params.sigma_ls == pytest.approx(0.00975)
    assert params.rotor_time_constant == pytest.approx(0.1)


def test_init_is_idempotent():
    params = make_params(Rr=0.73, Ls=0.123, Lr=0.117, Lm=0.111)
    params.init()
    first = (params.inv_tr, params.inv_kr, params.sigma_ls)
    params.init()
    assert (params.inv_tr, params.inv_kr, params.sigma_ls) == first


def test_derived_values_are_not_refreshed_on_mutation():
    params = make_params()
    params.init()
    params.Rr = 2.0
    assert params.inv_tr == pytest.approx(10.0)
    params.init()
    assert params.inv_tr == pytest.approx(20.0)


def test_derived_values_default_to_zero_before_init():
    params = make_params()
    assert (params.inv_tr, params.inv_kr, params.sigma_ls) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize(
    "overrides",
    [
        {"dt": 0.0},
        {"dt": -1e-4},
        {"Lr": 0.0},
        {"Lm": 0.0},
        {"Ls": 0.0},
        {"Ls": 0.1, "Lr": 0.1, "Lm": 0.1},
        {"Lm": 0.2},
        {"Rr": math.nan},
        {"Rs": math.inf},
        {"pole_pairs": 0},
        {"Rr": 0.0},
        {"Rr": -1.0},
        {"Rs": -0.5},
    ],
)
def test_degenerate_constants_are_rejected(overrides):
    params = make_params(**overrides)
    with pytest.raises(MachineParameterError):
        params.init()


def test_parameter_error_is_value_error():
    assert issubclass(MachineParameterError, ValueError)


def test_create_machine_parameters_from_env():
    env = create_default_env()
    params = create_machine_parameters(env.motor, env.sim.dt)
    assert params.dt == env.sim.dt
    assert params.pole_pairs == env.motor.p
    assert params.inv_tr == pytest.approx(env.motor.Rr / env.motor.Lr)


def test_zero_stator_resistance_is_allowed():
    params = make_params(Rs=0.0)
    params.init()
    assert params.rotor_time_constant == pytest.approx(0.1)
