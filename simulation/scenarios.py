"""
Built-in excitation scenarios for the observer bench (open-loop V/f supply).
"""

from __future__ import annotations

from typing import Callable

from config.env import EnvConfig


Scenario = tuple[Callable[[float], float], Callable[[float], float]]

SCENARIOS = ("dc_magnetize", "vf_ramp", "speed_step", "load_step")


def get_scenario(name: str, env: EnvConfig) -> Scenario:
    """
    Return callable pair (f_e(t) in Hz, load_torque(t) in Nm) for the given scenario name.
    """
    f_nom = env.vf.f_nom
    t_end = env.sim.t_end
    load_const = env.sim.load_torque

    if name == "dc_magnetize":

        def frequency(t: float) -> float:
            return 0.0

        def load_torque(t: float) -> float:
            return 0.0

    elif name == "vf_ramp":
        t_ramp = max(0.6 * t_end, env.sim.dt)
        f_target = 0.5 * f_nom

        def frequency(t: float) -> float:
            if t >= t_ramp:
                return f_target
            return f_target * (t / t_ramp)

        def load_torque(t: float) -> float:
            return load_const

    elif name == "speed_step":
        t_step = 0.5 * t_end

        def frequency(t: float) -> float:
            return 0.2 * f_nom if t < t_step else 0.5 * f_nom

        def load_torque(t: float) -> float:
            return load_const

    elif name == "load_step":
        t_ramp = max(0.4 * t_end, env.sim.dt)
        t_load = 0.7 * t_end
        f_target = 0.4 * f_nom
        load_value = load_const if load_const != 0.0 else 0.5

        def frequency(t: float) -> float:
            if t >= t_ramp:
                return f_target
            return f_target * (t / t_ramp)

        def load_torque(t: float) -> float:
            return load_value if t >= t_load else 0.0

    else:
        raise ValueError(f"Unknown scenario '{name}'")

    return frequency, load_torque


__all__ = ["get_scenario", "SCENARIOS"]
