"""
Observer bench: drive the motor model open-loop and run the sensorless observer on its measurements.
"""

from __future__ import annotations

import json
import math
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict

import numpy as np
from tqdm import tqdm

# Ensure project root on path when executed as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.env import (  # noqa: E402
    EnvConfig,
    SpeedPiParams,
    create_default_env,
    create_machine_parameters,
    create_speed_observer,
)
from metrics.estimation import compute_estimation_metrics  # noqa: E402
from models.induction_motor import InductionMotorModel  # noqa: E402
from models.machine_params import MachineParameters  # noqa: E402
from models.transformations import polar_to_alpha_beta, rotate, wrap_angle  # noqa: E402
from sim.sensors import SensorModel  # noqa: E402
from simulation.scenarios import get_scenario  # noqa: E402


SIGNALS = (
    "t",
    "omega_e_true",
    "omega_e_est",
    "flux_angle_true",
    "flux_angle_est",
    "flux_mag_true",
    "flux_mag_est",
    "speed_error",
    "i_alpha",
    "i_beta",
    "i_d",
    "i_q",
    "u_alpha",
    "u_beta",
    "T_e",
    "load_torque",
)


@dataclass(frozen=True)
class RunResult:
    npz_path: Path
    json_path: Path
    metrics: Dict[str, float]


def vf_voltage(env: EnvConfig, f_e: float) -> float:
    """Phase voltage amplitude from the V/f law with boost."""
    return min(env.vf.k_vf * abs(f_e) + env.vf.u_boost, env.vf.u_max)


def simulate(env_config: EnvConfig | None = None, progress: bool = True) -> Dict[str, np.ndarray]:
    """
    Run plant, sensors and observer for t_end / dt samples.

    The observer sees the voltage applied during a sample together with the
    currents measured at its end.
    """
    if env_config is None:
        env_config = create_default_env()
    dt = env_config.sim.dt
    n_steps = int(round(env_config.sim.t_end / dt))

    params = create_machine_parameters(env_config.motor, dt)
    observer = create_speed_observer(env_config.observer, dt)
    motor = InductionMotorModel(env_config.motor)
    sensors = SensorModel(env_config.sensors)
    frequency, load_torque = get_scenario(env_config.sim.scenario_name, env_config)

    results: Dict[str, list] = {key: [] for key in SIGNALS}
    theta = 0.0
    for k in tqdm(range(n_steps), desc="Observer", leave=False, disable=not progress):
        t = k * dt
        f_e = frequency(t)
        t_load = load_torque(t)
        u_alpha, u_beta = polar_to_alpha_beta(vf_voltage(env_config, f_e), theta)
        theta = wrap_angle(theta + 2.0 * math.pi * f_e * dt)

        _, i_alpha, i_beta, torque_e, _ = motor.step(u_alpha, u_beta, t_load, dt)
        meas = sensors.measure(i_alpha, i_beta, u_alpha, u_beta)
        omega_est, angle_est, flux_est = observer.compute(
            params, meas.u_alpha, meas.u_beta, meas.i_alpha, meas.i_beta
        )
        flux_true, angle_true = motor.rotor_flux
        # measured current in the estimated rotor flux frame
        i_d, i_q = rotate(meas.i_alpha, meas.i_beta, angle_est)

        results["t"].append((k + 1) * dt)
        results["omega_e_true"].append(motor.omega_e)
        results["omega_e_est"].append(omega_est)
        results["flux_angle_true"].append(angle_true)
        results["flux_angle_est"].append(angle_est)
        results["flux_mag_true"].append(flux_true)
        results["flux_mag_est"].append(flux_est)
        results["speed_error"].append(observer.speed_error)
        results["i_alpha"].append(meas.i_alpha)
        results["i_beta"].append(meas.i_beta)
        results["i_d"].append(i_d)
        results["i_q"].append(i_q)
        results["u_alpha"].append(meas.u_alpha)
        results["u_beta"].append(meas.u_beta)
        results["T_e"].append(torque_e)
        results["load_torque"].append(t_load)

    return {key: np.asarray(val, dtype=float) for key, val in results.items()}


def replay(samples: np.ndarray, params: MachineParameters, gains: SpeedPiParams) -> np.ndarray:
    """
    Run a recorded measurement sequence through a freshly built observer.

    Args:
        samples: array (N, 4) of [u_alpha, u_beta, i_alpha, i_beta] per sample.
        params: initialised machine parameters; params.dt is the sampling interval.
        gains: speed PI gains and limits.

    Returns:
        array (N, 3) of [omega_e, flux_angle, flux_magnitude] per sample.
    """
    data = np.asarray(samples, dtype=float)
    if data.ndim != 2 or data.shape[1] != 4:
        raise ValueError(f"samples must have shape (N, 4), got {data.shape}")
    observer = create_speed_observer(gains, params.dt)
    out = np.empty((data.shape[0], 3), dtype=float)
    for k, (u_alpha, u_beta, i_alpha, i_beta) in enumerate(data):
        out[k] = observer.compute(params, float(u_alpha), float(u_beta), float(i_alpha), float(i_beta))
    return out


def _next_data_path(results_dir: Path, prefix: str) -> Path:
    """
    Generate sequential data file path: <prefix>_1.npz, <prefix>_2.npz, ...
    """
    idx = 1
    while True:
        candidate = results_dir / f"{prefix}_{idx}.npz"
        if not candidate.exists():
            return candidate
        idx += 1


def save_results(
    results: Dict[str, np.ndarray],
    env_config: EnvConfig,
    metrics: Dict[str, float],
    results_dir: str | Path = "outputs/results",
) -> tuple[Path, Path]:
    save_dir = Path(results_dir)
    save_dir.mkdir(parents=True, exist_ok=True)
    npz_path = _next_data_path(save_dir, env_config.sim.save_prefix)
    config = asdict(env_config)
    meta_bytes = np.array(json.dumps(config).encode("utf-8"), dtype=np.bytes_)
    np.savez(npz_path, **results, meta=meta_bytes)

    json_path = npz_path.with_suffix(".json")
    summary = {
        "config": config,
        "metrics": metrics,
        "npz_path": str(npz_path),
        "n_samples": int(results["t"].size),
    }
    with json_path.open("w", encoding="utf-8") as handle:
        json.dump(summary, handle, indent=2)
    return npz_path, json_path


def run_observer(
    env_config: EnvConfig | None = None,
    results_dir: str | Path = "outputs/results",
    progress: bool = True,
) -> RunResult:
    if env_config is None:
        env_config = create_default_env()
    results = simulate(env_config, progress=progress)
    metrics = compute_estimation_metrics(
        results["t"],
        results["omega_e_true"],
        results["omega_e_est"],
        results["flux_angle_true"],
        results["flux_angle_est"],
        results["flux_mag_true"],
        results["flux_mag_est"],
        settle_time=0.2 * env_config.sim.t_end,
    )
    npz_path, json_path = save_results(results, env_config, metrics, results_dir)
    return RunResult(npz_path=npz_path, json_path=json_path, metrics=metrics)


__all__ = ["RunResult", "simulate", "replay", "save_results", "run_observer", "vf_voltage", "SIGNALS"]


if __name__ == "__main__":
    result = run_observer()
    print(f"Saved results to {result.npz_path}")
