"""
Утилита командной строки для запуска стенда наблюдателя скорости и потока.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

# ensure project root importable when run as a script
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.env import EnvConfig, create_default_env  # noqa: E402
from sim.sensors import SensorChannelConfig, SensorConfig  # noqa: E402
from simulation.run_observer import RunResult, run_observer  # noqa: E402
from simulation.scenarios import SCENARIOS  # noqa: E402


def build_env_from_args(args: argparse.Namespace) -> EnvConfig:
    default_env = create_default_env()
    sim = replace(
        default_env.sim,
        t_end=args.t_end,
        dt=args.dt,
        scenario_name=args.scenario,
        save_prefix=args.save_prefix,
        load_torque=args.load_torque,
    )
    observer = replace(
        default_env.observer,
        kp=args.kp,
        ki=args.ki,
        omega_min=-args.omega_max,
        omega_max=args.omega_max,
    )
    sensors = SensorConfig(
        currents=SensorChannelConfig(sigma=args.current_noise),
        voltages=SensorChannelConfig(sigma=args.voltage_noise),
        seed=args.seed,
    )
    return replace(default_env, sim=sim, observer=observer, sensors=sensors)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = create_default_env()
    parser = argparse.ArgumentParser(description="Run the sensorless speed and rotor flux observer bench")
    parser.add_argument("--scenario", choices=SCENARIOS, default=defaults.sim.scenario_name, help="scenario name")
    parser.add_argument("--t-end", type=float, default=defaults.sim.t_end, help="simulation time (s)")
    parser.add_argument("--dt", type=float, default=defaults.sim.dt, help="observer sampling interval (s)")
    parser.add_argument("--save-prefix", default=defaults.sim.save_prefix, help="results filename prefix")
    parser.add_argument("--load-torque", type=float, default=defaults.sim.load_torque, help="load torque (Nm)")
    parser.add_argument("--kp", type=float, default=defaults.observer.kp, help="speed PI proportional gain")
    parser.add_argument("--ki", type=float, default=defaults.observer.ki, help="speed PI integral gain")
    parser.add_argument(
        "--omega-max",
        type=float,
        default=defaults.observer.omega_max,
        help="speed estimate limit (electrical rad/s)",
    )
    parser.add_argument("--current-noise", type=float, default=0.0, help="current sensor noise sigma (A)")
    parser.add_argument("--voltage-noise", type=float, default=0.0, help="voltage sensor noise sigma (V)")
    parser.add_argument("--seed", type=int, default=None, help="sensor noise seed")
    parser.add_argument("--results-dir", default="outputs/results", help="directory for npz/json results")
    parser.add_argument("--plot", dest="plot", action="store_true", help="generate plots after run")
    parser.add_argument("--no-plot", dest="plot", action="store_false", help="skip plotting")
    parser.set_defaults(plot=False)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> RunResult:
    args = parse_args(argv)
    env_cfg = build_env_from_args(args)
    result = run_observer(env_cfg, results_dir=args.results_dir)
    print(f"Saved results to {result.npz_path}")
    for key, value in result.metrics.items():
        print(f"  {key}: {value:.6g}")
    if args.plot:
        from outputs.plots import plot_run

        figures = plot_run(result.npz_path, save_dir=Path(args.results_dir).parent / "figures")
        for path in figures:
            print(f"Saved figure {path}")
    return result


def cli(argv: list[str] | None = None) -> int:
    """Console-script entry point; returns the process exit status."""
    main(argv)
    return 0


if __name__ == "__main__":
    sys.exit(cli())
