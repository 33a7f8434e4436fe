import json
import subprocess
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np
import pytest

from config.env import EnvConfig, create_default_env
from main import cli, main
from outputs.plots import plot_run
from sim.sensors import SensorChannelConfig, SensorConfig, SensorModel
from simulation.run_observer import SIGNALS, run_observer, simulate
from simulation.scenarios import SCENARIOS, get_scenario


def short_env(scenario: str = "vf_ramp", t_end: float = 0.02) -> EnvConfig:
    env = create_default_env()
    sim_override = replace(env.sim, t_end=t_end, dt=1e-4, scenario_name=scenario, save_prefix="pytest_run")
    return replace(env, sim=sim_override)


@pytest.mark.parametrize("scenario", SCENARIOS)
def test_simulate_runs_every_scenario(scenario: str):
    env = short_env(scenario)
    results = simulate(env, progress=False)
    assert set(results) == set(SIGNALS)
    for key in SIGNALS:
        assert results[key].shape == (200,)
        assert np.all(np.isfinite(results[key]))
    assert np.all(np.abs(results["omega_e_est"]) <= env.observer.omega_max)
    assert results["t"][-1] == pytest.approx(env.sim.t_end)


def test_dc_magnetize_builds_rotor_flux():
    env = short_env("dc_magnetize", t_end=0.05)
    results = simulate(env, progress=False)
    assert results["flux_mag_true"][-1] > 0.0
    assert results["flux_mag_est"][-1] > 0.0
    assert np.all(results["u_beta"] == 0.0)
    # estimated flux stays on the alpha axis, so all current is flux-producing
    assert np.allclose(results["i_q"], 0.0, atol=1e-12)
    assert np.allclose(results["i_d"], results["i_alpha"])


def test_simulate_is_deterministic_with_seeded_noise():
    env = short_env()
    sensors = SensorConfig(currents=SensorChannelConfig(sigma=0.01), seed=7)
    env = replace(env, sensors=sensors)
    first = simulate(env, progress=False)
    second = simulate(env, progress=False)
    for key in SIGNALS:
        assert np.array_equal(first[key], second[key])


def test_unknown_scenario_raises():
    with pytest.raises(ValueError):
        get_scenario("no_such_scenario", create_default_env())


def test_sensor_model_delay_and_passthrough():
    clean = SensorModel(SensorConfig())
    reading = clean.measure(1.0, 2.0, 3.0, 4.0)
    assert np.allclose((reading.i_alpha, reading.i_beta, reading.u_alpha, reading.u_beta), (1.0, 2.0, 3.0, 4.0))

    delayed = SensorModel(SensorConfig(currents=SensorChannelConfig(delay_steps=1)))
    first = delayed.measure(1.0, 2.0, 3.0, 4.0)
    second = delayed.measure(5.0, 6.0, 7.0, 8.0)
    assert (first.i_alpha, first.i_beta) == (0.0, 0.0)
    assert np.allclose((first.u_alpha, first.u_beta), (3.0, 4.0))
    assert np.allclose((second.i_alpha, second.i_beta), (1.0, 2.0))

    with pytest.raises(ValueError):
        SensorModel(SensorConfig(voltages=SensorChannelConfig(delay_steps=-1)))


def test_sensor_model_measures_phases():
    reading = SensorModel(SensorConfig()).measure(1.0, 0.0, 2.0, 0.0)
    assert np.allclose(reading.i_abc, (1.0, -0.5, -0.5))
    assert np.allclose(reading.u_abc, (2.0, -1.0, -1.0))

    # quantisation acts on each phase sensor, not on alpha-beta
    quantised = SensorModel(SensorConfig(currents=SensorChannelConfig(quant=1.0)))
    reading = quantised.measure(1.0, 0.0, 0.0, 0.0)
    assert np.allclose(reading.i_abc, (1.0, 0.0, 0.0))
    assert reading.i_alpha == pytest.approx(2.0 / 3.0)
    assert reading.i_beta == pytest.approx(0.0, abs=1e-12)


def test_run_observer_saves_results(tmp_path: Path):
    result = run_observer(short_env(), results_dir=tmp_path / "results", progress=False)

    assert result.npz_path.exists()
    assert result.json_path.exists()
    assert result.npz_path.name == "pytest_run_1.npz"

    data = np.load(result.npz_path)
    for key in ["t", "omega_e_est", "flux_mag_est", "flux_angle_true"]:
        assert key in data
        assert len(data[key]) == 200
    meta = json.loads(data["meta"].item().decode("utf-8"))
    assert meta["sim"]["scenario_name"] == "vf_ramp"

    with result.json_path.open("r", encoding="utf-8") as handle:
        summary = json.load(handle)
    assert "config" in summary
    assert summary["n_samples"] == 200
    assert set(summary["metrics"]) == set(result.metrics)

    second = run_observer(short_env(), results_dir=tmp_path / "results", progress=False)
    assert second.npz_path.name == "pytest_run_2.npz"


def test_plot_run_writes_figures(tmp_path: Path):
    result = run_observer(short_env(), results_dir=tmp_path / "results", progress=False)
    figures = plot_run(result.npz_path, save_dir=tmp_path / "figures")
    assert len(figures) == 3
    for path in figures:
        assert path.exists()
        assert path.suffix == ".png"


def test_main_cli(tmp_path: Path, capsys):
    result = main(
        [
            "--scenario",
            "speed_step",
            "--t-end",
            "0.01",
            "--kp",
            "2.0",
            "--current-noise",
            "0.001",
            "--seed",
            "1",
            "--results-dir",
            str(tmp_path / "results"),
            "--no-plot",
        ]
    )
    assert result.npz_path.exists()
    out = capsys.readouterr().out
    assert "Saved results to" in out
    assert "speed_rmse" in out


def cli_args(results_dir: Path) -> list[str]:
    return ["--t-end", "0.005", "--results-dir", str(results_dir), "--no-plot"]


def test_cli_exits_with_zero_status(tmp_path: Path, capsys):
    # same call the installed console script makes
    with pytest.raises(SystemExit) as excinfo:
        sys.exit(cli(cli_args(tmp_path / "results")))
    assert excinfo.value.code == 0
    assert "Saved results to" in capsys.readouterr().out
    assert (tmp_path / "results" / "observer_1.npz").exists()


def test_console_script_points_at_cli():
    root = Path(__file__).resolve().parents[1]
    text = (root / "pyproject.toml").read_text(encoding="utf-8")
    assert 'im-flux-observer = "main:cli"' in text


def test_main_script_exit_status(tmp_path: Path):
    root = Path(__file__).resolve().parents[1]
    proc = subprocess.run(
        [sys.executable, str(root / "main.py"), *cli_args(tmp_path / "results")],
        capture_output=True,
        text=True,
        cwd=tmp_path,
        timeout=120,
    )
    assert proc.returncode == 0, proc.stderr
    assert "Saved results to" in proc.stdout
    assert "RunResult" not in proc.stderr
