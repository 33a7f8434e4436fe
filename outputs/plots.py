"""
Графики по результатам стенда наблюдателя, сохранённым в NPZ.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from metrics.estimation import wrap_angle_error  # noqa: E402


def apply_style() -> None:
    plt.style.use("seaborn-v0_8-whitegrid")
    plt.rcParams.update(
        {
            "figure.figsize": (10, 6),
            "axes.grid": True,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "grid.alpha": 0.6,
        }
    )


def _load_meta(data: np.lib.npyio.NpzFile) -> dict:
    if "meta" not in data.files:
        return {}
    meta_raw = data["meta"]
    meta_bytes = meta_raw.item() if meta_raw.shape == () else meta_raw
    if isinstance(meta_bytes, bytes):
        meta_str = meta_bytes.decode("utf-8", errors="ignore")
    else:
        meta_str = str(meta_bytes)
    try:
        return json.loads(meta_str)
    except json.JSONDecodeError:
        return {}


def _format_meta(meta: dict) -> str:
    if not meta:
        return ""
    sim = meta.get("sim", {})
    observer = meta.get("observer", {})
    parts = [
        f"scenario: {sim.get('scenario_name', '?')}",
        f"t_end: {sim.get('t_end', '?')} s",
        f"dt: {sim.get('dt', '?')}",
        f"kp: {observer.get('kp', '?')}",
        f"ki: {observer.get('ki', '?')}",
    ]
    return "\n".join(parts)


def _annotate(ax, text: str) -> None:
    if not text:
        return
    ax.text(
        0.02,
        0.98,
        text,
        transform=ax.transAxes,
        ha="left",
        va="top",
        fontsize=9,
        bbox={"facecolor": "white", "alpha": 0.7, "edgecolor": "none"},
    )


def _save(fig, path: Path) -> Path:
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


def plot_run(result_path: str | Path, save_dir: str | Path = "outputs/figures") -> List[Path]:
    """Build speed, flux magnitude and flux angle error figures; return the PNG paths."""
    apply_style()
    result_path = Path(result_path)
    data = np.load(result_path)
    meta = _format_meta(_load_meta(data))
    stem = result_path.stem

    t = data["t"]
    save_dir_path = Path(save_dir)
    save_dir_path.mkdir(parents=True, exist_ok=True)
    saved: List[Path] = []

    # Speed
    fig, ax = plt.subplots()
    ax.plot(t, data["omega_e_true"], label="omega_e (model)")
    ax.plot(t, data["omega_e_est"], label="omega_e (observer)", linestyle="--")
    ax.set_xlabel("t, s")
    ax.set_ylabel("Electrical speed, rad/s")
    ax.legend()
    _annotate(ax, meta)
    saved.append(_save(fig, save_dir_path / f"{stem}_speed.png"))

    # Flux magnitude
    fig, ax = plt.subplots()
    ax.plot(t, data["flux_mag_true"], label="|psi_r| (model)")
    ax.plot(t, data["flux_mag_est"], label="|psi_r| (observer)", linestyle="--")
    ax.set_xlabel("t, s")
    ax.set_ylabel("Rotor flux, Wb")
    ax.legend()
    _annotate(ax, meta)
    saved.append(_save(fig, save_dir_path / f"{stem}_flux.png"))

    # Flux angle error
    fig, ax = plt.subplots()
    angle_err = wrap_angle_error(data["flux_angle_true"], data["flux_angle_est"])
    ax.plot(t, np.degrees(angle_err), label="angle error")
    ax.set_xlabel("t, s")
    ax.set_ylabel("Flux angle error, deg")
    ax.legend()
    _annotate(ax, meta)
    saved.append(_save(fig, save_dir_path / f"{stem}_angle_error.png"))

    return saved


__all__ = ["plot_run", "apply_style"]
