"""
Дискретные регуляторы P / PI / PD / PID с ограничением выхода.

Интегральное и дифференциальное звенья работают от выхода пропорционального
звена (последовательная форма): I интегрирует ki * p по трапециям,
D = kd * (p - p_prev) / dt.
"""

from __future__ import annotations

from typing import Literal, Union


def clamp(value: float, lo: float, hi: float) -> float:
    if value > hi:
        return hi
    if value < lo:
        return lo
    return value


def _check_limits(out_min: float, out_max: float) -> None:
    if out_min > out_max:
        raise ValueError(f"out_min ({out_min}) must not exceed out_max ({out_max})")


def _check_dt(dt: float) -> None:
    if dt <= 0.0:
        raise ValueError(f"dt must be positive, got {dt}")


class PController:
    def __init__(self, kp: float, out_min: float, out_max: float):
        _check_limits(out_min, out_max)
        self.kp = float(kp)
        self.out_min = float(out_min)
        self.out_max = float(out_max)
        self.input = 0.0
        self.output = 0.0

    def reset(self) -> None:
        self.input = 0.0
        self.output = 0.0

    def compute(self, value: float) -> float:
        self.input = float(value)
        self.output = clamp(self.input * self.kp, self.out_min, self.out_max)
        return self.output


class PIController:
    """
    PI-регулятор с интегрированием по трапециям.

    Ограничение действует только на выход; интегратор не останавливается при
    насыщении.
    """

    def __init__(self, kp: float, ki: float, dt: float, out_min: float, out_max: float):
        _check_dt(dt)
        _check_limits(out_min, out_max)
        self.kp = float(kp)
        self.ki = float(ki)
        self.dt = float(dt)
        self.out_min = float(out_min)
        self.out_max = float(out_max)
        self.input = 0.0
        self.output = 0.0
        self.p_out = 0.0
        self.i_out = 0.0
        self._i_prev_in = 0.0
        self._i_prev_out = 0.0

    def reset(self) -> None:
        self.input = 0.0
        self.output = 0.0
        self.p_out = 0.0
        self.i_out = 0.0
        self._i_prev_in = 0.0
        self._i_prev_out = 0.0

    def compute(self, value: float) -> float:
        self.input = float(value)
        self.p_out = self.input * self.kp
        i_in = self.p_out * self.ki
        self.i_out = self._i_prev_out + 0.5 * self.dt * (i_in + self._i_prev_in)
        self._i_prev_in = i_in
        self._i_prev_out = self.i_out
        self.output = clamp(self.p_out + self.i_out, self.out_min, self.out_max)
        return self.output


class PDController:
    def __init__(self, kp: float, kd: float, dt: float, out_min: float, out_max: float):
        _check_dt(dt)
        _check_limits(out_min, out_max)
        self.kp = float(kp)
        self.kd = float(kd)
        self.dt = float(dt)
        self.out_min = float(out_min)
        self.out_max = float(out_max)
        self.input = 0.0
        self.output = 0.0
        self.p_out = 0.0
        self.d_out = 0.0
        self._d_prev_in = 0.0

    def reset(self) -> None:
        self.input = 0.0
        self.output = 0.0
        self.p_out = 0.0
        self.d_out = 0.0
        self._d_prev_in = 0.0

    def compute(self, value: float) -> float:
        self.input = float(value)
        self.p_out = self.input * self.kp
        self.d_out = self.kd * (self.p_out - self._d_prev_in) / self.dt
        self._d_prev_in = self.p_out
        self.output = clamp(self.p_out + self.d_out, self.out_min, self.out_max)
        return self.output


class PIDController:
    def __init__(
        self,
        kp: float,
        ki: float,
        kd: float,
        dt: float,
        out_min: float,
        out_max: float,
    ):
        _check_dt(dt)
        _check_limits(out_min, out_max)
        self.kp = float(kp)
        self.ki = float(ki)
        self.kd = float(kd)
        self.dt = float(dt)
        self.out_min = float(out_min)
        self.out_max = float(out_max)
        self.input = 0.0
        self.output = 0.0
        self.p_out = 0.0
        self.i_out = 0.0
        self.d_out = 0.0
        self._i_prev_in = 0.0
        self._i_prev_out = 0.0
        self._d_prev_in = 0.0

    def reset(self) -> None:
        self.input = 0.0
        self.output = 0.0
        self.p_out = 0.0
        self.i_out = 0.0
        self.d_out = 0.0
        self._i_prev_in = 0.0
        self._i_prev_out = 0.0
        self._d_prev_in = 0.0

    def compute(self, value: float) -> float:
        self.input = float(value)
        self.p_out = self.input * self.kp

        i_in = self.p_out * self.ki
        self.i_out = self._i_prev_out + 0.5 * self.dt * (i_in + self._i_prev_in)
        self._i_prev_in = i_in
        self._i_prev_out = self.i_out

        self.d_out = self.kd * (self.p_out - self._d_prev_in) / self.dt
        self._d_prev_in = self.p_out

        self.output = clamp(self.p_out + self.i_out + self.d_out, self.out_min, self.out_max)
        return self.output


Controller = Union[PController, PIController, PDController, PIDController]


def make_controller(
    kind: Literal["p", "pi", "pd", "pid"],
    kp: float,
    out_min: float,
    out_max: float,
    ki: float = 0.0,
    kd: float = 0.0,
    dt: float = 1.0,
) -> Controller:
    """Build one of the four controller kinds by name."""
    kind = kind.lower()  # type: ignore[assignment]
    if kind == "p":
        return PController(kp, out_min, out_max)
    if kind == "pi":
        return PIController(kp, ki, dt, out_min, out_max)
    if kind == "pd":
        return PDController(kp, kd, dt, out_min, out_max)
    if kind == "pid":
        return PIDController(kp, ki, kd, dt, out_min, out_max)
    raise ValueError(f"Unknown controller kind '{kind}'")


__all__ = [
    "clamp",
    "PController",
    "PIController",
    "PDController",
    "PIDController",
    "Controller",
    "make_controller",
]
