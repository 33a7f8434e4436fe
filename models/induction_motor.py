"""
Модель короткозамкнутого асинхронного двигателя в неподвижной системе alpha-beta.

Используется стендом как «истинный» объект: даёт измеряемые токи и эталонные
поток ротора и скорость для проверки наблюдателя.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from config.env import MotorConstants


@dataclass
class MotorState:
    psi_s_alpha: float = 0.0
    psi_s_beta: float = 0.0
    psi_r_alpha: float = 0.0
    psi_r_beta: float = 0.0
    omega_m: float = 0.0


class InductionMotorModel:
    """alpha-beta модель асинхронного двигателя с шагом Эйлера."""

    def __init__(self, params: MotorConstants, state: MotorState | None = None):
        self.params = params
        self.state = state if state is not None else MotorState()
        self.denom = params.Ls * params.Lr - params.Lm ** 2
        if self.denom <= 0.0:
            raise ValueError("Ls*Lr must exceed Lm^2")

    def currents(self, state: MotorState | None = None) -> Tuple[float, float, float, float]:
        """
        Рассчитать токи статора и ротора по потокосцеплениям.
        """
        s = self.state if state is None else state
        p = self.params
        i_s_alpha = (s.psi_s_alpha * p.Lr - s.psi_r_alpha * p.Lm) / self.denom
        i_s_beta = (s.psi_s_beta * p.Lr - s.psi_r_beta * p.Lm) / self.denom
        i_r_alpha = (s.psi_r_alpha * p.Ls - s.psi_s_alpha * p.Lm) / self.denom
        i_r_beta = (s.psi_r_beta * p.Ls - s.psi_s_beta * p.Lm) / self.denom
        return i_s_alpha, i_s_beta, i_r_alpha, i_r_beta

    @property
    def omega_e(self) -> float:
        """Электрическая скорость ротора, рад/с."""
        return self.params.p * self.state.omega_m

    @property
    def rotor_flux(self) -> Tuple[float, float]:
        """Модуль и угол потокосцепления ротора."""
        s = self.state
        return math.hypot(s.psi_r_alpha, s.psi_r_beta), math.atan2(s.psi_r_beta, s.psi_r_alpha)

    def step(
        self,
        u_alpha: float,
        u_beta: float,
        load_torque: float,
        dt: float,
    ) -> tuple[MotorState, float, float, float, float]:
        """
        Обновить состояние двигателя на один шаг методом прямого Эйлера.

        Args:
            u_alpha, u_beta: напряжение статора в неподвижной системе, В.
            load_torque: момент нагрузки, Нм.
            dt: шаг моделирования, с.

        Returns:
            state: обновлённое состояние MotorState.
            i_alpha, i_beta: токи статора после шага, А.
            T_e: электромагнитный момент на начало шага, Нм.
            omega_m: механическая скорость после шага, рад/с.
        """
        p = self.params
        state = self.state

        omega_r = p.p * state.omega_m
        i_sa, i_sb, i_ra, i_rb = self.currents(state)

        dpsi_sa = u_alpha - p.Rs * i_sa
        dpsi_sb = u_beta - p.Rs * i_sb
        dpsi_ra = -p.Rr * i_ra - omega_r * state.psi_r_beta
        dpsi_rb = -p.Rr * i_rb + omega_r * state.psi_r_alpha

        torque_e = 1.5 * p.p * (state.psi_s_alpha * i_sb - state.psi_s_beta * i_sa)
        domega_m = (torque_e - load_torque - p.B * state.omega_m) / p.J

        next_state = MotorState(
            psi_s_alpha=state.psi_s_alpha + dt * dpsi_sa,
            psi_s_beta=state.psi_s_beta + dt * dpsi_sb,
            psi_r_alpha=state.psi_r_alpha + dt * dpsi_ra,
            psi_r_beta=state.psi_r_beta + dt * dpsi_rb,
            omega_m=state.omega_m + dt * domega_m,
        )

        self.state = next_state
        i_alpha, i_beta, _, _ = self.currents(next_state)
        return next_state, i_alpha, i_beta, torque_e, next_state.omega_m


__all__ = ["MotorState", "InductionMotorModel"]
