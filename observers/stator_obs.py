"""
Наблюдатель ЭДС статора (модель напряжения) в неподвижной системе alpha-beta.
"""

from __future__ import annotations

from typing import Tuple

from models.machine_params import MachineParameters


class StatorBackEmfObserver:
    """
    Estimates the rotor-referred back-EMF from measured stator voltage and current.

        e = (u - Rs * i - sigma_Ls * di/dt) * Lr / Lm

    di/dt is a one-step backward difference, so the output carries the full
    sampling noise of the current measurement.
    """

    def __init__(self) -> None:
        self.i_alpha = 0.0
        self.i_beta = 0.0
        self.u_alpha = 0.0
        self.u_beta = 0.0
        self.prev_i_alpha = 0.0
        self.prev_i_beta = 0.0
        self.e_alpha = 0.0
        self.e_beta = 0.0

    def compute(
        self,
        params: MachineParameters,
        i_alpha: float,
        i_beta: float,
        u_alpha: float,
        u_beta: float,
    ) -> Tuple[float, float]:
        self.i_alpha = i_alpha
        self.i_beta = i_beta
        self.u_alpha = u_alpha
        self.u_beta = u_beta

        di_alpha = (i_alpha - self.prev_i_alpha) / params.dt
        self.prev_i_alpha = i_alpha
        di_beta = (i_beta - self.prev_i_beta) / params.dt
        self.prev_i_beta = i_beta

        self.e_alpha = (u_alpha - params.Rs * i_alpha - params.sigma_ls * di_alpha) * params.inv_kr
        self.e_beta = (u_beta - params.Rs * i_beta - params.sigma_ls * di_beta) * params.inv_kr
        return self.e_alpha, self.e_beta


__all__ = ["StatorBackEmfObserver"]
