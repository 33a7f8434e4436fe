"""
Наблюдатель потока и ЭДС ротора (токовая модель) в неподвижной системе alpha-beta.
"""

from __future__ import annotations

from typing import Tuple

from models.machine_params import MachineParameters


class RotorFluxObserver:
    """
    Current-model rotor flux observer.

    Rotor back-EMF is the flux derivative of the current model

        e_alpha = (Lm * i_alpha - psi_alpha) / Tr - omega_e * psi_beta
        e_beta  = (Lm * i_beta  - psi_beta)  / Tr + omega_e * psi_alpha

    and the flux is its trapezoidal integral. Both cross terms use the flux of
    the previous call, so the result does not depend on the axis order.
    The integral is only correct when compute() runs every params.dt seconds.
    """

    def __init__(self) -> None:
        self.i_alpha = 0.0
        self.i_beta = 0.0
        self.omega_e = 0.0
        self.prev_e_alpha = 0.0
        self.prev_e_beta = 0.0
        self.prev_flux_alpha = 0.0
        self.prev_flux_beta = 0.0
        self.flux_alpha = 0.0
        self.flux_beta = 0.0
        self.e_alpha = 0.0
        self.e_beta = 0.0

    def compute(
        self,
        params: MachineParameters,
        i_alpha: float,
        i_beta: float,
        omega_e: float,
    ) -> Tuple[float, float]:
        self.i_alpha = i_alpha
        self.i_beta = i_beta
        self.omega_e = omega_e

        psi_alpha = self.prev_flux_alpha
        psi_beta = self.prev_flux_beta
        half_dt = 0.5 * params.dt

        self.e_alpha = (i_alpha * params.Lm - psi_alpha) * params.inv_tr - omega_e * psi_beta
        self.e_beta = (i_beta * params.Lm - psi_beta) * params.inv_tr + omega_e * psi_alpha

        self.flux_alpha = psi_alpha + half_dt * (self.e_alpha + self.prev_e_alpha)
        self.flux_beta = psi_beta + half_dt * (self.e_beta + self.prev_e_beta)

        self.prev_e_alpha = self.e_alpha
        self.prev_e_beta = self.e_beta
        self.prev_flux_alpha = self.flux_alpha
        self.prev_flux_beta = self.flux_beta
        return self.flux_alpha, self.flux_beta


__all__ = ["RotorFluxObserver"]
