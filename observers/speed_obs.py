"""
Бездатчиковый наблюдатель скорости и потока ротора (MRAS по ЭДС).
"""

from __future__ import annotations

import math
from typing import Tuple

from control.pid import PIController
from models.machine_params import MachineParameters
from observers.rotor_obs import RotorFluxObserver
from observers.stator_obs import StatorBackEmfObserver


class SpeedFluxObserver:
    """
    Closed-loop speed and rotor flux estimator.

    Each sample the stator (voltage model) and rotor (current model) observers
    produce two back-EMF estimates. Their cross product

        err = i_alpha * (Es_beta - Er_beta) - i_beta * (Es_alpha - Er_alpha)

    vanishes at the true rotor speed; a PI controller drives it to zero and its
    clamped output is the electrical speed estimate. The speed fed to the rotor
    observer is always the estimate from the previous sample.

    Args:
        speed_pi: PI controller owned by this observer; its output limits bound
            the speed estimate.
    """

    def __init__(self, speed_pi: PIController) -> None:
        self.stator = StatorBackEmfObserver()
        self.rotor = RotorFluxObserver()
        self.speed_pi = speed_pi

        self.u_alpha = 0.0
        self.u_beta = 0.0
        self.i_alpha = 0.0
        self.i_beta = 0.0

        self.speed_error = 0.0
        self.omega_e = 0.0
        self.flux_angle = 0.0
        self.flux_magnitude = 0.0

    def compute(
        self,
        params: MachineParameters,
        u_alpha: float,
        u_beta: float,
        i_alpha: float,
        i_beta: float,
    ) -> Tuple[float, float, float]:
        """
        Process one sample.

        Returns:
            omega_e: electrical rotor speed estimate, rad/s.
            flux_angle: rotor flux angle, rad in (-pi, pi].
            flux_magnitude: rotor flux magnitude, Wb.
        """
        self.u_alpha = u_alpha
        self.u_beta = u_beta
        self.i_alpha = i_alpha
        self.i_beta = i_beta

        es_alpha, es_beta = self.stator.compute(params, i_alpha, i_beta, u_alpha, u_beta)
        # speed from the previous sample
        flux_alpha, flux_beta = self.rotor.compute(params, i_alpha, i_beta, self.omega_e)
        er_alpha = self.rotor.e_alpha
        er_beta = self.rotor.e_beta

        self.speed_error = i_alpha * (es_beta - er_beta) - i_beta * (es_alpha - er_alpha)
        self.omega_e = self.speed_pi.compute(self.speed_error)

        self.flux_angle = math.atan2(flux_beta, flux_alpha)
        self.flux_magnitude = math.hypot(flux_beta, flux_alpha)
        return self.omega_e, self.flux_angle, self.flux_magnitude

    def mechanical_speed(self, params: MachineParameters) -> float:
        """Mechanical rotor speed estimate, rad/s."""
        return self.omega_e / params.pole_pairs


__all__ = ["SpeedFluxObserver"]
