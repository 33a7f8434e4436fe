"""
Параметры асинхронного двигателя для наблюдателей потока и скорости.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


class MachineParameterError(ValueError):
    """Raised when motor constants cannot produce valid observer coefficients."""


@dataclass
class MachineParameters:
    """
    Physical constants plus the coupling coefficients derived from them.

    The derived fields (inv_tr, inv_kr, sigma_ls) are only valid after init()
    has run on the current constants. Changing a constant afterwards does not
    refresh them; call init() again.

    Attributes:
        dt: sampling interval of the observers, s.
        pole_pairs: number of pole pairs.
        Rs, Rr: stator and rotor resistance, Ohm.
        Ls, Lr, Lm: stator, rotor and magnetizing inductance, H.
        inv_tr: Rr / Lr, inverse rotor time constant, 1/s.
        inv_kr: Lr / Lm, inverse rotor coupling factor.
        sigma_ls: (1 - Lm^2 / (Ls * Lr)) * Ls, stator leakage inductance, H.
    """

    dt: float = 1.0
    pole_pairs: int = 0
    Rs: float = 0.0
    Rr: float = 0.0
    Ls: float = 0.0
    Lr: float = 0.0
    Lm: float = 0.0
    inv_tr: float = field(default=0.0, init=False)
    inv_kr: float = field(default=0.0, init=False)
    sigma_ls: float = field(default=0.0, init=False)

    def validate(self) -> None:
        values = {
            "dt": self.dt,
            "Rs": self.Rs,
            "Rr": self.Rr,
            "Ls": self.Ls,
            "Lr": self.Lr,
            "Lm": self.Lm,
        }
        for name, value in values.items():
            if not math.isfinite(value):
                raise MachineParameterError(f"{name} must be finite, got {value!r}")
        if self.dt <= 0.0:
            raise MachineParameterError(f"dt must be positive, got {self.dt!r}")
        if self.pole_pairs <= 0:
            raise MachineParameterError(f"pole_pairs must be positive, got {self.pole_pairs!r}")
        if self.Rr <= 0.0:
            raise MachineParameterError(f"Rr must be positive, got {self.Rr!r}")
        if self.Rs < 0.0:
            raise MachineParameterError(f"Rs must be non-negative, got {self.Rs!r}")
        for name in ("Ls", "Lr", "Lm"):
            if values[name] == 0.0:
                raise MachineParameterError(f"{name} must be non-zero")
        # Ls*Lr <= Lm^2 gives zero or negative leakage
        if self.Ls * self.Lr <= self.Lm * self.Lm:
            raise MachineParameterError(
                f"Ls*Lr must exceed Lm^2: Ls*Lr={self.Ls * self.Lr:.6g} Lm^2={self.Lm * self.Lm:.6g}"
            )

    def init(self) -> None:
        """Validate the constants and recompute the derived coefficients."""
        self.validate()
        self.inv_tr = self.Rr / self.Lr
        self.inv_kr = self.Lr / self.Lm
        self.sigma_ls = (1.0 - self.Lm * self.Lm / (self.Ls * self.Lr)) * self.Ls

    @property
    def rotor_time_constant(self) -> float:
        return self.Lr / self.Rr


__all__ = ["MachineParameters", "MachineParameterError"]
