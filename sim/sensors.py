from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Tuple

import numpy as np

from models.transformations import abc_to_alpha_beta, alpha_beta_to_abc

Phases = Tuple[float, float, float]


@dataclass(frozen=True)
class SensorChannelConfig:
    """Noise/quantization/delay settings for a single sensor channel."""

    sigma: float = 0.0
    quant: float = 0.0
    delay_steps: int = 0


@dataclass(frozen=True)
class SensorConfig:
    """Measurement chain for the observer inputs (phase currents and voltages)."""

    currents: SensorChannelConfig = field(default_factory=SensorChannelConfig)
    voltages: SensorChannelConfig = field(default_factory=SensorChannelConfig)
    seed: int | None = None


@dataclass(frozen=True)
class SensorReading:
    """Measured phase signals and their alpha-beta projection."""

    i_abc: Phases
    u_abc: Phases
    i_alpha: float
    i_beta: float
    u_alpha: float
    u_beta: float


class _DelayLine:
    def __init__(self, steps: int) -> None:
        if steps < 0:
            raise ValueError("delay_steps must be non-negative")
        initial = (0.0, 0.0, 0.0)
        self._queue: Deque[Phases] = deque([initial] * (steps + 1), maxlen=steps + 1)

    def push(self, value: Phases) -> Phases:
        self._queue.append(value)
        return self._queue[0]


class SensorModel:
    """
    Applies noise, quantization, and delay per phase.

    True alpha-beta quantities are expanded to the three phases, each phase
    sensor is disturbed independently, and the measured phases are projected
    back with the Clarke transform for the observer.
    """

    def __init__(self, config: SensorConfig) -> None:
        self._config = config
        self._rng = np.random.default_rng(config.seed)
        self._i_delay = _DelayLine(config.currents.delay_steps)
        self._u_delay = _DelayLine(config.voltages.delay_steps)

    def measure(self, i_alpha: float, i_beta: float, u_alpha: float, u_beta: float) -> SensorReading:
        cur = self._config.currents
        vol = self._config.voltages
        i_meas = self._apply_phases(alpha_beta_to_abc(float(i_alpha), float(i_beta)), cur)
        u_meas = self._apply_phases(alpha_beta_to_abc(float(u_alpha), float(u_beta)), vol)

        i_abc = self._i_delay.push(i_meas)
        u_abc = self._u_delay.push(u_meas)
        i_out = abc_to_alpha_beta(*i_abc)
        u_out = abc_to_alpha_beta(*u_abc)
        return SensorReading(
            i_abc=i_abc,
            u_abc=u_abc,
            i_alpha=i_out[0],
            i_beta=i_out[1],
            u_alpha=u_out[0],
            u_beta=u_out[1],
        )

    def _apply_phases(self, values: Phases, cfg: SensorChannelConfig) -> Phases:
        a, b, c = (self._apply_channel(val, cfg) for val in values)
        return a, b, c

    def _apply_channel(self, value: float, cfg: SensorChannelConfig) -> float:
        if cfg.sigma > 0.0:
            value += float(self._rng.normal(0.0, cfg.sigma))
        if cfg.quant > 0.0:
            value = round(value / cfg.quant) * cfg.quant
        return value


__all__ = ["SensorChannelConfig", "SensorConfig", "SensorReading", "SensorModel"]
