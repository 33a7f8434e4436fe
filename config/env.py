"""
Конфигурация наблюдателя потока и скорости асинхронного двигателя.

Все настраиваемые параметры собраны сверху с русскими комментариями.
Глобального экземпляра конфигурации нет: каждый потребитель вызывает
create_default_env() и получает собственное значение.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from control.pid import PIController
from models.machine_params import MachineParameters
from observers.speed_obs import SpeedFluxObserver
from sim.sensors import SensorConfig

# -------- Параметры симуляции ----------
SIM_T_END = 0.5            # время моделирования, с
SIM_DT = 1e-4              # период дискретизации наблюдателя, с
SIM_SCENARIO = "vf_ramp"   # сценарий: dc_magnetize / vf_ramp / speed_step / load_step
SIM_SAVE_PREFIX = "observer"  # префикс для файла результатов
SIM_LOAD_TORQUE = 0.0      # постоянный момент нагрузки, Нм
# ---------------------------------------

# ------ Параметры схемы замещения двигателя -------
MOTOR_RS = 1.0             # сопротивление статора, Ом
MOTOR_RR = 1.0             # приведённое сопротивление ротора, Ом
MOTOR_LS = 0.1             # полная индуктивность статора, Гн
MOTOR_LR = 0.1             # полная индуктивность ротора, Гн
MOTOR_LM = 0.095           # индуктивность намагничивания, Гн
MOTOR_J = 0.01             # инерция, кг*м^2
MOTOR_B = 1e-3             # вязкое трение, Нм*с/рад
MOTOR_POLE_PAIRS = 2       # число пар полюсов
# --------------------------------------------------

# ------ ПИ-регулятор контура оценки скорости -------
OBSERVER_KP = 0.1          # пропорциональный коэффициент (kp * i_d * |psi_r| < 1)
OBSERVER_KI = 500.0        # интегральный коэффициент (последовательная форма)
OBSERVER_OMEGA_MAX = 2.0 * math.pi * 50.0  # ограничение оценки скорости, рад/с (эл.)
# ---------------------------------------------------

# ------ Разомкнутое V/f питание для стенда -------
VF_U_NOM = 160.0           # фазное напряжение (амплитуда) при f_nom, В
VF_F_NOM = 50.0            # номинальная частота, Гц
VF_U_BOOST = 5.0           # вольтдобавка на низких частотах, В
VF_K = VF_U_NOM / VF_F_NOM
# -------------------------------------------------


# --------- Структуры данных ------------
@dataclass(frozen=True)
class MotorConstants:
    Rs: float
    Rr: float
    Ls: float
    Lr: float
    Lm: float
    J: float
    B: float
    p: int


@dataclass(frozen=True)
class SpeedPiParams:
    kp: float
    ki: float
    omega_min: float
    omega_max: float


@dataclass(frozen=True)
class VfParams:
    k_vf: float
    u_boost: float
    f_nom: float
    u_max: float


@dataclass(frozen=True)
class SimulationParams:
    t_end: float
    dt: float
    scenario_name: str
    save_prefix: str
    load_torque: float = 0.0


@dataclass(frozen=True)
class EnvConfig:
    motor: MotorConstants
    observer: SpeedPiParams
    vf: VfParams
    sim: SimulationParams
    sensors: SensorConfig = field(default_factory=SensorConfig)
# ---------------------------------------


def create_machine_parameters(motor: MotorConstants, dt: float) -> MachineParameters:
    """
    Собрать MachineParameters наблюдателя из констант двигателя и выполнить init().
    """
    params = MachineParameters(
        dt=dt,
        pole_pairs=motor.p,
        Rs=motor.Rs,
        Rr=motor.Rr,
        Ls=motor.Ls,
        Lr=motor.Lr,
        Lm=motor.Lm,
    )
    params.init()
    return params


def create_speed_observer(gains: SpeedPiParams, dt: float) -> SpeedFluxObserver:
    """
    Создать наблюдатель скорости и потока с собственным ПИ-регулятором.
    """
    speed_pi = PIController(
        kp=gains.kp,
        ki=gains.ki,
        dt=dt,
        out_min=gains.omega_min,
        out_max=gains.omega_max,
    )
    return SpeedFluxObserver(speed_pi)


def create_default_env() -> EnvConfig:
    return EnvConfig(
        motor=MotorConstants(
            Rs=MOTOR_RS,
            Rr=MOTOR_RR,
            Ls=MOTOR_LS,
            Lr=MOTOR_LR,
            Lm=MOTOR_LM,
            J=MOTOR_J,
            B=MOTOR_B,
            p=MOTOR_POLE_PAIRS,
        ),
        observer=SpeedPiParams(
            kp=OBSERVER_KP,
            ki=OBSERVER_KI,
            omega_min=-OBSERVER_OMEGA_MAX,
            omega_max=OBSERVER_OMEGA_MAX,
        ),
        vf=VfParams(
            k_vf=VF_K,
            u_boost=VF_U_BOOST,
            f_nom=VF_F_NOM,
            u_max=VF_U_NOM,
        ),
        sim=SimulationParams(
            t_end=SIM_T_END,
            dt=SIM_DT,
            scenario_name=SIM_SCENARIO,
            save_prefix=SIM_SAVE_PREFIX,
            load_torque=SIM_LOAD_TORQUE,
        ),
        sensors=SensorConfig(),
    )


__all__ = [
    "MotorConstants",
    "SpeedPiParams",
    "VfParams",
    "SimulationParams",
    "EnvConfig",
    "create_default_env",
    "create_machine_parameters",
    "create_speed_observer",
    "SIM_T_END",
    "SIM_DT",
    "VF_K",
]
