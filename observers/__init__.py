from .rotor_obs import RotorFluxObserver
from .speed_obs import SpeedFluxObserver
from .stator_obs import StatorBackEmfObserver

__all__ = ["RotorFluxObserver", "SpeedFluxObserver", "StatorBackEmfObserver"]
