from .pid import PController, PDController, PIController, PIDController, make_controller

__all__ = ["PController", "PIController", "PDController", "PIDController", "make_controller"]
