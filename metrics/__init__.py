from .estimation import compute_estimation_metrics, wrap_angle_error

__all__ = [
    "compute_estimation_metrics",
    "wrap_angle_error",
]
