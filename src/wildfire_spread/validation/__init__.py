"""Validation package.

Compares simulated burns against reference burns and renders them.
"""

from .metrics import Confusion, StepErrorMetrics, confusion_matrix, same_history, step_error_metrics
from .visualisation.grid_viz import BurnStateVisualizer

__all__ = [
    "BurnStateVisualizer",
    "Confusion",
    "StepErrorMetrics",
    "confusion_matrix",
    "same_history",
    "step_error_metrics",
]
