"""Visualisation helpers for validation.

All visualisation functions operate on 2D numpy arrays (rows x cols).
"""

from .grid_viz import BurnStateVisualizer

__all__ = ["BurnStateVisualizer"]
