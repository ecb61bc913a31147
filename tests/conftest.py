import sys
from pathlib import Path

import matplotlib
import numpy as np
import pytest


# logistic(20) is 1 - 2e-9, so spread is certain under the 0.5 threshold
SATURATING_INTERCEPT = 20.0


def pytest_configure() -> None:
    """Ensure `src/` is on sys.path so tests can import `wildfire_spread.*`.

    This repo uses the common `src/` layout but is not necessarily installed as a package
    in the active environment.
    """

    project_root = Path(__file__).resolve().parents[1]
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    # Figures are only rendered to memory in tests
    matplotlib.use("Agg")


def flat_layers(n_rows, n_cols, vegetation=0, elevation=0.0, wind_direction=0.0, wind_speed=0.0):
    """Layers for a landscape; scalars are broadcast to the whole grid."""
    shape = (n_rows, n_cols)
    return (
        np.broadcast_to(np.asarray(vegetation), shape).astype(int),
        np.broadcast_to(np.asarray(elevation, dtype=float), shape),
        np.broadcast_to(np.asarray(wind_direction, dtype=float), shape),
        np.broadcast_to(np.asarray(wind_speed, dtype=float), shape),
    )


@pytest.fixture
def make_landscape():
    """Factory for landscapes built from uniform or explicit layers."""
    from wildfire_spread.terrain import Landscape

    def _make(n_rows=5, n_cols=5, **layers):
        return Landscape(*flat_layers(n_rows, n_cols, **layers))

    return _make


@pytest.fixture
def saturating_coefficients():
    """One vegetation class that always burns, no slope or wind effect."""
    from wildfire_spread.spread_model import Coefficients

    return Coefficients.from_vectors([SATURATING_INTERCEPT], (0.0, 0.0))
