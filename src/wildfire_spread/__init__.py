"""
Wildfire spread simulation on a landscape grid.

Fire spreads from ignition cells to queen neighbours with a logistic burn
probability driven by vegetation, uphill slope and wind.
"""

from .cell import CellState
from .directions import Direction, DirectionTable
from .errors import (
    InvalidIgnitionCell,
    InvalidVegetationIndex,
    LandscapeError,
    MalformedCoefficients,
    SpreadError,
)
from .model import FireSimulator, simulate_fire
from .result import SimulationResult
from .spread_model import (
    Coefficients,
    SpreadModel,
    StochasticAcceptance,
    ThresholdAcceptance,
    logistic,
    make_policy,
)
from .terrain import Landscape, TerrainAttributes, write_raster

__version__ = "0.1.0"

__all__ = [
    "CellState",
    "Coefficients",
    "Direction",
    "DirectionTable",
    "FireSimulator",
    "InvalidIgnitionCell",
    "InvalidVegetationIndex",
    "Landscape",
    "LandscapeError",
    "MalformedCoefficients",
    "SimulationResult",
    "SpreadError",
    "SpreadModel",
    "StochasticAcceptance",
    "TerrainAttributes",
    "ThresholdAcceptance",
    "logistic",
    "make_policy",
    "simulate_fire",
    "write_raster",
]
