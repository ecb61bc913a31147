#!/usr/bin/env python3
"""Main script to run the fire spread simulation on a synthetic landscape."""

import logging
import math
import sys
from pathlib import Path

import numpy as np

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from wildfire_spread.cell import CellState
from wildfire_spread.constants import NON_BURNABLE_CLASS
from wildfire_spread.model import FireSimulator
from wildfire_spread.spread_model import Coefficients
from wildfire_spread.terrain import Landscape


def print_grid(simulator: FireSimulator) -> None:
    """
    Print a simple representation of the grid to console.

    Args:
        simulator: The FireSimulator instance to visualize
    """
    landscape = simulator.landscape
    grid_str = ""
    for row in range(landscape.n_rows):
        for col in range(landscape.n_cols):
            state = simulator.cell_state(row, col)
            if not landscape.is_burnable(row, col):
                grid_str += "🌊"
            elif state == CellState.Unburned:
                grid_str += "🌲"
            elif state == CellState.Burning:
                grid_str += "🔥"
            else:
                grid_str += "⬛"
        grid_str += "\n"
    print(f"--- STEP {simulator.current_step} ---")
    print(grid_str)


def build_landscape(n_rows: int, n_cols: int) -> Landscape:
    """A hill in the middle, a river on the left and wind from the south-west."""
    rows, cols = np.mgrid[0:n_rows, 0:n_cols]
    centre_r, centre_c = n_rows / 2, n_cols / 2
    elevation = 200.0 * np.exp(-((rows - centre_r) ** 2 + (cols - centre_c) ** 2) / 40.0)

    vegetation = (cols * 3 // n_cols).astype(int)
    vegetation[:, 2] = NON_BURNABLE_CLASS

    wind_direction = np.full((n_rows, n_cols), math.radians(225))
    wind_speed = np.full((n_rows, n_cols), 3.0)
    return Landscape(vegetation, elevation, wind_direction, wind_speed)


def main():
    """Run the fire spread simulation."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    # Simulation parameters
    HEIGHT = 15
    WIDTH = 20
    UPPER_LIMIT = 0.9
    SEED = 42

    print("--- CREATING MODEL ---")
    coefficients = Coefficients.from_vectors([0.5, 0.0, -0.5], {"slope": 2.0, "wind": 0.3})
    simulator = FireSimulator(
        build_landscape(HEIGHT, WIDTH),
        coefficients,
        [(HEIGHT - 2, WIDTH // 2)],
        upper_limit=UPPER_LIMIT,
        policy="stochastic",
        seed=SEED,
    )

    result = simulator.run(callback=print_grid)
    print(f"\nFire has been extinguished after {result.steps} steps: {result.size} cells burned.")


if __name__ == "__main__":
    main()
