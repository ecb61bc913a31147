from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .cell import CellState


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of one fire simulation.

    - `burned`: R x C mask of every cell that ignited (ignition cells included).
    - `ignition_history`: (row, col) of ignited cells in the exact order they
      were added, batch by batch.
    - `ignition_steps`: R x C step at which each cell started Burning, 0 for
      cells that never ignited. Ignition cells have step 1.
    - `steps`: last step the simulation reached.
    """

    burned: np.ndarray
    ignition_history: tuple[tuple[int, int], ...]
    ignition_steps: np.ndarray
    steps: int

    @property
    def size(self) -> int:
        """Total number of ignited cells."""
        return len(self.ignition_history)

    @property
    def shape(self) -> tuple[int, int]:
        return self.burned.shape

    @property
    def burned_ids(self) -> np.ndarray:
        """2 x N array with the row (first row) and col (second row) of each ignited cell."""
        if not self.ignition_history:
            return np.empty((2, 0), dtype=np.int64)
        return np.array(self.ignition_history, dtype=np.int64).T

    def frontier(self, step: int) -> list[tuple[int, int]]:
        """Cells that were Burning during `step`, in insertion order."""
        return [(r, c) for r, c in self.ignition_history if self.ignition_steps[r, c] == step]

    def state_at(self, step: int) -> np.ndarray:
        """Grid of CellState values as they were during `step`."""
        states = np.full(self.shape, CellState.Unburned.value, dtype=np.uint8)
        ignited = self.ignition_steps > 0
        states[ignited & (self.ignition_steps < step)] = CellState.Burned.value
        states[ignited & (self.ignition_steps == step)] = CellState.Burning.value
        return states

    def time_of_arrival(self) -> np.ndarray:
        """Ignition steps as floats, NaN where the fire never arrived."""
        toa = self.ignition_steps.astype(float)
        toa[self.ignition_steps == 0] = np.nan
        return toa
