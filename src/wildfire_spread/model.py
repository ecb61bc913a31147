"""Fire spread simulation over a landscape grid."""

from __future__ import annotations

import logging
import random as random_module
from typing import Callable, Iterable

import numpy as np
from mesa import Model

from .cell import CellState
from .constants import DEFAULT_UPPER_LIMIT, UNLIMITED_STEPS_FACTOR
from .errors import InvalidIgnitionCell
from .result import SimulationResult
from .spread_model import AcceptancePolicy, Coefficients, PolicyName, SpreadModel, make_policy
from .terrain import Landscape

logger = logging.getLogger(__name__)


class FireSimulator(Model):
    """Frontier-expansion fire spread model.

    Each step, every cell that ignited in the previous step tries to ignite
    its unburned, burnable queen neighbours. Burning cells are visited in the
    order they were added and neighbours in the fixed direction order. A cell
    is marked as ignited as soon as one neighbour succeeds, so later burning
    cells in the same step never evaluate it again. Results (and the sequence
    of random draws in the stochastic policy) therefore depend on that order.
    """

    def __init__(
        self,
        landscape: Landscape,
        coefficients: Coefficients,
        ignition_cells: Iterable[tuple[int, int]],
        *,
        upper_limit: float = DEFAULT_UPPER_LIMIT,
        max_steps: int | None = 0,
        policy: PolicyName | AcceptancePolicy = "deterministic",
        seed: int | None = None,
        random: random_module.Random | None = None,
    ):
        """
        Validate the inputs and ignite the starting cells (step 1).

        Args:
            landscape: Vegetation and terrain layers
            coefficients: Vegetation intercepts and slope/wind coefficients
            ignition_cells: (row, col) of the cells burning at step 1
            upper_limit: Cap multiplied into every probability, within [0, 1]
            max_steps: Last step to reach; 0 or None means 10 x number of cells
            policy: "deterministic", "stochastic" or an object with accept(probability)
            seed: Seed for the random source when `random` is not given
            random: Random source for stochastic acceptance
        """
        super().__init__()
        # Replace mesa's default generator so runs are reproducible
        self.random = random if random is not None else random_module.Random(seed)

        self.landscape = landscape
        self.spread_model = SpreadModel(coefficients, upper_limit)
        self.policy = make_policy(policy, self.random)
        coefficients.check_vegetation(landscape.burnable_classes())

        if not max_steps:
            max_steps = UNLIMITED_STEPS_FACTOR * landscape.n_cells
        if max_steps < 0:
            logger.error(f"Negative max_steps {max_steps}")
            raise ValueError(f"max_steps must not be negative, got {max_steps}")
        self.max_steps = int(max_steps)

        self.burned = np.zeros(landscape.shape, dtype=bool)
        self.ignition_steps = np.zeros(landscape.shape, dtype=np.int64)
        self.ignition_history: list[tuple[int, int]] = []
        self.burning: list[tuple[int, int]] = []
        self.current_step = 1

        for cell in self._validate_ignition_cells(ignition_cells):
            self._ignite(cell)
            self.burning.append(cell)

        self.running = bool(self.burning) and self.current_step < self.max_steps
        logger.info(
            f"Simulation ready: grid {landscape.n_rows}x{landscape.n_cols}, "
            f"{len(self.burning)} ignition cells, max_steps={self.max_steps}, policy={self.policy!r}"
        )

    def _validate_ignition_cells(self, ignition_cells) -> list[tuple[int, int]]:
        cells: list[tuple[int, int]] = []
        seen = set()
        for cell in ignition_cells:
            try:
                row, col = (int(v) for v in cell)
            except (TypeError, ValueError):
                logger.error(f"Ignition cell {cell!r} is not a (row, col) pair")
                raise InvalidIgnitionCell(cell, "expected (row, col)") from None
            if not self.landscape.in_bounds(row, col):
                logger.error(f"Ignition cell {(row, col)} outside grid {self.landscape.shape}")
                raise InvalidIgnitionCell((row, col), f"outside grid of shape {self.landscape.shape}")
            if not self.landscape.is_burnable(row, col):
                logger.error(f"Ignition cell {(row, col)} is not burnable")
                raise InvalidIgnitionCell((row, col), "vegetation is not burnable")
            if (row, col) in seen:
                continue
            seen.add((row, col))
            cells.append((row, col))
        return cells

    def _ignite(self, cell: tuple[int, int]) -> None:
        self.burned[cell] = True
        self.ignition_steps[cell] = self.current_step
        self.ignition_history.append(cell)

    def step(self):
        """
        Execute one spread step.

        Cells burning in the previous step become burned and the cells they
        ignite form the next burning batch.
        """
        if not self.running:
            return

        self.current_step += 1
        landscape = self.landscape
        spread_model = self.spread_model
        directions = spread_model.directions
        next_burning: list[tuple[int, int]] = []

        for row, col in self.burning:
            terrain_burning = landscape.attributes(row, col)

            for direction in directions:
                n_row, n_col = directions.neighbour(row, col, direction.index)
                if not landscape.in_bounds(n_row, n_col):
                    continue
                if self.burned[n_row, n_col] or not landscape.is_burnable(n_row, n_col):
                    continue

                terrain_neighbour = landscape.attributes(n_row, n_col)
                _, burn = spread_model.spread_one_cell(
                    terrain_neighbour.vegetation,
                    terrain_burning,
                    terrain_neighbour,
                    direction,
                    self.policy,
                )
                if not burn:
                    continue

                self._ignite((n_row, n_col))
                next_burning.append((n_row, n_col))

        logger.debug(f"Step {self.current_step}: {len(next_burning)} cells ignited")
        self.burning = next_burning
        if not self.burning or self.current_step >= self.max_steps:
            self.running = False

    def cell_state(self, row: int, col: int) -> CellState:
        if not self.burned[row, col]:
            return CellState.Unburned
        if self.ignition_steps[row, col] == self.current_step:
            return CellState.Burning
        return CellState.Burned

    def run(self, callback: Callable[[FireSimulator], None] | None = None) -> SimulationResult:
        """
        Run until no cell ignites or max_steps is reached.

        If `callback` is provided, it is called with this simulator after the
        ignition step and after every following step.
        """
        if callback:
            callback(self)
        while self.running:
            self.step()
            if callback:
                callback(self)

        result = self.result()
        logger.info(f"Simulation finished after {result.steps} steps: {result.size} cells burned")
        return result

    def result(self) -> SimulationResult:
        burned = self.burned.copy()
        ignition_steps = self.ignition_steps.copy()
        burned.setflags(write=False)
        ignition_steps.setflags(write=False)
        return SimulationResult(
            burned=burned,
            ignition_history=tuple(self.ignition_history),
            ignition_steps=ignition_steps,
            steps=self.current_step,
        )


def simulate_fire(
    landscape: Landscape,
    coefficients: Coefficients,
    ignition_cells: Iterable[tuple[int, int]],
    *,
    upper_limit: float = DEFAULT_UPPER_LIMIT,
    max_steps: int | None = 0,
    policy: PolicyName | AcceptancePolicy = "deterministic",
    seed: int | None = None,
    random: random_module.Random | None = None,
    callback: Callable[[FireSimulator], None] | None = None,
) -> SimulationResult:
    """Build a FireSimulator and run it to completion."""
    simulator = FireSimulator(
        landscape,
        coefficients,
        ignition_cells,
        upper_limit=upper_limit,
        max_steps=max_steps,
        policy=policy,
        seed=seed,
        random=random,
    )
    return simulator.run(callback)
