"""Burn probability of a single neighbour and the rules that accept it."""

from __future__ import annotations

import logging
import math
import random as random_module
from dataclasses import dataclass
from typing import Any, Iterable, Literal, Mapping, Protocol, Sequence

import numpy as np

from .constants import DEFAULT_UPPER_LIMIT, DETERMINISTIC_THRESHOLD, NON_BURNABLE_CLASS
from .directions import Direction, DirectionTable
from .errors import InvalidVegetationIndex, MalformedCoefficients
from .terrain import TerrainAttributes

logger = logging.getLogger(__name__)


def logistic(x: float) -> float:
    """1 / (1 + e^-x), without overflowing for large negative x."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


@dataclass(frozen=True)
class Coefficients:
    """Logistic regression coefficients of the spread model.

    `vegetation_intercepts[v]` is the intercept of vegetation class `v`
    (classes start at zero).
    """

    vegetation_intercepts: tuple[float, ...]
    slope: float
    wind: float

    def __post_init__(self):
        intercepts = tuple(float(v) for v in self.vegetation_intercepts)
        if not intercepts:
            logger.error("No vegetation intercepts given")
            raise MalformedCoefficients("At least one vegetation intercept is required")
        if not all(math.isfinite(v) for v in intercepts):
            logger.error(f"Non-finite vegetation intercepts {intercepts}")
            raise MalformedCoefficients(f"Vegetation intercepts must be finite, got {intercepts}")
        for name in ("slope", "wind"):
            value = getattr(self, name)
            if value is None or not math.isfinite(float(value)):
                logger.error(f"Terrain coefficient {name} is {value}")
                raise MalformedCoefficients(f"Terrain coefficient {name} must be a finite number, got {value}")
            object.__setattr__(self, name, float(value))
        object.__setattr__(self, "vegetation_intercepts", intercepts)

    @classmethod
    def from_vectors(
        cls,
        vegetation_intercepts: Sequence[float] | np.ndarray,
        terrain: Sequence[float] | Mapping[str, float],
    ) -> Coefficients:
        """
        Build coefficients from an intercept vector and a terrain pair.

        Args:
            vegetation_intercepts: 1D vector, one intercept per vegetation class
            terrain: (slope, wind) sequence or a mapping with "slope" and "wind"
        """
        intercepts = np.asarray(vegetation_intercepts, dtype=float)
        if intercepts.ndim != 1:
            logger.error(f"Vegetation intercepts have shape {intercepts.shape}")
            raise MalformedCoefficients(f"Vegetation intercepts must be a 1D vector, got shape={intercepts.shape}")

        if isinstance(terrain, Mapping):
            missing = [key for key in ("slope", "wind") if key not in terrain]
            if missing:
                logger.error(f"Terrain coefficients missing {missing}")
                raise MalformedCoefficients(f"Terrain coefficients missing: {', '.join(missing)}")
            slope, wind = terrain["slope"], terrain["wind"]
        else:
            values = list(terrain)
            if len(values) != 2:
                logger.error(f"Expected (slope, wind), got {values}")
                raise MalformedCoefficients(f"Terrain coefficients must be (slope, wind), got {len(values)} values")
            slope, wind = values

        return cls(tuple(intercepts.tolist()), slope, wind)

    @property
    def n_vegetation(self) -> int:
        return len(self.vegetation_intercepts)

    def intercept(self, vegetation: int) -> float:
        if not 0 <= vegetation < self.n_vegetation:
            raise InvalidVegetationIndex(vegetation, self.n_vegetation)
        return self.vegetation_intercepts[vegetation]

    def check_vegetation(self, classes: Iterable[int]) -> None:
        """Raise InvalidVegetationIndex for the first burnable class without an intercept."""
        for vegetation in classes:
            vegetation = int(vegetation)
            if vegetation == NON_BURNABLE_CLASS:
                continue
            if not 0 <= vegetation < self.n_vegetation:
                logger.error(f"Vegetation class {vegetation} has no intercept")
                raise InvalidVegetationIndex(vegetation, self.n_vegetation)


class AcceptancePolicy(Protocol):
    def accept(self, probability: float) -> bool: ...


class ThresholdAcceptance:
    """Deterministic rule: burn whenever the probability reaches the threshold."""

    def __init__(self, threshold: float = DETERMINISTIC_THRESHOLD):
        self.threshold = threshold

    def accept(self, probability: float) -> bool:
        return probability >= self.threshold

    def __repr__(self) -> str:
        return f"ThresholdAcceptance(threshold={self.threshold})"


class StochasticAcceptance:
    """Bernoulli trial drawn from an injected random source."""

    def __init__(self, random: random_module.Random):
        self.random = random

    def accept(self, probability: float) -> bool:
        return self.random.random() < probability

    def __repr__(self) -> str:
        return "StochasticAcceptance()"


PolicyName = Literal["deterministic", "stochastic"]


def make_policy(policy: PolicyName | Any, random: random_module.Random | None = None) -> AcceptancePolicy:
    """Resolve a policy name, or pass an existing policy object through."""
    if policy == "deterministic":
        return ThresholdAcceptance()
    if policy == "stochastic":
        if random is None:
            raise ValueError("The stochastic policy needs a random source")
        return StochasticAcceptance(random)
    if isinstance(policy, str):
        raise ValueError(f"Unknown acceptance policy: {policy}")
    if not callable(getattr(policy, "accept", None)):
        raise TypeError(f"Acceptance policy must define accept(probability), got {policy!r}")
    return policy


class SpreadModel:
    """Probability that a burning cell ignites one of its neighbours.

    The linear predictor is the target's vegetation intercept plus a slope
    term (only when spreading uphill) and a wind term, both taken from the
    burning cell's point of view. The logistic of it is scaled by
    `upper_limit`; 1 lets spread saturate, lower values damp it.
    """

    def __init__(
        self,
        coefficients: Coefficients,
        upper_limit: float = DEFAULT_UPPER_LIMIT,
        directions: DirectionTable | None = None,
    ):
        if not 0.0 <= upper_limit <= 1.0:
            logger.error(f"Upper limit {upper_limit} outside [0, 1]")
            raise ValueError(f"upper_limit must be within [0, 1], got {upper_limit}")
        self.coefficients = coefficients
        self.upper_limit = float(upper_limit)
        self.directions = directions if directions is not None else DirectionTable()

    def wind_term(self, burning: TerrainAttributes, direction: Direction) -> float:
        return (
            math.cos(direction.source_angle - burning.wind_direction)
            * burning.wind_speed
            * self.coefficients.wind
        )

    def slope_term(self, burning: TerrainAttributes, neighbour: TerrainAttributes, direction: Direction) -> float:
        elevation_diff = neighbour.elevation - burning.elevation
        if elevation_diff <= 0:
            return 0.0
        return math.sin(math.atan(elevation_diff / direction.distance)) * self.coefficients.slope

    def ignite_probability(
        self,
        target_vegetation: int,
        burning: TerrainAttributes,
        neighbour: TerrainAttributes,
        direction: Direction | int,
    ) -> float:
        if not isinstance(direction, Direction):
            direction = self.directions[direction]

        linpred = (
            self.coefficients.intercept(target_vegetation)
            + self.slope_term(burning, neighbour, direction)
            + self.wind_term(burning, direction)
        )
        return logistic(linpred) * self.upper_limit

    def spread_one_cell(
        self,
        target_vegetation: int,
        burning: TerrainAttributes,
        neighbour: TerrainAttributes,
        direction: Direction | int,
        policy: AcceptancePolicy,
    ) -> tuple[float, bool]:
        """Return both the probability and whether the neighbour burns."""
        probability = self.ignite_probability(target_vegetation, burning, neighbour, direction)
        return probability, policy.accept(probability)
