"""Geometry of the eight queen neighbours of a burning cell."""

import math
from dataclasses import dataclass, field
from typing import Iterator

from .constants import DEFAULT_RESOLUTION, NEIGHBOUR_OFFSETS, SOURCE_ANGLES_DEG, SQRT2


@dataclass(frozen=True)
class Direction:
    """One neighbour position relative to the burning cell.

    `source_angle` is where the wind has to come from (radians) to push the
    fire from the burning cell into this neighbour.
    """

    index: int
    row_offset: int
    col_offset: int
    distance: float
    source_angle: float

    @property
    def is_diagonal(self) -> bool:
        return self.row_offset != 0 and self.col_offset != 0


@dataclass(frozen=True)
class DirectionTable:
    """Immutable table of the 8 neighbour directions, in fixed order (0-7)."""

    resolution: float = DEFAULT_RESOLUTION
    directions: tuple[Direction, ...] = field(init=False, repr=False)

    def __post_init__(self):
        if not self.resolution > 0:
            raise ValueError(f"Resolution must be positive, got {self.resolution}")
        directions = []
        for index, ((dr, dc), angle) in enumerate(zip(NEIGHBOUR_OFFSETS, SOURCE_ANGLES_DEG)):
            diagonal = dr != 0 and dc != 0
            distance = self.resolution * SQRT2 if diagonal else self.resolution
            directions.append(Direction(index, dr, dc, distance, math.radians(angle)))
        # frozen dataclass, so bypass __setattr__
        object.__setattr__(self, "directions", tuple(directions))

    def __iter__(self) -> Iterator[Direction]:
        return iter(self.directions)

    def __len__(self) -> int:
        return len(self.directions)

    def __getitem__(self, index: int) -> Direction:
        return self.directions[index]

    def neighbour(self, row: int, col: int, index: int) -> tuple[int, int]:
        direction = self.directions[index]
        return row + direction.row_offset, col + direction.col_offset
