"""Burn states a landscape cell goes through during a simulation."""

from enum import Enum


class CellState(Enum):
    """Possible states of a landscape cell.

    A cell is Burning only during the step it ignited and Burned afterwards.
    """
    Unburned = 0
    Burning = 1
    Burned = 2
