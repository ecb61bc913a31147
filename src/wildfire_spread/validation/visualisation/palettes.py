from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BurnStateSpec:
    """Colors of the burn states, indexed by CellState value.

    Values should be valid Matplotlib colors.
    """

    unburned: str = "green"
    burning: str = "red"
    burned: str = "black"
    non_burnable: str = "#9CA3AF"  # gray

    @property
    def colors(self) -> list[str]:
        return [self.unburned, self.burning, self.burned]


@dataclass(frozen=True)
class MaskSpec:
    """Defaults for ignited-mask comparison panels."""

    cmap: str = "Reds"


DEFAULT_BURN_STATE = BurnStateSpec()
DEFAULT_MASK = MaskSpec()
