from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap

from ...constants import NON_BURNABLE_CLASS
from ...result import SimulationResult
from ..metrics import confusion_matrix
from .palettes import DEFAULT_BURN_STATE, DEFAULT_MASK, BurnStateSpec, MaskSpec


def as_2d_numpy_grid(grid: Any, *, name: str = "grid") -> np.ndarray:
    """Coerce input to a 2D numpy array."""

    array = np.asarray(grid)
    if array.ndim != 2:
        raise ValueError(f"{name} must be a 2D array (rows x cols). Got shape={array.shape}.")
    return array


@dataclass(frozen=True)
class GridTitles:
    left: str = "Reference"
    right: str = "Simulated"


def _format_metrics(
    metrics: dict[str, Any] | Iterable[tuple[str, Any]] | None,
    *,
    value_format: str,
) -> str | None:
    if not metrics:
        return None

    items = list(metrics.items()) if isinstance(metrics, dict) else list(metrics)
    lines: list[str] = []
    for key, value in items:
        if isinstance(value, (int, float, np.floating, np.integer)):
            rendered = value_format.format(float(value))
        else:
            rendered = str(value)
        lines.append(f"{key}={rendered}")
    return "\n".join(lines) if lines else None


class BurnStateVisualizer:
    """Small helper to render burn states with Matplotlib.

    One frame per step: green unburned, red burning, black burned. Passing
    the vegetation layer as `vegetation` grays out non-burnable cells.
    """

    def __init__(self, *, origin: Literal["upper", "lower"] = "upper") -> None:
        self.origin = origin

    def plot_state(
        self,
        result: SimulationResult,
        step: int,
        *,
        vegetation: Any | None = None,
        spec: BurnStateSpec = DEFAULT_BURN_STATE,
        title: str | None = None,
        ax: Any | None = None,
    ) -> Any:
        """Plot the burn state of every cell during `step`."""

        states = result.state_at(step)
        if ax is None:
            _, ax = plt.subplots(1, 1, figsize=(6, 6))

        ax.imshow(
            states,
            cmap=ListedColormap(spec.colors),
            vmin=0,
            vmax=len(spec.colors) - 1,
            origin=self.origin,
            interpolation="nearest",
        )

        if vegetation is not None:
            veg2d = as_2d_numpy_grid(vegetation, name="vegetation")
            if veg2d.shape != states.shape:
                raise ValueError(f"vegetation shape must match result. Got {veg2d.shape} vs {states.shape}.")
            blocked = np.ma.masked_where(veg2d != NON_BURNABLE_CLASS, np.ones(veg2d.shape))
            ax.imshow(
                blocked,
                cmap=ListedColormap([spec.non_burnable]),
                origin=self.origin,
                interpolation="nearest",
            )

        ax.set_title(title if title is not None else f"step {step}")
        ax.set_xticks([])
        ax.set_yticks([])
        return ax

    def plot_compare(
        self,
        reference: Any,
        simulated: Any,
        *,
        titles: GridTitles | None = None,
        spec: MaskSpec = DEFAULT_MASK,
        show_metrics: bool = True,
        metrics_value_format: str = "{:.2f}",
    ) -> Any:
        """Plot two ignited masks side-by-side, with overlap metrics on the right panel."""

        ref_b = reference.burned if isinstance(reference, SimulationResult) else reference
        sim_b = simulated.burned if isinstance(simulated, SimulationResult) else simulated
        left2d = as_2d_numpy_grid(ref_b, name="reference").astype(float)
        right2d = as_2d_numpy_grid(sim_b, name="simulated").astype(float)
        if left2d.shape != right2d.shape:
            raise ValueError(f"reference and simulated shapes must match. Got {left2d.shape} vs {right2d.shape}.")

        titles = titles or GridTitles()
        fig, axes = plt.subplots(1, 2, figsize=(12, 5))

        for ax, grid, title in ((axes[0], left2d, titles.left), (axes[1], right2d, titles.right)):
            ax.imshow(grid, cmap=spec.cmap, vmin=0.0, vmax=1.0, origin=self.origin, interpolation="nearest")
            ax.set_title(title)
            ax.set_xticks([])
            ax.set_yticks([])

        if show_metrics:
            c = confusion_matrix(right2d, left2d)
            text = _format_metrics(
                {"IoU": c.iou, "precision": c.precision, "recall": c.recall},
                value_format=metrics_value_format,
            )
            axes[1].text(0.98, 0.98, text, transform=axes[1].transAxes, ha="right", va="top", fontsize=9)

        fig.subplots_adjust(wspace=0.08)
        return fig

    def save(self, fig: Any, path: str, *, dpi: int = 150) -> None:
        """Save a Matplotlib figure to disk."""

        fig.savefig(path, dpi=dpi, bbox_inches="tight")
