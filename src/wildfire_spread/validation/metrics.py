from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from ..result import SimulationResult


ArrayLike = Any


@dataclass(frozen=True)
class Confusion:
    """Confusion matrix counts for two burned/unburned masks."""

    tp: int
    fp: int
    fn: int
    tn: int

    @property
    def precision(self) -> float:
        return _safe_div(self.tp, self.tp + self.fp)

    @property
    def recall(self) -> float:
        return _safe_div(self.tp, self.tp + self.fn)

    @property
    def f1(self) -> float:
        p = self.precision
        r = self.recall
        return 0.0 if (p + r) == 0.0 else 2.0 * p * r / (p + r)

    @property
    def iou(self) -> float:
        # Intersection over Union for the positive (burned) class
        return _safe_div(self.tp, self.tp + self.fp + self.fn)


@dataclass(frozen=True)
class StepErrorMetrics:
    """Error of ignition steps on cells ignited in both burns."""

    n: int
    bias: float
    mae: float
    rmse: float


def _as_mask(x: ArrayLike | SimulationResult, name: str) -> np.ndarray:
    if isinstance(x, SimulationResult):
        return x.burned
    arr = np.asarray(x, dtype=bool)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2D array, got shape={arr.shape}")
    return arr


def _as_steps(x: ArrayLike | SimulationResult, name: str) -> np.ndarray:
    """Ignition steps as floats; 0 (never ignited) becomes NaN."""
    if isinstance(x, SimulationResult):
        return x.time_of_arrival()
    arr = np.asarray(x, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2D array, got shape={arr.shape}")
    arr = arr.copy()
    arr[arr <= 0] = np.nan
    return arr


def _safe_div(num: float, den: float) -> float:
    return 0.0 if den == 0 else float(num) / float(den)


def confusion_matrix(
    simulated: ArrayLike | SimulationResult,
    reference: ArrayLike | SimulationResult,
    *,
    mask: ArrayLike | None = None,
) -> Confusion:
    """Compute TP/FP/FN/TN of the simulated burn against the reference burn.

    If `mask` is provided, counts are computed only where mask is True,
    otherwise over the whole grid.
    """

    sim = _as_mask(simulated, "simulated")
    ref = _as_mask(reference, "reference")
    if sim.shape != ref.shape:
        raise ValueError(f"Shape mismatch: simulated={sim.shape} reference={ref.shape}")

    domain = np.ones(sim.shape, dtype=bool) if mask is None else np.asarray(mask, dtype=bool)

    tp = int(np.sum(domain & sim & ref))
    fp = int(np.sum(domain & sim & ~ref))
    fn = int(np.sum(domain & ~sim & ref))
    tn = int(np.sum(domain & ~sim & ~ref))

    return Confusion(tp=tp, fp=fp, fn=fn, tn=tn)


def step_error_metrics(
    simulated: ArrayLike | SimulationResult,
    reference: ArrayLike | SimulationResult,
    *,
    mask: ArrayLike | None = None,
) -> StepErrorMetrics:
    """Compute bias/MAE/RMSE of ignition steps where both burns ignited.

    Step grids use 0 for cells that never ignited; those cells are excluded.
    Returns n=0 and zeros for metrics if there are no comparable cells.
    """

    sim = _as_steps(simulated, "simulated")
    ref = _as_steps(reference, "reference")
    if sim.shape != ref.shape:
        raise ValueError(f"Shape mismatch: simulated={sim.shape} reference={ref.shape}")

    valid = np.isfinite(sim) & np.isfinite(ref)
    if mask is not None:
        valid = valid & np.asarray(mask, dtype=bool)

    if not np.any(valid):
        return StepErrorMetrics(n=0, bias=0.0, mae=0.0, rmse=0.0)

    diff = sim[valid] - ref[valid]
    bias = float(np.mean(diff))
    mae = float(np.mean(np.abs(diff)))
    rmse = float(np.sqrt(np.mean(diff**2)))

    return StepErrorMetrics(n=int(diff.size), bias=bias, mae=mae, rmse=rmse)


def same_history(a: SimulationResult, b: SimulationResult) -> bool:
    """True when both runs ignited the same cells in the same order and steps."""
    return (
        a.ignition_history == b.ignition_history
        and a.steps == b.steps
        and np.array_equal(a.ignition_steps, b.ignition_steps)
    )
