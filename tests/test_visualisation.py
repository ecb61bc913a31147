"""Smoke tests for burn-state rendering."""

import matplotlib.pyplot as plt
import numpy as np
import pytest
from wildfire_spread.model import simulate_fire
from wildfire_spread.validation.visualisation.grid_viz import BurnStateVisualizer


@pytest.fixture
def result(make_landscape, saturating_coefficients):
    vegetation = np.zeros((5, 5), dtype=int)
    vegetation[0, :] = 99
    return simulate_fire(make_landscape(vegetation=vegetation), saturating_coefficients, [(2, 2)])


def test_plot_state(result):
    viz = BurnStateVisualizer()
    ax = viz.plot_state(result, 2)
    assert ax.get_title() == "step 2"
    assert len(ax.images) == 1
    plt.close(ax.figure)


def test_plot_state_with_vegetation(result):
    vegetation = np.zeros((5, 5), dtype=int)
    vegetation[0, :] = 99
    ax = BurnStateVisualizer().plot_state(result, 3, vegetation=vegetation, title="final")
    assert ax.get_title() == "final"
    assert len(ax.images) == 2
    plt.close(ax.figure)


def test_plot_state_vegetation_shape_mismatch(result):
    with pytest.raises(ValueError):
        BurnStateVisualizer().plot_state(result, 1, vegetation=np.zeros((2, 2)))


def test_plot_compare_and_save(result, tmp_path):
    viz = BurnStateVisualizer()
    fig = viz.plot_compare(result, result.state_at(2) > 0)
    assert len(fig.axes) == 2

    path = tmp_path / "compare.png"
    viz.save(fig, str(path))
    assert path.exists()
    plt.close(fig)
