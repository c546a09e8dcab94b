"""Smoke tests for plotting functions."""

import warnings

import matplotlib.pyplot as plt
import pytest

from trafficsim.analysis.history import HistoryBuffer
from trafficsim.core.grid import GridConfig
from trafficsim.core.simulation import Simulation
from trafficsim.viz import (
    plot_congestion_heatmap,
    plot_history,
    plot_network,
    save_figure,
)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestPlotNetwork:
    """Tests for the network map."""

    def test_returns_fig_and_ax(self, simulation):
        fig, ax = plot_network(simulation.tick())
        assert fig is ax.figure
        assert "Health" in ax.get_title()

    def test_draws_roads_and_junctions(self, simulation):
        _, ax = plot_network(simulation.tick(), show_labels=False, colorbar=False)
        # One LineCollection for roads, one scatter for junctions
        assert len(ax.collections) == 2

    def test_marks_dispatched_units(self, simulation):
        simulation.dispatch("n-0-0")
        _, ax = plot_network(simulation.snapshot(), show_labels=False, colorbar=False)
        assert len(ax.collections) == 3
        assert ax.get_legend() is not None

    def test_existing_axes(self, simulation):
        fig, ax = plt.subplots()
        out_fig, out_ax = plot_network(simulation.tick(), ax=ax, title="Grid")
        assert out_ax is ax
        assert out_fig is fig
        assert ax.get_title() == "Grid"

    def test_y_axis_inverted(self, simulation):
        _, ax = plot_network(simulation.tick(), colorbar=False)
        assert ax.yaxis_inverted()


class TestHeatmap:
    """Tests for the congestion heatmap."""

    def test_infers_shape(self, simulation):
        _, ax = plot_congestion_heatmap(simulation.tick())
        assert ax.images[0].get_array().shape == (4, 5)

    def test_smoothed(self, simulation):
        _, ax = plot_congestion_heatmap(simulation.tick(), rows=4, cols=5, sigma=1.0, colorbar=False)
        assert ax.images[0].get_array().shape == (4, 5)

    def test_empty_grid_draws_no_image(self):
        sim = Simulation.from_config(GridConfig(rows=0, cols=5), seed=1)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            _, ax = plot_congestion_heatmap(sim.tick())
        assert len(ax.images) == 0
        assert ax.get_title() == "Congestion"


class TestHistoryPlot:
    """Tests for the history chart."""

    def test_two_series(self, simulation, rng):
        buf = HistoryBuffer(rng=rng)
        simulation.subscribe(buf)
        simulation.run(5)
        fig, ax = plot_history(buf)
        assert len(ax.lines) == 1
        flow_axes = [a for a in fig.axes if a is not ax]
        assert len(flow_axes) == 1
        assert len(flow_axes[0].lines) == 1

    def test_empty_history(self, rng):
        fig, ax = plot_history(HistoryBuffer(rng=rng))
        assert ax.get_title() == "Live Correlation Metrics"


def test_save_figure(simulation, tmp_path):
    fig, _ = plot_network(simulation.tick())
    path = tmp_path / "grid.png"
    save_figure(fig, path, dpi=50)
    assert path.exists()
    assert path.stat().st_size > 0
