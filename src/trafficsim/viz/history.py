"""
Chart of the rolling history: congestion and flow over time.

Congestion (%) on the left axis, synthetic flow on the right, sharing
the sample time labels.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from trafficsim.analysis.history import HistoryBuffer


def plot_history(
    history: "HistoryBuffer",
    title: str = "Live Correlation Metrics",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 4),
) -> tuple[Figure, Axes]:
    """
    Plot congestion and flow from a history buffer.

    Returns:
        (fig, ax) where ax holds congestion; the flow axis is ax's twin.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    samples = history.samples
    steps = list(range(len(samples)))

    ax.fill_between(steps, history.congestion_series(), color="#ef4444", alpha=0.25)
    ax.plot(steps, history.congestion_series(), color="#ef4444", label="Congestion (%)")
    ax.set_ylim(0, 100)
    ax.set_ylabel("Congestion (%)")

    flow_ax = ax.twinx()
    flow_ax.plot(steps, history.flow_series(), color="#00ff9d", linewidth=2, label="Flow Rate")
    flow_ax.set_ylabel("Flow (veh/min)")

    ax.set_xticks(steps)
    ax.set_xticklabels([s.time for s in samples], rotation=45, ha="right", fontsize=7)
    ax.set_title(title)

    return fig, ax
