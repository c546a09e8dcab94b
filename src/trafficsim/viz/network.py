"""
2D visualization of the junction grid.

Provides:
- Network map: junctions coloured by congestion, roads scaled by flow
- Congestion heatmap (optionally smoothed)
- Status colours matching the dashboard

All plots use matplotlib and return (fig, ax).
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from trafficsim.analysis.fields import congestion_field, grid_shape
from trafficsim.core.grid import NodeStatus

if TYPE_CHECKING:
    from trafficsim.core.simulation import TrafficSnapshot


# Custom colormap: clear green → amber → red → deep crimson
def _create_congestion_cmap():
    """Create a colormap from free-flowing (green) to gridlock (crimson)."""
    from matplotlib.colors import LinearSegmentedColormap

    colors = [
        (0.000, 1.000, 0.616),   # Neon green (free flow)
        (0.518, 0.800, 0.086),   # Lime
        (0.918, 0.702, 0.031),   # Amber
        (0.976, 0.451, 0.086),   # Orange
        (0.937, 0.267, 0.267),   # Red
        (0.498, 0.114, 0.114),   # Crimson (gridlock)
    ]
    return LinearSegmentedColormap.from_list("congestion", colors)


CMAP_CONGESTION = _create_congestion_cmap()

STATUS_COLORS = {
    NodeStatus.NORMAL: "#00ff9d",
    NodeStatus.CONGESTED: "#eab308",
    NodeStatus.CRITICAL: "#ef4444",
}

DISPATCH_COLOR = "#3b82f6"


def plot_network(
    snapshot: "TrafficSnapshot",
    title: str | None = None,
    ax: Axes | None = None,
    show_labels: bool = True,
    colorbar: bool = True,
    max_line_width: float = 6.0,
    figsize: tuple[float, float] = (10, 7),
) -> tuple[Figure, Axes]:
    """
    Plot the junction network for a snapshot.

    Args:
        snapshot: Snapshot to draw
        title: Plot title (health and scenario if None)
        ax: Existing axes to plot on (creates new figure if None)
        show_labels: Annotate junctions with their labels
        colorbar: Whether to add a congestion colorbar
        max_line_width: Line width of a road at the top of the flow range
        figsize: Figure size if creating new figure

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    positions = {node.id: (node.x, node.y) for node in snapshot.nodes}

    # Roads: width ∝ flow, dangling links are not drawn
    segments, widths = [], []
    for link in snapshot.links:
        if link.source in positions and link.target in positions:
            segments.append([positions[link.source], positions[link.target]])
            widths.append(link.flow_rate)
    if segments:
        widths = np.asarray(widths, dtype=np.float64)
        scale = max_line_width / max(widths.max(), 1e-9)
        ax.add_collection(LineCollection(
            segments, linewidths=widths * scale, colors="#64748b", alpha=0.7, zorder=1,
        ))

    if snapshot.nodes:
        xs = [n.x for n in snapshot.nodes]
        ys = [n.y for n in snapshot.nodes]
        levels = [n.congestion_level for n in snapshot.nodes]
        edge_colors = [STATUS_COLORS[n.status] for n in snapshot.nodes]

        sc = ax.scatter(
            xs, ys, c=levels, cmap=CMAP_CONGESTION, vmin=0, vmax=100,
            s=260, edgecolors=edge_colors, linewidths=2, zorder=2,
        )
        if colorbar:
            plt.colorbar(sc, ax=ax, fraction=0.046, pad=0.04, label="Congestion (%)")

        # Ring around junctions with a unit on site
        dispatched = [n for n in snapshot.nodes if n.police_dispatched]
        if dispatched:
            ax.scatter(
                [n.x for n in dispatched], [n.y for n in dispatched],
                s=600, facecolors="none", edgecolors=DISPATCH_COLOR,
                linewidths=2, zorder=3, label="Unit dispatched",
            )
            ax.legend(loc="upper right")

        if show_labels:
            for node in snapshot.nodes:
                ax.annotate(
                    node.label, (node.x, node.y), textcoords="offset points",
                    xytext=(0, 14), ha="center", fontsize=7,
                )

    if title is None:
        title = f"Health {snapshot.overall_health}% · {snapshot.scenario.value} · tick {snapshot.tick}"
    ax.set_title(title)
    ax.autoscale_view()
    ax.invert_yaxis()  # Screen coordinates: y grows downward
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_xticks([])
    ax.set_yticks([])

    return fig, ax


def plot_congestion_heatmap(
    snapshot: "TrafficSnapshot",
    rows: int | None = None,
    cols: int | None = None,
    sigma: float = 0.0,
    title: str = "Congestion",
    ax: Axes | None = None,
    colorbar: bool = True,
    figsize: tuple[float, float] = (8, 6),
) -> tuple[Figure, Axes]:
    """
    Plot congestion as a (rows, cols) heatmap.

    rows/cols are inferred from node ids when not given. An empty grid
    gives titled axes with no image.
    """
    if rows is None or cols is None:
        rows, cols = grid_shape(snapshot.nodes)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.set_title(title)
    if rows <= 0 or cols <= 0:
        ax.set_xticks([])
        ax.set_yticks([])
        return fig, ax

    field = congestion_field(snapshot.nodes, rows, cols, sigma=sigma)

    im = ax.imshow(
        field,
        origin="upper",
        cmap=CMAP_CONGESTION,
        vmin=0,
        vmax=100,
        aspect="equal",
    )
    if colorbar:
        plt.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    ax.set_xlabel("column")
    ax.set_ylabel("row")

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
