"""
Visualization utilities.

- Network map (junctions by congestion, roads by flow)
- Congestion heatmaps
- History charts
"""

from trafficsim.viz.network import (
    CMAP_CONGESTION,
    STATUS_COLORS,
    plot_network,
    plot_congestion_heatmap,
    save_figure,
)

from trafficsim.viz.history import plot_history

__all__ = [
    "CMAP_CONGESTION",
    "STATUS_COLORS",
    "plot_network",
    "plot_congestion_heatmap",
    "save_figure",
    "plot_history",
]
