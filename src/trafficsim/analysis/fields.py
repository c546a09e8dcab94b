"""
Congestion as a 2D field.

Node ids encode their grid position ("n-{row}-{col}"), so a snapshot can
be laid back out as a (rows, cols) array for heatmaps. An optional
Gaussian blur spreads each junction's congestion into its surroundings,
which reads better than isolated cells on small grids.
"""

from __future__ import annotations
from typing import Sequence

import numpy as np
from scipy.ndimage import gaussian_filter

from trafficsim.core.grid import Node


def parse_node_position(node_id: str) -> tuple[int, int] | None:
    """(row, col) from an "n-{row}-{col}" id, or None if it doesn't parse."""
    parts = node_id.split("-")
    if len(parts) != 3 or parts[0] != "n":
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def congestion_field(
    nodes: Sequence[Node],
    rows: int,
    cols: int,
    sigma: float = 0.0,
    fill: float = 0.0,
) -> np.ndarray:
    """
    Lay node congestion out on a (rows, cols) array.

    Args:
        nodes: Nodes to place; ids outside the grid are skipped
        rows, cols: Grid dimensions
        sigma: Gaussian smoothing width in cells (0 disables smoothing)
        fill: Value for cells with no node

    Returns:
        Array of shape (rows, cols)
    """
    field = np.full((max(rows, 0), max(cols, 0)), fill, dtype=np.float64)
    for node in nodes:
        pos = parse_node_position(node.id)
        if pos is None:
            continue
        r, c = pos
        if 0 <= r < rows and 0 <= c < cols:
            field[r, c] = node.congestion_level

    if sigma > 0 and field.size > 0:
        # Grid has hard edges, no wraparound
        field = gaussian_filter(field, sigma=sigma, mode="nearest")
    return field


def grid_shape(nodes: Sequence[Node]) -> tuple[int, int]:
    """Infer (rows, cols) from node ids; (0, 0) if none parse."""
    positions = [p for p in (parse_node_position(n.id) for n in nodes) if p is not None]
    if not positions:
        return 0, 0
    return max(r for r, _ in positions) + 1, max(c for _, c in positions) + 1
