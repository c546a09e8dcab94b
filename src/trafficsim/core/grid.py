"""
Grid: the fixed junction topology the simulation runs on.

A rows × cols lattice of junction nodes, joined by directed road links
to the right-hand and lower neighbour of every node:
- 4-connected, no wraparound, no diagonals
- Topology is a pure function of (rows, cols)
- Initial congestion and flow are random seeds

Node positions are display coordinates only. The engine never reads them.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np


class NodeStatus(str, Enum):
    """Status of a junction, derived from its congestion level."""

    NORMAL = "normal"
    CONGESTED = "congested"
    CRITICAL = "critical"


# Status thresholds (strict greater-than)
CRITICAL_THRESHOLD = 85.0
CONGESTED_THRESHOLD = 65.0


def status_for(congestion_level: float) -> NodeStatus:
    """Derive node status from congestion level."""
    if congestion_level > CRITICAL_THRESHOLD:
        return NodeStatus.CRITICAL
    if congestion_level > CONGESTED_THRESHOLD:
        return NodeStatus.CONGESTED
    return NodeStatus.NORMAL


DEFAULT_LABELS = (
    "Silk Board Junction", "Teen Hath Naka", "Connaught Place", "Hebbal Flyover",
    "Cyber Hub", "Ashram Chowk", "Koramangala 80ft", "MG Road",
    "Hitec City Main", "Electronic City Toll", "Chandni Chowk", "Marine Drive",
    "Brigade Road", "Outer Ring Road", "Indiranagar", "Rajiv Chowk",
    "Tin Factory", "Marathahalli Bridge", "Powai Lake Rd", "Sector 18 Noida",
)


@dataclass(frozen=True)
class Node:
    """
    A junction in the grid.

    status is derived from congestion_level when omitted. An explicit status
    must agree with status_for(congestion_level).
    """

    id: str
    x: float  # Display position only
    y: float
    label: str
    congestion_level: float  # 0 to 100
    status: NodeStatus | None = None
    light_duration: int = 60  # Seconds
    police_dispatched: bool = False

    # Behaviour flags, fixed at build time
    hotspot: bool = False  # Trends toward congestion faster
    incident_site: bool = False  # Pinned critical under an accident

    def __post_init__(self):
        if not 0.0 <= self.congestion_level <= 100.0:
            raise ValueError(
                f"congestion_level must lie in [0, 100], got {self.congestion_level} for {self.id}"
            )
        derived = status_for(self.congestion_level)
        if self.status is None:
            object.__setattr__(self, "status", derived)
        elif self.status is not derived:
            raise ValueError(
                f"status {self.status.value} does not match congestion "
                f"{self.congestion_level} for {self.id}, expected {derived.value}"
            )


@dataclass(frozen=True)
class Link:
    """A directed road segment between two junctions."""

    source: str
    target: str
    flow_rate: float  # Vehicles per minute
    distance: float = 1.0


@dataclass
class GridConfig:
    """Configuration for grid construction."""

    rows: int = 4
    cols: int = 5
    labels: Sequence[str] = DEFAULT_LABELS

    # Display lattice
    spacing_x: float = 200.0
    spacing_y: float = 150.0
    origin_x: float = 100.0
    origin_y: float = 100.0

    # Random seeds: congestion is an integer in [low, high)
    initial_congestion_range: tuple[int, int] = (10, 50)
    initial_flow_range: tuple[float, float] = (5.0, 15.0)
    light_duration: int = 60

    # Label matching happens once, here; the engine only sees the flags
    hotspot_keywords: tuple[str, ...] = ("Silk Board", "Teen Hath")
    incident_site_label: str = "Ashram Chowk"

    def __post_init__(self):
        low, high = self.initial_congestion_range
        if not 0 <= low < high <= 100:
            raise ValueError(
                f"initial_congestion_range must lie in [0, 100], got {self.initial_congestion_range}"
            )
        flow_low, flow_high = self.initial_flow_range
        if not 0 < flow_low < flow_high:
            raise ValueError(
                f"initial_flow_range must be positive and increasing, got {self.initial_flow_range}"
            )


def node_id(row: int, col: int) -> str:
    """Stable identifier for the node at (row, col)."""
    return f"n-{row}-{col}"


def build_grid(
    rows: int,
    cols: int,
    labels: Sequence[str] | None = None,
    rng: np.random.Generator | None = None,
    config: GridConfig | None = None,
) -> tuple[list[Node], list[Link]]:
    """
    Build the junction grid.

    Args:
        rows, cols: Grid dimensions. Non-positive values give an empty grid.
        labels: Place names, cycled in row-major order (config labels if None)
        rng: Random source for the initial congestion and flow seeds
        config: Layout, seed ranges and hotspot rules (defaults if None)

    Returns:
        (nodes, links) in row-major order
    """
    if config is None:
        config = GridConfig(rows=rows, cols=cols)
    if labels is None:
        labels = config.labels
    if rng is None:
        rng = np.random.default_rng()

    if rows <= 0 or cols <= 0 or not labels:
        return [], []

    congestion_low, congestion_high = config.initial_congestion_range
    flow_low, flow_high = config.initial_flow_range

    nodes = []
    for r in range(rows):
        for c in range(cols):
            label = labels[(r * cols + c) % len(labels)]
            nodes.append(Node(
                id=node_id(r, c),
                x=c * config.spacing_x + config.origin_x,
                y=r * config.spacing_y + config.origin_y,
                label=label,
                congestion_level=float(rng.integers(congestion_low, congestion_high)),
                light_duration=config.light_duration,
                police_dispatched=False,
                hotspot=any(k in label for k in config.hotspot_keywords),
                incident_site=label == config.incident_site_label,
            ))

    links = []
    for r in range(rows):
        for c in range(cols):
            # Right neighbour
            if c < cols - 1:
                links.append(Link(
                    source=node_id(r, c),
                    target=node_id(r, c + 1),
                    flow_rate=float(rng.uniform(flow_low, flow_high)),
                ))
            # Neighbour below
            if r < rows - 1:
                links.append(Link(
                    source=node_id(r, c),
                    target=node_id(r + 1, c),
                    flow_rate=float(rng.uniform(flow_low, flow_high)),
                ))

    return nodes, links


def expected_link_count(rows: int, cols: int) -> int:
    """Number of links a rows × cols grid has."""
    if rows <= 0 or cols <= 0:
        return 0
    return (cols - 1) * rows + (rows - 1) * cols
