"""
Snapshot summaries and junction lookup.

Read-only helpers over a TrafficSnapshot: status counts, the number of
units on site, mean road flow, the worst junctions, and the dashboard's
free-text junction search.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from trafficsim.core.dispatch import dispatched_count
from trafficsim.core.grid import Node, NodeStatus

if TYPE_CHECKING:
    from trafficsim.core.simulation import TrafficSnapshot


@dataclass(frozen=True)
class SnapshotSummary:
    """Headline numbers for one snapshot."""

    tick: int
    overall_health: int
    normal: int
    congested: int
    critical: int
    dispatched_units: int
    mean_flow: float
    worst_node_id: str | None


def summarize(snapshot: "TrafficSnapshot") -> SnapshotSummary:
    """Compute headline numbers for a snapshot."""
    counts = {status: 0 for status in NodeStatus}
    for node in snapshot.nodes:
        counts[node.status] += 1

    flows = [link.flow_rate for link in snapshot.links]
    worst = hottest_nodes(snapshot.nodes, 1)

    return SnapshotSummary(
        tick=snapshot.tick,
        overall_health=snapshot.overall_health,
        normal=counts[NodeStatus.NORMAL],
        congested=counts[NodeStatus.CONGESTED],
        critical=counts[NodeStatus.CRITICAL],
        dispatched_units=dispatched_count(snapshot.nodes),
        mean_flow=float(np.mean(flows)) if flows else 0.0,
        worst_node_id=worst[0].id if worst else None,
    )


def hottest_nodes(nodes: Sequence[Node], n: int = 3) -> list[Node]:
    """The n most congested nodes, worst first (ties keep grid order)."""
    return sorted(nodes, key=lambda node: -node.congestion_level)[:max(n, 0)]


def find_node(nodes: Sequence[Node], query: str) -> Node | None:
    """
    First node whose label contains query, case-insensitively.

    Blank queries match nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return None
    for node in nodes:
        if needle in node.label.lower():
            return node
    return None
