"""
Analysis layer: derived quantities for charts and operators.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- HistoryBuffer: rolling (time, congestion, flow) samples for charting
- summarize: status counts and headline numbers for a snapshot
- find_node / hottest_nodes: junction lookup
- congestion_field: congestion laid out as a 2D array for heatmaps
"""

from trafficsim.analysis.history import HistoryBuffer, HistorySample
from trafficsim.analysis.summary import SnapshotSummary, find_node, hottest_nodes, summarize
from trafficsim.analysis.fields import congestion_field, grid_shape, parse_node_position

__all__ = [
    "HistoryBuffer",
    "HistorySample",
    "SnapshotSummary",
    "find_node",
    "hottest_nodes",
    "summarize",
    "congestion_field",
    "grid_shape",
    "parse_node_position",
]
