"""
Aggregator: one overall health score for the whole grid.

health = round(mean(100 - congestion_level)), rounded half-up.
An empty grid is vacuously healthy (100).
"""

from __future__ import annotations
from typing import Sequence

import numpy as np

from trafficsim.core.grid import Node


def overall_health(nodes: Sequence[Node]) -> int:
    """Mean headroom (100 - congestion) across nodes, as an integer in [0, 100]."""
    if len(nodes) == 0:
        return 100
    headroom = 100.0 - np.array([n.congestion_level for n in nodes], dtype=np.float64)
    return int(np.floor(headroom.mean() + 0.5))
