"""
Dispatch: send a response unit to a junction.

The only mutation applied outside the tick cadence. The engine consumes
the flag on following ticks: dispatched nodes get a large negative delta,
and the flag clears itself once congestion falls below the recall level.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Sequence

from trafficsim.core.grid import Node


def dispatch(nodes: Sequence[Node], node_id: str) -> list[Node]:
    """
    Mark node_id as having a unit on site.

    Unknown ids are a no-op. Dispatching to an already dispatched node
    changes nothing.
    """
    return [
        replace(n, police_dispatched=True) if n.id == node_id else n
        for n in nodes
    ]


def dispatched_count(nodes: Sequence[Node]) -> int:
    """Number of nodes with a unit currently on site."""
    return sum(1 for n in nodes if n.police_dispatched)
