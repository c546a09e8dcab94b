"""
Core simulation primitives.

This layer knows NOTHING about charts, rendering or stored records.
It only knows:
- Junction nodes and directed road links (grid)
- Scenario profiles (bias + multiplier lookup)
- The per-tick congestion/flow rule (engine)
- Overall health aggregation
- Dispatching response units
- The simulation context that owns state between ticks, and its driver
"""

from trafficsim.core.grid import (
    DEFAULT_LABELS,
    GridConfig,
    Link,
    Node,
    NodeStatus,
    build_grid,
    status_for,
)
from trafficsim.core.scenario import SCENARIO_PROFILES, Scenario, ScenarioProfile
from trafficsim.core.engine import TickEngine, TickEngineConfig
from trafficsim.core.health import overall_health
from trafficsim.core.dispatch import dispatch
from trafficsim.core.simulation import Simulation, TrafficSnapshot
from trafficsim.core.driver import DriverConfig, TickDriver

__all__ = [
    "DEFAULT_LABELS",
    "GridConfig",
    "Link",
    "Node",
    "NodeStatus",
    "build_grid",
    "status_for",
    "SCENARIO_PROFILES",
    "Scenario",
    "ScenarioProfile",
    "TickEngine",
    "TickEngineConfig",
    "overall_health",
    "dispatch",
    "Simulation",
    "TrafficSnapshot",
    "DriverConfig",
    "TickDriver",
]
