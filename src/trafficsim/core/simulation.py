"""
Simulation: the context that owns the traffic state between ticks.

The context holds the current nodes and links, the active scenario and
the engine. Everything that reads or changes the state goes through it:
- tick(): advance one step and publish a snapshot to listeners
- dispatch(): mark a node, visible in the very next snapshot
- set_scenario(): switch the profile used from the next tick on
- snapshot(): read the current state without advancing

Nodes and links are frozen dataclasses held in tuples, so snapshots can
share them without copying and listeners cannot corrupt the state.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time
from typing import Callable, Sequence

import numpy as np

from trafficsim.core.dispatch import dispatch as dispatch_to_node
from trafficsim.core.dispatch import dispatched_count
from trafficsim.core.engine import TickEngine, TickEngineConfig
from trafficsim.core.grid import GridConfig, Link, Node, NodeStatus, build_grid
from trafficsim.core.health import overall_health
from trafficsim.core.scenario import Scenario

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrafficSnapshot:
    """Read-only view of the grid at the end of one tick."""

    nodes: tuple[Node, ...]
    links: tuple[Link, ...]
    timestamp: float  # Seconds since the epoch
    overall_health: int  # 0-100
    tick: int = 0
    scenario: Scenario = Scenario.NORMAL

    def get_node(self, node_id: str) -> Node | None:
        """Look up a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @property
    def congestion_index(self) -> int:
        """100 - overall_health, the value charted as congestion."""
        return 100 - self.overall_health


SnapshotListener = Callable[[TrafficSnapshot], None]


class Simulation:
    """
    Owns the mutable traffic state and drives the engine.

    Single writer: tick(), dispatch() and set_scenario() are expected to be
    called from one thread of control, never concurrently.
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        links: Sequence[Link],
        engine: TickEngine | None = None,
        scenario: Scenario = Scenario.NORMAL,
        clock: Callable[[], float] = time.time,
    ):
        self._nodes = tuple(nodes)
        self._links = tuple(links)
        self.engine = engine if engine is not None else TickEngine()
        self._scenario = scenario
        self._clock = clock
        self._listeners: list[SnapshotListener] = []

        self.current_tick = 0
        self._last_snapshot = self._make_snapshot()

    @classmethod
    def from_config(
        cls,
        grid_config: GridConfig | None = None,
        engine_config: TickEngineConfig | None = None,
        seed: int | None = None,
        scenario: Scenario = Scenario.NORMAL,
        clock: Callable[[], float] = time.time,
    ) -> Simulation:
        """
        Build the grid and engine from configs, sharing one random source.

        Args:
            grid_config: Grid layout (4 × 5 default grid if None)
            engine_config: Tick rule constants (defaults if None)
            seed: Seed for the shared numpy Generator (fresh entropy if None)
            scenario: Initial scenario
            clock: Timestamp source for snapshots
        """
        if grid_config is None:
            grid_config = GridConfig()
        if engine_config is None:
            engine_config = TickEngineConfig()

        rng = np.random.default_rng(seed)
        nodes, links = build_grid(grid_config.rows, grid_config.cols, rng=rng, config=grid_config)
        engine = TickEngine(config=engine_config, rng=rng)
        return cls(nodes, links, engine=engine, scenario=scenario, clock=clock)

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def links(self) -> tuple[Link, ...]:
        return self._links

    @property
    def scenario(self) -> Scenario:
        return self._scenario

    def set_scenario(self, scenario: Scenario) -> None:
        """Switch scenario; applies from the next tick."""
        if scenario is not self._scenario:
            logger.info("Scenario changed: %s -> %s", self._scenario.value, scenario.value)
        self._scenario = scenario

    def subscribe(self, listener: SnapshotListener) -> None:
        """Register a callable to receive every new snapshot."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, node_id: str) -> bool:
        """
        Dispatch a unit to node_id.

        Returns:
            True if a node matched, False if the id is unknown (no change).
        """
        if not any(n.id == node_id for n in self._nodes):
            logger.warning("Dispatch ignored: unknown node %s", node_id)
            return False

        self._nodes = tuple(dispatch_to_node(self._nodes, node_id))
        logger.info("Unit dispatched to %s", node_id)
        self._last_snapshot = self._make_snapshot()
        return True

    def tick(self) -> TrafficSnapshot:
        """Advance one step and publish the resulting snapshot."""
        nodes, links = self.engine.advance(self._nodes, self._links, self._scenario)
        self._nodes = tuple(nodes)
        self._links = tuple(links)
        self.current_tick += 1

        snapshot = self._make_snapshot()
        self._last_snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def snapshot(self) -> TrafficSnapshot:
        """The most recent snapshot (reflects dispatches since the last tick)."""
        return self._last_snapshot

    def run(self, n_ticks: int) -> dict:
        """Run n_ticks back to back (no cadence) and return summary stats."""
        for _ in range(n_ticks):
            self.tick()

        levels = [n.congestion_level for n in self._nodes]
        return {
            "n_ticks": n_ticks,
            "current_tick": self.current_tick,
            "overall_health": self._last_snapshot.overall_health,
            "mean_congestion": float(np.mean(levels)) if levels else 0.0,
            "max_congestion": float(np.max(levels)) if levels else 0.0,
            "critical_nodes": sum(1 for n in self._nodes if n.status is NodeStatus.CRITICAL),
            "dispatched_units": dispatched_count(self._nodes),
        }

    def _make_snapshot(self) -> TrafficSnapshot:
        return TrafficSnapshot(
            nodes=self._nodes,
            links=self._links,
            timestamp=self._clock(),
            overall_health=overall_health(self._nodes),
            tick=self.current_tick,
            scenario=self._scenario,
        )
