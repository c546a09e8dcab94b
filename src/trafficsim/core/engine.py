"""
Tick Engine: one discrete step of the traffic rule.

Each tick:
1. Every node draws a symmetric random perturbation
2. The scenario profile adds its bias; hotspots add theirs
3. Dispatched units subtract a large relief term
4. congestion_new = clamp(congestion + delta × multiplier, 0, 100)
5. Status is re-derived; dispatch clears once congestion drops below 30
6. Every link's flow is throttled by its TARGET node's new congestion

Under a scenario that forces an incident, the incident site node skips
the rule entirely and is pinned at 98 / critical.

The engine holds no simulation state. advance() reads the previous
nodes and links and returns new ones; the only side effect is drawing
from the injected random source.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Sequence

import numpy as np

from trafficsim.core.grid import Link, Node, NodeStatus, status_for
from trafficsim.core.scenario import SCENARIO_PROFILES, Scenario, ScenarioProfile


@dataclass
class TickEngineConfig:
    """Constants of the per-tick update rule."""

    perturbation_width: float = 8.0  # base_delta ∈ [-width/2, width/2)
    hotspot_bias: float = 3.0
    dispatch_relief: float = 15.0  # Subtracted from delta while a unit is on site
    dispatch_clear_below: float = 30.0  # Unit is recalled below this congestion
    incident_congestion: float = 98.0

    base_flow_range: tuple[float, float] = (5.0, 15.0)
    flow_bounds: tuple[float, float] = (1.0, 30.0)

    profiles: dict[Scenario, ScenarioProfile] = field(
        default_factory=lambda: dict(SCENARIO_PROFILES)
    )

    def __post_init__(self):
        lo, hi = self.flow_bounds
        if not 0 <= lo <= hi:
            raise ValueError(f"flow_bounds must satisfy 0 <= low <= high, got {self.flow_bounds}")
        base_lo, base_hi = self.base_flow_range
        if not 0 <= base_lo < base_hi:
            raise ValueError(f"base_flow_range must be increasing, got {self.base_flow_range}")
        missing = [s.value for s in Scenario if s not in self.profiles]
        if missing:
            raise ValueError(f"profiles missing for scenarios: {', '.join(missing)}")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class TickEngine:
    """Applies the traffic update rule to a node/link set."""

    config: TickEngineConfig = field(default_factory=TickEngineConfig)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    def advance(
        self,
        nodes: Sequence[Node],
        links: Sequence[Link],
        scenario: Scenario,
    ) -> tuple[list[Node], list[Link]]:
        """
        Compute the next tick.

        Args:
            nodes: Nodes as of the previous tick
            links: Links as of the previous tick
            scenario: Active scenario for this tick

        Returns:
            (nodes, links) for the new tick. Inputs are not modified.
        """
        profile = self.config.profiles[scenario]
        new_nodes = self._advance_nodes(nodes, profile)
        new_links = self._advance_links(new_nodes, links, profile)
        return new_nodes, new_links

    def _advance_nodes(self, nodes: Sequence[Node], profile: ScenarioProfile) -> list[Node]:
        cfg = self.config

        # One draw per node, pinned nodes included
        base_deltas = (self.rng.random(len(nodes)) - 0.5) * cfg.perturbation_width

        updated = []
        for node, base_delta in zip(nodes, base_deltas):
            if profile.forces_incident and node.incident_site:
                updated.append(replace(
                    node,
                    congestion_level=cfg.incident_congestion,
                    status=NodeStatus.CRITICAL,
                ))
                continue

            delta = float(base_delta) + profile.bias
            if node.hotspot:
                delta += cfg.hotspot_bias
            if node.police_dispatched:
                delta -= cfg.dispatch_relief

            congestion = clamp(node.congestion_level + delta * profile.multiplier, 0.0, 100.0)

            dispatched = node.police_dispatched
            if dispatched and congestion < cfg.dispatch_clear_below:
                dispatched = False

            updated.append(replace(
                node,
                congestion_level=congestion,
                status=status_for(congestion),
                police_dispatched=dispatched,
            ))
        return updated

    def _advance_links(
        self,
        nodes: Sequence[Node],
        links: Sequence[Link],
        profile: ScenarioProfile,
    ) -> list[Link]:
        cfg = self.config
        congestion_by_id = {n.id: n.congestion_level for n in nodes}
        base_lo, base_hi = cfg.base_flow_range
        flow_lo, flow_hi = cfg.flow_bounds

        base_flows = self.rng.uniform(base_lo, base_hi, size=len(links))

        updated = []
        for link, base_flow in zip(links, base_flows):
            if link.source not in congestion_by_id or link.target not in congestion_by_id:
                # Dangling link: keep last known flow
                updated.append(link)
                continue

            # Congested destination throttles inbound flow
            bottleneck = (100.0 - congestion_by_id[link.target]) / 100.0
            flow = float(base_flow) * bottleneck * profile.multiplier
            updated.append(replace(link, flow_rate=clamp(flow, flow_lo, flow_hi)))
        return updated
