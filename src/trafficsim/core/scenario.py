"""
Scenarios: external modifier profiles for the tick rule.

A scenario carries no state. It is looked up in SCENARIO_PROFILES to get
the bias added to each node's random perturbation and the multiplier
applied to the final delta and to link flow.
"""

from dataclasses import dataclass
from enum import Enum


class Scenario(Enum):
    """Operator-selected traffic scenario."""

    NORMAL = "Normal Flow"
    RUSH_HOUR = "Rush Hour"
    ACCIDENT = "Accident on Main"
    EVENT = "Stadium Event"


@dataclass(frozen=True)
class ScenarioProfile:
    """How a scenario shapes the per-tick update."""

    bias: float = 0.0  # Added to the node delta before scaling
    multiplier: float = 1.0  # Scales node delta and link flow
    forces_incident: bool = False  # Pins the incident site at critical


SCENARIO_PROFILES: dict[Scenario, ScenarioProfile] = {
    Scenario.NORMAL: ScenarioProfile(bias=0.0, multiplier=1.0),
    Scenario.RUSH_HOUR: ScenarioProfile(bias=2.0, multiplier=1.8),
    Scenario.ACCIDENT: ScenarioProfile(bias=0.0, multiplier=1.3, forces_incident=True),
    Scenario.EVENT: ScenarioProfile(bias=0.0, multiplier=1.5),
}
