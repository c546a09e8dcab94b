"""
Demo: Live dashboard loop.

Drives the simulation on its real 2-second cadence, printing one status
line per tick and journaling actions to a JSON record store:
- Ticks under rush hour, then switches to an accident
- Dispatches a unit to the first critical junction it sees
- Stops after --ticks ticks (or Ctrl-C)
"""

import argparse
import logging
from pathlib import Path

from trafficsim.core import DriverConfig, NodeStatus, Scenario, Simulation, TickDriver
from trafficsim.analysis import HistoryBuffer, summarize
from trafficsim.storage import JsonFileStore, RecordRegistry


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--ticks", type=int, default=10)
    parser.add_argument("--interval", type=float, default=2.0)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--store", type=Path, default=Path("output") / "records.json")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    sim = Simulation.from_config(seed=args.seed, scenario=Scenario.RUSH_HOUR)
    registry = RecordRegistry(JsonFileStore(args.store))
    registry.log_action("SYSTEM_BOOT", "SYSTEM", "Simulation started")

    history = HistoryBuffer()
    sim.subscribe(history)
    driver = TickDriver(sim, DriverConfig(interval=args.interval))

    def on_snapshot(snapshot):
        s = summarize(snapshot)
        print(f"tick {s.tick:3d} | health {s.overall_health:3d}% | "
              f"crit {s.critical:2d} | units {s.dispatched_units} | "
              f"flow {history.latest.flow}")

        if snapshot.tick == args.ticks // 2:
            sim.set_scenario(Scenario.ACCIDENT)

        if s.dispatched_units == 0:
            critical = [n for n in snapshot.nodes if n.status is NodeStatus.CRITICAL and not n.incident_site]
            if critical:
                sim.dispatch(critical[0].id)
                registry.record_dispatch(critical[0].id, user="demo")

    sim.subscribe(on_snapshot)

    try:
        driver.run(max_ticks=args.ticks)
    except KeyboardInterrupt:
        driver.stop()

    print(f"\nAudit trail ({args.store}):")
    for entry in registry.get_logs()[:10]:
        print(f"  {entry.timestamp}  {entry.action:16s} {entry.details}")


if __name__ == "__main__":
    main()
