"""
Tick driver: calls Simulation.tick() on a fixed cadence.

Single-threaded and cooperative. The driver sleeps until the next
deadline, ticks, and repeats. Deadlines are absolute (start + k·interval),
so a slow tick delays only itself; slots that were missed entirely are
dropped rather than replayed back to back.

Clock and sleep are injectable so tests can run the loop instantly.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time
from typing import Callable

from trafficsim.core.simulation import Simulation

logger = logging.getLogger(__name__)


@dataclass
class DriverConfig:
    """Configuration for the tick driver."""

    interval: float = 2.0  # Seconds between ticks

    def __post_init__(self):
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")


class TickDriver:
    """Fixed-period loop around a Simulation."""

    def __init__(
        self,
        simulation: Simulation,
        config: DriverConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.simulation = simulation
        self.config = config if config is not None else DriverConfig()
        self._clock = clock
        self._sleep = sleep
        self._running = False
        self.ticks_run = 0
        self.missed_slots = 0

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the loop to exit before its next tick."""
        self._running = False

    def run(self, max_ticks: int | None = None) -> int:
        """
        Run the loop until stop() is called or max_ticks ticks have run.

        The first tick fires one interval after start.

        Returns:
            Number of ticks run in this call
        """
        interval = self.config.interval
        self._running = True
        ticks = 0
        next_deadline = self._clock() + interval
        logger.info("Tick driver started (interval=%.2fs)", interval)

        try:
            while self._running and (max_ticks is None or ticks < max_ticks):
                delay = next_deadline - self._clock()
                if delay > 0:
                    self._sleep(delay)
                if not self._running:
                    break

                self.simulation.tick()
                ticks += 1
                self.ticks_run += 1

                next_deadline += interval
                now = self._clock()
                while next_deadline <= now:
                    next_deadline += interval
                    self.missed_slots += 1
        finally:
            self._running = False
            logger.info("Tick driver stopped after %d ticks", ticks)

        return ticks
