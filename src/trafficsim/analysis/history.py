"""
Rolling history of aggregate samples for the dashboard charts.

One sample per tick: (time, congestion, flow), where congestion is
100 - overall_health and flow is a synthetic network throughput figure.
Only the most recent maxlen samples are kept.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from trafficsim.core.simulation import TrafficSnapshot


@dataclass(frozen=True)
class HistorySample:
    """One charted point."""

    time: str  # Wall-clock label, HH:MM:SS
    congestion: int  # 100 - overall_health
    flow: int  # Synthetic vehicles/minute across the network


@dataclass(eq=False)
class HistoryBuffer:
    """Keeps the last maxlen samples, oldest first."""

    maxlen: int = 20
    flow_range: tuple[int, int] = (1000, 1500)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    _samples: deque = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.maxlen < 1:
            raise ValueError(f"maxlen must be at least 1, got {self.maxlen}")
        self._samples = deque(maxlen=self.maxlen)

    def record(self, snapshot: "TrafficSnapshot") -> HistorySample:
        """Append a sample for the snapshot, evicting the oldest if full."""
        low, high = self.flow_range
        sample = HistorySample(
            time=datetime.fromtimestamp(snapshot.timestamp).strftime("%H:%M:%S"),
            congestion=snapshot.congestion_index,
            flow=int(self.rng.integers(low, high)),
        )
        self._samples.append(sample)
        return sample

    # Lets a buffer be passed straight to Simulation.subscribe
    __call__ = record

    @property
    def samples(self) -> list[HistorySample]:
        return list(self._samples)

    @property
    def latest(self) -> HistorySample | None:
        return self._samples[-1] if self._samples else None

    def congestion_series(self) -> np.ndarray:
        return np.array([s.congestion for s in self._samples], dtype=np.float64)

    def flow_series(self) -> np.ndarray:
        return np.array([s.flow for s in self._samples], dtype=np.float64)

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)
