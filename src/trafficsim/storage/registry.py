"""
Record registry: vehicles, incident tickets and the audit trail.

Every list lives under its own fixed key as a JSON array, newest first.
Lists that have never been written are seeded with demo records. A value
that fails to parse is logged and replaced by the seed records for that
read, so the dashboard keeps working on a corrupted store.

Every mutation appends an audit entry; the audit trail keeps the last
100 entries.
"""

from __future__ import annotations
import json
import logging
import time
from dataclasses import replace
from datetime import datetime
from typing import Callable, Sequence

import numpy as np

from trafficsim.storage.records import (
    SEED_INCIDENTS,
    SEED_LOGS,
    SEED_VEHICLES,
    AuditLog,
    IncidentRecord,
    IncidentType,
    Priority,
    VehicleRecord,
    VehicleStatus,
)
from trafficsim.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

KEY_VEHICLES = "trafficnet_vehicles_db_v1"
KEY_INCIDENTS = "trafficnet_incidents_db_v1"
KEY_LOGS = "trafficnet_logs_db_v1"

MAX_LOGS = 100
WANTED_ABOVE_CHALLANS = 5


class RecordRegistry:
    """CRUD over the persisted record lists."""

    def __init__(
        self,
        store: KeyValueStore,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.rng = rng if rng is not None else np.random.default_rng()
        self._clock = clock

    # ─── helpers ────────────────────────────────────────────────────────

    def _timestamp(self) -> str:
        return datetime.fromtimestamp(self._clock()).strftime("%Y-%m-%d %I:%M %p")

    def _load(self, key: str, record_type, seed: Sequence, persist_seed: bool) -> list:
        raw = self.store.get(key)
        if raw is None:
            if persist_seed:
                self._save(key, seed)
            return list(seed)
        try:
            return [record_type.from_dict(item) for item in json.loads(raw)]
        except (json.JSONDecodeError, TypeError, ValueError, AttributeError):
            logger.exception("Corrupt value under %s, using seed records", key)
            return list(seed)

    def _save(self, key: str, records: Sequence) -> None:
        self.store.set(key, json.dumps([r.to_dict() for r in records]))

    # ─── vehicles ───────────────────────────────────────────────────────

    def get_vehicles(self) -> list[VehicleRecord]:
        return self._load(KEY_VEHICLES, VehicleRecord, SEED_VEHICLES, persist_seed=True)

    def add_vehicle(
        self,
        plate: str,
        owner: str,
        vehicle: str,
        status: VehicleStatus = "CLEAR",
        challans: int = 0,
        registered: str = "",
        user: str = "Admin",
    ) -> list[VehicleRecord]:
        """Register a vehicle under a fresh REC-NNNN id; newest first."""
        record = VehicleRecord(
            id=f"REC-{int(self.rng.integers(1000, 10000))}",
            plate=plate,
            owner=owner,
            vehicle=vehicle,
            status=status,
            challans=challans,
            registered=registered,
        )
        updated = [record] + self.get_vehicles()
        self._save(KEY_VEHICLES, updated)
        self.log_action("ADD_VEHICLE", user, f"Added record for {plate}")
        return updated

    def delete_vehicle(self, record_id: str, user: str = "Admin") -> list[VehicleRecord]:
        updated = [v for v in self.get_vehicles() if v.id != record_id]
        self._save(KEY_VEHICLES, updated)
        self.log_action("DELETE_VEHICLE", user, f"Deleted record {record_id}")
        return updated

    def issue_challan(
        self,
        record_id: str,
        amount: float,
        reason: str,
        user: str = "Officer",
    ) -> list[VehicleRecord]:
        """
        Fine a vehicle: one more challan, WANTED once it has more than 5.
        """
        updated = []
        for v in self.get_vehicles():
            if v.id == record_id:
                challans = v.challans + 1
                status = "WANTED" if challans > WANTED_ABOVE_CHALLANS else v.status
                v = replace(v, challans=challans, status=status)
            updated.append(v)
        self._save(KEY_VEHICLES, updated)
        self.log_action("ISSUE_CHALLAN", user, f"Fined {record_id} ₹{amount:g} for {reason}")
        return updated

    # ─── incidents ──────────────────────────────────────────────────────

    def get_incidents(self) -> list[IncidentRecord]:
        return self._load(KEY_INCIDENTS, IncidentRecord, SEED_INCIDENTS, persist_seed=True)

    def add_incident(
        self,
        type: IncidentType,
        location: str,
        description: str,
        reported_by: str,
        priority: Priority = "MEDIUM",
        status: str = "OPEN",
    ) -> list[IncidentRecord]:
        """File a ticket under a fresh INC-NNN id, stamped now; newest first."""
        record = IncidentRecord(
            id=f"INC-{int(self.rng.integers(100, 1000))}",
            type=type,
            location=location,
            description=description,
            status=status,
            reported_by=reported_by,
            timestamp=self._timestamp(),
            priority=priority,
        )
        updated = [record] + self.get_incidents()
        self._save(KEY_INCIDENTS, updated)
        self.log_action("REPORT_INCIDENT", reported_by, f"Reported {type} at {location}")
        return updated

    def resolve_incident(self, incident_id: str, user: str = "Admin") -> list[IncidentRecord]:
        updated = [
            replace(inc, status="RESOLVED") if inc.id == incident_id else inc
            for inc in self.get_incidents()
        ]
        self._save(KEY_INCIDENTS, updated)
        self.log_action("RESOLVE_INCIDENT", user, f"Resolved incident {incident_id}")
        return updated

    # ─── audit trail ────────────────────────────────────────────────────

    def get_logs(self) -> list[AuditLog]:
        return self._load(KEY_LOGS, AuditLog, SEED_LOGS, persist_seed=False)

    def log_action(self, action: str, user: str, details: str) -> AuditLog:
        """Prepend an audit entry, keeping the newest MAX_LOGS."""
        entry = AuditLog(
            id=f"LOG-{int(self._clock() * 1000)}",
            action=action,
            user=user,
            details=details,
            timestamp=self._timestamp(),
        )
        updated = ([entry] + self.get_logs())[:MAX_LOGS]
        self._save(KEY_LOGS, updated)
        logger.debug("[%s] %s: %s", user, action, details)
        return entry

    def record_dispatch(self, node_id: str, user: str = "User") -> AuditLog:
        """Audit a unit dispatch to a junction."""
        return self.log_action("DISPATCH_POLICE", user, f"Dispatched unit to Node {node_id}")

    def reset(self) -> None:
        """Wipe every stored list; the next reads reseed."""
        logger.info("System reset: clearing %s", type(self.store).__name__)
        self.store.clear()
