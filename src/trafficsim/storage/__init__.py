"""
Persisted dashboard records.

Not used by the simulation core. Records live in an opaque key-value
store under fixed keys, each holding a JSON array:
- vehicle registry
- incident tickets
- audit trail
"""

from trafficsim.storage.store import JsonFileStore, KeyValueStore, MemoryStore
from trafficsim.storage.records import AuditLog, IncidentRecord, VehicleRecord
from trafficsim.storage.registry import (
    KEY_INCIDENTS,
    KEY_LOGS,
    KEY_VEHICLES,
    MAX_LOGS,
    RecordRegistry,
)

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "AuditLog",
    "IncidentRecord",
    "VehicleRecord",
    "KEY_INCIDENTS",
    "KEY_LOGS",
    "KEY_VEHICLES",
    "MAX_LOGS",
    "RecordRegistry",
]
