"""
Record types held by the registry: vehicles, incidents, audit entries.

Each record round-trips through a plain dict for JSON storage.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from typing import Literal, get_args

VehicleStatus = Literal["CLEAR", "WANTED", "EXPIRED"]
IncidentType = Literal["ACCIDENT", "BREAKDOWN", "VIP_MOVEMENT", "PROTEST", "ROAD_WORK"]
IncidentStatus = Literal["OPEN", "RESOLVED"]
Priority = Literal["HIGH", "MEDIUM", "LOW"]


def _check_choice(name: str, value: str, choices) -> None:
    allowed = get_args(choices)
    if value not in allowed:
        raise ValueError(f"{name} must be one of {allowed}, got {value!r}")


class _Record:
    """Dict conversion shared by all record types."""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict):
        """Build a record, ignoring keys the record doesn't define."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class VehicleRecord(_Record):
    """A registered vehicle."""

    id: str
    plate: str
    owner: str
    vehicle: str
    status: VehicleStatus = "CLEAR"
    challans: int = 0
    registered: str = ""

    def __post_init__(self):
        _check_choice("status", self.status, VehicleStatus)
        if self.challans < 0:
            raise ValueError(f"challans must be non-negative, got {self.challans}")


@dataclass(frozen=True)
class IncidentRecord(_Record):
    """An incident ticket."""

    id: str
    type: IncidentType
    location: str
    description: str
    status: IncidentStatus = "OPEN"
    reported_by: str = ""
    timestamp: str = ""
    priority: Priority = "MEDIUM"

    def __post_init__(self):
        _check_choice("type", self.type, IncidentType)
        _check_choice("status", self.status, IncidentStatus)
        _check_choice("priority", self.priority, Priority)


@dataclass(frozen=True)
class AuditLog(_Record):
    """One audit trail entry."""

    id: str
    action: str
    user: str
    details: str
    timestamp: str


SEED_VEHICLES = (
    VehicleRecord("REC-1001", "KA-01 AB 1234", "Rajesh Kumar", "Maruti Swift", "CLEAR", 0, "2023-01-15"),
    VehicleRecord("REC-1002", "DL-3C XY 9876", "Priya Sharma", "Hyundai Creta", "WANTED", 3, "2022-11-20"),
    VehicleRecord("REC-1003", "MH-02 CD 4567", "Amit Patel", "Tata Nexon", "CLEAR", 1, "2024-02-10"),
    VehicleRecord("REC-1004", "TN-09 EF 3210", "Sneha Reddy", "Mahindra Thar", "EXPIRED", 0, "2019-05-05"),
    VehicleRecord("REC-1005", "UP-16 GH 7890", "Vikram Singh", "Toyota Innova", "CLEAR", 0, "2021-08-12"),
)

SEED_INCIDENTS = (
    IncidentRecord(
        "INC-501", "ACCIDENT", "Silk Board Junction", "Two car collision, minor injuries.",
        "RESOLVED", "Auto-Detect", "2024-05-20 08:30 AM", "HIGH",
    ),
    IncidentRecord(
        "INC-502", "VIP_MOVEMENT", "Connaught Place", "PM Convoy route sanitation.",
        "OPEN", "Admin Officer", "2024-05-20 10:15 AM", "HIGH",
    ),
)

SEED_LOGS = (
    AuditLog("LOG-001", "SYSTEM_BOOT", "SYSTEM", "TrafficNet Server initialized.", "2024-05-20 08:00 AM"),
)
