"""Unit tests for key-value stores and the record registry."""

import json
from datetime import datetime

import pytest

from trafficsim.storage import (
    KEY_INCIDENTS,
    KEY_LOGS,
    KEY_VEHICLES,
    MAX_LOGS,
    JsonFileStore,
    MemoryStore,
    RecordRegistry,
)
from trafficsim.storage.records import IncidentRecord, VehicleRecord

NOW = 1_716_192_000.0


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def registry(store, rng):
    return RecordRegistry(store, rng=rng, clock=lambda: NOW)


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_get_set_delete(self, store):
        assert store.get("a") is None
        store.set("a", "1")
        assert store.get("a") == "1"
        store.delete("a")
        store.delete("a")
        assert store.get("a") is None

    def test_clear_and_keys(self, store):
        store.set("a", "1")
        store.set("b", "2")
        assert sorted(store.keys()) == ["a", "b"]
        store.clear()
        assert len(store) == 0


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "db.json"
        JsonFileStore(path).set("k", "[1, 2]")
        assert JsonFileStore(path).get("k") == "[1, 2]"

    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "db.json"
        JsonFileStore(path).set("k", "v")
        assert json.loads(path.read_text()) == {"k": "v"}

    def test_clear_writes_empty(self, tmp_path):
        path = tmp_path / "db.json"
        s = JsonFileStore(path)
        s.set("k", "v")
        s.clear()
        assert JsonFileStore(path).get("k") is None

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            JsonFileStore(path)

    def test_non_string_values_raise(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text('{"k": 1}')
        with pytest.raises(ValueError):
            JsonFileStore(path)


class TestRecords:
    """Tests for record validation."""

    def test_bad_vehicle_status(self):
        with pytest.raises(ValueError):
            VehicleRecord("REC-1", "X", "Y", "Z", status="STOLEN")

    def test_negative_challans(self):
        with pytest.raises(ValueError):
            VehicleRecord("REC-1", "X", "Y", "Z", challans=-1)

    def test_bad_incident_type(self):
        with pytest.raises(ValueError):
            IncidentRecord("INC-1", "FLOOD", "MG Road", "Water")

    def test_from_dict_ignores_unknown_keys(self):
        v = VehicleRecord.from_dict({
            "id": "REC-1", "plate": "P", "owner": "O", "vehicle": "V", "colour": "red",
        })
        assert v.id == "REC-1"


class TestVehicles:
    """Vehicle registry operations."""

    def test_seeded_on_first_read(self, registry, store):
        vehicles = registry.get_vehicles()
        assert len(vehicles) == 5
        assert vehicles[0].id == "REC-1001"
        assert store.get(KEY_VEHICLES) is not None

    def test_add_vehicle(self, registry):
        vehicles = registry.add_vehicle("KA-05 ZZ 0001", "Asha Rao", "Honda City")
        assert len(vehicles) == 6
        new = vehicles[0]
        assert new.plate == "KA-05 ZZ 0001"
        assert new.id.startswith("REC-")
        assert 1000 <= int(new.id[4:]) <= 9999
        assert registry.get_vehicles() == vehicles
        assert registry.get_logs()[0].action == "ADD_VEHICLE"

    def test_delete_vehicle(self, registry):
        vehicles = registry.delete_vehicle("REC-1003")
        assert "REC-1003" not in {v.id for v in vehicles}
        assert len(registry.get_vehicles()) == 4
        assert registry.get_logs()[0].details == "Deleted record REC-1003"

    def test_issue_challan_increments(self, registry):
        vehicles = registry.issue_challan("REC-1003", 500, "Signal jump")
        v = next(v for v in vehicles if v.id == "REC-1003")
        assert v.challans == 2
        assert v.status == "CLEAR"
        assert registry.get_logs()[0].details == "Fined REC-1003 ₹500 for Signal jump"

    def test_wanted_after_more_than_five(self, registry):
        for _ in range(5):
            registry.issue_challan("REC-1001", 100, "Speeding")
        v = next(v for v in registry.get_vehicles() if v.id == "REC-1001")
        assert v.challans == 5
        assert v.status == "CLEAR"

        registry.issue_challan("REC-1001", 100, "Speeding")
        v = next(v for v in registry.get_vehicles() if v.id == "REC-1001")
        assert v.challans == 6
        assert v.status == "WANTED"

    def test_challan_unknown_id_changes_nothing(self, registry):
        before = registry.get_vehicles()
        assert registry.issue_challan("REC-0000", 100, "x") == before

    def test_corrupt_value_falls_back_to_seed(self, registry, store):
        store.set(KEY_VEHICLES, "{broken")
        assert len(registry.get_vehicles()) == 5

    def test_wrong_shape_falls_back_to_seed(self, registry, store):
        store.set(KEY_VEHICLES, json.dumps({"id": "REC-1"}))
        assert len(registry.get_vehicles()) == 5


class TestIncidents:
    """Incident ticket operations."""

    def test_seeded(self, registry):
        incidents = registry.get_incidents()
        assert [i.id for i in incidents] == ["INC-501", "INC-502"]

    def test_add_incident(self, registry):
        incidents = registry.add_incident(
            "BREAKDOWN", "Hebbal Flyover", "Bus stalled in left lane", "Officer Rao", priority="LOW"
        )
        new = incidents[0]
        assert new.id.startswith("INC-")
        assert 100 <= int(new.id[4:]) <= 999
        assert new.status == "OPEN"
        assert new.timestamp == datetime.fromtimestamp(NOW).strftime("%Y-%m-%d %I:%M %p")
        log = registry.get_logs()[0]
        assert log.action == "REPORT_INCIDENT"
        assert log.user == "Officer Rao"
        assert log.details == "Reported BREAKDOWN at Hebbal Flyover"

    def test_resolve_incident(self, registry):
        incidents = registry.resolve_incident("INC-502")
        assert all(i.status == "RESOLVED" for i in incidents)
        assert registry.get_incidents() == incidents


class TestAuditLog:
    """Audit trail behaviour."""

    def test_seed_not_persisted(self, registry, store):
        logs = registry.get_logs()
        assert logs[0].action == "SYSTEM_BOOT"
        assert store.get(KEY_LOGS) is None

    def test_log_action_prepends(self, registry):
        entry = registry.log_action("USER_LOGIN", "admin", "New session started")
        logs = registry.get_logs()
        assert logs[0] == entry
        assert logs[1].action == "SYSTEM_BOOT"
        assert entry.id == f"LOG-{int(NOW * 1000)}"

    def test_capped(self, registry):
        for i in range(MAX_LOGS + 20):
            registry.log_action("TEST", "bot", str(i))
        logs = registry.get_logs()
        assert len(logs) == MAX_LOGS
        assert logs[0].details == str(MAX_LOGS + 19)

    def test_record_dispatch(self, registry):
        entry = registry.record_dispatch("n-1-0", user="control")
        assert entry.action == "DISPATCH_POLICE"
        assert entry.details == "Dispatched unit to Node n-1-0"


class TestReset:
    """Factory reset."""

    def test_reset_clears_all_keys(self, registry, store):
        registry.add_vehicle("P", "O", "V")
        registry.add_incident("PROTEST", "Rajiv Chowk", "March", "Admin")
        assert store.get(KEY_INCIDENTS) is not None

        registry.reset()
        assert len(store) == 0
        assert len(registry.get_vehicles()) == 5
