"""提醒仓库测试。"""
import json

import pytest

from forget_me_not.errors import ReminderValidationError
from forget_me_not.reminders.models import Location
from forget_me_not.reminders.repository import ReminderRepository
from forget_me_not.storage.kv import MemoryKeyValueStore

CVS = {"name": "CVS Pharmacy", "address": "1 Main St", "latitude": 40.0, "longitude": -75.0, "radius": 200}


def _stored(store: MemoryKeyValueStore) -> list:
    return json.loads(store.get("reminders").decode("utf-8"))


def test_create_reminder_defaults(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    r = repo.create("Buy milk", CVS)
    assert r.text == "Buy milk"
    assert r.completed is False
    assert r.completed_at is None
    assert r.triggered_count == 0
    assert r.last_triggered_at is None
    assert r.created_at == clock.now
    assert r.location.radius == 200
    assert repo.get(r.id) == r


def test_create_prepends_and_ids_unique(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    first = repo.create("Buy milk", CVS)
    second = repo.create("Pick up prescription", CVS)
    assert [r.id for r in repo.list_all()] == [second.id, first.id]
    assert first.id != second.id


def test_create_persists_snapshot_with_stored_field_names(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    r = repo.create("Buy milk", CVS)
    assert repo.flush(timeout=5)
    data = _stored(store)
    assert len(data) == 1
    assert set(data[0]) == {
        "id", "text", "location", "completed", "createdAt",
        "completedAt", "triggeredCount", "lastTriggeredAt",
    }
    assert set(data[0]["location"]) == {"name", "address", "latitude", "longitude", "radius"}
    assert data[0]["id"] == r.id
    assert data[0]["createdAt"].endswith("Z")


def test_create_default_radius_and_address(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    r = repo.create("Buy milk", {"name": "Shop", "latitude": 1.0, "longitude": 2.0, "address": None})
    assert r.location.radius == 200
    assert r.location.address == ""


@pytest.mark.parametrize(
    "text, location",
    [
        ("", CVS),
        ("   ", CVS),
        ("Buy milk", {**CVS, "radius": 49}),
        ("Buy milk", {**CVS, "radius": 1001}),
        ("Buy milk", {**CVS, "name": "  "}),
        ("Buy milk", {**CVS, "latitude": 91}),
        ("Buy milk", {"name": "Shop"}),
    ],
)
def test_create_rejects_invalid_input_without_mutation(store, clock, text, location) -> None:
    repo = ReminderRepository(store, clock=clock)
    with pytest.raises(ReminderValidationError):
        repo.create(text, location)
    assert repo.count() == 0
    assert repo.flush(timeout=5)
    assert store.get("reminders") is None


def test_create_accepts_location_model_and_checks_radius(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    loc = Location(name="Gym", latitude=10.0, longitude=10.0, radius=1000)
    assert repo.create("Stretch", loc).location == loc
    with pytest.raises(ReminderValidationError):
        repo.create("Stretch", Location(name="Gym", latitude=10.0, longitude=10.0, radius=20))


def test_toggle_twice_round_trips(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    r = repo.create("Buy milk", CVS)
    clock.advance(minutes=5)
    done = repo.toggle_completed(r.id)
    assert done.completed is True
    assert done.completed_at == clock.now
    undone = repo.toggle_completed(r.id)
    assert undone.completed is False
    assert undone.completed_at is None


def test_toggle_and_delete_missing_id_are_noops(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    r = repo.create("Buy milk", CVS)
    before = repo.list_all()
    assert repo.toggle_completed("missing") is None
    assert repo.delete("missing") is False
    assert repo.list_all() == before
    assert repo.get(r.id).completed is False


def test_delete_removes_from_lists_and_storage(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    keep = repo.create("Buy milk", CVS)
    gone = repo.create("Return books", CVS)
    repo.toggle_completed(gone.id)
    assert repo.delete(gone.id) is True
    assert gone.id not in [r.id for r in repo.list_active()]
    assert gone.id not in [r.id for r in repo.list_completed()]
    assert repo.flush(timeout=5)
    assert [d["id"] for d in _stored(store)] == [keep.id]


def test_active_completed_and_location_queries(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    a = repo.create("Buy milk", CVS)
    b = repo.create("Lift", {**CVS, "name": "Downtown Gym"})
    repo.toggle_completed(b.id)
    assert [r.id for r in repo.list_active()] == [a.id]
    assert [r.id for r in repo.list_completed()] == [b.id]
    assert [r.id for r in repo.list_by_location_name_contains("cvs")] == [a.id]
    assert [r.id for r in repo.list_by_location_name_contains("GYM")] == [b.id]
    assert repo.list_by_location_name_contains("bakery") == []
    assert repo.active_count() == 1


def test_record_trigger_batch(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    a = repo.create("Buy milk", CVS)
    b = repo.create("Buy bread", CVS)
    clock.advance(minutes=1)
    assert repo.record_trigger({a.id, b.id, "missing"}) == 2
    for r in (repo.get(a.id), repo.get(b.id)):
        assert r.triggered_count == 1
        assert r.last_triggered_at == clock.now
    assert repo.record_trigger([]) == 0


def test_snapshots_are_copies(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    r = repo.create("Buy milk", CVS)
    snapshot = repo.list_active()[0]
    snapshot.triggered_count = 99
    assert repo.get(r.id).triggered_count == 0


def test_load_round_trip(store, clock) -> None:
    repo = ReminderRepository(store, clock=clock)
    r = repo.create("Buy milk", CVS)
    repo.record_trigger([r.id])
    repo.flush(timeout=5)
    repo.close()

    reloaded = ReminderRepository(store, clock=clock)
    assert reloaded.load() == 1
    assert reloaded.get(r.id) == repo.get(r.id)
