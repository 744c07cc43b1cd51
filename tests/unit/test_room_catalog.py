import json

from reservations.models import RoomRecord
from rooms import DEFAULT_ROOMS, RoomCatalog


def test_loads_rooms_and_accepts_legacy_equipment_key(tmp_path):
    path = tmp_path / "rooms.json"
    path.write_text(json.dumps([
        {"id": 1, "name": "Lab", "location": "East", "capacity": 10, "equipments": ["projector"], "available": True},
        {"id": 2, "name": "Closed", "capacity": 5, "available": False},
        {"name": "no id"},
    ]), encoding="utf-8")

    catalog = RoomCatalog(str(path))

    lab = catalog.get_room(1)
    assert lab.equipment == ("projector",)
    assert lab.location == "East"
    assert catalog.get_room("2").available is False
    assert catalog.get_room(3) is None
    assert [room.id for room in catalog.list_rooms(available_only=True)] == [1]


def test_seed_if_empty_writes_defaults_once(tmp_path):
    path = tmp_path / "rooms.json"
    catalog = RoomCatalog(str(path))

    assert catalog.seed_if_empty(DEFAULT_ROOMS) is True
    assert catalog.seed_if_empty(DEFAULT_ROOMS) is False

    reloaded = RoomCatalog(str(path))
    assert len(reloaded.list_rooms()) == len(DEFAULT_ROOMS)
    assert reloaded.get_room(1) == DEFAULT_ROOMS[0]


def test_save_room_persists(tmp_path):
    path = tmp_path / "rooms.json"
    catalog = RoomCatalog(str(path))
    catalog.save_room(RoomRecord(id=5, name="Studio", capacity=3, location="West"))

    assert RoomCatalog(str(path)).get_room(5).name == "Studio"
