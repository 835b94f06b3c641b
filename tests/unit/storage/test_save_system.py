"""Tests for the save/load subsystem."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import pytest

from battle_core.core.exceptions import SaveCorruptedError, SlotNotFoundError, StorageError
from battle_core.data.items import HEALTH_POTION
from battle_core.models.enums import EquipmentSlot
from battle_core.models.items import Equipment, InventoryData
from battle_core.models.state import GameStateSnapshot, ProgressionCounters
from battle_core.storage.blob_store import InMemoryBlobStore
from battle_core.storage.save_system import SaveSystem


STAMP = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FailingWriteStore(InMemoryBlobStore):
    """Store whose writes always fail."""

    async def write(self, slot: str, payload: str) -> None:
        raise StorageError("disk full", slot=slot, operation="write")


class FailingListStore(InMemoryBlobStore):
    async def list(self) -> list[Any]:
        raise StorageError("listing unavailable", operation="list")


@pytest.fixture
def snapshot(make_unit: Any) -> GameStateSnapshot:
    ring = Equipment(id="ring", name="Bronze Ring", slot=EquipmentSlot.ACCESSORY, speed_bonus=2)
    return GameStateSnapshot(
        player_team=(make_unit("hero", current_hp=70),),
        inventory=(HEALTH_POTION,),
        inventory_data=InventoryData(
            items=(HEALTH_POTION,),
            equipped_items={("hero", EquipmentSlot.ACCESSORY): ring},
        ),
        progression=ProgressionCounters(runs_attempted=2, battles_won=3),
        run_seed=12345,
    )


class TestSave:
    """Tests for writing saves."""

    async def test_round_trip(
        self, memory_store: InMemoryBlobStore, events: Any, snapshot: GameStateSnapshot
    ) -> None:
        system = SaveSystem(memory_store, version="7.0", events=events, clock=lambda: STAMP)

        saved = (await system.save("slot1", snapshot)).unwrap()
        loaded = (await system.load("slot1")).unwrap()

        assert saved.timestamp == STAMP
        assert loaded == saved
        assert loaded.to_snapshot() == snapshot

    async def test_wire_format(
        self, memory_store: InMemoryBlobStore, save_system: SaveSystem, snapshot: GameStateSnapshot
    ) -> None:
        await save_system.save("slot1", snapshot)

        data = json.loads(await memory_store.read("slot1"))

        assert data["version"] == "7.0"
        assert data["runSeed"] == 12345
        assert data["inventoryData"]["equippedItems"]["__type"] == "Map"
        assert data["inventoryData"]["equippedItems"]["entries"][0][0] == "hero-accessory"
        assert data["playerTeam"][0]["currentHp"] == 70

    async def test_emits_written_event(
        self, save_system: SaveSystem, event_sink: Any, snapshot: GameStateSnapshot
    ) -> None:
        await save_system.save("slot1", snapshot)

        (event,) = event_sink.named("save:written")
        assert event["slot"] == "slot1"
        assert event["size"] > 0

    async def test_write_failure_wrapped(
        self, events: Any, event_sink: Any, snapshot: GameStateSnapshot
    ) -> None:
        system = SaveSystem(FailingWriteStore(), version="7.0", events=events)

        error = (await system.save("slot1", snapshot)).unwrap_err()

        assert isinstance(error, StorageError)
        assert error.message == "Failed to save: disk full"
        assert error.details == {"slot": "slot1", "operation": "write"}
        assert event_sink.levels("save:failed") == ["error"]


class TestLoad:
    """Tests for reading saves."""

    async def test_missing_slot(self, save_system: SaveSystem) -> None:
        error = (await save_system.load("nope")).unwrap_err()

        assert isinstance(error, SlotNotFoundError)

    async def test_invalid_json(self, memory_store: InMemoryBlobStore, save_system: SaveSystem) -> None:
        await memory_store.write("slot1", "{not json")

        error = (await save_system.load("slot1")).unwrap_err()

        assert isinstance(error, SaveCorruptedError)
        assert error.message == "Save payload is not valid JSON"
        assert error.details["slot"] == "slot1"

    async def test_not_an_object(self, memory_store: InMemoryBlobStore, save_system: SaveSystem) -> None:
        await memory_store.write("slot1", "[1, 2, 3]")

        error = (await save_system.load("slot1")).unwrap_err()

        assert isinstance(error, SaveCorruptedError)
        assert error.details["reason"] == "list"

    async def test_schema_mismatch(
        self, memory_store: InMemoryBlobStore, save_system: SaveSystem
    ) -> None:
        payload = {"version": "7.0", "timestamp": STAMP.isoformat(), "playerTeam": [{"id": "x"}]}
        await memory_store.write("slot1", json.dumps(payload))

        error = (await save_system.load("slot1")).unwrap_err()

        assert isinstance(error, SaveCorruptedError)
        assert error.message == "Save payload does not match the snapshot schema"
        assert error.details["errors"]

    async def test_version_mismatch_warns_and_loads(
        self,
        memory_store: InMemoryBlobStore,
        events: Any,
        event_sink: Any,
        snapshot: GameStateSnapshot,
    ) -> None:
        await SaveSystem(memory_store, version="6.0", events=events).save("slot1", snapshot)

        loaded = await SaveSystem(memory_store, version="7.0", events=events).load("slot1")

        assert loaded.ok
        assert loaded.unwrap().version == "6.0"
        assert event_sink.named("save:version_mismatch") == [
            {"slot": "slot1", "found": "6.0", "expected": "7.0"}
        ]
        assert event_sink.levels("save:version_mismatch") == ["warning"]

    async def test_backfills_inventory_data(
        self, memory_store: InMemoryBlobStore, save_system: SaveSystem, snapshot: GameStateSnapshot
    ) -> None:
        await save_system.save("slot1", snapshot)
        data = json.loads(await memory_store.read("slot1"))
        del data["inventoryData"]
        await memory_store.write("slot1", json.dumps(data))

        loaded = (await save_system.load("slot1")).unwrap()

        assert loaded.inventory_data == InventoryData()
        assert loaded.inventory == (HEALTH_POTION,)


class TestSlots:
    """Tests for delete, list and has_slot."""

    async def test_delete(
        self, save_system: SaveSystem, event_sink: Any, snapshot: GameStateSnapshot
    ) -> None:
        await save_system.save("slot1", snapshot)

        assert (await save_system.delete("slot1")).ok
        assert not await save_system.has_slot("slot1")
        assert event_sink.named("save:deleted") == [{"slot": "slot1"}]
        assert isinstance((await save_system.delete("slot1")).unwrap_err(), SlotNotFoundError)

    async def test_list_and_has_slot(
        self, save_system: SaveSystem, snapshot: GameStateSnapshot
    ) -> None:
        await save_system.save("a", snapshot)
        await save_system.save("b", snapshot)

        listing = (await save_system.list_slots()).unwrap()

        assert sorted(info.slot for info in listing) == ["a", "b"]
        assert await save_system.has_slot("a")
        assert not await save_system.has_slot("c")

    async def test_list_failure(self, events: Any) -> None:
        system = SaveSystem(FailingListStore(), version="7.0", events=events)

        assert isinstance((await system.list_slots()).unwrap_err(), StorageError)
        assert await system.has_slot("a") is False

    def test_default_version_from_settings(self, memory_store: InMemoryBlobStore) -> None:
        assert SaveSystem(memory_store).version == "7.0"
