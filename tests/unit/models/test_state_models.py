"""Tests for run snapshot and save envelope schemas."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from battle_core.data.items import HEALTH_POTION
from battle_core.models.enums import EquipmentSlot
from battle_core.models.items import Equipment, InventoryData
from battle_core.models.state import GameStateSnapshot, ProgressionCounters, SaveEnvelope


STAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _snapshot(make_unit: Any) -> GameStateSnapshot:
    boots = Equipment(id="boots", name="Boots", slot=EquipmentSlot.ACCESSORY, speed_bonus=3)
    return GameStateSnapshot(
        player_team=(make_unit("hero"),),
        inventory=(HEALTH_POTION,),
        inventory_data=InventoryData(
            items=(HEALTH_POTION,),
            equipped_items={("hero", EquipmentSlot.ACCESSORY): boots},
        ),
        progression=ProgressionCounters(runs_attempted=1, battles_won=2),
        run_seed=12345,
    )


class TestGameStateSnapshot:
    """Tests for the GameStateSnapshot model."""

    def test_defaults(self) -> None:
        snapshot = GameStateSnapshot()

        assert snapshot.player_team == ()
        assert snapshot.choice.battle_index == 0
        assert snapshot.choice.last_choices is None
        assert snapshot.active_gem_state.active_gem is None

    def test_wire_keys(self, make_unit: Any) -> None:
        wire = _snapshot(make_unit).to_wire()

        assert set(wire) == {
            "playerTeam",
            "inventory",
            "gems",
            "activeGemState",
            "inventoryData",
            "progression",
            "choice",
            "runSeed",
        }
        assert wire["progression"]["battlesWon"] == 2


class TestSaveEnvelope:
    """Tests for wrapping snapshots in envelopes."""

    def test_wrap_adds_version_and_timestamp(self, make_unit: Any) -> None:
        envelope = SaveEnvelope.wrap(_snapshot(make_unit), version="7.0", timestamp=STAMP)

        assert envelope.version == "7.0"
        assert envelope.timestamp == STAMP
        assert envelope.run_seed == 12345

    def test_to_snapshot_drops_envelope_fields(self, make_unit: Any) -> None:
        snapshot = _snapshot(make_unit)

        restored = SaveEnvelope.wrap(snapshot, version="7.0", timestamp=STAMP).to_snapshot()

        assert type(restored) is GameStateSnapshot
        assert restored == snapshot

    def test_json_round_trip(self, make_unit: Any) -> None:
        envelope = SaveEnvelope.wrap(_snapshot(make_unit), version="7.0", timestamp=STAMP)

        restored = SaveEnvelope.model_validate_json(envelope.model_dump_json(by_alias=True))

        assert restored == envelope
