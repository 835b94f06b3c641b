"""Tests for inventory schemas and the equipped-item wire format."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from battle_core.models.enums import EquipmentSlot
from battle_core.models.items import (
    Equipment,
    InventoryData,
    decode_equip_key,
    encode_equip_key,
)


@pytest.fixture
def sword() -> Equipment:
    return Equipment(id="iron_sword", name="Iron Sword", slot=EquipmentSlot.WEAPON, attack_bonus=5)


class TestEquipKeys:
    """Tests for equipment key encoding."""

    def test_encode(self) -> None:
        assert encode_equip_key(("hero", EquipmentSlot.ARMOR)) == "hero-armor"

    def test_decode_keeps_hyphenated_unit_ids(self) -> None:
        """Test only the last hyphen separates the slot."""
        assert decode_equip_key("recruited-wolf-weapon") == ("recruited-wolf", "weapon")

    def test_decode_malformed(self) -> None:
        with pytest.raises(ValueError):
            decode_equip_key("weapon")


class TestInventoryData:
    """Tests for the InventoryData model."""

    def test_defaults(self) -> None:
        inventory = InventoryData()

        assert inventory.items == ()
        assert inventory.equipped_items == {}
        assert inventory.max_item_slots == 50

    def test_equipped_items_use_tagged_map(self, sword: Equipment) -> None:
        """Test the equipped mapping is written as a tagged Map."""
        inventory = InventoryData(equipped_items={("hero", EquipmentSlot.WEAPON): sword})

        wire = inventory.to_wire()

        assert wire["equippedItems"]["__type"] == "Map"
        assert wire["equippedItems"]["entries"][0][0] == "hero-weapon"
        assert wire["equippedItems"]["entries"][0][1]["attackBonus"] == 5

    def test_json_round_trip(self, sword: Equipment) -> None:
        """Test tuple keys survive a JSON text round trip."""
        inventory = InventoryData(equipped_items={("hero", EquipmentSlot.WEAPON): sword})

        text = inventory.model_dump_json(by_alias=True)
        restored = InventoryData.model_validate(json.loads(text))

        assert restored == inventory
        assert ("hero", EquipmentSlot.WEAPON) in restored.equipped_items

    def test_equipped_item_not_in_pool(self, sword: Equipment) -> None:
        """Test an equipped item cannot also sit unequipped."""
        with pytest.raises(ValidationError):
            InventoryData(
                equipped_items={("hero", EquipmentSlot.WEAPON): sword},
                unequipped_items=(sword,),
            )

    def test_count(self) -> None:
        from battle_core.data.items import HEALTH_POTION, MEGA_POTION

        inventory = InventoryData(items=(HEALTH_POTION, MEGA_POTION, HEALTH_POTION))

        assert inventory.count("health_potion") == 2
        assert inventory.count("elixir") == 0
