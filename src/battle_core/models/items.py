"""Pydantic V2 schemas for consumables, equipment and the run inventory.

The equipped-item mapping is keyed by ``(unit_id, slot)``. In JSON it is
written with the tagged ``Map`` wrapper and ``"<unit_id>-<slot>"`` entry
keys so it survives a text round-trip.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_serializer, field_validator, model_validator

from battle_core.core import constants
from battle_core.core.serialization import decode_tagged_map, encode_tagged_map, is_tagged_map
from battle_core.models.base import WireModel
from battle_core.models.enums import EquipmentSlot, ItemRarity


EquipKey = tuple[str, EquipmentSlot]


class Item(WireModel):
    """An inventory item.

    Attributes:
        id: Item identifier; copies of the same item share it.
        name: Display name.
        description: Flavor text.
        rarity: Rarity tier.
        consumable: Whether the item is used up on use.
        hp_restore: HP restored on use (0 for none).
        revives: Whether the item can revive a defeated unit.
        cures_status: Whether the item cures status effects.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    rarity: ItemRarity = ItemRarity.COMMON
    consumable: bool = True
    hp_restore: int = Field(default=0, ge=0)
    revives: bool = False
    cures_status: bool = False


class Equipment(WireModel):
    """A piece of equipment granting flat stat bonuses."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    slot: EquipmentSlot
    rarity: ItemRarity = ItemRarity.COMMON
    attack_bonus: int = 0
    defense_bonus: int = 0
    speed_bonus: int = 0
    hp_bonus: int = 0


def encode_equip_key(key: EquipKey) -> str:
    unit_id, slot = key
    return f"{unit_id}-{EquipmentSlot(slot).value}"


def decode_equip_key(raw: Any) -> Any:
    """Turn a ``"<unit_id>-<slot>"`` key back into a tuple.

    Non-string keys are returned unchanged for pydantic to validate.
    """
    if not isinstance(raw, str):
        return raw
    unit_id, sep, slot = raw.rpartition("-")
    if not sep or not unit_id:
        raise ValueError(f"Malformed equipment key: {raw!r}")
    return (unit_id, slot)


class InventoryData(WireModel):
    """Run inventory: consumable stack plus equipment bookkeeping.

    Invariant: an equipped item never also appears in the unequipped pool.
    """

    items: tuple[Item, ...] = ()
    equipped_items: dict[EquipKey, Equipment] = Field(default_factory=dict)
    unequipped_items: tuple[Equipment, ...] = ()
    max_item_slots: int = Field(default=constants.MAX_ITEM_SLOTS, ge=0)
    max_equipment_slots: int = Field(default=constants.MAX_EQUIPMENT_SLOTS, ge=0)

    @field_validator("equipped_items", mode="before")
    @classmethod
    def decode_equipped_items(cls, value: Any) -> Any:
        if is_tagged_map(value):
            value = decode_tagged_map(value)
        if isinstance(value, dict):
            return {decode_equip_key(key): item for key, item in value.items()}
        return value

    @field_serializer("equipped_items", when_used="json")
    def encode_equipped_items(self, value: dict[EquipKey, Equipment]) -> dict[str, Any]:
        return encode_tagged_map(
            {
                encode_equip_key(key): equipment.model_dump(mode="json", by_alias=True)
                for key, equipment in value.items()
            }
        )

    @model_validator(mode="after")
    def validate_equipment_pools(self) -> "InventoryData":
        equipped_ids = {equipment.id for equipment in self.equipped_items.values()}
        overlap = equipped_ids.intersection(item.id for item in self.unequipped_items)
        if overlap:
            raise ValueError(f"Equipped items also in unequipped pool: {sorted(overlap)}")
        return self

    def count(self, item_id: str) -> int:
        return sum(1 for item in self.items if item.id == item_id)


__all__ = [
    "EquipKey",
    "Item",
    "Equipment",
    "InventoryData",
    "encode_equip_key",
    "decode_equip_key",
]
