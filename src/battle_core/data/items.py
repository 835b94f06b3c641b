"""Consumable item catalog and equipment naming tables."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from battle_core.models.enums import EquipmentSlot, ItemRarity
from battle_core.models.items import Item


HEALTH_POTION = Item(
    id="health_potion",
    name="Health Potion",
    description="Restores 50 HP.",
    hp_restore=50,
)
MEGA_POTION = Item(
    id="mega_potion",
    name="Mega Potion",
    description="Restores 100 HP.",
    hp_restore=100,
)
ELIXIR = Item(
    id="elixir",
    name="Elixir",
    description="Fully restores HP.",
    rarity=ItemRarity.RARE,
    hp_restore=999,
)
PHOENIX_DOWN = Item(
    id="phoenix_down",
    name="Phoenix Down",
    description="Revives a fallen unit with 50 HP.",
    rarity=ItemRarity.RARE,
    hp_restore=50,
    revives=True,
)
ANTIDOTE = Item(
    id="antidote",
    name="Antidote",
    description="Cures status ailments.",
    cures_status=True,
)

CONSUMABLES: Mapping[str, Item] = MappingProxyType({
    item.id: item for item in (HEALTH_POTION, MEGA_POTION, ELIXIR, PHOENIX_DOWN, ANTIDOTE)
})

EQUIPMENT_NAMES: Mapping[EquipmentSlot, Mapping[ItemRarity, str]] = MappingProxyType({
    EquipmentSlot.WEAPON: MappingProxyType({
        ItemRarity.COMMON: "Iron Sword",
        ItemRarity.UNCOMMON: "Steel Blade",
        ItemRarity.RARE: "Legendary Sword",
    }),
    EquipmentSlot.ARMOR: MappingProxyType({
        ItemRarity.COMMON: "Iron Armor",
        ItemRarity.UNCOMMON: "Steel Plate",
        ItemRarity.RARE: "Legendary Armor",
    }),
    EquipmentSlot.ACCESSORY: MappingProxyType({
        ItemRarity.COMMON: "Bronze Ring",
        ItemRarity.UNCOMMON: "Silver Ring",
        ItemRarity.RARE: "Legendary Ring",
    }),
})
"""Equipment display names by slot and rarity."""


def get_consumable(item_id: str) -> Item | None:
    return CONSUMABLES.get(item_id)


__all__ = [
    "HEALTH_POTION",
    "MEGA_POTION",
    "ELIXIR",
    "PHOENIX_DOWN",
    "ANTIDOTE",
    "CONSUMABLES",
    "EQUIPMENT_NAMES",
    "get_consumable",
]
