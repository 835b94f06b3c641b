"""Equipment slots: equipping, unequipping and stat bonuses.

Each unit has one weapon, one armor and one accessory slot. Equipping an
item takes it out of the unequipped pool and returns whatever occupied
the slot before to that pool.
"""

from __future__ import annotations

from dataclasses import dataclass

from battle_core.core.exceptions import InventoryFullError, ItemNotFoundError
from battle_core.core.logging import get_logger
from battle_core.core.result import Err, Ok, Result
from battle_core.models.enums import EquipmentSlot
from battle_core.models.items import Equipment, InventoryData


logger = get_logger(__name__)


@dataclass(frozen=True)
class EquipmentBonuses:
    attack: int = 0
    defense: int = 0
    speed: int = 0
    hp: int = 0


def equipped_item(
    inventory: InventoryData, unit_id: str, slot: EquipmentSlot
) -> Equipment | None:
    return inventory.equipped_items.get((unit_id, slot))


def equip_item(
    inventory: InventoryData, unit_id: str, equipment: Equipment
) -> Result[InventoryData, ItemNotFoundError]:
    """Equip an item from the unequipped pool.

    Args:
        inventory: Current inventory.
        unit_id: Unit receiving the item.
        equipment: Item to equip; must be in the unequipped pool.

    Returns:
        Ok with the new inventory, or Err(ItemNotFoundError) when the item
        is not in the pool.
    """
    index = next(
        (i for i, item in enumerate(inventory.unequipped_items) if item.id == equipment.id),
        None,
    )
    if index is None:
        return Err(ItemNotFoundError("Item not found in inventory", item_id=equipment.id))

    pool = list(inventory.unequipped_items)
    pool.pop(index)
    key = (unit_id, equipment.slot)
    previous = inventory.equipped_items.get(key)
    if previous is not None:
        pool.append(previous)

    equipped = dict(inventory.equipped_items)
    equipped[key] = equipment
    logger.debug(
        "Item equipped",
        unit_id=unit_id,
        slot=str(equipment.slot),
        item_id=equipment.id,
        replaced=previous.id if previous else None,
    )
    return Ok(
        inventory.model_copy(
            update={"equipped_items": equipped, "unequipped_items": tuple(pool)}
        )
    )


def unequip_item(
    inventory: InventoryData, unit_id: str, slot: EquipmentSlot
) -> Result[InventoryData, ItemNotFoundError | InventoryFullError]:
    key = (unit_id, slot)
    current = inventory.equipped_items.get(key)
    if current is None:
        return Err(ItemNotFoundError(f"No {slot} equipped in slot", details={"unit_id": unit_id}))
    if len(inventory.unequipped_items) >= inventory.max_equipment_slots:
        return Err(
            InventoryFullError(
                "Equipment pool is full",
                pool="equipment",
                capacity=inventory.max_equipment_slots,
            )
        )
    equipped = {k: v for k, v in inventory.equipped_items.items() if k != key}
    return Ok(
        inventory.model_copy(
            update={
                "equipped_items": equipped,
                "unequipped_items": inventory.unequipped_items + (current,),
            }
        )
    )


def add_equipment(
    inventory: InventoryData, equipment: Equipment
) -> Result[InventoryData, InventoryFullError]:
    """Put a newly acquired item into the unequipped pool."""
    if len(inventory.unequipped_items) >= inventory.max_equipment_slots:
        return Err(
            InventoryFullError(
                "Equipment pool is full",
                pool="equipment",
                capacity=inventory.max_equipment_slots,
            )
        )
    return Ok(
        inventory.model_copy(
            update={"unequipped_items": inventory.unequipped_items + (equipment,)}
        )
    )


def equipment_bonuses(inventory: InventoryData, unit_id: str) -> EquipmentBonuses:
    """Sum the stat bonuses of everything ``unit_id`` has equipped."""
    attack = defense = speed = hp = 0
    for slot in EquipmentSlot:
        item = equipped_item(inventory, unit_id, slot)
        if item is None:
            continue
        attack += item.attack_bonus
        defense += item.defense_bonus
        speed += item.speed_bonus
        hp += item.hp_bonus
    return EquipmentBonuses(attack=attack, defense=defense, speed=speed, hp=hp)


def release_unit_equipment(inventory: InventoryData, unit_id: str) -> InventoryData:
    """Move everything ``unit_id`` wears back to the pool, ignoring capacity.

    Used when a unit leaves the team so its gear is not lost.
    """
    released = tuple(
        item for (owner, _), item in inventory.equipped_items.items() if owner == unit_id
    )
    if not released:
        return inventory
    equipped = {
        key: item for key, item in inventory.equipped_items.items() if key[0] != unit_id
    }
    return inventory.model_copy(
        update={
            "equipped_items": equipped,
            "unequipped_items": inventory.unequipped_items + released,
        }
    )


__all__ = [
    "EquipmentBonuses",
    "equipped_item",
    "equip_item",
    "unequip_item",
    "add_equipment",
    "equipment_bonuses",
    "release_unit_equipment",
]
