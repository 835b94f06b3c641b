"""Consumable items: usability rules and inventory stack bookkeeping.

The HP rules are shared by roster units (between battles) and battle
units (mid-battle ``UseItem`` commands), so they work on plain
``(current_hp, max_hp)`` pairs.
"""

from __future__ import annotations

from battle_core.core.exceptions import InventoryFullError, ItemNotFoundError, ItemNotUsableError
from battle_core.core.logging import get_logger
from battle_core.core.result import Err, Ok, Result
from battle_core.models.items import InventoryData, Item
from battle_core.models.units import RosterUnit


logger = get_logger(__name__)


def check_item_use(item: Item, current_hp: int, max_hp: int) -> str | None:
    """Reason ``item`` cannot be used on a unit at ``current_hp``, or None.

    Args:
        item: Item to use.
        current_hp: Target's current HP, 0 when knocked out.
        max_hp: Target's maximum HP.

    Returns:
        A human-readable refusal, or None when the item can be used.
    """
    if not item.consumable:
        return "Item is not consumable"
    if item.hp_restore <= 0 and not item.cures_status:
        return "Item has no usable effect"
    if item.hp_restore > 0:
        if item.revives:
            if current_hp > 0:
                return f"{item.name} only works on KO'd units"
        else:
            if current_hp == 0:
                return "Cannot use on KO'd unit"
            if current_hp >= max_hp:
                return "Target is already at full HP"
        return None
    # Status effects are not modelled, so a pure cure has nothing to do.
    return "No status effects to cure"


def healed_hp(item: Item, current_hp: int, max_hp: int) -> int:
    return min(current_hp + item.hp_restore, max_hp)


def can_use_item(item: Item, unit: RosterUnit) -> Result[bool, ItemNotUsableError]:
    reason = check_item_use(item, unit.current_hp, unit.max_hp)
    if reason is not None:
        return Err(ItemNotUsableError(reason, item_id=item.id, unit_id=unit.id))
    return Ok(True)


def usable_items(inventory: InventoryData, unit: RosterUnit) -> tuple[Item, ...]:
    """Items in the stack that could be used on ``unit`` right now."""
    return tuple(item for item in inventory.items if can_use_item(item, unit).ok)


def use_consumable(
    item: Item,
    unit: RosterUnit,
    inventory: InventoryData,
) -> Result[tuple[RosterUnit, InventoryData], ItemNotUsableError]:
    """Use one copy of ``item`` on ``unit``.

    Args:
        item: Item to use.
        unit: Target roster unit.
        inventory: Inventory the item is taken from.

    Returns:
        Ok with the updated unit and inventory, or Err(ItemNotUsableError).
        Inputs are never modified.
    """
    if not item.consumable:
        return Err(ItemNotUsableError("Item is not consumable", item_id=item.id, unit_id=unit.id))

    index = _index_of(inventory, item.id)
    if index is None:
        return Err(
            ItemNotUsableError("Item not found in inventory", item_id=item.id, unit_id=unit.id)
        )

    reason = check_item_use(item, unit.current_hp, unit.max_hp)
    if reason is not None:
        return Err(ItemNotUsableError(reason, item_id=item.id, unit_id=unit.id))

    updated_unit = unit.model_copy(
        update={"current_hp": healed_hp(item, unit.current_hp, unit.max_hp)}
    )
    items = inventory.items[:index] + inventory.items[index + 1 :]
    logger.debug("Consumable used", item_id=item.id, unit_id=unit.id)
    return Ok((updated_unit, inventory.model_copy(update={"items": items})))


# =============================================================================
# Stack Bookkeeping
# =============================================================================


def add_item(
    inventory: InventoryData, item: Item
) -> Result[InventoryData, InventoryFullError]:
    if len(inventory.items) >= inventory.max_item_slots:
        return Err(
            InventoryFullError(
                "Inventory is full", pool="items", capacity=inventory.max_item_slots
            )
        )
    return Ok(inventory.model_copy(update={"items": inventory.items + (item,)}))


def add_items(
    inventory: InventoryData, items: tuple[Item, ...]
) -> Result[InventoryData, InventoryFullError]:
    """Add several items, all or nothing."""
    if len(inventory.items) + len(items) > inventory.max_item_slots:
        return Err(
            InventoryFullError(
                f"Inventory cannot hold {len(items)} more items",
                pool="items",
                capacity=inventory.max_item_slots,
            )
        )
    return Ok(inventory.model_copy(update={"items": inventory.items + items}))


def remove_item(inventory: InventoryData, item_id: str) -> Result[InventoryData, ItemNotFoundError]:
    """Remove the first copy of ``item_id`` from the stack."""
    index = _index_of(inventory, item_id)
    if index is None:
        return Err(ItemNotFoundError("Item not found in inventory", item_id=item_id))
    items = inventory.items[:index] + inventory.items[index + 1 :]
    return Ok(inventory.model_copy(update={"items": items}))


def _index_of(inventory: InventoryData, item_id: str) -> int | None:
    for index, candidate in enumerate(inventory.items):
        if candidate.id == item_id:
            return index
    return None


__all__ = [
    "check_item_use",
    "healed_hp",
    "can_use_item",
    "usable_items",
    "use_consumable",
    "add_item",
    "add_items",
    "remove_item",
]
