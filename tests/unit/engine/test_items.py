"""Tests for consumable use and the item stack."""

from __future__ import annotations

from typing import Any

import pytest

from battle_core.core.exceptions import InventoryFullError, ItemNotFoundError, ItemNotUsableError
from battle_core.data.items import ANTIDOTE, ELIXIR, HEALTH_POTION, MEGA_POTION, PHOENIX_DOWN
from battle_core.engine.items import (
    add_item,
    add_items,
    check_item_use,
    remove_item,
    usable_items,
    use_consumable,
)
from battle_core.models.items import InventoryData


class TestCheckItemUse:
    """Tests for usability rules."""

    def test_potion_on_wounded(self) -> None:
        assert check_item_use(HEALTH_POTION, 40, 100) is None

    def test_potion_on_full_hp(self) -> None:
        assert check_item_use(HEALTH_POTION, 100, 100) == "Target is already at full HP"

    def test_potion_on_knocked_out(self) -> None:
        assert check_item_use(HEALTH_POTION, 0, 100) == "Cannot use on KO'd unit"

    def test_phoenix_down(self) -> None:
        assert check_item_use(PHOENIX_DOWN, 0, 100) is None
        assert check_item_use(PHOENIX_DOWN, 10, 100) == "Phoenix Down only works on KO'd units"

    def test_antidote(self) -> None:
        assert check_item_use(ANTIDOTE, 40, 100) == "No status effects to cure"

    def test_non_consumable(self) -> None:
        relic = HEALTH_POTION.model_copy(update={"consumable": False})

        assert check_item_use(relic, 40, 100) == "Item is not consumable"


class TestUseConsumable:
    """Tests for using items between battles."""

    def test_heals_and_consumes_one(self, make_unit: Any) -> None:
        inventory = InventoryData(items=(HEALTH_POTION, HEALTH_POTION))
        unit = make_unit(current_hp=30)

        healed, remaining = use_consumable(HEALTH_POTION, unit, inventory).unwrap()

        assert healed.current_hp == 80
        assert remaining.count("health_potion") == 1
        assert unit.current_hp == 30
        assert inventory.count("health_potion") == 2

    def test_heal_capped_at_max(self, make_unit: Any) -> None:
        inventory = InventoryData(items=(ELIXIR,))

        healed, _ = use_consumable(ELIXIR, make_unit(current_hp=1), inventory).unwrap()

        assert healed.current_hp == 100

    def test_revive(self, make_unit: Any) -> None:
        inventory = InventoryData(items=(PHOENIX_DOWN,))

        revived, remaining = use_consumable(PHOENIX_DOWN, make_unit(current_hp=0), inventory).unwrap()

        assert revived.current_hp == 50
        assert remaining.items == ()

    def test_missing_from_inventory(self, make_unit: Any) -> None:
        error = use_consumable(MEGA_POTION, make_unit(current_hp=30), InventoryData()).unwrap_err()

        assert isinstance(error, ItemNotUsableError)
        assert error.message == "Item not found in inventory"

    def test_refusal_carries_ids(self, make_unit: Any) -> None:
        inventory = InventoryData(items=(HEALTH_POTION,))

        error = use_consumable(HEALTH_POTION, make_unit(), inventory).unwrap_err()

        assert error.details == {"item_id": "health_potion", "unit_id": "hero"}

    def test_usable_items(self, make_unit: Any) -> None:
        inventory = InventoryData(items=(HEALTH_POTION, PHOENIX_DOWN, ANTIDOTE))

        assert usable_items(inventory, make_unit(current_hp=0)) == (PHOENIX_DOWN,)


class TestItemStack:
    """Tests for stack bookkeeping."""

    def test_add_item_capacity(self) -> None:
        full = InventoryData(items=(HEALTH_POTION,), max_item_slots=1)

        error = add_item(full, HEALTH_POTION).unwrap_err()

        assert isinstance(error, InventoryFullError)
        assert error.details == {"pool": "items", "capacity": 1}

    def test_add_items_all_or_nothing(self) -> None:
        inventory = InventoryData(items=(HEALTH_POTION,), max_item_slots=2)

        assert not add_items(inventory, (HEALTH_POTION, HEALTH_POTION)).ok
        assert add_items(inventory, (MEGA_POTION,)).unwrap().count("mega_potion") == 1

    def test_remove_first_copy(self) -> None:
        inventory = InventoryData(items=(HEALTH_POTION, MEGA_POTION, HEALTH_POTION))

        remaining = remove_item(inventory, "health_potion").unwrap()

        assert [item.id for item in remaining.items] == ["mega_potion", "health_potion"]

    @pytest.mark.parametrize("item_id", ["elixir", ""])
    def test_remove_missing(self, item_id: str) -> None:
        error = remove_item(InventoryData(), item_id).unwrap_err()

        assert isinstance(error, ItemNotFoundError)
