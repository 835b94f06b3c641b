"""Effective unit stats.

Layers, in order: base stats, rank multiplier (floored), flat equipment
bonuses, then the party element bonus on attack when a gem state is
given.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from battle_core.engine.elements import apply_element_bonus
from battle_core.engine.equipment import EquipmentBonuses, equipment_bonuses
from battle_core.engine.rank import rank_multiplier
from battle_core.models.items import InventoryData
from battle_core.models.units import ActiveGemState, RosterUnit


@dataclass(frozen=True)
class UnitStats:
    max_hp: int
    attack: int
    defense: int
    speed: int
    max_mp: int


def calculate_unit_stats(
    unit: RosterUnit,
    inventory: InventoryData | None = None,
    gem_state: ActiveGemState | None = None,
) -> UnitStats:
    """Compute the stats a unit fights with.

    Args:
        unit: Roster unit.
        inventory: Inventory holding the unit's equipment, if any.
        gem_state: Run gem state for the party element bonus, if any.

    Returns:
        The effective stats.
    """
    multiplier = rank_multiplier(unit.rank)
    bonuses = equipment_bonuses(inventory, unit.id) if inventory else EquipmentBonuses()

    attack = math.floor(unit.atk * multiplier) + bonuses.attack
    if gem_state is not None:
        attack = apply_element_bonus(attack, unit.element, gem_state)

    return UnitStats(
        max_hp=math.floor(unit.max_hp * multiplier) + bonuses.hp,
        attack=attack,
        defense=math.floor(unit.defense * multiplier) + bonuses.defense,
        speed=math.floor(unit.speed * multiplier) + bonuses.speed,
        max_mp=unit.max_mp,
    )


__all__ = [
    "UnitStats",
    "calculate_unit_stats",
]
