"""Battle rewards: gold, experience and loot drops.

Per defeated enemy of level L:
    - gold += L * 10 and xp += L * 25, always;
    - one float draw: below 0.6 drops a Health Potion;
    - a second float draw: below 0.2 drops equipment in a uniformly drawn
      slot, with stat magnitude ``L + int(-2, 2)`` and rarity uncommon from
      level 5, rare from level 10.

All draws come from the caller's stream, so identical enemies and stream
state always give identical rewards.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from battle_core.core import constants
from battle_core.core.logging import get_logger
from battle_core.data.items import EQUIPMENT_NAMES, HEALTH_POTION
from battle_core.engine.rng import SeededRng
from battle_core.models.enums import Difficulty, EquipmentSlot, ItemRarity
from battle_core.models.items import Equipment, Item
from battle_core.models.units import EnemyTemplate, RosterUnit


logger = get_logger(__name__)

EQUIPMENT_SLOT_ORDER: tuple[EquipmentSlot, ...] = (
    EquipmentSlot.WEAPON,
    EquipmentSlot.ARMOR,
    EquipmentSlot.ACCESSORY,
)

DIFFICULTY_XP_MULTIPLIERS: Mapping[Difficulty, float] = MappingProxyType({
    Difficulty.STANDARD: 1.0,
    Difficulty.NORMAL: 1.5,
    Difficulty.HARD: 2.0,
})

DIFFICULTY_GOLD_MULTIPLIERS: Mapping[Difficulty, int] = MappingProxyType({
    Difficulty.STANDARD: 1,
    Difficulty.NORMAL: 2,
    Difficulty.HARD: 3,
})


@dataclass(frozen=True)
class BattleRewards:
    """Loot from one battle."""

    gold: int = 0
    xp: int = 0
    items: tuple[Item, ...] = ()
    equipment: tuple[Equipment, ...] = ()


def equipment_rarity(level: int) -> ItemRarity:
    if level >= constants.RARE_LEVEL_THRESHOLD:
        return ItemRarity.RARE
    if level >= constants.UNCOMMON_LEVEL_THRESHOLD:
        return ItemRarity.UNCOMMON
    return ItemRarity.COMMON


def generate_equipment(slot: EquipmentSlot, level: int, rng: SeededRng) -> Equipment:
    """Roll one piece of equipment for an enemy of ``level``.

    Draws the stat variance, then the id suffix.
    """
    rarity = equipment_rarity(level)
    magnitude = level + rng.next_int(-constants.DAMAGE_VARIANCE, constants.DAMAGE_VARIANCE)
    equipment_id = f"{slot}-{rng.next_int(0, 999999)}"

    bonuses: dict[str, int] = {}
    if slot is EquipmentSlot.WEAPON:
        bonuses["attack_bonus"] = max(1, magnitude)
    elif slot is EquipmentSlot.ARMOR:
        bonuses["defense_bonus"] = max(1, magnitude)
    else:
        bonuses["speed_bonus"] = max(1, magnitude // 2)

    return Equipment(
        id=equipment_id,
        name=EQUIPMENT_NAMES[slot][rarity],
        slot=slot,
        rarity=rarity,
        **bonuses,
    )


def calculate_battle_rewards(
    defeated: Sequence[EnemyTemplate], rng: SeededRng
) -> BattleRewards:
    """Roll rewards for the defeated enemies, in order.

    Args:
        defeated: Enemy templates that were defeated.
        rng: Rewards stream.

    Returns:
        Accumulated gold, experience, items and equipment.
    """
    gold = 0
    xp = 0
    items: list[Item] = []
    equipment: list[Equipment] = []

    for enemy in defeated:
        gold += enemy.level * constants.GOLD_PER_LEVEL
        xp += enemy.level * constants.XP_PER_ENEMY_LEVEL

        if rng.next_float() < constants.CONSUMABLE_DROP_CHANCE:
            items.append(HEALTH_POTION)

        if rng.next_float() < constants.EQUIPMENT_DROP_CHANCE:
            slot = EQUIPMENT_SLOT_ORDER[rng.next_int(0, len(EQUIPMENT_SLOT_ORDER) - 1)]
            equipment.append(generate_equipment(slot, enemy.level, rng))

    logger.debug(
        "Battle rewards rolled",
        enemies=len(defeated),
        gold=gold,
        xp=xp,
        items=len(items),
        equipment=len(equipment),
    )
    return BattleRewards(gold=gold, xp=xp, items=tuple(items), equipment=tuple(equipment))


# =============================================================================
# Difficulty Rewards
# =============================================================================


def battle_experience(difficulty: Difficulty, turns_taken: int) -> int:
    """Run experience for a battle: ``turns * 10`` scaled by difficulty."""
    return math.floor(
        turns_taken * constants.BATTLE_XP_PER_TURN * DIFFICULTY_XP_MULTIPLIERS[difficulty]
    )


def battle_gold(difficulty: Difficulty, unit_count: int) -> int:
    return constants.BATTLE_GOLD_PER_UNIT * DIFFICULTY_GOLD_MULTIPLIERS[difficulty] * unit_count


def apply_experience(unit: RosterUnit, xp: int) -> RosterUnit:
    """Add experience, gaining a level for every full 100 points."""
    total = unit.experience + max(0, xp)
    levels, remainder = divmod(total, constants.XP_PER_LEVEL)
    return unit.model_copy(update={"level": unit.level + levels, "experience": remainder})


__all__ = [
    "EQUIPMENT_SLOT_ORDER",
    "DIFFICULTY_XP_MULTIPLIERS",
    "DIFFICULTY_GOLD_MULTIPLIERS",
    "BattleRewards",
    "equipment_rarity",
    "generate_equipment",
    "calculate_battle_rewards",
    "battle_experience",
    "battle_gold",
    "apply_experience",
]
