"""Elemental spell catalog.

Each element owns five abilities: a matching spell, an area spell, an
ultimate, a party-wide support spell, and a counter ward (a self-buff
against that element).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from battle_core.models.abilities import Ability, BuffEffect, DamageEffect, HealEffect
from battle_core.models.enums import BuffStat, Element, SpellElement, TargetShape


def _damage(
    ability_id: str,
    name: str,
    description: str,
    mp_cost: int,
    power: int,
    element: SpellElement,
    target: TargetShape = TargetShape.SINGLE_ENEMY,
) -> Ability:
    return Ability(
        id=ability_id,
        name=name,
        description=description,
        mp_cost=mp_cost,
        target=target,
        effect=DamageEffect(power=power, element=element),
    )


def _heal(
    ability_id: str,
    name: str,
    description: str,
    mp_cost: int,
    power: int,
    element: SpellElement,
    target: TargetShape,
) -> Ability:
    return Ability(
        id=ability_id,
        name=name,
        description=description,
        mp_cost=mp_cost,
        target=target,
        effect=HealEffect(power=power, element=element),
    )


def _buff(
    ability_id: str,
    name: str,
    description: str,
    mp_cost: int,
    stat: BuffStat,
    amount: int,
    target: TargetShape,
    duration: int = 3,
) -> Ability:
    return Ability(
        id=ability_id,
        name=name,
        description=description,
        mp_cost=mp_cost,
        target=target,
        effect=BuffEffect(stat=stat, amount=amount, duration=duration),
    )


# =============================================================================
# Matching Spells (unit element == gem element)
# =============================================================================

MATCHING_SPELLS: Mapping[Element, Ability] = MappingProxyType({
    Element.MARS: _damage(
        "fire_blast", "Fire Blast", "Unleash a burst of flames at target.",
        8, 30, SpellElement.FIRE,
    ),
    Element.VENUS: _buff(
        "stone_wall", "Stone Wall", "Raise earthen defense to protect target.",
        8, BuffStat.DEFENSE, 10, TargetShape.SINGLE_ALLY,
    ),
    Element.JUPITER: _damage(
        "lightning_strike", "Lightning Strike", "Strike foe with bolt of lightning.",
        8, 25, SpellElement.AIR,
    ),
    Element.MERCURY: _heal(
        "healing_wave", "Healing Wave", "Restore HP with soothing water.",
        10, 20, SpellElement.WATER, TargetShape.SINGLE_ALLY,
    ),
    Element.MOON: _buff(
        "divine_shield", "Divine Shield", "Blessed light shields from harm.",
        10, BuffStat.DEFENSE, 15, TargetShape.SINGLE_ALLY,
    ),
    Element.SUN: _damage(
        "shadow_strike", "Shadow Strike", "Attack from the shadows.",
        8, 28, SpellElement.PHYSICAL,
    ),
})

# =============================================================================
# Counter Wards (unit element counters gem element), keyed by gem element
# =============================================================================

COUNTER_WARDS: Mapping[Element, Ability] = MappingProxyType({
    Element.MARS: _buff(
        "fire_ward", "Fire Ward", "Raise defenses against fire attacks.",
        6, BuffStat.DEFENSE, 15, TargetShape.SELF,
    ),
    Element.VENUS: _buff(
        "earth_ward", "Earth Ward", "Raise defenses against earth attacks.",
        6, BuffStat.DEFENSE, 15, TargetShape.SELF,
    ),
    Element.JUPITER: _buff(
        "wind_ward", "Wind Ward", "Raise defenses against wind attacks.",
        6, BuffStat.DEFENSE, 15, TargetShape.SELF,
    ),
    Element.MERCURY: _buff(
        "water_ward", "Water Ward", "Raise defenses against water attacks.",
        6, BuffStat.DEFENSE, 15, TargetShape.SELF,
    ),
    Element.MOON: _buff(
        "light_ward", "Light Ward", "Raise defenses against light attacks.",
        6, BuffStat.DEFENSE, 15, TargetShape.SELF,
    ),
    Element.SUN: _buff(
        "dark_ward", "Dark Ward", "Raise defenses against dark attacks.",
        6, BuffStat.DEFENSE, 15, TargetShape.SELF,
    ),
})

# =============================================================================
# Area Spells
# =============================================================================

AOE_SPELLS: Mapping[Element, Ability] = MappingProxyType({
    Element.MARS: _damage(
        "inferno", "Inferno", "Engulf all enemies in flames.",
        18, 28, SpellElement.FIRE, TargetShape.ALL_ENEMIES,
    ),
    Element.VENUS: _damage(
        "earthquake", "Earthquake", "Shake the earth beneath all foes.",
        18, 26, SpellElement.EARTH, TargetShape.ALL_ENEMIES,
    ),
    Element.JUPITER: _damage(
        "thunderstorm", "Thunderstorm", "Call lightning to strike all enemies.",
        18, 30, SpellElement.AIR, TargetShape.ALL_ENEMIES,
    ),
    Element.MERCURY: _damage(
        "tidal_wave", "Tidal Wave", "Summon a wave to crash into all foes.",
        18, 27, SpellElement.WATER, TargetShape.ALL_ENEMIES,
    ),
    Element.MOON: _damage(
        "divine_wrath", "Divine Wrath", "Holy light burns all darkness.",
        18, 29, SpellElement.PHYSICAL, TargetShape.ALL_ENEMIES,
    ),
    Element.SUN: _damage(
        "shadow_storm", "Shadow Storm", "Darkness engulfs all enemies.",
        18, 28, SpellElement.PHYSICAL, TargetShape.ALL_ENEMIES,
    ),
})

# =============================================================================
# Ultimates
# =============================================================================

ULTIMATE_SPELLS: Mapping[Element, Ability] = MappingProxyType({
    Element.MARS: _damage(
        "ragnarok", "Ragnarok", "Apocalyptic flames consume the target.",
        28, 55, SpellElement.FIRE,
    ),
    Element.VENUS: _damage(
        "gaia_hammer", "Gaia Hammer", "The earth's fury crushes the enemy.",
        28, 52, SpellElement.EARTH,
    ),
    Element.JUPITER: _damage(
        "thor_hammer", "Thor's Hammer", "Divine lightning obliterates the foe.",
        28, 50, SpellElement.AIR,
    ),
    Element.MERCURY: _damage(
        "poseidon_wrath", "Poseidon's Wrath", "Ocean depths drown the enemy.",
        28, 53, SpellElement.WATER,
    ),
    Element.MOON: _damage(
        "judgement", "Judgement", "Divine verdict smites the wicked.",
        28, 54, SpellElement.PHYSICAL,
    ),
    Element.SUN: _damage(
        "death_scythe", "Death Scythe", "Reaper harvests the soul.",
        28, 52, SpellElement.PHYSICAL,
    ),
})

# =============================================================================
# Party Support
# =============================================================================

SUPPORT_SPELLS: Mapping[Element, Ability] = MappingProxyType({
    Element.MARS: _buff(
        "battle_cry", "Battle Cry", "Inspire allies with fiery determination.",
        15, BuffStat.ATTACK, 8, TargetShape.ALL_ALLIES,
    ),
    Element.VENUS: _buff(
        "ironclad", "Ironclad", "Fortify all allies with earthen armor.",
        15, BuffStat.DEFENSE, 12, TargetShape.ALL_ALLIES,
    ),
    Element.JUPITER: _buff(
        "wind_walk", "Wind Walk", "Wind hastens all allies.",
        15, BuffStat.SPEED, 10, TargetShape.ALL_ALLIES,
    ),
    Element.MERCURY: _heal(
        "cure_well", "Cure Well", "Healing waters restore all allies.",
        22, 35, SpellElement.WATER, TargetShape.ALL_ALLIES,
    ),
    Element.MOON: _heal(
        "revitalize", "Revitalize", "Divine blessing restores party.",
        22, 38, SpellElement.PHYSICAL, TargetShape.ALL_ALLIES,
    ),
    Element.SUN: _buff(
        "dark_pact", "Dark Pact", "Shadow magic empowers allies.",
        15, BuffStat.ATTACK, 10, TargetShape.ALL_ALLIES,
    ),
})

ALL_ABILITIES: Mapping[str, Ability] = MappingProxyType({
    ability.id: ability
    for table in (MATCHING_SPELLS, COUNTER_WARDS, AOE_SPELLS, ULTIMATE_SPELLS, SUPPORT_SPELLS)
    for ability in table.values()
})


def get_ability(ability_id: str) -> Ability | None:
    return ALL_ABILITIES.get(ability_id)


def spells_for_element(element: Element) -> tuple[Ability, ...]:
    """The four abilities granted when a unit's gem matches its element.

    Order: matching, area, ultimate, support.
    """
    return (
        MATCHING_SPELLS[element],
        AOE_SPELLS[element],
        ULTIMATE_SPELLS[element],
        SUPPORT_SPELLS[element],
    )


__all__ = [
    "MATCHING_SPELLS",
    "COUNTER_WARDS",
    "AOE_SPELLS",
    "ULTIMATE_SPELLS",
    "SUPPORT_SPELLS",
    "ALL_ABILITIES",
    "get_ability",
    "spells_for_element",
]
