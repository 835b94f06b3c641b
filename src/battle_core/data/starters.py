"""Starter unit catalog.

Every starter carries the gem of its own element. Abilities are granted
when a run starts (``battle_core.engine.elements.initialize_unit_abilities``).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from battle_core.data.gems import get_elemental_gem
from battle_core.models.enums import Element, Role, Tag
from battle_core.models.units import ActiveGemState, RosterUnit


def _starter(
    key: str,
    name: str,
    role: Role,
    tag: Tag,
    element: Element,
    hp: int,
    atk: int,
    defense: int,
    speed: int,
    base_class: str,
) -> RosterUnit:
    unit_id = f"starter_{key}"
    return RosterUnit(
        id=unit_id,
        template_id=unit_id,
        name=name,
        role=role,
        tags=(tag,),
        element=element,
        active_gem_state=ActiveGemState(active_gem=get_elemental_gem(element)),
        current_hp=hp,
        max_hp=hp,
        atk=atk,
        defense=defense,
        speed=speed,
        base_class=base_class,
    )


STARTER_UNITS: Mapping[str, RosterUnit] = MappingProxyType({
    unit.id: unit
    for unit in (
        # Tanks
        _starter("warrior", "Warrior", Role.TANK, Tag.HOLY, Element.MOON, 100, 20, 15, 40, "Warrior"),
        _starter("guardian", "Guardian", Role.TANK, Tag.NATURE, Element.VENUS, 110, 18, 18, 35, "Tank"),
        _starter("paladin", "Paladin", Role.TANK, Tag.HOLY, Element.MOON, 95, 22, 14, 42, "Tank"),
        # DPS
        _starter("rogue", "Rogue", Role.DPS, Tag.BEAST, Element.MARS, 60, 35, 5, 75, "Rogue"),
        _starter("mage", "Mage", Role.DPS, Tag.ARCANE, Element.MERCURY, 55, 38, 3, 65, "Mage"),
        _starter("ranger", "Ranger", Role.DPS, Tag.NATURE, Element.VENUS, 65, 33, 6, 70, "Rogue"),
        # Support
        _starter("cleric", "Cleric", Role.SUPPORT, Tag.HOLY, Element.MOON, 70, 15, 10, 50, "Cleric"),
        _starter("shaman", "Shaman", Role.SUPPORT, Tag.NATURE, Element.VENUS, 75, 18, 8, 48, "Support"),
        _starter("bard", "Bard", Role.SUPPORT, Tag.ARCANE, Element.MERCURY, 65, 20, 7, 55, "Support"),
        # Specialists
        _starter("necromancer", "Necromancer", Role.SPECIALIST, Tag.UNDEAD, Element.SUN, 60, 30, 5, 60, "Specialist"),
        _starter("engineer", "Engineer", Role.SPECIALIST, Tag.MECH, Element.JUPITER, 70, 25, 10, 45, "Specialist"),
        _starter("summoner", "Summoner", Role.SPECIALIST, Tag.BEAST, Element.MARS, 65, 28, 6, 52, "Specialist"),
    )
})


def get_starter(unit_id: str) -> RosterUnit | None:
    return STARTER_UNITS.get(unit_id)


__all__ = [
    "STARTER_UNITS",
    "get_starter",
]
