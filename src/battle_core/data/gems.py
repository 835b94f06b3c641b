"""Elemental gem catalog."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from battle_core.models.enums import Element
from battle_core.models.units import ElementalGem


ELEMENTAL_GEMS: Mapping[Element, ElementalGem] = MappingProxyType({
    Element.MARS: ElementalGem(
        id="elemental_mars",
        name="Mars Gem",
        element=Element.MARS,
        description="Fire element gem",
        super_power=100,
    ),
    Element.MERCURY: ElementalGem(
        id="elemental_mercury",
        name="Mercury Gem",
        element=Element.MERCURY,
        description="Water element gem",
        super_power=90,
    ),
    Element.JUPITER: ElementalGem(
        id="elemental_jupiter",
        name="Jupiter Gem",
        element=Element.JUPITER,
        description="Wind element gem",
        super_power=85,
    ),
    Element.VENUS: ElementalGem(
        id="elemental_venus",
        name="Venus Gem",
        element=Element.VENUS,
        description="Earth element gem",
        super_power=80,
    ),
    Element.MOON: ElementalGem(
        id="elemental_moon",
        name="Moon Gem",
        element=Element.MOON,
        description="Light element gem",
        super_power=90,
    ),
    Element.SUN: ElementalGem(
        id="elemental_sun",
        name="Sun Gem",
        element=Element.SUN,
        description="Dark element gem",
        super_power=100,
    ),
})


def get_elemental_gem(element: Element) -> ElementalGem:
    return ELEMENTAL_GEMS[element]


def get_gem_by_id(gem_id: str) -> ElementalGem | None:
    for gem in ELEMENTAL_GEMS.values():
        if gem.id == gem_id:
            return gem
    return None


__all__ = [
    "ELEMENTAL_GEMS",
    "get_elemental_gem",
    "get_gem_by_id",
]
