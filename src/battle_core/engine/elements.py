"""Elemental affinity table and ability granting.

Six elements form three symmetric counter pairs: Mars/Mercury,
Jupiter/Venus and Moon/Sun. Granting, given a unit element E and gem
element G:

- no gem: nothing
- G == E: the four spells of E (matching, area, ultimate, support)
- G counters E: the ward against G
- otherwise: nothing
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Mapping

from battle_core.core import constants
from battle_core.data.spells import COUNTER_WARDS, spells_for_element
from battle_core.models.abilities import Ability
from battle_core.models.enums import Element, ElementRelation
from battle_core.models.units import ActiveGemState, ElementalGem, RosterUnit


COUNTER_ELEMENTS: Mapping[Element, Element] = MappingProxyType({
    Element.MARS: Element.MERCURY,
    Element.MERCURY: Element.MARS,
    Element.JUPITER: Element.VENUS,
    Element.VENUS: Element.JUPITER,
    Element.MOON: Element.SUN,
    Element.SUN: Element.MOON,
})


def counter_of(element: Element) -> Element:
    return COUNTER_ELEMENTS[element]


def classify(a: Element, b: Element) -> ElementRelation:
    """Classify the relation between two elements.

    Args:
        a: First element.
        b: Second element.

    Returns:
        SAME, COUNTER, or NEUTRAL.
    """
    if a == b:
        return ElementRelation.SAME
    if COUNTER_ELEMENTS[a] == b:
        return ElementRelation.COUNTER
    return ElementRelation.NEUTRAL


def is_counter(a: Element, b: Element) -> bool:
    return classify(a, b) is ElementRelation.COUNTER


def granted_abilities(unit_element: Element, gem: ElementalGem | None) -> tuple[Ability, ...]:
    """Abilities a unit of ``unit_element`` receives from ``gem``."""
    if gem is None:
        return ()
    relation = classify(unit_element, gem.element)
    if relation is ElementRelation.SAME:
        return spells_for_element(unit_element)
    if relation is ElementRelation.COUNTER:
        return (COUNTER_WARDS[gem.element],)
    return ()


def initialize_unit_abilities(unit: RosterUnit) -> RosterUnit:
    """Return a copy of ``unit`` with its granted abilities populated.

    The input unit is not modified.
    """
    abilities = granted_abilities(unit.element, unit.active_gem_state.active_gem)
    return unit.model_copy(update={"granted_abilities": abilities})


# =============================================================================
# Party-wide Element Bonus
# =============================================================================


def element_bonus(unit_element: Element, gem_state: ActiveGemState) -> float:
    """Stat multiplier a unit receives from the run gem.

    Args:
        unit_element: The unit's element.
        gem_state: The run's gem state.

    Returns:
        1.15 for a matching element, 0.95 for the counter element, 1.05
        otherwise; 1.0 when no gem is selected or its super was used.
    """
    gem = gem_state.active_gem
    if gem is None or gem_state.is_activated:
        return 1.0
    relation = classify(unit_element, gem.element)
    if relation is ElementRelation.SAME:
        return constants.ELEMENT_BONUS_MATCHING
    if relation is ElementRelation.COUNTER:
        return constants.ELEMENT_BONUS_COUNTER
    return constants.ELEMENT_BONUS_NEUTRAL


def apply_element_bonus(value: int, unit_element: Element, gem_state: ActiveGemState) -> int:
    """Scale ``value`` by the element bonus, rounding half up."""
    return math.floor(value * element_bonus(unit_element, gem_state) + 0.5)


def relation_label(unit_element: Element, gem_state: ActiveGemState) -> str:
    """Human-readable bonus, e.g. ``"same (+15%)"``."""
    gem = gem_state.active_gem
    if gem is None:
        return "none"
    relation = classify(unit_element, gem.element)
    percent = round((element_bonus(unit_element, gem_state) - 1.0) * 100)
    return f"{relation} ({percent:+d}%)"


__all__ = [
    "COUNTER_ELEMENTS",
    "counter_of",
    "classify",
    "is_counter",
    "granted_abilities",
    "initialize_unit_abilities",
    "element_bonus",
    "apply_element_bonus",
    "relation_label",
]
