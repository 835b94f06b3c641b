"""Gem super: an area attack scaled by element relation.

Multiplier by the relation of the gem element to the target element:
same 1.0, counter 0.5, neutral 1.5. Each hit is
``floor(power * multiplier * variance)`` with variance uniform in
``[0.85, 1.15)``, one draw per target.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import replace
from typing import Protocol, TypeVar

from battle_core.core import constants
from battle_core.engine.elements import classify
from battle_core.engine.rng import SeededRng
from battle_core.models.enums import Element, ElementRelation


class GemTarget(Protocol):
    """Anything with an optional element and current HP."""

    @property
    def element(self) -> Element | None: ...

    @property
    def current_hp(self) -> int: ...


TargetT = TypeVar("TargetT", bound=GemTarget)


def multiplier(gem_element: Element, target_element: Element) -> float:
    relation = classify(gem_element, target_element)
    if relation is ElementRelation.SAME:
        return constants.SAME_ELEMENT_MULTIPLIER
    if relation is ElementRelation.COUNTER:
        return constants.COUNTER_ELEMENT_MULTIPLIER
    return constants.NEUTRAL_ELEMENT_MULTIPLIER


def roll_damage(power: int, gem_element: Element, target_element: Element, rng: SeededRng) -> int:
    """Draw one hit's damage from ``rng``."""
    variance = constants.GEM_SUPER_VARIANCE_MIN + rng.next_float() * constants.GEM_SUPER_VARIANCE_SPAN
    return math.floor(power * multiplier(gem_element, target_element) * variance)


def damage_range(power: int, gem_element: Element, target_element: Element) -> tuple[int, int]:
    """Damage envelope for display, without touching any stream.

    Returns:
        ``(minimum, maximum)`` damage over the variance bounds.
    """
    base = power * multiplier(gem_element, target_element)
    low = math.floor(base * constants.GEM_SUPER_VARIANCE_MIN)
    high = math.floor(
        base * (constants.GEM_SUPER_VARIANCE_MIN + constants.GEM_SUPER_VARIANCE_SPAN)
    )
    return low, high


def execute(
    power: int,
    gem_element: Element,
    targets: Sequence[TargetT],
    rng: SeededRng,
) -> list[TargetT]:
    """Hit every target once.

    Targets without an element take the same-element multiplier. Targets
    are pydantic models or dataclasses; each is copied, never mutated.

    Args:
        power: Gem super base power.
        gem_element: Element of the gem.
        targets: Units to hit, in draw order.
        rng: Stream to draw variance from, once per target.

    Returns:
        New target values with reduced HP, clamped at 0.
    """
    hit: list[TargetT] = []
    for target in targets:
        target_element = target.element or gem_element
        damage = roll_damage(power, gem_element, target_element, rng)
        hit.append(_with_hp(target, max(0, target.current_hp - damage)))
    return hit


def _with_hp(target: TargetT, current_hp: int) -> TargetT:
    model_copy = getattr(target, "model_copy", None)
    if model_copy is not None:
        return model_copy(update={"current_hp": current_hp})
    return replace(target, current_hp=current_hp)


__all__ = [
    "GemTarget",
    "multiplier",
    "roll_damage",
    "damage_range",
    "execute",
]
