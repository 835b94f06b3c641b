"""Ability costs, damage and healing rolls, and MP bookkeeping."""

from __future__ import annotations

import math
from collections.abc import Sequence

from battle_core.core import constants
from battle_core.core.exceptions import ValidationError
from battle_core.core.result import Err, Ok, Result
from battle_core.engine.elements import granted_abilities
from battle_core.engine.rng import SeededRng
from battle_core.models.abilities import Ability, DamageEffect, HealEffect
from battle_core.models.enums import TargetShape
from battle_core.models.units import ActiveGemState, RosterUnit


ENEMY_TARGETS = frozenset({TargetShape.SINGLE_ENEMY, TargetShape.ALL_ENEMIES})
ALLY_TARGETS = frozenset({TargetShape.SINGLE_ALLY, TargetShape.ALL_ALLIES})


def can_afford(current_mp: int, ability: Ability) -> bool:
    return current_mp >= ability.mp_cost


def spend_mp(unit: RosterUnit, ability: Ability) -> Result[RosterUnit, ValidationError]:
    """Deduct the ability's MP cost from a roster unit.

    Returns:
        Ok with the updated unit, or Err(ValidationError) when MP is short.
    """
    if not can_afford(unit.current_mp, ability):
        return Err(
            ValidationError(
                f"Not enough MP (need {ability.mp_cost}, have {unit.current_mp})",
                field_name="current_mp",
                invalid_value=unit.current_mp,
            )
        )
    return Ok(unit.model_copy(update={"current_mp": unit.current_mp - ability.mp_cost}))


def check_usable(
    current_mp: int, ability: Ability, *, has_allies: bool, has_enemies: bool
) -> str | None:
    """Reason the ability cannot be cast right now, or None if it can."""
    if not can_afford(current_mp, ability):
        return f"Not enough MP (need {ability.mp_cost}, have {current_mp})"
    if ability.target in ENEMY_TARGETS and not has_enemies:
        return "No enemies available"
    if ability.target in ALLY_TARGETS and not has_allies:
        return "No allies available"
    return None


def ability_damage(ability: Ability, caster_attack: int, rng: SeededRng | None = None) -> int:
    """Damage dealt by a damage ability: power plus half the caster's attack.

    Non-damage abilities deal 0. Without a stream no variance is applied.
    """
    effect = ability.effect
    if not isinstance(effect, DamageEffect):
        return 0
    base = math.floor(effect.power + caster_attack * constants.ABILITY_ATTACK_SCALING)
    variance = rng.next_int(-constants.DAMAGE_VARIANCE, constants.DAMAGE_VARIANCE) if rng else 0
    return max(constants.MIN_DAMAGE, base + variance)


def ability_healing(ability: Ability, rng: SeededRng | None = None) -> int:
    effect = ability.effect
    if not isinstance(effect, HealEffect):
        return 0
    variance = rng.next_int(-constants.HEAL_VARIANCE, constants.HEAL_VARIANCE) if rng else 0
    return max(1, effect.power + variance)


def restore_mp(unit: RosterUnit, max_mp: int = constants.DEFAULT_MAX_MP) -> RosterUnit:
    return unit.model_copy(update={"current_mp": max_mp, "max_mp": max_mp})


def restore_all_mp(
    team: Sequence[RosterUnit], max_mp: int = constants.DEFAULT_MAX_MP
) -> tuple[RosterUnit, ...]:
    return tuple(restore_mp(unit, max_mp) for unit in team)


def all_abilities(unit: RosterUnit, gem_state: ActiveGemState | None = None) -> tuple[Ability, ...]:
    """Abilities a unit can cast.

    With ``gem_state`` given, abilities are recomputed for that gem;
    otherwise the unit's own granted list is used.
    """
    if gem_state is None:
        return unit.granted_abilities
    return granted_abilities(unit.element, gem_state.active_gem)


__all__ = [
    "ENEMY_TARGETS",
    "ALLY_TARGETS",
    "can_afford",
    "spend_mp",
    "check_usable",
    "ability_damage",
    "ability_healing",
    "restore_mp",
    "restore_all_mp",
    "all_abilities",
]
