"""Pydantic V2 schemas for abilities.

An ability's effect is a tagged union discriminated by ``kind``: each
variant carries only the fields relevant to it.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from battle_core.models.base import WireModel
from battle_core.models.enums import BuffStat, SpellElement, TargetShape


class DamageEffect(WireModel):
    """Direct damage to one or all enemies."""

    kind: Literal["damage"] = "damage"
    power: int = Field(ge=0, description="Base damage before attack scaling")
    element: SpellElement | None = Field(default=None, description="Flavor element")


class HealEffect(WireModel):
    """HP restoration for one or all allies."""

    kind: Literal["heal"] = "heal"
    power: int = Field(ge=0, description="Base HP restored")
    element: SpellElement | None = Field(default=None, description="Flavor element")


class BuffEffect(WireModel):
    """Temporary stat modifier."""

    kind: Literal["buff"] = "buff"
    stat: BuffStat = Field(description="Modified stat")
    amount: int = Field(description="Modifier amount, negative for debuffs")
    duration: int = Field(ge=1, description="Duration in rounds")


AbilityEffect = Annotated[
    Union[DamageEffect, HealEffect, BuffEffect],
    Field(discriminator="kind"),
]


class Ability(WireModel):
    """Immutable catalog entry for a castable ability.

    Attributes:
        id: Stable ability identifier.
        name: Display name.
        description: Flavor text.
        mp_cost: MP spent on cast.
        target: Target shape.
        effect: Damage, heal, or buff descriptor.
    """

    id: str = Field(min_length=1, description="Ability identifier")
    name: str = Field(min_length=1, description="Display name")
    description: str = Field(default="", description="Flavor text")
    mp_cost: int = Field(ge=0, description="MP cost")
    target: TargetShape = Field(description="Target shape")
    effect: AbilityEffect


__all__ = [
    "DamageEffect",
    "HealEffect",
    "BuffEffect",
    "AbilityEffect",
    "Ability",
]
