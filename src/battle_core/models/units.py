"""Pydantic V2 schemas for gems, enemy templates and roster units.

A roster unit is the persistent, run-owned record of a recruited or
starter character. Battle units are ephemeral clones built from it at
battle start (see ``battle_core.engine.battle``).
"""

from __future__ import annotations

from pydantic import Field, model_validator

from battle_core.core import constants
from battle_core.models.abilities import Ability
from battle_core.models.base import WireModel
from battle_core.models.enums import Element, Rank, Role, Tag


class ElementalGem(WireModel):
    """An elemental gem.

    Attributes:
        id: Gem identifier (``elemental_<element>``).
        name: Display name.
        element: Gem element.
        description: Flavor text.
        super_power: Base power of the gem super.
    """

    id: str = Field(min_length=1, description="Gem identifier")
    name: str = Field(min_length=1, description="Display name")
    element: Element = Field(description="Gem element")
    description: str = Field(default="", description="Flavor text")
    super_power: int = Field(default=100, ge=0, description="Gem super base power")


class ActiveGemState(WireModel):
    """Optional active gem plus its battle-scoped activation flag."""

    active_gem: ElementalGem | None = Field(default=None, description="Selected gem")
    is_activated: bool = Field(default=False, description="Gem super already used")

    def activated(self) -> ActiveGemState:
        return self.model_copy(update={"is_activated": True})

    def reset(self) -> ActiveGemState:
        return self.model_copy(update={"is_activated": False})


class EnemyTemplate(WireModel):
    """Static enemy unit definition used by opponent specs."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: Role
    tags: tuple[Tag, ...] = ()
    hp: int = Field(ge=1)
    atk: int = Field(ge=0)
    defense: int = Field(ge=0)
    speed: int = Field(ge=0)
    level: int = Field(default=constants.DEFAULT_ENEMY_LEVEL, ge=1)


class RosterUnit(WireModel):
    """Persistent player unit.

    Attributes:
        id: Unique unit identifier within the run.
        template_id: Template this unit was created from; duplicates share it.
        name: Display name.
        role: Unit role.
        tags: Thematic tags.
        element: Elemental affinity.
        active_gem_state: Gem attached to the unit, drives ability granting.
        granted_abilities: Abilities granted by element and gem.
        level: Unit level.
        experience: Experience toward the next level.
        current_hp: Current hit points, 0 means defeated.
        max_hp: Maximum hit points.
        current_mp: Current MP.
        max_mp: Maximum MP.
        atk: Base attack.
        defense: Base defense.
        speed: Base speed.
        rank: Merge rank.
        base_class: Optional class label.
    """

    id: str = Field(min_length=1)
    template_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: Role
    tags: tuple[Tag, ...] = ()
    element: Element
    active_gem_state: ActiveGemState = Field(default_factory=ActiveGemState)
    granted_abilities: tuple[Ability, ...] = ()
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    current_hp: int = Field(ge=0)
    max_hp: int = Field(ge=1)
    current_mp: int = Field(default=constants.DEFAULT_MAX_MP, ge=0)
    max_mp: int = Field(default=constants.DEFAULT_MAX_MP, ge=0)
    atk: int = Field(ge=0)
    defense: int = Field(ge=0)
    speed: int = Field(ge=0)
    rank: Rank = Rank.C
    base_class: str | None = None

    @model_validator(mode="after")
    def validate_hp_bounds(self) -> "RosterUnit":
        if self.current_hp > self.max_hp:
            raise ValueError(f"current_hp ({self.current_hp}) exceeds max_hp ({self.max_hp})")
        return self

    @property
    def is_defeated(self) -> bool:
        return self.current_hp == 0


__all__ = [
    "ElementalGem",
    "ActiveGemState",
    "EnemyTemplate",
    "RosterUnit",
]
