"""Pydantic V2 schemas for opponent catalog rows and their previews."""

from __future__ import annotations

from pydantic import Field

from battle_core.models.base import WireModel
from battle_core.models.enums import Difficulty, Role, Tag
from battle_core.models.units import EnemyTemplate


class OpponentSpec(WireModel):
    """Static opponent catalog entry.

    Attributes:
        id: Opponent identifier.
        name: Display name.
        difficulty: Difficulty tier.
        units: Enemy templates fielded by this opponent, in formation order.
        primary_tag: Dominant theme, unique within a choice set.
        counter_tags: Tags that fare well against this opponent.
        reward_hint: Teaser for the loot on offer.
        special_rule: Optional descriptive battle modifier.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    difficulty: Difficulty
    units: tuple[EnemyTemplate, ...] = Field(min_length=1)
    primary_tag: Tag
    counter_tags: tuple[Tag, ...] = ()
    reward_hint: str = ""
    special_rule: str | None = None

    @property
    def lead_role(self) -> Role:
        """Role of the first unit, used for adjacency diversity."""
        return self.units[0].role


class UnitSummary(WireModel):
    name: str
    role: Role


class OpponentPreview(WireModel):
    """Round-scoped projection of an opponent spec shown to the player."""

    spec: OpponentSpec
    counter_tags: tuple[Tag, ...] = ()
    unit_summaries: tuple[UnitSummary, ...] | None = None

    @classmethod
    def from_spec(cls, spec: OpponentSpec) -> OpponentPreview:
        return cls(
            spec=spec,
            counter_tags=spec.counter_tags,
            unit_summaries=tuple(
                UnitSummary(name=unit.name, role=unit.role) for unit in spec.units
            ),
        )


__all__ = [
    "OpponentSpec",
    "UnitSummary",
    "OpponentPreview",
]
