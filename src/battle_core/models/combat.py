"""Pydantic V2 schemas for the combat log and battle outcome."""

from __future__ import annotations

from pydantic import Field

from battle_core.models.base import WireModel
from battle_core.models.enums import ActionKind, Winner


class CombatAction(WireModel):
    """One entry of the per-battle audit trail.

    Attributes:
        seq: Strictly increasing sequence number within the battle.
        kind: Action kind.
        actor_id: Acting unit, if any.
        target_id: Affected unit, if any.
        amount: Damage dealt or HP restored, if applicable.
        ability_id: Ability or gem super identifier for casts.
        item_id: Item identifier for item uses.
        defeated_ids: Enemies already defeated when a flee happened.
    """

    seq: int = Field(ge=0)
    kind: ActionKind
    actor_id: str | None = None
    target_id: str | None = None
    amount: int | None = None
    ability_id: str | None = None
    item_id: str | None = None
    defeated_ids: tuple[str, ...] = ()


class BattleResult(WireModel):
    """Outcome of a resolved battle.

    Attributes:
        winner: Winning side, or draw.
        actions: Ordered combat log.
        units_defeated: Ids of units defeated during the battle, in order.
        turns_taken: Rounds played.
        fled: Whether the battle ended because the player fled.
        items_used: Ids of consumables spent, in order.
        gem_super_used: Whether the gem super was activated.
    """

    winner: Winner
    actions: tuple[CombatAction, ...] = ()
    units_defeated: tuple[str, ...] = ()
    turns_taken: int = Field(default=0, ge=0)
    fled: bool = False
    items_used: tuple[str, ...] = ()
    gem_super_used: bool = False


__all__ = [
    "CombatAction",
    "BattleResult",
]
