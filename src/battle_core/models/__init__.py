"""Pydantic V2 models for the battle simulation core.

Modules:
    enums: StrEnum vocabularies (elements, roles, flow states, ...).
    abilities: Ability catalog entries with tagged-union effects.
    units: Gems, enemy templates and persistent roster units.
    opponents: Opponent catalog rows and round previews.
    items: Consumables, equipment and the inventory.
    combat: Combat log entries and battle results.
    roster: Active party and bench.
    state: Run snapshot and save envelope.
"""

from __future__ import annotations

from battle_core.models.abilities import (
    Ability,
    AbilityEffect,
    BuffEffect,
    DamageEffect,
    HealEffect,
)
from battle_core.models.base import WireModel
from battle_core.models.combat import BattleResult, CombatAction
from battle_core.models.enums import (
    ActionKind,
    BuffStat,
    Difficulty,
    Element,
    ElementRelation,
    EquipmentSlot,
    FlowState,
    ItemRarity,
    Rank,
    Role,
    SpellElement,
    Tag,
    TargetShape,
    Winner,
)
from battle_core.models.items import Equipment, InventoryData, Item
from battle_core.models.opponents import OpponentPreview, OpponentSpec, UnitSummary
from battle_core.models.roster import RosterData
from battle_core.models.state import (
    ChoiceSlice,
    GameStateSnapshot,
    ProgressionCounters,
    SaveEnvelope,
)
from battle_core.models.units import (
    ActiveGemState,
    ElementalGem,
    EnemyTemplate,
    RosterUnit,
)


__all__ = [
    "WireModel",
    # Enums
    "ActionKind",
    "BuffStat",
    "Difficulty",
    "Element",
    "ElementRelation",
    "EquipmentSlot",
    "FlowState",
    "ItemRarity",
    "Rank",
    "Role",
    "SpellElement",
    "Tag",
    "TargetShape",
    "Winner",
    # Abilities
    "Ability",
    "AbilityEffect",
    "DamageEffect",
    "HealEffect",
    "BuffEffect",
    # Units
    "ElementalGem",
    "ActiveGemState",
    "EnemyTemplate",
    "RosterUnit",
    # Opponents
    "OpponentSpec",
    "OpponentPreview",
    "UnitSummary",
    # Items
    "Item",
    "Equipment",
    "InventoryData",
    # Combat
    "CombatAction",
    "BattleResult",
    # Roster
    "RosterData",
    # State
    "ProgressionCounters",
    "ChoiceSlice",
    "GameStateSnapshot",
    "SaveEnvelope",
]
