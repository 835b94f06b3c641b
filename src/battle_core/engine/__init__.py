"""Deterministic simulation engine.

Modules:
    rng: Seeded streams and the stream registry.
    state_machine: Game flow state machine.
    elements: Element relations, ability granting and the element bonus.
    choice: Opponent choice generation with diversity rules.
    battle: Turn-based battle resolution.
    gem_super: Area gem super damage.
    rewards: Gold, experience and loot drops.
    roster: Active party and bench operations.
    team: Recruitment of defeated enemies.
    items, equipment, rank, stats, buffs, abilities: Unit upkeep rules.
    events: Game event logging.
    controller: Run orchestration (import it directly; it depends on
        ``battle_core.storage``).
"""

from __future__ import annotations

from battle_core.engine.battle import (
    Attack,
    BattleEngine,
    BattleOutcome,
    BattleUnit,
    BattleView,
    CastAbility,
    Defend,
    Flee,
    GemSuper,
    UseItem,
    auto_attack,
    compute_damage,
    turn_order,
)
from battle_core.engine.choice import GeneratedChoices, generate_choices, is_diverse
from battle_core.engine.elements import classify, granted_abilities, initialize_unit_abilities
from battle_core.engine.events import EventLogger
from battle_core.engine.rewards import BattleRewards, calculate_battle_rewards
from battle_core.engine.rng import SeededRng, StreamLabel, StreamRegistry
from battle_core.engine.roster import RosterManager
from battle_core.engine.state_machine import GameStateMachine
from battle_core.engine.team import TeamManager


__all__ = [
    # Battle
    "Attack",
    "BattleEngine",
    "BattleOutcome",
    "BattleUnit",
    "BattleView",
    "CastAbility",
    "Defend",
    "Flee",
    "GemSuper",
    "UseItem",
    "auto_attack",
    "compute_damage",
    "turn_order",
    # Choices
    "GeneratedChoices",
    "generate_choices",
    "is_diverse",
    # Elements
    "classify",
    "granted_abilities",
    "initialize_unit_abilities",
    # Events
    "EventLogger",
    # Rewards
    "BattleRewards",
    "calculate_battle_rewards",
    # Streams
    "SeededRng",
    "StreamLabel",
    "StreamRegistry",
    # Roster
    "RosterManager",
    "TeamManager",
    # Flow
    "GameStateMachine",
]
