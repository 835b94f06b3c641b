"""Static opponent catalog.

Order matters: choice generation shuffles this tuple with a seeded stream,
so reordering entries changes which opponents a seed produces.
"""

from __future__ import annotations

from battle_core.data.enemies import (
    ARCANE_EVOKER,
    BATTLE_MECH_ALPHA,
    BEAR_GUARDIAN,
    CLERIC_HEALER,
    CRYSTAL_GUARDIAN,
    DIRE_WOLF,
    DRONE_SWARM,
    DRUID_SHAMAN,
    GHOST_ASSASSIN,
    HOLY_AVENGER,
    NECROMANCER,
    PALADIN_KNIGHT,
    REPAIR_BOT,
    SERPENT_STRIKER,
    SIEGE_CANNON,
    SKELETON_WARRIOR,
    THORN_ARCHER,
    TREANT_ANCIENT,
    VOID_WALKER,
    ZOMBIE_BRUTE,
)
from battle_core.models.enums import Difficulty, Role, Tag
from battle_core.models.opponents import OpponentSpec


OPPONENT_CATALOG: tuple[OpponentSpec, ...] = (
    # Standard
    OpponentSpec(
        id="undead_patrol_01",
        name="Undead Patrol",
        difficulty=Difficulty.STANDARD,
        units=(SKELETON_WARRIOR, SKELETON_WARRIOR),
        primary_tag=Tag.UNDEAD,
        counter_tags=(Tag.BEAST,),
        reward_hint="Rusty Equipment",
    ),
    OpponentSpec(
        id="mech_scouts_01",
        name="Mech Scout Squad",
        difficulty=Difficulty.STANDARD,
        units=(DRONE_SWARM, DRONE_SWARM),
        primary_tag=Tag.MECH,
        counter_tags=(Tag.NATURE,),
        reward_hint="Tech Components",
    ),
    OpponentSpec(
        id="wolf_pack_01",
        name="Wolf Pack",
        difficulty=Difficulty.STANDARD,
        units=(DIRE_WOLF, DIRE_WOLF),
        primary_tag=Tag.BEAST,
        counter_tags=(Tag.MECH,),
        reward_hint="Beast Pelts",
    ),
    OpponentSpec(
        id="holy_guards_01",
        name="Temple Guards",
        difficulty=Difficulty.STANDARD,
        units=(PALADIN_KNIGHT, CLERIC_HEALER),
        primary_tag=Tag.HOLY,
        counter_tags=(Tag.UNDEAD, Tag.ARCANE),
        reward_hint="Blessed Items",
    ),
    OpponentSpec(
        id="holy_crusaders_01",
        name="Holy Crusaders",
        difficulty=Difficulty.STANDARD,
        units=(HOLY_AVENGER, PALADIN_KNIGHT),
        primary_tag=Tag.HOLY,
        counter_tags=(Tag.UNDEAD,),
        reward_hint="Divine Weapons",
    ),
    OpponentSpec(
        id="arcane_apprentices_01",
        name="Arcane Apprentices",
        difficulty=Difficulty.STANDARD,
        units=(ARCANE_EVOKER,),
        primary_tag=Tag.ARCANE,
        counter_tags=(Tag.HOLY,),
        reward_hint="Spell Scrolls",
    ),
    OpponentSpec(
        id="forest_spirits_01",
        name="Forest Spirits",
        difficulty=Difficulty.STANDARD,
        units=(THORN_ARCHER, DRUID_SHAMAN),
        primary_tag=Tag.NATURE,
        counter_tags=(Tag.MECH,),
        reward_hint="Herbal Remedies",
    ),
    OpponentSpec(
        id="skeleton_squad_01",
        name="Skeleton Squad",
        difficulty=Difficulty.STANDARD,
        units=(SKELETON_WARRIOR, SKELETON_WARRIOR, SKELETON_WARRIOR),
        primary_tag=Tag.UNDEAD,
        reward_hint="Bone Fragments",
    ),
    OpponentSpec(
        id="repair_convoy_01",
        name="Repair Convoy",
        difficulty=Difficulty.STANDARD,
        units=(BATTLE_MECH_ALPHA, REPAIR_BOT),
        primary_tag=Tag.MECH,
        counter_tags=(Tag.ARCANE,),
        reward_hint="Repair Kits",
    ),
    OpponentSpec(
        id="beast_ambush_01",
        name="Beast Ambush",
        difficulty=Difficulty.STANDARD,
        units=(DIRE_WOLF, SERPENT_STRIKER),
        primary_tag=Tag.BEAST,
        reward_hint="Fang Trophies",
    ),
    OpponentSpec(
        id="holy_pilgrims_01",
        name="Holy Pilgrims",
        difficulty=Difficulty.STANDARD,
        units=(CLERIC_HEALER, CLERIC_HEALER),
        primary_tag=Tag.HOLY,
        counter_tags=(Tag.UNDEAD,),
        reward_hint="Sacred Relics",
    ),
    OpponentSpec(
        id="nature_wardens_01",
        name="Nature Wardens",
        difficulty=Difficulty.STANDARD,
        units=(BEAR_GUARDIAN,),
        primary_tag=Tag.NATURE,
        counter_tags=(Tag.MECH, Tag.UNDEAD),
        reward_hint="Natural Armor",
    ),
    # Normal
    OpponentSpec(
        id="undead_raiders_02",
        name="Undead Raiders",
        difficulty=Difficulty.NORMAL,
        units=(ZOMBIE_BRUTE, SKELETON_WARRIOR, GHOST_ASSASSIN),
        primary_tag=Tag.UNDEAD,
        counter_tags=(Tag.BEAST, Tag.NATURE),
        reward_hint="Cursed Weapons",
        special_rule="First unit revives once at 50% HP",
    ),
    OpponentSpec(
        id="mech_battalion_02",
        name="Mech Battalion",
        difficulty=Difficulty.NORMAL,
        units=(BATTLE_MECH_ALPHA, DRONE_SWARM, REPAIR_BOT),
        primary_tag=Tag.MECH,
        counter_tags=(Tag.NATURE, Tag.BEAST),
        reward_hint="Advanced Tech",
        special_rule="Repair Bot heals allies each turn",
    ),
    OpponentSpec(
        id="beast_hunters_02",
        name="Apex Predators",
        difficulty=Difficulty.NORMAL,
        units=(BEAR_GUARDIAN, DIRE_WOLF, SERPENT_STRIKER),
        primary_tag=Tag.BEAST,
        counter_tags=(Tag.HOLY,),
        reward_hint="Rare Pelts",
        special_rule="Attacks have 20% critical chance",
    ),
    OpponentSpec(
        id="arcane_coven_02",
        name="Arcane Coven",
        difficulty=Difficulty.NORMAL,
        units=(ARCANE_EVOKER, VOID_WALKER, CRYSTAL_GUARDIAN),
        primary_tag=Tag.ARCANE,
        counter_tags=(Tag.HOLY, Tag.NATURE),
        reward_hint="Magic Artifacts",
        special_rule="Spells ignore 30% of defense",
    ),
    OpponentSpec(
        id="nature_tribunal_02",
        name="Nature Tribunal",
        difficulty=Difficulty.NORMAL,
        units=(TREANT_ANCIENT, THORN_ARCHER, DRUID_SHAMAN),
        primary_tag=Tag.NATURE,
        counter_tags=(Tag.MECH, Tag.UNDEAD),
        reward_hint="Living Wood",
        special_rule="Regenerates 10 HP per turn",
    ),
    # Hard
    OpponentSpec(
        id="lich_king_03",
        name="Lich King",
        difficulty=Difficulty.HARD,
        units=(NECROMANCER, ZOMBIE_BRUTE, SKELETON_WARRIOR, GHOST_ASSASSIN),
        primary_tag=Tag.UNDEAD,
        counter_tags=(Tag.HOLY, Tag.BEAST, Tag.NATURE),
        reward_hint="Legendary Dark Artifacts",
        special_rule="Revives all defeated allies once",
    ),
    OpponentSpec(
        id="war_machine_03",
        name="War Machine Prototype",
        difficulty=Difficulty.HARD,
        units=(BATTLE_MECH_ALPHA, SIEGE_CANNON, DRONE_SWARM, REPAIR_BOT),
        primary_tag=Tag.MECH,
        counter_tags=(Tag.ARCANE, Tag.NATURE),
        reward_hint="Legendary Tech Blueprints",
        special_rule="Siege Cannon deals AoE damage each turn",
    ),
)


def get_opponent_by_id(opponent_id: str) -> OpponentSpec | None:
    for spec in OPPONENT_CATALOG:
        if spec.id == opponent_id:
            return spec
    return None


def get_opponents_by_difficulty(difficulty: Difficulty) -> tuple[OpponentSpec, ...]:
    return tuple(spec for spec in OPPONENT_CATALOG if spec.difficulty == difficulty)


def get_opponents_by_tag(tag: Tag) -> tuple[OpponentSpec, ...]:
    return tuple(spec for spec in OPPONENT_CATALOG if spec.primary_tag == tag)


def get_opponents_by_role(role: Role) -> tuple[OpponentSpec, ...]:
    """Opponents whose lead unit has the given role."""
    return tuple(spec for spec in OPPONENT_CATALOG if spec.lead_role == role)


__all__ = [
    "OPPONENT_CATALOG",
    "get_opponent_by_id",
    "get_opponents_by_difficulty",
    "get_opponents_by_tag",
    "get_opponents_by_role",
]
