"""Enemy unit templates."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from battle_core.models.enums import Role, Tag
from battle_core.models.units import EnemyTemplate


def _enemy(
    template_id: str,
    name: str,
    role: Role,
    tags: tuple[Tag, ...],
    hp: int,
    atk: int,
    defense: int,
    speed: int,
) -> EnemyTemplate:
    return EnemyTemplate(
        id=template_id,
        name=name,
        role=role,
        tags=tags,
        hp=hp,
        atk=atk,
        defense=defense,
        speed=speed,
    )


# Undead
SKELETON_WARRIOR = _enemy("skeleton_warrior", "Skeleton Warrior", Role.TANK, (Tag.UNDEAD,), 80, 15, 12, 40)
ZOMBIE_BRUTE = _enemy("zombie_brute", "Zombie Brute", Role.TANK, (Tag.UNDEAD,), 100, 18, 8, 25)
NECROMANCER = _enemy("necromancer", "Necromancer", Role.SUPPORT, (Tag.UNDEAD, Tag.ARCANE), 60, 20, 6, 55)
GHOST_ASSASSIN = _enemy("ghost_assassin", "Ghost Assassin", Role.DPS, (Tag.UNDEAD,), 50, 28, 4, 70)

# Mech
BATTLE_MECH_ALPHA = _enemy("battle_mech_alpha", "Battle Mech Alpha", Role.TANK, (Tag.MECH,), 120, 22, 20, 30)
DRONE_SWARM = _enemy("drone_swarm", "Drone Swarm", Role.DPS, (Tag.MECH,), 40, 25, 3, 80)
REPAIR_BOT = _enemy("repair_bot", "Repair Bot", Role.SUPPORT, (Tag.MECH,), 70, 10, 15, 50)
SIEGE_CANNON = _enemy("siege_cannon", "Siege Cannon", Role.SPECIALIST, (Tag.MECH,), 80, 35, 10, 20)

# Beast
DIRE_WOLF = _enemy("dire_wolf", "Dire Wolf", Role.DPS, (Tag.BEAST,), 65, 24, 6, 65)
BEAR_GUARDIAN = _enemy("bear_guardian", "Bear Guardian", Role.TANK, (Tag.BEAST, Tag.NATURE), 110, 20, 14, 35)
SERPENT_STRIKER = _enemy("serpent_striker", "Serpent Striker", Role.DPS, (Tag.BEAST,), 55, 26, 5, 75)

# Holy
PALADIN_KNIGHT = _enemy("paladin_knight", "Paladin Knight", Role.TANK, (Tag.HOLY,), 95, 18, 16, 45)
CLERIC_HEALER = _enemy("cleric_healer", "Cleric Healer", Role.SUPPORT, (Tag.HOLY,), 70, 12, 10, 50)
HOLY_AVENGER = _enemy("holy_avenger", "Holy Avenger", Role.DPS, (Tag.HOLY,), 75, 30, 8, 60)

# Arcane
ARCANE_EVOKER = _enemy("arcane_evoker", "Arcane Evoker", Role.DPS, (Tag.ARCANE,), 55, 32, 4, 65)
VOID_WALKER = _enemy("void_walker", "Void Walker", Role.SPECIALIST, (Tag.ARCANE,), 60, 28, 6, 70)
CRYSTAL_GUARDIAN = _enemy("crystal_guardian", "Crystal Guardian", Role.TANK, (Tag.ARCANE,), 90, 16, 18, 40)

# Nature
TREANT_ANCIENT = _enemy("treant_ancient", "Treant Ancient", Role.TANK, (Tag.NATURE,), 130, 20, 12, 25)
THORN_ARCHER = _enemy("thorn_archer", "Thorn Archer", Role.DPS, (Tag.NATURE,), 60, 26, 7, 55)
DRUID_SHAMAN = _enemy("druid_shaman", "Druid Shaman", Role.SUPPORT, (Tag.NATURE,), 65, 15, 8, 50)


ENEMY_TEMPLATES: Mapping[str, EnemyTemplate] = MappingProxyType({
    template.id: template
    for template in (
        SKELETON_WARRIOR, ZOMBIE_BRUTE, NECROMANCER, GHOST_ASSASSIN,
        BATTLE_MECH_ALPHA, DRONE_SWARM, REPAIR_BOT, SIEGE_CANNON,
        DIRE_WOLF, BEAR_GUARDIAN, SERPENT_STRIKER,
        PALADIN_KNIGHT, CLERIC_HEALER, HOLY_AVENGER,
        ARCANE_EVOKER, VOID_WALKER, CRYSTAL_GUARDIAN,
        TREANT_ANCIENT, THORN_ARCHER, DRUID_SHAMAN,
    )
})


def get_enemy_template(template_id: str) -> EnemyTemplate | None:
    return ENEMY_TEMPLATES.get(template_id)


__all__ = [
    "ENEMY_TEMPLATES",
    "get_enemy_template",
    "SKELETON_WARRIOR",
    "ZOMBIE_BRUTE",
    "NECROMANCER",
    "GHOST_ASSASSIN",
    "BATTLE_MECH_ALPHA",
    "DRONE_SWARM",
    "REPAIR_BOT",
    "SIEGE_CANNON",
    "DIRE_WOLF",
    "BEAR_GUARDIAN",
    "SERPENT_STRIKER",
    "PALADIN_KNIGHT",
    "CLERIC_HEALER",
    "HOLY_AVENGER",
    "ARCANE_EVOKER",
    "VOID_WALKER",
    "CRYSTAL_GUARDIAN",
    "TREANT_ANCIENT",
    "THORN_ARCHER",
    "DRUID_SHAMAN",
]
