"""Enumeration types for the battle simulation core.

String values match the save wire format, so enum members serialize
unchanged into save envelopes.
"""

from __future__ import annotations

from enum import StrEnum


class Element(StrEnum):
    """The six elements.

    Counter pairs: Mars/Mercury, Jupiter/Venus, Moon/Sun.
    """

    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    MERCURY = "Mercury"
    MOON = "Moon"
    SUN = "Sun"


class ElementRelation(StrEnum):
    """Relation between two elements."""

    SAME = "same"
    COUNTER = "counter"
    NEUTRAL = "neutral"


class Role(StrEnum):
    """Unit role, also used as the unit archetype."""

    TANK = "Tank"
    DPS = "DPS"
    SUPPORT = "Support"
    SPECIALIST = "Specialist"


class Tag(StrEnum):
    """Thematic unit tags used for diversity checks and element assignment."""

    UNDEAD = "Undead"
    MECH = "Mech"
    BEAST = "Beast"
    HOLY = "Holy"
    ARCANE = "Arcane"
    NATURE = "Nature"


class Difficulty(StrEnum):
    """Opponent difficulty tier.

    Every choice set should hold at least one Standard and at most one Hard.
    """

    STANDARD = "Standard"
    NORMAL = "Normal"
    HARD = "Hard"


class Rank(StrEnum):
    """Unit rank, upgraded by merging duplicates."""

    C = "C"
    B = "B"
    A = "A"
    S = "S"

    @property
    def next_rank(self) -> Rank | None:
        """Get the following rank.

        Returns:
            The next rank, or None at S.
        """
        order = list(Rank)
        index = order.index(self)
        return order[index + 1] if index + 1 < len(order) else None


class TargetShape(StrEnum):
    """Who an ability affects."""

    SINGLE_ENEMY = "single_enemy"
    ALL_ENEMIES = "all_enemies"
    SINGLE_ALLY = "single_ally"
    ALL_ALLIES = "all_allies"
    SELF = "self"


class SpellElement(StrEnum):
    """Flavor element carried by damaging and healing spells."""

    FIRE = "fire"
    WATER = "water"
    EARTH = "earth"
    AIR = "air"
    PHYSICAL = "physical"


class BuffStat(StrEnum):
    """Stats a buff can modify."""

    ATTACK = "attack"
    DEFENSE = "defense"
    SPEED = "speed"


class EquipmentSlot(StrEnum):
    """Equipment slots on a unit."""

    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"


class ItemRarity(StrEnum):
    """Item rarity tiers."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"


class FlowState(StrEnum):
    """Screens/phases of the game flow."""

    MENU = "menu"
    STARTER_SELECT = "starter_select"
    OPPONENT_SELECT = "opponent_select"
    TEAM_PREP = "team_prep"
    BATTLE = "battle"
    REWARDS = "rewards"
    EQUIPMENT = "equipment"
    RECRUIT = "recruit"
    DEFEAT = "defeat"


class ActionKind(StrEnum):
    """Kinds of combat log entries."""

    ATTACK = "attack"
    DEFEND = "defend"
    ITEM_USED = "item-used"
    ABILITY = "ability"
    GEM_SUPER = "gem-super"
    DEFEAT = "defeat"
    FLEE = "flee"


class Winner(StrEnum):
    """Battle outcome."""

    PLAYER = "player"
    ENEMY = "enemy"
    DRAW = "draw"


__all__ = [
    "Element",
    "ElementRelation",
    "Role",
    "Tag",
    "Difficulty",
    "Rank",
    "TargetShape",
    "SpellElement",
    "BuffStat",
    "EquipmentSlot",
    "ItemRarity",
    "FlowState",
    "ActionKind",
    "Winner",
]
