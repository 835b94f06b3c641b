"""Static game catalogs.

Catalog tables are immutable module constants; engine components receive
them as explicit arguments (defaulting to these tables) rather than
reaching for them implicitly.
"""

from __future__ import annotations

from battle_core.data.enemies import ENEMY_TEMPLATES, get_enemy_template
from battle_core.data.gems import ELEMENTAL_GEMS, get_elemental_gem, get_gem_by_id
from battle_core.data.items import CONSUMABLES, EQUIPMENT_NAMES, HEALTH_POTION, get_consumable
from battle_core.data.opponents import (
    OPPONENT_CATALOG,
    get_opponent_by_id,
    get_opponents_by_difficulty,
    get_opponents_by_role,
    get_opponents_by_tag,
)
from battle_core.data.spells import (
    ALL_ABILITIES,
    AOE_SPELLS,
    COUNTER_WARDS,
    MATCHING_SPELLS,
    SUPPORT_SPELLS,
    ULTIMATE_SPELLS,
    get_ability,
    spells_for_element,
)
from battle_core.data.starters import STARTER_UNITS, get_starter


__all__ = [
    "ENEMY_TEMPLATES",
    "get_enemy_template",
    "ELEMENTAL_GEMS",
    "get_elemental_gem",
    "get_gem_by_id",
    "CONSUMABLES",
    "EQUIPMENT_NAMES",
    "HEALTH_POTION",
    "get_consumable",
    "OPPONENT_CATALOG",
    "get_opponent_by_id",
    "get_opponents_by_difficulty",
    "get_opponents_by_role",
    "get_opponents_by_tag",
    "ALL_ABILITIES",
    "AOE_SPELLS",
    "COUNTER_WARDS",
    "MATCHING_SPELLS",
    "SUPPORT_SPELLS",
    "ULTIMATE_SPELLS",
    "get_ability",
    "spells_for_element",
    "STARTER_UNITS",
    "get_starter",
]
