"""Engine-wide constants for the battle simulation core.

Tunable values that operators may want to override live in
``battle_core.core.config``; the defaults there point back here.
"""

from __future__ import annotations

# =============================================================================
# Battle Rules
# =============================================================================

MAX_BATTLE_ROUNDS = 500
"""Rounds after which an undecided battle is forced to a draw."""

DAMAGE_VARIANCE = 2
"""Attack damage varies by an integer in [-DAMAGE_VARIANCE, DAMAGE_VARIANCE]."""

HEAL_VARIANCE = 1
"""Ability healing varies by an integer in [-HEAL_VARIANCE, HEAL_VARIANCE]."""

ABILITY_ATTACK_SCALING = 0.5
"""Fraction of the caster's attack added to ability power."""

MIN_DAMAGE = 1
"""Every successful hit deals at least this much damage."""

DEFAULT_MAX_MP = 50
"""MP pool of every player unit; restored in full after each battle."""

# =============================================================================
# Roster Rules
# =============================================================================

ACTIVE_PARTY_SIZE = 4
"""Maximum number of units in the active party."""

XP_PER_LEVEL = 100
"""Experience needed for each level up."""

# =============================================================================
# Opponent Choices
# =============================================================================

CHOICE_COUNT = 3
"""Number of opponent previews offered per round."""

CHOICE_MAX_ATTEMPTS = 10
"""Diversity retries before the generator accepts a degraded triple."""

# =============================================================================
# Gem Super
# =============================================================================

GEM_SUPER_VARIANCE_MIN = 0.85
"""Lower bound of the per-target gem super variance."""

GEM_SUPER_VARIANCE_SPAN = 0.3
"""Width of the gem super variance interval, [0.85, 1.15)."""

SAME_ELEMENT_MULTIPLIER = 1.0
COUNTER_ELEMENT_MULTIPLIER = 0.5
NEUTRAL_ELEMENT_MULTIPLIER = 1.5

# Party-wide bonus from the run gem, lost once the super is activated
ELEMENT_BONUS_MATCHING = 1.15
ELEMENT_BONUS_NEUTRAL = 1.05
ELEMENT_BONUS_COUNTER = 0.95

# =============================================================================
# Rewards
# =============================================================================

GOLD_PER_LEVEL = 10
XP_PER_ENEMY_LEVEL = 25

CONSUMABLE_DROP_CHANCE = 0.6
"""Chance that a defeated enemy drops a Health Potion."""

EQUIPMENT_DROP_CHANCE = 0.2
"""Chance that a defeated enemy drops a piece of equipment."""

UNCOMMON_LEVEL_THRESHOLD = 5
RARE_LEVEL_THRESHOLD = 10

BATTLE_XP_PER_TURN = 10
BATTLE_GOLD_PER_UNIT = 50

DEFAULT_ENEMY_LEVEL = 5
"""Level assumed for enemy templates that do not declare one."""

# =============================================================================
# Run Setup and Persistence
# =============================================================================

STARTING_POTIONS = 3
"""Health Potions granted at the start of every run."""

SAVE_VERSION = "7.0"
"""Version tag written into every save envelope."""

MAX_ITEM_SLOTS = 50
MAX_EQUIPMENT_SLOTS = 50
