"""Battle Core - deterministic progression-and-combat simulation.

Every stochastic decision (opponent choices, damage variance, loot) is
drawn from streams forked off a single run seed, so a run replays
bit-identically from its seed and a save.

Example:
    >>> from battle_core import GameController, STARTER_UNITS
    >>> controller = GameController()
    >>> team = [STARTER_UNITS["starter_warrior"], STARTER_UNITS["starter_mage"]]
    >>> controller.start_run(team, seed=12345).ok
    True
    >>> previews = controller.generate_opponent_choices().unwrap()
    >>> controller.select_opponent(previews[0].spec.id).ok
    True
    >>> result = controller.start_battle().unwrap()

Modules:
    core: Configuration, logging, errors and results.
    models: Pydantic V2 schemas for units, items, combat and saves.
    data: Static catalogs (spells, gems, enemies, opponents, starters, items).
    engine: Seeded streams, flow machine and the simulation rules.
    storage: Blob stores and the versioned save system.
"""

from __future__ import annotations

# Core
from battle_core.core.config import Settings, get_settings
from battle_core.core.exceptions import BattleCoreError, ErrorCategory
from battle_core.core.logging import configure_logging, get_logger
from battle_core.core.result import Err, Ok, Result

# Catalogs
from battle_core.data.gems import ELEMENTAL_GEMS
from battle_core.data.opponents import OPPONENT_CATALOG
from battle_core.data.starters import STARTER_UNITS

# Engine
from battle_core.engine.battle import BattleEngine
from battle_core.engine.rng import SeededRng, StreamRegistry
from battle_core.engine.state_machine import GameStateMachine

# Persistence
from battle_core.storage.blob_store import FileBlobStore, InMemoryBlobStore
from battle_core.storage.save_system import SaveSystem

# Orchestration
from battle_core.engine.controller import GameController


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "BattleCoreError",
    "ErrorCategory",
    "Ok",
    "Err",
    "Result",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Catalogs
    "ELEMENTAL_GEMS",
    "OPPONENT_CATALOG",
    "STARTER_UNITS",
    # Engine
    "BattleEngine",
    "SeededRng",
    "StreamRegistry",
    "GameStateMachine",
    "GameController",
    # Persistence
    "FileBlobStore",
    "InMemoryBlobStore",
    "SaveSystem",
]
