"""Pydantic V2 schemas for the persisted run state.

``GameStateSnapshot`` is the union of all mutable run state. A
``SaveEnvelope`` is that snapshot plus a version tag and timestamp; its
camelCase JSON dump is the save wire format.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from battle_core.models.base import WireModel
from battle_core.models.items import InventoryData, Item
from battle_core.models.opponents import OpponentPreview
from battle_core.models.units import ActiveGemState, ElementalGem, RosterUnit


class ProgressionCounters(WireModel):
    """All-time counters carried across runs."""

    runs_attempted: int = Field(default=0, ge=0)
    runs_completed: int = Field(default=0, ge=0)
    battles_won: int = Field(default=0, ge=0)
    battles_lost: int = Field(default=0, ge=0)
    units_recruited: int = Field(default=0, ge=0)


class ChoiceSlice(WireModel):
    """Opponent choice progress.

    Attributes:
        next_choice_seed: Seed label the next choice round derives from.
        battle_index: Battles completed in this run, used for the choice fork.
        last_choices: Previews most recently offered, for UI restoration.
    """

    next_choice_seed: str = ""
    battle_index: int = Field(default=0, ge=0)
    last_choices: tuple[OpponentPreview, ...] | None = None


class GameStateSnapshot(WireModel):
    """Everything needed to resume a run; derived streams rebuild from run_seed."""

    player_team: tuple[RosterUnit, ...] = ()
    inventory: tuple[Item, ...] = ()
    gems: tuple[ElementalGem, ...] = ()
    active_gem_state: ActiveGemState = Field(default_factory=ActiveGemState)
    inventory_data: InventoryData = Field(default_factory=InventoryData)
    progression: ProgressionCounters = Field(default_factory=ProgressionCounters)
    choice: ChoiceSlice = Field(default_factory=ChoiceSlice)
    run_seed: int = 0


class SaveEnvelope(GameStateSnapshot):
    """Versioned wrapper around a snapshot."""

    version: str
    timestamp: datetime

    def to_snapshot(self) -> GameStateSnapshot:
        """Strip the envelope fields."""
        return GameStateSnapshot.model_validate(
            self.model_dump(exclude={"version", "timestamp"})
        )

    @classmethod
    def wrap(
        cls, snapshot: GameStateSnapshot, *, version: str, timestamp: datetime
    ) -> SaveEnvelope:
        return cls.model_validate(
            {**snapshot.model_dump(), "version": version, "timestamp": timestamp}
        )


__all__ = [
    "ProgressionCounters",
    "ChoiceSlice",
    "GameStateSnapshot",
    "SaveEnvelope",
]
