"""Structured game event logging.

The engine reports a fixed vocabulary of events (``choice:generated``,
``battle:ended``, ``save:version_mismatch``, ...) through ``EventLogger``.
The sink is injected: anything with ``info``, ``warning`` and ``error``
methods accepting ``(event, **data)`` works, and a structlog logger is
used when none is given.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

from battle_core.core.logging import get_logger


if TYPE_CHECKING:
    from battle_core.models.combat import BattleResult
    from battle_core.models.opponents import OpponentPreview, OpponentSpec
    from battle_core.models.units import RosterUnit


class EventSink(Protocol):
    """Anything that can receive leveled structured events."""

    def info(self, event: str, **data: Any) -> Any: ...

    def warning(self, event: str, **data: Any) -> Any: ...

    def error(self, event: str, **data: Any) -> Any: ...


class EventLogger:
    """Emits the engine's game events to an injected sink."""

    def __init__(self, sink: EventSink | None = None) -> None:
        self._sink: EventSink = sink if sink is not None else get_logger("battle_core.events")

    # -------------------------------------------------------------------------
    # Opponent choices
    # -------------------------------------------------------------------------

    def choice_generated(
        self,
        *,
        battle_index: int,
        previews: Sequence[OpponentPreview],
        seed: int,
        attempts: int,
        degraded: bool,
    ) -> None:
        self._sink.info(
            "choice:generated",
            battle_index=battle_index,
            previews=[
                {
                    "id": preview.spec.id,
                    "difficulty": str(preview.spec.difficulty),
                    "primary_tag": str(preview.spec.primary_tag),
                }
                for preview in previews
            ],
            seed=seed,
            attempts=attempts,
            degraded=degraded,
        )

    def choice_selected(self, *, battle_index: int, spec: OpponentSpec) -> None:
        self._sink.info(
            "choice:selected",
            battle_index=battle_index,
            opponent_id=spec.id,
            difficulty=str(spec.difficulty),
        )

    def choice_degraded(self, *, battle_index: int, reason: str, attempts: int) -> None:
        self._sink.warning(
            "choice:degraded",
            battle_index=battle_index,
            reason=reason,
            attempts=attempts,
        )

    # -------------------------------------------------------------------------
    # Battles
    # -------------------------------------------------------------------------

    def battle_started(
        self, *, battle_index: int, opponent_id: str | None, player_units: int, enemy_units: int
    ) -> None:
        self._sink.info(
            "battle:started",
            battle_index=battle_index,
            opponent_id=opponent_id,
            player_units=player_units,
            enemy_units=enemy_units,
        )

    def battle_ended(self, *, battle_index: int, result: BattleResult) -> None:
        self._sink.info(
            "battle:ended",
            battle_index=battle_index,
            winner=str(result.winner),
            turns_taken=result.turns_taken,
            units_defeated=len(result.units_defeated),
            actions=len(result.actions),
        )

    def battle_defeat(self, *, battle_index: int, result: BattleResult) -> None:
        self._sink.error(
            "battle:defeat",
            battle_index=battle_index,
            winner=str(result.winner),
            turns_taken=result.turns_taken,
        )

    def battle_stalemate(self, *, rounds: int) -> None:
        self._sink.warning("battle:stalemate", rounds=rounds)

    # -------------------------------------------------------------------------
    # Roster and run
    # -------------------------------------------------------------------------

    def unit_recruited(self, *, unit: RosterUnit, replaced_id: str | None) -> None:
        self._sink.info(
            "unit:recruited",
            unit_id=unit.id,
            template_id=unit.template_id,
            element=str(unit.element),
            replaced_id=replaced_id,
        )

    def run_started(self, *, seed: int, team: Sequence[RosterUnit]) -> None:
        self._sink.info("run:started", seed=seed, team=[unit.id for unit in team])

    def run_completed(self, *, seed: int, battles_won: int) -> None:
        self._sink.info("run:completed", seed=seed, battles_won=battles_won)

    # -------------------------------------------------------------------------
    # Saves
    # -------------------------------------------------------------------------

    def save_written(self, *, slot: str, size: int) -> None:
        self._sink.info("save:written", slot=slot, size=size)

    def save_loaded(self, *, slot: str, version: str) -> None:
        self._sink.info("save:loaded", slot=slot, version=version)

    def save_version_mismatch(self, *, slot: str, found: Any, expected: str) -> None:
        self._sink.warning("save:version_mismatch", slot=slot, found=found, expected=expected)

    def save_deleted(self, *, slot: str) -> None:
        self._sink.info("save:deleted", slot=slot)

    def save_failed(self, *, slot: str, operation: str, error: str) -> None:
        self._sink.error("save:failed", slot=slot, operation=operation, error=error)


__all__ = [
    "EventSink",
    "EventLogger",
]
