"""Active party and bench management.

Every operation returns a new ``RosterData``; inputs are never modified.
The active party holds at most four units, the bench is unbounded, and
no unit id may appear twice across both.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from battle_core.core import constants
from battle_core.core.exceptions import InvalidRosterError, UnitNotFoundError
from battle_core.core.result import Err, Ok, Result
from battle_core.models.roster import RosterData
from battle_core.models.units import RosterUnit


@dataclass(frozen=True)
class RosterStats:
    active_count: int
    bench_count: int
    total_count: int
    active_slots_free: int
    has_full_active_party: bool


class RosterManager:
    """Pure operations over ``RosterData``.

    Attributes:
        max_active_size: Active party cap.
    """

    def __init__(self, max_active_size: int = constants.ACTIVE_PARTY_SIZE) -> None:
        self.max_active_size = max_active_size

    def create_from_flat_team(self, team: Sequence[RosterUnit]) -> RosterData:
        """First ``max_active_size`` units go active, the rest to the bench."""
        team = tuple(team)
        return RosterData(
            active_party=team[: self.max_active_size],
            bench=team[self.max_active_size :],
        )

    def active_team(self, roster: RosterData) -> tuple[RosterUnit, ...]:
        return roster.active_party

    def all_units(self, roster: RosterData) -> tuple[RosterUnit, ...]:
        return roster.all_units

    def swap(
        self, roster: RosterData, bench_unit_id: str, active_unit_id: str
    ) -> Result[RosterData, UnitNotFoundError]:
        """Exchange a bench unit with an active unit, keeping both positions.

        Args:
            roster: Current roster.
            bench_unit_id: Bench unit to bring in.
            active_unit_id: Active unit to send to the bench.

        Returns:
            Ok with the new roster, or Err(UnitNotFoundError) if either id
            is absent from its side.
        """
        bench_index = _index_of(roster.bench, bench_unit_id)
        if bench_index is None:
            return Err(
                UnitNotFoundError(f"Bench unit {bench_unit_id} not found", unit_id=bench_unit_id)
            )
        active_index = _index_of(roster.active_party, active_unit_id)
        if active_index is None:
            return Err(
                UnitNotFoundError(
                    f"Active unit {active_unit_id} not found", unit_id=active_unit_id
                )
            )

        active = list(roster.active_party)
        bench = list(roster.bench)
        active[active_index], bench[bench_index] = bench[bench_index], active[active_index]
        return Ok(RosterData(active_party=tuple(active), bench=tuple(bench)))

    def add_recruited(self, roster: RosterData, unit: RosterUnit) -> RosterData:
        """Append to the active party when it has room, otherwise to the bench."""
        if len(roster.active_party) < self.max_active_size:
            return roster.model_copy(update={"active_party": roster.active_party + (unit,)})
        return roster.model_copy(update={"bench": roster.bench + (unit,)})

    def validate(self, roster: RosterData) -> Result[RosterData, InvalidRosterError]:
        if not roster.active_party:
            return Err(InvalidRosterError("Active party cannot be empty", field_name="active_party"))
        if len(roster.active_party) > self.max_active_size:
            return Err(
                InvalidRosterError(
                    f"Active party cannot exceed {self.max_active_size} units",
                    field_name="active_party",
                    invalid_value=len(roster.active_party),
                )
            )
        ids = [unit.id for unit in roster.all_units]
        duplicates = sorted({unit_id for unit_id in ids if ids.count(unit_id) > 1})
        if duplicates:
            return Err(
                InvalidRosterError(
                    "Duplicate unit IDs found in roster",
                    field_name="id",
                    invalid_value=duplicates,
                )
            )
        return Ok(roster)

    def roster_stats(self, roster: RosterData) -> RosterStats:
        active = len(roster.active_party)
        bench = len(roster.bench)
        return RosterStats(
            active_count=active,
            bench_count=bench,
            total_count=active + bench,
            active_slots_free=max(0, self.max_active_size - active),
            has_full_active_party=active >= self.max_active_size,
        )


def _index_of(units: Sequence[RosterUnit], unit_id: str) -> int | None:
    for index, unit in enumerate(units):
        if unit.id == unit_id:
            return index
    return None


__all__ = [
    "RosterStats",
    "RosterManager",
]
