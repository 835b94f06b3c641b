"""Pydantic V2 schema for the active party / bench split."""

from __future__ import annotations

from battle_core.models.base import WireModel
from battle_core.models.units import RosterUnit


class RosterData(WireModel):
    """Run roster.

    Attributes:
        active_party: Units that fight, in formation order (at most 4).
        bench: Reserve units, unbounded.
    """

    active_party: tuple[RosterUnit, ...] = ()
    bench: tuple[RosterUnit, ...] = ()

    @property
    def all_units(self) -> tuple[RosterUnit, ...]:
        return self.active_party + self.bench


__all__ = ["RosterData"]
