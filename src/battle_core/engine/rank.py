"""Unit ranks and duplicate merging.

Merging a duplicate (same template id) into a unit raises its rank by
one step, C -> B -> A -> S. Base stats stay as they are; the rank
multiplier is applied when effective stats are computed
(``battle_core.engine.stats``). The duplicate is consumed by the caller.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from battle_core.core.exceptions import ValidationError
from battle_core.core.result import Err, Ok, Result
from battle_core.models.enums import Rank
from battle_core.models.units import RosterUnit


RANK_MULTIPLIERS: Mapping[Rank, float] = MappingProxyType({
    Rank.C: 1.0,
    Rank.B: 1.15,
    Rank.A: 1.30,
    Rank.S: 1.50,
})


def rank_multiplier(rank: Rank) -> float:
    return RANK_MULTIPLIERS[rank]


def can_upgrade(rank: Rank) -> bool:
    return rank.next_rank is not None


def merge_units(target: RosterUnit, duplicate: RosterUnit) -> Result[RosterUnit, ValidationError]:
    """Merge ``duplicate`` into ``target``.

    Args:
        target: Unit to upgrade. Keeps its level, experience, HP and MP.
        duplicate: Unit to consume; must share ``target``'s template id.

    Returns:
        Ok with the upgraded unit, or Err(ValidationError) when the units
        are not duplicates or ``target`` is already S rank.
    """
    if target.template_id != duplicate.template_id:
        return Err(
            ValidationError(
                f"Units are not duplicates ({target.template_id} vs {duplicate.template_id})",
                field_name="template_id",
                invalid_value=duplicate.template_id,
            )
        )
    next_rank = target.rank.next_rank
    if next_rank is None:
        return Err(
            ValidationError(
                "Target unit is already max rank (S)",
                field_name="rank",
                invalid_value=str(target.rank),
            )
        )
    return Ok(target.model_copy(update={"rank": next_rank}))


def rank_bonus_description(rank: Rank) -> str:
    percent = round((RANK_MULTIPLIERS[rank] - 1.0) * 100)
    if percent == 0:
        return "Base stats (no bonus)"
    return f"+{percent}% to all base stats"


__all__ = [
    "RANK_MULTIPLIERS",
    "rank_multiplier",
    "can_upgrade",
    "merge_units",
    "rank_bonus_description",
]
