"""Temporary stat buffs on battle units.

Buffs are additive, stack freely and lose one round of duration at the
end of every round; a buff at zero duration is dropped.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from battle_core.models.abilities import Ability, BuffEffect
from battle_core.models.enums import BuffStat


@dataclass(frozen=True)
class ActiveBuff:
    """A buff currently applied to a unit.

    Attributes:
        stat: Modified stat.
        amount: Flat bonus.
        duration: Rounds remaining.
        source: Ability id that applied it.
    """

    stat: BuffStat
    amount: int
    duration: int
    source: str


def buff_from_ability(ability: Ability) -> ActiveBuff | None:
    """Build the buff a buff ability applies, or None for other effects."""
    effect = ability.effect
    if not isinstance(effect, BuffEffect):
        return None
    return ActiveBuff(
        stat=effect.stat,
        amount=effect.amount,
        duration=effect.duration,
        source=ability.id,
    )


def buff_modifier(buffs: Iterable[ActiveBuff], stat: BuffStat) -> int:
    return sum(buff.amount for buff in buffs if buff.stat is stat)


def decay_buffs(buffs: Iterable[ActiveBuff]) -> list[ActiveBuff]:
    """Tick every buff down by one round, dropping expired ones."""
    ticked = (replace(buff, duration=buff.duration - 1) for buff in buffs)
    return [buff for buff in ticked if buff.duration > 0]


def buff_summary(buffs: Iterable[ActiveBuff]) -> dict[BuffStat, int]:
    buffs = list(buffs)
    return {stat: buff_modifier(buffs, stat) for stat in BuffStat}


__all__ = [
    "ActiveBuff",
    "buff_from_ability",
    "buff_modifier",
    "decay_buffs",
    "buff_summary",
]
