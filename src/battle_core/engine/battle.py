"""Turn-based battle resolution.

Battles run to completion in-process. Roster units and enemy templates
are cloned into mutable ``BattleUnit`` values at battle start; the clones
are discarded once a ``BattleResult`` is produced.

Rules:
    - Turn order is recomputed at the start of every round from the living
      units: speed descending, player units first on ties, then original
      formation index ascending.
    - Attack damage is ``max(1, floor(atk - def / 2) + variance)`` with
      variance drawn from ``[-2, 2]``. A defending target takes half
      (floored, minimum 1) and stops defending.
    - Automatic turns attack the living opponent with the lowest HP, ties
      broken by the lowest original index.
    - Victory is checked after every action. After ``max_rounds`` rounds
      the battle is a draw.
    - Every mutation appends one ``CombatAction`` with an increasing
      sequence number.

Example:
    >>> engine = BattleEngine(SeededRng(7))
    >>> outcome = engine.run(players, enemies)
    >>> outcome.result.winner
    <Winner.PLAYER: 'player'>
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Union

from battle_core.core import constants
from battle_core.core.logging import get_logger
from battle_core.engine import gem_super
from battle_core.engine.abilities import ability_damage, ability_healing, check_usable
from battle_core.engine.buffs import (
    ActiveBuff,
    buff_from_ability,
    buff_modifier,
    decay_buffs,
)
from battle_core.engine.events import EventLogger
from battle_core.engine.items import check_item_use, healed_hp
from battle_core.engine.rng import SeededRng
from battle_core.engine.stats import UnitStats
from battle_core.models.abilities import Ability, BuffEffect, DamageEffect, HealEffect
from battle_core.models.combat import BattleResult, CombatAction
from battle_core.models.enums import ActionKind, BuffStat, Element, Role, Tag, TargetShape, Winner
from battle_core.models.items import Item
from battle_core.models.units import ActiveGemState, EnemyTemplate, RosterUnit


logger = get_logger(__name__)


# =============================================================================
# Battle Units
# =============================================================================


@dataclass
class BattleUnit:
    """Mutable per-battle clone of a roster unit or enemy template."""

    id: str
    name: str
    role: Role
    tags: tuple[Tag, ...]
    element: Element | None
    current_hp: int
    max_hp: int
    current_mp: int
    max_mp: int
    atk: int
    defense: int
    speed: int
    is_player: bool
    original_index: int
    abilities: tuple[Ability, ...] = ()
    buffs: list[ActiveBuff] = field(default_factory=list)
    defending: bool = False

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    @property
    def effective_atk(self) -> int:
        return self.atk + buff_modifier(self.buffs, BuffStat.ATTACK)

    @property
    def effective_defense(self) -> int:
        return self.defense + buff_modifier(self.buffs, BuffStat.DEFENSE)

    @property
    def effective_speed(self) -> int:
        return self.speed + buff_modifier(self.buffs, BuffStat.SPEED)

    def take_damage(self, amount: int) -> int:
        """Lose up to ``amount`` HP, clamped at 0. Returns HP actually lost."""
        lost = min(self.current_hp, amount)
        self.current_hp -= lost
        return lost

    @classmethod
    def from_roster(
        cls,
        unit: RosterUnit,
        index: int,
        stats: UnitStats | None = None,
    ) -> BattleUnit:
        """Clone a roster unit for battle.

        Args:
            unit: Roster unit.
            index: Formation index.
            stats: Effective stats to fight with; base stats when omitted.
        """
        max_hp = stats.max_hp if stats else unit.max_hp
        return cls(
            id=unit.id,
            name=unit.name,
            role=unit.role,
            tags=unit.tags,
            element=unit.element,
            current_hp=max(0, min(unit.current_hp, max_hp)),
            max_hp=max_hp,
            current_mp=unit.current_mp,
            max_mp=unit.max_mp,
            atk=stats.attack if stats else unit.atk,
            defense=stats.defense if stats else unit.defense,
            speed=stats.speed if stats else unit.speed,
            is_player=True,
            original_index=index,
            abilities=unit.granted_abilities,
        )

    @classmethod
    def from_template(cls, template: EnemyTemplate, index: int, slot: int) -> BattleUnit:
        """Clone an enemy template.

        Args:
            template: Enemy template.
            index: Formation index across both sides.
            slot: Position within the enemy formation, used for the unit id.
        """
        return cls(
            id=f"{template.id}_{slot}",
            name=template.name,
            role=template.role,
            tags=template.tags,
            element=None,
            current_hp=template.hp,
            max_hp=template.hp,
            current_mp=0,
            max_mp=0,
            atk=template.atk,
            defense=template.defense,
            speed=template.speed,
            is_player=False,
            original_index=index,
        )


def build_battle_units(
    players: Sequence[RosterUnit],
    enemies: Sequence[EnemyTemplate],
    player_stats: Sequence[UnitStats] | None = None,
) -> list[BattleUnit]:
    """Clone both sides; players take indices ``0..n-1``, enemies follow."""
    units = [
        BattleUnit.from_roster(unit, index, player_stats[index] if player_stats else None)
        for index, unit in enumerate(players)
    ]
    offset = len(units)
    units.extend(
        BattleUnit.from_template(template, offset + slot, slot)
        for slot, template in enumerate(enemies)
    )
    return units


# =============================================================================
# Pure Rules
# =============================================================================


def compute_damage(atk: int, defense: int, variance: int, defending: bool = False) -> int:
    """Attack damage for a given variance roll.

    Args:
        atk: Attacker's attack.
        defense: Defender's defense.
        variance: Roll from ``[-2, 2]``.
        defending: Whether the defender is defending.

    Returns:
        Damage, at least 1.
    """
    damage = max(constants.MIN_DAMAGE, math.floor(atk - defense / 2) + variance)
    if defending:
        damage = max(constants.MIN_DAMAGE, damage // 2)
    return damage


def turn_order(units: Sequence[BattleUnit]) -> list[BattleUnit]:
    living = [unit for unit in units if unit.is_alive]
    return sorted(
        living,
        key=lambda unit: (-unit.effective_speed, not unit.is_player, unit.original_index),
    )


def select_target(attacker: BattleUnit, units: Sequence[BattleUnit]) -> BattleUnit | None:
    """Lowest-HP living opponent, ties broken by original index."""
    opponents = [u for u in units if u.is_player != attacker.is_player and u.is_alive]
    if not opponents:
        return None
    return min(opponents, key=lambda unit: (unit.current_hp, unit.original_index))


def check_victory(units: Sequence[BattleUnit]) -> Winner | None:
    players_alive = any(unit.is_alive for unit in units if unit.is_player)
    enemies_alive = any(unit.is_alive for unit in units if not unit.is_player)
    if not players_alive and not enemies_alive:
        return Winner.DRAW
    if not players_alive:
        return Winner.ENEMY
    if not enemies_alive:
        return Winner.PLAYER
    return None


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class Attack:
    target_id: str | None = None


@dataclass(frozen=True)
class Defend:
    pass


@dataclass(frozen=True)
class Flee:
    pass


@dataclass(frozen=True)
class UseItem:
    item_id: str
    target_id: str | None = None


@dataclass(frozen=True)
class CastAbility:
    ability_id: str
    target_id: str | None = None


@dataclass(frozen=True)
class GemSuper:
    pass


Command = Union[Attack, Defend, Flee, UseItem, CastAbility, GemSuper]


@dataclass(frozen=True)
class BattleView:
    """What a command policy sees on a player unit's turn.

    The units are live battle state and must be treated as read-only.
    """

    actor: BattleUnit
    allies: tuple[BattleUnit, ...]
    enemies: tuple[BattleUnit, ...]
    items: tuple[Item, ...]
    gem_super_ready: bool
    round: int


CommandPolicy = Callable[[BattleView], Command]


def auto_attack(view: BattleView) -> Command:
    """Default policy: attack the weakest living enemy."""
    return Attack()


# =============================================================================
# Engine
# =============================================================================


@dataclass(frozen=True)
class BattleOutcome:
    """A battle result plus the final state of every battle unit.

    Attributes:
        result: The persisted battle result.
        units: Final battle units, players first.
        remaining_items: Consumables left after in-battle use.
        gem_state: Gem state after the battle, activated if the super fired.
    """

    result: BattleResult
    units: tuple[BattleUnit, ...]
    remaining_items: tuple[Item, ...]
    gem_state: ActiveGemState

    @property
    def players(self) -> tuple[BattleUnit, ...]:
        return tuple(unit for unit in self.units if unit.is_player)

    @property
    def enemies(self) -> tuple[BattleUnit, ...]:
        return tuple(unit for unit in self.units if not unit.is_player)

    @property
    def defeated_enemy_ids(self) -> tuple[str, ...]:
        return tuple(unit.id for unit in self.enemies if not unit.is_alive)


class BattleEngine:
    """Resolves battles from one dedicated stream.

    Attributes:
        rng: The battle stream; every variance roll is drawn from it.
        max_rounds: Round cap after which the battle is a draw.
    """

    def __init__(
        self,
        rng: SeededRng,
        *,
        max_rounds: int = constants.MAX_BATTLE_ROUNDS,
        events: EventLogger | None = None,
    ) -> None:
        self.rng = rng
        self.max_rounds = max_rounds
        self._events = events or EventLogger()

    def run(
        self,
        players: Sequence[RosterUnit],
        enemies: Sequence[EnemyTemplate],
        *,
        policy: CommandPolicy = auto_attack,
        items: Sequence[Item] = (),
        gem_state: ActiveGemState | None = None,
        player_stats: Sequence[UnitStats] | None = None,
        battle_index: int = 0,
        opponent_id: str | None = None,
    ) -> BattleOutcome:
        """Fight one battle to completion.

        Args:
            players: Player roster units in formation order.
            enemies: Enemy templates in formation order.
            policy: Chooses commands on player turns.
            items: Consumables available to ``UseItem`` commands.
            gem_state: Run gem state; enables ``GemSuper`` when not activated.
            player_stats: Effective stats per player, parallel to ``players``.
            battle_index: Battle number, for logging.
            opponent_id: Opponent id, for logging.

        Returns:
            The battle outcome.
        """
        units = build_battle_units(players, enemies, player_stats)
        gem_state = gem_state or ActiveGemState()
        battle = _BattleState(units=units, items=list(items), gem_state=gem_state)

        early = check_victory(units)
        if early is not None:
            logger.debug("Battle ended before it started", winner=str(early))
            return battle.outcome(early, turns=0)

        self._events.battle_started(
            battle_index=battle_index,
            opponent_id=opponent_id,
            player_units=len(players),
            enemy_units=len(enemies),
        )

        winner: Winner | None = None
        rounds = 0
        while rounds < self.max_rounds and winner is None:
            for actor in turn_order(units):
                if not actor.is_alive:
                    continue
                if actor.is_player:
                    command = policy(battle.view(actor, rounds))
                else:
                    command = Attack()
                self._perform(battle, actor, command)
                if battle.fled:
                    winner = Winner.DRAW
                    break
                winner = check_victory(units)
                if winner is not None:
                    break
            rounds += 1
            for unit in units:
                unit.buffs = decay_buffs(unit.buffs)

        if winner is None:
            winner = Winner.DRAW
            self._events.battle_stalemate(rounds=rounds)

        outcome = battle.outcome(winner, turns=rounds)
        self._events.battle_ended(battle_index=battle_index, result=outcome.result)
        if winner is not Winner.PLAYER and not battle.fled:
            self._events.battle_defeat(battle_index=battle_index, result=outcome.result)
        return outcome

    # -------------------------------------------------------------------------
    # Command execution
    # -------------------------------------------------------------------------

    def _perform(self, battle: _BattleState, actor: BattleUnit, command: Command) -> None:
        match command:
            case Defend():
                actor.defending = True
                battle.log(ActionKind.DEFEND, actor_id=actor.id)
                return
            case Flee():
                battle.fled = True
                battle.log(
                    ActionKind.FLEE,
                    actor_id=actor.id,
                    defeated_ids=tuple(
                        unit.id for unit in battle.units if not unit.is_player and not unit.is_alive
                    ),
                )
                return
            case UseItem(item_id=item_id, target_id=target_id):
                reason = self._use_item(battle, actor, item_id, target_id)
            case CastAbility(ability_id=ability_id, target_id=target_id):
                reason = self._cast(battle, actor, ability_id, target_id)
            case GemSuper():
                reason = self._gem_super(battle, actor)
            case Attack(target_id=target_id):
                reason = None
                self._attack(battle, actor, battle.opponent(actor, target_id))
            case _:
                raise TypeError(f"Unknown battle command: {command!r}")

        if reason is not None:
            logger.debug(
                "Command fell back to attack",
                actor_id=actor.id,
                command=type(command).__name__,
                reason=reason,
            )
            self._attack(battle, actor, battle.opponent(actor, None))

    def _attack(self, battle: _BattleState, actor: BattleUnit, target: BattleUnit | None) -> None:
        if target is None:
            return
        variance = self.rng.next_int(-constants.DAMAGE_VARIANCE, constants.DAMAGE_VARIANCE)
        damage = compute_damage(
            actor.effective_atk, target.effective_defense, variance, target.defending
        )
        target.defending = False
        target.take_damage(damage)
        battle.log(ActionKind.ATTACK, actor_id=actor.id, target_id=target.id, amount=damage)
        battle.check_defeat(actor, target)

    def _use_item(
        self, battle: _BattleState, actor: BattleUnit, item_id: str, target_id: str | None
    ) -> str | None:
        item = next((item for item in battle.items if item.id == item_id), None)
        if item is None:
            return f"No {item_id} left"
        target = battle.ally(actor, target_id, include_fallen=True) or actor
        reason = check_item_use(item, target.current_hp, target.max_hp)
        if reason is not None:
            return reason
        before = target.current_hp
        target.current_hp = healed_hp(item, target.current_hp, target.max_hp)
        battle.items.remove(item)
        battle.items_used.append(item.id)
        battle.log(
            ActionKind.ITEM_USED,
            actor_id=actor.id,
            target_id=target.id,
            amount=target.current_hp - before,
            item_id=item.id,
        )
        return None

    def _cast(
        self, battle: _BattleState, actor: BattleUnit, ability_id: str, target_id: str | None
    ) -> str | None:
        ability = next((a for a in actor.abilities if a.id == ability_id), None)
        if ability is None:
            return f"{actor.name} does not know {ability_id}"
        reason = check_usable(
            actor.current_mp,
            ability,
            has_allies=bool(battle.living(actor.is_player)),
            has_enemies=bool(battle.living(not actor.is_player)),
        )
        if reason is not None:
            return reason

        actor.current_mp -= ability.mp_cost
        effect = ability.effect
        for target in self._ability_targets(battle, actor, ability, target_id):
            if isinstance(effect, DamageEffect):
                amount = target.take_damage(ability_damage(ability, actor.effective_atk, self.rng))
            elif isinstance(effect, HealEffect):
                before = target.current_hp
                target.current_hp = min(
                    target.max_hp, target.current_hp + ability_healing(ability, self.rng)
                )
                amount = target.current_hp - before
            elif isinstance(effect, BuffEffect):
                target.buffs.append(buff_from_ability(ability))
                amount = effect.amount
            else:
                continue
            battle.log(
                ActionKind.ABILITY,
                actor_id=actor.id,
                target_id=target.id,
                amount=amount,
                ability_id=ability.id,
            )
            if isinstance(effect, DamageEffect):
                battle.check_defeat(actor, target)
        return None

    @staticmethod
    def _ability_targets(
        battle: _BattleState, actor: BattleUnit, ability: Ability, target_id: str | None
    ) -> list[BattleUnit]:
        match ability.target:
            case TargetShape.SELF:
                return [actor]
            case TargetShape.SINGLE_ENEMY:
                target = battle.opponent(actor, target_id)
                return [target] if target else []
            case TargetShape.ALL_ENEMIES:
                return battle.living(not actor.is_player)
            case TargetShape.SINGLE_ALLY:
                return [battle.ally(actor, target_id) or actor]
            case TargetShape.ALL_ALLIES:
                return battle.living(actor.is_player)
        return []

    def _gem_super(self, battle: _BattleState, actor: BattleUnit) -> str | None:
        gem = battle.gem_state.active_gem
        if gem is None:
            return "No gem selected"
        if battle.gem_state.is_activated:
            return "Gem super already used"

        targets = battle.living(not actor.is_player)
        hit = gem_super.execute(gem.super_power, gem.element, targets, self.rng)
        battle.gem_state = battle.gem_state.activated()
        battle.gem_super_used = True
        for target, after in zip(targets, hit):
            amount = target.current_hp - after.current_hp
            target.current_hp = after.current_hp
            battle.log(
                ActionKind.GEM_SUPER,
                actor_id=actor.id,
                target_id=target.id,
                amount=amount,
                ability_id=gem.id,
            )
            battle.check_defeat(actor, target)
        return None


@dataclass
class _BattleState:
    """Mutable bookkeeping for one battle."""

    units: list[BattleUnit]
    items: list[Item]
    gem_state: ActiveGemState
    actions: list[CombatAction] = field(default_factory=list)
    defeated: list[str] = field(default_factory=list)
    items_used: list[str] = field(default_factory=list)
    fled: bool = False
    gem_super_used: bool = False

    def log(self, kind: ActionKind, **fields: object) -> None:
        self.actions.append(CombatAction(seq=len(self.actions), kind=kind, **fields))

    def check_defeat(self, actor: BattleUnit, target: BattleUnit) -> None:
        if target.is_alive or target.id in self.defeated:
            return
        self.defeated.append(target.id)
        self.log(ActionKind.DEFEAT, actor_id=actor.id, target_id=target.id)

    def living(self, is_player: bool) -> list[BattleUnit]:
        return [unit for unit in self.units if unit.is_player == is_player and unit.is_alive]

    def opponent(self, actor: BattleUnit, target_id: str | None) -> BattleUnit | None:
        """Requested living opponent, or the automatic target."""
        if target_id is not None:
            for unit in self.living(not actor.is_player):
                if unit.id == target_id:
                    return unit
        return select_target(actor, self.units)

    def ally(
        self, actor: BattleUnit, target_id: str | None, include_fallen: bool = False
    ) -> BattleUnit | None:
        if target_id is None:
            return None
        for unit in self.units:
            if unit.is_player != actor.is_player or unit.id != target_id:
                continue
            if unit.is_alive or include_fallen:
                return unit
        return None

    def view(self, actor: BattleUnit, round_number: int) -> BattleView:
        return BattleView(
            actor=actor,
            allies=tuple(unit for unit in self.units if unit.is_player == actor.is_player),
            enemies=tuple(unit for unit in self.units if unit.is_player != actor.is_player),
            items=tuple(self.items),
            gem_super_ready=(
                self.gem_state.active_gem is not None and not self.gem_state.is_activated
            ),
            round=round_number,
        )

    def outcome(self, winner: Winner, turns: int) -> BattleOutcome:
        return BattleOutcome(
            result=BattleResult(
                winner=winner,
                actions=tuple(self.actions),
                units_defeated=tuple(self.defeated),
                turns_taken=turns,
                fled=self.fled,
                items_used=tuple(self.items_used),
                gem_super_used=self.gem_super_used,
            ),
            units=tuple(replace(unit, buffs=list(unit.buffs)) for unit in self.units),
            remaining_items=tuple(self.items),
            gem_state=self.gem_state,
        )


__all__ = [
    "BattleUnit",
    "build_battle_units",
    "compute_damage",
    "turn_order",
    "select_target",
    "check_victory",
    "Attack",
    "Defend",
    "Flee",
    "UseItem",
    "CastAbility",
    "GemSuper",
    "Command",
    "BattleView",
    "CommandPolicy",
    "auto_attack",
    "BattleOutcome",
    "BattleEngine",
]
