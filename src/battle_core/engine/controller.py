"""Run orchestration.

``GameController`` drives one run through the game flow:

    start_run -> generate_opponent_choices -> select_opponent ->
    start_battle -> claim_rewards -> continue_to_recruit -> recruit ->
    advance_to_next_battle -> (loop)

It owns the mutable run state and delegates every rule to the pure engine
modules. Each battle, reward roll and choice round draws from a stream
forked from the run seed and battle index, so a loaded save replays
exactly what the original run would have.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from battle_core.core.config import EngineSettings, GemActivationPolicy, get_settings
from battle_core.core.exceptions import (
    BattleCoreError,
    InvalidRosterError,
    InvalidTransitionError,
    ItemNotFoundError,
    InventoryFullError,
    UnitNotFoundError,
    ValidationError,
)
from battle_core.core.logging import bind_context, clear_context, get_logger
from battle_core.core.result import Err, Ok, Result
from battle_core.data.items import HEALTH_POTION
from battle_core.data.opponents import OPPONENT_CATALOG
from battle_core.engine.abilities import restore_mp
from battle_core.engine.battle import BattleEngine, BattleOutcome, CommandPolicy, auto_attack
from battle_core.engine.choice import generate_choices
from battle_core.engine.elements import initialize_unit_abilities
from battle_core.engine.equipment import add_equipment, equip_item, release_unit_equipment
from battle_core.engine.events import EventLogger
from battle_core.engine.items import add_items, use_consumable
from battle_core.engine.rewards import BattleRewards, apply_experience, calculate_battle_rewards
from battle_core.engine.rng import StreamLabel, StreamRegistry
from battle_core.engine.state_machine import GameStateMachine
from battle_core.engine.stats import calculate_unit_stats
from battle_core.engine.team import TeamManager
from battle_core.models.combat import BattleResult
from battle_core.models.enums import FlowState, Winner
from battle_core.models.items import InventoryData
from battle_core.models.opponents import OpponentPreview, OpponentSpec
from battle_core.models.state import ChoiceSlice, GameStateSnapshot, ProgressionCounters
from battle_core.models.units import ActiveGemState, ElementalGem, EnemyTemplate, RosterUnit
from battle_core.storage.blob_store import create_blob_store
from battle_core.storage.save_system import LoadError, SaveSystem


logger = get_logger(__name__)


# =============================================================================
# Run State
# =============================================================================


@dataclass
class RunState:
    """Mutable state of the run in progress.

    Attributes:
        run_seed: Root seed every stream derives from.
        battle_index: Battles completed so far.
        player_team: Team in formation order.
        inventory_data: Consumables and equipment.
        gems: Gems owned.
        active_gem_state: Run gem driving the element bonus and gem super.
        progression: All-time counters.
        current_choices: Previews offered this round.
        selected_opponent: Opponent chosen for the upcoming battle.
        last_result: Result of the most recent battle.
        pending_rewards: Rewards rolled but not yet claimed.
        recruitable: Enemy templates defeated in the last battle.
        recruited_this_battle: Whether a recruit was already taken.
    """

    run_seed: int = 0
    battle_index: int = 0
    player_team: tuple[RosterUnit, ...] = ()
    inventory_data: InventoryData = field(default_factory=InventoryData)
    gems: tuple[ElementalGem, ...] = ()
    active_gem_state: ActiveGemState = field(default_factory=ActiveGemState)
    progression: ProgressionCounters = field(default_factory=ProgressionCounters)
    current_choices: tuple[OpponentPreview, ...] | None = None
    selected_opponent: OpponentSpec | None = None
    last_result: BattleResult | None = None
    pending_rewards: BattleRewards | None = None
    recruitable: tuple[EnemyTemplate, ...] = ()
    recruited_this_battle: bool = False


def _bump(progression: ProgressionCounters, counter: str) -> ProgressionCounters:
    return progression.model_copy(update={counter: getattr(progression, counter) + 1})


# =============================================================================
# Controller
# =============================================================================


class GameController:
    """Coordinates the flow machine, the engine and persistence for one run.

    Attributes:
        settings: Engine settings in effect.
        save_system: Save/load subsystem.
        events: Game event logger.
    """

    def __init__(
        self,
        save_system: SaveSystem | None = None,
        *,
        settings: EngineSettings | None = None,
        events: EventLogger | None = None,
        catalog: tuple[OpponentSpec, ...] = OPPONENT_CATALOG,
    ) -> None:
        """Initialize the controller.

        Args:
            save_system: Save subsystem; one over the configured blob store
                when omitted.
            settings: Engine settings; the cached application settings when
                omitted.
            events: Game event logger shared with the engine.
            catalog: Opponents offered during the run.
        """
        self.settings = settings or get_settings().engine
        self.events = events or EventLogger()
        self.save_system = save_system or SaveSystem(create_blob_store(), events=self.events)
        self._catalog = catalog
        self._machine = GameStateMachine()
        self._team_manager = TeamManager(max_team_size=self.settings.active_party_size)
        self._run = RunState()
        self._streams = StreamRegistry(0)

        logger.info("GameController initialized", policy=str(self.settings.gem_activation_policy))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def flow_state(self) -> FlowState:
        return self._machine.state

    @property
    def state_machine(self) -> GameStateMachine:
        return self._machine

    @property
    def run(self) -> RunState:
        """The live run state. Treat as read-only."""
        return self._run

    @property
    def streams(self) -> StreamRegistry:
        return self._streams

    @property
    def team(self) -> tuple[RosterUnit, ...]:
        return self._run.player_team

    @property
    def inventory(self) -> InventoryData:
        return self._run.inventory_data

    def _require(self, *states: FlowState) -> Result[FlowState, InvalidTransitionError]:
        current = self._machine.state
        if current in states:
            return Ok(current)
        expected = " or ".join(str(state) for state in states)
        return Err(
            InvalidTransitionError(
                f"Operation requires state {expected}, current state is {current}",
                current_state=str(current),
            )
        )

    def _enter_opponent_select(self) -> None:
        self._machine.reset()
        self._machine.transition_to(FlowState.STARTER_SELECT).unwrap()
        self._machine.transition_to(FlowState.OPPONENT_SELECT).unwrap()

    # -------------------------------------------------------------------------
    # Run lifecycle
    # -------------------------------------------------------------------------

    def start_run(
        self,
        starter_team: tuple[RosterUnit, ...] | list[RosterUnit],
        seed: int,
        gem: ElementalGem | None = None,
    ) -> Result[RunState, InvalidRosterError]:
        """Begin a new run.

        Args:
            starter_team: Starting units in formation order.
            seed: Run seed.
            gem: Run gem, if one was picked.

        Returns:
            Ok with the fresh run state, or Err(InvalidRosterError) when the
            team is empty or too large.
        """
        validated = self._team_manager.validate_team(tuple(starter_team))
        if not validated.ok:
            return validated

        team = tuple(initialize_unit_abilities(unit) for unit in validated.unwrap())
        progression = _bump(self._run.progression, "runs_attempted")

        self._run = RunState(
            run_seed=seed,
            player_team=team,
            inventory_data=InventoryData(items=(HEALTH_POTION,) * self.settings.starting_potions),
            gems=(gem,) if gem else (),
            active_gem_state=ActiveGemState(active_gem=gem),
            progression=progression,
        )
        self._streams = StreamRegistry(seed)
        self._team_manager = TeamManager(
            max_team_size=self.settings.active_party_size,
            recruit_counter=progression.units_recruited,
        )
        clear_context()
        bind_context(run_seed=seed)
        self._enter_opponent_select()

        self.events.run_started(seed=seed, team=team)
        return Ok(self._run)

    def select_gem(self, gem: ElementalGem) -> None:
        """Make ``gem`` the run gem, clearing any activation."""
        if gem not in self._run.gems:
            self._run.gems = self._run.gems + (gem,)
        self._run.active_gem_state = ActiveGemState(active_gem=gem)
        logger.debug("Run gem selected", gem_id=gem.id)

    def complete_run(self) -> Result[ProgressionCounters, InvalidTransitionError]:
        """Finish a successful run and return to the menu."""
        required = self._require(FlowState.RECRUIT, FlowState.OPPONENT_SELECT)
        if not required.ok:
            return required

        self._run.progression = _bump(self._run.progression, "runs_completed")
        self.events.run_completed(
            seed=self._run.run_seed, battles_won=self._run.progression.battles_won
        )
        self._machine.reset()
        clear_context()
        return Ok(self._run.progression)

    def return_to_menu(self) -> Result[FlowState, InvalidTransitionError]:
        """Leave the defeat screen."""
        return self._machine.transition_to(FlowState.MENU)

    # -------------------------------------------------------------------------
    # Opponent selection
    # -------------------------------------------------------------------------

    def generate_opponent_choices(
        self,
    ) -> Result[tuple[OpponentPreview, ...], InvalidTransitionError]:
        required = self._require(FlowState.OPPONENT_SELECT)
        if not required.ok:
            return required

        generated = generate_choices(
            self._streams.root,
            self._run.battle_index,
            self._catalog,
            count=self.settings.choice_count,
            max_attempts=self.settings.choice_max_attempts,
            events=self.events,
        )
        self._run.current_choices = generated.previews
        return Ok(generated.previews)

    def select_opponent(
        self, opponent_id: str
    ) -> Result[OpponentPreview, InvalidTransitionError | ValidationError]:
        """Pick one of the offered opponents and move to team prep."""
        required = self._require(FlowState.OPPONENT_SELECT)
        if not required.ok:
            return required
        if not self._run.current_choices:
            return Err(
                ValidationError(
                    "No choices available, generate opponent choices first",
                    field_name="current_choices",
                )
            )

        selected = next(
            (p for p in self._run.current_choices if p.spec.id == opponent_id), None
        )
        if selected is None:
            return Err(
                ValidationError(
                    f"Opponent {opponent_id} is not among the current choices",
                    field_name="opponent_id",
                    invalid_value=opponent_id,
                )
            )

        self._run.selected_opponent = selected.spec
        self.events.choice_selected(battle_index=self._run.battle_index, spec=selected.spec)
        self._machine.transition_to(FlowState.TEAM_PREP).unwrap()
        return Ok(selected)

    # -------------------------------------------------------------------------
    # Battle
    # -------------------------------------------------------------------------

    def start_battle(
        self, policy: CommandPolicy = auto_attack
    ) -> Result[BattleResult, InvalidTransitionError]:
        """Fight the selected opponent.

        Ends in ``rewards`` on a win and in ``defeat`` otherwise, including
        draws and flights.

        Args:
            policy: Chooses commands on player turns.

        Returns:
            Ok with the battle result, or Err(InvalidTransitionError) outside
            team prep.
        """
        required = self._require(FlowState.TEAM_PREP)
        if not required.ok:
            return required
        spec = self._run.selected_opponent
        if spec is None:
            return Err(
                InvalidTransitionError(
                    "No opponent selected", current_state=str(self._machine.state)
                )
            )
        self._machine.transition_to(FlowState.BATTLE).unwrap()

        run = self._run
        index = run.battle_index
        reset_each_battle = (
            self.settings.gem_activation_policy is GemActivationPolicy.RESET_EACH_BATTLE
        )
        gem_state = run.active_gem_state.reset() if reset_each_battle else run.active_gem_state

        stats = [
            calculate_unit_stats(unit, run.inventory_data, gem_state) for unit in run.player_team
        ]
        engine = BattleEngine(
            self._streams.get(StreamLabel.BATTLE).fork(str(index)),
            max_rounds=self.settings.max_battle_rounds,
            events=self.events,
        )
        outcome = engine.run(
            run.player_team,
            spec.units,
            policy=policy,
            items=run.inventory_data.items,
            gem_state=gem_state,
            player_stats=stats,
            battle_index=index,
            opponent_id=spec.id,
        )

        self._apply_outcome(outcome, spec, reset_each_battle)
        result = outcome.result
        if result.winner is Winner.PLAYER:
            run.progression = _bump(run.progression, "battles_won")
            run.pending_rewards = calculate_battle_rewards(
                run.recruitable, self._streams.get(StreamLabel.REWARDS).fork(str(index))
            )
            self._machine.transition_to(FlowState.REWARDS).unwrap()
        else:
            run.progression = _bump(run.progression, "battles_lost")
            self._machine.transition_to(FlowState.DEFEAT).unwrap()
        return Ok(result)

    def _apply_outcome(
        self, outcome: BattleOutcome, spec: OpponentSpec, reset_gem: bool
    ) -> None:
        run = self._run
        team = []
        for unit, fought in zip(run.player_team, outcome.players):
            unit = unit.model_copy(update={"current_hp": min(fought.current_hp, unit.max_hp)})
            team.append(restore_mp(unit, self.settings.max_mp))
        run.player_team = tuple(team)
        run.inventory_data = run.inventory_data.model_copy(
            update={"items": outcome.remaining_items}
        )
        run.active_gem_state = outcome.gem_state.reset() if reset_gem else outcome.gem_state
        run.last_result = outcome.result
        run.recruitable = tuple(
            template
            for template, fought in zip(spec.units, outcome.enemies)
            if not fought.is_alive
        )
        run.recruited_this_battle = False

    # -------------------------------------------------------------------------
    # Rewards and recruitment
    # -------------------------------------------------------------------------

    def claim_rewards(
        self,
    ) -> Result[BattleRewards, InvalidTransitionError | InventoryFullError]:
        """Bank the pending rewards and move to the equipment screen.

        Items and equipment are added all or nothing; on a capacity
        failure nothing changes and the state stays ``rewards``. Experience
        goes to every unit still standing.
        """
        required = self._require(FlowState.REWARDS)
        if not required.ok:
            return required

        rewards = self._run.pending_rewards or BattleRewards()
        stored = add_items(self._run.inventory_data, rewards.items)
        for equipment in rewards.equipment:
            if not stored.ok:
                break
            stored = add_equipment(stored.unwrap(), equipment)
        if not stored.ok:
            return stored

        self._run.inventory_data = stored.unwrap()
        self._run.player_team = tuple(
            apply_experience(unit, rewards.xp) if not unit.is_defeated else unit
            for unit in self._run.player_team
        )
        self._run.pending_rewards = None
        self._machine.transition_to(FlowState.EQUIPMENT).unwrap()
        logger.debug(
            "Rewards claimed",
            gold=rewards.gold,
            xp=rewards.xp,
            items=len(rewards.items),
            equipment=len(rewards.equipment),
        )
        return Ok(rewards)

    def equip(
        self, unit_id: str, equipment_id: str
    ) -> Result[InventoryData, UnitNotFoundError | ItemNotFoundError]:
        """Equip a pool item on a team member."""
        if TeamManager.find_unit(self._run.player_team, unit_id) is None:
            return Err(UnitNotFoundError(f"Unit {unit_id} not found in team", unit_id=unit_id))
        piece = next(
            (e for e in self._run.inventory_data.unequipped_items if e.id == equipment_id), None
        )
        if piece is None:
            return Err(
                ItemNotFoundError("Equipment not in unequipped pool", item_id=equipment_id)
            )
        equipped = equip_item(self._run.inventory_data, unit_id, piece)
        if equipped.ok:
            self._run.inventory_data = equipped.unwrap()
        return equipped

    def continue_to_recruit(self) -> Result[FlowState, InvalidTransitionError]:
        required = self._require(FlowState.EQUIPMENT)
        if not required.ok:
            return required
        return self._machine.transition_to(FlowState.RECRUIT)

    def recruit(
        self, template_id: str, replace_unit_id: str | None = None
    ) -> Result[RosterUnit, BattleCoreError]:
        """Recruit one enemy defeated in the last battle.

        Args:
            template_id: Template id of a defeated enemy.
            replace_unit_id: Team member to replace when the team is full.

        Returns:
            Ok with the new unit. Err(InvalidTransitionError) outside the
            recruit screen, Err(ValidationError) for a second recruit,
            Err(UnitNotFoundError) for an enemy that was not defeated or an
            unknown replacement, Err(TeamFullError) for a full team without
            a replacement.
        """
        required = self._require(FlowState.RECRUIT)
        if not required.ok:
            return required
        if self._run.recruited_this_battle:
            return Err(ValidationError("A unit was already recruited after this battle"))

        template = next((t for t in self._run.recruitable if t.id == template_id), None)
        if template is None:
            return Err(
                UnitNotFoundError(
                    f"Enemy {template_id} was not defeated in the last battle",
                    unit_id=template_id,
                )
            )

        previous_team = self._run.player_team
        recruited = self._team_manager.recruit_unit(previous_team, template, replace_unit_id)
        if not recruited.ok:
            return recruited

        team = recruited.unwrap()
        previous_ids = {u.id for u in previous_team}
        unit = next(u for u in team if u.id not in previous_ids)
        if replace_unit_id is not None and TeamManager.find_unit(team, replace_unit_id) is None:
            self._run.inventory_data = release_unit_equipment(
                self._run.inventory_data, replace_unit_id
            )

        self._run.player_team = team
        self._run.progression = _bump(self._run.progression, "units_recruited")
        self._run.recruited_this_battle = True
        self.events.unit_recruited(unit=unit, replaced_id=replace_unit_id)
        return Ok(unit)

    def advance_to_next_battle(self) -> Result[int, InvalidTransitionError]:
        """Close the battle cycle and return to opponent selection.

        Returns:
            Ok with the new battle index.
        """
        required = self._require(FlowState.RECRUIT)
        if not required.ok:
            return required

        run = self._run
        run.battle_index += 1
        run.current_choices = None
        run.selected_opponent = None
        run.last_result = None
        run.pending_rewards = None
        run.recruitable = ()
        run.recruited_this_battle = False
        self._machine.transition_to(FlowState.OPPONENT_SELECT).unwrap()
        return Ok(run.battle_index)

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    def use_item(
        self, item_id: str, unit_id: str
    ) -> Result[RosterUnit, BattleCoreError]:
        """Use a consumable on a team member outside battle.

        Returns:
            Ok with the updated unit; Err(ItemNotFoundError),
            Err(UnitNotFoundError) or Err(ItemNotUsableError) otherwise.
        """
        item = next((i for i in self._run.inventory_data.items if i.id == item_id), None)
        if item is None:
            return Err(ItemNotFoundError("Item not found in inventory", item_id=item_id))
        unit = TeamManager.find_unit(self._run.player_team, unit_id)
        if unit is None:
            return Err(UnitNotFoundError(f"Unit {unit_id} not found in team", unit_id=unit_id))

        used = use_consumable(item, unit, self._run.inventory_data)
        if not used.ok:
            return used
        updated, inventory = used.unwrap()
        self._run.player_team = TeamManager.replace_unit(self._run.player_team, unit_id, updated)
        self._run.inventory_data = inventory
        return Ok(updated)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def snapshot(self) -> GameStateSnapshot:
        """Capture the run as a save snapshot."""
        run = self._run
        return GameStateSnapshot(
            player_team=run.player_team,
            inventory=run.inventory_data.items,
            gems=run.gems,
            active_gem_state=run.active_gem_state,
            inventory_data=run.inventory_data,
            progression=run.progression,
            choice=ChoiceSlice(
                next_choice_seed=str(run.run_seed),
                battle_index=run.battle_index,
                last_choices=run.current_choices,
            ),
            run_seed=run.run_seed,
        )

    async def save_game(self, slot: str) -> Result[GameStateSnapshot, BattleCoreError]:
        snapshot = self.snapshot()
        saved = await self.save_system.save(slot, snapshot)
        if not saved.ok:
            return saved
        return Ok(snapshot)

    async def load_game(self, slot: str) -> Result[GameStateSnapshot, LoadError]:
        """Restore a run from ``slot`` and resume at opponent selection.

        Returns:
            Ok with the restored snapshot, or the save subsystem's error.
        """
        loaded = await self.save_system.load(slot)
        if not loaded.ok:
            return loaded
        snapshot = loaded.unwrap().to_snapshot()

        inventory_data = snapshot.inventory_data
        if not inventory_data.items and snapshot.inventory:
            inventory_data = inventory_data.model_copy(update={"items": snapshot.inventory})

        gem_state = snapshot.active_gem_state
        if self.settings.gem_activation_policy is GemActivationPolicy.RESET_EACH_BATTLE:
            gem_state = gem_state.reset()

        self._run = RunState(
            run_seed=snapshot.run_seed,
            battle_index=snapshot.choice.battle_index,
            player_team=snapshot.player_team,
            inventory_data=inventory_data,
            gems=snapshot.gems,
            active_gem_state=gem_state,
            progression=snapshot.progression,
            current_choices=snapshot.choice.last_choices,
        )
        self._streams = StreamRegistry(snapshot.run_seed)
        self._team_manager = TeamManager(
            max_team_size=self.settings.active_party_size,
            recruit_counter=snapshot.progression.units_recruited,
        )
        clear_context()
        bind_context(run_seed=snapshot.run_seed)
        self._enter_opponent_select()
        logger.info(
            "Run restored",
            slot=slot,
            run_seed=snapshot.run_seed,
            battle_index=snapshot.choice.battle_index,
        )
        return Ok(snapshot)


__all__ = [
    "RunState",
    "GameController",
]
