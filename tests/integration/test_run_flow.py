"""Integration tests for a run driven through the GameController."""

from __future__ import annotations

from typing import Any

import pytest
import structlog

from battle_core.core.config import GemActivationPolicy
from battle_core.core.exceptions import (
    InvalidRosterError,
    InvalidTransitionError,
    ItemNotFoundError,
    ItemNotUsableError,
    TeamFullError,
    UnitNotFoundError,
    ValidationError,
)
from battle_core.data.gems import get_elemental_gem
from battle_core.engine.battle import Attack, BattleView, Command, GemSuper
from battle_core.engine.controller import GameController
from battle_core.models.enums import Element, FlowState, Winner


def _win_battle(controller: GameController, **kwargs: Any) -> None:
    previews = controller.generate_opponent_choices().unwrap()
    controller.select_opponent(previews[0].spec.id).unwrap()
    assert controller.start_battle(**kwargs).unwrap().winner is Winner.PLAYER


class TestRunStart:
    """Tests for starting a run."""

    def test_start_run(self, make_controller: Any, weak_catalog: Any, starter_team: Any, event_sink: Any) -> None:
        controller = make_controller(weak_catalog)

        run = controller.start_run(starter_team, 12345).unwrap()

        assert controller.flow_state is FlowState.OPPONENT_SELECT
        assert run.run_seed == 12345
        assert run.progression.runs_attempted == 1
        assert controller.inventory.count("health_potion") == 3
        # Every starter carries its own element's gem
        assert all(len(unit.granted_abilities) == 4 for unit in controller.team)
        assert event_sink.named("run:started")[0]["team"] == [u.id for u in starter_team]

    def test_start_run_rejects_bad_teams(
        self, make_controller: Any, weak_catalog: Any, make_unit: Any
    ) -> None:
        controller = make_controller(weak_catalog)

        empty = controller.start_run([], 1)
        crowded = controller.start_run([make_unit(f"u{i}") for i in range(5)], 1)

        assert isinstance(empty.unwrap_err(), InvalidRosterError)
        assert isinstance(crowded.unwrap_err(), InvalidRosterError)
        assert controller.flow_state is FlowState.MENU


class TestBattleCycle:
    """Tests for the choose, fight, reward and recruit loop."""

    def test_full_cycle(
        self, make_controller: Any, weak_catalog: Any, starter_team: Any, event_sink: Any
    ) -> None:
        controller = make_controller(weak_catalog)
        controller.start_run(starter_team, 12345).unwrap()

        previews = controller.generate_opponent_choices().unwrap()
        assert len(previews) == 3

        chosen = previews[1].spec
        controller.select_opponent(chosen.id).unwrap()
        assert controller.flow_state is FlowState.TEAM_PREP
        assert event_sink.named("choice:selected")[0]["opponent_id"] == chosen.id

        result = controller.start_battle().unwrap()
        assert result.winner is Winner.PLAYER
        assert controller.flow_state is FlowState.REWARDS
        assert controller.run.progression.battles_won == 1
        assert controller.run.recruitable == chosen.units

        rewards = controller.claim_rewards().unwrap()
        assert controller.flow_state is FlowState.EQUIPMENT
        assert rewards.xp == 250
        assert all(unit.level == 3 and unit.experience == 50 for unit in controller.team)
        assert controller.inventory.count("health_potion") == 3 + len(rewards.items)
        assert len(controller.inventory.unequipped_items) == len(rewards.equipment)

        controller.continue_to_recruit().unwrap()
        recruit = controller.recruit(chosen.units[0].id).unwrap()
        assert recruit.id == f"recruited_{chosen.units[0].id}_1"
        assert len(controller.team) == 4
        assert controller.run.progression.units_recruited == 1

        second = controller.recruit(chosen.units[1].id)
        assert isinstance(second.unwrap_err(), ValidationError)

        assert controller.advance_to_next_battle().unwrap() == 1
        assert controller.flow_state is FlowState.OPPONENT_SELECT
        assert controller.run.recruitable == ()
        assert controller.run.current_choices is None

    def test_recruit_into_full_team(
        self, make_controller: Any, weak_catalog: Any, make_unit: Any
    ) -> None:
        controller = make_controller(weak_catalog)
        controller.start_run([make_unit(f"u{i}", speed=60) for i in range(4)], 7).unwrap()
        _win_battle(controller)
        controller.claim_rewards().unwrap()
        controller.continue_to_recruit().unwrap()
        template_id = controller.run.recruitable[0].id

        full = controller.recruit(template_id)
        assert isinstance(full.unwrap_err(), TeamFullError)

        missing = controller.recruit("never_fought")
        assert isinstance(missing.unwrap_err(), UnitNotFoundError)

        recruit = controller.recruit(template_id, replace_unit_id="u2").unwrap()
        assert [unit.id for unit in controller.team] == ["u0", "u1", recruit.id, "u3"]
        assert controller.run.recruited_this_battle

    def test_defeat(
        self, make_controller: Any, strong_catalog: Any, starter_team: Any, event_sink: Any
    ) -> None:
        controller = make_controller(strong_catalog)
        controller.start_run(starter_team, 12345).unwrap()
        previews = controller.generate_opponent_choices().unwrap()
        controller.select_opponent(previews[0].spec.id).unwrap()

        result = controller.start_battle().unwrap()

        assert result.winner is Winner.ENEMY
        assert controller.flow_state is FlowState.DEFEAT
        assert controller.run.progression.battles_lost == 1
        assert controller.run.pending_rewards is None
        # HP written back, MP refilled
        assert all(unit.current_hp == 0 for unit in controller.team)
        assert all(unit.current_mp == unit.max_mp for unit in controller.team)
        assert event_sink.levels("battle:defeat") == ["error"]

        assert isinstance(controller.claim_rewards().unwrap_err(), InvalidTransitionError)
        assert controller.return_to_menu().unwrap() is FlowState.MENU

    def test_complete_run(self, make_controller: Any, weak_catalog: Any, starter_team: Any) -> None:
        controller = make_controller(weak_catalog)
        controller.start_run(starter_team, 3).unwrap()
        assert structlog.contextvars.get_contextvars() == {"run_seed": 3}
        _win_battle(controller)
        controller.claim_rewards().unwrap()
        controller.continue_to_recruit().unwrap()

        progression = controller.complete_run().unwrap()

        assert progression.runs_completed == 1
        assert progression.battles_won == 1
        assert controller.flow_state is FlowState.MENU
        assert structlog.contextvars.get_contextvars() == {}


class TestFlowGuards:
    """Tests for operations attempted in the wrong state."""

    def test_operations_outside_their_state(
        self, make_controller: Any, weak_catalog: Any, starter_team: Any
    ) -> None:
        controller = make_controller(weak_catalog)

        assert isinstance(controller.generate_opponent_choices().unwrap_err(), InvalidTransitionError)

        controller.start_run(starter_team, 12345).unwrap()
        error = controller.start_battle().unwrap_err()
        assert isinstance(error, InvalidTransitionError)
        assert error.details["current_state"] == "opponent_select"
        assert isinstance(controller.continue_to_recruit().unwrap_err(), InvalidTransitionError)
        assert isinstance(controller.advance_to_next_battle().unwrap_err(), InvalidTransitionError)
        assert isinstance(controller.return_to_menu().unwrap_err(), InvalidTransitionError)
        assert controller.flow_state is FlowState.OPPONENT_SELECT

    def test_select_requires_offered_opponent(
        self, make_controller: Any, weak_catalog: Any, starter_team: Any
    ) -> None:
        controller = make_controller(weak_catalog)
        controller.start_run(starter_team, 12345).unwrap()

        before = controller.select_opponent("weak_beast")
        controller.generate_opponent_choices().unwrap()
        unknown = controller.select_opponent("dragon")

        assert isinstance(before.unwrap_err(), ValidationError)
        assert isinstance(unknown.unwrap_err(), ValidationError)
        assert unknown.unwrap_err().details["invalid_value"] == "dragon"


class TestItemsAndEquipment:
    """Tests for using items and equipping gear between battles."""

    def test_use_item(self, make_controller: Any, weak_catalog: Any, make_unit: Any) -> None:
        controller = make_controller(weak_catalog)
        controller.start_run([make_unit("hero", current_hp=20)], 1).unwrap()

        healed = controller.use_item("health_potion", "hero").unwrap()

        assert healed.current_hp == 70
        assert controller.team[0].current_hp == 70
        assert controller.inventory.count("health_potion") == 2

    def test_use_item_errors(self, make_controller: Any, weak_catalog: Any, make_unit: Any) -> None:
        controller = make_controller(weak_catalog)
        controller.start_run([make_unit("hero")], 1).unwrap()

        assert isinstance(controller.use_item("elixir", "hero").unwrap_err(), ItemNotFoundError)
        assert isinstance(
            controller.use_item("health_potion", "ghost").unwrap_err(), UnitNotFoundError
        )
        assert isinstance(
            controller.use_item("health_potion", "hero").unwrap_err(), ItemNotUsableError
        )
        assert controller.inventory.count("health_potion") == 3

    def test_equip_errors(self, make_controller: Any, weak_catalog: Any, starter_team: Any) -> None:
        controller = make_controller(weak_catalog)
        controller.start_run(starter_team, 1).unwrap()

        assert isinstance(controller.equip("ghost", "sword").unwrap_err(), UnitNotFoundError)
        assert isinstance(
            controller.equip("starter_warrior", "sword").unwrap_err(), ItemNotFoundError
        )


class TestGemPolicy:
    """Tests for gem super activation across battles."""

    @staticmethod
    def _super_first(view: BattleView) -> Command:
        return GemSuper() if view.gem_super_ready else Attack()

    @pytest.mark.parametrize(
        ("policy", "activated_after"),
        [
            (GemActivationPolicy.RESET_EACH_BATTLE, False),
            (GemActivationPolicy.PERSIST, True),
        ],
    )
    def test_activation_lifetime(
        self,
        make_controller: Any,
        weak_catalog: Any,
        starter_team: Any,
        policy: GemActivationPolicy,
        activated_after: bool,
    ) -> None:
        controller = make_controller(weak_catalog, policy)
        controller.start_run(starter_team, 12345, gem=get_elemental_gem(Element.MARS)).unwrap()

        _win_battle(controller, policy=self._super_first)

        assert controller.run.last_result.gem_super_used
        assert controller.run.active_gem_state.is_activated is activated_after
        assert controller.run.gems == (get_elemental_gem(Element.MARS),)

    def test_select_gem(self, make_controller: Any, weak_catalog: Any, starter_team: Any) -> None:
        controller = make_controller(weak_catalog)
        controller.start_run(starter_team, 1).unwrap()
        gem = get_elemental_gem(Element.SUN)

        controller.select_gem(gem)
        controller.select_gem(gem)

        assert controller.run.gems == (gem,)
        assert controller.run.active_gem_state.active_gem == gem
