"""Tests for recruitment."""

from __future__ import annotations

from typing import Any

import pytest

from battle_core.core.exceptions import InvalidRosterError, TeamFullError, UnitNotFoundError
from battle_core.engine.team import TeamManager, element_for_tags
from battle_core.models.enums import Element, Rank, Tag


class TestElementForTags:
    """Tests for the tag to element mapping."""

    @pytest.mark.parametrize(
        ("tags", "element"),
        [
            ((Tag.HOLY,), Element.MOON),
            ((Tag.BEAST, Tag.HOLY), Element.MOON),
            ((Tag.BEAST, Tag.NATURE), Element.VENUS),
            ((Tag.UNDEAD, Tag.ARCANE), Element.MERCURY),
            ((Tag.MECH,), Element.JUPITER),
            ((Tag.UNDEAD,), Element.SUN),
            ((), Element.VENUS),
        ],
    )
    def test_precedence(self, tags: tuple[Tag, ...], element: Element) -> None:
        assert element_for_tags(tags) is element


class TestTeamManager:
    """Tests for TeamManager."""

    def test_convert_enemy(self, make_enemy: Any) -> None:
        manager = TeamManager()

        unit = manager.convert_enemy_to_player(make_enemy("wolf", tags=(Tag.BEAST,)))

        assert unit.id == "recruited_wolf_1"
        assert unit.template_id == "wolf"
        assert unit.element is Element.MARS
        assert unit.active_gem_state.active_gem.element is Element.MARS
        assert len(unit.granted_abilities) == 4
        assert unit.level == 1
        assert unit.rank is Rank.C
        assert unit.current_hp == unit.max_hp == 60
        assert manager.recruit_counter == 1

    def test_counter_continues(self, make_enemy: Any) -> None:
        manager = TeamManager(recruit_counter=3)

        assert manager.convert_enemy_to_player(make_enemy("wolf")).id == "recruited_wolf_4"

    def test_recruit_with_room(self, make_unit: Any, make_enemy: Any) -> None:
        team = (make_unit("a"),)

        new_team = TeamManager().recruit_unit(team, make_enemy()).unwrap()

        assert [unit.id for unit in new_team] == ["a", "recruited_grunt_1"]
        assert team == (make_unit("a"),)

    def test_full_team_needs_replacement(self, make_unit: Any, make_enemy: Any) -> None:
        team = tuple(make_unit(f"u{i}") for i in range(4))
        manager = TeamManager()

        result = manager.recruit_unit(team, make_enemy())

        assert isinstance(result.unwrap_err(), TeamFullError)
        assert result.unwrap_err().details["capacity"] == 4
        assert manager.recruit_counter == 0

    def test_replacement_must_exist(self, make_unit: Any, make_enemy: Any) -> None:
        team = tuple(make_unit(f"u{i}") for i in range(4))

        result = TeamManager().recruit_unit(team, make_enemy(), replace_unit_id="ghost")

        assert isinstance(result.unwrap_err(), UnitNotFoundError)

    def test_replace_in_place(self, make_unit: Any, make_enemy: Any) -> None:
        team = tuple(make_unit(f"u{i}") for i in range(4))

        new_team = TeamManager().recruit_unit(team, make_enemy(), replace_unit_id="u2").unwrap()

        assert [unit.id for unit in new_team] == ["u0", "u1", "recruited_grunt_1", "u3"]

    def test_validate_team(self, make_unit: Any) -> None:
        manager = TeamManager()

        assert isinstance(manager.validate_team([]).unwrap_err(), InvalidRosterError)
        assert not manager.validate_team([make_unit(f"u{i}") for i in range(5)]).ok
        assert manager.validate_team([make_unit("a")]).ok

    def test_helpers(self, make_unit: Any) -> None:
        team = (make_unit("a", template_id="wolf"), make_unit("b"))
        manager = TeamManager()

        assert manager.available_slots(team) == 2
        assert manager.find_unit(team, "b").id == "b"
        assert manager.find_unit(team, "z") is None
        assert manager.find_duplicate(team, "wolf").id == "a"
        assert [unit.id for unit in manager.remove_unit(team, "a")] == ["b"]
