"""Tests for ranks, effective stats, buffs and abilities."""

from __future__ import annotations

from typing import Any

import pytest

from battle_core.core.exceptions import ValidationError
from battle_core.data.gems import get_elemental_gem
from battle_core.data.spells import AOE_SPELLS, COUNTER_WARDS, MATCHING_SPELLS
from battle_core.engine.abilities import (
    ability_damage,
    ability_healing,
    all_abilities,
    check_usable,
    restore_all_mp,
    restore_mp,
    spend_mp,
)
from battle_core.engine.buffs import ActiveBuff, buff_from_ability, buff_modifier, decay_buffs
from battle_core.engine.rank import merge_units, rank_bonus_description, rank_multiplier
from battle_core.engine.rng import SeededRng
from battle_core.engine.stats import calculate_unit_stats
from battle_core.models.enums import BuffStat, Element, EquipmentSlot, Rank
from battle_core.models.items import Equipment, InventoryData
from battle_core.models.units import ActiveGemState


class TestRank:
    """Tests for duplicate merging."""

    def test_merge_upgrades(self, make_unit: Any) -> None:
        target = make_unit("a", template_id="wolf")

        merged = merge_units(target, make_unit("b", template_id="wolf")).unwrap()

        assert merged.rank is Rank.B
        assert merged.atk == target.atk
        assert target.rank is Rank.C

    def test_merge_requires_duplicate(self, make_unit: Any) -> None:
        error = merge_units(make_unit("a"), make_unit("b")).unwrap_err()

        assert isinstance(error, ValidationError)
        assert error.details["field_name"] == "template_id"

    def test_merge_stops_at_s(self, make_unit: Any) -> None:
        result = merge_units(make_unit("a", rank=Rank.S), make_unit("a"))

        assert "max rank" in result.unwrap_err().message

    def test_descriptions(self) -> None:
        assert rank_multiplier(Rank.A) == 1.30
        assert rank_bonus_description(Rank.C) == "Base stats (no bonus)"
        assert rank_bonus_description(Rank.S) == "+50% to all base stats"


class TestUnitStats:
    """Tests for effective stat layering."""

    def test_base(self, make_unit: Any) -> None:
        stats = calculate_unit_stats(make_unit())

        assert (stats.max_hp, stats.attack, stats.defense, stats.speed) == (100, 20, 10, 50)

    def test_rank_scales(self, make_unit: Any) -> None:
        stats = calculate_unit_stats(make_unit(rank=Rank.S))

        assert (stats.max_hp, stats.attack, stats.defense, stats.speed) == (150, 30, 15, 75)

    def test_equipment_and_gem(self, make_unit: Any) -> None:
        sword = Equipment(id="sword", name="Sword", slot=EquipmentSlot.WEAPON, attack_bonus=5)
        inventory = InventoryData(equipped_items={("hero", EquipmentSlot.WEAPON): sword})
        gem_state = ActiveGemState(active_gem=get_elemental_gem(Element.MARS))

        assert calculate_unit_stats(make_unit(), inventory).attack == 25
        assert calculate_unit_stats(make_unit(), inventory, gem_state).attack == 29
        assert calculate_unit_stats(make_unit(), inventory, gem_state.activated()).attack == 25


class TestBuffs:
    """Tests for buff bookkeeping."""

    def test_modifier_stacks(self) -> None:
        buffs = [
            ActiveBuff(BuffStat.DEFENSE, 10, 2, "stone_wall"),
            ActiveBuff(BuffStat.DEFENSE, 15, 1, "fire_ward"),
            ActiveBuff(BuffStat.ATTACK, 5, 1, "war_cry"),
        ]

        assert buff_modifier(buffs, BuffStat.DEFENSE) == 25
        assert buff_modifier(buffs, BuffStat.SPEED) == 0

    def test_decay(self) -> None:
        buffs = [ActiveBuff(BuffStat.DEFENSE, 10, 2, "a"), ActiveBuff(BuffStat.ATTACK, 5, 1, "b")]

        decayed = decay_buffs(buffs)

        assert decayed == [ActiveBuff(BuffStat.DEFENSE, 10, 1, "a")]
        assert decay_buffs(decayed) == []

    def test_from_ability(self) -> None:
        ward = buff_from_ability(COUNTER_WARDS[Element.MARS])

        assert ward == ActiveBuff(BuffStat.DEFENSE, 15, ward.duration, "fire_ward")
        assert buff_from_ability(MATCHING_SPELLS[Element.MARS]) is None


class TestAbilities:
    """Tests for ability costs and rolls."""

    def test_spend_mp(self, make_unit: Any) -> None:
        fire_blast = MATCHING_SPELLS[Element.MARS]

        assert spend_mp(make_unit(), fire_blast).unwrap().current_mp == 42
        assert isinstance(spend_mp(make_unit(current_mp=2), fire_blast).unwrap_err(), ValidationError)

    def test_check_usable(self) -> None:
        fire_blast = MATCHING_SPELLS[Element.MARS]
        healing_wave = MATCHING_SPELLS[Element.MERCURY]

        assert check_usable(50, fire_blast, has_allies=True, has_enemies=True) is None
        assert check_usable(2, fire_blast, has_allies=True, has_enemies=True).startswith(
            "Not enough MP"
        )
        assert check_usable(50, fire_blast, has_allies=True, has_enemies=False) == "No enemies available"
        assert check_usable(50, healing_wave, has_allies=False, has_enemies=True) == "No allies available"

    def test_damage_and_healing(self) -> None:
        fire_blast = MATCHING_SPELLS[Element.MARS]
        healing_wave = MATCHING_SPELLS[Element.MERCURY]

        assert ability_damage(fire_blast, 20) == 40
        assert 38 <= ability_damage(fire_blast, 20, SeededRng(1)) <= 42
        assert ability_healing(healing_wave) == 20
        assert 19 <= ability_healing(healing_wave, SeededRng(1)) <= 21
        assert ability_damage(healing_wave, 20) == 0
        assert ability_healing(fire_blast) == 0

    def test_restore_mp(self, make_unit: Any) -> None:
        drained = make_unit(current_mp=3)

        assert restore_mp(drained).current_mp == 50
        assert [unit.current_mp for unit in restore_all_mp([drained, drained], 30)] == [30, 30]

    @pytest.mark.parametrize(
        ("gem_element", "count"),
        [(Element.MARS, 4), (Element.MERCURY, 1), (Element.VENUS, 0)],
    )
    def test_all_abilities_for_gem(self, make_unit: Any, gem_element: Element, count: int) -> None:
        gem_state = ActiveGemState(active_gem=get_elemental_gem(gem_element))

        abilities = all_abilities(make_unit(), gem_state)

        assert len(abilities) == count
        if count == 4:
            assert abilities[1] == AOE_SPELLS[Element.MARS]
